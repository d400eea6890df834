"""Priority weighting construction for habitus."""

import logging
from typing import Mapping

from habitus.models import CapitalType, Priority, PriorityLevel

logger = logging.getLogger(__name__)


def build_priority_weighting(raw_weights: Mapping[str, int] | None) -> Priority:
    """
    Build a total Priority from a raw request mapping of dimension name -> weight.

    Entries with an unknown dimension or a weight outside 1-3 are skipped with a
    warning instead of rejecting the whole request. Every dimension that ends up
    without a level is set to LOW.
    """
    if not raw_weights:
        return Priority.default()

    levels: dict[CapitalType, PriorityLevel] = {}
    for name, weight in raw_weights.items():
        try:
            capital_type = CapitalType.resolve(name)
            level = PriorityLevel.from_weight(weight)
        except ValueError as e:
            logger.warning("Ignoring priority %s=%r: %s", name, weight, e)
            continue
        levels[capital_type] = level

    return Priority.of(levels)
