"""Weekly activity recommendation for habitus."""

import logging
from dataclasses import dataclass
from typing import Mapping

from habitus.models import Priority, RecommendationResult, TimeBudget
from habitus.optimizer import find_optimal_selection, find_optimal_selection_milp
from habitus.priority import build_priority_weighting
from habitus.repository import ActivityRepository

logger = logging.getLogger(__name__)

SOLVERS = {
    "dp": find_optimal_selection,
    "milp": find_optimal_selection_milp,
}


@dataclass(frozen=True)
class Recommendation:
    """An optimization result together with the priority it was computed for."""

    result: RecommendationResult
    priority: Priority


def recommend_weekly_activities(
    repository: ActivityRepository,
    available_minutes: int,
    priorities: Mapping[str, int] | None = None,
    solver: str = "dp",
) -> Recommendation:
    """
    Recommend the best set of activities from the repository for a weekly budget.

    Bad priority entries fall back to LOW; an invalid budget raises
    InvalidTimeBudget.
    """
    if solver not in SOLVERS:
        raise ValueError(f"Unknown solver {solver!r}, expected one of: {', '.join(SOLVERS)}")

    logger.info("Recommendation requested - available minutes: %s", available_minutes)

    priority = build_priority_weighting(priorities)
    budget = TimeBudget(available_minutes)
    activities = repository.find_all()

    result = SOLVERS[solver](activities, priority, budget)

    logger.info(
        "Recommendation complete - total value: %d, activities: %d of %d",
        result.total_value,
        result.activity_count,
        len(activities),
    )
    return Recommendation(result=result, priority=priority)
