"""Knapsack-based optimization for weekly activity selection."""

import logging
from typing import Sequence

import numpy as np
from scipy.optimize import Bounds, LinearConstraint, milp

from habitus.models import (
    Activity,
    Priority,
    RecommendationResult,
    SelectedActivity,
    TimeBudget,
)

logger = logging.getLogger(__name__)


def _with_values(activities: Sequence[Activity], priority: Priority) -> list[SelectedActivity]:
    """Pair each activity with its weighted value, in input order."""
    return [SelectedActivity(activity=a, value=a.value(priority)) for a in activities]


def _build_table(candidates: list[SelectedActivity], max_minutes: int) -> np.ndarray:
    """
    Build the value table T of shape (n + 1, max_minutes + 1).

    T[i][w] is the best total value using the first i candidates within w minutes.
    """
    n = len(candidates)
    table = np.zeros((n + 1, max_minutes + 1), dtype=np.int64)

    for i, cur in enumerate(candidates, start=1):
        duration = cur.activity.duration_minutes
        value = cur.value

        # Not selecting the activity
        table[i] = table[i - 1]

        # Selecting it, for every w >= duration; ties keep the carried-forward value
        if duration <= max_minutes:
            with_item = table[i - 1, : max_minutes + 1 - duration] + value
            table[i, duration:] = np.maximum(table[i - 1, duration:], with_item)

    return table


def _backtrack(
    candidates: list[SelectedActivity],
    table: np.ndarray,
    max_minutes: int,
) -> list[SelectedActivity]:
    """Recover the chosen candidates from the value table, in input order."""
    selected: list[SelectedActivity] = []
    w = max_minutes
    i = len(candidates)

    while i > 0 and w > 0:
        if table[i, w] != table[i - 1, w]:
            cur = candidates[i - 1]
            selected.append(cur)
            w -= cur.activity.duration_minutes
        i -= 1

    selected.reverse()
    return selected


def _build_result(selected: list[SelectedActivity], available_minutes: int) -> RecommendationResult:
    total_value = 0
    total_minutes = 0
    for cur in selected:
        total_value += cur.value
        total_minutes += cur.activity.duration_minutes

    return RecommendationResult(
        selected_activities=tuple(selected),
        total_value=total_value,
        total_minutes=total_minutes,
        remaining_minutes=available_minutes - total_minutes,
    )


def find_optimal_selection(
    activities: Sequence[Activity],
    priority: Priority,
    budget: TimeBudget,
) -> RecommendationResult:
    """
    Choose the subset of activities with the highest total weighted value
    whose durations fit in the budget, each activity at most once.

    Solved exactly with a 0/1 knapsack table over whole minutes, O(n * W)
    time and memory. Candidates are processed in input order, which fixes
    which subset is returned when several reach the same optimum.
    """
    if not activities:
        return RecommendationResult.empty(budget.minutes)

    max_minutes = budget.minutes
    logger.debug("Optimizing %d activities within %d minutes", len(activities), max_minutes)

    candidates = _with_values(activities, priority)
    table = _build_table(candidates, max_minutes)
    selected = _backtrack(candidates, table, max_minutes)
    result = _build_result(selected, max_minutes)

    logger.debug(
        "Optimum value %d with %d activities (%d minutes)",
        result.total_value,
        result.activity_count,
        result.total_minutes,
    )
    return result


def find_optimal_selection_milp(
    activities: Sequence[Activity],
    priority: Priority,
    budget: TimeBudget,
) -> RecommendationResult:
    """
    Solve the same selection problem with Integer Linear Programming.

    Reaches the same optimal total value as find_optimal_selection, but may
    return a different subset when several subsets tie.
    """
    if not activities:
        return RecommendationResult.empty(budget.minutes)

    candidates = _with_values(activities, priority)
    num_vars = len(candidates)

    # Maximize total value (negate for minimization)
    c = -np.array([cur.value for cur in candidates], dtype=float)

    # Total duration must fit in the budget
    durations = np.array([[cur.activity.duration_minutes for cur in candidates]], dtype=float)
    constraints = [LinearConstraint(durations, -np.inf, float(budget.minutes))]

    bounds = Bounds(np.zeros(num_vars), np.ones(num_vars))
    integrality = np.ones(num_vars, dtype=np.intp)  # All binary

    result = milp(c, constraints=constraints, bounds=bounds, integrality=integrality)

    if not result.success:
        logger.warning("MILP solver failed: %s", result.message)
        return RecommendationResult.empty(budget.minutes)

    assert result.x is not None  # Guaranteed by result.success check above
    selected = [cur for cur, x in zip(candidates, result.x) if x > 0.5]
    return _build_result(selected, budget.minutes)
