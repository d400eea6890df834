"""Tests for the recommendation service."""

import logging

import pytest

from habitus.models import CapitalType, InvalidTimeBudget, PriorityLevel
from habitus.repository import InMemoryActivityRepository
from habitus.service import recommend_weekly_activities


@pytest.fixture
def repository(sample_activities):
    return InMemoryActivityRepository(sample_activities)


def test_recommend_with_default_priorities(repository):
    recommendation = recommend_weekly_activities(repository, 200)

    assert recommendation.result.total_value == 25
    assert recommendation.result.activity_count == 4
    assert all(recommendation.priority.level(t) is PriorityLevel.LOW for t in CapitalType)


def test_recommend_applies_priorities(repository):
    recommendation = recommend_weekly_activities(repository, 100, {"PHYSICAL": 3})

    assert recommendation.priority.level(CapitalType.PHYSICAL) is PriorityLevel.HIGH
    assert recommendation.result.total_value == 20


def test_bad_priorities_do_not_fail_request(repository, caplog):
    with caplog.at_level(logging.WARNING):
        recommendation = recommend_weekly_activities(repository, 200, {"BOGUS": 3, "MENTAL": 9})

    assert recommendation.result.total_value == 25
    assert len(caplog.records) == 2


@pytest.mark.parametrize("minutes", [0, -30, 10081])
def test_invalid_budget_rejected(repository, minutes):
    with pytest.raises(InvalidTimeBudget):
        recommend_weekly_activities(repository, minutes)


def test_empty_repository():
    recommendation = recommend_weekly_activities(InMemoryActivityRepository(), 120)

    assert recommendation.result.activity_count == 0
    assert recommendation.result.remaining_minutes == 120


def test_milp_solver(repository):
    recommendation = recommend_weekly_activities(repository, 200, solver="milp")
    assert recommendation.result.total_value == 25


def test_unknown_solver(repository):
    with pytest.raises(ValueError, match="Unknown solver"):
        recommend_weekly_activities(repository, 200, solver="greedy")
