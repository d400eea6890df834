"""
Pytest configuration and shared fixtures for habitus tests.
"""

import pytest

from habitus.models import Activity, ActivityEffects, CapitalType, Priority, PriorityLevel


def make_activity(activity_id, name, duration, effects=None, cost=0):
    """Build an activity from a partial {CapitalType: effect} mapping."""
    return Activity(
        id=activity_id,
        name=name,
        duration_minutes=duration,
        effects=ActivityEffects.of(effects or {}),
        cost=cost,
        description="test activity",
    )


def priority_with(**levels):
    """Priority with the given dimensions (by name) set, everything else LOW."""
    return Priority.of({CapitalType[name]: level for name, level in levels.items()})


@pytest.fixture
def sample_activities():
    """The five-activity sample catalog."""
    return [
        make_activity(1, "Workout 30m", 30, {CapitalType.PHYSICAL: 4, CapitalType.MENTAL: 1}),
        make_activity(2, "Reading 60m", 60, {CapitalType.KNOWLEDGE: 5, CapitalType.CULTURAL: 2}),
        make_activity(3, "Meditation 20m", 20, {CapitalType.MENTAL: 4, CapitalType.PHYSICAL: 1}),
        make_activity(4, "Community 120m", 120, {CapitalType.SOCIAL: 5, CapitalType.LINGUISTIC: 2}),
        make_activity(5, "English study 90m", 90, {CapitalType.LINGUISTIC: 5, CapitalType.KNOWLEDGE: 3}),
    ]


@pytest.fixture
def default_priority():
    return Priority.default()


@pytest.fixture
def high_physical_priority():
    return priority_with(PHYSICAL=PriorityLevel.HIGH)


@pytest.fixture
def high_knowledge_priority():
    return priority_with(KNOWLEDGE=PriorityLevel.HIGH)


@pytest.fixture
def sample_yaml(tmp_path):
    """Write the sample catalog as YAML and return its path."""
    path = tmp_path / "activities.yaml"
    path.write_text(
        """\
activities:
  - id: 1
    name: Workout 30m
    duration: 30
    effects: {PHYSICAL: 4, MENTAL: 1}
  - id: 2
    name: Reading 60m
    duration: 60
    effects: {KNOWLEDGE: 5, CULTURAL: 2}
  - id: 3
    name: Meditation 20m
    duration: 20
    effects: {MENTAL: 4, PHYSICAL: 1}
  - id: 4
    name: Community 120m
    duration: 120
    effects: {SOCIAL: 5, LINGUISTIC: 2}
  - id: 5
    name: English study 90m
    duration: 90
    description: Conversation practice
    effects: {LINGUISTIC: 5, KNOWLEDGE: 3}
""",
        encoding="utf-8",
    )
    return path
