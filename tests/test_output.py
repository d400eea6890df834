"""Tests for output formatting."""

import json

from habitus.models import Priority, RecommendationResult
from habitus.output import format_results, format_selection_csv, to_response
from habitus.repository import InMemoryActivityRepository
from habitus.service import Recommendation, recommend_weekly_activities


def _recommend(activities, minutes, priorities=None):
    return recommend_weekly_activities(InMemoryActivityRepository(activities), minutes, priorities)


def test_to_response(sample_activities):
    response = to_response(_recommend(sample_activities, 100, {"PHYSICAL": 3}))

    assert response["total_value"] == 20
    assert response["total_minutes"] == 90
    assert response["remaining_minutes"] == 10
    assert response["activity_count"] == 2
    assert response["time_utilization_rate"] == 90.0
    assert response["total_capital_gain"] == {"PHYSICAL": 4, "MENTAL": 1, "KNOWLEDGE": 5, "CULTURAL": 2}

    workout = response["selected_activities"][0]
    assert workout == {
        "id": 1,
        "name": "Workout 30m",
        "duration": 30,
        "calculated_value": 13,
        "original_effects": {"PHYSICAL": 4, "MENTAL": 1},
        "weighted_effects": {"PHYSICAL": 12, "MENTAL": 1},
    }

    # Plain data only
    json.dumps(response)


def test_format_results(sample_activities):
    text = format_results(_recommend(sample_activities, 100, {"PHYSICAL": 3}))

    assert "=== Recommended Activities ===" in text
    assert "Total value: 20" in text
    assert "Workout 30m (30 min, value 13)" in text
    assert "Physical: +4 -> 12 weighted" in text
    assert "Mental: +1" in text
    assert "(priority high)" in text


def test_format_results_empty():
    recommendation = Recommendation(result=RecommendationResult.empty(45), priority=Priority.default())
    text = format_results(recommendation)

    assert "No activities could be recommended." in text
    assert "Available minutes: 45" in text


def test_format_selection_csv(sample_activities):
    lines = format_selection_csv(_recommend(sample_activities, 50)).splitlines()

    assert lines[0] == "id,name,duration,value,PHYSICAL,MENTAL,KNOWLEDGE,CULTURAL,LINGUISTIC,SOCIAL,ECONOMIC"
    assert lines[1:] == [
        "1,Workout 30m,30,5,4,1,0,0,0,0,0",
        "3,Meditation 20m,20,5,1,4,0,0,0,0,0",
    ]
