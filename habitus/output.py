"""Output formatting for habitus."""

import csv
import io

from habitus.models import CapitalType
from habitus.service import Recommendation


def _by_name(effects: dict[CapitalType, int]) -> dict[str, int]:
    return {capital_type.name: amount for capital_type, amount in effects.items()}


def to_response(recommendation: Recommendation) -> dict:
    """Convert a recommendation into plain data for JSON output."""
    result = recommendation.result
    priority = recommendation.priority

    selected_activities = []
    for selected in result.selected_activities:
        activity = selected.activity
        selected_activities.append(
            {
                "id": activity.id,
                "name": activity.name,
                "duration": activity.duration_minutes,
                "calculated_value": selected.value,
                "original_effects": _by_name(activity.active_effects()),
                "weighted_effects": _by_name(activity.weighted_effects(priority)),
            }
        )

    return {
        "total_value": result.total_value,
        "total_minutes": result.total_minutes,
        "remaining_minutes": result.remaining_minutes,
        "activity_count": result.activity_count,
        "time_utilization_rate": result.time_utilization_rate,
        "total_capital_gain": _by_name(result.total_capital_gains),
        "selected_activities": selected_activities,
    }


def format_results(recommendation: Recommendation) -> str:
    """Format recommendation results for display."""
    result = recommendation.result
    priority = recommendation.priority
    lines: list[str] = []

    if not result.selected_activities:
        lines.append("No activities could be recommended.")
        lines.append("No activity fits in the available time, or the catalog is empty.")
        lines.append(f"Available minutes: {result.remaining_minutes}")
        return "\n".join(lines)

    lines.append("=== Recommended Activities ===")
    lines.append(f"Total value: {result.total_value}")
    lines.append(
        f"Time used: {result.total_minutes} min, {result.remaining_minutes} min remaining "
        f"({result.time_utilization_rate:.1f}%)"
    )
    lines.append("")

    for selected in result.selected_activities:
        activity = selected.activity
        lines.append(f"  {activity.name} ({activity.duration_minutes} min, value {selected.value})")
        weighted = activity.weighted_effects(priority)
        for capital_type, effect in activity.active_effects().items():
            suffix = ""
            if weighted[capital_type] != effect:
                suffix = f" -> {weighted[capital_type]} weighted"
            lines.append(f"    - {capital_type.label}: +{effect}{suffix}")
    lines.append("")

    # Per-dimension totals
    gains = result.total_capital_gains
    name_width = max((len(t.label) for t in gains), default=0)
    lines.append("=== Capital Gains ===")
    for capital_type, gain in gains.items():
        level = priority.level(capital_type)
        lines.append(f"  {capital_type.label.ljust(name_width)}  +{gain}  (priority {level.name.lower()})")

    return "\n".join(lines)


def format_selection_csv(recommendation: Recommendation) -> str:
    """Format selected activities as CSV for export."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["id", "name", "duration", "value"] + [t.name for t in CapitalType])

    for selected in recommendation.result.selected_activities:
        activity = selected.activity
        writer.writerow(
            [activity.id, activity.name, activity.duration_minutes, selected.value]
            + [activity.effect_on(t) for t in CapitalType]
        )

    return buffer.getvalue().rstrip("\n")
