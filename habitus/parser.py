"""YAML and CSV parsing for habitus."""

import csv
import logging
from pathlib import Path

import yaml

from habitus.models import Activity, ActivityEffects, CapitalType

logger = logging.getLogger(__name__)

# Non-effect columns of an activities CSV
ACTIVITY_COLUMNS = ("id", "name", "duration", "cost", "description")


def _parse_effects(raw_effects: dict | None, activity_name: str) -> ActivityEffects:
    effects: dict[CapitalType, int] = {}
    for name, magnitude in (raw_effects or {}).items():
        try:
            capital_type = CapitalType.resolve(name)
        except ValueError as e:
            raise ValueError(f"Activity {activity_name!r}: {e}") from None
        effects[capital_type] = magnitude
    return ActivityEffects.of(effects)


def _assign_ids(raw_ids: list, locations: list[str]) -> list:
    """
    Check that explicit ids are unique and give missing ones (None) the
    smallest positive integers not already taken.
    """
    taken: dict = {}
    for raw_id, location in zip(raw_ids, locations):
        if raw_id is None:
            continue
        if raw_id in taken:
            raise ValueError(f"{location}: duplicate activity id {raw_id!r} (already used by {taken[raw_id]})")
        taken[raw_id] = location

    ids = []
    next_id = 1
    for raw_id in raw_ids:
        if raw_id is None:
            while next_id in taken:
                next_id += 1
            raw_id = next_id
            taken[raw_id] = "generated"
        ids.append(raw_id)
    return ids


def parse_activities_yaml(yaml_path: Path) -> list[Activity]:
    """
    Parse an activities YAML file.

    Entries without an id get the smallest unused integer id; duplicate ids
    raise ValueError.
    """
    with yaml_path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data or "activities" not in data:
        return []

    entries = data["activities"] or []
    ids = _assign_ids(
        [entry.get("id") for entry in entries],
        [f"Entry {index}" for index in range(1, len(entries) + 1)],
    )

    activities: list[Activity] = []
    for activity_id, entry in zip(ids, entries):
        name = entry.get("name", "")
        activities.append(
            Activity(
                id=activity_id,
                name=name,
                duration_minutes=entry.get("duration", 0),
                effects=_parse_effects(entry.get("effects"), name),
                cost=entry.get("cost") or 0,
                description=entry.get("description") or "",
            )
        )

    return activities


def _int_cell(row: dict[str, str], column: str, line_no: int) -> int:
    raw = (row.get(column) or "").strip()
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Line {line_no}: column {column!r} must be an integer, got {raw!r}") from None


def parse_activities_csv(csv_path: Path) -> list[Activity]:
    """
    Parse an activities CSV file.

    Expects id, name and duration columns, optionally cost and description,
    and one column per capital dimension (e.g. PHYSICAL). Blank effect cells
    count as 0. Rows without an id get the smallest unused integer id;
    duplicate ids raise ValueError.
    """
    rows: list[tuple[int, dict[str, str]]] = []

    with csv_path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        fieldnames = reader.fieldnames or []

        effect_columns: dict[str, CapitalType] = {}
        for col in fieldnames:
            if col.strip().lower() in ACTIVITY_COLUMNS or not col.strip():
                continue
            # Raises for columns that are neither metadata nor a dimension
            effect_columns[col] = CapitalType.resolve(col)

        for line_no, row in enumerate(reader, start=2):
            name = (row.get("name") or "").strip()
            if not name and not any((v or "").strip() for v in row.values()):
                continue  # Skip blank lines
            rows.append((line_no, row))

    raw_ids = []
    for _, row in rows:
        raw_id = (row.get("id") or "").strip()
        raw_ids.append(int(raw_id) if raw_id.isdigit() else (raw_id or None))
    ids = _assign_ids(raw_ids, [f"Line {line_no}" for line_no, _ in rows])

    activities: list[Activity] = []
    for activity_id, (line_no, row) in zip(ids, rows):
        effects = {t: _int_cell(row, col, line_no) for col, t in effect_columns.items()}
        activities.append(
            Activity(
                id=activity_id,
                name=(row.get("name") or "").strip(),
                duration_minutes=_int_cell(row, "duration", line_no),
                effects=ActivityEffects.of(effects),
                cost=_int_cell(row, "cost", line_no),
                description=(row.get("description") or "").strip(),
            )
        )

    return activities


def parse_activities(path: Path) -> list[Activity]:
    """Parse an activities file, choosing the format from its suffix."""
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return parse_activities_yaml(path)
    if suffix == ".csv":
        return parse_activities_csv(path)
    raise ValueError(f"Unsupported activities file type: {path.suffix or path.name}")


def parse_priorities_yaml(yaml_path: Path) -> dict[str, int]:
    """
    Parse a priorities YAML file.

    Returns the raw name -> weight mapping; validation happens when the
    weighting is built.
    """
    with yaml_path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Priorities file must be a mapping with a 'priorities' key")

    priorities = data.get("priorities")
    if not priorities:
        return {}
    if not isinstance(priorities, dict):
        raise ValueError("'priorities' must map capital dimension names to weights")

    return dict(priorities)


def parse_priority_args(values: list[str] | None) -> dict[str, int]:
    """Parse NAME=WEIGHT command-line arguments; malformed entries are skipped."""
    priorities: dict[str, int] = {}
    for value in values or []:
        name, sep, raw_weight = value.partition("=")
        try:
            if not sep or not name.strip():
                raise ValueError("expected NAME=WEIGHT")
            priorities[name.strip()] = int(raw_weight)
        except ValueError as e:
            logger.warning("Ignoring priority argument %r: %s", value, e)
    return priorities


def create_activities_template(output_path: Path):
    """Create a sample activities YAML file."""
    template = {
        "activities": [
            {
                "id": 1,
                "name": "Morning run",
                "duration": 30,
                "cost": 0,
                "effects": {"PHYSICAL": 4, "MENTAL": 1},
            },
            {
                "id": 2,
                "name": "Reading",
                "duration": 60,
                "cost": 0,
                "effects": {"KNOWLEDGE": 5, "CULTURAL": 2},
            },
        ]
    }

    # Add a comment header
    header = f"""\
# Activities file for habitus
# One entry per candidate activity.
#
# Fields:
#   id:          unique identifier
#   name:        display name (required)
#   duration:    minutes, must be positive
#   cost:        optional, not used for selection yet
#   description: optional
#   effects:     gain per capital dimension, non-negative integers
#
# Capital dimensions: {", ".join(t.name for t in CapitalType)}

"""

    with output_path.open("w", encoding="utf-8") as f:
        f.write(header)
        yaml.dump(template, f, default_flow_style=False, sort_keys=False)
