"""Command-line interface for habitus."""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from habitus.output import format_results, format_selection_csv, to_response
from habitus.parser import (
    create_activities_template,
    parse_activities,
    parse_priorities_yaml,
    parse_priority_args,
)
from habitus.repository import InMemoryActivityRepository
from habitus.service import SOLVERS, recommend_weekly_activities

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(verbosity: int):
    """Send log records to stderr; -v shows INFO, -vv shows DEBUG."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", stream=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for habitus CLI."""
    parser = argparse.ArgumentParser(
        description="Recommend the most valuable set of activities for your weekly free time.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  habitus activities.yaml --minutes 600
  habitus activities.yaml --minutes 300 --priority PHYSICAL=3 --priority KNOWLEDGE=2
  habitus activities.csv --priorities priorities.yaml --format json
""",
    )
    parser.add_argument(
        "activities",
        type=Path,
        help="Path to the activities file (.yaml or .csv)",
    )
    parser.add_argument(
        "--minutes",
        type=int,
        default=600,
        help="Available minutes this week, at most 10080 (default: 600)",
    )
    parser.add_argument(
        "--priority",
        action="append",
        metavar="NAME=WEIGHT",
        help="Priority weight 1-3 for a capital dimension; may be repeated",
    )
    parser.add_argument(
        "--priorities",
        type=Path,
        help="Path to a priorities YAML file",
    )
    parser.add_argument(
        "--solver",
        choices=sorted(SOLVERS),
        default="dp",
        help="Optimization method (default: dp)",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json", "csv"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--output-template",
        type=Path,
        help="Path for activities template (default: activities_template.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Show progress logging (-vv for debug output)",
    )

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    # Validate activities file exists
    if not args.activities.exists():
        template_path = args.output_template or Path("activities_template.yaml")
        create_activities_template(template_path)
        print(f"Error: Activities file not found: {args.activities}", file=sys.stderr)
        print(f"Created a sample activities file at: {template_path}", file=sys.stderr)
        return 1

    # Parse activities
    try:
        activities = parse_activities(args.activities)
    except (ValueError, KeyError, TypeError, AttributeError, yaml.YAMLError) as e:
        print(f"Error parsing activities file: {e}", file=sys.stderr)
        return 1

    # Priorities from file, overridden by command-line entries
    priorities: dict[str, int] = {}
    if args.priorities:
        if not args.priorities.exists():
            print(f"Error: Priorities file not found: {args.priorities}", file=sys.stderr)
            return 1
        try:
            priorities.update(parse_priorities_yaml(args.priorities))
        except (ValueError, TypeError, yaml.YAMLError) as e:
            print(f"Error parsing priorities YAML: {e}", file=sys.stderr)
            return 1
    priorities.update(parse_priority_args(args.priority))

    try:
        repository = InMemoryActivityRepository(activities)
        recommendation = recommend_weekly_activities(
            repository,
            available_minutes=args.minutes,
            priorities=priorities,
            solver=args.solver,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Loaded {len(activities)} activities", file=sys.stderr)

    # Output results
    if args.format == "json":
        print(json.dumps(to_response(recommendation), indent=2, ensure_ascii=False))
    elif args.format == "csv":
        print(format_selection_csv(recommendation))
    else:
        print(format_results(recommendation))

    return 0


if __name__ == "__main__":
    sys.exit(main())
