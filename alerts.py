#!/usr/bin/env python3
"""
Unified CLI for fleet health alerts.

Commands:
  report      - Fleet summary and the vehicles that need attention
  vehicle     - Health detail for a single vehicle
  checklist   - List the checklist items and their labels
  thresholds  - Show the effective alert thresholds
"""

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from fleet import (
    Flagged,
    Status,
    analyse_vehicle,
    build_fleet_report,
    health_to_dict,
    load_config,
    load_fleet,
    parse_timestamp,
    report_to_dict,
)
from fleet.loader import DEFAULT_HISTORY_LIMIT

# =============================================================================
# Formatting helpers
# =============================================================================


def format_days(days: Optional[int]) -> str:
    """Format an elapsed day count for display."""
    return f"{days}d" if days is not None else "-"


def format_timestamp(moment: Optional[datetime]) -> str:
    """Format a timestamp as its date."""
    return moment.date().isoformat() if moment is not None else "-"


def truncate(text: Optional[str], max_len: int = 60) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def format_vehicle(result: Flagged) -> str:
    """Code plus brand/model, e.g. 'HR38Z-7624 JAGUAR XF'."""
    return " ".join(p for p in (result.vehicle_code, result.brand, result.model) if p)


def make_report_table(results: List[Flagged]) -> List[List[str]]:
    """Convert flagged vehicles to table rows (one row per issue)."""
    rows = []
    for result in results:
        for n, issue in enumerate(result.issues):
            first = n == 0
            rows.append(
                [
                    format_vehicle(result) if first else "",
                    result.status.label.upper() if first else "",
                    issue.severity.label,
                    truncate(issue.message),
                    format_days(result.days_since_inspection) if first else "",
                    format_days(result.days_since_maintenance) if first else "",
                ]
            )
    return rows


def parse_as_of(value: Optional[str]) -> Optional[datetime]:
    """Parse the --as-of option; None means now."""
    if value is None:
        return None
    return parse_timestamp(value)


def history_limit(value: str) -> int:
    """argparse type for --limit: a non-negative row count."""
    limit = int(value)
    if limit < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {limit}")
    return limit


def load_engine_inputs(args):
    """Load fleet data and apply a --config override if given."""
    data = load_fleet(args.fleet_file, limit=args.limit)
    if args.config:
        data.config = load_config(args.config)
    return data


# =============================================================================
# Report command
# =============================================================================


def cmd_report(args):
    """Fleet summary and the vehicles that need attention."""
    data = load_engine_inputs(args)
    report = build_fleet_report(
        data.vehicles,
        data.inspections_by_vehicle,
        data.maintenance_by_vehicle,
        config=data.config,
        resolve_label=data.catalog.resolve_label,
        as_of=parse_as_of(args.as_of),
    )
    status_filter = Status[args.severity.upper()] if args.severity else None

    if args.json:
        print(json.dumps(report_to_dict(report, status_filter), indent=2))
        return 0

    summary = report.summary
    print(f"Fleet health as of {format_timestamp(report.as_of)}")
    print(f"Active vehicles: {summary.total_active}")
    print(
        f"Critical: {summary.critical}  Warning: {summary.warning}  "
        f"OK: {summary.ok}  No data: {summary.no_data}"
    )
    if status_filter:
        print(f"Filter: {status_filter.label.upper()} ONLY")
    print()

    flagged = report.filter(status_filter)
    if not flagged:
        print("No vehicles need attention.")
        return 0

    headers = ["Vehicle", "Status", "Severity", "Issue", "Insp.", "Svc."]
    print(tabulate(make_report_table(flagged), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Vehicle command
# =============================================================================


def cmd_vehicle(args):
    """Health detail for a single vehicle."""
    data = load_engine_inputs(args)
    vehicle = data.get_vehicle(args.code)
    if vehicle is None:
        print(f"Error: Unknown vehicle code '{args.code}'")
        return 1

    inspections = data.inspections_for(vehicle.id)
    maintenance = data.maintenance_for(vehicle.id)
    result = analyse_vehicle(
        vehicle,
        inspections,
        maintenance,
        config=data.config,
        resolve_label=data.catalog.resolve_label,
        as_of=parse_as_of(args.as_of),
    )

    if args.json:
        print(json.dumps(health_to_dict(result), indent=2))
        return 0

    print(f"Vehicle: {vehicle.name}")
    print(f"Inspections: {len(inspections)}")
    print(f"Services: {len(maintenance)}")
    print(f"Status: {result.status.label.upper()}")
    print()

    if not isinstance(result, Flagged):
        if result.status == Status.NO_DATA:
            print("No inspections or services on record.")
        else:
            print("All clear.")
        return 0

    print(
        f"Last inspection: {format_timestamp(result.last_inspection_at)} "
        f"({format_days(result.days_since_inspection)} ago)"
    )
    print(
        f"Last service: {format_timestamp(result.last_maintenance_at)} "
        f"({format_days(result.days_since_maintenance)} ago)"
    )
    print()

    rows = [
        [issue.severity.label, issue.kind.value, issue.message, issue.kind.action]
        for issue in result.issues
    ]
    print(
        tabulate(rows, headers=["Severity", "Kind", "Issue", "Action"], tablefmt="simple")
    )
    return 0


# =============================================================================
# Checklist command
# =============================================================================


def cmd_checklist(args):
    """List the checklist items and their labels."""
    data = load_engine_inputs(args)
    safety_keys = data.config.safety_critical_keys

    rows = []
    for category in data.catalog.categories:
        for f in category.fields:
            rows.append(
                [
                    category.label,
                    f.key,
                    data.catalog.resolve_label(f.key),
                    "yes" if f.key in safety_keys else "",
                ]
            )

    print(f"Checklist items: {len(data.catalog)}")
    print()
    headers = ["Category", "Key", "Label", "Safety-critical"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Thresholds command
# =============================================================================


def cmd_thresholds(args):
    """Show the effective alert thresholds."""
    data = load_engine_inputs(args)
    rows = []
    for key, value in data.config.to_dict().items():
        if isinstance(value, list):
            value = ", ".join(value)
        rows.append([key, value])
    print(tabulate(rows, headers=["Setting", "Value"], tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


def main():
    parser = argparse.ArgumentParser(
        description="Fleet health alerts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/fleet.yaml report
  %(prog)s data/fleet.yaml report --severity critical
  %(prog)s data/fleet.yaml report --as-of 2026-10-01 --json
  %(prog)s data/fleet.yaml vehicle HR38Z-7624
  %(prog)s data/fleet.yaml --config strict.yaml thresholds
  %(prog)s data/fleet.yaml checklist
""",
    )
    parser.add_argument(
        "fleet_file",
        type=Path,
        help="Path to fleet data YAML file",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with threshold overrides",
    )
    parser.add_argument(
        "--limit",
        type=history_limit,
        default=DEFAULT_HISTORY_LIMIT,
        help=(
            "Most recent inspection and maintenance rows to consider "
            f"(default: {DEFAULT_HISTORY_LIMIT})"
        ),
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Report subcommand
    report_parser = subparsers.add_parser(
        "report", help="Fleet summary and the vehicles that need attention"
    )
    report_parser.add_argument(
        "--severity",
        choices=["critical", "warning"],
        help="Only list vehicles with this status",
    )
    report_parser.add_argument(
        "--as-of",
        type=str,
        help="Evaluate as of this date/time (ISO 8601, default: now)",
    )
    report_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )

    # Vehicle subcommand
    vehicle_parser = subparsers.add_parser(
        "vehicle", help="Health detail for a single vehicle"
    )
    vehicle_parser.add_argument(
        "code",
        type=str,
        help="Vehicle code (e.g., 'HR38Z-7624')",
    )
    vehicle_parser.add_argument(
        "--as-of",
        type=str,
        help="Evaluate as of this date/time (ISO 8601, default: now)",
    )
    vehicle_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )

    # Checklist subcommand
    subparsers.add_parser("checklist", help="List checklist items and labels")

    # Thresholds subcommand
    subparsers.add_parser("thresholds", help="Show effective alert thresholds")

    args = parser.parse_args()

    # Validate fleet file exists
    if not args.fleet_file.exists():
        print(f"Error: File not found: {args.fleet_file}")
        return 1

    handlers = {
        "report": cmd_report,
        "vehicle": cmd_vehicle,
        "checklist": cmd_checklist,
        "thresholds": cmd_thresholds,
    }
    try:
        return handlers[args.command](args)
    except ValueError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
