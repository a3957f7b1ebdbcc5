"""Checklist failure checks: latest-inspection failures and recurring defects."""

from collections import Counter
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from .calculations import days_between, format_short_date
from .config import EngineConfig
from .inspection import InspectionRecord
from .issue import Issue, IssueKind
from .status import Severity


def _severity_for(keys: Sequence[str], config: EngineConfig) -> Severity:
    """Critical if any key is safety-critical, otherwise warning."""
    if any(key in config.safety_critical_keys for key in keys):
        return Severity.CRITICAL
    return Severity.WARNING


def recurring_failure_keys(
    inspections: Sequence[InspectionRecord], window: int, min_count: int
) -> List[str]:
    """
    Keys that failed at least min_count times in the newest window inspections.

    inspections must be sorted newest first. Keys are returned in the order
    they were first seen, walking from the newest inspection backwards.
    Returns an empty list when there are fewer than window inspections.
    """
    if len(inspections) < window:
        return []
    counts: Counter = Counter()
    for inspection in inspections[:window]:
        counts.update(inspection.failed_keys)
    return [key for key, n in counts.items() if n >= min_count]


def recent_failure_issue(
    latest: InspectionRecord,
    as_of: datetime,
    config: EngineConfig,
    resolve_label: Callable[[str], str],
) -> Optional[Issue]:
    """Issue for failed items in the latest inspection, if it is recent enough."""
    if days_between(latest.occurred_at, as_of) > config.recent_failure_window_days:
        return None
    failed = latest.failed_keys
    if not failed:
        return None

    labels = tuple(resolve_label(key) for key in failed)
    plural = "s" if len(failed) > 1 else ""
    return Issue(
        severity=_severity_for(failed, config),
        message=(
            f"Last inspection ({format_short_date(latest.occurred_at)}): "
            f"{len(failed)} issue{plural}: {', '.join(labels)}"
        ),
        kind=IssueKind.RECENT_FAILURE,
        failed_items=labels,
    )


def recurring_failure_issue(
    inspections: Sequence[InspectionRecord],
    config: EngineConfig,
    resolve_label: Callable[[str], str],
) -> Optional[Issue]:
    """Issue for checklist items failing repeatedly across recent inspections."""
    window = config.recurring_window_size
    recurring = recurring_failure_keys(inspections, window, config.recurring_min_count)
    if not recurring:
        return None

    labels = tuple(resolve_label(key) for key in recurring)
    return Issue(
        severity=_severity_for(recurring, config),
        message=f"Recurring in last {window} inspections: {', '.join(labels)}",
        kind=IssueKind.RECURRING_FAILURE,
        failed_items=labels,
    )
