"""Helper functions for interval analysis and threshold evaluation."""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable, List, Optional, Sequence, TypeVar

from dateutil.parser import isoparse

from .status import Severity

T = TypeVar("T")


@dataclass(frozen=True)
class Thresholds:
    """Day counts at which an elapsed interval becomes a warning / critical."""

    warning: int
    critical: int


def parse_timestamp(value: Any) -> datetime:
    """
    Coerce a timestamp to a timezone-aware datetime.

    Accepts datetimes (naive ones are taken as UTC), dates (midnight UTC)
    and ISO 8601 strings. Anything else raises ValueError.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = isoparse(value.strip())
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Invalid timestamp {value!r}: {e}") from e
    else:
        raise ValueError(
            f"Invalid timestamp {value!r}: expected ISO 8601 string or datetime"
        )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def days_between(start: datetime, end: datetime) -> int:
    """Whole days from start to end, floored (negative if end is earlier)."""
    return (end - start) // timedelta(days=1)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


def format_short_date(moment: datetime) -> str:
    """Format as '16 Oct' for issue messages."""
    return f"{moment.day} {moment:%b}"


def newest_first(records: Iterable[T]) -> List[T]:
    """Sort records by occurred_at, most recent first."""
    return sorted(records, key=lambda r: r.occurred_at, reverse=True)


def average_interval_days(records: Sequence[Any]) -> Optional[int]:
    """
    Average whole-day gap between consecutive records.

    Returns None with fewer than two records, since there is no interval
    to measure.
    """
    if len(records) < 2:
        return None
    ordered = sorted(records, key=lambda r: r.occurred_at)
    total = sum(
        days_between(earlier.occurred_at, later.occurred_at)
        for earlier, later in zip(ordered, ordered[1:])
    )
    return round_half_up(total / (len(ordered) - 1))


def adaptive_thresholds(
    avg_interval: int, factor: float, critical_factor: float
) -> Thresholds:
    """Thresholds scaled from a vehicle's own inspection cadence."""
    return Thresholds(
        warning=round_half_up(avg_interval * factor),
        critical=round_half_up(avg_interval * factor * critical_factor),
    )


def check_severity(days_since: int, thresholds: Thresholds) -> Optional[Severity]:
    """Determine severity by comparing elapsed days to the thresholds."""
    if days_since <= 0:
        return None
    if days_since >= thresholds.critical:
        return Severity.CRITICAL
    if days_since >= thresholds.warning:
        return Severity.WARNING
    return None
