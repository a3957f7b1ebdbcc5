"""Per-vehicle health assessment - combines all checks into one result."""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .calculations import (
    Thresholds,
    adaptive_thresholds,
    average_interval_days,
    check_severity,
    days_between,
    format_short_date,
    newest_first,
    utc_now,
)
from .checklist import recent_failure_issue, recurring_failure_issue
from .config import EngineConfig
from .inspection import InspectionRecord
from .issue import Issue, IssueKind
from .labels import ChecklistCatalog
from .maintenance import MaintenanceRecord
from .status import Severity, Status
from .vehicle import VehicleSummary

DEFAULT_CONFIG = EngineConfig()
DEFAULT_CATALOG = ChecklistCatalog.default()


@dataclass(frozen=True)
class NoData:
    """Vehicle has neither inspections nor maintenance on record."""

    vehicle_id: str

    @property
    def status(self) -> Status:
        return Status.NO_DATA


@dataclass(frozen=True)
class Clear:
    """Vehicle has records and nothing crossed a threshold."""

    vehicle_id: str

    @property
    def status(self) -> Status:
        return Status.OK


@dataclass(frozen=True)
class Flagged:
    """Vehicle with at least one issue."""

    vehicle_id: str
    vehicle_code: str
    brand: Optional[str]
    model: Optional[str]
    issues: Tuple[Issue, ...]
    last_inspection_at: Optional[datetime] = None
    last_maintenance_at: Optional[datetime] = None
    days_since_inspection: Optional[int] = None
    days_since_maintenance: Optional[int] = None

    def __post_init__(self):
        if not self.issues:
            raise ValueError("Flagged result needs at least one issue")

    @property
    def status(self) -> Status:
        """CRITICAL iff any issue is critical."""
        if any(issue.is_critical for issue in self.issues):
            return Status.CRITICAL
        return Status.WARNING


VehicleHealthResult = Union[NoData, Clear, Flagged]


# =============================================================================
# Individual checks
# =============================================================================


def inspection_timing_issue(
    inspections: Sequence[InspectionRecord], as_of: datetime, config: EngineConfig
) -> Optional[Issue]:
    """
    Overdue-inspection check for a vehicle with at least one inspection.

    With two or more inspections the thresholds follow the vehicle's own
    average interval; otherwise the fixed fallback days apply.
    """
    latest = max(inspections, key=lambda i: i.occurred_at)
    days_since = days_between(latest.occurred_at, as_of)
    avg_interval = average_interval_days(inspections)

    if avg_interval is None:
        thresholds = Thresholds(
            warning=config.inspection_fallback_warning_days,
            critical=config.inspection_fallback_critical_days,
        )
        severity = check_severity(days_since, thresholds)
        if severity is None:
            return None
        return Issue(
            severity=severity,
            message=f"No inspection in {days_since} days",
            kind=_inspection_kind(severity),
        )

    thresholds = adaptive_thresholds(
        avg_interval,
        config.inspection_adaptive_factor,
        config.inspection_critical_factor,
    )
    severity = check_severity(days_since, thresholds)
    if severity is None:
        return None
    if severity == Severity.CRITICAL:
        message = (
            f"No inspection in {days_since} days, "
            f"typically every ~{avg_interval} days"
        )
    else:
        message = (
            f"Due for inspection ({days_since} days since last, "
            f"typical interval ~{avg_interval} days)"
        )
    return Issue(severity=severity, message=message, kind=_inspection_kind(severity))


def _inspection_kind(severity: Severity) -> IssueKind:
    if severity == Severity.CRITICAL:
        return IssueKind.INSPECTION_CRITICAL
    return IssueKind.INSPECTION_OVERDUE


def maintenance_timing_issue(
    latest: MaintenanceRecord, as_of: datetime, config: EngineConfig
) -> Optional[Issue]:
    """Overdue-service check. Always uses the fixed maintenance thresholds."""
    days_since = days_between(latest.occurred_at, as_of)
    thresholds = Thresholds(
        warning=config.maintenance_warning_days,
        critical=config.maintenance_critical_days,
    )
    severity = check_severity(days_since, thresholds)
    if severity == Severity.CRITICAL:
        return Issue(
            severity=severity,
            message=f"No service in {days_since} days",
            kind=IssueKind.MAINTENANCE_CRITICAL,
        )
    if severity == Severity.WARNING:
        return Issue(
            severity=severity,
            message=(
                f"Last service {days_since} days ago "
                f"({format_short_date(latest.occurred_at)})"
            ),
            kind=IssueKind.MAINTENANCE_OVERDUE,
        )
    return None


def odometer_gap_issue(
    inspection: InspectionRecord, maintenance: MaintenanceRecord, config: EngineConfig
) -> Optional[Issue]:
    """
    Warn when the latest inspection reads far beyond the last service odometer.

    A negative gap (service logged with a higher reading) is not an error,
    it just never reaches the threshold.
    """
    gap = inspection.odometer_km - maintenance.odometer_km
    if gap < config.odometer_gap_km:
        return None
    return Issue(
        severity=Severity.WARNING,
        message=(
            f"{gap:,} km driven since last service "
            f"(at {maintenance.odometer_km:,} km)"
        ),
        kind=IssueKind.ODOMETER_GAP,
    )


# =============================================================================
# Assembly
# =============================================================================


def analyse_vehicle(
    vehicle: VehicleSummary,
    inspections: Sequence[InspectionRecord],
    maintenance: Sequence[MaintenanceRecord],
    config: EngineConfig = DEFAULT_CONFIG,
    resolve_label: Optional[Callable[[str], str]] = None,
    as_of: Optional[datetime] = None,
) -> VehicleHealthResult:
    """
    Assess one vehicle from its inspection and maintenance history.

    Records may arrive in any order. Checks run in a fixed order so the
    issue list reads the same on every run:
    - inspection timing (or "no inspection on record")
    - failures in the latest inspection, then recurring failures
    - maintenance timing (or "no service record"), only when the vehicle
      has inspections
    - odometer gap since last service

    Args:
        resolve_label: checklist key -> display label. Defaults to the
            built-in checklist catalog.
        as_of: the moment to measure elapsed days against (default: now).
    """
    if not inspections and not maintenance:
        return NoData(vehicle.id)

    as_of = as_of or utc_now()
    resolve_label = resolve_label or DEFAULT_CATALOG.resolve_label
    inspections = newest_first(inspections)
    maintenance = newest_first(maintenance)
    latest_inspection = inspections[0] if inspections else None
    latest_maintenance = maintenance[0] if maintenance else None

    found: List[Optional[Issue]] = []

    if latest_inspection is None:
        found.append(
            Issue(
                severity=Severity.WARNING,
                message="No inspection on record yet",
                kind=IssueKind.NEVER_INSPECTED,
            )
        )
    else:
        found.append(inspection_timing_issue(inspections, as_of, config))
        found.append(
            recent_failure_issue(latest_inspection, as_of, config, resolve_label)
        )
        found.append(recurring_failure_issue(inspections, config, resolve_label))

        # Service timing is only judged for vehicles with inspections
        if latest_maintenance is None:
            found.append(
                Issue(
                    severity=Severity.WARNING,
                    message="No service record on record yet",
                    kind=IssueKind.NEVER_MAINTAINED,
                )
            )
        else:
            found.append(maintenance_timing_issue(latest_maintenance, as_of, config))

    if latest_inspection is not None and latest_maintenance is not None:
        found.append(odometer_gap_issue(latest_inspection, latest_maintenance, config))

    issues = tuple(issue for issue in found if issue is not None)
    if not issues:
        return Clear(vehicle.id)

    return Flagged(
        vehicle_id=vehicle.id,
        vehicle_code=vehicle.code,
        brand=vehicle.brand,
        model=vehicle.model,
        issues=issues,
        last_inspection_at=latest_inspection.occurred_at if latest_inspection else None,
        last_maintenance_at=(
            latest_maintenance.occurred_at if latest_maintenance else None
        ),
        days_since_inspection=(
            days_between(latest_inspection.occurred_at, as_of)
            if latest_inspection
            else None
        ),
        days_since_maintenance=(
            days_between(latest_maintenance.occurred_at, as_of)
            if latest_maintenance
            else None
        ),
    )
