"""Fleet-wide health report: counts by status and a sorted list of flagged vehicles."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .calculations import utc_now
from .config import EngineConfig
from .health import (
    DEFAULT_CONFIG,
    Clear,
    Flagged,
    NoData,
    VehicleHealthResult,
    analyse_vehicle,
)
from .inspection import InspectionRecord
from .issue import Issue
from .maintenance import MaintenanceRecord
from .status import Status
from .vehicle import VehicleSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FleetSummary:
    critical: int = 0
    warning: int = 0
    ok: int = 0
    no_data: int = 0
    total_active: int = 0


@dataclass(frozen=True)
class FleetHealthReport:
    """Summary counts plus every flagged vehicle, most urgent first."""

    summary: FleetSummary
    vehicles: List[Flagged] = field(default_factory=list)
    as_of: Optional[datetime] = None

    def filter(self, status: Optional[Status] = None) -> List[Flagged]:
        """Flagged vehicles, optionally only those with the given status."""
        if status is None:
            return list(self.vehicles)
        return [v for v in self.vehicles if v.status == status]


def flagged_sort_key(result: Flagged):
    """Critical before warning, then most issues, then vehicle code."""
    return (result.status.value, -len(result.issues), result.vehicle_code)


def build_fleet_report(
    vehicles: Sequence[VehicleSummary],
    inspections_by_vehicle: Mapping[str, Sequence[InspectionRecord]],
    maintenance_by_vehicle: Mapping[str, Sequence[MaintenanceRecord]],
    config: EngineConfig = DEFAULT_CONFIG,
    resolve_label: Optional[Callable[[str], str]] = None,
    as_of: Optional[datetime] = None,
) -> FleetHealthReport:
    """
    Assess every vehicle and aggregate the results.

    vehicles is expected to hold active vehicles only. All vehicles are
    measured against the same as_of moment.
    """
    as_of = as_of or utc_now()
    counts = {status: 0 for status in Status}
    flagged: List[Flagged] = []

    for vehicle in vehicles:
        result = analyse_vehicle(
            vehicle,
            inspections_by_vehicle.get(vehicle.id, []),
            maintenance_by_vehicle.get(vehicle.id, []),
            config=config,
            resolve_label=resolve_label,
            as_of=as_of,
        )
        counts[result.status] += 1
        if isinstance(result, Flagged):
            flagged.append(result)

    flagged.sort(key=flagged_sort_key)
    summary = FleetSummary(
        critical=counts[Status.CRITICAL],
        warning=counts[Status.WARNING],
        ok=counts[Status.OK],
        no_data=counts[Status.NO_DATA],
        total_active=len(vehicles),
    )
    logger.debug(
        "Fleet health as of %s: %d critical, %d warning, %d ok, %d no data",
        as_of.isoformat(),
        summary.critical,
        summary.warning,
        summary.ok,
        summary.no_data,
    )
    return FleetHealthReport(summary=summary, vehicles=flagged, as_of=as_of)


# =============================================================================
# JSON serialization (camelCase keys)
# =============================================================================


def _timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def issue_to_dict(issue: Issue) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "severity": issue.severity.label,
        "message": issue.message,
        "kind": issue.kind.value,
        "action": issue.kind.action,
    }
    if issue.failed_items:
        d["failedItems"] = list(issue.failed_items)
    return d


def health_to_dict(result: VehicleHealthResult) -> Dict[str, Any]:
    """Serialize any vehicle health result."""
    if isinstance(result, (NoData, Clear)):
        return {"vehicleId": result.vehicle_id, "status": result.status.label}
    return {
        "vehicleId": result.vehicle_id,
        "vehicleCode": result.vehicle_code,
        "brand": result.brand,
        "model": result.model,
        "status": result.status.label,
        "issues": [issue_to_dict(i) for i in result.issues],
        "lastInspectionAt": _timestamp(result.last_inspection_at),
        "lastMaintenanceAt": _timestamp(result.last_maintenance_at),
        "daysSinceInspection": result.days_since_inspection,
        "daysSinceMaintenance": result.days_since_maintenance,
    }


def report_to_dict(
    report: FleetHealthReport, status: Optional[Status] = None
) -> Dict[str, Any]:
    """Serialize a fleet report as the JSON response body."""
    summary = report.summary
    return {
        "summary": {
            "critical": summary.critical,
            "warning": summary.warning,
            "ok": summary.ok,
            "noData": summary.no_data,
            "totalActive": summary.total_active,
        },
        "vehicles": [health_to_dict(v) for v in report.filter(status)],
        "asOf": _timestamp(report.as_of),
    }
