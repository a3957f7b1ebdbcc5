"""
Fleet health and alerting.

This package derives alerts and an overall health status for fleet
vehicles from their inspection and maintenance history:
- Severity / Status: issue severity and overall vehicle health
- VehicleSummary, InspectionRecord, MaintenanceRecord: input records
- Issue: a detected problem with a ready-to-show message
- EngineConfig: thresholds and safety-critical checklist keys
- ChecklistCatalog: checklist key -> label lookup
- analyse_vehicle: per-vehicle result (NoData, Clear or Flagged)
- build_fleet_report: fleet-wide counts and sorted flagged vehicles
"""

from .status import Severity, Status
from .vehicle import VehicleSummary
from .inspection import ChecklistItem, InspectionRecord
from .maintenance import MaintenanceRecord
from .issue import Issue, IssueKind
from .config import ConfigError, EngineConfig, config_from_dict, load_config
from .labels import ChecklistCatalog, ChecklistCategory, ChecklistField, format_key
from .calculations import (
    Thresholds,
    adaptive_thresholds,
    average_interval_days,
    check_severity,
    days_between,
    parse_timestamp,
)
from .checklist import recent_failure_issue, recurring_failure_issue
from .health import (
    Clear,
    Flagged,
    NoData,
    VehicleHealthResult,
    analyse_vehicle,
    inspection_timing_issue,
    maintenance_timing_issue,
    odometer_gap_issue,
)
from .report import (
    FleetHealthReport,
    FleetSummary,
    build_fleet_report,
    health_to_dict,
    report_to_dict,
)
from .loader import FleetData, RecordError, load_fleet, parse_fleet

__all__ = [
    "Severity",
    "Status",
    "VehicleSummary",
    "ChecklistItem",
    "InspectionRecord",
    "MaintenanceRecord",
    "Issue",
    "IssueKind",
    "ConfigError",
    "EngineConfig",
    "config_from_dict",
    "load_config",
    "ChecklistCatalog",
    "ChecklistCategory",
    "ChecklistField",
    "format_key",
    "Thresholds",
    "adaptive_thresholds",
    "average_interval_days",
    "check_severity",
    "days_between",
    "parse_timestamp",
    "recent_failure_issue",
    "recurring_failure_issue",
    "Clear",
    "Flagged",
    "NoData",
    "VehicleHealthResult",
    "analyse_vehicle",
    "inspection_timing_issue",
    "maintenance_timing_issue",
    "odometer_gap_issue",
    "FleetHealthReport",
    "FleetSummary",
    "build_fleet_report",
    "health_to_dict",
    "report_to_dict",
    "FleetData",
    "RecordError",
    "load_fleet",
    "parse_fleet",
]
