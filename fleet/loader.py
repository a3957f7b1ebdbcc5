"""YAML loading utilities for fleet data."""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, TypeVar, Union

import yaml

from .calculations import newest_first, parse_timestamp
from .config import ConfigError, EngineConfig, config_from_dict
from .inspection import ChecklistItem, InspectionRecord
from .labels import ChecklistCatalog, catalog_from_list
from .maintenance import MaintenanceRecord
from .vehicle import VehicleSummary

# Most recent rows kept per record table
DEFAULT_HISTORY_LIMIT = 600

T = TypeVar("T")


class RecordError(ValueError):
    """A fleet data record is missing a field or holds an invalid value."""


class FleetData:
    """Everything the health engine needs, grouped per vehicle."""

    def __init__(
        self,
        vehicles: List[VehicleSummary],
        inspections_by_vehicle: Dict[str, List[InspectionRecord]],
        maintenance_by_vehicle: Dict[str, List[MaintenanceRecord]],
        catalog: ChecklistCatalog,
        config: EngineConfig,
    ):
        self.vehicles = vehicles
        self.inspections_by_vehicle = inspections_by_vehicle
        self.maintenance_by_vehicle = maintenance_by_vehicle
        self.catalog = catalog
        self.config = config

    def get_vehicle(self, code: str) -> Optional[VehicleSummary]:
        """Find a vehicle by its display code (case-insensitive)."""
        for vehicle in self.vehicles:
            if vehicle.code.lower() == code.lower():
                return vehicle
        return None

    def inspections_for(self, vehicle_id: str) -> List[InspectionRecord]:
        return self.inspections_by_vehicle.get(vehicle_id, [])

    def maintenance_for(self, vehicle_id: str) -> List[MaintenanceRecord]:
        return self.maintenance_by_vehicle.get(vehicle_id, [])


# =============================================================================
# Record parsing
# =============================================================================


def _require(dct: Dict[str, Any], key: str, path: str) -> Any:
    if not isinstance(dct, dict):
        raise RecordError(f"{path}: expected a mapping, got {type(dct).__name__}")
    if dct.get(key) is None:
        raise RecordError(f"{path}.{key}: required field is missing")
    return dct[key]


def _timestamp(dct: Dict[str, Any], path: str):
    try:
        return parse_timestamp(_require(dct, "occurredAt", path))
    except RecordError:
        raise
    except ValueError as e:
        raise RecordError(f"{path}.occurredAt: {e}") from e


def _odometer(dct: Dict[str, Any], path: str) -> int:
    value = _require(dct, "odometerKm", path)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise RecordError(
            f"{path}.odometerKm: expected a non-negative integer, got {value!r}"
        )
    return value


def _active(dct: Dict[str, Any], path: str) -> bool:
    active = dct.get("active", True)
    if not isinstance(active, bool):
        raise RecordError(f"{path}.active: expected true or false, got {active!r}")
    return active


def _parse_vehicle(dct: Dict[str, Any], path: str) -> VehicleSummary:
    return VehicleSummary(
        str(_require(dct, "id", path)),
        str(_require(dct, "code", path)),
        dct.get("brand"),
        dct.get("model"),
        _active(dct, path),
    )


def _parse_checklist(data: Any, path: str) -> Dict[str, ChecklistItem]:
    """Checklist entries are either {ok, remarks} mappings or a bare bool."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RecordError(f"{path}: expected a mapping of checklist items")
    checklist = {}
    for key, item in data.items():
        if isinstance(item, bool):
            checklist[str(key)] = ChecklistItem(item)
            continue
        ok = _require(item, "ok", f"{path}.{key}")
        if not isinstance(ok, bool):
            raise RecordError(f"{path}.{key}.ok: expected true or false, got {ok!r}")
        checklist[str(key)] = ChecklistItem(ok, item.get("remarks") or "")
    return checklist


def _parse_inspection(dct: Dict[str, Any], path: str) -> InspectionRecord:
    return InspectionRecord(
        str(_require(dct, "id", path)),
        str(_require(dct, "vehicleId", path)),
        _timestamp(dct, path),
        _odometer(dct, path),
        _parse_checklist(dct.get("checklist"), f"{path}.checklist"),
    )


def _parse_maintenance(dct: Dict[str, Any], path: str) -> MaintenanceRecord:
    return MaintenanceRecord(
        str(_require(dct, "id", path)),
        str(_require(dct, "vehicleId", path)),
        _timestamp(dct, path),
        _odometer(dct, path),
    )


# =============================================================================
# Grouping
# =============================================================================


def cap_history(records: Iterable[T], limit: Optional[int]) -> List[T]:
    """Keep only the newest `limit` records (all of them if limit is None)."""
    if limit is not None and limit < 0:
        raise ValueError(f"History limit cannot be negative: {limit}")
    ordered = newest_first(records)
    if limit is None:
        return ordered
    return ordered[:limit]


def group_by_vehicle(records: Iterable[T]) -> Dict[str, List[T]]:
    """Group records by vehicle_id, keeping their relative order."""
    grouped: Dict[str, List[T]] = {}
    for record in records:
        grouped.setdefault(record.vehicle_id, []).append(record)
    return grouped


# =============================================================================
# File loading
# =============================================================================


def parse_fleet(
    data: Dict[str, Any],
    limit: Optional[int] = DEFAULT_HISTORY_LIMIT,
    include_inactive: bool = False,
) -> FleetData:
    """
    Build FleetData from an already-parsed YAML document.

    Only active vehicles are kept unless include_inactive is set.
    Inspection and maintenance tables are each capped to the newest
    `limit` rows before grouping.
    """
    if not isinstance(data, dict):
        raise RecordError("Fleet data must be a mapping with a 'vehicles' list")

    vehicles = [
        _parse_vehicle(v, f"vehicles[{i}]")
        for i, v in enumerate(data.get("vehicles") or [])
    ]
    if not include_inactive:
        vehicles = [v for v in vehicles if v.active]

    inspections = [
        _parse_inspection(r, f"inspections[{i}]")
        for i, r in enumerate(data.get("inspections") or [])
    ]
    maintenance = [
        _parse_maintenance(r, f"maintenance[{i}]")
        for i, r in enumerate(data.get("maintenance") or [])
    ]

    if data.get("checklist"):
        try:
            catalog = catalog_from_list(data["checklist"])
        except (KeyError, TypeError, AttributeError) as e:
            raise RecordError(f"checklist: malformed category or field ({e})") from e
    else:
        catalog = ChecklistCatalog.default()

    try:
        config = config_from_dict(data.get("thresholds") or {})
    except (ConfigError, TypeError) as e:
        raise RecordError(f"thresholds: {e}") from e

    return FleetData(
        vehicles=vehicles,
        inspections_by_vehicle=group_by_vehicle(cap_history(inspections, limit)),
        maintenance_by_vehicle=group_by_vehicle(cap_history(maintenance, limit)),
        catalog=catalog,
        config=config,
    )


def load_fleet(
    filename: Union[str, Path],
    limit: Optional[int] = DEFAULT_HISTORY_LIMIT,
    include_inactive: bool = False,
) -> FleetData:
    """Load fleet data from a YAML file."""
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader)
    return parse_fleet(data, limit=limit, include_inactive=include_inactive)
