"""Inspection records and their checklist items."""

from datetime import datetime
from typing import Dict, List, Optional, Union

from .calculations import parse_timestamp


class ChecklistItem:
    """Outcome of one checklist point in an inspection."""

    def __init__(self, ok: bool, remarks: str = ""):
        self.ok = ok
        self.remarks = remarks or ""


class InspectionRecord:
    """A single vehicle inspection."""

    def __init__(
        self,
        id: str,
        vehicle_id: str,
        occurred_at: Union[datetime, str],
        odometer_km: int = 0,
        checklist: Optional[Dict[str, ChecklistItem]] = None,
    ):
        if odometer_km < 0:
            raise ValueError(f"Odometer reading cannot be negative: {odometer_km}")
        self.id = id
        self.vehicle_id = vehicle_id
        self.occurred_at = parse_timestamp(occurred_at)
        self.odometer_km = odometer_km
        self.checklist = checklist or {}

    @property
    def failed_keys(self) -> List[str]:
        """Checklist keys marked not ok, in checklist order."""
        return [key for key, item in self.checklist.items() if not item.ok]
