"""MaintenanceRecord class for service events."""

from datetime import datetime
from typing import Union

from .calculations import parse_timestamp


class MaintenanceRecord:
    """A record of maintenance performed on a vehicle."""

    def __init__(
        self,
        id: str,
        vehicle_id: str,
        occurred_at: Union[datetime, str],
        odometer_km: int = 0,
    ):
        if odometer_km < 0:
            raise ValueError(f"Odometer reading cannot be negative: {odometer_km}")
        self.id = id
        self.vehicle_id = vehicle_id
        self.occurred_at = parse_timestamp(occurred_at)
        self.odometer_km = odometer_km
