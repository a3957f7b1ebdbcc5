#!/usr/bin/env python3
"""Tests for VehicleSummary, InspectionRecord and MaintenanceRecord."""

from datetime import datetime, timezone

import pytest

from fleet import ChecklistItem, InspectionRecord, MaintenanceRecord, VehicleSummary


class TestVehicleSummary:
    """Tests for VehicleSummary class."""

    def test_name_property(self):
        """Name combines code with brand and model."""
        vehicle = VehicleSummary("v1", "HR38Z-7624", "JAGUAR", "XF")
        assert vehicle.name == "HR38Z-7624 (JAGUAR XF)"

    def test_name_without_brand_or_model(self):
        assert VehicleSummary("v1", "HR38-24").name == "HR38-24"
        assert VehicleSummary("v1", "HR38-24", None, "INVICTO").name == "HR38-24 (INVICTO)"

    def test_active_by_default(self):
        assert VehicleSummary("v1", "HR38-24").active is True


class TestInspectionRecord:
    """Tests for InspectionRecord class."""

    def test_parses_string_timestamp(self):
        record = InspectionRecord("i1", "v1", "2026-10-01T09:30:00Z", 85000)
        assert record.occurred_at == datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc)

    def test_naive_datetime_taken_as_utc(self):
        record = InspectionRecord("i1", "v1", datetime(2026, 10, 1, 9, 30), 85000)
        assert record.occurred_at.tzinfo is not None
        assert record.occurred_at.utcoffset().total_seconds() == 0

    def test_invalid_timestamp_raises(self):
        with pytest.raises(ValueError, match="Invalid timestamp"):
            InspectionRecord("i1", "v1", "yesterday-ish", 85000)

    def test_negative_odometer_raises(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            InspectionRecord("i1", "v1", "2026-10-01", -1)

    def test_failed_keys_in_checklist_order(self):
        record = InspectionRecord(
            "i1",
            "v1",
            "2026-10-01",
            85000,
            {
                "horn": ChecklistItem(False, "weak"),
                "tyres": ChecklistItem(True),
                "brake_lights": ChecklistItem(False),
            },
        )
        assert record.failed_keys == ["horn", "brake_lights"]

    def test_empty_checklist(self):
        record = InspectionRecord("i1", "v1", "2026-10-01", 85000)
        assert record.checklist == {}
        assert record.failed_keys == []


class TestMaintenanceRecord:
    """Tests for MaintenanceRecord class."""

    def test_attributes(self):
        record = MaintenanceRecord("m1", "v1", "2026-07-15T12:00:00+05:30", 79000)
        assert record.id == "m1"
        assert record.vehicle_id == "v1"
        assert record.odometer_km == 79000
        assert record.occurred_at.utcoffset().total_seconds() == 5.5 * 3600

    def test_negative_odometer_raises(self):
        with pytest.raises(ValueError):
            MaintenanceRecord("m1", "v1", "2026-07-15", -100)
