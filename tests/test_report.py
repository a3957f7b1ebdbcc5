#!/usr/bin/env python3
"""Tests for the fleet-wide health report."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from fleet import (
    EngineConfig,
    Flagged,
    InspectionRecord,
    Issue,
    IssueKind,
    MaintenanceRecord,
    NoData,
    Severity,
    Status,
    VehicleSummary,
    build_fleet_report,
    health_to_dict,
    report_to_dict,
)
from fleet.report import flagged_sort_key

AS_OF = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)


def inspection(vehicle_id: str, days_ago: float, odometer: int = 50000):
    return InspectionRecord(
        f"i-{vehicle_id}-{days_ago}",
        vehicle_id,
        AS_OF - timedelta(days=days_ago),
        odometer,
    )


def service(vehicle_id: str, days_ago: float, odometer: int = 50000):
    return MaintenanceRecord(
        f"m-{vehicle_id}-{days_ago}",
        vehicle_id,
        AS_OF - timedelta(days=days_ago),
        odometer,
    )


@pytest.fixture
def fleet():
    """
    One vehicle per outcome:
    - crit2a / crit2b: critical with 2 issues (old inspection, no service)
    - crit1: critical with 1 issue (old inspection)
    - warn: warning (service only, never inspected)
    - clear: recent inspection and service
    - empty: nothing on record
    """
    vehicles = [
        VehicleSummary("crit2b", "ZZ-1", "FORCE", "URBANIA"),
        VehicleSummary("warn", "AB-9", "KIA", "CARNIVAL"),
        VehicleSummary("clear", "CL-1", "SUZUKI", "CIAZ"),
        VehicleSummary("crit1", "AA-0", "TOYOTA", "FORTUNER"),
        VehicleSummary("empty", "NO-1", "SUZUKI", "DZIRE"),
        VehicleSummary("crit2a", "AA-1", "JAGUAR", "XF"),
    ]
    inspections = {
        "crit2a": [inspection("crit2a", 100)],
        "crit2b": [inspection("crit2b", 100)],
        "crit1": [inspection("crit1", 100)],
        "clear": [inspection("clear", 1)],
    }
    maintenance = {
        "crit1": [service("crit1", 10)],
        "warn": [service("warn", 10)],
        "clear": [service("clear", 1)],
    }
    return vehicles, inspections, maintenance


class TestBuildFleetReport:
    """Tests for build_fleet_report."""

    def test_summary_counts(self, fleet):
        report = build_fleet_report(*fleet, as_of=AS_OF)
        summary = report.summary
        assert summary.critical == 3
        assert summary.warning == 1
        assert summary.ok == 1
        assert summary.no_data == 1
        assert summary.total_active == 6

    def test_only_flagged_vehicles_listed(self, fleet):
        report = build_fleet_report(*fleet, as_of=AS_OF)
        assert all(isinstance(v, Flagged) for v in report.vehicles)
        assert len(report.vehicles) == 4

    def test_sort_order(self, fleet):
        """Critical first, then most issues, then vehicle code."""
        report = build_fleet_report(*fleet, as_of=AS_OF)
        assert [v.vehicle_code for v in report.vehicles] == ["AA-1", "ZZ-1", "AA-0", "AB-9"]

    def test_as_of_recorded(self, fleet):
        report = build_fleet_report(*fleet, as_of=AS_OF)
        assert report.as_of == AS_OF

    def test_empty_fleet(self):
        report = build_fleet_report([], {}, {}, as_of=AS_OF)
        assert report.summary.total_active == 0
        assert report.vehicles == []

    def test_config_passed_through(self, fleet):
        config = EngineConfig(
            inspection_fallback_warning_days=200,
            inspection_fallback_critical_days=300,
        )
        report = build_fleet_report(*fleet, config=config, as_of=AS_OF)
        # crit1 is now clear; crit2a/b only miss a service record
        assert report.summary.critical == 0
        assert report.summary.warning == 3
        assert report.summary.ok == 2

    def test_filter(self, fleet):
        report = build_fleet_report(*fleet, as_of=AS_OF)
        assert [v.vehicle_code for v in report.filter(Status.WARNING)] == ["AB-9"]
        assert len(report.filter()) == 4


class TestFlaggedSortKey:
    """The fleet sort is a strict total order."""

    def make(self, code, *severities):
        issues = tuple(
            Issue(severity=s, message="x", kind=IssueKind.ODOMETER_GAP)
            for s in severities
        )
        return Flagged(code.lower(), code, None, None, issues)

    def test_code_breaks_ties(self):
        a = self.make("DL1-1", Severity.WARNING)
        b = self.make("HR3-1", Severity.WARNING)
        assert sorted([b, a], key=flagged_sort_key) == [a, b]

    def test_code_comparison_is_case_sensitive(self):
        upper = self.make("B-2", Severity.WARNING)
        lower = self.make("b-1", Severity.WARNING)
        assert sorted([lower, upper], key=flagged_sort_key) == [upper, lower]

    def test_status_before_issue_count(self):
        critical = self.make("Z-1", Severity.CRITICAL)
        busy_warning = self.make("A-1", Severity.WARNING, Severity.WARNING, Severity.WARNING)
        assert sorted([busy_warning, critical], key=flagged_sort_key) == [
            critical,
            busy_warning,
        ]


class TestSerialization:
    """Tests for the JSON response shape."""

    def test_report_to_dict(self, fleet):
        report = build_fleet_report(*fleet, as_of=AS_OF)
        body = report_to_dict(report)

        assert body["summary"] == {
            "critical": 3,
            "warning": 1,
            "ok": 1,
            "noData": 1,
            "totalActive": 6,
        }
        assert body["asOf"] == "2026-10-16T12:00:00+00:00"
        first = body["vehicles"][0]
        assert first["vehicleCode"] == "AA-1"
        assert first["status"] == "critical"
        assert first["issues"][0] == {
            "severity": "critical",
            "message": "No inspection in 100 days",
            "kind": "INSPECTION_CRITICAL",
            "action": "inspection",
        }
        assert first["daysSinceInspection"] == 100
        assert first["lastMaintenanceAt"] is None
        # Must be directly JSON-serializable
        json.dumps(body)

    def test_report_to_dict_filtered(self, fleet):
        report = build_fleet_report(*fleet, as_of=AS_OF)
        body = report_to_dict(report, Status.CRITICAL)
        assert [v["vehicleCode"] for v in body["vehicles"]] == ["AA-1", "ZZ-1", "AA-0"]
        assert body["summary"]["warning"] == 1

    def test_failed_items_included(self):
        issue = Issue(
            severity=Severity.WARNING,
            message="Recurring in last 3 inspections: Horn",
            kind=IssueKind.RECURRING_FAILURE,
            failed_items=("Horn",),
        )
        result = Flagged("v1", "X-1", "KIA", None, (issue,))
        d = health_to_dict(result)
        assert d["issues"][0]["failedItems"] == ["Horn"]
        assert d["status"] == "warning"
        assert d["model"] is None

    def test_no_data_to_dict(self):
        assert health_to_dict(NoData("v9")) == {"vehicleId": "v9", "status": "no_data"}
