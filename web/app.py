"""Flask web application serving fleet health alerts as JSON."""

import os
from pathlib import Path

from flask import Flask, jsonify, request

# Add parent directory to path for package imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from fleet.config import load_config
from fleet.health import analyse_vehicle
from fleet.loader import DEFAULT_HISTORY_LIMIT, load_fleet
from fleet.report import build_fleet_report, health_to_dict, report_to_dict
from fleet.status import Status

app = Flask(__name__)

# Fleet data file (relative to project root unless FLEET_DATA is set)
app.config["FLEET_DATA"] = Path(
    os.environ.get("FLEET_DATA", Path(__file__).parent.parent / "data" / "fleet.yaml")
)
app.config["FLEET_CONFIG"] = os.environ.get("FLEET_CONFIG") or None
app.config["FLEET_HISTORY_LIMIT"] = int(
    os.environ.get("FLEET_HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT)
)

SEVERITY_FILTERS = {
    "critical": Status.CRITICAL,
    "warning": Status.WARNING,
}


def get_fleet_data():
    """Load fleet data fresh for each request; alerts are never cached."""
    data = load_fleet(
        app.config["FLEET_DATA"], limit=app.config["FLEET_HISTORY_LIMIT"]
    )
    if app.config["FLEET_CONFIG"]:
        data.config = load_config(app.config["FLEET_CONFIG"])
    return data


@app.route("/api/alerts")
def fleet_alerts():
    """Fleet health report: summary counts plus flagged vehicles."""
    severity = request.args.get("severity", "").lower() or None
    if severity is not None and severity not in SEVERITY_FILTERS:
        return jsonify({"error": f"Unknown severity '{severity}'"}), 400

    try:
        data = get_fleet_data()
        report = build_fleet_report(
            data.vehicles,
            data.inspections_by_vehicle,
            data.maintenance_by_vehicle,
            config=data.config,
            resolve_label=data.catalog.resolve_label,
        )
    except (OSError, ValueError):
        app.logger.exception("Alerts route error")
        return jsonify({"error": "Failed to compute fleet health"}), 500

    return jsonify(report_to_dict(report, SEVERITY_FILTERS.get(severity)))


@app.route("/api/vehicles/<code>/health")
def vehicle_health(code: str):
    """Health result for a single vehicle, looked up by vehicle code."""
    try:
        data = get_fleet_data()
    except (OSError, ValueError):
        app.logger.exception("Vehicle health route error")
        return jsonify({"error": "Failed to compute fleet health"}), 500

    vehicle = data.get_vehicle(code)
    if vehicle is None:
        return jsonify({"error": f"Vehicle '{code}' not found"}), 404

    result = analyse_vehicle(
        vehicle,
        data.inspections_for(vehicle.id),
        data.maintenance_for(vehicle.id),
        config=data.config,
        resolve_label=data.catalog.resolve_label,
    )
    return jsonify(health_to_dict(result))


if __name__ == "__main__":
    # Run with debug mode for development
    app.run(debug=True, host="0.0.0.0", port=5001)
