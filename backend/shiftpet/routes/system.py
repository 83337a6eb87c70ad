# backend/shiftpet/routes/system.py
"""
System health endpoint.

Verifies the stat store answers and reports the last automatic reset.
"""

import time
from flask import Blueprint, current_app, jsonify
from ..extensions import db
from ..models import Employee
from ..services import reset_service
from ..time_utils import business_now, to_iso

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    start_time = time.time()
    try:
        employee_count = db.session.query(Employee).count()
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": {
                "employees": employee_count,
                "last_reset": reset_service.get_marker(),
            },
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        db.session.rollback()
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error",
        }


@system_bp.get("/api/health")
def health_route():
    database = check_database_health()
    healthy = database["status"] == "healthy"
    return jsonify({
        "success": healthy,
        "status": "healthy" if healthy else "unhealthy",
        "time": to_iso(business_now()),
        "timezone": current_app.config.get("BUSINESS_TIMEZONE"),
        "checks": {"database": database},
    }), (200 if healthy else 503)
