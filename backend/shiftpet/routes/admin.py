# Overview: Flask API routes for admin operations; every route verifies the caller is an admin.

"""
Admin Routes

SECURITY:
- The caller is identified by admin_user_id (body) or user_id (query).
- Non-admin callers receive 403 and no data.
"""

from flask import Blueprint, jsonify

from ..decorators import json_endpoint, request_data
from ..services import admin_service, reset_service, workday_service
from ..services.employee_service import require_admin
from ..validation import AdminRequest, UpdateCountsRequest


admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


@admin_bp.get("/overview")
@json_endpoint("load admin overview")
def overview_route():
    req = AdminRequest.from_payload(request_data())
    result = admin_service.overview(req.admin_user_id)
    return jsonify({"success": True, "pets": result["pets"], "summary": result["summary"]})


@admin_bp.post("/reset")
@json_endpoint("reset workday")
def reset_route():
    """Force the morning reset now, regardless of the hour or the marker."""
    req = AdminRequest.from_payload(request_data())
    require_admin(req.admin_user_id)
    reset_date = reset_service.run_daily_reset()
    return jsonify({
        "success": True,
        "reset_date": reset_date.isoformat(),
        "message": "All employee stats have been reset for the new workday",
    })


@admin_bp.post("/counts")
@json_endpoint("update counts")
def update_counts_route():
    """Overwrite today's credit-card and/or paid-membership counters for one employee."""
    req = UpdateCountsRequest.from_payload(request_data())
    result = workday_service.update_counts(
        admin_user_id=req.admin_user_id,
        target_user_id=req.target_user_id,
        credit_cards=req.credit_cards,
        paid_memberships=req.paid_memberships,
    )
    return jsonify({"success": True, **result, "message": "Counts updated successfully"})
