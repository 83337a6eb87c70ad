# Overview: Flask API routes for work sessions (shift start and today's progress).

from flask import Blueprint, jsonify

from ..decorators import json_endpoint, request_data
from ..services import workday_service
from ..validation import StartSessionRequest, UserRequest


sessions_bp = Blueprint("sessions", __name__, url_prefix="/api/sessions")


@sessions_bp.post("")
@json_endpoint("start work session")
def start_session_route():
    req = StartSessionRequest.from_payload(request_data())
    session = workday_service.start_session(req.user_id, req.work_hours)
    return jsonify({
        "success": True,
        "work_hours": float(session.work_hours),
        "goal_amount": session.goal_amount_cents / 100,
        "goal_paid_memberships": session.goal_paid_memberships,
        "goal_credit_cards": session.goal_credit_cards,
        "message": "Work session created successfully",
    }), 201


@sessions_bp.get("/today")
@json_endpoint("load work session")
def get_session_route():
    req = UserRequest.from_payload(request_data())
    return jsonify({"success": True, "session": workday_service.get_today_session(req.user_id)})
