# Overview: Flask API routes for employee login; parses input and returns JSON responses.

from flask import Blueprint, jsonify

from ..decorators import json_endpoint, request_data
from ..services import auth_service
from ..validation import LoginRequest


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/login")
@json_endpoint("login user")
def login_route():
    """
    Log in by username.

    Runs the automatic morning reset when due, then applies idle-time decay
    to the caller's pet before returning it.
    """
    req = LoginRequest.from_payload(request_data())
    result = auth_service.login(req.username)
    return jsonify({
        "success": True,
        "user": result["user"],
        "reset_performed": result["reset_performed"],
        "message": "Login successful",
    })
