# Overview: Request decorators for API routes.

from functools import wraps
from flask import request, jsonify, current_app

from .errors import ShiftPetError


def request_data():
    """
    Query-string arguments merged with the JSON body (body wins).

    A JSON body that is not an object is returned as-is so request
    validation rejects it.
    """
    body = request.get_json(silent=True)
    if body is not None and not isinstance(body, dict):
        return body
    data = request.args.to_dict()
    data.update(body or {})
    return data


def json_endpoint(action: str):
    """
    Translate service failures into the {success: false, error} envelope.

    ShiftPetError subclasses carry their own status code. Anything else is
    logged with a stack trace and reported as a generic 500 so no exception
    reaches the client.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ShiftPetError as e:
                return jsonify(e.to_dict()), e.status_code
            except Exception:
                current_app.logger.exception(f"Failed to {action}")
                return jsonify({"success": False, "error": "Internal server error"}), 500

        return decorated_function
    return decorator
