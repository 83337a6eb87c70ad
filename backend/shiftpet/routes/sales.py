# Overview: Flask API routes for recording sales; parses input and returns JSON responses.

from flask import Blueprint, jsonify

from ..decorators import json_endpoint, request_data
from ..services import feeding_service
from ..validation import RecordSaleRequest


sales_bp = Blueprint("sales", __name__, url_prefix="/api/sales")


@sales_bp.post("")
@json_endpoint("record sale")
def record_sale_route():
    """
    Record a sale and feed the pet.

    Body: user_id, revenue (dollars, > 0), optional has_credit_card,
    has_paid_membership, has_warranty, overridden_high_value.
    """
    req = RecordSaleRequest.from_payload(request_data())
    result = feeding_service.record_sale(
        user_id=req.user_id,
        sale=req.to_sale_input(),
        overridden_high_value=req.overridden_high_value,
    )
    return jsonify({"success": True, **result}), 201
