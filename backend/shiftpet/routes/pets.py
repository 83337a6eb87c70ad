# Overview: Flask API routes for pet stats and species selection.

from flask import Blueprint, jsonify

from ..decorators import json_endpoint, request_data
from ..services import pet_service
from ..validation import ChangePetRequest, UserRequest


pets_bp = Blueprint("pets", __name__, url_prefix="/api/pets")


@pets_bp.get("/stats")
@json_endpoint("load pet stats")
def get_stats_route():
    req = UserRequest.from_payload(request_data())
    return jsonify({"success": True, "stats": pet_service.get_stats(req.user_id)})


@pets_bp.post("/change")
@json_endpoint("change pet")
def change_pet_route():
    req = ChangePetRequest.from_payload(request_data())
    species = pet_service.change_pet(req.user_id, req.animal_choice)
    return jsonify({
        "success": True,
        "animal_choice": species.value,
        "message": "Pet changed successfully!",
    })
