"""
Request validation tests.

Verifies:
- Money is converted to integer cents and bounded
- Booleans, ids and counts are strictly typed
- Each request struct rejects malformed payloads with a ValidationError
"""

from decimal import Decimal

import pytest

from shiftpet.errors import ValidationError
from shiftpet.models import PetSpecies
from shiftpet.validation import (
    AdminRequest,
    ChangePetRequest,
    LoginRequest,
    RecordSaleRequest,
    StartSessionRequest,
    UpdateCountsRequest,
    UserRequest,
    coerce_bool,
    coerce_id,
    coerce_money_cents,
)


class TestMoney:

    @pytest.mark.parametrize(
        "value,cents",
        [
            ("19.99", 1999),
            (19.995, 2000),
            (600, 60000),
            ("0.01", 1),
        ],
    )
    def test_converts_to_cents(self, value, cents):
        assert coerce_money_cents("revenue", value) == cents

    @pytest.mark.parametrize("value", [0, "-5", "abc", True, "NaN", "Infinity", None, [], "1e999999"])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValidationError):
            coerce_money_cents("revenue", value)

    def test_rejects_amount_over_limit(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            coerce_money_cents("revenue", "10000000")


class TestScalars:

    @pytest.mark.parametrize("value,expected", [(True, True), (0, False), (1, True), ("true", True), ("FALSE", False)])
    def test_bool_forms(self, value, expected):
        assert coerce_bool("has_warranty", value) is expected

    def test_bool_default(self):
        assert coerce_bool("has_warranty", None) is False

    @pytest.mark.parametrize("value", ["yes", 2, 1.0, "maybe"])
    def test_bool_rejects_other_values(self, value):
        with pytest.raises(ValidationError):
            coerce_bool("has_warranty", value)

    def test_id_accepts_numeric_string(self):
        assert coerce_id("user_id", "42") == 42

    @pytest.mark.parametrize("value", [0, -1, "1.5", 2.0, "1e3", True, "abc"])
    def test_id_rejects(self, value):
        with pytest.raises(ValidationError):
            coerce_id("user_id", value)


class TestRequests:

    def test_login_requires_username(self):
        with pytest.raises(ValidationError, match="Missing required fields: username"):
            LoginRequest.from_payload({})

    def test_login_strips_username(self):
        assert LoginRequest.from_payload({"username": "  bob "}).username == "bob"

    def test_non_object_payload(self):
        with pytest.raises(ValidationError, match="Invalid JSON payload"):
            LoginRequest.from_payload(["bob"])

    def test_user_request_from_query_string(self):
        assert UserRequest.from_payload({"user_id": "7"}).user_id == 7

    def test_start_session(self):
        req = StartSessionRequest.from_payload({"user_id": 1, "work_hours": "7.5"})
        assert req.work_hours == Decimal("7.50")

    @pytest.mark.parametrize("hours", [0, "-2", "24.01", "ten"])
    def test_start_session_rejects_hours(self, hours):
        with pytest.raises(ValidationError):
            StartSessionRequest.from_payload({"user_id": 1, "work_hours": hours})

    def test_record_sale_defaults(self):
        req = RecordSaleRequest.from_payload({"user_id": 3, "revenue": "120.50"})
        assert req.revenue_cents == 12050
        assert not req.has_credit_card
        assert not req.has_paid_membership
        assert not req.has_warranty
        assert not req.overridden_high_value

    def test_record_sale_flags(self):
        req = RecordSaleRequest.from_payload({
            "user_id": 3,
            "revenue": 600,
            "has_credit_card": 1,
            "has_paid_membership": "true",
            "has_warranty": True,
            "overridden_high_value": True,
        })
        sale = req.to_sale_input()
        assert sale.revenue_cents == 60000
        assert sale.has_credit_card and sale.has_paid_membership and sale.has_warranty
        assert req.overridden_high_value

    def test_record_sale_requires_revenue(self):
        with pytest.raises(ValidationError, match="revenue"):
            RecordSaleRequest.from_payload({"user_id": 3})

    def test_change_pet(self):
        assert ChangePetRequest.from_payload({"user_id": 1, "animal_choice": "Dog"}).animal_choice is PetSpecies.DOG

    def test_change_pet_rejects_unknown_species(self):
        with pytest.raises(ValidationError, match="Invalid animal_choice"):
            ChangePetRequest.from_payload({"user_id": 1, "animal_choice": "dragon"})

    def test_admin_request_accepts_either_key(self):
        assert AdminRequest.from_payload({"admin_user_id": 5}).admin_user_id == 5
        assert AdminRequest.from_payload({"user_id": "6"}).admin_user_id == 6

    def test_admin_request_requires_caller(self):
        with pytest.raises(ValidationError):
            AdminRequest.from_payload({})

    def test_update_counts_partial(self):
        req = UpdateCountsRequest.from_payload({"admin_user_id": 1, "target_user_id": 2, "credit_cards": 3})
        assert req.credit_cards == 3
        assert req.paid_memberships is None

    def test_update_counts_requires_a_count(self):
        with pytest.raises(ValidationError, match="No counts provided"):
            UpdateCountsRequest.from_payload({"admin_user_id": 1, "target_user_id": 2})

    def test_update_counts_rejects_negative(self):
        with pytest.raises(ValidationError):
            UpdateCountsRequest.from_payload({"admin_user_id": 1, "target_user_id": 2, "paid_memberships": -1})
