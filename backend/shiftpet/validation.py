from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from .errors import ValidationError
from .models import PetSpecies
from .services.pet_rules import SaleInput


# Maximum single sale: $9,999,999.99 (999,999,999 cents)
# This prevents database overflow issues and nonsensical amounts
MAX_SALE_CENTS = 999_999_999

# A declared shift cannot exceed one day
MAX_WORK_HOURS = Decimal("24")

_TRUE_STRINGS = {"true", "1"}
_FALSE_STRINGS = {"false", "0"}


def _payload(payload: Any) -> dict:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")
    return payload


def _require(data: dict, *keys: str) -> None:
    missing = [k for k in keys if data.get(k) is None or data.get(k) == ""]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def coerce_int(key: str, value: Any) -> int:
    """Strict integer: rejects bools, floats, decimals and scientific notation."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{key} must be an integer")
        # Reject scientific notation (e.g., "1e15", "1E10")
        if "e" in stripped.lower():
            raise ValidationError(f"{key} must be a plain integer (scientific notation not allowed)")
        if "." in stripped:
            raise ValidationError(f"{key} must be an integer (no decimals)")
        try:
            return int(stripped)
        except ValueError:
            raise ValidationError(f"{key} must be an integer")
    if isinstance(value, float):
        raise ValidationError(f"{key} must be an integer, not a decimal")
    raise ValidationError(f"{key} must be an integer")


def coerce_id(key: str, value: Any) -> int:
    ident = coerce_int(key, value)
    if ident <= 0:
        raise ValidationError(f"{key} must be a positive integer")
    return ident


def coerce_count(key: str, value: Any) -> int:
    count = coerce_int(key, value)
    if count < 0:
        raise ValidationError(f"{key} must be >= 0")
    return count


def coerce_bool(key: str, value: Any, default: bool = False) -> bool:
    """
    JSON booleans, plus the 0/1 and "true"/"false" forms older clients send.
    Anything else is rejected rather than guessed from truthiness.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValidationError(f"{key} must be a boolean")


def _coerce_decimal(key: str, value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise ValidationError(f"{key} must be a number")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{key} must be a number")
    if not number.is_finite():
        raise ValidationError(f"{key} must be a finite number")
    return number


def coerce_money_cents(key: str, value: Any) -> int:
    """Dollar amount (e.g. 19.99) to integer cents; must be > 0."""
    amount = _coerce_decimal(key, value)
    if amount <= 0:
        raise ValidationError(f"{key} must be > 0")
    if amount > Decimal(MAX_SALE_CENTS) / 100:
        raise ValidationError(f"{key} cannot exceed ${MAX_SALE_CENTS / 100:,.2f}")
    cents = int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if cents <= 0:
        raise ValidationError(f"{key} must be > 0")
    return cents


def coerce_work_hours(key: str, value: Any) -> Decimal:
    hours = _coerce_decimal(key, value)
    if hours > MAX_WORK_HOURS:
        raise ValidationError(f"{key} cannot exceed {MAX_WORK_HOURS}")
    hours = hours.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if hours <= 0:
        raise ValidationError(f"{key} must be > 0")
    return hours


def coerce_species(key: str, value: Any) -> PetSpecies:
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be one of: {', '.join(PetSpecies.values())}")
    try:
        return PetSpecies(value.strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid {key}. Must be one of: {', '.join(PetSpecies.values())}")


# =============================================================================
# REQUEST STRUCTS (one per endpoint)
# =============================================================================


@dataclass(frozen=True)
class LoginRequest:
    username: str

    @classmethod
    def from_payload(cls, payload: Any) -> "LoginRequest":
        data = _payload(payload)
        _require(data, "username")
        username = data["username"]
        if not isinstance(username, str) or not username.strip():
            raise ValidationError("username must be a non-empty string")
        return cls(username=username.strip())


@dataclass(frozen=True)
class UserRequest:
    user_id: int

    @classmethod
    def from_payload(cls, payload: Any) -> "UserRequest":
        data = _payload(payload)
        _require(data, "user_id")
        return cls(user_id=coerce_id("user_id", data["user_id"]))


@dataclass(frozen=True)
class StartSessionRequest:
    user_id: int
    work_hours: Decimal

    @classmethod
    def from_payload(cls, payload: Any) -> "StartSessionRequest":
        data = _payload(payload)
        _require(data, "user_id", "work_hours")
        return cls(
            user_id=coerce_id("user_id", data["user_id"]),
            work_hours=coerce_work_hours("work_hours", data["work_hours"]),
        )


@dataclass(frozen=True)
class RecordSaleRequest:
    user_id: int
    revenue_cents: int
    has_credit_card: bool = False
    has_paid_membership: bool = False
    has_warranty: bool = False
    overridden_high_value: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "RecordSaleRequest":
        data = _payload(payload)
        _require(data, "user_id", "revenue")
        return cls(
            user_id=coerce_id("user_id", data["user_id"]),
            revenue_cents=coerce_money_cents("revenue", data["revenue"]),
            has_credit_card=coerce_bool("has_credit_card", data.get("has_credit_card")),
            has_paid_membership=coerce_bool("has_paid_membership", data.get("has_paid_membership")),
            has_warranty=coerce_bool("has_warranty", data.get("has_warranty")),
            overridden_high_value=coerce_bool("overridden_high_value", data.get("overridden_high_value")),
        )

    def to_sale_input(self) -> SaleInput:
        return SaleInput(
            revenue_cents=self.revenue_cents,
            has_credit_card=self.has_credit_card,
            has_paid_membership=self.has_paid_membership,
            has_warranty=self.has_warranty,
        )


@dataclass(frozen=True)
class ChangePetRequest:
    user_id: int
    animal_choice: PetSpecies

    @classmethod
    def from_payload(cls, payload: Any) -> "ChangePetRequest":
        data = _payload(payload)
        _require(data, "user_id", "animal_choice")
        return cls(
            user_id=coerce_id("user_id", data["user_id"]),
            animal_choice=coerce_species("animal_choice", data["animal_choice"]),
        )


@dataclass(frozen=True)
class AdminRequest:
    admin_user_id: int

    @classmethod
    def from_payload(cls, payload: Any) -> "AdminRequest":
        data = _payload(payload)
        # GET requests carry the caller as ?user_id=, POST bodies as admin_user_id
        raw = data.get("admin_user_id")
        if raw is None or raw == "":
            raw = data.get("user_id")
        if raw is None or raw == "":
            raise ValidationError("Missing required fields: admin_user_id")
        return cls(admin_user_id=coerce_id("admin_user_id", raw))


@dataclass(frozen=True)
class UpdateCountsRequest:
    admin_user_id: int
    target_user_id: int
    credit_cards: int | None = None
    paid_memberships: int | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "UpdateCountsRequest":
        data = _payload(payload)
        _require(data, "admin_user_id", "target_user_id")

        credit_cards = data.get("credit_cards")
        paid_memberships = data.get("paid_memberships")
        if credit_cards is None and paid_memberships is None:
            raise ValidationError("No counts provided to update")

        return cls(
            admin_user_id=coerce_id("admin_user_id", data["admin_user_id"]),
            target_user_id=coerce_id("target_user_id", data["target_user_id"]),
            credit_cards=coerce_count("credit_cards", credit_cards) if credit_cards is not None else None,
            paid_memberships=coerce_count("paid_memberships", paid_memberships) if paid_memberships is not None else None,
        )
