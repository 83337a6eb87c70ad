# Overview: Pure stat-computation rules for pets, goals and the daily reset; no database access.

"""
Pet Rules

WHY: Every number the pet shows comes from these functions. Services load
state, call in here, and persist the result inside one transaction, so the
rules can be exercised without a database or a clock.

UNITS:
- money is integer cents
- health and happiness are integers in [0, 100]
- datetimes are naive business-clock values (see time_utils.business_now)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from fractions import Fraction
from typing import Iterable

from ..errors import ValidationError


MIN_STAT = 0
MAX_STAT = 100

DEFAULT_DECAY_PER_HOUR = 5
DEFAULT_RESET_HOUR = 8

# Shift goals
GOAL_CENTS_PER_HOUR = 1000 * 100
HOURS_PER_PAID_MEMBERSHIP = 4
HOURS_PER_CREDIT_CARD = 7

# Sale bonuses (health points)
BASE_SALE_BONUS = 5
MID_REVENUE_CENTS = 100 * 100
MID_REVENUE_BONUS = 5
HIGH_REVENUE_CENTS = 500 * 100
HIGH_REVENUE_BONUS = 5
PAID_MEMBERSHIP_BONUS = 20
CREDIT_CARD_BONUS = 20
COMBO_BONUS = 10
WARRANTY_BONUS = 10

PAID_MEMBERSHIP_MESSAGE = "⭐ EXCELLENT! Paid Membership! +20 Health!"
CREDIT_CARD_MESSAGE = "💳 EXCELLENT! Credit Card! +20 Health!"
COMBO_MESSAGE = "🎉 AMAZING COMBO! Credit Card + Paid Membership! Total: +50 Health!"
WARRANTY_MESSAGE = "🛡️ Great job with the Warranty! +10 Health!"
WARRANTY_FOLLOWUP_MESSAGE = "🛡️ Plus Warranty! +10 Health!"

FED_MESSAGE = "Animal fed successfully!"


def clamp_stat(value: int) -> int:
    return max(MIN_STAT, min(MAX_STAT, int(value)))


# =============================================================================
# HEALTH DECAY
# =============================================================================


def decay_health(
    *,
    health: int,
    last_fed: datetime,
    now: datetime,
    last_health_reset: date | None,
    has_session_today: bool,
    per_hour: int = DEFAULT_DECAY_PER_HOUR,
) -> int:
    """
    Health after idle-time decay, evaluated once per login.

    Decay is `per_hour` points for each hour since `last_fed`, computed
    against the stored `last_fed` so repeated logins never double-count a
    window; the decrease is capped at the current health.

    A feed from a prior day never decays (a new day starts undecayed). On
    the first login of a day with no shift declared yet the pet is resting
    and does not decay either.
    """
    today = now.date()

    if last_fed.date() != today:
        return clamp_stat(health)

    fresh_day = last_health_reset is None or last_health_reset < today
    if fresh_day and not has_session_today:
        return clamp_stat(health)

    hours = max(0.0, (now - last_fed).total_seconds() / 3600)
    decrease = min(health, math.floor(hours * per_hour))
    return clamp_stat(health - decrease)


# =============================================================================
# DAILY RESET
# =============================================================================


def should_auto_reset(
    *,
    marker_date: date | None,
    now: datetime,
    cutoff_hour: int = DEFAULT_RESET_HOUR,
) -> bool:
    """True once per day: at or after the cutoff hour, when today has not been reset yet."""
    if now.hour < cutoff_hour:
        return False
    return marker_date is None or marker_date < now.date()


# =============================================================================
# SHIFT GOALS
# =============================================================================


@dataclass(frozen=True)
class Goals:
    goal_amount_cents: int
    goal_paid_memberships: int
    goal_credit_cards: int


def compute_goals(work_hours) -> Goals:
    """
    Goals for a declared shift length.

    $1000 of revenue per hour, one paid membership per started 4 hours and
    one credit card per started 7 hours.
    """
    hours = work_hours if isinstance(work_hours, Decimal) else Decimal(str(work_hours))
    if hours <= 0:
        raise ValidationError("work_hours must be > 0")

    return Goals(
        goal_amount_cents=int((hours * GOAL_CENTS_PER_HOUR).to_integral_value()),
        goal_paid_memberships=math.ceil(hours / HOURS_PER_PAID_MEMBERSHIP),
        goal_credit_cards=math.ceil(hours / HOURS_PER_CREDIT_CARD),
    )


# =============================================================================
# GOAL PROGRESS / HAPPINESS
# =============================================================================


@dataclass(frozen=True)
class GoalProgress:
    current_paid_memberships: int
    goal_paid_memberships: int
    current_credit_cards: int
    goal_credit_cards: int

    @classmethod
    def of_session(cls, session) -> "GoalProgress":
        return cls(
            current_paid_memberships=session.current_paid_memberships,
            goal_paid_memberships=session.goal_paid_memberships,
            current_credit_cards=session.current_credit_cards,
            goal_credit_cards=session.goal_credit_cards,
        )

    @property
    def goal_met(self) -> bool:
        return is_goal_met(self)

    @property
    def happiness(self) -> int:
        return compute_happiness(self)


def progress_percent(current: int, goal: int) -> Fraction:
    if goal <= 0:
        return Fraction(0)
    return min(Fraction(MAX_STAT), Fraction(MAX_STAT * current, goal))


def _round_half_up(value: Fraction) -> int:
    return math.floor(value + Fraction(1, 2))


def compute_happiness(progress: GoalProgress) -> int:
    """
    Happiness is recomputed from goal progress, never incremented.

    Mean of the paid-membership and credit-card progress percentages (each
    capped at 100, 0 when the goal is 0), rounded half up.
    """
    pm = progress_percent(progress.current_paid_memberships, progress.goal_paid_memberships)
    cc = progress_percent(progress.current_credit_cards, progress.goal_credit_cards)
    return clamp_stat(_round_half_up((pm + cc) / 2))


def is_goal_met(progress: GoalProgress) -> bool:
    """Revenue is informational; the goal is met on the two counters alone."""
    return (
        progress.current_paid_memberships >= progress.goal_paid_memberships
        and progress.current_credit_cards >= progress.goal_credit_cards
    )


def remaining_goals(session) -> dict:
    """What is still needed today, for the shift screen."""
    return {
        "paid_memberships": max(0, session.goal_paid_memberships - session.current_paid_memberships),
        "credit_cards": max(0, session.goal_credit_cards - session.current_credit_cards),
        "revenue_percent": float(
            round(progress_percent(session.revenue_cents, session.goal_amount_cents), 1)
        ),
    }


# =============================================================================
# SALES
# =============================================================================


@dataclass(frozen=True)
class SaleInput:
    revenue_cents: int
    has_credit_card: bool = False
    has_paid_membership: bool = False
    has_warranty: bool = False


@dataclass(frozen=True)
class SaleOutcome:
    health_delta: int
    happiness: int
    goal_met: bool
    bonus_message: str

    @property
    def message(self) -> str:
        if self.bonus_message:
            return f"{FED_MESSAGE} {self.bonus_message}"
        return FED_MESSAGE


def sale_health_delta(sale: SaleInput) -> int:
    """Additive bonus; the 100 cap is applied once to the final health, not per component."""
    delta = BASE_SALE_BONUS
    if sale.revenue_cents >= MID_REVENUE_CENTS:
        delta += MID_REVENUE_BONUS
    if sale.revenue_cents >= HIGH_REVENUE_CENTS:
        delta += HIGH_REVENUE_BONUS
    if sale.has_paid_membership:
        delta += PAID_MEMBERSHIP_BONUS
    if sale.has_credit_card:
        delta += CREDIT_CARD_BONUS
    if sale.has_credit_card and sale.has_paid_membership:
        delta += COMBO_BONUS
    if sale.has_warranty:
        delta += WARRANTY_BONUS
    return delta


def sale_bonus_message(sale: SaleInput) -> str:
    parts: list[str] = []
    if sale.has_credit_card and sale.has_paid_membership:
        parts.append(COMBO_MESSAGE)
    elif sale.has_paid_membership:
        parts.append(PAID_MEMBERSHIP_MESSAGE)
    elif sale.has_credit_card:
        parts.append(CREDIT_CARD_MESSAGE)

    if sale.has_warranty:
        parts.append(WARRANTY_FOLLOWUP_MESSAGE if parts else WARRANTY_MESSAGE)

    return " ".join(parts)


def evaluate_sale(sale: SaleInput, progress: GoalProgress) -> SaleOutcome:
    """
    Effects of one sale on the pet.

    `progress` is the session state with this sale's counters already
    applied (services read it back after the in-place increments so
    concurrent sales are reflected).
    """
    return SaleOutcome(
        health_delta=sale_health_delta(sale),
        happiness=compute_happiness(progress),
        goal_met=is_goal_met(progress),
        bonus_message=sale_bonus_message(sale),
    )


# =============================================================================
# STATUS / FLEET
# =============================================================================


def pet_status(health: int, happiness: int) -> str:
    if health <= 0:
        return "Dead"
    if health < 20 or happiness < 20:
        return "Critical"
    if health < 40 or happiness < 40:
        return "Sad"
    if health < 60 or happiness < 60:
        return "Okay"
    if health < 80 or happiness < 80:
        return "Good"
    return "Happy"


@dataclass(frozen=True)
class FleetSummary:
    total_employees: int
    active_today: int
    avg_health: float
    avg_happiness: float

    def to_dict(self) -> dict:
        return {
            "total_employees": self.total_employees,
            "active_today": self.active_today,
            "avg_health": self.avg_health,
            "avg_happiness": self.avg_happiness,
        }


def summarize_fleet(rows: Iterable[dict]) -> FleetSummary:
    """Rows carry `health`, `happiness` and `has_session_today`; means are 0 for an empty fleet."""
    total = 0
    active = 0
    health_sum = 0
    happiness_sum = 0
    for row in rows:
        total += 1
        health_sum += row["health"]
        happiness_sum += row["happiness"]
        if row["has_session_today"]:
            active += 1

    if total == 0:
        return FleetSummary(total_employees=0, active_today=0, avg_health=0.0, avg_happiness=0.0)

    return FleetSummary(
        total_employees=total,
        active_today=active,
        avg_health=health_sum / total,
        avg_happiness=happiness_sum / total,
    )
