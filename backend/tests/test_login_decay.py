"""
Login tests.

Verifies:
- First login creates the pet at full health and happiness
- Idle-time decay is applied against the stored last_fed
- A fresh day without a declared shift does not decay
- Unknown usernames are rejected
"""

from datetime import datetime
from decimal import Decimal

import pytest

from shiftpet.errors import NotFoundError
from shiftpet.models import AnimalStats
from shiftpet.services import auth_service, workday_service


MORNING = datetime(2026, 3, 10, 9, 0)


def stats_for(db_session, employee):
    return db_session.query(AnimalStats).filter_by(employee_id=employee.id).one()


class TestLogin:

    def test_first_login_creates_pet(self, db_session, employee):
        result = auth_service.login("bob", now=MORNING)

        user = result["user"]
        assert user["id"] == employee.id
        assert user["name"] == "Bob Employee"
        assert user["animal_choice"] == "cat"
        assert user["is_admin"] is False
        assert user["health"] == 100
        assert user["happiness"] == 100
        assert user["total_revenue"] == 0
        assert user["last_health_reset"] == "2026-03-10"
        assert user["status"] == "Happy"

    def test_unknown_username(self, db_session, employee):
        with pytest.raises(NotFoundError, match="User not found"):
            auth_service.login("nobody", now=MORNING)

    def test_first_login_after_cutoff_reports_reset(self, db_session, employee):
        assert auth_service.login("bob", now=MORNING)["reset_performed"] is True
        assert auth_service.login("bob", now=MORNING.replace(hour=10))["reset_performed"] is False


class TestDecay:

    def test_three_idle_hours_with_shift(self, db_session, employee):
        auth_service.login("bob", now=MORNING)
        workday_service.start_session(employee.id, Decimal("8"), now=MORNING)

        stats = stats_for(db_session, employee)
        stats.health = 80
        db_session.commit()

        result = auth_service.login("bob", now=MORNING.replace(hour=12))
        assert result["user"]["health"] == 65
        assert stats_for(db_session, employee).last_fed == MORNING

    def test_repeated_logins_decay_toward_zero(self, db_session, employee):
        auth_service.login("bob", now=MORNING)
        workday_service.start_session(employee.id, Decimal("8"), now=MORNING)

        assert auth_service.login("bob", now=MORNING.replace(hour=12))["user"]["health"] == 85
        assert auth_service.login("bob", now=MORNING.replace(hour=12))["user"]["health"] == 70
        assert auth_service.login("bob", now=MORNING.replace(hour=23))["user"]["health"] == 0

    def test_new_day_without_shift_rests(self, db_session, employee):
        auth_service.login("bob", now=MORNING)

        # Next day, before the automatic reset and with no shift declared
        early = datetime(2026, 3, 11, 7, 0)
        stats = stats_for(db_session, employee)
        stats.last_fed = datetime(2026, 3, 11, 1, 0)
        stats.health = 90
        db_session.commit()

        result = auth_service.login("bob", now=early)
        assert result["reset_performed"] is False
        assert result["user"]["health"] == 90
        assert result["user"]["last_health_reset"] == "2026-03-11"

    def test_last_fed_on_prior_day_does_not_decay(self, db_session, employee):
        auth_service.login("bob", now=MORNING)
        stats = stats_for(db_session, employee)
        stats.health = 55
        db_session.commit()

        result = auth_service.login("bob", now=datetime(2026, 3, 11, 7, 30))
        assert result["user"]["health"] == 55
