"""
Daily reset tests.

Verifies:
- The automatic reset runs once per day at or after the cutoff hour
- The manual reset runs regardless of the hour or the marker
- The reset is idempotent
- A failed reset rolls back completely and login still succeeds
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from shiftpet.models import AnimalStats, DailyResetMarker, Sale, WorkSession
from shiftpet.services import auth_service, feeding_service, reset_service, workday_service
from shiftpet.services.pet_rules import SaleInput


DAY_ONE = datetime(2026, 3, 10, 9, 0)
DAY_TWO = datetime(2026, 3, 11, 9, 0)


def busy_day(db_session, employee, now):
    """Login, shift and one sale for `employee` on `now`'s date."""
    auth_service.login(employee.username, now=now)
    workday_service.start_session(employee.id, Decimal("8"), now=now)
    feeding_service.record_sale(
        user_id=employee.id,
        sale=SaleInput(revenue_cents=2500, has_credit_card=True),
        now=now.replace(hour=now.hour + 1),
    )
    stats = db_session.query(AnimalStats).filter_by(employee_id=employee.id).one()
    stats.health = 35
    db_session.commit()


class TestAutomaticReset:

    def test_not_before_cutoff(self, db_session, employee):
        assert reset_service.maybe_auto_reset(now=datetime(2026, 3, 10, 7, 59)) is False
        assert db_session.get(DailyResetMarker, DailyResetMarker.SINGLETON_ID) is None

    def test_once_per_day(self, db_session, employee):
        assert reset_service.maybe_auto_reset(now=DAY_ONE) is True
        assert reset_service.maybe_auto_reset(now=DAY_ONE.replace(hour=15)) is False
        assert reset_service.maybe_auto_reset(now=DAY_TWO) is True

        marker = db_session.get(DailyResetMarker, DailyResetMarker.SINGLETON_ID)
        assert marker.reset_date == date(2026, 3, 11)
        assert marker.reset_at == DAY_TWO

    def test_login_on_new_day_resets_everyone(self, db_session, employee, second_employee):
        busy_day(db_session, employee, DAY_ONE)
        busy_day(db_session, second_employee, DAY_ONE)
        workday_service.start_session(employee.id, Decimal("4"), now=DAY_TWO.replace(hour=7))

        result = auth_service.login("carol", now=DAY_TWO)

        assert result["reset_performed"] is True
        for emp in (employee, second_employee):
            stats = db_session.query(AnimalStats).filter_by(employee_id=emp.id).one()
            assert stats.health == 100
            assert stats.happiness == 0
            assert stats.last_fed == DAY_TWO
            assert stats.last_health_reset == DAY_TWO.date()
            # Lifetime revenue survives the reset
            assert stats.total_revenue_cents == 2500

        # Today's early session is cleared; yesterday's history stays
        assert db_session.query(WorkSession).filter_by(session_date=DAY_TWO.date()).count() == 0
        assert db_session.query(WorkSession).filter_by(session_date=DAY_ONE.date()).count() == 2
        assert db_session.query(Sale).filter_by(session_date=DAY_ONE.date()).count() == 2


class TestManualReset:

    def test_runs_before_cutoff_and_stamps_marker(self, db_session, employee):
        busy_day(db_session, employee, DAY_ONE)

        reset_date = reset_service.run_daily_reset(now=DAY_ONE.replace(hour=12))

        assert reset_date == DAY_ONE.date()
        stats = db_session.query(AnimalStats).filter_by(employee_id=employee.id).one()
        assert stats.health == 100
        assert stats.happiness == 0
        assert db_session.query(WorkSession).count() == 0
        assert db_session.query(Sale).count() == 0
        assert reset_service.get_marker()["reset_date"] == "2026-03-10"

    def test_idempotent(self, db_session, employee):
        busy_day(db_session, employee, DAY_ONE)
        now = DAY_ONE.replace(hour=12)

        reset_service.run_daily_reset(now=now)
        first = db_session.query(AnimalStats).filter_by(employee_id=employee.id).one().to_dict()
        reset_service.run_daily_reset(now=now)
        second = db_session.query(AnimalStats).filter_by(employee_id=employee.id).one().to_dict()

        assert first == second
        assert db_session.query(DailyResetMarker).count() == 1


class TestResetFailure:

    def test_failed_reset_rolls_back_and_login_continues(self, db_session, employee, monkeypatch):
        busy_day(db_session, employee, DAY_ONE)
        original_apply = reset_service.apply_reset

        def failing_apply(now):
            original_apply(now)
            raise OperationalError("DELETE FROM sales", {}, Exception("disk I/O error"))

        monkeypatch.setattr(reset_service, "apply_reset", failing_apply)

        result = auth_service.login("bob", now=DAY_TWO)

        assert result["reset_performed"] is False
        # Pre-reset data: fed yesterday, so no decay applies
        assert result["user"]["health"] == 35

        marker = db_session.get(DailyResetMarker, DailyResetMarker.SINGLETON_ID)
        assert marker.reset_date == DAY_ONE.date()
        assert db_session.query(WorkSession).count() == 1
        assert db_session.query(Sale).count() == 1

    def test_failed_reset_is_retried_on_next_login(self, db_session, employee, monkeypatch):
        busy_day(db_session, employee, DAY_ONE)
        original_apply = reset_service.apply_reset

        def failing_apply(now):
            raise OperationalError("UPDATE animal_stats", {}, Exception("database is locked"))

        monkeypatch.setattr(reset_service, "apply_reset", failing_apply)
        assert auth_service.login("bob", now=DAY_TWO)["reset_performed"] is False

        monkeypatch.setattr(reset_service, "apply_reset", original_apply)
        assert auth_service.login("bob", now=DAY_TWO.replace(hour=10))["reset_performed"] is True
