from __future__ import annotations

from ..extensions import db
from ..time_utils import to_iso, to_iso_date


class WorkSession(db.Model):
    """
    One employee's shift for one calendar day.

    WHY: Goals scale with declared hours. Counters and revenue accumulate as
    sales are recorded; goal_met follows the two counters only.

    DESIGN:
    - Exactly one row per (employee, session_date); re-declaring hours
      updates the row in place
    - Counters are incremented in SQL (col = col + 1), never read-modify-write
    """
    __tablename__ = "work_sessions"
    __table_args__ = (
        db.UniqueConstraint("employee_id", "session_date", name="uq_work_sessions_employee_date"),
        db.CheckConstraint("work_hours > 0", name="ck_work_sessions_hours_positive"),
        db.CheckConstraint("current_paid_memberships >= 0", name="ck_work_sessions_pm_nonneg"),
        db.CheckConstraint("current_credit_cards >= 0", name="ck_work_sessions_cc_nonneg"),
        db.Index("ix_work_sessions_date", "session_date"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id"), nullable=False, index=True)
    session_date = db.Column(db.Date, nullable=False)

    work_hours = db.Column(db.Numeric(5, 2), nullable=False)

    # Derived goals (see pet_rules.compute_goals)
    goal_amount_cents = db.Column(db.Integer, nullable=False)
    goal_paid_memberships = db.Column(db.Integer, nullable=False)
    goal_credit_cards = db.Column(db.Integer, nullable=False)

    # Progress
    current_paid_memberships = db.Column(db.Integer, nullable=False, default=0)
    current_credit_cards = db.Column(db.Integer, nullable=False, default=0)
    revenue_cents = db.Column(db.BigInteger, nullable=False, default=0)
    goal_met = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    employee = db.relationship("Employee", backref=db.backref("work_sessions", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.employee_id,
            "session_date": to_iso_date(self.session_date),
            "work_hours": float(self.work_hours),
            "goal_amount": self.goal_amount_cents / 100,
            "goal_paid_memberships": self.goal_paid_memberships,
            "goal_credit_cards": self.goal_credit_cards,
            "current_paid_memberships": self.current_paid_memberships,
            "current_credit_cards": self.current_credit_cards,
            "revenue": self.revenue_cents / 100,
            "goal_met": bool(self.goal_met),
            "created_at": to_iso(self.created_at),
        }


class Sale(db.Model):
    """
    Append-only ledger of recorded sales.

    overridden_high_value marks that the submitter confirmed an unusually
    large amount. It is audit metadata and feeds no computation.
    """
    __tablename__ = "sales"
    __table_args__ = (
        db.CheckConstraint("revenue_cents > 0", name="ck_sales_revenue_positive"),
        db.Index("ix_sales_employee_date", "employee_id", "session_date"),
        db.Index("ix_sales_date", "session_date"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id"), nullable=False)
    session_date = db.Column(db.Date, nullable=False)

    revenue_cents = db.Column(db.Integer, nullable=False)
    has_credit_card = db.Column(db.Boolean, nullable=False, default=False)
    has_paid_membership = db.Column(db.Boolean, nullable=False, default=False)
    has_warranty = db.Column(db.Boolean, nullable=False, default=False)
    overridden_high_value = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, nullable=False)


class DailyResetMarker(db.Model):
    """
    Single-row record of the last automatic morning reset.

    Read with SELECT ... FOR UPDATE in the same transaction that performs
    the reset. Concurrent logins may still both reset; the reset itself is
    idempotent so the duplicate is only redundant work.
    """
    __tablename__ = "daily_reset_markers"

    SINGLETON_ID = 1

    id = db.Column(db.Integer, primary_key=True)
    reset_date = db.Column(db.Date, nullable=True)
    reset_at = db.Column(db.DateTime, nullable=True)

    def to_dict(self) -> dict:
        return {
            "reset_date": to_iso_date(self.reset_date),
            "reset_at": to_iso(self.reset_at),
        }
