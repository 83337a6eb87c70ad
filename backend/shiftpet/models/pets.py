from __future__ import annotations

from ..extensions import db
from ..time_utils import to_iso, to_iso_date


class AnimalStats(db.Model):
    """
    Health and happiness of one employee's pet.

    WHY: The pet is the feedback loop. Sales raise health, goal progress
    sets happiness, idle hours decay health at login, and the morning reset
    restores health to 100 with happiness back at 0.

    INVARIANTS:
    - health and happiness stay within [0, 100] (CHECK constraints back the
      clamps applied by the services)
    - total_revenue_cents never decreases
    - last_fed only moves on a sale or a reset, never on decay
    """
    __tablename__ = "animal_stats"
    __table_args__ = (
        db.CheckConstraint("health >= 0 AND health <= 100", name="ck_animal_stats_health_range"),
        db.CheckConstraint("happiness >= 0 AND happiness <= 100", name="ck_animal_stats_happiness_range"),
        db.CheckConstraint("total_revenue_cents >= 0", name="ck_animal_stats_revenue_nonneg"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id"), nullable=False, unique=True, index=True)

    health = db.Column(db.Integer, nullable=False, default=100)
    happiness = db.Column(db.Integer, nullable=False, default=100)
    total_revenue_cents = db.Column(db.BigInteger, nullable=False, default=0)

    # Business-clock timestamps (see time_utils.business_now)
    last_fed = db.Column(db.DateTime, nullable=False)
    last_health_reset = db.Column(db.Date, nullable=True)

    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    employee = db.relationship("Employee", back_populates="stats")

    def __repr__(self) -> str:
        return f"<AnimalStats employee_id={self.employee_id} health={self.health} happiness={self.happiness}>"

    def to_dict(self) -> dict:
        return {
            "health": self.health,
            "happiness": self.happiness,
            "last_fed": to_iso(self.last_fed),
            "last_health_reset": to_iso_date(self.last_health_reset),
            "total_revenue": self.total_revenue_cents / 100,
        }
