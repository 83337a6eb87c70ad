from __future__ import annotations

import enum

from ..extensions import db
from ..time_utils import to_iso


class PetSpecies(str, enum.Enum):
    CAT = "cat"
    DOG = "dog"
    BIRD = "bird"
    RABBIT = "rabbit"
    HAMSTER = "hamster"
    FISH = "fish"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class Employee(db.Model):
    """
    A store employee who owns exactly one virtual pet.

    Provisioned by HR (see `flask employees create`). Only `animal_choice`
    is editable by the employee; `is_admin` grants the fleet overview, the
    manual daily reset and counter corrections.
    """
    __tablename__ = "employees"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), nullable=False, unique=True, index=True)
    name = db.Column(db.String(120), nullable=False)
    is_admin = db.Column(db.Boolean, nullable=False, default=False)
    animal_choice = db.Column(
        db.Enum(PetSpecies, values_callable=lambda e: [m.value for m in e], native_enum=False, length=16),
        nullable=False,
        default=PetSpecies.CAT,
    )
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    stats = db.relationship("AnimalStats", back_populates="employee", uselist=False, lazy=True)

    def __repr__(self) -> str:
        return f"<Employee id={self.id} username={self.username!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "is_admin": bool(self.is_admin),
            "animal_choice": self.animal_choice.value if self.animal_choice else None,
            "created_at": to_iso(self.created_at),
        }
