from .employees import Employee, PetSpecies
from .pets import AnimalStats
from .workday import WorkSession, Sale, DailyResetMarker

__all__ = [
    'Employee', 'PetSpecies',
    'AnimalStats',
    'WorkSession', 'Sale', 'DailyResetMarker',
]
