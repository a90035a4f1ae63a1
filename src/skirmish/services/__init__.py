"""Service layer exports."""

from .errors import EncounterValidationError, FactoryError
from .solver import DEFAULT_MAX_DEPTH, SearchResult, SearchStats, Solver, TimelineEntry
from .validation import validate_battle_state

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "EncounterValidationError",
    "FactoryError",
    "SearchResult",
    "SearchStats",
    "Solver",
    "TimelineEntry",
    "validate_battle_state",
]
