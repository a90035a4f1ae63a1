"""Repository exports."""

from .encounters_repo import EncountersRepository

__all__ = ["EncountersRepository"]
