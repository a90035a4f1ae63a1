"""Factory helpers for building battle states."""

from .encounter_factory import create_battle_state, create_encounter_state, generate_random_encounter
from .name_factory import make_participant_name, make_unique_names

__all__ = [
    "create_battle_state",
    "create_encounter_state",
    "generate_random_encounter",
    "make_participant_name",
    "make_unique_names",
]
