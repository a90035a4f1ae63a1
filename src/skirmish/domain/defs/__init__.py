"""Domain definition exports."""

from .encounter_def import EncounterDef, FactionDef, ParticipantDef, SkillDef, WeaponDef

__all__ = [
    "EncounterDef",
    "FactionDef",
    "ParticipantDef",
    "SkillDef",
    "WeaponDef",
]
