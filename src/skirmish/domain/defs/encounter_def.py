"""Encounter definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class WeaponDef:
    name: str
    damage: int
    sweeping: bool = False


@dataclass(slots=True)
class SkillDef:
    """Static description of a skill; see ``Skill`` for the runtime form."""

    name: str
    effect: str
    amount: int
    target: str
    prep_turns: int = 0
    resource: str | None = None


@dataclass(slots=True)
class ParticipantDef:
    """Roster entry. A missing name is generated when the encounter is built."""

    name: str | None
    health: int
    max_health: int
    weapon: WeaponDef
    skills: Tuple[SkillDef, ...] = ()
    supplies: Tuple[Tuple[str, int], ...] = ()


@dataclass(slots=True)
class FactionDef:
    members: Tuple[ParticipantDef, ...]
    flee_allowed: bool = False


@dataclass(slots=True)
class EncounterDef:
    """A named pairing of an initiating and a defending faction."""

    id: str
    name: str
    initiator: FactionDef
    defender: FactionDef
    description: str = ""
