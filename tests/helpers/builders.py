from __future__ import annotations

from typing import Sequence, Tuple

from skirmish.core.types import Role
from skirmish.domain.combat_models import BattleState, Faction, Participant, Skill, Status, Weapon


def make_member(
    name: str,
    health: int,
    damage: int,
    *,
    max_health: int | None = None,
    sweeping: bool = False,
    skills: Tuple[Skill, ...] = (),
    supplies: Tuple[Tuple[str, int], ...] = (),
    status: Status | None = None,
) -> Participant:
    return Participant(
        name=name,
        health=health,
        max_health=max_health if max_health is not None else max(health, 1),
        weapon=Weapon(name=f"{name}'s weapon", damage=damage, sweeping=sweeping),
        skills=skills,
        supplies=supplies,
        status=status,
    )


def make_state(
    initiator: Sequence[Participant],
    defender: Sequence[Participant],
    *,
    initiator_flee: bool = False,
    defender_flee: bool = False,
    to_move: Role = "initiator",
) -> BattleState:
    return BattleState(
        initiator=Faction(role="initiator", members=tuple(initiator), flee_allowed=initiator_flee),
        defender=Faction(role="defender", members=tuple(defender), flee_allowed=defender_flee),
        to_move=to_move,
    )


def ford_state(*, defender_flee: bool = False) -> BattleState:
    """One 20/10 brawler against a 15/5 and a 10/20 defender."""
    return make_state(
        [make_member("Hero", 20, 10)],
        [make_member("Stickler", 15, 5), make_member("Bruiser", 10, 20)],
        defender_flee=defender_flee,
    )
