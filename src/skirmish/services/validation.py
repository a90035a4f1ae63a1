"""Construction-time validation of battle states handed to the solver."""
from __future__ import annotations

from skirmish.core.types import ROLES, Role
from skirmish.domain.combat_models import BattleState, Faction, Participant
from skirmish.services.errors import EncounterValidationError

_EFFECTS = ("damage", "heal", "stun")
_TARGET_MODES = ("enemy", "ally", "self")


def validate_battle_state(state: BattleState) -> None:
    """Raise EncounterValidationError when the state cannot be searched."""
    _validate_faction(state.initiator, "initiator")
    _validate_faction(state.defender, "defender")
    if state.to_move not in ROLES:
        raise EncounterValidationError(f"Unknown faction to move: {state.to_move!r}.")
    if state.turn < 0:
        raise EncounterValidationError("Turn counter cannot be negative.")
    for role in state.escaped:
        if role not in ROLES:
            raise EncounterValidationError(f"Unknown escaped faction: {role!r}.")


def _validate_faction(faction: Faction, expected_role: Role) -> None:
    if faction.role != expected_role:
        raise EncounterValidationError(
            f"Faction in the {expected_role} slot is tagged '{faction.role}'."
        )
    if not faction.members:
        raise EncounterValidationError(f"The {expected_role} faction has no members.")
    for position, member in enumerate(faction.members):
        _validate_participant(member, f"{expected_role} member #{position} ({member.name})")
    if faction.is_defeated:
        raise EncounterValidationError(f"The {expected_role} faction has no living members.")


def _validate_participant(member: Participant, context: str) -> None:
    if member.max_health <= 0:
        raise EncounterValidationError(f"{context} must have positive maximum health.")
    if not 0 <= member.health <= member.max_health:
        raise EncounterValidationError(
            f"{context} health {member.health} is outside 0..{member.max_health}."
        )
    if member.weapon.damage < 0:
        raise EncounterValidationError(f"{context} weapon damage cannot be negative.")
    for skill in member.skills:
        if skill.effect not in _EFFECTS:
            raise EncounterValidationError(f"{context} skill '{skill.name}' has unknown effect '{skill.effect}'.")
        if skill.target not in _TARGET_MODES:
            raise EncounterValidationError(f"{context} skill '{skill.name}' has unknown target '{skill.target}'.")
        if skill.amount < 0 or skill.prep_turns < 0:
            raise EncounterValidationError(f"{context} skill '{skill.name}' has negative values.")
    for name, count in member.supplies:
        if count < 0:
            raise EncounterValidationError(f"{context} supply '{name}' cannot be negative.")
