"""Action catalog: per-participant actions, faction moves, and legality rules."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Tuple, Union

from skirmish.core.types import Role, opposing
from skirmish.domain.combat_models import BattleState, Participant, ParticipantRef, Skill

TargetArity = Literal["none", "single", "group"]


@dataclass(frozen=True, slots=True)
class AttackSingle:
    """Strike one living enemy with the equipped weapon."""

    target: ParticipantRef


@dataclass(frozen=True, slots=True)
class AttackGroup:
    """Strike every listed enemy with the full weapon damage."""

    targets: Tuple[ParticipantRef, ...]


@dataclass(frozen=True, slots=True)
class ApplyEffect:
    """Use a skill on a target; delayed skills enter a preparation status first."""

    target: ParticipantRef
    skill: Skill


@dataclass(frozen=True, slots=True)
class Skip:
    """Do nothing this ply."""


Action = Union[AttackSingle, AttackGroup, ApplyEffect, Skip]


@dataclass(frozen=True, slots=True)
class CombatMove:
    """One action per able participant of the moving faction, in faction order.

    An empty move is a skip turn: nobody acts but statuses still advance.
    """

    role: Role
    assignments: Tuple[Tuple[int, Action], ...] = ()


@dataclass(frozen=True, slots=True)
class Flee:
    """The whole faction attempts to leave the encounter."""

    role: Role


Move = Union[CombatMove, Flee]


def target_arity(action: Action) -> TargetArity:
    if isinstance(action, (AttackSingle, ApplyEffect)):
        return "single"
    if isinstance(action, AttackGroup):
        return "group"
    if isinstance(action, Skip):
        return "none"
    raise TypeError(f"Unknown action: {action!r}")


def has_resource(actor: Participant, skill: Skill) -> bool:
    return skill.resource is None or actor.supply_count(skill.resource) > 0


def skill_targets(state: BattleState, actor_ref: ParticipantRef, skill: Skill) -> Tuple[ParticipantRef, ...]:
    """Return the living participants a skill may currently be aimed at."""
    if skill.target == "self":
        return (actor_ref,)
    if skill.target == "ally":
        return state.faction(actor_ref.role).living_refs()
    if skill.target == "enemy":
        return state.faction(opposing(actor_ref.role)).living_refs()
    raise ValueError(f"Unknown target mode '{skill.target}'.")


def legal_actions(state: BattleState, actor_ref: ParticipantRef) -> List[Action]:
    """List the actor's options: single attacks, group attack, skills, then Skip."""
    actor = state.member(actor_ref)
    if not actor.can_act:
        return []

    enemies = state.faction(opposing(actor_ref.role)).living_refs()
    actions: List[Action] = [AttackSingle(target) for target in enemies]
    if actor.weapon.sweeping and len(enemies) > 1:
        actions.append(AttackGroup(enemies))
    for skill in actor.skills:
        if not has_resource(actor, skill):
            continue
        actions.extend(ApplyEffect(target, skill) for target in skill_targets(state, actor_ref, skill))
    actions.append(Skip())
    return actions


def is_legal_action(state: BattleState, actor_ref: ParticipantRef, action: Action) -> bool:
    actor = state.member(actor_ref)
    if not actor.can_act:
        return False

    enemy_role = opposing(actor_ref.role)
    if isinstance(action, Skip):
        return True
    if isinstance(action, AttackSingle):
        return action.target.role == enemy_role and _is_living(state, action.target)
    if isinstance(action, AttackGroup):
        return (
            actor.weapon.sweeping
            and len(action.targets) > 1
            and len(set(action.targets)) == len(action.targets)
            and all(target.role == enemy_role and _is_living(state, target) for target in action.targets)
        )
    if isinstance(action, ApplyEffect):
        return (
            action.skill in actor.skills
            and has_resource(actor, action.skill)
            and action.target in skill_targets(state, actor_ref, action.skill)
        )
    raise TypeError(f"Unknown action: {action!r}")


def can_flee(state: BattleState, role: Role) -> bool:
    """Flee is legal whenever the faction is flagged and someone is still able to run."""
    faction = state.faction(role)
    if not faction.flee_allowed or state.fleeing == role:
        return False
    return any(member.is_alive and not member.is_incapacitated for member in faction.members)


def is_legal_move(state: BattleState, move: Move) -> bool:
    if move.role != state.to_move:
        return False
    if isinstance(move, Flee):
        return can_flee(state, move.role)
    if isinstance(move, CombatMove):
        faction = state.faction(move.role)
        able = [index for index, member in enumerate(faction.members) if member.can_act]
        if [index for index, _ in move.assignments] != able:
            return False
        return all(
            is_legal_action(state, ParticipantRef(move.role, index), action)
            for index, action in move.assignments
        )
    raise TypeError(f"Unknown move: {move!r}")


def _is_living(state: BattleState, ref: ParticipantRef) -> bool:
    members = state.faction(ref.role).members
    return 0 <= ref.index < len(members) and members[ref.index].is_alive
