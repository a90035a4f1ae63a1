"""Deterministic resolution of faction moves into successor states."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import List

from skirmish.core.types import Role, opposing
from skirmish.domain.actions import (
    Action,
    ApplyEffect,
    AttackGroup,
    AttackSingle,
    CombatMove,
    Flee,
    Move,
    Skip,
)
from skirmish.domain.combat_models import BattleState, ParticipantRef, Preparing, Skill, Stunned


class Outcome(Enum):
    """Classification of a decided encounter."""

    INITIATOR_WIN = "initiator_win"
    DEFENDER_WIN = "defender_win"
    INITIATOR_FLED = "initiator_fled"
    DEFENDER_FLED = "defender_fled"
    DRAW = "draw"


@dataclass(slots=True)
class BattleEvent:
    """Base battle event."""


@dataclass(slots=True)
class AttackResolvedEvent(BattleEvent):
    attacker: ParticipantRef
    attacker_name: str
    target: ParticipantRef
    target_name: str
    weapon_name: str
    damage: int
    target_health: int


@dataclass(slots=True)
class EffectAppliedEvent(BattleEvent):
    source: ParticipantRef
    source_name: str
    target: ParticipantRef
    target_name: str
    skill_name: str
    effect: str
    amount: int
    target_health: int


@dataclass(slots=True)
class PreparationStartedEvent(BattleEvent):
    combatant: ParticipantRef
    combatant_name: str
    skill_name: str
    target: ParticipantRef
    target_name: str
    turns: int


@dataclass(slots=True)
class EffectFizzledEvent(BattleEvent):
    combatant: ParticipantRef
    combatant_name: str
    skill_name: str
    reason: str


@dataclass(slots=True)
class CombatantDefeatedEvent(BattleEvent):
    combatant: ParticipantRef
    combatant_name: str


@dataclass(slots=True)
class TurnSkippedEvent(BattleEvent):
    combatant: ParticipantRef
    combatant_name: str
    reason: str


@dataclass(slots=True)
class FleeDeclaredEvent(BattleEvent):
    role: Role


@dataclass(slots=True)
class FleeResolvedEvent(BattleEvent):
    role: Role


@dataclass(slots=True)
class MoveResolution:
    """Successor state plus the events produced while resolving the move."""

    state: BattleState
    events: List[BattleEvent]


def resolve_move(state: BattleState, move: Move) -> MoveResolution:
    """Apply a legal move to ``state`` without mutating it."""
    events: List[BattleEvent] = []
    if isinstance(move, Flee):
        next_state = _resolve_flee(state, move, events)
    elif isinstance(move, CombatMove):
        next_state = _resolve_combat(state, move, events)
    else:
        raise TypeError(f"Unknown move: {move!r}")
    next_state = replace(next_state, turn=state.turn + 1, to_move=opposing(move.role))
    return MoveResolution(state=next_state, events=events)


def apply_move(state: BattleState, move: Move) -> BattleState:
    return resolve_move(state, move).state


def is_terminal(state: BattleState) -> bool:
    if state.initiator.is_defeated or state.defender.is_defeated or state.escaped:
        return True
    return state.initiator.is_incapacitated and state.defender.is_incapacitated


def outcome(state: BattleState) -> Outcome:
    """Classify a terminal state. Raises ValueError while the battle is undecided."""
    initiator_down = state.initiator.is_defeated
    defender_down = state.defender.is_defeated
    if initiator_down and defender_down:
        return Outcome.DRAW
    if initiator_down:
        return Outcome.DEFENDER_WIN
    if defender_down:
        return Outcome.INITIATOR_WIN
    if len(state.escaped) > 1:
        return Outcome.DRAW
    if state.escaped:
        return Outcome.INITIATOR_FLED if state.escaped[0] == "initiator" else Outcome.DEFENDER_FLED
    if state.initiator.is_incapacitated and state.defender.is_incapacitated:
        return Outcome.DRAW
    raise ValueError("Battle is not decided yet.")


# -----------------------
# Flee
# -----------------------
def _resolve_flee(state: BattleState, move: Flee, events: List[BattleEvent]) -> BattleState:
    events.append(FleeDeclaredEvent(role=move.role))
    pending = state.fleeing
    if pending is not None and pending != move.role:
        # Both sides break off at once.
        events.append(FleeResolvedEvent(role=pending))
        events.append(FleeResolvedEvent(role=move.role))
        return replace(state, fleeing=None, escaped=(pending, move.role))
    return replace(state, fleeing=move.role)


# -----------------------
# Combat
# -----------------------
def _resolve_combat(state: BattleState, move: CombatMove, events: List[BattleEvent]) -> BattleState:
    assigned = dict(move.assignments)
    for ref in state.faction(move.role).refs():
        member = state.member(ref)
        if not member.is_alive:
            continue
        if ref.index in assigned:
            if member.can_act:
                state = _resolve_action(state, ref, assigned[ref.index], events)
        elif isinstance(member.status, Preparing):
            state = _tick_preparation(state, ref, member.status, events)
        elif isinstance(member.status, Stunned):
            state = _tick_stun(state, ref, member.status, events)

    pending = state.fleeing
    if pending == opposing(move.role) and not state.faction(pending).is_defeated:
        events.append(FleeResolvedEvent(role=pending))
        state = replace(state, fleeing=None, escaped=(pending,))
    return state


def _resolve_action(
    state: BattleState, actor_ref: ParticipantRef, action: Action, events: List[BattleEvent]
) -> BattleState:
    actor = state.member(actor_ref)
    if isinstance(action, Skip):
        events.append(TurnSkippedEvent(combatant=actor_ref, combatant_name=actor.name, reason="skip"))
        return state
    if isinstance(action, AttackSingle):
        return _strike(state, actor_ref, action.target, events)
    if isinstance(action, AttackGroup):
        for target in action.targets:
            state = _strike(state, actor_ref, target, events)
        return state
    if isinstance(action, ApplyEffect):
        skill = action.skill
        if skill.resource is not None:
            actor = actor.consume_supply(skill.resource)
            state = state.replace_member(actor_ref, actor)
        if skill.prep_turns > 0:
            status = Preparing(skill=skill, target=action.target, remaining=skill.prep_turns)
            state = state.replace_member(actor_ref, actor.with_status(status))
            events.append(
                PreparationStartedEvent(
                    combatant=actor_ref,
                    combatant_name=actor.name,
                    skill_name=skill.name,
                    target=action.target,
                    target_name=state.member(action.target).name,
                    turns=skill.prep_turns,
                )
            )
            return state
        return _apply_effect(state, actor_ref, action.target, skill, events)
    raise TypeError(f"Unknown action: {action!r}")


def _strike(
    state: BattleState, attacker_ref: ParticipantRef, target_ref: ParticipantRef, events: List[BattleEvent]
) -> BattleState:
    attacker = state.member(attacker_ref)
    target = state.member(target_ref)
    if not target.is_alive:
        return state

    damage = attacker.weapon.damage
    updated = target.take_damage(damage)
    events.append(
        AttackResolvedEvent(
            attacker=attacker_ref,
            attacker_name=attacker.name,
            target=target_ref,
            target_name=target.name,
            weapon_name=attacker.weapon.name,
            damage=damage,
            target_health=updated.health,
        )
    )
    if not updated.is_alive:
        events.append(CombatantDefeatedEvent(combatant=target_ref, combatant_name=target.name))
    return state.replace_member(target_ref, updated)


def _apply_effect(
    state: BattleState,
    source_ref: ParticipantRef,
    target_ref: ParticipantRef,
    skill: Skill,
    events: List[BattleEvent],
) -> BattleState:
    source = state.member(source_ref)
    target = state.member(target_ref)
    if not target.is_alive:
        events.append(
            EffectFizzledEvent(
                combatant=source_ref,
                combatant_name=source.name,
                skill_name=skill.name,
                reason="target_defeated",
            )
        )
        return state

    if skill.effect == "damage":
        updated = target.take_damage(skill.amount)
    elif skill.effect == "heal":
        updated = target.restore_health(skill.amount)
    elif skill.effect == "stun":
        updated = target
        if skill.amount > 0:
            turns = skill.amount
            if isinstance(target.status, Stunned):
                turns = max(turns, target.status.remaining)
            updated = target.with_status(Stunned(remaining=turns))
    else:
        raise ValueError(f"Unknown effect '{skill.effect}'.")

    events.append(
        EffectAppliedEvent(
            source=source_ref,
            source_name=source.name,
            target=target_ref,
            target_name=target.name,
            skill_name=skill.name,
            effect=skill.effect,
            amount=skill.amount,
            target_health=updated.health,
        )
    )
    if not updated.is_alive:
        events.append(CombatantDefeatedEvent(combatant=target_ref, combatant_name=target.name))
    return state.replace_member(target_ref, updated)


def _tick_preparation(
    state: BattleState, ref: ParticipantRef, status: Preparing, events: List[BattleEvent]
) -> BattleState:
    member = state.member(ref)
    remaining = status.remaining - 1
    if remaining > 0:
        return state.replace_member(ref, member.with_status(replace(status, remaining=remaining)))
    state = state.replace_member(ref, member.with_status(None))
    return _apply_effect(state, ref, status.target, status.skill, events)


def _tick_stun(state: BattleState, ref: ParticipantRef, status: Stunned, events: List[BattleEvent]) -> BattleState:
    member = state.member(ref)
    events.append(TurnSkippedEvent(combatant=ref, combatant_name=member.name, reason="stunned"))
    remaining = status.remaining - 1
    return state.replace_member(ref, member.with_status(Stunned(remaining) if remaining > 0 else None))
