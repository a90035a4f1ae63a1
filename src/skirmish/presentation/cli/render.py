"""Shared CLI rendering helpers."""
from __future__ import annotations

import os

from skirmish.domain.combat_models import BattleState, Participant
from skirmish.domain.resolution import (
    AttackResolvedEvent,
    BattleEvent,
    CombatantDefeatedEvent,
    EffectAppliedEvent,
    EffectFizzledEvent,
    FleeDeclaredEvent,
    FleeResolvedEvent,
    Outcome,
    PreparationStartedEvent,
    TurnSkippedEvent,
)
from skirmish.services.solver import SearchResult, SearchStats

_SIDE_LABELS = {"initiator": "attacking side", "defender": "defending side"}

_VERDICTS = {
    Outcome.INITIATOR_WIN: "The initiating party wins",
    Outcome.DEFENDER_WIN: "The initiating party is defeated",
    Outcome.INITIATOR_FLED: "The initiating party retreats",
    Outcome.DEFENDER_FLED: "The defending party runs away",
    Outcome.DRAW: "Nobody comes out ahead",
}


def debug_enabled() -> bool:
    """Return True only when SKIRMISH_DEBUG is explicitly set to '1'."""
    return os.getenv("SKIRMISH_DEBUG") == "1"


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def format_participant(member: Participant) -> str:
    weapon = member.weapon
    line = f"- {member.name}, with {member.health}/{member.max_health} health and {weapon.name} ({weapon.damage} damage"
    line += ", sweeping)" if weapon.sweeping else ")"
    if member.skills:
        line += f"; skills: {', '.join(skill.name for skill in member.skills)}"
    if member.supplies:
        line += f"; supplies: {', '.join(f'{count} {name}' for name, count in member.supplies)}"
    return line


def render_roster(state: BattleState) -> None:
    for role in ("initiator", "defender"):
        faction = state.faction(role)
        suffix = " (may flee)" if faction.flee_allowed else ""
        print(f"\nOn the {_SIDE_LABELS[role]}{suffix}:")
        for member in faction.members:
            print(format_participant(member))


def format_event(event: BattleEvent) -> str:
    if isinstance(event, AttackResolvedEvent):
        return (
            f"{event.attacker_name} whacks {event.target_name} with {event.weapon_name}, "
            f"dealing {event.damage} damage (health now {event.target_health})"
        )
    if isinstance(event, EffectAppliedEvent):
        if event.effect == "heal":
            detail = f"restoring health to {event.target_health}"
        elif event.effect == "stun":
            detail = f"stunning them for {event.amount} turn(s)"
        else:
            detail = f"dealing {event.amount} damage (health now {event.target_health})"
        return f"{event.source_name} uses {event.skill_name} on {event.target_name}, {detail}"
    if isinstance(event, PreparationStartedEvent):
        return f"{event.combatant_name} starts preparing {event.skill_name} on {event.target_name} ({event.turns} turn(s))"
    if isinstance(event, EffectFizzledEvent):
        return f"{event.combatant_name}'s {event.skill_name} fizzles ({event.reason.replace('_', ' ')})"
    if isinstance(event, CombatantDefeatedEvent):
        return f"  => {event.combatant_name} has given up on being alive"
    if isinstance(event, TurnSkippedEvent):
        if event.reason == "stunned":
            return f"{event.combatant_name} is stunned and cannot act"
        return f"{event.combatant_name} waits"
    if isinstance(event, FleeDeclaredEvent):
        return f"The {_SIDE_LABELS[event.role]} turns to flee"
    if isinstance(event, FleeResolvedEvent):
        return f"  => The {_SIDE_LABELS[event.role]} escapes"
    return str(event)


def format_verdict(result: SearchResult) -> str:
    if result.outcome is None:
        return f"TL;DR: Anything could happen (estimated score {result.score.value:g})."
    return f"TL;DR: {_VERDICTS[result.outcome]} with a score of {result.score.value:g}."


def format_stats(stats: SearchStats) -> str:
    return (
        f"Explored {stats.nodes} states ({stats.evaluations} evaluated, {stats.prunes} pruned), "
        f"depth {stats.depth_reached}, in {stats.elapsed:.3f}s"
    )


def render_timeline(result: SearchResult) -> None:
    show_depth = debug_enabled()
    for entry in result.timeline:
        side = _SIDE_LABELS[entry.role]
        if show_depth:
            print(f"\nTurn {entry.turn} ({side}, discovered at depth {entry.depth}):")
        else:
            print(f"\nTurn {entry.turn} ({side}):")
        if not entry.events:
            print("  Nothing happens.")
        for event in entry.events:
            print(f"  {format_event(event)}")


def render_result(initial: BattleState, result: SearchResult) -> None:
    print(format_verdict(result))
    render_roster(initial)
    render_timeline(result)
    print(f"\n{format_stats(result.stats)}")
    if debug_enabled():
        print(f"[debug] score {result.score}; {result.stats.cutoffs} leaves hit the depth limit")
