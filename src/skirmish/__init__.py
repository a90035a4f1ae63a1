"""Adversarial search over turn-based party-versus-party combat."""

from .domain.actions import (
    Action,
    ApplyEffect,
    AttackGroup,
    AttackSingle,
    CombatMove,
    Flee,
    Move,
    Skip,
)
from .domain.combat_models import (
    BattleState,
    Faction,
    Participant,
    ParticipantRef,
    Preparing,
    Skill,
    Stunned,
    Weapon,
)
from .domain.evaluation import Score, ScoreKind, evaluate
from .domain.move_iterator import MoveIterator, iter_moves
from .domain.resolution import Outcome, apply_move, is_terminal, outcome, resolve_move
from .services import EncounterValidationError, SearchResult, SearchStats, Solver, validate_battle_state

__all__ = [
    "Action",
    "ApplyEffect",
    "AttackGroup",
    "AttackSingle",
    "BattleState",
    "CombatMove",
    "EncounterValidationError",
    "Faction",
    "Flee",
    "Move",
    "MoveIterator",
    "Outcome",
    "Participant",
    "ParticipantRef",
    "Preparing",
    "Score",
    "ScoreKind",
    "SearchResult",
    "SearchStats",
    "Skill",
    "Skip",
    "Solver",
    "Stunned",
    "Weapon",
    "apply_move",
    "evaluate",
    "is_terminal",
    "iter_moves",
    "outcome",
    "resolve_move",
    "validate_battle_state",
]
