"""Scoring of battle states from the initiating faction's point of view."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from skirmish.domain.combat_models import BattleState
from skirmish.domain.resolution import Outcome, is_terminal, outcome

# FLEE_FACTOR < 1 keeps an escaped opponent worth less than a defeated one.
FLEE_FACTOR = 0.1
HEURISTIC_FACTOR = 0.1
# Keeps an unscathed initiator escape below a draw.
FLEE_PENALTY = 0.1


class ScoreKind(Enum):
    WIN = "win"
    DEFEAT = "defeat"
    INITIATOR_FLED = "initiator_fled"
    DEFENDER_FLED = "defender_fled"
    DRAW = "draw"
    HEURISTIC = "heuristic"


_KIND_BY_OUTCOME = {
    Outcome.INITIATOR_WIN: ScoreKind.WIN,
    Outcome.DEFENDER_WIN: ScoreKind.DEFEAT,
    Outcome.INITIATOR_FLED: ScoreKind.INITIATOR_FLED,
    Outcome.DEFENDER_FLED: ScoreKind.DEFENDER_FLED,
    Outcome.DRAW: ScoreKind.DRAW,
}


@dataclass(frozen=True, slots=True)
class Score:
    """A value in the initiator's polarity: higher is better for the initiator."""

    value: float
    kind: ScoreKind

    def beats(self, other: "Score", *, maximizing: bool) -> bool:
        """Strict improvement only, so the first-discovered score wins ties."""
        if maximizing:
            return self.value > other.value
        return self.value < other.value

    def __str__(self) -> str:
        return f"{self.kind.value}({self.value:g})"


def evaluate(state: BattleState) -> Score:
    """Score a terminal state, or a state where the search horizon was reached."""
    if is_terminal(state):
        return score_outcome(state, outcome(state))
    return Score(HEURISTIC_FACTOR * state.initiator.total_health(), ScoreKind.HEURISTIC)


def score_outcome(state: BattleState, result: Outcome) -> Score:
    kind = _KIND_BY_OUTCOME[result]
    health = float(state.initiator.total_health())
    # Includes overkill.
    damage = float(state.initiator.total_damage_taken())

    if kind is ScoreKind.WIN:
        return Score(health, kind)
    if kind is ScoreKind.DEFENDER_FLED:
        return Score(FLEE_FACTOR * health, kind)
    if kind is ScoreKind.DEFEAT:
        return Score(-damage, kind)
    if kind is ScoreKind.INITIATOR_FLED:
        return Score(-FLEE_FACTOR * damage - FLEE_PENALTY, kind)
    return Score(0.0, kind)
