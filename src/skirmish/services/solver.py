"""Minimax search with alpha-beta pruning over alternating factions."""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from skirmish.core.types import Role
from skirmish.domain.actions import CombatMove, Move
from skirmish.domain.combat_models import BattleState
from skirmish.domain.evaluation import Score, evaluate
from skirmish.domain.move_iterator import MoveIterator
from skirmish.domain.resolution import BattleEvent, Outcome, apply_move, is_terminal, outcome, resolve_move
from skirmish.services.validation import validate_battle_state

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 8


@dataclass(slots=True)
class SearchStats:
    """Counters collected during one search."""

    nodes: int = 0
    evaluations: int = 0
    prunes: int = 0
    cutoffs: int = 0  # leaves scored because the depth limit was hit
    depth_reached: int = 0
    elapsed: float = 0.0


@dataclass(slots=True)
class TimelineEntry:
    """One ply of the chosen line of play."""

    turn: int
    role: Role
    depth: int  # ply of the search at which this move was chosen
    move: Move
    events: List[BattleEvent]
    state: BattleState


@dataclass(slots=True)
class SearchResult:
    """Best line found for the initiating faction, with its score and counters."""

    outcome: Outcome | None
    score: Score
    timeline: List[TimelineEntry] = field(default_factory=list)
    final_state: BattleState | None = None
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def moves(self) -> List[Move]:
        return [entry.move for entry in self.timeline]


class Solver:
    """Depth-limited minimax solver.

    The initiator always maximizes and the defender always minimizes, both
    over scores in the initiator's polarity. Alpha and beta travel down the
    recursion as arguments, so separate ``solve`` calls never share bounds.
    """

    def __init__(self, *, max_depth: int = DEFAULT_MAX_DEPTH, prune: bool = True) -> None:
        self.max_depth = max(1, max_depth)
        self.prune = prune

    def solve(self, state: BattleState) -> SearchResult:
        """Search from ``state`` and return the best line for the initiator."""
        validate_battle_state(state)
        stats = SearchStats()
        logger.info(
            "Searching turn %d (%s to move), depth=%d, prune=%s",
            state.turn,
            state.to_move,
            self.max_depth,
            self.prune,
        )

        started = time.perf_counter()
        score, line = self._search(state, 0, -math.inf, math.inf, stats)
        stats.elapsed = time.perf_counter() - started

        timeline, final_state = self._replay(state, line)
        result_outcome = outcome(final_state) if is_terminal(final_state) else None
        logger.info(
            "Search finished: %s over %d turns; nodes=%d evaluations=%d prunes=%d depth=%d in %.3fs",
            score,
            len(timeline),
            stats.nodes,
            stats.evaluations,
            stats.prunes,
            stats.depth_reached,
            stats.elapsed,
        )
        return SearchResult(
            outcome=result_outcome,
            score=score,
            timeline=timeline,
            final_state=final_state,
            stats=stats,
        )

    def deepen(self, state: BattleState) -> SearchResult:
        """Iterative deepening: re-solve with growing depth limits.

        Stops early once a search never touched the depth limit, since deeper
        searches cannot change that result.
        """
        result: SearchResult | None = None
        for depth in range(1, self.max_depth + 1):
            result = Solver(max_depth=depth, prune=self.prune).solve(state)
            if result.stats.cutoffs == 0:
                break
        assert result is not None
        return result

    # -----------------------
    # Search
    # -----------------------
    def _search(
        self,
        state: BattleState,
        ply: int,
        alpha: float,
        beta: float,
        stats: SearchStats,
    ) -> Tuple[Score, Tuple[Move, ...]]:
        stats.nodes += 1
        stats.depth_reached = max(stats.depth_reached, ply)

        if is_terminal(state):
            stats.evaluations += 1
            return evaluate(state), ()
        if ply >= self.max_depth:
            stats.evaluations += 1
            stats.cutoffs += 1
            return evaluate(state), ()

        maximizing = state.to_move == "initiator"
        best: Score | None = None
        best_line: Tuple[Move, ...] = ()
        for move in self._candidate_moves(state):
            score, line = self._search(apply_move(state, move), ply + 1, alpha, beta, stats)
            if best is None or score.beats(best, maximizing=maximizing):
                best = score
                best_line = (move,) + line

            if not self.prune:
                continue
            if maximizing:
                alpha = max(alpha, score.value)
            else:
                beta = min(beta, score.value)
            if alpha >= beta:
                stats.prunes += 1
                break

        assert best is not None
        return best, best_line

    def _candidate_moves(self, state: BattleState) -> Iterator[Move]:
        produced = False
        for move in MoveIterator(state):
            produced = True
            yield move
        if not produced:
            logger.debug(
                "No legal moves for %s on turn %d; playing an implicit skip turn",
                state.to_move,
                state.turn,
            )
            yield CombatMove(state.to_move)

    @staticmethod
    def _replay(state: BattleState, line: Tuple[Move, ...]) -> Tuple[List[TimelineEntry], BattleState]:
        timeline: List[TimelineEntry] = []
        for depth, move in enumerate(line, start=1):
            resolution = resolve_move(state, move)
            timeline.append(
                TimelineEntry(
                    turn=state.turn + 1,
                    role=move.role,
                    depth=depth,
                    move=move,
                    events=resolution.events,
                    state=resolution.state,
                )
            )
            state = resolution.state
        return timeline, state
