from __future__ import annotations

import logging

import pytest

from skirmish.core.rng import RNG
from skirmish.domain.actions import AttackSingle, CombatMove, Flee
from skirmish.domain.combat_models import ParticipantRef, Stunned
from skirmish.domain.evaluation import Score, ScoreKind, evaluate
from skirmish.domain.resolution import CombatantDefeatedEvent, FleeResolvedEvent, Outcome, TurnSkippedEvent
from skirmish.services.errors import EncounterValidationError
from skirmish.services.factories import generate_random_encounter
from skirmish.services.solver import Solver
from tests.helpers.builders import ford_state, make_member, make_state

BRUISER = ParticipantRef("defender", 1)


@pytest.mark.parametrize("depth", [5, 8])
def test_ford_ambush_is_won_by_taking_out_the_heavy_hitter_first(depth: int) -> None:
    """Killing the 20-damage defender first is the only line that keeps the hero alive."""
    result = Solver(max_depth=depth).solve(ford_state())

    assert result.outcome is Outcome.INITIATOR_WIN
    assert result.score.kind is ScoreKind.WIN
    assert result.score.value == pytest.approx(10)
    assert len(result.timeline) == 5
    assert result.moves[0] == CombatMove("initiator", ((0, AttackSingle(BRUISER)),))

    first = result.timeline[0]
    assert first.turn == 1
    assert first.role == "initiator"
    assert any(
        isinstance(event, CombatantDefeatedEvent) and event.combatant == BRUISER for event in first.events
    )
    assert result.final_state is not None
    assert result.final_state.turn == 5
    assert [entry.depth for entry in result.timeline] == [1, 2, 3, 4, 5]


def test_ford_ambush_defenders_run_once_the_heavy_hitter_falls() -> None:
    """With flee allowed the survivors escape after one parting blow instead of dying."""
    result = Solver(max_depth=8).solve(ford_state(defender_flee=True))

    assert result.outcome is Outcome.DEFENDER_FLED
    assert result.score.kind is ScoreKind.DEFENDER_FLED
    assert result.score.value == pytest.approx(2.0)
    assert len(result.timeline) == 3
    assert result.moves[0] == CombatMove("initiator", ((0, AttackSingle(BRUISER)),))
    assert result.moves[1] == Flee("defender")
    assert any(isinstance(event, FleeResolvedEvent) for event in result.timeline[2].events)


@pytest.mark.parametrize("defender_flee", [False, True])
def test_pruning_matches_exhaustive_search_on_fixed_encounter(defender_flee: bool) -> None:
    """Alpha-beta returns the same root value and first move as plain minimax."""
    state = ford_state(defender_flee=defender_flee)
    pruned = Solver(max_depth=6, prune=True).solve(state)
    exhaustive = Solver(max_depth=6, prune=False).solve(state)

    assert pruned.score.value == pytest.approx(exhaustive.score.value)
    assert pruned.moves[0] == exhaustive.moves[0]
    assert pruned.stats.nodes <= exhaustive.stats.nodes
    assert exhaustive.stats.prunes == 0


@pytest.mark.parametrize("seed", range(12))
def test_pruning_matches_exhaustive_search_on_random_encounters(seed: int) -> None:
    """Deep enough for flees and preparations to resolve inside the horizon."""
    state = generate_random_encounter(RNG(seed), max_members=1, skill_chance=0.6, flee_chance=0.6)
    pruned = Solver(max_depth=5, prune=True).solve(state)
    exhaustive = Solver(max_depth=5, prune=False).solve(state)

    assert pruned.score.value == pytest.approx(exhaustive.score.value)
    for result in (pruned, exhaustive):
        assert result.final_state is not None
        assert evaluate(result.final_state).value == pytest.approx(result.score.value)


def test_solver_is_deterministic() -> None:
    state = ford_state(defender_flee=True)

    first = Solver(max_depth=6).solve(state)
    second = Solver(max_depth=6).solve(state)

    assert first.moves == second.moves
    assert first.score == second.score


def test_hopeless_initiator_runs() -> None:
    """An initiator that cannot win prefers a cheap escape over a slow death."""
    state = make_state(
        [make_member("Hero", 10, 1)],
        [make_member("Ogre", 100, 8)],
        initiator_flee=True,
    )
    result = Solver(max_depth=4).solve(state)

    assert result.moves[0] == Flee("initiator")
    assert result.outcome is Outcome.INITIATOR_FLED
    assert result.score.value == pytest.approx(-0.9)


def test_winning_defender_does_not_flee() -> None:
    """Fleeing is on offer to the defender but would only throw away a sure win."""
    state = make_state(
        [make_member("Hero", 10, 1)],
        [make_member("Ogre", 100, 8)],
        defender_flee=True,
    )
    result = Solver(max_depth=4).solve(state)

    assert Flee("defender") not in result.moves
    assert result.outcome is Outcome.DEFENDER_WIN
    assert result.score == Score(-16.0, ScoreKind.DEFEAT)


def test_mutual_stun_is_an_immediate_draw() -> None:
    """Both sides stunned is terminal before any move is searched."""
    state = make_state(
        [make_member("Hero", 20, 10, status=Stunned(1))],
        [make_member("Goblin", 5, 1, status=Stunned(1))],
    )
    result = Solver(max_depth=4).solve(state)

    assert result.outcome is Outcome.DRAW
    assert result.score.value == 0
    assert result.timeline == []


def test_stunned_side_plays_an_empty_move(caplog: pytest.LogCaptureFixture) -> None:
    """A side with no legal moves still passes the turn so its stun can wear off."""
    state = make_state(
        [make_member("Hero", 20, 10, status=Stunned(1))],
        [make_member("Goblin", 5, 3)],
    )
    with caplog.at_level(logging.DEBUG, logger="skirmish.services.solver"):
        result = Solver(max_depth=3).solve(state)

    assert result.moves[0] == CombatMove("initiator")
    skipped = result.timeline[0].events[0]
    assert isinstance(skipped, TurnSkippedEvent)
    assert skipped.reason == "stunned"
    assert result.outcome is Outcome.INITIATOR_WIN
    assert result.score.value == pytest.approx(17)
    assert "implicit skip turn" in caplog.text


def test_depth_limit_returns_heuristic_line() -> None:
    """A horizon of one ply cannot decide the fight, so the line ends undecided."""
    result = Solver(max_depth=1).solve(ford_state())

    assert result.outcome is None
    assert result.score.kind is ScoreKind.HEURISTIC
    assert len(result.timeline) == 1
    assert result.stats.cutoffs > 0


def test_max_depth_is_clamped_to_one() -> None:
    assert Solver(max_depth=0).max_depth == 1


def test_deepen_agrees_with_full_depth_search() -> None:
    """Iterative deepening lands on the same value as one search at full depth."""
    state = ford_state(defender_flee=True)

    deepened = Solver(max_depth=6).deepen(state)
    direct = Solver(max_depth=6).solve(state)

    assert deepened.score.value == pytest.approx(direct.score.value)
    assert deepened.stats.depth_reached <= 6


def test_search_logs_summary(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="skirmish.services.solver"):
        Solver(max_depth=3).solve(ford_state())

    assert "Search finished" in caplog.text


def test_invalid_state_is_rejected_before_searching() -> None:
    state = make_state([make_member("Hero", 0, 10, max_health=20)], [make_member("Goblin", 5, 1)])

    with pytest.raises(EncounterValidationError):
        Solver().solve(state)
