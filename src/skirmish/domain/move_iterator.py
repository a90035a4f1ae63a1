"""Lazy enumeration of every legal move for the faction to move."""
from __future__ import annotations

from itertools import product
from typing import Iterator

from skirmish.domain.actions import CombatMove, Flee, Move, can_flee, legal_actions
from skirmish.domain.combat_models import BattleState


class MoveIterator:
    """Iterable over the legal moves of ``state.to_move``.

    Flee comes first when it is legal. After it comes the Cartesian product of
    each able participant's options, in faction order: the first participant's
    options vary slowest and the last participant's vary fastest. Each call to
    ``iter()`` starts over from the stored state.
    """

    def __init__(self, state: BattleState) -> None:
        self._state = state

    def __iter__(self) -> Iterator[Move]:
        state = self._state
        role = state.to_move
        if can_flee(state, role):
            yield Flee(role)

        faction = state.faction(role)
        actors = [ref for ref in faction.refs() if state.member(ref).can_act]
        if actors:
            indices = tuple(ref.index for ref in actors)
            options = [legal_actions(state, ref) for ref in actors]
            for combination in product(*options):
                yield CombatMove(role, tuple(zip(indices, combination)))
        elif any(member.is_alive and member.is_preparing for member in faction.members):
            # Nobody can be assigned an action, but preparations still advance.
            yield CombatMove(role)


def iter_moves(state: BattleState) -> Iterator[Move]:
    return iter(MoveIterator(state))
