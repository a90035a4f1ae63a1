"""Deterministic participant names for rosters that leave them out."""
from __future__ import annotations

from typing import List, Literal

from skirmish.core.rng import RNG

NameStyle = Literal["fantasy", "demonic"]

_SYLLABLES: dict[str, tuple[str, ...]] = {
    "fantasy": ("al", "ar", "bel", "dor", "el", "fin", "gal", "is", "lor", "mir", "ra", "syl", "thal", "wen"),
    "demonic": ("az", "baal", "gor", "kra", "mog", "nak", "ozz", "rax", "thu", "ur", "vul", "xar", "zag", "zul"),
}


def make_participant_name(rng: RNG, style: NameStyle = "fantasy") -> str:
    """Generate a two or three syllable name in the given style."""
    syllables = _SYLLABLES[style]
    count = rng.randint(2, 3)
    return "".join(rng.choice(syllables) for _ in range(count)).capitalize()


def make_unique_names(rng: RNG, count: int, style: NameStyle = "fantasy", *, taken: set[str] | None = None) -> List[str]:
    """Generate ``count`` names that do not collide with each other or with ``taken``."""
    used = set(taken or ())
    names: List[str] = []
    while len(names) < count:
        name = make_participant_name(rng, style)
        if name in used:
            continue
        used.add(name)
        names.append(name)
    return names
