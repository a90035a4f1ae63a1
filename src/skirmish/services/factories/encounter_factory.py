"""Factory for turning encounter definitions into searchable battle states."""
from __future__ import annotations

from typing import List, Mapping

from skirmish.core.rng import RNG
from skirmish.core.types import Role
from skirmish.data.repositories import EncountersRepository
from skirmish.domain.combat_models import BattleState, Faction, Participant, Skill, Weapon
from skirmish.domain.defs import EncounterDef, FactionDef, ParticipantDef
from skirmish.services.errors import FactoryError
from skirmish.services.validation import validate_battle_state

from .name_factory import NameStyle, make_unique_names

_STYLE_BY_ROLE: dict[Role, NameStyle] = {"initiator": "fantasy", "defender": "demonic"}


def create_battle_state(
    encounter_def: EncounterDef,
    *,
    rng: RNG | None = None,
    flee_override: Mapping[Role, bool] | None = None,
) -> BattleState:
    """Instantiate the opening state of an encounter.

    Unnamed participants receive generated names; the same RNG seed always
    yields the same names. ``flee_override`` replaces the defined
    ``flee_allowed`` flag for the roles it names.
    """
    overrides = dict(flee_override or {})
    rng = rng or RNG(0)
    taken = {
        member.name
        for faction_def in (encounter_def.initiator, encounter_def.defender)
        for member in faction_def.members
        if member.name
    }
    state = BattleState(
        initiator=_build_faction("initiator", encounter_def.initiator, rng, taken, overrides.get("initiator")),
        defender=_build_faction("defender", encounter_def.defender, rng, taken, overrides.get("defender")),
    )
    validate_battle_state(state)
    return state


def create_encounter_state(
    encounter_id: str,
    encounters_repo: EncountersRepository,
    *,
    rng: RNG | None = None,
    flee_override: Mapping[Role, bool] | None = None,
) -> BattleState:
    """Look up an encounter by id and instantiate it."""
    try:
        encounter_def = encounters_repo.get(encounter_id)
    except KeyError as exc:
        raise FactoryError(f"Encounter '{encounter_id}' not found.") from exc
    return create_battle_state(encounter_def, rng=rng, flee_override=flee_override)


def generate_random_encounter(
    rng: RNG,
    *,
    max_members: int = 2,
    skill_chance: float = 0.25,
    flee_chance: float = 0.5,
) -> BattleState:
    """Build a small random encounter, mostly for exercising the solver."""
    taken: set[str] = set()
    factions = []
    for role in ("initiator", "defender"):
        count = rng.randint(1, max(1, max_members))
        names = make_unique_names(rng, count, _STYLE_BY_ROLE[role], taken=taken)
        taken.update(names)
        members = tuple(_random_participant(rng, name, skill_chance) for name in names)
        factions.append(Faction(role=role, members=members, flee_allowed=rng.chance(flee_chance)))
    return BattleState(initiator=factions[0], defender=factions[1])


def _build_faction(
    role: Role,
    faction_def: FactionDef,
    rng: RNG,
    taken: set[str],
    flee_allowed: bool | None,
) -> Faction:
    missing = sum(1 for member in faction_def.members if not member.name)
    generated = make_unique_names(rng, missing, _STYLE_BY_ROLE[role], taken=taken)
    taken.update(generated)

    members: List[Participant] = []
    for member_def in faction_def.members:
        name = member_def.name or generated.pop(0)
        members.append(_build_participant(member_def, name))
    if flee_allowed is None:
        flee_allowed = faction_def.flee_allowed
    return Faction(role=role, members=tuple(members), flee_allowed=flee_allowed)


def _build_participant(member_def: ParticipantDef, name: str) -> Participant:
    weapon = Weapon(
        name=member_def.weapon.name,
        damage=member_def.weapon.damage,
        sweeping=member_def.weapon.sweeping,
    )
    skills = tuple(
        Skill(
            name=skill.name,
            effect=skill.effect,
            amount=skill.amount,
            target=skill.target,
            prep_turns=skill.prep_turns,
            resource=skill.resource,
        )
        for skill in member_def.skills
    )
    return Participant(
        name=name,
        health=member_def.health,
        max_health=member_def.max_health,
        weapon=weapon,
        skills=skills,
        supplies=member_def.supplies,
    )


def _random_participant(rng: RNG, name: str, skill_chance: float) -> Participant:
    max_health = rng.randint(8, 30)
    weapon = Weapon(name="Blade", damage=rng.randint(3, 12), sweeping=rng.chance(0.2))
    skills: tuple[Skill, ...] = ()
    supplies: tuple[tuple[str, int], ...] = ()
    if rng.chance(skill_chance):
        skills = (Skill(name="Daze", effect="stun", amount=1, target="enemy", prep_turns=rng.randint(0, 1)),)
    if rng.chance(skill_chance):
        skills += (Skill(name="Tonic", effect="heal", amount=rng.randint(3, 8), target="self", resource="tonic"),)
        supplies = (("tonic", 1),)
    return Participant(
        name=name,
        health=rng.randint(max(1, max_health // 2), max_health),
        max_health=max_health,
        weapon=weapon,
        skills=skills,
        supplies=supplies,
    )
