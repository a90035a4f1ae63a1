"""Encounters repository."""
from __future__ import annotations

from typing import Dict, Tuple

from skirmish.data.errors import DataReferenceError, DataValidationError
from skirmish.data.repositories.base import RepositoryBase
from skirmish.domain.defs import EncounterDef, FactionDef, ParticipantDef, SkillDef, WeaponDef

_EFFECTS = {"damage", "heal", "stun"}
_TARGET_MODES = {"enemy", "ally", "self"}


class EncountersRepository(RepositoryBase[EncounterDef]):
    """Loads and validates encounter rosters."""

    def __init__(self, base_path=None) -> None:
        super().__init__("encounters.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EncounterDef]:
        encounters: Dict[str, EncounterDef] = {}
        for raw_id, payload in raw.items():
            context = f"encounter '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                data,
                {"name", "initiator", "defender"},
                context,
                optional_fields={"description"},
            )
            encounters[raw_id] = EncounterDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                initiator=self._build_faction(data["initiator"], f"{context} initiator"),
                defender=self._build_faction(data["defender"], f"{context} defender"),
                description=str(data.get("description", "")),
            )
        return encounters

    def _build_faction(self, payload: object, context: str) -> FactionDef:
        data = self._require_mapping(payload, context)
        self._assert_exact_fields(data, {"members"}, context, optional_fields={"flee_allowed"})
        raw_members = self._require_list(data["members"], f"{context} members")
        if not raw_members:
            raise DataValidationError(f"{context} must list at least one member.")
        members = tuple(
            self._build_participant(member, f"{context} member #{position}")
            for position, member in enumerate(raw_members)
        )
        flee_allowed = self._require_bool(data.get("flee_allowed", False), f"{context} flee_allowed")
        return FactionDef(members=members, flee_allowed=flee_allowed)

    def _build_participant(self, payload: object, context: str) -> ParticipantDef:
        data = self._require_mapping(payload, context)
        self._assert_exact_fields(
            data,
            {"health", "weapon"},
            context,
            optional_fields={"name", "max_health", "skills", "supplies"},
        )
        name = self._require_str(data["name"], f"{context} name") if "name" in data else None
        health = self._require_int(data["health"], f"{context} health", minimum=0)
        max_health = self._require_int(data.get("max_health", health), f"{context} max_health", minimum=1)
        if health > max_health:
            raise DataValidationError(f"{context} health exceeds max_health.")

        skills = tuple(
            self._build_skill(skill, f"{context} skill #{position}")
            for position, skill in enumerate(self._require_list(data.get("skills", []), f"{context} skills"))
        )
        supplies = self._build_supplies(data.get("supplies", {}), f"{context} supplies")
        stocked = {resource for resource, _ in supplies}
        for skill in skills:
            if skill.resource is not None and skill.resource not in stocked:
                raise DataReferenceError(
                    f"{context} skill '{skill.name}' needs supply '{skill.resource}' that is never stocked."
                )

        return ParticipantDef(
            name=name,
            health=health,
            max_health=max_health,
            weapon=self._build_weapon(data["weapon"], f"{context} weapon"),
            skills=skills,
            supplies=supplies,
        )

    def _build_weapon(self, payload: object, context: str) -> WeaponDef:
        data = self._require_mapping(payload, context)
        self._assert_exact_fields(data, {"name", "damage"}, context, optional_fields={"sweeping"})
        return WeaponDef(
            name=self._require_str(data["name"], f"{context} name"),
            damage=self._require_int(data["damage"], f"{context} damage", minimum=0),
            sweeping=self._require_bool(data.get("sweeping", False), f"{context} sweeping"),
        )

    def _build_skill(self, payload: object, context: str) -> SkillDef:
        data = self._require_mapping(payload, context)
        self._assert_exact_fields(
            data,
            {"name", "effect", "amount", "target"},
            context,
            optional_fields={"prep_turns", "resource"},
        )
        effect = self._require_str(data["effect"], f"{context} effect")
        if effect not in _EFFECTS:
            raise DataValidationError(f"{context} effect must be one of {sorted(_EFFECTS)}.")
        target = self._require_str(data["target"], f"{context} target")
        if target not in _TARGET_MODES:
            raise DataValidationError(f"{context} target must be one of {sorted(_TARGET_MODES)}.")
        resource = data.get("resource")
        return SkillDef(
            name=self._require_str(data["name"], f"{context} name"),
            effect=effect,
            amount=self._require_int(data["amount"], f"{context} amount", minimum=0),
            target=target,
            prep_turns=self._require_int(data.get("prep_turns", 0), f"{context} prep_turns", minimum=0),
            resource=self._require_str(resource, f"{context} resource") if resource is not None else None,
        )

    def _build_supplies(self, payload: object, context: str) -> Tuple[Tuple[str, int], ...]:
        data = self._require_mapping(payload, context)
        return tuple(
            (resource, self._require_int(count, f"{context} '{resource}'", minimum=0))
            for resource, count in sorted(data.items())
        )
