"""Combat domain models.

Every model here is a frozen value object. Successor states are derived with
``dataclasses.replace`` so that search branches never share mutable data.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, Tuple, Union

from skirmish.core.types import EffectKind, Role, TargetMode


@dataclass(frozen=True, slots=True)
class Weapon:
    """The means of attack a participant carries."""

    name: str
    damage: int
    sweeping: bool = False


@dataclass(frozen=True, slots=True)
class Skill:
    """A targeted effect a participant can apply instead of attacking."""

    name: str
    effect: EffectKind
    amount: int
    target: TargetMode
    prep_turns: int = 0
    resource: str | None = None


@dataclass(frozen=True, slots=True)
class ParticipantRef:
    """Addresses a participant by faction role and position in the faction."""

    role: Role
    index: int


@dataclass(frozen=True, slots=True)
class Preparing:
    """A skill is being readied and resolves once ``remaining`` reaches zero."""

    skill: Skill
    target: ParticipantRef
    remaining: int


@dataclass(frozen=True, slots=True)
class Stunned:
    """The participant skips its faction's next ``remaining`` plies."""

    remaining: int


Status = Union[Preparing, Stunned]


@dataclass(frozen=True, slots=True)
class Participant:
    """An individual combatant."""

    name: str
    health: int
    max_health: int
    weapon: Weapon
    skills: Tuple[Skill, ...] = ()
    supplies: Tuple[Tuple[str, int], ...] = ()
    status: Status | None = None
    damage_taken: int = 0

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def is_incapacitated(self) -> bool:
        return isinstance(self.status, Stunned)

    @property
    def is_preparing(self) -> bool:
        return isinstance(self.status, Preparing)

    @property
    def can_act(self) -> bool:
        """True when the participant may be assigned an action this ply."""
        return self.is_alive and self.status is None

    def supply_count(self, resource: str) -> int:
        for name, count in self.supplies:
            if name == resource:
                return count
        return 0

    def take_damage(self, amount: int) -> "Participant":
        """Return a copy with damage applied. Hits on a defeated participant are ignored."""
        if not self.is_alive:
            return self
        return replace(
            self,
            health=max(0, self.health - amount),
            damage_taken=self.damage_taken + amount,
        )

    def restore_health(self, amount: int) -> "Participant":
        return replace(self, health=min(self.max_health, self.health + max(0, amount)))

    def consume_supply(self, resource: str) -> "Participant":
        supplies = tuple(
            (name, count - 1 if name == resource else count) for name, count in self.supplies
        )
        return replace(self, supplies=supplies)

    def with_status(self, status: Status | None) -> "Participant":
        return replace(self, status=status)


@dataclass(frozen=True, slots=True)
class Faction:
    """One side of the encounter. Member order drives resolution and move ordering."""

    role: Role
    members: Tuple[Participant, ...]
    flee_allowed: bool = False

    @property
    def is_defeated(self) -> bool:
        return not any(member.is_alive for member in self.members)

    @property
    def is_incapacitated(self) -> bool:
        """True when the faction has living members and all of them are stunned."""
        living = [member for member in self.members if member.is_alive]
        return bool(living) and all(member.is_incapacitated for member in living)

    def refs(self) -> Iterator[ParticipantRef]:
        for index in range(len(self.members)):
            yield ParticipantRef(self.role, index)

    def living_refs(self) -> Tuple[ParticipantRef, ...]:
        return tuple(
            ParticipantRef(self.role, index)
            for index, member in enumerate(self.members)
            if member.is_alive
        )

    def total_health(self) -> int:
        return sum(max(0, member.health) for member in self.members)

    def total_damage_taken(self) -> int:
        return sum(member.damage_taken for member in self.members)


@dataclass(frozen=True, slots=True)
class BattleState:
    """Snapshot of an encounter between the initiating and the defending faction."""

    initiator: Faction
    defender: Faction
    turn: int = 0
    to_move: Role = "initiator"
    fleeing: Role | None = None  # flee declared, awaiting the opponent's parting move
    escaped: Tuple[Role, ...] = ()

    def faction(self, role: Role) -> Faction:
        return self.initiator if role == "initiator" else self.defender

    def member(self, ref: ParticipantRef) -> Participant:
        return self.faction(ref.role).members[ref.index]

    def replace_member(self, ref: ParticipantRef, participant: Participant) -> "BattleState":
        faction = self.faction(ref.role)
        members = faction.members[: ref.index] + (participant,) + faction.members[ref.index + 1 :]
        return self.with_faction(replace(faction, members=members))

    def with_faction(self, faction: Faction) -> "BattleState":
        if faction.role == "initiator":
            return replace(self, initiator=faction)
        return replace(self, defender=faction)
