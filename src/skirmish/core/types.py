"""Shared type aliases for the core and domain layers."""
from typing import Literal

Role = Literal["initiator", "defender"]
TargetMode = Literal["enemy", "ally", "self"]
EffectKind = Literal["damage", "heal", "stun"]

ROLES: tuple[Role, Role] = ("initiator", "defender")


def opposing(role: Role) -> Role:
    """Return the role of the other faction."""
    return "defender" if role == "initiator" else "initiator"


__all__ = ["EffectKind", "ROLES", "Role", "TargetMode", "opposing"]
