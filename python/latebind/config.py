from __future__ import annotations

import os
from enum import Enum

COLLISION_POLICY_VAR = "LATEBIND_COLLISION_POLICY"


class CollisionPolicy(str, Enum):
    """What an installer does with a name the receiver already defines."""

    OVERWRITE = "overwrite"
    ERROR = "error"
    SKIP = "skip"

    @classmethod
    def coerce(cls, value) -> "CollisionPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(
                f"unknown collision policy {value!r} (expected one of: {choices})"
            ) from exc


class Settings:
    """Library defaults read from the environment."""

    __slots__ = ("collision_policy",)

    def __init__(self, collision_policy=CollisionPolicy.OVERWRITE) -> None:
        self.collision_policy = CollisionPolicy.coerce(collision_policy)

    @classmethod
    def from_env(cls, env=None) -> "Settings":
        """Parse settings from ``env`` (``os.environ`` by default).

        Unset or blank variables keep their defaults; invalid values raise
        ``ValueError`` naming the variable.
        """
        if env is None:
            env = os.environ
        raw = env.get(COLLISION_POLICY_VAR, "")
        if not raw.strip():
            return cls()
        try:
            return cls(collision_policy=raw)
        except ValueError as exc:
            raise ValueError(f"{COLLISION_POLICY_VAR}: {exc}") from exc

    def __repr__(self) -> str:
        return f"Settings(collision_policy={self.collision_policy.value!r})"


def default_collision_policy(env=None) -> CollisionPolicy:
    """Collision policy configured through ``LATEBIND_COLLISION_POLICY``.

    Read on every call; an unset or blank variable means ``overwrite``.
    """
    return Settings.from_env(env).collision_policy


def resolve_collision_policy(policy=None, env=None) -> CollisionPolicy:
    if policy is None:
        return default_collision_policy(env)
    return CollisionPolicy.coerce(policy)
