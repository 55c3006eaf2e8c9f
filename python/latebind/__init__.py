from __future__ import annotations

from .capability import Capability
from .config import CollisionPolicy, Settings, default_collision_policy
from .delegation import (
    DelegatedMethod,
    Installation,
    delegated_names,
    delegating,
    install_delegation,
    install_forwarding,
    installation_for,
    is_trampoline,
)
from .errors import (
    DelegationError,
    InvalidTargetError,
    MissingMethodError,
    MissingTargetError,
    NameCollisionError,
)
from .proxy import Encapsulated, LazyProxy, SlotProxy, encapsulate, forwarder
from .states import clear, transition


def _resolve_version() -> str:
    try:
        from importlib.metadata import version

        return version("latebind")
    except Exception:  # pragma: no cover - during development
        return "0.0.0"


def __getattr__(name: str):
    if name == "__version__":
        value = _resolve_version()
        globals()["__version__"] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["__version__"])


__all__ = [
    "Capability",
    "CollisionPolicy",
    "DelegatedMethod",
    "DelegationError",
    "Encapsulated",
    "Installation",
    "InvalidTargetError",
    "LazyProxy",
    "MissingMethodError",
    "MissingTargetError",
    "NameCollisionError",
    "Settings",
    "SlotProxy",
    "clear",
    "default_collision_policy",
    "delegated_names",
    "delegating",
    "encapsulate",
    "forwarder",
    "install_delegation",
    "install_forwarding",
    "installation_for",
    "is_trampoline",
    "transition",
    "__version__",
]
