"""Errors raised by delegation installers, trampolines and proxies."""

from __future__ import annotations

from typing import Any, Iterable, Optional


class DelegationError(Exception):
    """Base class for every latebind error."""


class InvalidTargetError(DelegationError, ValueError):
    """Raised when method names must be enumerated but there is no target."""

    def __init__(self, slot: Optional[str], message: Optional[str] = None) -> None:
        if message is None:
            message = (
                f"cannot enumerate methods: target slot {slot!r} is empty; "
                "pass the method names explicitly"
            )
        super().__init__(message)
        self.slot = slot


class MissingTargetError(DelegationError, AttributeError):
    """Raised when a trampoline is called while its target slot is empty."""

    def __init__(self, slot: str, name: Optional[str] = None) -> None:
        if name is None:
            message = f"target slot {slot!r} is empty"
        else:
            message = f"cannot call {name!r}: target slot {slot!r} is empty"
        # AttributeError.__init__ resets ``name``; assign afterwards.
        super().__init__(message)
        self.slot = slot
        self.name = name


class MissingMethodError(DelegationError, AttributeError):
    """Raised when the current target has no invokable member by that name."""

    def __init__(self, target: Any, names: Iterable[str]) -> None:
        names = tuple(sorted(names))
        listed = ", ".join(repr(n) for n in names)
        noun = "method" if len(names) == 1 else "methods"
        super().__init__(
            f"{type(target).__name__!r} target has no invokable {noun} {listed}"
        )
        self.target = target
        self.names = names
        self.name = names[0] if names else None


class NameCollisionError(DelegationError, ValueError):
    """Raised when an installed name would replace an existing member."""

    def __init__(self, names: Iterable[str], message: Optional[str] = None) -> None:
        names = tuple(sorted(names))
        if message is None:
            listed = ", ".join(repr(n) for n in names)
            message = f"receiver already defines {listed}"
        super().__init__(message)
        self.names = names
