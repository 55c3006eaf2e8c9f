"""Late-bound delegation: trampolines that resolve their target per call.

``install_delegation`` adds one trampoline per method name to a receiver.
Each call re-reads the receiver's target slot, looks the method up on the
current target and runs it with the receiver as its context, so assigning a
different object to the slot changes the behaviour of every trampoline at
once. ``install_forwarding`` is the same wiring with the target as context.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from .capability import Capability, coerce_methods
from .config import CollisionPolicy, resolve_collision_policy
from .errors import (
    InvalidTargetError,
    MissingMethodError,
    MissingTargetError,
    NameCollisionError,
)
from .members import (
    MISSING,
    bind_member,
    invokable_names,
    is_invokable,
    lookup_member,
    own_member,
    read_slot,
    receiver_member,
    receiver_members,
    set_receiver_member,
)

__all__ = [
    "DELEGATE",
    "FORWARD",
    "DelegatedMethod",
    "Installation",
    "delegated_names",
    "delegating",
    "install_delegation",
    "install_forwarding",
    "installation_for",
    "is_trampoline",
]

logger = logging.getLogger(__name__)

DELEGATE = "delegate"
FORWARD = "forward"


class Installation:
    """Wiring shared by the trampolines of one install call."""

    __slots__ = ("slot", "names", "capability", "mode", "lock")

    def __init__(
        self,
        slot: str,
        names: frozenset[str],
        capability: Optional[Capability] = None,
        mode: str = DELEGATE,
        lock=None,
    ) -> None:
        self.slot = slot
        self.names = names
        self.capability = capability
        self.mode = mode
        self.lock = threading.Lock() if lock is None else lock

    def __repr__(self) -> str:
        return (
            f"Installation(slot={self.slot!r}, names={sorted(self.names)!r}, "
            f"mode={self.mode!r})"
        )


def _current_target(receiver, slot: str, name: str):
    target = read_slot(receiver, slot)
    if target is None:
        raise MissingTargetError(slot, name)
    member = lookup_member(target, name)
    if not is_invokable(member):
        raise MissingMethodError(target, (name,))
    return target, member


def _dispatch_delegate(receiver, slot: str, name: str, args, kwargs):
    target, member = _current_target(receiver, slot, name)
    return bind_member(member, target, receiver)(*args, **kwargs)


def _dispatch_forward(receiver, slot: str, name: str, args, kwargs):
    target, _member = _current_target(receiver, slot, name)
    result = own_member(target, name)(*args, **kwargs)
    if result is target:
        return receiver
    return result


_DISPATCH: dict[str, Callable[..., Any]] = {
    DELEGATE: _dispatch_delegate,
    FORWARD: _dispatch_forward,
}


def _make_trampoline(receiver, installation: Installation, name: str):
    dispatch = _DISPATCH[installation.mode]
    slot = installation.slot

    def trampoline(*args, **kwargs):
        return dispatch(receiver, slot, name, args, kwargs)

    trampoline.__name__ = name
    trampoline.__qualname__ = f"{type(receiver).__name__}.{name}"
    trampoline.__latebind__ = installation  # type: ignore[attr-defined]
    return trampoline


class DelegatedMethod:
    """Class-level trampoline; binds to the instance it is read from."""

    __slots__ = ("installation", "name")

    def __init__(self, installation: Installation, name: str) -> None:
        self.installation = installation
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return _make_trampoline(instance, self.installation, self.name)

    def __repr__(self) -> str:
        return f"<DelegatedMethod {self.name!r} via {self.installation.slot!r}>"


def _installation_of(member) -> Optional[Installation]:
    if isinstance(member, DelegatedMethod):
        return member.installation
    if callable(member) and hasattr(member, "__code__"):
        installation = getattr(member, "__latebind__", None)
        if isinstance(installation, Installation):
            return installation
    return None


def is_trampoline(member) -> bool:
    return _installation_of(member) is not None


def installation_for(receiver, slot: str) -> Optional[Installation]:
    for _name, member in receiver_members(receiver):
        installation = _installation_of(member)
        if installation is not None and installation.slot == slot:
            return installation
    return None


def delegated_names(receiver, slot: Optional[str] = None) -> frozenset[str]:
    """Names on ``receiver`` currently backed by trampolines."""
    names = set()
    for name, member in receiver_members(receiver):
        installation = _installation_of(member)
        if installation is None:
            continue
        if slot is None or installation.slot == slot:
            names.add(name)
    return frozenset(names)


def _check_slot(slot) -> None:
    if not isinstance(slot, str) or not slot:
        raise TypeError(f"target slot must be a non-empty string, got {slot!r}")


def _install(receiver, slot: str, methods, policy, mode: str):
    _check_slot(slot)
    capability = None
    if methods is None:
        target = read_slot(receiver, slot)
        if target is None:
            raise InvalidTargetError(slot)
        names = invokable_names(target) - {slot}
    else:
        names, capability = coerce_methods(methods)
    if slot in names:
        raise NameCollisionError(
            (slot,), f"cannot install {slot!r} over its own target slot"
        )

    policy = resolve_collision_policy(policy)
    existing = set()
    for name in names:
        member = receiver_member(receiver, name)
        if member is not MISSING and not is_trampoline(member):
            existing.add(name)
    if existing and policy is CollisionPolicy.ERROR:
        raise NameCollisionError(existing)
    if policy is CollisionPolicy.SKIP:
        names = names - existing

    previous = installation_for(receiver, slot)
    installation = Installation(
        slot,
        frozenset(names),
        capability,
        mode,
        previous.lock if previous is not None else None,
    )
    for name in sorted(names):
        set_receiver_member(receiver, name, _make_trampoline(receiver, installation, name))

    logger.debug(
        "installed %s trampolines on %s via %r: %s",
        mode,
        type(receiver).__name__,
        slot,
        ", ".join(sorted(names)) or "<none>",
    )
    if existing:
        logger.debug(
            "collision policy %s applied to %s", policy.value, ", ".join(sorted(existing))
        )
    return receiver


def install_delegation(receiver, slot: str, methods=None, *, policy=None):
    """Install trampolines that run the slot's methods in the receiver's context.

    ``methods`` is a ``Capability``, a protocol class, or an iterable of
    names; when omitted, the invokable public members of the slot's current
    value are used. Returns ``receiver``.
    """
    return _install(receiver, slot, methods, policy, DELEGATE)


def install_forwarding(receiver, slot: str, methods=None, *, policy=None):
    """Like ``install_delegation`` but methods run in the target's own context.

    A forwarded call that returns the target itself returns the receiver.
    """
    return _install(receiver, slot, methods, policy, FORWARD)


def delegating(slot: str, methods=None, *, forward: bool = False):
    """Class decorator installing trampolines shared by all instances."""
    _check_slot(slot)
    if methods is None:
        raise InvalidTargetError(
            slot, "class-level delegation needs explicit method names"
        )
    names, capability = coerce_methods(methods)
    if slot in names:
        raise NameCollisionError(
            (slot,), f"cannot install {slot!r} over its own target slot"
        )
    mode = FORWARD if forward else DELEGATE

    def wrapper(cls):
        installed = frozenset(names - set(vars(cls)))
        installation = Installation(slot, installed, capability, mode)
        for name in sorted(installed):
            setattr(cls, name, DelegatedMethod(installation, name))
        logger.debug(
            "%s delegates %s via %r", cls.__name__, ", ".join(sorted(installed)), slot
        )
        return cls

    return wrapper
