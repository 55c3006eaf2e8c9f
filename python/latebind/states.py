"""Switching the object behind a target slot.

A receiver whose slot holds one of several state objects is a state
machine: every state implements the same method names and a transition is
just publishing a different state into the slot.
"""

from __future__ import annotations

import logging

from .delegation import installation_for
from .members import slot_accessors

logger = logging.getLogger(__name__)


def _swap(get_value, set_value, new):
    old = get_value()
    set_value(new)
    return old


def transition(receiver, slot: str, target, *, check: bool = True):
    """Publish ``target`` into ``receiver``'s slot and return the previous value.

    When trampolines are installed for the slot the assignment happens under
    their installation lock, and ``target`` is checked against the
    installation's capability first (unless ``check`` is false or ``target``
    is ``None``).
    """
    get_value, set_value = slot_accessors(receiver, slot)
    installation = installation_for(receiver, slot)
    if installation is None:
        return _swap(get_value, set_value, target)

    with installation.lock:
        if check and target is not None and installation.capability is not None:
            installation.capability.check(target)
        previous = _swap(get_value, set_value, target)
    logger.debug(
        "%s.%s: %s -> %s",
        type(receiver).__name__,
        slot,
        _describe(previous),
        _describe(target),
    )
    return previous


def clear(receiver, slot: str):
    """Empty the slot; later trampoline calls raise ``MissingTargetError``."""
    return transition(receiver, slot, None)


def _describe(value) -> str:
    if value is None:
        return "<empty>"
    return getattr(value, "__name__", None) or type(value).__name__
