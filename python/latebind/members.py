"""Static member lookup on receivers and targets.

Receivers are objects that accept attributes or ``MutableMapping``
instances; targets are any objects, classes, modules or mappings exposing
callables by name. Lookups never bind: binding happens in ``bind_member``
so the caller decides which object becomes the execution context.
"""

from __future__ import annotations

import functools
import inspect
import types
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable

MISSING: Any = object()


def read_slot(receiver, slot: str):
    if isinstance(receiver, MutableMapping):
        return receiver.get(slot)
    return getattr(receiver, slot, None)


def write_slot(receiver, slot: str, value) -> None:
    if isinstance(receiver, MutableMapping):
        receiver[slot] = value
    else:
        setattr(receiver, slot, value)


def slot_accessors(receiver, slot: str):
    def get_value():
        return read_slot(receiver, slot)

    def set_value(new):
        write_slot(receiver, slot, new)

    return get_value, set_value


def receiver_member(receiver, name: str):
    if isinstance(receiver, MutableMapping):
        return receiver.get(name, MISSING)
    return inspect.getattr_static(receiver, name, MISSING)


def set_receiver_member(receiver, name: str, value) -> None:
    if isinstance(receiver, MutableMapping):
        receiver[name] = value
        return
    try:
        setattr(receiver, name, value)
    except AttributeError as exc:
        raise TypeError(
            f"cannot install {name!r} on {type(receiver).__name__!r} receiver"
        ) from exc


def receiver_members(receiver):
    """Yield ``(name, member)`` pairs visible on a receiver, innermost first."""
    if isinstance(receiver, MutableMapping):
        yield from list(receiver.items())
        return
    seen: set[str] = set()
    namespaces = [getattr(receiver, "__dict__", {})]
    namespaces.extend(vars(klass) for klass in type(receiver).__mro__)
    for namespace in namespaces:
        for key, value in list(namespace.items()):
            if key not in seen:
                seen.add(key)
                yield key, value


def lookup_member(target, name: str):
    if isinstance(target, Mapping):
        return target.get(name, MISSING)
    return inspect.getattr_static(target, name, MISSING)


def is_invokable(member) -> bool:
    if member is MISSING:
        return False
    return isinstance(member, (staticmethod, classmethod)) or callable(member)


def invokable_names(target) -> frozenset[str]:
    """Public names on ``target`` whose members can be called."""
    if isinstance(target, Mapping):
        keys = [key for key in target if isinstance(key, str)]
    else:
        keys = dir(target)
    return frozenset(
        name
        for name in keys
        if not name.startswith("_") and is_invokable(lookup_member(target, name))
    )


def own_member(target, name: str) -> Callable[..., Any]:
    """Resolve ``name`` the way the target itself would see it.

    Mapping values are returned as stored; everything else goes through
    ``getattr`` so only class-level functions are bound to ``target``.
    """
    if isinstance(target, Mapping):
        return target[name]
    return getattr(target, name)


def bind_member(member, target, context) -> Callable[..., Any]:
    """Bind a raw member so that ``context`` is its first argument.

    ``staticmethod`` members take no context and ``classmethod`` members
    take the target's class. Bound methods, bound builtin methods
    included, keep the context they were bound to. Builtin functions cannot
    take a context and raise ``TypeError``. Any other callable is called
    with ``context`` prepended to its arguments.
    """
    if isinstance(member, staticmethod):
        return member.__func__
    if isinstance(member, classmethod):
        owner = target if isinstance(target, type) else type(target)
        return types.MethodType(member.__func__, owner)
    if inspect.ismethod(member):
        return member
    if inspect.isbuiltin(member):
        owner = getattr(member, "__self__", None)
        if owner is None or inspect.ismodule(owner):
            raise TypeError(
                f"builtin {member.__name__!r} cannot run with a "
                f"{type(context).__name__!r} context"
            )
        return member
    if isinstance(member, functools.partial):
        return functools.partial(member, context)
    if inspect.isfunction(member):
        return types.MethodType(member, context)
    if inspect.ismethoddescriptor(member) and not inspect.isclass(member):
        return member.__get__(context, type(context))
    return functools.partial(member, context)
