"""Forwarding proxies over target slots and encapsulated objects."""

from __future__ import annotations

from .capability import coerce_methods
from .errors import MissingMethodError, MissingTargetError
from .members import invokable_names, is_invokable, lookup_member, own_member, read_slot


class LazyProxy:
    """Forwards attribute reads and iteration to a target chosen per access.

    Subclasses decide what the target is on every lookup, so a proxy over a
    reassignable slot never holds on to a stale object.
    """

    __slots__ = ()

    def _proxy_target(self):
        raise NotImplementedError

    def __getattr__(self, name):
        return getattr(self._proxy_target(), name)

    def __iter__(self):
        return iter(self._proxy_target())


class SlotProxy(LazyProxy):
    """Forwards to whatever currently occupies ``receiver``'s slot."""

    __slots__ = ("_receiver", "_slot")

    def __init__(self, receiver, slot: str) -> None:
        self._receiver = receiver
        self._slot = slot

    def _proxy_target(self):
        target = read_slot(self._receiver, self._slot)
        if target is None:
            raise MissingTargetError(self._slot)
        return target

    def __repr__(self) -> str:
        return f"<SlotProxy {type(self._receiver).__name__}.{self._slot}>"


def forwarder(receiver, slot: str) -> SlotProxy:
    return SlotProxy(receiver, slot)


class Encapsulated:
    """Exposes a target's methods and nothing else.

    Fields of the target are unreachable, the wrapper itself cannot be
    assigned to, and a method returning the target returns the wrapper.
    """

    __slots__ = ("_target", "_methods")

    def __init__(self, target, methods=None) -> None:
        if methods is None:
            names = invokable_names(target)
        else:
            names, _capability = coerce_methods(methods)
        object.__setattr__(self, "_target", target)
        object.__setattr__(self, "_methods", names)

    def __getattr__(self, name):
        target = self._target
        if name not in self._methods:
            raise MissingMethodError(target, (name,))
        if not is_invokable(lookup_member(target, name)):
            raise MissingMethodError(target, (name,))
        method = own_member(target, name)

        def call(*args, **kwargs):
            result = method(*args, **kwargs)
            if result is target:
                return self
            return result

        call.__name__ = name
        call.__qualname__ = f"{type(self).__name__}.{name}"
        return call

    def __setattr__(self, name, value):
        raise AttributeError(f"cannot set {name!r} on an encapsulated object")

    def __delattr__(self, name):
        raise AttributeError(f"cannot delete {name!r} from an encapsulated object")

    def __dir__(self):
        return sorted(self._methods)

    def __repr__(self) -> str:
        return f"<Encapsulated {type(self._target).__name__} {sorted(self._methods)}>"


def encapsulate(target, methods=None) -> Encapsulated:
    return Encapsulated(target, methods)
