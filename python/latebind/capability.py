"""Named method contracts that delegation targets are expected to satisfy."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from .errors import MissingMethodError
from .members import invokable_names, is_invokable, lookup_member

# Bases whose members belong to the protocol machinery, not the contract.
_MACHINERY_MODULES = frozenset({"builtins", "typing", "typing_extensions", "abc"})


class Capability:
    """An immutable, named set of method names.

    Installers given a ``Capability`` install exactly its names, and
    ``transition`` checks new targets against it before publishing them.
    """

    __slots__ = ("name", "methods")

    def __init__(self, name: str, methods: Iterable[str]) -> None:
        self.name = name
        self.methods = _name_set(methods)

    @classmethod
    def of(cls, target, name: Optional[str] = None) -> "Capability":
        if name is None:
            name = getattr(target, "__name__", None) or type(target).__name__
        return cls(name, invokable_names(target))

    @classmethod
    def from_protocol(cls, protocol: type) -> "Capability":
        names: set[str] = set()
        for klass in protocol.__mro__:
            if getattr(klass, "__module__", None) in _MACHINERY_MODULES:
                continue
            for key, value in vars(klass).items():
                if not key.startswith("_") and is_invokable(value):
                    names.add(key)
        return cls(protocol.__name__, names)

    def missing(self, target) -> frozenset[str]:
        return frozenset(
            name for name in self.methods if not is_invokable(lookup_member(target, name))
        )

    def conforms(self, target) -> bool:
        return not self.missing(target)

    def check(self, target):
        missing = self.missing(target)
        if missing:
            raise MissingMethodError(target, missing)
        return target

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.methods))

    def __len__(self) -> int:
        return len(self.methods)

    def __contains__(self, name) -> bool:
        return name in self.methods

    def __eq__(self, other):
        if isinstance(other, Capability):
            return self.name == other.name and self.methods == other.methods
        return NotImplemented

    def __hash__(self):
        return hash((self.name, self.methods))

    def __repr__(self) -> str:
        return f"Capability({self.name!r}, {sorted(self.methods)!r})"


def _name_set(methods: Iterable[str]) -> frozenset[str]:
    if isinstance(methods, str):
        methods = (methods,)
    names = frozenset(methods)
    for name in names:
        if not isinstance(name, str) or not name:
            raise TypeError(f"method names must be non-empty strings, got {name!r}")
    return names


def coerce_methods(methods) -> tuple[frozenset[str], Optional[Capability]]:
    """Normalize an installer's ``methods`` argument.

    Accepts a ``Capability``, a class (read as a protocol), a single name or
    an iterable of names.
    """
    if isinstance(methods, Capability):
        return methods.methods, methods
    if isinstance(methods, type):
        capability = Capability.from_protocol(methods)
        return capability.methods, capability
    return _name_set(methods), None
