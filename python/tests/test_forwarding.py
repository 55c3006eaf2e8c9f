from __future__ import annotations

import math
from types import SimpleNamespace

import pytest

from latebind import (
    MissingTargetError,
    delegated_names,
    install_delegation,
    install_forwarding,
    installation_for,
)


class Builder:
    def __init__(self) -> None:
        self.parts: list[str] = []

    def add(self, part):
        self.parts.append(part)
        return self

    def build(self):
        return "-".join(self.parts)


def test_forwarded_methods_run_in_target_context() -> None:
    builder = Builder()
    receiver = SimpleNamespace(parts=["receiver"], impl=builder)
    install_forwarding(receiver, "impl", ["add", "build"])

    receiver.add("a")

    assert builder.parts == ["a"]
    assert receiver.parts == ["receiver"]


def test_forwarding_translates_self_references() -> None:
    receiver = SimpleNamespace(impl=Builder())
    install_forwarding(receiver, "impl", ["add", "build"])

    assert receiver.add("a").add("b") is receiver
    assert receiver.build() == "a-b"


def test_delegation_does_not_translate_self_references() -> None:
    target = SimpleNamespace()
    target.me = lambda self: target
    receiver = SimpleNamespace(impl=target)
    install_delegation(receiver, "impl", ["me"])

    assert receiver.me() is target


def test_forwarding_follows_slot_reassignment() -> None:
    first, second = Builder(), Builder()
    receiver = SimpleNamespace(impl=first)
    install_forwarding(receiver, "impl")

    receiver.add("one")
    receiver.impl = second
    receiver.add("two")

    assert (first.parts, second.parts) == (["one"], ["two"])
    assert delegated_names(receiver) == {"add", "build"}
    installation = installation_for(receiver, "impl")
    assert installation is not None and installation.mode == "forward"


def test_forwarding_with_empty_slot() -> None:
    receiver = SimpleNamespace(impl=Builder())
    install_forwarding(receiver, "impl", ["build"])
    receiver.impl = None

    with pytest.raises(MissingTargetError):
        receiver.build()


def test_forwarding_to_functions_stored_on_the_target() -> None:
    receiver = SimpleNamespace(impl=SimpleNamespace(ping=lambda: "pong"))
    install_forwarding(receiver, "impl")

    assert receiver.ping() == "pong"


def test_forwarding_to_module_and_mapping_targets() -> None:
    receiver = SimpleNamespace(impl=math)
    install_forwarding(receiver, "impl", ["sqrt"])
    assert receiver.sqrt(16) == 4.0

    receiver.impl = {"sqrt": lambda value: "table"}
    assert receiver.sqrt(16) == "table"


class Factory:
    made = "class"

    def plain(value):
        return value * 2

    @classmethod
    def kind(cls):
        return cls.made

    @staticmethod
    def fixed():
        return "fixed"


def test_forwarding_to_a_class_target() -> None:
    receiver = SimpleNamespace(made="receiver", impl=Factory)
    install_forwarding(receiver, "impl")

    assert delegated_names(receiver) == {"plain", "kind", "fixed"}
    assert receiver.plain(3) == 6
    assert receiver.kind() == "class"
    assert receiver.fixed() == "fixed"


def test_forwarded_class_method_returning_the_class() -> None:
    class Registry:
        @classmethod
        def chain(cls):
            return cls

    receiver = SimpleNamespace(impl=Registry)
    install_forwarding(receiver, "impl", ["chain"])

    assert receiver.chain() is receiver
