"""Argument kinds for table-driven triggers and effects."""

from __future__ import annotations

from dataclasses import dataclass

from jominilint.item import Item
from jominilint.scopes import Scopes


@dataclass(frozen=True, slots=True)
class Boolean:
    """`yes` or `no`."""


@dataclass(frozen=True, slots=True)
class Yes:
    """Only `yes` makes sense."""


@dataclass(frozen=True, slots=True)
class CompareValue:
    """A script value, compared with any comparator."""


@dataclass(frozen=True, slots=True)
class ItemRef:
    item: Item


@dataclass(frozen=True, slots=True)
class Target:
    scopes: Scopes


@dataclass(frozen=True, slots=True)
class Choice:
    choices: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class UncheckedValue:
    """A free identifier such as a flag name."""


@dataclass(frozen=True, slots=True)
class Special:
    """Validated by dedicated code in the trigger or effect module."""


type ArgKind = Boolean | Yes | CompareValue | ItemRef | Target | Choice | UncheckedValue | Special


__all__ = [
    "ArgKind",
    "Boolean",
    "Choice",
    "CompareValue",
    "ItemRef",
    "Special",
    "Target",
    "UncheckedValue",
    "Yes",
]
