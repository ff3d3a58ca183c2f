"""Scope types: the abstract runtime categories a script expression operates on."""

from __future__ import annotations

from enum import IntFlag, auto


class Scopes(IntFlag):
    """Bit-set of scope types.

    `NONE` is a real member meaning "no scope needed", used by global triggers
    and effects. The empty set is only a sentinel.
    """

    NONE = auto()
    VALUE = auto()
    BOOL = auto()
    FLAG = auto()
    CHARACTER = auto()
    PROVINCE = auto()
    LANDED_TITLE = auto()
    CULTURE = auto()
    FAITH = auto()
    RELIGION = auto()
    DYNASTY = auto()
    DYNASTY_HOUSE = auto()
    WAR = auto()
    SECRET = auto()
    SCHEME = auto()
    ARMY = auto()
    ARTIFACT = auto()

    @classmethod
    def all(cls) -> Scopes:
        result = cls(0)
        for member in cls:
            result |= member
        return result

    @classmethod
    def all_but_none(cls) -> Scopes:
        return cls.all() & ~cls.NONE

    @classmethod
    def from_snake_case(cls, name: str) -> Scopes | None:
        if name == "all":
            return cls.all()
        member = cls.__members__.get(name.upper())
        if member is None or name != name.lower():
            return None
        return member

    @classmethod
    def parse(cls, text: str) -> tuple[Scopes, list[str]]:
        """Parse `a|b|c` into a set plus the names that were not recognized."""
        result = cls(0)
        unknown: list[str] = []
        for part in text.split("|"):
            scopes = cls.from_snake_case(part)
            if scopes is None:
                unknown.append(part)
            else:
                result |= scopes
        return result, unknown

    def to_text(self) -> str:
        if self == Scopes.all():
            return "any scope"
        if self == Scopes.all_but_none():
            return "any scope except none"
        names = [member.name.lower() for member in Scopes if member in self and member.name]
        if not names:
            return "nothing"
        if len(names) == 1:
            return names[0]
        return ", ".join(names[:-1]) + " or " + names[-1]


__all__ = ["Scopes"]
