"""Source tokens and their locations."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from enum import IntEnum

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


class FileKind(IntEnum):
    """Provenance of a file. Higher values override lower ones."""

    VANILLA = 0
    MOD = 1

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True, order=True)
class Loc:
    """A position in a script file. Line 0 means the whole file."""

    path: str
    line: int = 0
    column: int = 0
    kind: FileKind = FileKind.MOD

    def with_column(self, column: int) -> Loc:
        return Loc(self.path, self.line, column, self.kind)

    def __str__(self) -> str:
        if self.line == 0:
            return self.path
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True, slots=True, eq=False)
class Token:
    """Interned text plus its location.

    Equality and hashing use the text only.
    """

    text: str
    loc: Loc

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", sys.intern(self.text))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Token):
            return self.text == other.text
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.loc})"

    def is_(self, text: str) -> bool:
        return self.text == text

    def lowercase_is(self, text: str) -> bool:
        return self.text.lower() == text

    def starts_with(self, prefix: str) -> bool:
        return self.text.startswith(prefix)

    def subtoken(self, start: int, end: int | None = None) -> Token:
        """Slice of this token. Assumes the token does not span lines."""
        return Token(self.text[start:end], self.loc.with_column(self.loc.column + start))

    def split(self, ch: str) -> list[Token]:
        parts: list[Token] = []
        pos = 0
        for index, c in enumerate(self.text):
            if c == ch:
                parts.append(self.subtoken(pos, index))
                pos = index + 1
        parts.append(self.subtoken(pos))
        return parts

    def split_once(self, ch: str) -> tuple[Token, Token] | None:
        index = self.text.find(ch)
        if index < 0:
            return None
        return self.subtoken(0, index), self.subtoken(index + 1)

    def strip_prefix(self, prefix: str) -> Token | None:
        if not self.text.startswith(prefix):
            return None
        return self.subtoken(len(prefix))

    def strip_suffix(self, suffix: str) -> Token | None:
        if not suffix or not self.text.endswith(suffix):
            return None
        return Token(self.text[: -len(suffix)], self.loc)

    def is_number(self) -> bool:
        return _NUMBER_RE.match(self.text) is not None

    def get_number(self) -> float | None:
        if not self.is_number():
            return None
        return float(self.text)

    def has_excess_decimals(self) -> bool:
        """The engine reads numbers with more than 5 decimals as 0."""
        index = self.text.find(".")
        return index >= 0 and len(self.text) - index > 6

    def is_integer(self) -> bool:
        return _INTEGER_RE.match(self.text) is not None

    def get_integer(self) -> int | None:
        if not self.is_integer():
            return None
        return int(self.text)

    def is_bool(self) -> bool:
        return self.text in ("yes", "no")


__all__ = ["FileKind", "Loc", "Token"]
