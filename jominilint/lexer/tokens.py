"""Lexer tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Final

from jominilint.block.model import Comparator
from jominilint.text import TextRange


class TokenKind(IntEnum):
    # -------------------------
    # Special / sentinels
    # -------------------------
    EOF = 1

    # -------------------------
    # Trivia tokens (emitted by the lexer)
    # -------------------------
    WHITESPACE = 10
    NEWLINE = 11
    COMMENT = 12
    SKIPPED = 13

    # -------------------------
    # Scalars
    # -------------------------
    WORD = 20
    STRING = 21  # quoted string

    # -------------------------
    # Comparators (multi-char included)
    # -------------------------
    EQUAL = 30  # =
    EQUAL_EQUAL = 31  # ==
    NOT_EQUAL = 32  # !=
    LESS_THAN_OR_EQUAL = 33  # <=
    GREATER_THAN_OR_EQUAL = 34  # >=
    LESS_THAN = 35  # <
    GREATER_THAN = 36  # >
    QUESTION_EQUAL = 37  # ?=

    # -------------------------
    # Punctuation
    # -------------------------
    LBRACE = 60  # {
    RBRACE = 61  # }

    @property
    def is_trivia(self) -> bool:
        return self in (
            TokenKind.WHITESPACE,
            TokenKind.NEWLINE,
            TokenKind.COMMENT,
            TokenKind.SKIPPED,
        )

    @property
    def is_scalar(self) -> bool:
        return self in (TokenKind.WORD, TokenKind.STRING)

    @property
    def comparator(self) -> Comparator | None:
        return _COMPARATORS.get(self)


_COMPARATORS: Final[dict[TokenKind, Comparator]] = {
    TokenKind.EQUAL: Comparator.EQ,
    TokenKind.EQUAL_EQUAL: Comparator.EQ_EQ,
    TokenKind.NOT_EQUAL: Comparator.NOT_EQ,
    TokenKind.LESS_THAN_OR_EQUAL: Comparator.LE,
    TokenKind.GREATER_THAN_OR_EQUAL: Comparator.GE,
    TokenKind.LESS_THAN: Comparator.LT,
    TokenKind.GREATER_THAN: Comparator.GT,
    TokenKind.QUESTION_EQUAL: Comparator.QUESTION_EQ,
}


class TokenFlags(IntFlag):
    """Token metadata flags."""

    NONE = 0
    PRECEDING_LINE_BREAK = 1 << 0  # NEWLINE before
    WAS_QUOTED = 1 << 1
    HAS_ESCAPE = 1 << 2


@dataclass(frozen=True, slots=True)
class LexToken:
    """A single lexed token (trivia or non-trivia)."""

    kind: TokenKind
    range: TextRange
    flags: TokenFlags = TokenFlags.NONE

    def has_preceding_line_break(self) -> bool:
        return bool(self.flags & TokenFlags.PRECEDING_LINE_BREAK)

