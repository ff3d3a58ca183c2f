"""Parser modes and configuration options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ParseMode(StrEnum):
    """Top-level parser behavior profile."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Feature flags controlling recovery behavior."""

    mode: ParseMode = ParseMode.STRICT
    allow_extra_rbrace: bool = False
    allow_missing_rbrace: bool = False

    @staticmethod
    def for_mode(mode: ParseMode) -> ParserOptions:
        if mode == ParseMode.PERMISSIVE:
            return ParserOptions(
                mode=mode,
                allow_extra_rbrace=True,
                allow_missing_rbrace=True,
            )

        return ParserOptions(
            mode=mode,
            allow_extra_rbrace=False,
            allow_missing_rbrace=False,
        )
