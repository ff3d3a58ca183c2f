"""Whether the trigger or effect being validated is shown to the player."""

from __future__ import annotations

from enum import Enum


class Tooltipped(Enum):
    NO = "no"
    YES = "yes"
    FAILURES_ONLY = "failures_only"

    @property
    def is_shown(self) -> bool:
        return self is not Tooltipped.NO


__all__ = ["Tooltipped"]
