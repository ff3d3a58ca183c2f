"""Diagnostics core types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final, Literal

from jominilint.block.token import Loc

Severity = Literal["error", "warning", "advice"]

SEVERITY_RANK: Final[dict[str, int]] = {"advice": 0, "warning": 1, "error": 2}


class ErrorKey(StrEnum):
    """Diagnostic categories. Severity is attached separately."""

    DUPLICATE = "duplicate"
    VALIDATION = "validation"
    LOGIC = "logic"
    IF_ELSE = "if-else"
    CONFLICT = "conflict"
    READ_ERROR = "read-error"
    PARSE_ERROR = "parse-error"
    SCOPES = "scopes"
    MISSING_ITEM = "missing-item"
    MISSING_LOCALIZATION = "missing-localization"
    MISSING_FILE = "missing-file"
    UNKNOWN_FIELD = "unknown-field"
    FIELD_MISSING = "field-missing"
    CONFIG = "config"


@dataclass(frozen=True, slots=True)
class RelatedLocation:
    loc: Loc
    message: str


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic emitted by the parser and validators."""

    code: str
    message: str
    loc: Loc
    severity: Severity = "error"
    hint: str | None = None
    category: ErrorKey | None = None
    related: tuple[RelatedLocation, ...] = ()

    @property
    def sort_key(self) -> tuple[str, int, int, str, str]:
        return (self.loc.path, self.loc.line, self.loc.column, self.code, self.message)
