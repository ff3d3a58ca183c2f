"""Diagnostic codes and messages.

Messages may contain `{placeholders}` that are filled in at the report site.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from jominilint.diagnostics.diagnostic import ErrorKey, Severity


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: ErrorKey | None = None


# Lexer / parser

LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string literal.",
    hint="Close the string with a double quote.",
    category=ErrorKey.PARSE_ERROR,
)

PARSER_UNEXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNEXPECTED_TOKEN",
    message="Unexpected `{text}`.",
    category=ErrorKey.PARSE_ERROR,
)

PARSER_EXPECTED_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_VALUE",
    message="Expected a value after `{cmp}`.",
    category=ErrorKey.PARSE_ERROR,
)

PARSER_EXTRA_RBRACE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXTRA_RBRACE",
    message="Unexpected closing brace.",
    hint="Remove the brace or add the matching `{`.",
    category=ErrorKey.PARSE_ERROR,
)

PARSER_MISSING_RBRACE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MISSING_RBRACE",
    message="Opening brace was never closed.",
    category=ErrorKey.PARSE_ERROR,
)

READ_ERROR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="READ_ERROR",
    message="could not read file: {reason}",
    category=ErrorKey.READ_ERROR,
)

# Block validator

FIELD_MISSING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_MISSING",
    message="required field `{key}` missing",
    category=ErrorKey.FIELD_MISSING,
)

FIELD_MISSING_WARN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_MISSING_WARN",
    message="required field `{key}` missing",
    severity="warning",
    category=ErrorKey.FIELD_MISSING,
)

FIELD_UNKNOWN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_UNKNOWN",
    message="found unknown field `{key}`",
    category=ErrorKey.UNKNOWN_FIELD,
)

FIELD_LOOSE_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_LOOSE_VALUE",
    message="found loose value `{text}`, expected only `key = value` fields",
    category=ErrorKey.VALIDATION,
)

FIELD_LOOSE_BLOCK: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_LOOSE_BLOCK",
    message="found loose block, expected only `key = value` fields",
    category=ErrorKey.VALIDATION,
)

FIELD_EXPECTED_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_EXPECTED_VALUE",
    message="expected value, found block",
    category=ErrorKey.VALIDATION,
)

FIELD_EXPECTED_BLOCK: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_EXPECTED_BLOCK",
    message="expected block, found value",
    category=ErrorKey.VALIDATION,
)

FIELD_EXPECTED_BOOL: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_EXPECTED_BOOL",
    message="expected yes or no",
    severity="warning",
    category=ErrorKey.VALIDATION,
)

FIELD_EXPECTED_INTEGER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_EXPECTED_INTEGER",
    message="expected integer",
    category=ErrorKey.VALIDATION,
)

FIELD_EXPECTED_NUMBER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_EXPECTED_NUMBER",
    message="expected number",
    category=ErrorKey.VALIDATION,
)

FIELD_EXCESS_DECIMALS: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_EXCESS_DECIMALS",
    message="only 5 decimals are supported",
    hint="if you give more decimals, you get an error and the number is read as 0",
    category=ErrorKey.VALIDATION,
)

FIELD_EXPECTED_CHOICE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_EXPECTED_CHOICE",
    message="expected one of {choices}",
    category=ErrorKey.VALIDATION,
)

FIELD_EXPECTED_YES: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_EXPECTED_YES",
    message="expected just `{key} = yes`",
    severity="warning",
    category=ErrorKey.VALIDATION,
)

FIELD_REPEATED: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_REPEATED",
    message="`{key}` is set more than once; this value overrides the previous one",
    severity="warning",
    category=ErrorKey.CONFLICT,
)

FIELD_UNEXPECTED_COMPARATOR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_UNEXPECTED_COMPARATOR",
    message="unexpected comparator `{cmp}`",
    category=ErrorKey.VALIDATION,
)

FIELD_ADVICE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_ADVICE",
    message="{text}",
    severity="advice",
    category=ErrorKey.VALIDATION,
)

# Registry, items and files

ITEM_MISSING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="ITEM_MISSING",
    message="{item} `{name}` is not defined",
    category=ErrorKey.MISSING_ITEM,
)

LOCALIZATION_MISSING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LOCALIZATION_MISSING",
    message="missing localization key `{name}`",
    severity="warning",
    category=ErrorKey.MISSING_LOCALIZATION,
)

FILE_MISSING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FILE_MISSING",
    message="file `{name}` does not exist",
    category=ErrorKey.MISSING_FILE,
)

ITEM_REDEFINED: Final[DiagnosticSpec] = DiagnosticSpec(
    code="ITEM_REDEFINED",
    message="{item} redefines an existing {item}",
    category=ErrorKey.DUPLICATE,
)

ITEM_REDEFINED_WARN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="ITEM_REDEFINED_WARN",
    message="{item} `{name}` is redefined by another {item}",
    hint="only the last definition is used",
    severity="warning",
    category=ErrorKey.DUPLICATE,
)

DEFINITION_UNEXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DEFINITION_UNEXPECTED_TOKEN",
    message="unexpected token",
    hint="Did you forget an = ?",
    category=ErrorKey.VALIDATION,
)

DEFINITION_UNKNOWN_SETTING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DEFINITION_UNKNOWN_SETTING",
    message="unknown setting in {item} file",
    category=ErrorKey.VALIDATION,
)

# Scopes

SCOPE_MISMATCH: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCOPE_MISMATCH",
    message="`{token}` is for {expected} but scope seems to be {actual}",
    severity="warning",
    category=ErrorKey.SCOPES,
)

SCOPE_INCOMPATIBLE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCOPE_INCOMPATIBLE",
    message="`{token}` expects scope to be {expected} but scope seems to be {actual}",
    severity="warning",
    category=ErrorKey.SCOPES,
)

SCOPE_TARGET_MISMATCH: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCOPE_TARGET_MISMATCH",
    message="`{token}` produces {actual} but expected {expected}",
    severity="warning",
    category=ErrorKey.SCOPES,
)

SCOPE_NAME_UNSET: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCOPE_NAME_UNSET",
    message="`scope:{name}` might not be set here",
    severity="warning",
    category=ErrorKey.SCOPES,
)

SCOPE_UNKNOWN_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCOPE_UNKNOWN_TOKEN",
    message="unknown token `{token}`",
    category=ErrorKey.VALIDATION,
)

SCOPE_UNKNOWN_PREFIX: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCOPE_UNKNOWN_PREFIX",
    message="unknown prefix `{prefix}:`",
    category=ErrorKey.VALIDATION,
)

SCOPE_CHAIN_ORDER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCOPE_CHAIN_ORDER",
    message="`{token}` makes no sense except as the first part of a chain",
    category=ErrorKey.VALIDATION,
)

SCOPE_REDUNDANT_THIS: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SCOPE_REDUNDANT_THIS",
    message="`this` as a target here is redundant",
    severity="advice",
    category=ErrorKey.VALIDATION,
)

# Script values, triggers and effects

VALUE_OVERWRITE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="VALUE_OVERWRITE",
    message="setting value here will overwrite the previous calculations",
    severity="warning",
    category=ErrorKey.LOGIC,
)

VALUE_NOTHING_YET: Final[DiagnosticSpec] = DiagnosticSpec(
    code="VALUE_NOTHING_YET",
    message="nothing to {op} yet",
    severity="warning",
    category=ErrorKey.LOGIC,
)

VALUE_INVALID_RANGE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="VALUE_INVALID_RANGE",
    message="invalid script value range",
    severity="warning",
    category=ErrorKey.VALIDATION,
)

ITERATOR_NOT_ALLOWED: Final[DiagnosticSpec] = DiagnosticSpec(
    code="ITERATOR_NOT_ALLOWED",
    message="cannot use `{prefix}_` iterators in {context}",
    category=ErrorKey.VALIDATION,
)

ITERATOR_PERCENT_RANGE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="ITERATOR_PERCENT_RANGE",
    message="`percent` should be between 0 and 1",
    severity="warning",
    category=ErrorKey.VALIDATION,
)

ELSE_IF_WITHOUT_IF: Final[DiagnosticSpec] = DiagnosticSpec(
    code="ELSE_IF_WITHOUT_IF",
    message="`{token}` without preceding `{if_key}`",
    severity="warning",
    category=ErrorKey.VALIDATION,
)

ELSE_WITH_LIMIT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="ELSE_WITH_LIMIT",
    message="`{token}` with a `limit` does work, but may indicate a mistake",
    hint="normally you would use `{else_if_key}` instead.",
    severity="advice",
    category=ErrorKey.IF_ELSE,
)

LIMIT_NOT_ALLOWED: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LIMIT_NOT_ALLOWED",
    message="can only use `limit` in `if`, `else_if` or lists",
    category=ErrorKey.VALIDATION,
)

TOOLTIP_NEVER_SHOWN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="TOOLTIP_NEVER_SHOWN",
    message="`{token}` has no effect here because this trigger is not shown to the player",
    severity="advice",
    category=ErrorKey.LOGIC,
)

EXISTS_IN_NONE_SCOPE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="EXISTS_IN_NONE_SCOPE",
    message="`exists = {value}` checks the current scope, which can only be none here",
    severity="warning",
    category=ErrorKey.SCOPES,
)

COLOR_INVALID: Final[DiagnosticSpec] = DiagnosticSpec(
    code="COLOR_INVALID",
    message="{text}",
    category=ErrorKey.VALIDATION,
)

COST_OVERRIDE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="COST_OVERRIDE",
    message="This value of the {name} cost overrides the previously set cost.",
    severity="warning",
    category=ErrorKey.CONFLICT,
)

# Configuration

CONFIG_UNKNOWN_SCOPE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CONFIG_UNKNOWN_SCOPE",
    message="unknown scope type `{name}`",
    severity="warning",
    category=ErrorKey.CONFIG,
)

CONFIG_INVALID_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="CONFIG_INVALID_VALUE",
    message="invalid value `{value}` for `{key}`",
    hint="expected one of {choices}",
    category=ErrorKey.CONFIG,
)

# Iterators and shared helpers

FIELD_BANNED: Final[DiagnosticSpec] = DiagnosticSpec(
    code="FIELD_BANNED",
    message="`{key} =` is only for {where}",
    category=ErrorKey.VALIDATION,
)

ITERATOR_LIST_SOURCE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="ITERATOR_LIST_SOURCE",
    message="`{token}` must have exactly one of `list =` or `variable =`",
    category=ErrorKey.VALIDATION,
)

EFFECT_IN_TRIGGER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="EFFECT_IN_TRIGGER",
    message="`{token}` is an effect, not a trigger",
    category=ErrorKey.VALIDATION,
)

TRIGGER_IN_EFFECT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="TRIGGER_IN_EFFECT",
    message="`{token}` is a trigger, not an effect",
    hint="move it into the `limit` of an `if`",
    category=ErrorKey.VALIDATION,
)

MODIF_WRONG_KIND: Final[DiagnosticSpec] = DiagnosticSpec(
    code="MODIF_WRONG_KIND",
    message="`{key}` is a {valid} modifier, not valid in a {kinds} modifier block",
    category=ErrorKey.VALIDATION,
)

# Localization files

LOCALIZATION_MISSING_HEADER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LOCALIZATION_MISSING_HEADER",
    message="missing localization header (`l_<language>:`)",
    hint="add a header line like `l_english:` at the top of the file",
    category=ErrorKey.PARSE_ERROR,
)

LOCALIZATION_INVALID_ENTRY: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LOCALIZATION_INVALID_ENTRY",
    message="invalid localization entry, expected `key:0 \"text\"`",
    severity="warning",
    category=ErrorKey.PARSE_ERROR,
)

LOCALIZATION_MISSING_LANGUAGE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LOCALIZATION_MISSING_LANGUAGE",
    message="localization key `{name}` is missing for {languages}",
    severity="advice",
    category=ErrorKey.MISSING_LOCALIZATION,
)
