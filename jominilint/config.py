"""Run configuration, read from a `jominilint.conf` file in script syntax.

    strict_scopes = yes
    report_vanilla = no
    min_severity = warning
    ignore = { missing-localization unknown-field }
    parse_mode = permissive
    scope_override = {
        my_value = character|province
    }
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final, cast

from jominilint.block.model import Block
from jominilint.block.token import FileKind, Loc, Token
from jominilint.block.validator import Validator
from jominilint.diagnostics.codes import CONFIG_INVALID_VALUE, CONFIG_UNKNOWN_SCOPE, READ_ERROR
from jominilint.diagnostics.diagnostic import SEVERITY_RANK, ErrorKey, Severity
from jominilint.diagnostics.sink import DiagnosticSink
from jominilint.parser.options import ParseMode
from jominilint.parser.parse import parse_text, read_failure_reason, read_script_file
from jominilint.scopes import Scopes

logger = logging.getLogger(__name__)

CONFIG_FILENAME: Final = "jominilint.conf"


@dataclass(frozen=True, slots=True)
class LintConfig:
    strict_scopes: bool = True
    report_vanilla: bool = False
    min_severity: Severity = "advice"
    ignore: frozenset[ErrorKey] = frozenset()
    parse_mode: ParseMode = ParseMode.STRICT
    scope_override: Mapping[str, Scopes] = field(default_factory=lambda: MappingProxyType({}))

    def with_overrides(self, **changes: Any) -> LintConfig:
        """Copy with the given fields replaced. `None` values are ignored."""
        return dataclasses.replace(self, **{key: value for key, value in changes.items() if value is not None})


def load_config(path: Path, sink: DiagnosticSink) -> LintConfig:
    """Read a config file. An unreadable file is reported and gives the defaults."""
    try:
        text = read_script_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("could not read %s: %s", path, exc)
        sink.report(READ_ERROR, Loc(path.name), reason=read_failure_reason(exc))
        return LintConfig()
    return load_config_text(text, sink, path=path.name)


def load_config_text(text: str, sink: DiagnosticSink, *, path: str = CONFIG_FILENAME) -> LintConfig:
    from jominilint.everything import Everything

    block = parse_text(text, path=path, kind=FileKind.MOD, sink=sink)
    # Only the validator's diagnostics are needed, so an empty project is enough.
    data = Everything(sink=sink)
    with Validator(block, data) as vd:
        return _read_config(vd)


def _read_config(vd: Validator) -> LintConfig:
    sink = vd.sink
    config = LintConfig()

    strict_scopes = vd.field_bool("strict_scopes")
    report_vanilla = vd.field_bool("report_vanilla")

    min_severity: Severity | None = None
    token = vd.field_value("min_severity")
    if token is not None:
        if token.text in SEVERITY_RANK:
            min_severity = cast(Severity, token.text)
        else:
            _invalid(sink, token, "min_severity", SEVERITY_RANK)

    ignore: frozenset[ErrorKey] | None = None
    tokens = vd.field_list("ignore")
    if tokens is not None:
        keys: set[ErrorKey] = set()
        for token in tokens:
            try:
                keys.add(ErrorKey(token.text))
            except ValueError:
                _invalid(sink, token, "ignore", [key.value for key in ErrorKey])
        ignore = frozenset(keys)

    parse_mode: ParseMode | None = None
    token = vd.field_value("parse_mode")
    if token is not None:
        try:
            parse_mode = ParseMode(token.text)
        except ValueError:
            _invalid(sink, token, "parse_mode", [mode.value for mode in ParseMode])

    scope_override: Mapping[str, Scopes] | None = None
    block = vd.field_block("scope_override")
    if block is not None:
        scope_override = MappingProxyType(_read_scope_override(block, vd))

    return config.with_overrides(
        strict_scopes=strict_scopes,
        report_vanilla=report_vanilla,
        min_severity=min_severity,
        ignore=ignore,
        parse_mode=parse_mode,
        scope_override=scope_override,
    )


def _read_scope_override(block: Block, outer: Validator) -> dict[str, Scopes]:
    overrides: dict[str, Scopes] = {}
    with Validator(block, outer.data) as vd:
        for key, value in vd.unknown_value_fields():
            scopes, unknown = Scopes.parse(value.text)
            for name in unknown:
                outer.sink.report(CONFIG_UNKNOWN_SCOPE, value, name=name)
            if scopes:
                overrides[key.text] = scopes
    return overrides


def _invalid(sink: DiagnosticSink, token: Token, key: str, choices: Iterable[str]) -> None:
    sink.report(CONFIG_INVALID_VALUE, token, value=token.text, key=key, choices=", ".join(choices))


__all__ = ["CONFIG_FILENAME", "LintConfig", "load_config", "load_config_text"]
