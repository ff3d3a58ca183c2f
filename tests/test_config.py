from pathlib import Path

from jominilint.block.token import Loc
from jominilint.config import LintConfig, load_config, load_config_text
from jominilint.diagnostics import DiagnosticSink, ErrorKey
from jominilint.parser import ParseMode
from jominilint.scopes import Scopes
from tests._shared_cases import dedent

FULL_CONFIG = dedent(
    """
    strict_scopes = no
    report_vanilla = yes
    min_severity = warning
    ignore = { missing-localization unknown-field }
    parse_mode = permissive
    scope_override = {
        my_value = character|province
    }
    """
)


def test_full_config() -> None:
    sink = DiagnosticSink()

    config = load_config_text(FULL_CONFIG, sink)

    assert sink.codes() == []
    assert config.strict_scopes is False
    assert config.report_vanilla is True
    assert config.min_severity == "warning"
    assert config.ignore == frozenset({ErrorKey.MISSING_LOCALIZATION, ErrorKey.UNKNOWN_FIELD})
    assert config.parse_mode is ParseMode.PERMISSIVE
    assert dict(config.scope_override) == {"my_value": Scopes.CHARACTER | Scopes.PROVINCE}


def test_empty_config_gives_defaults() -> None:
    sink = DiagnosticSink()

    assert load_config_text("", sink) == LintConfig()
    assert sink.codes() == []


def test_invalid_config_values() -> None:
    cases = (
        ("min_severity = fatal", ["CONFIG_INVALID_VALUE"]),
        ("parse_mode = loose", ["CONFIG_INVALID_VALUE"]),
        ("ignore = { bogus field-missing }", ["CONFIG_INVALID_VALUE"]),
        ("strict_scopes = maybe", ["FIELD_EXPECTED_BOOL"]),
        ("colour = red", ["FIELD_UNKNOWN"]),
        ("scope_override = yes", ["FIELD_EXPECTED_BLOCK"]),
    )
    for text, expected in cases:
        sink = DiagnosticSink()
        load_config_text(text, sink)
        assert sink.codes() == expected, text


def test_invalid_values_keep_defaults() -> None:
    sink = DiagnosticSink()

    config = load_config_text("min_severity = fatal\nignore = { bogus field-missing }", sink)

    assert config.min_severity == "advice"
    assert config.ignore == frozenset({ErrorKey.FIELD_MISSING})
    assert sink.diagnostics[0].hint == "expected one of advice, warning, error"


def test_unknown_scope_in_override() -> None:
    sink = DiagnosticSink()

    config = load_config_text("scope_override = { my_value = character|planet }", sink)

    assert sink.codes() == ["CONFIG_UNKNOWN_SCOPE"]
    assert sink.diagnostics[0].message == "unknown scope type `planet`"
    assert dict(config.scope_override) == {"my_value": Scopes.CHARACTER}


def test_load_config_file(tmp_path: Path) -> None:
    path = tmp_path / "jominilint.conf"
    path.write_text("min_severity = error\n", encoding="utf-8")
    sink = DiagnosticSink()

    config = load_config(path, sink)

    assert config.min_severity == "error"
    assert sink.codes() == []


def test_load_missing_config_file(tmp_path: Path) -> None:
    sink = DiagnosticSink()

    config = load_config(tmp_path / "missing.conf", sink)

    assert config == LintConfig()
    assert sink.codes() == ["READ_ERROR"]
    assert sink.diagnostics[0].loc == Loc("missing.conf")


def test_with_overrides_ignores_none() -> None:
    config = LintConfig(min_severity="warning")

    changed = config.with_overrides(min_severity=None, report_vanilla=True, parse_mode=None)

    assert changed.min_severity == "warning"
    assert changed.report_vanilla is True
    assert changed.parse_mode is ParseMode.STRICT
    assert config.report_vanilla is False
