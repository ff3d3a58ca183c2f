from jominilint.block.token import FileKind, Loc, Token
from jominilint.diagnostics import DiagnosticSink, ErrorKey, filter_diagnostics, render_diagnostic
from jominilint.diagnostics.codes import FIELD_MISSING, SCOPE_MISMATCH


def _tok(text: str, line: int) -> Token:
    return Token(text, Loc("common/decisions/d.txt", line, 1))


def test_sink_keeps_repeated_reports() -> None:
    sink = DiagnosticSink()

    sink.report(FIELD_MISSING, _tok("d", 1), key="picture")
    sink.report(FIELD_MISSING, _tok("d", 1), key="picture")

    assert sink.codes() == ["FIELD_MISSING", "FIELD_MISSING"]


def test_filter_drops_repeats() -> None:
    sink = DiagnosticSink()
    sink.report(FIELD_MISSING, _tok("d", 1), key="picture")
    sink.report(FIELD_MISSING, _tok("d", 1), key="picture")
    sink.report(FIELD_MISSING, _tok("d", 1), key="effect")
    sink.report(FIELD_MISSING, _tok("d", 2), key="picture")

    kept = filter_diagnostics(sink)

    assert [(d.loc.line, d.message) for d in kept] == [
        (1, "required field `picture` missing"),
        (1, "required field `effect` missing"),
        (2, "required field `picture` missing"),
    ]


def test_filter_by_severity_category_and_kind() -> None:
    sink = DiagnosticSink()
    sink.report(FIELD_MISSING, _tok("d", 1), key="picture")
    sink.report(FIELD_MISSING, Loc("common/decisions/d.txt", 3, 1, FileKind.VANILLA), key="picture")
    sink.report(
        SCOPE_MISMATCH,
        _tok("is_coastal", 2),
        severity="advice",
        token="is_coastal",
        expected="province",
        actual="character",
    )

    assert [d.code for d in filter_diagnostics(sink)] == ["FIELD_MISSING", "SCOPE_MISMATCH"]
    assert [d.code for d in filter_diagnostics(sink, min_severity="warning")] == ["FIELD_MISSING"]
    assert [d.code for d in filter_diagnostics(sink, ignore={ErrorKey.FIELD_MISSING})] == ["SCOPE_MISMATCH"]
    assert len(filter_diagnostics(sink, report_vanilla=True)) == 3


def test_render_diagnostic() -> None:
    sink = DiagnosticSink()
    diagnostic = sink.report(FIELD_MISSING, _tok("d", 4), key="picture")

    assert render_diagnostic(diagnostic).splitlines() == [
        "error(field-missing): required field `picture` missing",
        "  --> [MOD] common/decisions/d.txt:4:1",
    ]
