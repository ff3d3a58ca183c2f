"""Diagnostics helpers: ordering, filtering and rendering."""

from __future__ import annotations

from collections.abc import Collection, Iterable

from jominilint.block.token import FileKind, Loc
from jominilint.diagnostics.diagnostic import SEVERITY_RANK, Diagnostic, ErrorKey, Severity


def dedupe_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Drop repeats of an earlier (code, location, message), keeping the first.

    A definition validated from several call sites reports the problems in its
    body once per site; the report shows them once.
    """
    seen: set[tuple[str, Loc, str]] = set()
    kept: list[Diagnostic] = []
    for diagnostic in diagnostics:
        key = (diagnostic.code, diagnostic.loc, diagnostic.message)
        if key not in seen:
            seen.add(key)
            kept.append(diagnostic)
    return kept


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    return sorted(diagnostics, key=lambda d: d.sort_key)


def filter_diagnostics(
    diagnostics: Iterable[Diagnostic],
    *,
    min_severity: Severity = "advice",
    ignore: Collection[ErrorKey] = (),
    report_vanilla: bool = False,
) -> list[Diagnostic]:
    threshold = SEVERITY_RANK[min_severity]
    kept: list[Diagnostic] = []
    for diagnostic in dedupe_diagnostics(diagnostics):
        if SEVERITY_RANK[diagnostic.severity] < threshold:
            continue
        if diagnostic.category is not None and diagnostic.category in ignore:
            continue
        if not report_vanilla and diagnostic.loc.kind == FileKind.VANILLA:
            continue
        kept.append(diagnostic)
    return kept


def render_diagnostic(diagnostic: Diagnostic) -> str:
    category = f"({diagnostic.category})" if diagnostic.category else ""
    lines = [
        f"{diagnostic.severity}{category}: {diagnostic.message}",
        f"  --> [{diagnostic.loc.kind.label}] {diagnostic.loc}",
    ]
    for related in diagnostic.related:
        lines.append(f"  --> [{related.loc.kind.label}] {related.loc} {related.message}")
    if diagnostic.hint:
        lines.append(f"  = {diagnostic.hint}")
    return "\n".join(lines)
