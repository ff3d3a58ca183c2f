"""Diagnostics."""

from jominilint.diagnostics.codes import DiagnosticSpec
from jominilint.diagnostics.diagnostic import (
    SEVERITY_RANK,
    Diagnostic,
    ErrorKey,
    RelatedLocation,
    Severity,
)
from jominilint.diagnostics.report import (
    dedupe_diagnostics,
    filter_diagnostics,
    has_errors,
    render_diagnostic,
    sort_diagnostics,
)
from jominilint.diagnostics.sink import DiagnosticSink, Locatable, loc_of

__all__ = [
    "SEVERITY_RANK",
    "Diagnostic",
    "DiagnosticSink",
    "DiagnosticSpec",
    "ErrorKey",
    "Locatable",
    "RelatedLocation",
    "Severity",
    "dedupe_diagnostics",
    "filter_diagnostics",
    "has_errors",
    "loc_of",
    "render_diagnostic",
    "sort_diagnostics",
]
