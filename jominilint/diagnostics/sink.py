"""Append-only diagnostic accumulation for one run."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from jominilint.block.model import Block
from jominilint.block.token import Loc, Token
from jominilint.diagnostics.codes import DiagnosticSpec
from jominilint.diagnostics.diagnostic import Diagnostic, RelatedLocation, Severity

type Locatable = Token | Block | Loc


def loc_of(at: Locatable) -> Loc:
    match at:
        case Loc():
            return at
        case Token(loc=loc) | Block(loc=loc):
            return loc


@dataclass(slots=True)
class DiagnosticSink:
    """Collects diagnostics in report order. Validation never stops because of a report.

    Repeats are kept here; `filter_diagnostics` drops them when the run is reported.
    """

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)

    def push(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def report(
        self,
        spec: DiagnosticSpec,
        at: Locatable,
        *,
        severity: Severity | None = None,
        related: Iterable[tuple[Locatable, str]] = (),
        **fields: object,
    ) -> Diagnostic:
        """Format `spec` with `fields` and record it at `at`."""
        message = spec.message.format(**fields) if fields else spec.message
        hint = spec.hint.format(**fields) if spec.hint and fields else spec.hint
        diagnostic = Diagnostic(
            code=spec.code,
            message=message,
            loc=loc_of(at),
            severity=severity or spec.severity,
            hint=hint,
            category=spec.category,
            related=tuple(RelatedLocation(loc_of(where), text) for where, text in related),
        )
        self.push(diagnostic)
        return diagnostic

    def codes(self) -> list[str]:
        return [diagnostic.code for diagnostic in self.diagnostics]


__all__ = ["DiagnosticSink", "Locatable", "loc_of"]
