"""Pipeline run result carriers for tool entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from jominilint.diagnostics import Diagnostic

if TYPE_CHECKING:
    from jominilint.everything import Everything


@dataclass(frozen=True, slots=True)
class LintRunResult:
    """Result of loading and validating one project.

    `diagnostics` is already filtered by the run's config and sorted by location.
    """

    diagnostics: list[Diagnostic]
    has_errors: bool
    data: Everything
