"""Run carriers and lazy pipeline entrypoint exports."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from jominilint.pipeline.results import LintRunResult

if TYPE_CHECKING:
    from jominilint.config import LintConfig


def run_lint(
    *,
    mod_root: Path,
    vanilla_root: Path | None = None,
    config: LintConfig | None = None,
    config_path: Path | None = None,
    show_progress: bool = False,
) -> LintRunResult:
    from jominilint.pipeline.entrypoints import run_lint as _run_lint

    return _run_lint(
        mod_root=mod_root,
        vanilla_root=vanilla_root,
        config=config,
        config_path=config_path,
        show_progress=show_progress,
    )


def run_lint_texts(
    texts_by_path: Mapping[str, str],
    *,
    vanilla_texts_by_path: Mapping[str, str] | None = None,
    config: LintConfig | None = None,
) -> LintRunResult:
    from jominilint.pipeline.entrypoints import run_lint_texts as _run_lint_texts

    return _run_lint_texts(texts_by_path, vanilla_texts_by_path=vanilla_texts_by_path, config=config)


__all__ = ["LintRunResult", "run_lint", "run_lint_texts"]
