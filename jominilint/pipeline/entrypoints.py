"""Concrete implementations for pipeline entrypoints."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from jominilint.block.token import FileKind
from jominilint.config import CONFIG_FILENAME, LintConfig, load_config
from jominilint.diagnostics import DiagnosticSink, filter_diagnostics, has_errors, sort_diagnostics
from jominilint.everything import Everything
from jominilint.fileset import Fileset
from jominilint.pipeline.results import LintRunResult

logger = logging.getLogger(__name__)


def run_lint(
    *,
    mod_root: Path,
    vanilla_root: Path | None = None,
    config: LintConfig | None = None,
    config_path: Path | None = None,
    show_progress: bool = False,
) -> LintRunResult:
    """Lint a mod on disk, optionally against the base game.

    Without `config`, the config is read from `config_path`, or from
    `jominilint.conf` in the mod root when that file exists.
    """
    sink = DiagnosticSink()
    if config is None:
        config = resolve_config(mod_root, config_path, sink)
    fileset = Fileset(vanilla_root=vanilla_root, mod_root=mod_root)
    fileset.scan()
    data = Everything(sink=sink, config=config, fileset=fileset)
    data.load_fileset(show_progress=show_progress)
    data.validate_all(show_progress=show_progress)
    return _finish(data)


def run_lint_texts(
    texts_by_path: Mapping[str, str],
    *,
    vanilla_texts_by_path: Mapping[str, str] | None = None,
    config: LintConfig | None = None,
) -> LintRunResult:
    """Lint in-memory files keyed by their path relative to the mod root.

    File references are not checked, since there is no file tree to look in.
    """
    data = Everything(config=config)
    if vanilla_texts_by_path:
        data.load_texts(vanilla_texts_by_path, FileKind.VANILLA)
    data.load_texts(texts_by_path, FileKind.MOD)
    data.validate_all()
    return _finish(data)


def resolve_config(mod_root: Path, config_path: Path | None, sink: DiagnosticSink) -> LintConfig:
    """Read `config_path`, or the mod's own config file if it has one."""
    if config_path is None:
        default = mod_root / CONFIG_FILENAME
        if not default.is_file():
            return LintConfig()
        config_path = default
    logger.info("reading config from %s", config_path)
    return load_config(config_path, sink)


def _finish(data: Everything) -> LintRunResult:
    config = data.config
    diagnostics = sort_diagnostics(
        filter_diagnostics(
            data.sink,
            min_severity=config.min_severity,
            ignore=config.ignore,
            report_vanilla=config.report_vanilla,
        )
    )
    logger.info("%d diagnostics reported, %d kept", len(data.sink), len(diagnostics))
    return LintRunResult(diagnostics=diagnostics, has_errors=has_errors(diagnostics), data=data)
