"""Command-line entry point.

    jominilint path/to/mod --game-root path/to/game
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from jominilint import __version__
from jominilint.diagnostics import SEVERITY_RANK, DiagnosticSink, render_diagnostic
from jominilint.parser.options import ParseMode
from jominilint.pipeline import run_lint
from jominilint.pipeline.entrypoints import resolve_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jominilint", description="Static analysis for Jomini game scripts")
    parser.add_argument("mod_root", type=Path, help="Root directory of the mod to check")
    parser.add_argument("--game-root", type=Path, default=None, help="Root directory of the base game")
    parser.add_argument("--config", type=Path, default=None, help="Config file (default: <mod_root>/jominilint.conf)")
    parser.add_argument(
        "--min-severity",
        choices=tuple(SEVERITY_RANK),
        default=None,
        help="Drop diagnostics below this severity",
    )
    parser.add_argument(
        "--show-vanilla",
        action="store_true",
        default=None,
        help="Also report problems located in base game files",
    )
    parser.add_argument(
        "--permissive",
        action="store_true",
        default=None,
        help="Recover from stray and missing closing braces",
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable tqdm progress bars")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug messages")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default=None,
        help="Logging level (default: WARNING, or DEBUG with -v)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = args.log_level or ("DEBUG" if args.verbose else "WARNING")
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S")

    mod_root: Path = args.mod_root
    if not mod_root.is_dir():
        print(f"jominilint: {mod_root} is not a directory", file=sys.stderr)
        return 2
    logger.debug("linting %s against %s", mod_root, args.game_root or "no base game")

    config_sink = DiagnosticSink()
    config = resolve_config(mod_root, args.config, config_sink)
    config = config.with_overrides(
        min_severity=args.min_severity,
        report_vanilla=args.show_vanilla,
        parse_mode=ParseMode.PERMISSIVE if args.permissive else None,
    )

    result = run_lint(
        mod_root=mod_root,
        vanilla_root=args.game_root,
        config=config,
        show_progress=not args.no_progress,
    )
    diagnostics = [*config_sink, *result.diagnostics]
    for diagnostic in diagnostics:
        print(render_diagnostic(diagnostic))
        print()

    counts = {severity: 0 for severity in SEVERITY_RANK}
    for diagnostic in diagnostics:
        counts[diagnostic.severity] += 1
    print(f"{counts['error']} errors, {counts['warning']} warnings, {counts['advice']} advice")
    return 1 if counts["error"] else 0

