"""Parse entrypoints for in-memory text and files on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from jominilint.block.model import Block
from jominilint.block.token import FileKind, Loc
from jominilint.diagnostics.codes import READ_ERROR
from jominilint.diagnostics.sink import DiagnosticSink
from jominilint.fileset import FileEntry
from jominilint.parser.grammar import Parser
from jominilint.parser.options import ParserOptions

logger = logging.getLogger(__name__)


def parse_text(
    text: str,
    *,
    path: str = "<memory>",
    kind: FileKind = FileKind.MOD,
    sink: DiagnosticSink | None = None,
    options: ParserOptions | None = None,
) -> Block:
    """Parse script text into a Block. Parse problems go to `sink`."""
    if text.startswith("\ufeff"):
        text = text[1:]
    return Parser(
        text,
        path=path,
        kind=kind,
        sink=sink if sink is not None else DiagnosticSink(),
        options=options,
    ).parse_file()


def read_script_file(path: Path) -> str:
    """Read a UTF-8 script file. Raises OSError or UnicodeDecodeError."""
    decoded = path.read_bytes().decode("utf-8")
    return decoded[1:] if decoded.startswith("\ufeff") else decoded


def parse_file(
    entry: FileEntry,
    sink: DiagnosticSink,
    options: ParserOptions | None = None,
) -> Block | None:
    """Parse one file of the fileset, or report a read error and return None."""
    try:
        text = read_script_file(entry.fullpath)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("could not read %s: %s", entry.fullpath, exc)
        sink.report(READ_ERROR, Loc(entry.path, kind=entry.kind), reason=read_failure_reason(exc))
        return None
    return parse_text(text, path=entry.path, kind=entry.kind, sink=sink, options=options)


def read_failure_reason(exc: OSError | UnicodeDecodeError) -> str:
    if isinstance(exc, UnicodeDecodeError):
        return "not valid UTF-8"
    return exc.strerror or type(exc).__name__
