"""Localization keys: loading `.yml` files and checking references against them."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from jominilint.block.token import FileKind, Loc, Token
from jominilint.diagnostics.codes import (
    LOCALIZATION_INVALID_ENTRY,
    LOCALIZATION_MISSING,
    LOCALIZATION_MISSING_HEADER,
    LOCALIZATION_MISSING_LANGUAGE,
    READ_ERROR,
)
from jominilint.diagnostics.sink import DiagnosticSink
from jominilint.fileset import FileEntry, Fileset
from jominilint.parser.parse import read_failure_reason, read_script_file

logger = logging.getLogger(__name__)

LOCALIZATION_DIR = "localization"

_HEADER_RE = re.compile(r"^\s*l_(?P<language>\w+):\s*(#.*)?$")
_ENTRY_RE = re.compile(r'^(?P<indent>\s*)(?P<key>[^\s:#"]+):(?P<version>\d*)(?:\s+|(?="))(?P<value>".*)$')


@dataclass(frozen=True, slots=True)
class LocalizationEntry:
    key: str
    language: str
    loc: Loc


def parse_localization_text(
    text: str,
    *,
    path: str = "<memory>",
    kind: FileKind = FileKind.MOD,
    sink: DiagnosticSink | None = None,
) -> list[LocalizationEntry]:
    """Parse one localization file into its entries.

    The first non-comment line must be the `l_<language>:` header. Lines that
    are not entries are reported and skipped.
    """
    sink = sink if sink is not None else DiagnosticSink()
    if text.startswith("\ufeff"):
        text = text[1:]
    language: str | None = None
    entries: list[LocalizationEntry] = []
    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if language is None:
            header = _HEADER_RE.match(line)
            if header is None:
                sink.report(LOCALIZATION_MISSING_HEADER, Loc(path, number, 1, kind))
                return entries
            language = header["language"]
            continue
        entry = _ENTRY_RE.match(line)
        if entry is None:
            column = len(line) - len(line.lstrip()) + 1
            sink.report(LOCALIZATION_INVALID_ENTRY, Loc(path, number, column, kind))
            continue
        loc = Loc(path, number, len(entry["indent"]) + 1, kind)
        entries.append(LocalizationEntry(entry["key"], language, loc))
    return entries


@dataclass(frozen=True, slots=True)
class LocalizationKeyIndex:
    """Compact key -> language coverage index using language bitmasks."""

    language_index_by_name: Mapping[str, int] = MappingProxyType({})
    key_mask_by_name: Mapping[str, int] = MappingProxyType({})

    @property
    def is_empty(self) -> bool:
        return not self.key_mask_by_name

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(sorted(self.language_index_by_name, key=self.language_index_by_name.__getitem__))

    def has_key(self, key: str) -> bool:
        return key in self.key_mask_by_name

    def has_key_for_language(self, key: str, language: str) -> bool:
        index = self.language_index_by_name.get(language)
        if index is None:
            return False
        return bool(self.key_mask_by_name.get(key, 0) & (1 << index))

    def missing_languages_for_key(self, key: str) -> tuple[str, ...]:
        return tuple(language for language in self.languages if not self.has_key_for_language(key, language))


def build_key_index(entries: Iterable[LocalizationEntry]) -> LocalizationKeyIndex:
    key_languages: dict[str, set[str]] = {}
    for entry in entries:
        key_languages.setdefault(entry.key, set()).add(entry.language)
    return _freeze_key_index(key_languages)


def _freeze_key_index(key_languages: Mapping[str, set[str]]) -> LocalizationKeyIndex:
    language_names = sorted({language for languages in key_languages.values() for language in languages})
    language_index = {language: index for index, language in enumerate(language_names)}
    key_mask_by_name: dict[str, int] = {}
    for key, languages in key_languages.items():
        mask = 0
        for language in languages:
            mask |= 1 << language_index[language]
        key_mask_by_name[key] = mask
    return LocalizationKeyIndex(
        language_index_by_name=MappingProxyType(language_index),
        key_mask_by_name=MappingProxyType(key_mask_by_name),
    )


class Localization:
    """Every loaded localization key, and the checks that use them.

    Until at least one key is loaded, references are not checked at all.
    """

    def __init__(self, sink: DiagnosticSink) -> None:
        self._sink = sink
        self._key_languages: dict[str, set[str]] = {}
        self._index: LocalizationKeyIndex | None = None

    def __len__(self) -> int:
        return len(self._key_languages)

    @property
    def index(self) -> LocalizationKeyIndex:
        if self._index is None:
            self._index = _freeze_key_index(self._key_languages)
        return self._index

    def add_entries(self, entries: Iterable[LocalizationEntry]) -> None:
        for entry in entries:
            self._key_languages.setdefault(entry.key, set()).add(entry.language)
        self._index = None

    def load_text(self, text: str, *, path: str, kind: FileKind = FileKind.MOD) -> None:
        self.add_entries(parse_localization_text(text, path=path, kind=kind, sink=self._sink))

    def load_file(self, entry: FileEntry) -> None:
        try:
            text = read_script_file(entry.fullpath)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("could not read %s: %s", entry.fullpath, exc)
            self._sink.report(READ_ERROR, entry.loc, reason=read_failure_reason(exc))
            return
        self.load_text(text, path=entry.path, kind=entry.kind)

    def load_fileset(self, fileset: Fileset) -> None:
        files = fileset.get_files_under(LOCALIZATION_DIR, suffix=".yml")
        for entry in files:
            self.load_file(entry)
        logger.info("loaded %d localization keys from %d files", len(self), len(files))

    def exists(self, key: str) -> bool:
        return key in self._key_languages

    def verify_exists(self, token: Token) -> None:
        self.verify_exists_implied(token.text, token)

    def verify_exists_implied(self, key: str, token: Token) -> None:
        """Check `key`, reporting at `token`. `key` may differ from the token's text."""
        index = self.index
        if index.is_empty or not key or "$" in key:
            return
        if not index.has_key(key):
            self._sink.report(LOCALIZATION_MISSING, token, name=key)
            return
        missing = index.missing_languages_for_key(key)
        if missing:
            self._sink.report(LOCALIZATION_MISSING_LANGUAGE, token, name=key, languages=", ".join(missing))


__all__ = [
    "LOCALIZATION_DIR",
    "Localization",
    "LocalizationEntry",
    "LocalizationKeyIndex",
    "build_key_index",
    "parse_localization_text",
]
