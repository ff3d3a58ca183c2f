"""Game and mod file discovery with override resolution, plus asset lookups."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from jominilint.block.token import FileKind, Loc

logger = logging.getLogger(__name__)


class AssetLookupStatus(StrEnum):
    """Asset lookup status for registry-backed checks."""

    FOUND = "found"
    MISSING = "missing"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class AssetLookup:
    """Result of a registry lookup for one logical asset path."""

    status: AssetLookupStatus
    normalized_path: str


class AssetRegistry(Protocol):
    """Abstract asset registry used to resolve file references."""

    def lookup(self, path: str) -> AssetLookup: ...


@dataclass(frozen=True, slots=True)
class SetAssetRegistry:
    """Simple in-memory registry for tests and local wiring."""

    known_paths: frozenset[str]

    def lookup(self, path: str) -> AssetLookup:
        normalized = normalize_path(path)
        if normalized in self.known_paths:
            return AssetLookup(status=AssetLookupStatus.FOUND, normalized_path=normalized)
        return AssetLookup(status=AssetLookupStatus.MISSING, normalized_path=normalized)


@dataclass(frozen=True, slots=True)
class FileEntry:
    """One script or asset file, by its path relative to its root."""

    path: str
    kind: FileKind
    fullpath: Path

    @property
    def loc(self) -> Loc:
        return Loc(self.path, kind=self.kind)


class Fileset:
    """All files of the base game and one mod.

    A mod file with the same relative path as a base game file replaces it.
    Lookups report UNKNOWN until at least one root has been scanned.
    """

    def __init__(self, *, vanilla_root: Path | None = None, mod_root: Path | None = None) -> None:
        self.vanilla_root = vanilla_root
        self.mod_root = mod_root
        self._files: dict[str, FileEntry] = {}
        self._scanned = False

    @property
    def is_empty(self) -> bool:
        return not self._scanned

    def scan(self) -> None:
        for root, kind in ((self.vanilla_root, FileKind.VANILLA), (self.mod_root, FileKind.MOD)):
            if root is None:
                continue
            if not root.is_dir():
                logger.warning("skipping %s root %s: not a directory", kind.label.lower(), root)
                continue
            count = 0
            for fullpath in sorted(root.rglob("*")):
                if not fullpath.is_file():
                    continue
                relative = normalize_path(str(fullpath.relative_to(root)))
                self.add_entry(FileEntry(relative, kind, fullpath))
                count += 1
            logger.info("found %d files under %s", count, root)
        self._scanned = True

    def add_entry(self, entry: FileEntry) -> None:
        existing = self._files.get(entry.path)
        if existing is not None and existing.kind > entry.kind:
            return
        if existing is not None:
            logger.debug("%s overrides %s", entry.fullpath, existing.fullpath)
        self._files[entry.path] = entry
        self._scanned = True

    @property
    def entries(self) -> list[FileEntry]:
        return [self._files[path] for path in sorted(self._files)]

    def get_files_under(self, subpath: str, suffix: str | None = ".txt") -> list[FileEntry]:
        prefix = normalize_path(subpath).rstrip("/") + "/"
        return [
            entry
            for entry in self.entries
            if entry.path.startswith(prefix) and (suffix is None or entry.path.endswith(suffix))
        ]

    def exists(self, path: str) -> bool:
        return normalize_path(path) in self._files

    def lookup(self, path: str) -> AssetLookup:
        normalized = normalize_path(path)
        if not self._scanned:
            return AssetLookup(status=AssetLookupStatus.UNKNOWN, normalized_path=normalized)
        if normalized in self._files:
            return AssetLookup(status=AssetLookupStatus.FOUND, normalized_path=normalized)
        return AssetLookup(status=AssetLookupStatus.MISSING, normalized_path=normalized)


def normalize_path(path: str) -> str:
    stripped = path.strip()
    if not stripped:
        return ""
    return stripped.replace("\\", "/").removeprefix("./")


__all__ = [
    "AssetLookup",
    "AssetLookupStatus",
    "AssetRegistry",
    "FileEntry",
    "Fileset",
    "SetAssetRegistry",
    "normalize_path",
]
