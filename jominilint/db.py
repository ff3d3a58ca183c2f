"""Keyed store of named definitions and the per-definition call cache."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from jominilint.block.model import Block
from jominilint.block.token import Loc, Token
from jominilint.context import ScopeContext
from jominilint.diagnostics.sink import DiagnosticSink
from jominilint.helpers import dup_assert_error
from jominilint.item import Item

if TYPE_CHECKING:
    from jominilint.everything import Everything

logger = logging.getLogger(__name__)


class DbKind(Protocol):
    """Validation behaviour attached to every entry of one content kind."""

    def validate(self, key: Token, block: Block, data: Everything) -> None: ...


class CallableDbKind(DbKind, Protocol):
    """A kind whose definitions can be invoked from script, such as scripted triggers."""

    def validate_call(self, key: Token, block: Block, caller: Token, data: Everything, sc: ScopeContext) -> None: ...


@dataclass(slots=True)
class CallCache:
    """Inferred contexts of one definition, keyed by call site.

    An entry is stored before the definition's body is validated, so a call
    that comes back around to the same site only gets a compatibility check.
    """

    _entries: dict[Loc, ScopeContext] = field(default_factory=dict)

    def __contains__(self, loc: Loc) -> bool:
        return loc in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, loc: Loc) -> ScopeContext | None:
        return self._entries.get(loc)

    def insert(self, loc: Loc, sc: ScopeContext) -> None:
        self._entries[loc] = sc

    def check_compat(self, key: Token, sc: ScopeContext) -> bool:
        """Check `sc` against the cached context for `key`'s call site, if there is one."""
        cached = self._entries.get(key.loc)
        if cached is None:
            return False
        sc.expect_compatibility(cached, key)
        return True


@dataclass(slots=True)
class DbEntry:
    key: Token
    block: Block
    kind: DbKind


class Db:
    """Named definitions of every loader-backed item kind."""

    def __init__(self, sink: DiagnosticSink) -> None:
        self._sink = sink
        self._items: dict[Item, dict[str, DbEntry]] = {}

    def add(self, item: Item, key: Token, block: Block, kind: DbKind) -> None:
        """Register a definition.

        A definition from a higher-precedence file replaces an existing one
        silently; a duplicate within the same tier is reported.
        """
        entries = self._items.setdefault(item, {})
        other = entries.get(key.text)
        if other is not None:
            if other.key.loc.kind > key.loc.kind:
                logger.debug("keeping %s %s from %s", item.label, key.text, other.key.loc)
                return
            if other.key.loc.kind == key.loc.kind:
                dup_assert_error(self._sink, key, other.key, item.label)
        entries[key.text] = DbEntry(key, block, kind)

    def exists(self, item: Item, name: str) -> bool:
        return name in self._items.get(item, {})

    def get(self, item: Item, name: str) -> DbEntry | None:
        return self._items.get(item, {}).get(name)

    def count(self, item: Item) -> int:
        return len(self._items.get(item, {}))

    def validate_call(self, item: Item, key: Token, data: Everything, sc: ScopeContext) -> None:
        entry = self.get(item, key.text)
        if entry is None:
            return
        validate_call = getattr(entry.kind, "validate_call", None)
        if validate_call is not None:
            validate_call(entry.key, entry.block, key, data, sc)

    def iter_entries(self) -> Iterator[DbEntry]:
        """Every definition, grouped by item kind in registration order."""
        for entries in self._items.values():
            yield from entries.values()

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._items.values())


__all__ = ["CallCache", "CallableDbKind", "Db", "DbEntry", "DbKind"]
