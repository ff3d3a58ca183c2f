"""Scope inference state threaded through one validation call.

A context tracks which scope types `this` may be, what `root` is, the stack of
enclosing scopes for `prev`, and the names saved with `save_scope_as` and
friends. Checks narrow the sets as they learn more; a check that cannot be
satisfied is reported and leaves the state as it was.
"""

from __future__ import annotations

from dataclasses import dataclass

from jominilint.block.token import Token
from jominilint.diagnostics.codes import (
    SCOPE_INCOMPATIBLE,
    SCOPE_MISMATCH,
    SCOPE_NAME_UNSET,
    DiagnosticSpec,
)
from jominilint.diagnostics.sink import DiagnosticSink
from jominilint.scopes import Scopes


@dataclass(frozen=True, slots=True)
class _Bound:
    scopes: Scopes
    token: Token


@dataclass(frozen=True, slots=True)
class _RootRef:
    pass


@dataclass(frozen=True, slots=True)
class _NamedRef:
    index: int


type _Entry = _Bound | _RootRef | _NamedRef


@dataclass(slots=True)
class _Frame:
    this: _Entry
    is_builder: bool
    names: dict[str, int]
    temporary: frozenset[str]


class ScopeContext:
    """Mutable scope state for one validation entry point."""

    def __init__(
        self,
        root: Scopes,
        token: Token,
        sink: DiagnosticSink,
        *,
        strict: bool = True,
    ) -> None:
        self._root = _Bound(root, token)
        self._this: _Entry = _RootRef()
        self._frames: list[_Frame] = []
        self._names: dict[str, int] = {}
        # Every binding gets a fresh slot and slots only ever narrow to a bound
        # set, so references between slots never form cycles.
        self._named: list[_Entry] = []
        self._temporary: set[str] = set()
        self._required: set[str] = set()
        self._prev_steps = 0
        self._strict = strict
        self._sink = sink

    @classmethod
    def new_unrooted(cls, scopes: Scopes, token: Token, sink: DiagnosticSink) -> ScopeContext:
        """A lenient context whose root is inferred from how it is used."""
        return cls(scopes, token, sink, strict=False)

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def sink(self) -> DiagnosticSink:
        return self._sink

    @property
    def depth(self) -> int:
        return len(self._frames)

    # -------------------------
    # Queries
    # -------------------------

    def scopes(self) -> Scopes:
        return self._lookup(self._this)[0]

    def scopes_token(self) -> tuple[Scopes, Token]:
        return self._lookup(self._this)

    def root_scopes(self) -> Scopes:
        return self._root.scopes

    def can_be(self, scopes: Scopes) -> bool:
        return bool(self.scopes() & scopes)

    def is_name_defined(self, name: str) -> Scopes | None:
        index = self._names.get(name)
        if index is None:
            return None
        return self._lookup(_NamedRef(index))[0]

    def required_names(self) -> frozenset[str]:
        return frozenset(self._required)

    # -------------------------
    # Narrowing
    # -------------------------

    def expect(self, scopes: Scopes, token: Token) -> None:
        """Narrow `this` to `scopes`, or report a mismatch and change nothing."""
        self._this = self._narrow(self._this, scopes, token, reason=token, spec=SCOPE_MISMATCH)

    def expect_compatibility(self, other: ScopeContext, token: Token) -> None:
        """Check another context's requirements against this call site.

        `other` is typically the cached context inferred for a script value or
        scripted trigger. Only this context is narrowed; `other` is never touched.
        """
        theirs, reason = other._root.scopes, other._root.token
        self._this = self._narrow(self._this, theirs, token, reason=reason, spec=SCOPE_INCOMPATIBLE)
        for name in sorted(other._required):
            their_index = other._names.get(name)
            if their_index is None:
                continue
            their_scopes, their_reason = other._lookup(_NamedRef(their_index))
            our_index = self._names.get(name)
            if our_index is None:
                if not self._strict:
                    self._required.add(name)
                    self._bind(name, _Bound(their_scopes, their_reason), temporary=False)
                continue
            self._narrow(
                _NamedRef(our_index),
                their_scopes,
                token,
                reason=their_reason,
                spec=SCOPE_INCOMPATIBLE,
            )

    # -------------------------
    # Nesting
    # -------------------------

    def open_scope(self, scopes: Scopes, token: Token) -> None:
        self._push(is_builder=False)
        self._this = _Bound(scopes, token)

    def open_builder(self) -> None:
        """Start resolving a chain such as `liege.primary_title.holder`.

        Chain steps replace `this`; `finalize_builder` commits the result as a
        regular nested scope and `close` discards it.
        """
        self._push(is_builder=True)
        self._prev_steps = 0

    def finalize_builder(self) -> None:
        self._frames[-1].is_builder = False

    def close(self) -> None:
        frame = self._frames.pop()
        self._this = frame.this
        for name in list(self._names):
            if name not in self._temporary:
                continue
            before = frame.names.get(name)
            if before is None:
                del self._names[name]
            else:
                self._names[name] = before
        self._temporary = {name for name in frame.temporary if self._names.get(name) == frame.names.get(name)}

    def _push(self, *, is_builder: bool) -> None:
        self._frames.append(
            _Frame(
                this=self._this,
                is_builder=is_builder,
                names=dict(self._names),
                temporary=frozenset(self._temporary),
            )
        )

    # -------------------------
    # Chain steps
    # -------------------------

    def replace(self, scopes: Scopes, token: Token) -> None:
        self._this = _Bound(scopes, token)

    def replace_root(self) -> None:
        self._this = _RootRef()

    def replace_this(self) -> None:
        self._this = self._frames[-1].this

    def replace_prev(self, token: Token) -> None:
        self._prev_steps += 1
        seen = 0
        for frame in reversed(self._frames):
            if frame.is_builder:
                continue
            seen += 1
            if seen == self._prev_steps:
                self._this = frame.this
                return
        self._this = _Bound(Scopes.all_but_none(), token)

    def replace_named_scope(self, name: str, token: Token, *, optional: bool = False) -> None:
        """Step to `scope:name`. `optional` is for `?=`, which tolerates an unset name."""
        index = self._names.get(name)
        if index is None:
            if self._strict and not optional:
                self._sink.report(SCOPE_NAME_UNSET, token, name=name)
            elif not self._strict:
                self._required.add(name)
            index = self._bind(name, _Bound(Scopes.all_but_none(), token), temporary=False)
        self._this = _NamedRef(index)

    # -------------------------
    # Names
    # -------------------------

    def save_current_scope(self, name: str, *, temporary: bool = False) -> None:
        """Bind `name` to wherever `this` currently points."""
        self._bind(name, self._resolve(self._this), temporary=temporary)

    def define_name(self, name: str, scopes: Scopes, token: Token, *, temporary: bool = False) -> None:
        self._bind(name, _Bound(scopes, token), temporary=temporary)

    def _bind(self, name: str, entry: _Entry, *, temporary: bool) -> int:
        index = len(self._named)
        self._named.append(entry)
        self._names[name] = index
        if temporary:
            self._temporary.add(name)
        else:
            self._temporary.discard(name)
        return index

    # -------------------------
    # Internals
    # -------------------------

    def _resolve(self, entry: _Entry) -> _Entry:
        """Follow named references until reaching the root or a bound slot."""
        while isinstance(entry, _NamedRef):
            target = self._named[entry.index]
            if isinstance(target, _Bound):
                return entry
            entry = target
        return entry

    def _lookup(self, entry: _Entry) -> tuple[Scopes, Token]:
        match self._resolve(entry):
            case _Bound(scopes=scopes, token=token):
                return scopes, token
            case _RootRef():
                return self._root.scopes, self._root.token
            case _NamedRef(index=index):
                match self._named[index]:
                    case _Bound(scopes=scopes, token=token):
                        return scopes, token
                raise TypeError(f"named scope slot {index} is unbound")

    def _narrow(
        self,
        entry: _Entry,
        scopes: Scopes,
        token: Token,
        *,
        reason: Token,
        spec: DiagnosticSpec,
    ) -> _Entry:
        current, deduced_from = self._lookup(entry)
        narrowed = current & scopes
        if not narrowed:
            related = [(deduced_from, f"scope was deduced from `{deduced_from}` here")]
            if reason is not token:
                related.append((reason, f"expected scope was deduced from `{reason}` here"))
            self._sink.report(
                spec,
                token,
                severity=None if self._strict else "advice",
                related=related,
                token=token,
                expected=scopes.to_text(),
                actual=current.to_text(),
            )
            return entry
        bound = _Bound(narrowed, reason)
        match self._resolve(entry):
            case _RootRef():
                self._root = bound
                return entry
            case _NamedRef(index=index):
                self._named[index] = bound
                return entry
            case _Bound():
                return bound

    def copy(self) -> ScopeContext:
        other = ScopeContext.__new__(ScopeContext)
        other._root = self._root
        other._this = self._this
        other._frames = [
            _Frame(frame.this, frame.is_builder, dict(frame.names), frame.temporary) for frame in self._frames
        ]
        other._names = dict(self._names)
        other._named = list(self._named)
        other._temporary = set(self._temporary)
        other._required = set(self._required)
        other._prev_steps = self._prev_steps
        other._strict = self._strict
        other._sink = self._sink
        return other


__all__ = ["ScopeContext"]
