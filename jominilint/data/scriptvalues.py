"""Script values: named numeric expressions and the grammar that computes them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from jominilint.block.model import BV, Block, Comparator
from jominilint.block.token import Token
from jominilint.block.validator import Validator
from jominilint.context import ScopeContext
from jominilint.db import CallCache
from jominilint.diagnostics.codes import (
    ELSE_IF_WITHOUT_IF,
    ELSE_WITH_LIMIT,
    FIELD_EXPECTED_BLOCK,
    FIELD_EXPECTED_BOOL,
    FIELD_EXPECTED_VALUE,
    ITERATOR_NOT_ALLOWED,
    VALUE_INVALID_RANGE,
    VALUE_NOTHING_YET,
    VALUE_OVERWRITE,
)
from jominilint.helpers import dup_error
from jominilint.item import Item
from jominilint.scopes import Scopes
from jominilint.tables.iterators import scope_iterator
from jominilint.tooltipped import Tooltipped
from jominilint.trigger import validate_normal_trigger, validate_target_ok_this
from jominilint.validate import (
    ListType,
    precheck_iterator_fields,
    split_iterator,
    validate_inside_iterator,
    validate_iterator_fields,
    validate_scope_chain,
)

if TYPE_CHECKING:
    from jominilint.diagnostics.sink import DiagnosticSink
    from jominilint.everything import Everything

logger = logging.getLogger(__name__)


class Accumulation(Enum):
    """Whether the value being computed has been given a starting point."""

    NOT_SET = "not_set"
    SET = "set"
    MAYBE_SET = "maybe_set"


# -------------------------
# Grammar
# -------------------------


def validate_script_value(
    bv: BV,
    data: Everything,
    sc: ScopeContext,
    *,
    check_desc: bool = True,
) -> Accumulation:
    """Validate a literal, a target, a `{ min max }` range, or a calculation block."""
    match bv:
        case Token():
            # Chained script values often use `value = this`.
            validate_target_ok_this(bv, data, sc, Scopes.VALUE | Scopes.BOOL)
            return Accumulation.SET
        case Block():
            if bv.first_item_is_value():
                with Validator(bv, data) as vd:
                    values = vd.values()
                if len(values) == 2:
                    for value in values:
                        validate_target_ok_this(value, data, sc, Scopes.VALUE | Scopes.BOOL)
                else:
                    data.sink.report(VALUE_INVALID_RANGE, bv)
                return Accumulation.SET
            with Validator(bv, data) as vd:
                return validate_inner(vd, data, sc, Accumulation.NOT_SET, check_desc=check_desc)


def validate_inner(
    vd: Validator,
    data: Everything,
    sc: ScopeContext,
    have_value: Accumulation,
    *,
    check_desc: bool = True,
) -> Accumulation:
    """Walk a calculation block's operations in order and return the final state."""
    sink = data.sink
    if check_desc:
        vd.field_item("desc", Item.LOCALIZATION)
        vd.field_item("format", Item.LOCALIZATION)
    else:
        vd.field_value("desc")
        vd.field_value("format")

    seen_if = False
    for item in vd.unknown_fields():
        key, bv = item.key, item.value
        after_if, seen_if = seen_if, False
        name = key.text

        if name == "save_temporary_scope_as":
            if isinstance(bv, Token):
                sc.save_current_scope(bv.text, temporary=True)
            else:
                sink.report(FIELD_EXPECTED_VALUE, bv)
        elif name == "save_temporary_value_as":
            if isinstance(bv, Token):
                sc.define_name(bv.text, Scopes.VALUE, bv, temporary=True)
            else:
                sink.report(FIELD_EXPECTED_VALUE, bv)
        elif name == "value":
            if have_value is Accumulation.SET:
                sink.report(VALUE_OVERWRITE, key)
            have_value = Accumulation.SET
            validate_script_value(bv, data, sc, check_desc=check_desc)
        elif name in ("add", "subtract", "min", "max"):
            have_value = Accumulation.SET
            validate_script_value(bv, data, sc, check_desc=check_desc)
        elif name in ("multiply", "divide", "modulo"):
            if have_value is Accumulation.NOT_SET:
                sink.report(VALUE_NOTHING_YET, key, op=name)
            validate_script_value(bv, data, sc, check_desc=check_desc)
        elif name in ("round", "ceiling", "floor"):
            if have_value is Accumulation.NOT_SET:
                sink.report(VALUE_NOTHING_YET, key, op=name)
            if not isinstance(bv, Token):
                sink.report(FIELD_EXPECTED_VALUE, bv)
            elif not bv.is_bool():
                sink.report(FIELD_EXPECTED_BOOL, bv)
        elif name in ("fixed_range", "integer_range"):
            if have_value is Accumulation.SET:
                sink.report(VALUE_OVERWRITE, key)
            if isinstance(bv, Block):
                _validate_minmax_range(bv, data, sc, check_desc)
            else:
                sink.report(FIELD_EXPECTED_BLOCK, bv)
            have_value = Accumulation.SET
        elif name in ("if", "else_if"):
            if name == "else_if" and not after_if:
                sink.report(ELSE_IF_WITHOUT_IF, key, token=name, if_key="if")
            if isinstance(bv, Block):
                _validate_if(bv, data, sc, check_desc)
            else:
                sink.report(FIELD_EXPECTED_BLOCK, bv)
            have_value = Accumulation.MAYBE_SET
            seen_if = True
        elif name == "else":
            if not after_if:
                sink.report(ELSE_IF_WITHOUT_IF, key, token=name, if_key="if")
            if isinstance(bv, Block):
                # An `else` with a limit still lets another branch follow.
                seen_if = _validate_else(bv, data, sc, check_desc)
            else:
                sink.report(FIELD_EXPECTED_BLOCK, bv)
            have_value = Accumulation.MAYBE_SET
        elif (iterated := _iterator(key)) is not None:
            ltype, list_name, (inscopes, outscope) = iterated
            if ltype is ListType.ANY:
                sink.report(ITERATOR_NOT_ALLOWED, key, prefix=ltype.value, context="script values")
            if not inscopes & Scopes.NONE:
                sc.expect(inscopes, key)
            if isinstance(bv, Block):
                precheck_iterator_fields(ltype, bv, data, sc)
                sc.open_scope(outscope, key)
                _validate_iterator(ltype, list_name, bv, data, sc, check_desc)
                sc.close()
                have_value = Accumulation.MAYBE_SET
            else:
                sink.report(FIELD_EXPECTED_BLOCK, bv)
        else:
            # `liege = { ... }` or `scope:target ?= { ... }`
            sc.open_builder()
            if validate_scope_chain(key, data, sc, item.cmp is Comparator.QUESTION_EQ):
                if isinstance(bv, Block):
                    sc.finalize_builder()
                    with Validator(bv, data) as inner:
                        validate_inner(inner, data, sc, have_value, check_desc=check_desc)
                    have_value = Accumulation.MAYBE_SET
                else:
                    sink.report(FIELD_EXPECTED_BLOCK, bv)
            sc.close()
    return have_value


def _iterator(key: Token) -> tuple[ListType, Token, tuple[Scopes, Scopes]] | None:
    split = split_iterator(key)
    if split is None:
        return None
    ltype, list_name = split
    entry = scope_iterator(list_name.text)
    if entry is None:
        return None
    return ltype, list_name, entry


def _validate_iterator(
    ltype: ListType,
    list_name: Token,
    block: Block,
    data: Everything,
    sc: ScopeContext,
    check_desc: bool,
) -> None:
    with Validator(block, data) as vd:
        vd.field_validated_block("limit", lambda limit, data: validate_normal_trigger(limit, data, sc, Tooltipped.NO))
        validate_iterator_fields(ltype, data, sc, vd, Tooltipped.NO)
        validate_inside_iterator(list_name.text, ltype, block, data, vd)
        validate_inner(vd, data, sc, Accumulation.MAYBE_SET, check_desc=check_desc)


def _validate_minmax_range(block: Block, data: Everything, sc: ScopeContext, check_desc: bool) -> None:
    with Validator(block, data) as vd:
        vd.require("min")
        vd.require("max")
        vd.field_validated_bvs("min", lambda bv, data: validate_script_value(bv, data, sc, check_desc=check_desc))
        vd.field_validated_bvs("max", lambda bv, data: validate_script_value(bv, data, sc, check_desc=check_desc))


def _validate_if(block: Block, data: Everything, sc: ScopeContext, check_desc: bool) -> None:
    with Validator(block, data) as vd:
        vd.require_warn("limit")
        vd.field_validated_block("limit", lambda limit, data: validate_normal_trigger(limit, data, sc, Tooltipped.NO))
        validate_inner(vd, data, sc, Accumulation.MAYBE_SET, check_desc=check_desc)


def _validate_else(block: Block, data: Everything, sc: ScopeContext, check_desc: bool) -> bool:
    def check_limit(key: Token, limit: Block, data: Everything) -> None:
        data.sink.report(ELSE_WITH_LIMIT, key, token="else", else_if_key="else_if")
        validate_normal_trigger(limit, data, sc, Tooltipped.NO)

    with Validator(block, data) as vd:
        limit = vd.field_validated_key_block("limit", check_limit)
        validate_inner(vd, data, sc, Accumulation.MAYBE_SET, check_desc=check_desc)
    return limit is not None


# -------------------------
# Definitions
# -------------------------


@dataclass(slots=True)
class ScriptValue:
    key: Token
    bv: BV
    scope_override: Scopes | None = None
    cache: CallCache = field(default_factory=CallCache)

    def validate(self, data: Everything) -> None:
        # Script values may be plain booleans.
        if isinstance(self.bv, Token) and self.bv.is_bool():
            return
        sc = ScopeContext.new_unrooted(Scopes.all(), self.key, data.sink)
        self.validate_call(self.key, data, sc)

    def validate_call(self, key: Token, data: Everything, sc: ScopeContext) -> None:
        if self.cache.check_compat(key, sc):
            return
        ours = ScopeContext.new_unrooted(Scopes.all(), self.key, data.sink)
        self.cache.insert(key.loc, ours.copy())
        validate_script_value(self.bv, data, ours)
        if self.scope_override is not None:
            ours = ScopeContext.new_unrooted(self.scope_override, self.key, data.sink)
        sc.expect_compatibility(ours, key)
        self.cache.insert(key.loc, ours)


class ScriptValues:
    """All script values, by name."""

    def __init__(self, sink: DiagnosticSink, scope_overrides: dict[str, Scopes] | None = None) -> None:
        self._sink = sink
        self._scope_overrides = dict(scope_overrides or {})
        self._values: dict[str, ScriptValue] = {}

    def __len__(self) -> int:
        return len(self._values)

    def load_item(self, key: Token, bv: BV) -> None:
        other = self._values.get(key.text)
        if other is not None:
            if other.key.loc.kind > key.loc.kind:
                logger.debug("keeping script value %s from %s", key.text, other.key.loc)
                return
            if other.key.loc.kind == key.loc.kind:
                dup_error(self._sink, key, other.key, "script value")
        self._values[key.text] = ScriptValue(key, bv, self._scope_overrides.get(key.text))

    def exists(self, name: str) -> bool:
        return name in self._values

    def get(self, name: str) -> ScriptValue | None:
        return self._values.get(name)

    def validate_call(self, key: Token, data: Everything, sc: ScopeContext) -> None:
        value = self._values.get(key.text)
        if value is not None:
            value.validate_call(key, data, sc)

    def validate(self, data: Everything) -> None:
        for value in self._values.values():
            value.validate(data)


__all__ = [
    "Accumulation",
    "ScriptValue",
    "ScriptValues",
    "validate_inner",
    "validate_script_value",
]
