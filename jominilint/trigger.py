"""Trigger grammar: boolean conditions evaluated against the current scope."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jominilint.block.model import BV, Block, Comparator
from jominilint.block.token import Token
from jominilint.block.validator import Validator
from jominilint.context import ScopeContext
from jominilint.diagnostics.codes import (
    EFFECT_IN_TRIGGER,
    ELSE_IF_WITHOUT_IF,
    ELSE_WITH_LIMIT,
    EXISTS_IN_NONE_SCOPE,
    FIELD_EXPECTED_BLOCK,
    FIELD_EXPECTED_BOOL,
    FIELD_EXPECTED_CHOICE,
    FIELD_EXPECTED_VALUE,
    FIELD_EXPECTED_YES,
    FIELD_UNEXPECTED_COMPARATOR,
    ITERATOR_NOT_ALLOWED,
    LIMIT_NOT_ALLOWED,
    SCOPE_REDUNDANT_THIS,
    SCOPE_TARGET_MISMATCH,
    TOOLTIP_NEVER_SHOWN,
)
from jominilint.item import Item
from jominilint.scopes import Scopes
from jominilint.tables.args import (
    ArgKind,
    Boolean,
    Choice,
    CompareValue,
    ItemRef,
    Special,
    Target,
    UncheckedValue,
    Yes,
)
from jominilint.tables.effects import scope_effect
from jominilint.tables.iterators import scope_iterator
from jominilint.tables.triggers import scope_trigger, scope_value
from jominilint.tooltipped import Tooltipped
from jominilint.validate import (
    ListType,
    precheck_iterator_fields,
    split_iterator,
    validate_chain_step,
    validate_inside_iterator,
    validate_iterator_fields,
    validate_scope_chain,
    validate_scope_chain_parts,
)

if TYPE_CHECKING:
    from jominilint.everything import Everything

_COMBINATORS = frozenset({"AND", "OR", "NOT", "NOR", "NAND", "all_false", "any_false"})


def validate_normal_trigger(block: Block, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    with Validator(block, data) as vd:
        validate_trigger_internal(vd, data, sc, tooltipped)


def validate_trigger_internal(vd: Validator, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    """Validate every field `vd` has not claimed yet as a trigger."""
    sink = data.sink
    seen_if = False
    for field in vd.unknown_fields():
        key, cmp, bv = field.key, field.cmp, field.value
        after_if, seen_if = seen_if, False

        if key.is_("limit"):
            sink.report(LIMIT_NOT_ALLOWED, key)
            if isinstance(bv, Block):
                validate_normal_trigger(bv, data, sc, Tooltipped.NO)
        elif key.is_("trigger_if") or key.is_("trigger_else_if"):
            if key.is_("trigger_else_if") and not after_if:
                sink.report(ELSE_IF_WITHOUT_IF, key, token=key.text, if_key="trigger_if")
            block = _expect_block(bv, data)
            if block is not None:
                _validate_trigger_if(block, data, sc, tooltipped)
            seen_if = True
        elif key.is_("trigger_else"):
            if not after_if:
                sink.report(ELSE_IF_WITHOUT_IF, key, token=key.text, if_key="trigger_if")
            block = _expect_block(bv, data)
            if block is not None:
                with Validator(block, data) as inner:
                    limit = inner.field_validated_key_block(
                        "limit",
                        lambda limit_key, limit_block, data: _else_limit(
                            limit_key, limit_block, data, sc, "trigger_else_if"
                        ),
                    )
                    validate_trigger_internal(inner, data, sc, tooltipped)
                # An `else` with a limit still lets another branch follow.
                seen_if = limit is not None
        else:
            validate_trigger_key_bv(key, cmp, bv, data, sc, tooltipped)


def _else_limit(key: Token, block: Block, data: Everything, sc: ScopeContext, else_if_key: str) -> None:
    data.sink.report(ELSE_WITH_LIMIT, key, token=key.text, else_if_key=else_if_key)
    validate_normal_trigger(block, data, sc, Tooltipped.NO)


def _validate_trigger_if(block: Block, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    with Validator(block, data) as vd:
        vd.require_warn("limit")
        vd.field_validated_block("limit", lambda limit, data: validate_normal_trigger(limit, data, sc, Tooltipped.NO))
        validate_trigger_internal(vd, data, sc, tooltipped)


def _expect_block(bv: BV, data: Everything) -> Block | None:
    if isinstance(bv, Block):
        return bv
    data.sink.report(FIELD_EXPECTED_BLOCK, bv)
    return None


def validate_trigger_key_bv(
    key: Token,
    cmp: Comparator,
    bv: BV,
    data: Everything,
    sc: ScopeContext,
    tooltipped: Tooltipped,
) -> None:
    """Validate one `key cmp value` trigger."""
    from jominilint.data.scriptvalues import validate_script_value

    sink = data.sink
    name = key.text

    if name in _COMBINATORS:
        block = _expect_block(bv, data)
        if block is not None:
            validate_normal_trigger(block, data, sc, tooltipped)
        return

    if name in ("custom_description", "custom_tooltip"):
        if tooltipped is Tooltipped.NO:
            sink.report(TOOLTIP_NEVER_SHOWN, key, token=name)
        _validate_custom_trigger(key, bv, data, sc)
        return

    if name == "calc_true_if":
        block = _expect_block(bv, data)
        if block is not None:
            with Validator(block, data) as vd:
                vd.require("amount")
                amount = vd.field_any_cmp("amount")
                if amount is not None:
                    validate_script_value(amount.value, data, sc)
                validate_trigger_internal(vd, data, sc, tooltipped)
        return

    if name == "exists":
        if isinstance(bv, Token):
            if bv.is_bool():
                # `exists = yes` tests the current scope itself.
                if sc.scopes() == Scopes.NONE:
                    sink.report(EXISTS_IN_NONE_SCOPE, key, value=bv.text)
                return
            sc.open_builder()
            validate_scope_chain(bv, data, sc, qeq=True)
            sc.close()
        else:
            sink.report(FIELD_EXPECTED_VALUE, bv)
        return

    iterator = split_iterator(key)
    if iterator is not None:
        ltype, list_name = iterator
        entry = scope_iterator(list_name.text)
        if entry is not None:
            if ltype is not ListType.ANY:
                sink.report(ITERATOR_NOT_ALLOWED, key, prefix=ltype.value, context="triggers")
            block = _expect_block(bv, data)
            if block is not None:
                _validate_trigger_iterator(ltype, list_name, key, block, entry, data, sc, tooltipped)
            return

    if data.exists(Item.SCRIPTED_TRIGGER, name):
        if isinstance(bv, Token) and not bv.is_bool():
            sink.report(FIELD_EXPECTED_BOOL, bv)
        data.validate_call(Item.SCRIPTED_TRIGGER, key, sc)
        return

    entry = scope_trigger(name)
    if entry is not None:
        inscopes, arg = entry
        if not inscopes & Scopes.NONE:
            sc.expect(inscopes, key)
        if cmp.is_ordering and not isinstance(arg, CompareValue):
            sink.report(FIELD_UNEXPECTED_COMPARATOR, key, cmp=cmp.value)
        validate_argument(key, arg, bv, data, sc)
        return

    if data.script_values.exists(name):
        data.script_values.validate_call(key, data, sc)
        validate_script_value(bv, data, sc)
        return

    if scope_effect(name) is not None:
        sink.report(EFFECT_IN_TRIGGER, key, token=name)
        return

    _validate_trigger_chain(key, cmp, bv, data, sc, tooltipped)


def _validate_trigger_chain(
    key: Token,
    cmp: Comparator,
    bv: BV,
    data: Everything,
    sc: ScopeContext,
    tooltipped: Tooltipped,
) -> None:
    """`liege = { ... }`, `liege.gold > 5` or `scope:target = scope:actor`."""
    parts = key.split(".")
    last = parts[-1]
    sc.open_builder()
    if len(parts) > 1 and (scope_trigger(last.text) is not None or data.script_values.exists(last.text)):
        if validate_scope_chain_parts(parts[:-1], data, sc):
            sc.finalize_builder()
            validate_trigger_key_bv(last, cmp, bv, data, sc, tooltipped)
        sc.close()
        return

    if not validate_scope_chain(key, data, sc, cmp is Comparator.QUESTION_EQ):
        sc.close()
        return
    match bv:
        case Block():
            sc.finalize_builder()
            validate_normal_trigger(bv, data, sc, tooltipped)
            sc.close()
        case Token():
            scopes = sc.scopes()
            sc.close()
            validate_target_ok_this(bv, data, sc, scopes)


def _validate_trigger_iterator(
    ltype: ListType,
    list_name: Token,
    key: Token,
    block: Block,
    entry: tuple[Scopes, Scopes],
    data: Everything,
    sc: ScopeContext,
    tooltipped: Tooltipped,
) -> None:
    inscopes, outscope = entry
    if not inscopes & Scopes.NONE:
        sc.expect(inscopes, key)
    precheck_iterator_fields(ltype, block, data, sc)
    sc.open_scope(outscope, key)
    with Validator(block, data) as vd:
        inner = validate_iterator_fields(ltype, data, sc, vd, tooltipped)
        validate_inside_iterator(list_name.text, ltype, block, data, vd)
        validate_trigger_internal(vd, data, sc, inner)
    sc.close()


def _validate_custom_trigger(key: Token, bv: BV, data: Everything, sc: ScopeContext) -> None:
    match bv:
        case Token():
            data.verify_exists(Item.LOCALIZATION, bv)
        case Block():
            with Validator(bv, data) as vd:
                vd.require("text")
                vd.field_item("text", Item.LOCALIZATION)
                vd.field_target_ok_this("subject", sc, Scopes.all_but_none())
                if key.is_("custom_description"):
                    vd.field_target_ok_this("object", sc, Scopes.all_but_none())
                    vd.field_script_value("value", sc)
                validate_trigger_internal(vd, data, sc, Tooltipped.NO)


def validate_argument(key: Token, arg: ArgKind, bv: BV, data: Everything, sc: ScopeContext) -> None:
    """Check a table trigger or effect argument against its declared kind."""
    from jominilint.data.scriptvalues import validate_script_value

    sink = data.sink
    match arg:
        case CompareValue():
            validate_script_value(bv, data, sc)
            return
        case Special():
            return
        case _:
            pass
    if not isinstance(bv, Token):
        sink.report(FIELD_EXPECTED_VALUE, bv)
        return
    match arg:
        case Boolean():
            if not bv.is_bool():
                sink.report(FIELD_EXPECTED_BOOL, bv)
        case Yes():
            if not bv.is_("yes"):
                sink.report(FIELD_EXPECTED_YES, bv, key=key.text)
        case ItemRef(item=item):
            data.verify_exists(item, bv)
        case Target(scopes=scopes):
            validate_target(bv, data, sc, scopes)
        case Choice(choices=choices):
            if bv.text not in choices:
                sink.report(FIELD_EXPECTED_CHOICE, bv, choices=", ".join(choices))
        case UncheckedValue():
            pass


# -------------------------
# Targets
# -------------------------


def validate_target(token: Token, data: Everything, sc: ScopeContext, outscopes: Scopes) -> None:
    """A scope reference such as `scope:actor` or `root.liege` that must produce `outscopes`."""
    if token.lowercase_is("this"):
        data.sink.report(SCOPE_REDUNDANT_THIS, token)
    validate_target_ok_this(token, data, sc, outscopes)


def validate_target_ok_this(token: Token, data: Everything, sc: ScopeContext, outscopes: Scopes) -> None:
    """Like `validate_target`, for places where plain `this` is meaningful."""
    sink = data.sink
    if token.is_number() or token.starts_with("@"):
        _check_produces(token, Scopes.VALUE, outscopes, data)
        return
    if token.is_bool():
        _check_produces(token, Scopes.BOOL, outscopes, data)
        return

    parts = token.split(".")
    sc.open_builder()
    previous: Token | None = None
    for index, part in enumerate(parts):
        first = index == 0
        last = index == len(parts) - 1
        if last and ":" not in part.text and (value_scopes := scope_value(part.text)) is not None:
            if not value_scopes & Scopes.NONE:
                sc.expect(value_scopes, part)
            sc.replace(Scopes.VALUE, part)
        elif last and data.script_values.exists(part.text):
            data.script_values.validate_call(part, data, sc)
            sc.replace(Scopes.VALUE, part)
        elif not validate_chain_step(part, first=first, last=last, previous=previous, data=data, sc=sc):
            sc.close()
            return
        previous = part
    final, because = sc.scopes_token()
    sc.close()
    if not final & (outscopes | Scopes.NONE):
        sink.report(
            SCOPE_TARGET_MISMATCH,
            token,
            related=[(because, f"scope was deduced from `{because}` here")],
            token=token.text,
            actual=final.to_text(),
            expected=outscopes.to_text(),
        )


def _check_produces(token: Token, produces: Scopes, outscopes: Scopes, data: Everything) -> None:
    if not produces & (outscopes | Scopes.NONE):
        data.sink.report(
            SCOPE_TARGET_MISMATCH,
            token,
            token=token.text,
            actual=produces.to_text(),
            expected=outscopes.to_text(),
        )


__all__ = [
    "validate_argument",
    "validate_normal_trigger",
    "validate_target",
    "validate_target_ok_this",
    "validate_trigger_internal",
    "validate_trigger_key_bv",
]
