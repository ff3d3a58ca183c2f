"""Effect grammar: state changes applied to the current scope."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from jominilint.block.model import BV, Block, Comparator
from jominilint.block.token import Token
from jominilint.block.validator import Validator
from jominilint.context import ScopeContext
from jominilint.data.scriptvalues import validate_script_value
from jominilint.diagnostics.codes import (
    ELSE_IF_WITHOUT_IF,
    ELSE_WITH_LIMIT,
    FIELD_EXPECTED_BLOCK,
    FIELD_EXPECTED_NUMBER,
    FIELD_EXPECTED_VALUE,
    FIELD_EXPECTED_YES,
    FIELD_MISSING,
    FIELD_UNEXPECTED_COMPARATOR,
    ITERATOR_NOT_ALLOWED,
    LIMIT_NOT_ALLOWED,
    TRIGGER_IN_EFFECT,
)
from jominilint.item import Item
from jominilint.scopes import Scopes
from jominilint.tables.effects import scope_effect
from jominilint.tables.iterators import scope_iterator
from jominilint.tables.triggers import scope_trigger
from jominilint.tooltipped import Tooltipped
from jominilint.trigger import validate_argument, validate_normal_trigger, validate_target_ok_this
from jominilint.validate import (
    ListType,
    precheck_iterator_fields,
    split_iterator,
    validate_inside_iterator,
    validate_iterator_fields,
    validate_modifiers,
    validate_scope_chain,
)

if TYPE_CHECKING:
    from jominilint.everything import Everything


def validate_normal_effect(block: Block, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    with Validator(block, data) as vd:
        validate_effect_internal(vd, data, sc, tooltipped)


def validate_effect_internal(vd: Validator, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    """Validate every field `vd` has not claimed yet as an effect."""
    sink = data.sink
    seen_if = False
    for field in vd.unknown_fields():
        key, cmp, bv = field.key, field.cmp, field.value
        after_if, seen_if = seen_if, False

        if key.is_("limit"):
            sink.report(LIMIT_NOT_ALLOWED, key)
        elif key.is_("if") or key.is_("else_if"):
            if key.is_("else_if") and not after_if:
                sink.report(ELSE_IF_WITHOUT_IF, key, token=key.text, if_key="if")
            block = _expect_block(bv, data)
            if block is not None:
                _validate_effect_if(block, data, sc, tooltipped)
            seen_if = True
        elif key.is_("else"):
            if not after_if:
                sink.report(ELSE_IF_WITHOUT_IF, key, token=key.text, if_key="if")
            block = _expect_block(bv, data)
            if block is not None:
                seen_if = _validate_effect_else(block, data, sc, tooltipped)
        else:
            validate_effect_key_bv(key, cmp, bv, data, sc, tooltipped)


def _expect_block(bv: BV, data: Everything) -> Block | None:
    if isinstance(bv, Block):
        return bv
    data.sink.report(FIELD_EXPECTED_BLOCK, bv)
    return None


def _validate_effect_if(block: Block, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    with Validator(block, data) as vd:
        vd.require_warn("limit")
        vd.field_validated_block("limit", lambda limit, data: validate_normal_trigger(limit, data, sc, tooltipped))
        validate_effect_internal(vd, data, sc, tooltipped)


def _validate_effect_else(block: Block, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> bool:
    """Returns whether the `else` had a limit, which lets another branch follow it."""

    def check_limit(key: Token, limit: Block, data: Everything) -> None:
        data.sink.report(ELSE_WITH_LIMIT, key, token="else", else_if_key="else_if")
        validate_normal_trigger(limit, data, sc, tooltipped)

    with Validator(block, data) as vd:
        limit = vd.field_validated_key_block("limit", check_limit)
        validate_effect_internal(vd, data, sc, tooltipped)
    return limit is not None


def validate_effect_key_bv(
    key: Token,
    cmp: Comparator,
    bv: BV,
    data: Everything,
    sc: ScopeContext,
    tooltipped: Tooltipped,
) -> None:
    """Validate one `key = value` effect."""
    sink = data.sink
    name = key.text

    special = _SPECIAL_EFFECTS.get(name)
    if special is not None:
        special(key, bv, data, sc, tooltipped)
        return

    iterator = split_iterator(key)
    if iterator is not None:
        ltype, list_name = iterator
        entry = scope_iterator(list_name.text)
        if entry is not None:
            if ltype is ListType.ANY:
                sink.report(ITERATOR_NOT_ALLOWED, key, prefix=ltype.value, context="effects")
            block = _expect_block(bv, data)
            if block is not None:
                _validate_effect_iterator(ltype, list_name, key, block, entry, data, sc, tooltipped)
            return

    if data.exists(Item.SCRIPTED_EFFECT, name):
        if isinstance(bv, Token) and not bv.is_("yes"):
            sink.report(FIELD_EXPECTED_YES, bv, key=name)
        data.validate_call(Item.SCRIPTED_EFFECT, key, sc)
        return

    entry = scope_effect(name)
    if entry is not None:
        inscopes, arg = entry
        if not inscopes & Scopes.NONE:
            sc.expect(inscopes, key)
        if cmp is not Comparator.EQ:
            sink.report(FIELD_UNEXPECTED_COMPARATOR, key, cmp=cmp.value)
        validate_argument(key, arg, bv, data, sc)
        return

    if scope_trigger(name) is not None:
        sink.report(TRIGGER_IN_EFFECT, key, token=name)
        return

    sc.open_builder()
    if validate_scope_chain(key, data, sc, cmp is Comparator.QUESTION_EQ):
        block = _expect_block(bv, data)
        if block is not None:
            sc.finalize_builder()
            validate_normal_effect(block, data, sc, tooltipped)
    sc.close()


def _validate_effect_iterator(
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
        vd.field_blocks("limit", lambda limit, data: validate_normal_trigger(limit, data, sc, tooltipped))
        inner = validate_iterator_fields(ltype, data, sc, vd, tooltipped)
        validate_inside_iterator(list_name.text, ltype, block, data, vd)
        validate_effect_internal(vd, data, sc, inner)
    sc.close()


# -------------------------
# Effects with their own grammar
# -------------------------


def _hidden_effect(key: Token, bv: BV, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    block = _expect_block(bv, data)
    if block is not None:
        validate_normal_effect(block, data, sc, Tooltipped.NO)


def _show_as_tooltip(key: Token, bv: BV, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    block = _expect_block(bv, data)
    if block is not None:
        validate_normal_effect(block, data, sc, Tooltipped.YES)


def _custom_tooltip(key: Token, bv: BV, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    match bv:
        case Token():
            data.verify_exists(Item.LOCALIZATION, bv)
        case Block():
            with Validator(bv, data) as vd:
                vd.field_item("text", Item.LOCALIZATION)
                vd.field_target_ok_this("subject", sc, Scopes.all_but_none())
                validate_effect_internal(vd, data, sc, Tooltipped.NO)


def _random(key: Token, bv: BV, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    block = _expect_block(bv, data)
    if block is None:
        return
    with Validator(block, data) as vd:
        vd.require("chance")
        vd.field_script_value("chance", sc)
        validate_modifiers(vd, sc)
        validate_effect_internal(vd, data, sc, tooltipped)


def _random_list(key: Token, bv: BV, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    block = _expect_block(bv, data)
    if block is None:
        return
    with Validator(block, data) as vd:
        vd.field_item("desc", Item.LOCALIZATION)
        for weight, option in vd.unknown_block_fields():
            if not weight.is_number() and not data.script_values.exists(weight.text):
                data.sink.report(FIELD_EXPECTED_NUMBER, weight)
            with Validator(option, data) as inner:
                inner.field_validated_block(
                    "trigger",
                    lambda trigger, data: validate_normal_trigger(trigger, data, sc, Tooltipped.NO),
                )
                inner.field_bool("show_chance")
                inner.field_item("desc", Item.LOCALIZATION)
                validate_modifiers(inner, sc)
                validate_effect_internal(inner, data, sc, tooltipped)


def _save_scope(key: Token, bv: BV, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    if not isinstance(bv, Token):
        data.sink.report(FIELD_EXPECTED_VALUE, bv)
        return
    sc.save_current_scope(bv.text, temporary=key.is_("save_temporary_scope_as"))


def _save_scope_value(key: Token, bv: BV, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    block = _expect_block(bv, data)
    if block is None:
        return
    with Validator(block, data) as vd:
        vd.require("name")
        vd.require("value")
        name = vd.field_value("name")
        vd.field_script_value("value", sc)
        if name is not None:
            temporary = key.is_("save_temporary_scope_value_as")
            sc.define_name(name.text, Scopes.VALUE, name, temporary=temporary)


def _set_variable(key: Token, bv: BV, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    match bv:
        case Token():
            return
        case Block():
            with Validator(bv, data) as vd:
                vd.require("name")
                vd.field_value("name")
                value = vd.field("value")
                match value:
                    case Token() if not value.is_number():
                        validate_target_ok_this(value, data, sc, Scopes.all_but_none())
                    case None:
                        pass
                    case _:
                        validate_script_value(value, data, sc)
                for unit in ("days", "months", "years"):
                    vd.field_script_value(unit, sc)


def _trigger_event(key: Token, bv: BV, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    match bv:
        case Token():
            data.verify_exists(Item.EVENT, bv)
        case Block():
            with Validator(bv, data) as vd:
                if not bv.has_key("id") and not bv.has_key("on_action"):
                    data.sink.report(FIELD_MISSING, bv, key="id")
                vd.field_item("id", Item.EVENT)
                vd.field_value("on_action")
                vd.field_bool("delayed")
                for unit in ("days", "months", "years"):
                    vd.field_script_value(unit, sc)


def _create_character(key: Token, bv: BV, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    from jominilint.data.character_templates import validate_character_fields

    block = _expect_block(bv, data)
    if block is None:
        return
    with Validator(block, data) as vd:
        vd.field_target("location", sc, Scopes.PROVINCE)
        vd.field_target("employer", sc, Scopes.CHARACTER)
        template = vd.field_item("template", Item.CHARACTER_TEMPLATE)
        if template is not None:
            data.validate_call(Item.CHARACTER_TEMPLATE, template, sc)
        validate_character_fields(vd, data, sc)
        for save_key in ("save_scope_as", "save_temporary_scope_as"):
            name = vd.field_value(save_key)
            if name is not None:
                sc.define_name(name.text, Scopes.CHARACTER, name, temporary=save_key == "save_temporary_scope_as")


def _add_character_modifier(
    key: Token,
    bv: BV,
    data: Everything,
    sc: ScopeContext,
    tooltipped: Tooltipped,
) -> None:
    sc.expect(Scopes.CHARACTER, key)
    match bv:
        case Token():
            data.verify_exists(Item.MODIFIER, bv)
        case Block():
            with Validator(bv, data) as vd:
                vd.require("modifier")
                vd.field_item("modifier", Item.MODIFIER)
                for unit in ("days", "months", "years"):
                    vd.field_script_value(unit, sc)


def _while(key: Token, bv: BV, data: Everything, sc: ScopeContext, tooltipped: Tooltipped) -> None:
    block = _expect_block(bv, data)
    if block is None:
        return
    with Validator(block, data) as vd:
        if not block.has_key("limit") and not block.has_key("count"):
            data.sink.report(FIELD_MISSING, block, key="limit")
        vd.field_validated_block("limit", lambda limit, data: validate_normal_trigger(limit, data, sc, tooltipped))
        vd.field_script_value("count", sc)
        validate_effect_internal(vd, data, sc, tooltipped)


type _SpecialEffect = Callable[[Token, BV, Everything, ScopeContext, Tooltipped], None]

_SPECIAL_EFFECTS: dict[str, _SpecialEffect] = {
    "add_character_modifier": _add_character_modifier,
    "create_character": _create_character,
    "custom_tooltip": _custom_tooltip,
    "hidden_effect": _hidden_effect,
    "random": _random,
    "random_list": _random_list,
    "save_scope_as": _save_scope,
    "save_scope_value_as": _save_scope_value,
    "save_temporary_scope_as": _save_scope,
    "save_temporary_scope_value_as": _save_scope_value,
    "set_global_variable": _set_variable,
    "set_local_variable": _set_variable,
    "set_variable": _set_variable,
    "show_as_tooltip": _show_as_tooltip,
    "trigger_event": _trigger_event,
    "while": _while,
}


__all__ = [
    "validate_effect_internal",
    "validate_effect_key_bv",
    "validate_normal_effect",
]
