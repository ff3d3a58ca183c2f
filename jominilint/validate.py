"""Validation helpers shared by the script value, trigger and effect grammars."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from jominilint.block.model import Block
from jominilint.block.token import Token
from jominilint.block.validator import Validator
from jominilint.context import ScopeContext
from jominilint.diagnostics.codes import (
    COLOR_INVALID,
    ITERATOR_LIST_SOURCE,
    ITERATOR_PERCENT_RANGE,
    SCOPE_CHAIN_ORDER,
    SCOPE_UNKNOWN_PREFIX,
    SCOPE_UNKNOWN_TOKEN,
)
from jominilint.item import Item
from jominilint.scopes import Scopes
from jominilint.tables.links import scope_prefix, scope_to_scope
from jominilint.tooltipped import Tooltipped

if TYPE_CHECKING:
    from jominilint.everything import Everything


class ListType(StrEnum):
    """The four flavours of list iterator."""

    ANY = "any"
    EVERY = "every"
    ORDERED = "ordered"
    RANDOM = "random"


def split_iterator(token: Token) -> tuple[ListType, Token] | None:
    """Split `every_vassal` into its list type and list name."""
    parts = token.split_once("_")
    if parts is None:
        return None
    prefix, name = parts
    try:
        ltype = ListType(prefix.text)
    except ValueError:
        return None
    return ltype, name


# -------------------------
# Iterators
# -------------------------


def precheck_iterator_fields(ltype: ListType, block: Block, data: Everything, sc: ScopeContext) -> None:
    """Check the iterator fields that are evaluated in the scope outside the iterator."""
    from jominilint.data.scriptvalues import validate_script_value

    match ltype:
        case ListType.ANY:
            percent = block.get_field("percent")
            if isinstance(percent, Token):
                number = percent.get_number()
                if number is not None and number > 1.0:
                    data.sink.report(ITERATOR_PERCENT_RANGE, percent)
                elif number is None:
                    validate_script_value(percent, data, sc)
            elif percent is not None:
                validate_script_value(percent, data, sc)
            count = block.get_field("count")
            if count is not None and not (isinstance(count, Token) and count.is_("all")):
                validate_script_value(count, data, sc)
        case ListType.ORDERED:
            for key in ("position", "min", "max"):
                value = block.get_field(key)
                if value is not None:
                    validate_script_value(value, data, sc)
        case _:
            pass


def validate_iterator_fields(
    ltype: ListType,
    data: Everything,
    sc: ScopeContext,
    vd: Validator,
    tooltipped: Tooltipped,
) -> Tooltipped:
    """Claim the fields every iterator of `ltype` accepts.

    Returns the tooltip mode for the iterator body; a `custom` description
    replaces the generated tooltip.
    """
    from jominilint.trigger import validate_normal_trigger

    if ltype is ListType.RANDOM:
        vd.ban_field("custom", "`any_`, `every_` and `ordered_` lists")
    elif vd.field_item("custom", Item.LOCALIZATION) is not None:
        tooltipped = Tooltipped.NO

    if ltype is ListType.ANY:
        vd.ban_field("alternative_limit", "`every_`, `ordered_` and `random_` lists")
    else:
        vd.field_blocks(
            "alternative_limit",
            lambda block, data: validate_normal_trigger(block, data, sc, Tooltipped.NO),
        )

    if ltype is ListType.ANY:
        vd.field_any_cmp("percent")
        vd.field_any_cmp("count")
    else:
        vd.ban_field("percent", "`any_` lists")
        vd.ban_field("count", "`any_` lists")

    if ltype is ListType.ORDERED:
        vd.field_script_value("order_by", sc)
        vd.field("position")
        vd.field("min")
        vd.field("max")
        vd.field_bool("check_range_bounds")
    else:
        for key in ("order_by", "position", "min", "max", "check_range_bounds"):
            vd.ban_field(key, "`ordered_` lists")

    if ltype is ListType.RANDOM:
        vd.field_validated_block("weight", lambda block, data: validate_modifiers_with_base(block, data, sc))
    else:
        vd.ban_field("weight", "`random_` lists")

    return tooltipped


def validate_inside_iterator(
    name: str,
    listtype: ListType,
    block: Block,
    data: Everything,
    vd: Validator,
) -> None:
    """Claim the fields that only specific iterators take."""
    if name in ("in_list", "in_local_list", "in_global_list"):
        has_list = vd.field_value("list") is not None
        has_variable = vd.field_value("variable") is not None
        if has_list == has_variable:
            data.sink.report(ITERATOR_LIST_SOURCE, block, token=f"{listtype}_{name}")
    else:
        vd.ban_field("list", "`in_list` iterators")
        vd.ban_field("variable", "`in_list` iterators")

    if name == "county_in_region":
        vd.require("region")
        vd.field_item("region", Item.REGION)
    else:
        vd.ban_field("region", "`county_in_region` iterators")


# -------------------------
# Scope chains
# -------------------------


def validate_prefix_reference(prefix: Token, arg: Token, data: Everything) -> None:
    """Check that the argument of a prefix such as `faith:catholic` exists."""
    entry = scope_prefix(prefix.text)
    if entry is None:
        return
    item = entry[2]
    if item is not None:
        data.verify_exists(item, arg)


def validate_chain_step(
    part: Token,
    *,
    first: bool,
    last: bool,
    previous: Token | None,
    data: Everything,
    sc: ScopeContext,
    qeq: bool = False,
) -> bool:
    """Apply one step of a scope chain to `sc`.

    Returns False (after reporting) when the step is not a known link.
    """
    parts = part.split_once(":")
    if parts is not None:
        prefix, arg = parts
        if prefix.is_("scope"):
            if not first:
                data.sink.report(SCOPE_CHAIN_ORDER, part, token=f"{prefix}:")
            sc.replace_named_scope(arg.text, part, optional=qeq and last)
            return True
        entry = scope_prefix(prefix.text)
        if entry is None:
            data.sink.report(SCOPE_UNKNOWN_PREFIX, prefix, prefix=prefix.text)
            return False
        inscopes, outscope, _ = entry
        if inscopes == Scopes.NONE and not first:
            data.sink.report(SCOPE_CHAIN_ORDER, part, token=f"{prefix}:")
        elif inscopes != Scopes.NONE and inscopes != Scopes.all():
            sc.expect(inscopes, prefix)
        validate_prefix_reference(prefix, arg, data)
        sc.replace(outscope, part)
        return True

    lowered = part.text.lower()
    if lowered == "root":
        if not first:
            data.sink.report(SCOPE_CHAIN_ORDER, part, token=part.text)
        sc.replace_root()
        return True
    if lowered == "prev":
        if not first and not (previous is not None and previous.lowercase_is("prev")):
            data.sink.report(SCOPE_CHAIN_ORDER, part, token=part.text)
        sc.replace_prev(part)
        return True
    if lowered == "this":
        if not first:
            data.sink.report(SCOPE_CHAIN_ORDER, part, token=part.text)
        sc.replace_this()
        return True

    link = scope_to_scope(part.text)
    if link is None:
        data.sink.report(SCOPE_UNKNOWN_TOKEN, part, token=part.text)
        return False
    inscopes, outscope = link
    if inscopes == Scopes.NONE:
        if not first:
            data.sink.report(SCOPE_CHAIN_ORDER, part, token=part.text)
    else:
        sc.expect(inscopes, part)
    sc.replace(outscope, part)
    return True


def validate_scope_chain_parts(
    parts: list[Token],
    data: Everything,
    sc: ScopeContext,
    qeq: bool = False,
) -> bool:
    previous: Token | None = None
    for index, part in enumerate(parts):
        ok = validate_chain_step(
            part,
            first=index == 0,
            last=index == len(parts) - 1,
            previous=previous,
            data=data,
            sc=sc,
            qeq=qeq,
        )
        if not ok:
            return False
        previous = part
    return True


def validate_scope_chain(token: Token, data: Everything, sc: ScopeContext, qeq: bool = False) -> bool:
    """Resolve a dotted chain such as `liege.primary_title.holder`.

    Must be called inside `sc.open_builder()`. Returns whether every part was
    understood; unknown parts are reported.
    """
    return validate_scope_chain_parts(token.split("."), data, sc, qeq)


# -------------------------
# Weights and random picks
# -------------------------


def validate_modifiers_with_base(block: Block, data: Everything, sc: ScopeContext) -> None:
    """`{ base = 10 modifier = { add = 5 is_ai = yes } }` style weight blocks."""
    from jominilint.data.scriptvalues import validate_script_value

    with Validator(block, data) as vd:
        vd.field_validated("base", lambda bv, data: validate_script_value(bv, data, sc))
        validate_modifiers(vd, sc)


def validate_modifiers(vd: Validator, sc: ScopeContext) -> None:
    vd.fields_script_value("add", sc)
    vd.fields_script_value("factor", sc)
    vd.field_blocks("modifier", lambda block, data: _validate_modifier(block, data, sc))
    vd.field_blocks("first_valid", lambda block, data: _validate_first_valid(block, data, sc))


def _validate_modifier(block: Block, data: Everything, sc: ScopeContext) -> None:
    from jominilint.trigger import validate_trigger_internal

    with Validator(block, data) as vd:
        vd.field_item("desc", Item.LOCALIZATION)
        vd.fields_script_value("add", sc)
        vd.fields_script_value("factor", sc)
        validate_trigger_internal(vd, data, sc, Tooltipped.NO)


def _validate_first_valid(block: Block, data: Everything, sc: ScopeContext) -> None:
    with Validator(block, data) as vd:
        vd.field_blocks("modifier", lambda block, data: _validate_modifier(block, data, sc))


def validate_random_traits_list(block: Block, data: Everything, sc: ScopeContext) -> None:
    """`random_traits_list = { count = 1 brave = { weight = {...} } }`."""
    from jominilint.trigger import validate_normal_trigger

    with Validator(block, data) as vd:
        vd.field_script_value("count", sc)
        for key, trait_block in vd.unknown_block_fields():
            data.verify_exists(Item.TRAIT, key)
            with Validator(trait_block, data) as inner:
                inner.field_validated_block(
                    "weight",
                    lambda block, data: validate_modifiers_with_base(block, data, sc),
                )
                inner.field_validated_block(
                    "trigger",
                    lambda block, data: validate_normal_trigger(block, data, sc, Tooltipped.NO),
                )


def _validate_random_target(block: Block, data: Everything, sc: ScopeContext, scopes: Scopes) -> None:
    from jominilint.trigger import validate_target

    with Validator(block, data) as vd:
        for key, weights in vd.unknown_block_fields():
            validate_target(key, data, sc, scopes)
            validate_modifiers_with_base(weights, data, sc)


def validate_random_culture(block: Block, data: Everything, sc: ScopeContext) -> None:
    """`random_culture = { culture:norse = { base = 1 } ... }`."""
    _validate_random_target(block, data, sc, Scopes.CULTURE)


def validate_random_faith(block: Block, data: Everything, sc: ScopeContext) -> None:
    _validate_random_target(block, data, sc, Scopes.FAITH)


# -------------------------
# Colors
# -------------------------


def validate_color(block: Block, data: Everything) -> None:
    """`{ r g b }`, `rgb { ... }`, `hsv { ... }` or `hsv360 { ... }`."""
    sink = data.sink
    tag = "rgb"
    if block.tag is not None:
        tag = block.tag.text
        if tag not in ("rgb", "hsv", "hsv360"):
            sink.report(COLOR_INVALID, block.tag, text=f"unknown color format `{tag}`")
            return
    count = 0
    for item in block.items:
        if not isinstance(item, Token):
            sink.report(COLOR_INVALID, block, text="expected numeric value")
            continue
        number = item.get_number()
        if number is None:
            sink.report(COLOR_INVALID, item, text="expected numeric value")
        elif tag == "hsv":
            if not 0.0 <= number <= 1.0:
                sink.report(COLOR_INVALID, item, text="hsv values should be between 0.0 and 1.0")
        elif tag == "hsv360":
            if count == 0 and not 0 <= number <= 360:
                sink.report(COLOR_INVALID, item, text="hue should be between 0 and 360")
            elif count > 0 and not 0 <= number <= 100:
                sink.report(COLOR_INVALID, item, text="saturation and value should be between 0 and 100")
        elif not item.is_integer():
            sink.report(COLOR_INVALID, item, text="rgb values should be integers")
        elif not 0 <= number <= 255:
            sink.report(COLOR_INVALID, item, text="rgb values should be between 0 and 255")
        count += 1
    if count not in (3, 4):
        sink.report(COLOR_INVALID, block, text="expected 3 or 4 numbers")


__all__ = [
    "ListType",
    "precheck_iterator_fields",
    "split_iterator",
    "validate_chain_step",
    "validate_color",
    "validate_inside_iterator",
    "validate_iterator_fields",
    "validate_modifiers",
    "validate_modifiers_with_base",
    "validate_prefix_reference",
    "validate_random_culture",
    "validate_random_faith",
    "validate_random_traits_list",
    "validate_scope_chain",
    "validate_scope_chain_parts",
]
