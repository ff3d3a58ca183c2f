"""Decisions: player and AI actions shown in the decisions panel."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from jominilint.block.model import Block
from jominilint.block.token import Token
from jominilint.block.validator import Validator
from jominilint.context import ScopeContext
from jominilint.db import Db
from jominilint.desc import validate_desc
from jominilint.diagnostics.codes import COST_OVERRIDE
from jominilint.diagnostics.sink import DiagnosticSink
from jominilint.effect import validate_normal_effect
from jominilint.item import Item
from jominilint.scopes import Scopes
from jominilint.tooltipped import Tooltipped
from jominilint.trigger import validate_normal_trigger
from jominilint.validate import validate_modifiers_with_base

if TYPE_CHECKING:
    from jominilint.everything import Everything

COST_KINDS = ("gold", "prestige", "piety")


class Decision:
    @classmethod
    def add(cls, db: Db, key: Token, block: Block) -> None:
        db.add(Item.DECISION, key, block, cls())

    def validate(self, key: Token, block: Block, data: Everything) -> None:
        sc = data.new_context(Scopes.CHARACTER, key)

        def trigger(tooltipped: Tooltipped) -> Callable[[Block, Everything], None]:
            return lambda block, data: validate_normal_trigger(block, data, sc, tooltipped)

        with Validator(block, data) as vd:
            vd.require("picture")
            vd.field_item("picture", Item.FILE)
            vd.field_item("extra_picture", Item.FILE)
            vd.field_bool("major")
            vd.field_integer("sort_order")
            vd.field_bool("is_invisible")
            vd.field_bool("ai_goal")
            vd.field_integer("ai_check_interval")
            if block.get_field_bool("ai_goal"):
                vd.advice_field("ai_check_interval", "not needed if ai_goal = yes")
            vd.field_validated_block("cooldown", lambda cooldown, data: validate_duration(cooldown, data, sc))

            # Looks like a file name, but it is a sound event.
            vd.field_value("confirm_click_sound")

            for field_key, implied in (
                ("selection_tooltip", f"{key}_tooltip"),
                ("title", key.text),
                ("desc", f"{key}_desc"),
                ("confirm_text", f"{key}_confirm"),
            ):
                if vd.field_validated(field_key, lambda bv, data: validate_desc(bv, data, sc)) is None:
                    data.localization.verify_exists_implied(implied, key)

            vd.field_validated_block("is_shown", trigger(Tooltipped.NO))
            vd.field_validated_block("is_valid_showing_failures_only", trigger(Tooltipped.FAILURES_ONLY))
            vd.field_validated_block("is_valid", trigger(Tooltipped.YES))

            # Several cost blocks are combined, but a repeated component replaces the earlier one.
            check_cost(vd.field_blocks("cost", lambda cost, data: validate_cost(cost, data, sc)), data.sink)
            check_cost(vd.field_blocks("minimum_cost", lambda cost, data: validate_cost(cost, data, sc)), data.sink)

            vd.field_validated_block(
                "effect",
                lambda effect, data: validate_normal_effect(effect, data, sc, Tooltipped.YES),
            )
            vd.field_validated_block("ai_potential", trigger(Tooltipped.NO))
            vd.field_validated_block("ai_will_do", lambda weight, data: validate_modifiers_with_base(weight, data, sc))
            vd.field_validated_block("should_create_alert", trigger(Tooltipped.NO))
            vd.field_validated_block("widget", validate_widget)


def validate_cost(block: Block, data: Everything, sc: ScopeContext) -> None:
    with Validator(block, data) as vd:
        for kind in COST_KINDS:
            vd.field_script_value(kind, sc)


def check_cost(blocks: list[Block], sink: DiagnosticSink) -> None:
    """Report each cost component that a later block sets again."""
    if len(blocks) < 2:
        return
    seen: set[str] = set()
    for block in blocks:
        for kind in COST_KINDS:
            token = block.get_key(kind)
            if token is None:
                continue
            if kind in seen:
                sink.report(COST_OVERRIDE, token, name=kind)
            seen.add(kind)


def validate_duration(block: Block, data: Everything, sc: ScopeContext) -> None:
    with Validator(block, data) as vd:
        for unit in ("days", "months", "years"):
            vd.field_script_value(unit, sc)


def validate_widget(block: Block, data: Everything) -> None:
    with Validator(block, data) as vd:
        vd.field_value("gui")
        vd.field_value("controller")
        vd.field_bool("show_from_start")


__all__ = ["COST_KINDS", "Decision", "check_cost", "validate_cost", "validate_duration"]
