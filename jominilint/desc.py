"""Description values: a localization key or a block choosing between several."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jominilint.block.model import BV, Block
from jominilint.block.token import Token
from jominilint.block.validator import Validator
from jominilint.context import ScopeContext
from jominilint.item import Item
from jominilint.tooltipped import Tooltipped
from jominilint.trigger import validate_normal_trigger

if TYPE_CHECKING:
    from jominilint.everything import Everything


def validate_desc(bv: BV, data: Everything, sc: ScopeContext) -> None:
    match bv:
        case Token():
            data.verify_exists(Item.LOCALIZATION, bv)
        case Block():
            with Validator(bv, data) as vd:
                _validate_desc_block(vd, data, sc)


def _validate_desc_block(vd: Validator, data: Everything, sc: ScopeContext) -> None:
    vd.field_validated_bvs("desc", lambda bv, data: validate_desc(bv, data, sc))
    vd.field_blocks("first_valid", lambda block, data: validate_desc(block, data, sc))
    vd.field_blocks("random_valid", lambda block, data: validate_desc(block, data, sc))
    vd.field_blocks("triggered_desc", lambda block, data: _validate_triggered_desc(block, data, sc))


def _validate_triggered_desc(block: Block, data: Everything, sc: ScopeContext) -> None:
    with Validator(block, data) as vd:
        vd.require("trigger")
        vd.require("desc")
        vd.field_validated_block(
            "trigger",
            lambda trigger, data: validate_normal_trigger(trigger, data, sc, Tooltipped.NO),
        )
        vd.field_validated_bvs("desc", lambda bv, data: validate_desc(bv, data, sc))


__all__ = ["validate_desc"]
