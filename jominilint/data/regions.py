"""Regions and the areas they group."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jominilint.block.model import Block
from jominilint.block.token import Token
from jominilint.block.validator import Validator
from jominilint.db import Db
from jominilint.item import Item
from jominilint.validate import validate_color

if TYPE_CHECKING:
    from jominilint.everything import Everything


class Region:
    @classmethod
    def add(cls, db: Db, key: Token, block: Block) -> None:
        db.add(Item.REGION, key, block, cls())

    def validate(self, key: Token, block: Block, data: Everything) -> None:
        with Validator(block, data) as vd:
            vd.field_validated_block("color", validate_color)
            vd.field_list("areas", Item.AREA)


class Area:
    @classmethod
    def add(cls, db: Db, key: Token, block: Block) -> None:
        db.add(Item.AREA, key, block, cls())

    def validate(self, key: Token, block: Block, data: Everything) -> None:
        with Validator(block, data) as vd:
            provinces = vd.field_list("provinces")
            for province in provinces or ():
                vd.expect_integer(province)


__all__ = ["Area", "Region"]
