"""Static modifiers: named modif bundles applied by script."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jominilint.block.model import Block
from jominilint.block.token import Token
from jominilint.block.validator import Validator
from jominilint.db import Db
from jominilint.item import Item
from jominilint.modif import validate_modifs
from jominilint.tables.modifs import ModifKinds

if TYPE_CHECKING:
    from jominilint.everything import Everything

# Static modifiers can be applied to characters, provinces and counties alike.
STATIC_MODIFIER_KINDS = ModifKinds.CHARACTER | ModifKinds.PROVINCE | ModifKinds.COUNTY


class Modifier:
    @classmethod
    def add(cls, db: Db, key: Token, block: Block) -> None:
        db.add(Item.MODIFIER, key, block, cls())

    def validate(self, key: Token, block: Block, data: Everything) -> None:
        data.localization.verify_exists_implied(key.text, key)
        with Validator(block, data) as vd:
            vd.field_value("icon")
            vd.field_bool("stacking")
            validate_modifs(block, data, STATIC_MODIFIER_KINDS, vd)


__all__ = ["STATIC_MODIFIER_KINDS", "Modifier"]
