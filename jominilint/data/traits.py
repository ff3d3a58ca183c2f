"""Character traits."""

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

TRAIT_CATEGORIES = (
    "personality",
    "education",
    "childhood",
    "commander",
    "winter_commander",
    "lifestyle",
    "court_type",
    "fame",
    "health",
)


class Trait:
    @classmethod
    def add(cls, db: Db, key: Token, block: Block) -> None:
        db.add(Item.TRAIT, key, block, cls())

    def validate(self, key: Token, block: Block, data: Everything) -> None:
        with Validator(block, data) as vd:
            vd.field_choice("category", TRAIT_CATEGORIES)
            vd.field_integer("minimum_age")
            vd.field_integer("maximum_age")
            vd.field_bool("shown_in_ruler_designer")
            vd.field_integer("ruler_designer_cost")
            vd.field_bool("genetic")
            vd.field_bool("physical")
            vd.field_bool("good")
            vd.field_numeric("birth")
            vd.field_numeric("inherit_chance")
            vd.field_list("opposites", Item.TRAIT)
            vd.field_values("flag")
            for field_key, implied in (("name", f"trait_{key}"), ("desc", f"trait_{key}_desc")):
                if vd.field_item(field_key, Item.LOCALIZATION) is None:
                    data.localization.verify_exists_implied(implied, key)
            # Relative to the trait icon directory.
            vd.field_value("icon")
            validate_modifs(block, data, ModifKinds.CHARACTER, vd)


__all__ = ["TRAIT_CATEGORIES", "Trait"]
