"""Character templates: reusable argument sets for `create_character`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jominilint.block.model import Block
from jominilint.block.token import Token
from jominilint.block.validator import Validator
from jominilint.context import ScopeContext
from jominilint.db import Db
from jominilint.effect import validate_normal_effect
from jominilint.item import Item
from jominilint.scopes import Scopes
from jominilint.tooltipped import Tooltipped
from jominilint.trigger import validate_target
from jominilint.validate import (
    validate_random_culture,
    validate_random_faith,
    validate_random_traits_list,
)

if TYPE_CHECKING:
    from jominilint.everything import Everything

SKILLS = ("diplomacy", "intrigue", "learning", "martial", "prowess", "stewardship")


class CharacterTemplate:
    @classmethod
    def add(cls, db: Db, key: Token, block: Block) -> None:
        db.add(Item.CHARACTER_TEMPLATE, key, block, cls())

    def validate(self, key: Token, block: Block, data: Everything) -> None:
        sc = ScopeContext.new_unrooted(Scopes.all(), key, data.sink)
        self.validate_call(key, block, key, data, sc)

    def validate_call(self, key: Token, block: Block, caller: Token, data: Everything, sc: ScopeContext) -> None:
        """Validate the template in the context of the `create_character` that uses it."""
        with Validator(block, data) as vd:
            validate_character_fields(vd, data, sc)


def validate_character_fields(vd: Validator, data: Everything, sc: ScopeContext) -> None:
    """The fields shared by templates and `create_character`."""
    vd.field_item("name", Item.LOCALIZATION)
    vd.field_script_value("age", sc)
    gender = vd.field_value("gender")
    if gender is not None and not gender.is_("male") and not gender.is_("female"):
        validate_target(gender, data, sc, Scopes.CHARACTER)
    vd.field_items("trait", Item.TRAIT)
    vd.field_blocks("random_traits_list", lambda block, data: validate_random_traits_list(block, data, sc))
    vd.field_bool("random_traits")
    vd.field_script_value("gender_female_chance", sc)
    vd.field_target("culture", sc, Scopes.CULTURE)
    vd.field_target("faith", sc, Scopes.FAITH)
    vd.field_blocks("random_culture", lambda block, data: validate_random_culture(block, data, sc))
    vd.field_blocks("random_faith", lambda block, data: validate_random_faith(block, data, sc))
    vd.field_script_value("health", sc)
    for skill in SKILLS:
        vd.field_script_value(skill, sc)
    vd.field_target("dynasty_house", sc, Scopes.DYNASTY_HOUSE)
    vd.field_choice("dynasty", ("generate", "inherit", "none"))

    def after_creation(key: Token, block: Block, data: Everything) -> None:
        sc.open_scope(Scopes.CHARACTER, key)
        validate_normal_effect(block, data, sc, Tooltipped.NO)
        sc.close()

    vd.field_validated_key_block("after_creation", after_creation)


__all__ = ["SKILLS", "CharacterTemplate", "validate_character_fields"]
