"""Table of known triggers: name -> (scopes it runs in, argument kind)."""

from __future__ import annotations

from typing import Final

from jominilint.item import Item
from jominilint.scopes import Scopes
from jominilint.tables.args import (
    ArgKind,
    Boolean,
    CompareValue,
    ItemRef,
    Special,
    Target,
    UncheckedValue,
)

C: Final = Scopes.CHARACTER
P: Final = Scopes.PROVINCE
LT: Final = Scopes.LANDED_TITLE
NONE: Final = Scopes.NONE

TRIGGERS: Final[dict[str, tuple[Scopes, ArgKind]]] = {
    "age": (C, CompareValue()),
    "always": (NONE, Boolean()),
    "calc_true_if": (NONE, Special()),
    "current_year": (NONE, CompareValue()),
    "custom_description": (NONE, Special()),
    "custom_tooltip": (NONE, Special()),
    "debug_only": (NONE, Boolean()),
    "development_level": (P | LT, CompareValue()),
    "diplomacy": (C, CompareValue()),
    "dread": (C, CompareValue()),
    "exists": (NONE, Special()),
    "fervor": (Scopes.FAITH, CompareValue()),
    "geographical_region": (P | LT, ItemRef(Item.REGION)),
    "gold": (C, CompareValue()),
    "has_character_flag": (C, UncheckedValue()),
    "has_character_modifier": (C, ItemRef(Item.MODIFIER)),
    "has_culture": (C, Target(Scopes.CULTURE)),
    "has_doctrine": (Scopes.FAITH | C, ItemRef(Item.DOCTRINE)),
    "has_faith": (C, Target(Scopes.FAITH)),
    "has_game_rule": (NONE, UncheckedValue()),
    "has_global_variable": (NONE, UncheckedValue()),
    "has_holding": (P, Boolean()),
    "has_local_variable": (Scopes.all_but_none(), UncheckedValue()),
    "has_province_modifier": (P, ItemRef(Item.MODIFIER)),
    "has_trait": (C, ItemRef(Item.TRAIT)),
    "has_variable": (Scopes.all_but_none(), UncheckedValue()),
    "health": (C, CompareValue()),
    "intrigue": (C, CompareValue()),
    "is_adult": (C, Boolean()),
    "is_ai": (C, Boolean()),
    "is_alive": (C, Boolean()),
    "is_at_war": (C, Boolean()),
    "is_coastal": (P, Boolean()),
    "is_councillor": (C, Boolean()),
    "is_female": (C, Boolean()),
    "is_imprisoned": (C, Boolean()),
    "is_independent_ruler": (C, Boolean()),
    "is_landed": (C, Boolean()),
    "is_male": (C, Boolean()),
    "is_married": (C, Boolean()),
    "is_ruler": (C, Boolean()),
    "is_target_in_global_variable_list": (NONE, Special()),
    "learning": (C, CompareValue()),
    "martial": (C, CompareValue()),
    "num_of_relations": (C, CompareValue()),
    "piety": (C, CompareValue()),
    "prestige": (C, CompareValue()),
    "prowess": (C, CompareValue()),
    "stewardship": (C, CompareValue()),
    "stress": (C, CompareValue()),
    "tier": (LT, CompareValue()),
}


def scope_trigger(name: str) -> tuple[Scopes, ArgKind] | None:
    return TRIGGERS.get(name)


def scope_value(name: str) -> Scopes | None:
    """Input scopes of a trigger that can be read as a numeric value, such as `age`."""
    entry = TRIGGERS.get(name)
    if entry is None or not isinstance(entry[1], CompareValue):
        return None
    return entry[0]
