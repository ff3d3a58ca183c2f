"""Table of known effects: name -> (scopes it runs in, argument kind)."""

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
    Yes,
)

C: Final = Scopes.CHARACTER
P: Final = Scopes.PROVINCE
LT: Final = Scopes.LANDED_TITLE
NONE: Final = Scopes.NONE

EFFECTS: Final[dict[str, tuple[Scopes, ArgKind]]] = {
    "add_character_flag": (C, UncheckedValue()),
    "add_character_modifier": (C, Special()),
    "add_dread": (C, CompareValue()),
    "add_gold": (C, CompareValue()),
    "add_piety": (C, CompareValue()),
    "add_prestige": (C, CompareValue()),
    "add_province_modifier": (P, ItemRef(Item.MODIFIER)),
    "add_stress": (C, CompareValue()),
    "add_trait": (C, ItemRef(Item.TRAIT)),
    "change_development_level": (LT, CompareValue()),
    "create_character": (NONE, Special()),
    "custom_tooltip": (NONE, Special()),
    "death": (C, Special()),
    "debug_log": (NONE, UncheckedValue()),
    "debug_log_scopes": (NONE, Boolean()),
    "hidden_effect": (NONE, Special()),
    "imprison": (C, Special()),
    "random": (NONE, Special()),
    "random_list": (NONE, Special()),
    "remove_character_flag": (C, UncheckedValue()),
    "remove_character_modifier": (C, ItemRef(Item.MODIFIER)),
    "remove_gold": (C, CompareValue()),
    "remove_trait": (C, ItemRef(Item.TRAIT)),
    "remove_variable": (Scopes.all_but_none(), UncheckedValue()),
    "save_scope_as": (Scopes.all_but_none(), Special()),
    "save_scope_value_as": (NONE, Special()),
    "save_temporary_scope_as": (Scopes.all_but_none(), Special()),
    "save_temporary_scope_value_as": (NONE, Special()),
    "set_character_faith": (C, Target(Scopes.FAITH)),
    "set_culture": (C, Target(Scopes.CULTURE)),
    "set_global_variable": (NONE, Special()),
    "set_variable": (Scopes.all_but_none(), Special()),
    "show_as_tooltip": (NONE, Special()),
    "trigger_event": (C, Special()),
    "while": (NONE, Special()),
    "set_immortal_age": (C, CompareValue()),
    "set_to_lowborn": (C, Yes()),
}


def scope_effect(name: str) -> tuple[Scopes, ArgKind] | None:
    return EFFECTS.get(name)
