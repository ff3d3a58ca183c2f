"""Scope links (`liege`, `faith`, ...) and prefixes (`scope:`, `faith:`, ...)."""

from __future__ import annotations

from typing import Final

from jominilint.item import Item
from jominilint.scopes import Scopes

C: Final = Scopes.CHARACTER
P: Final = Scopes.PROVINCE
LT: Final = Scopes.LANDED_TITLE

# name -> (input scopes, output scope)
SCOPE_LINKS: Final[dict[str, tuple[Scopes, Scopes]]] = {
    "army_commander": (Scopes.ARMY, C),
    "army_owner": (Scopes.ARMY, C),
    "artifact_owner": (Scopes.ARTIFACT, C),
    "betrothed": (C, C),
    "capital_county": (C, LT),
    "capital_province": (C, P),
    "county": (P | LT, LT),
    "culture": (C | P | LT, Scopes.CULTURE),
    "culture_head": (Scopes.CULTURE, C),
    "de_jure_liege": (LT, LT),
    "dynast": (Scopes.DYNASTY, C),
    "dynasty": (C | Scopes.DYNASTY_HOUSE, Scopes.DYNASTY),
    "employer": (C, C),
    "faith": (C | P | LT, Scopes.FAITH),
    "father": (C, C),
    "holder": (LT, C),
    "host": (C, C),
    "house": (C, Scopes.DYNASTY_HOUSE),
    "house_head": (Scopes.DYNASTY_HOUSE, C),
    "killer": (C, C),
    "liege": (C, C),
    "location": (C | Scopes.ARMY, P),
    "mother": (C, C),
    "player_heir": (C, C),
    "primary_attacker": (Scopes.WAR, C),
    "primary_defender": (Scopes.WAR, C),
    "primary_heir": (C, C),
    "primary_spouse": (C, C),
    "primary_title": (C, LT),
    "real_father": (C, C),
    "religion": (Scopes.FAITH, Scopes.RELIGION),
    "religious_head": (Scopes.FAITH, C),
    "scheme_owner": (Scopes.SCHEME, C),
    "scheme_target": (Scopes.SCHEME, C),
    "secret_owner": (Scopes.SECRET, C),
    "secret_target": (Scopes.SECRET, C),
    "title_province": (LT, P),
}

# prefix -> (input scopes, output scope, item the argument names if any)
SCOPE_PREFIXES: Final[dict[str, tuple[Scopes, Scopes, Item | None]]] = {
    "character": (Scopes.NONE, C, None),
    "culture": (Scopes.NONE, Scopes.CULTURE, Item.CULTURE),
    "dynasty": (Scopes.NONE, Scopes.DYNASTY, None),
    "faith": (Scopes.NONE, Scopes.FAITH, Item.FAITH),
    "flag": (Scopes.NONE, Scopes.FLAG, None),
    "global_var": (Scopes.NONE, Scopes.all_but_none(), None),
    "house": (Scopes.NONE, Scopes.DYNASTY_HOUSE, None),
    "local_var": (Scopes.all(), Scopes.all_but_none(), None),
    "province": (Scopes.NONE, P, None),
    "religion": (Scopes.NONE, Scopes.RELIGION, Item.RELIGION),
    "title": (Scopes.NONE, LT, Item.TITLE),
    "var": (Scopes.all_but_none(), Scopes.all_but_none(), None),
}


def scope_to_scope(name: str) -> tuple[Scopes, Scopes] | None:
    return SCOPE_LINKS.get(name)


def scope_prefix(prefix: str) -> tuple[Scopes, Scopes, Item | None] | None:
    return SCOPE_PREFIXES.get(prefix)
