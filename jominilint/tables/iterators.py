"""List iterators: `<every|ordered|random|any>_<name>`."""

from __future__ import annotations

from typing import Final

from jominilint.scopes import Scopes

C: Final = Scopes.CHARACTER
P: Final = Scopes.PROVINCE
LT: Final = Scopes.LANDED_TITLE

# name -> (input scopes, output scope)
ITERATORS: Final[dict[str, tuple[Scopes, Scopes]]] = {
    "ally": (C, C),
    "army": (C, Scopes.ARMY),
    "character_artifact": (C, Scopes.ARTIFACT),
    "character_war": (C, Scopes.WAR),
    "child": (C, C),
    "county_in_region": (Scopes.NONE, LT),
    "courtier": (C, C),
    "culture_county": (Scopes.CULTURE, LT),
    "de_jure_county_holder": (LT, C),
    "directly_owned_province": (C, P),
    "faith": (Scopes.RELIGION, Scopes.FAITH),
    "held_title": (C, LT),
    "in_global_list": (Scopes.NONE, Scopes.all_but_none()),
    "in_list": (Scopes.all(), Scopes.all_but_none()),
    "in_local_list": (Scopes.all(), Scopes.all_but_none()),
    "knight": (C, C),
    "living_character": (Scopes.NONE, C),
    "realm_county": (C, LT),
    "realm_province": (C, P),
    "religion_global": (Scopes.NONE, Scopes.RELIGION),
    "ruler": (Scopes.NONE, C),
    "scheme": (C, Scopes.SCHEME),
    "secret": (C, Scopes.SECRET),
    "sibling": (C, C),
    "spouse": (C, C),
    "vassal": (C, C),
    "war_ally": (Scopes.WAR, C),
    "war_enemy": (Scopes.WAR, C),
}


def scope_iterator(name: str) -> tuple[Scopes, Scopes] | None:
    return ITERATORS.get(name)
