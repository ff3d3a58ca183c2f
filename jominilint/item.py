"""Item kinds: everything that can be looked up by name."""

from __future__ import annotations

from enum import StrEnum


class Item(StrEnum):
    """Named content kinds. Items are always plain strings at runtime."""

    AREA = "area"
    CHARACTER_TEMPLATE = "character_template"
    CULTURE = "culture"
    DECISION = "decision"
    DOCTRINE = "doctrine"
    EVENT = "event"
    FAITH = "faith"
    FILE = "file"
    LOCALIZATION = "localization"
    MODIFIER = "modifier"
    REGION = "region"
    RELIGION = "religion"
    SCRIPT_VALUE = "script_value"
    SCRIPTED_EFFECT = "scripted_effect"
    SCRIPTED_TRIGGER = "scripted_trigger"
    TITLE = "title"
    TRAIT = "trait"

    @property
    def path(self) -> str:
        """Directory that holds the definitions of this kind, or "" if none."""
        return _ITEM_PATHS.get(self, "")

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


_ITEM_PATHS: dict[Item, str] = {
    Item.AREA: "map_data/areas/",
    Item.CHARACTER_TEMPLATE: "common/scripted_character_templates/",
    Item.CULTURE: "common/culture/cultures/",
    Item.DECISION: "common/decisions/",
    Item.DOCTRINE: "common/religion/doctrines/",
    Item.EVENT: "events/",
    Item.FAITH: "common/religion/religions/",
    Item.LOCALIZATION: "localization/",
    Item.MODIFIER: "common/modifiers/",
    Item.REGION: "map_data/regions/",
    Item.RELIGION: "common/religion/religions/",
    Item.SCRIPT_VALUE: "common/script_values/",
    Item.SCRIPTED_EFFECT: "common/scripted_effects/",
    Item.SCRIPTED_TRIGGER: "common/scripted_triggers/",
    Item.TITLE: "common/landed_titles/",
    Item.TRAIT: "common/traits/",
}


__all__ = ["Item"]
