"""Modifier keys (modifs) and the kinds of modifier blocks they are valid in."""

from __future__ import annotations

from enum import IntFlag, auto
from typing import Final


class ModifKinds(IntFlag):
    CHARACTER = auto()
    PROVINCE = auto()
    COUNTY = auto()
    TERRAIN = auto()
    CULTURE = auto()
    SCHEME = auto()

    def to_text(self) -> str:
        names = [member.name.lower() for member in ModifKinds if member in self and member.name]
        return ", ".join(names[:-1]) + " or " + names[-1] if len(names) > 1 else "".join(names)


C: Final = ModifKinds.CHARACTER
P: Final = ModifKinds.PROVINCE
CO: Final = ModifKinds.COUNTY

MODIFS: Final[dict[str, ModifKinds]] = {
    "diplomacy": C,
    "intrigue": C,
    "learning": C,
    "martial": C,
    "prowess": C,
    "stewardship": C,
    "health": C,
    "fertility": C,
    "attraction_opinion": C,
    "general_opinion": C,
    "dread_gain_mult": C,
    "dread_baseline_add": C,
    "monthly_prestige": C,
    "monthly_prestige_gain_mult": C,
    "monthly_piety": C,
    "monthly_piety_gain_mult": C,
    "monthly_income": C | P,
    "monthly_income_mult": C,
    "stress_gain_mult": C,
    "stress_loss_mult": C,
    "life_expectancy": C,
    "negate_health_penalty_add": C,
    "knight_effectiveness_mult": C,
    "development_growth": CO,
    "development_growth_factor": CO,
    "county_opinion_add": CO,
    "levy_size": CO | P,
    "tax_mult": CO | P,
    "build_speed": P,
    "build_gold_cost": P,
    "fort_level": P,
    "garrison_size": P,
    "hostile_raid_time": P,
    "supply_limit": P,
    "supply_limit_mult": P,
    "movement_speed": ModifKinds.TERRAIN,
    "cultural_acceptance_gain_mult": ModifKinds.CULTURE,
    "scheme_power": ModifKinds.SCHEME,
    "scheme_secrecy": ModifKinds.SCHEME,
}

# AI personality modifs take script values evaluated without a scope.
AI_PERSONALITY_MODIFS: Final[tuple[str, ...]] = (
    "ai_boldness",
    "ai_compassion",
    "ai_energy",
    "ai_greed",
    "ai_honor",
    "ai_rationality",
    "ai_sociability",
    "ai_vengefulness",
    "ai_zeal",
)


def modifs_for(kinds: ModifKinds) -> list[str]:
    return [name for name, valid in MODIFS.items() if valid & kinds]
