"""Ability model — canonical abilities, score modifiers, skill → ability table."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Ability(str, Enum):
    STR = "STR"
    DEX = "DEX"
    CON = "CON"
    INT = "INT"
    WIS = "WIS"
    CHA = "CHA"

    @property
    def full_name(self) -> str:
        return _FULL_NAMES[self]


_FULL_NAMES = {
    Ability.STR: "strength",
    Ability.DEX: "dexterity",
    Ability.CON: "constitution",
    Ability.INT: "intelligence",
    Ability.WIS: "wisdom",
    Ability.CHA: "charisma",
}

_ABILITY_TOKENS: dict[str, Ability] = {}
for _ability, _name in _FULL_NAMES.items():
    _ABILITY_TOKENS[_name] = _ability
    _ABILITY_TOKENS[_ability.value.lower()] = _ability

# 5e skills and their governing ability
SKILL_ABILITY_MAP: Mapping[str, Ability] = MappingProxyType({
    "athletics": Ability.STR,
    "acrobatics": Ability.DEX,
    "sleight of hand": Ability.DEX,
    "stealth": Ability.DEX,
    "arcana": Ability.INT,
    "history": Ability.INT,
    "investigation": Ability.INT,
    "nature": Ability.INT,
    "religion": Ability.INT,
    "animal handling": Ability.WIS,
    "insight": Ability.WIS,
    "medicine": Ability.WIS,
    "perception": Ability.WIS,
    "survival": Ability.WIS,
    "deception": Ability.CHA,
    "intimidation": Ability.CHA,
    "performance": Ability.CHA,
    "persuasion": Ability.CHA,
})

DEFAULT_SCORE = 10


def normalize_token(token: str) -> str:
    """Lowercase a token and fold dashes and underscores into single spaces."""
    return " ".join(token.strip().lower().replace("-", " ").replace("_", " ").split())


def modifier_for(score: int) -> int:
    """Ability modifier for a raw score: floor((score - 10) / 2)."""
    return (score - 10) // 2


def ability_for_skill(skill_name: str) -> Ability | None:
    """Governing ability of a skill, or None when the skill is unknown."""
    return SKILL_ABILITY_MAP.get(normalize_token(skill_name))


def normalize_ability_token(token: str) -> Ability | None:
    """Accept "strength", "Str", "STR" … and return the Ability, or None."""
    return _ABILITY_TOKENS.get(normalize_token(token))


def ability_for_token(token: str | None) -> Ability | None:
    """Resolve either an ability name/abbreviation or a skill name."""
    if not token:
        return None
    return normalize_ability_token(token) or ability_for_skill(token)


def modifier_from_scores(
    scores: Mapping[str, int] | None,
    ability: Ability | None,
) -> int:
    """Modifier for ``ability`` read from a caller-supplied score mapping.

    Keys may be full names or abbreviations in any case. A missing ability
    or missing score counts as an average score (modifier 0).
    """
    if ability is None or not scores:
        return 0
    for key, value in scores.items():
        if normalize_ability_token(key) is ability:
            return modifier_for(int(value))
    return modifier_for(DEFAULT_SCORE)
