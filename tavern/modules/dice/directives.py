"""Directive parser — finds roll requests inside free-form narrative text.

The parser is an ordered table of ``DirectiveRule`` entries. Every rule is
run over the whole text on its own; a match is kept unless its span overlaps
a span already claimed by an earlier rule. Output order is rule order first,
then position in the text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable

from tavern.modules.dice.abilities import (
    Ability,
    ability_for_skill,
    ability_for_token,
    normalize_ability_token,
)
from tavern.modules.dice.roller import DiceKind, RollPurpose

logger = logging.getLogger("tavern-dice.directives")


@dataclass(frozen=True)
class Directive:
    """One roll request found in narrative text."""

    text: str
    start: int
    end: int
    purpose: RollPurpose
    kind: DiceKind = DiceKind.D20
    token: str | None = None  # "WIS" when the ability is known, else the raw word
    target: int | None = None
    count: int | None = None
    modifier: int = 0
    label: str | None = None
    skill: str | None = None

    @property
    def ability(self) -> Ability | None:
        return ability_for_token(self.token)


Extractor = Callable[[re.Match], "dict[str, Any] | None"]


@dataclass(frozen=True)
class DirectiveRule:
    name: str
    purpose: RollPurpose
    pattern: re.Pattern
    extract: Extractor
    kind: DiceKind = DiceKind.D20


# --- Pattern fragments ---

# Numbers longer than four digits never form part of a directive.
_NUM = r"\d{1,4}(?!\d)"
_LEAD = r"\b(?:make|roll)\s+(?:an?|your)\s+"
_DC_BEFORE = r"(?:DC\s*:?\s*(?P<dc_pre>" + _NUM + r")\s+)?"
_DC_AFTER = r"(?:\s*,?\s*\(?\s*DC\s*:?\s*(?P<dc_post>" + _NUM + r")\s*\)?)?"
_DICE_MODIFIER = r"(?:\s*(?P<sign>[+-])\s*(?P<mod>" + _NUM + r"))?"

_SKILL_PATTERN = re.compile(
    _LEAD + _DC_BEFORE
    + r"(?:(?P<ability>[a-z]+)\s*\(\s*)?"
    + r"(?P<skill>sleight\s+of\s+hand|animal\s+handling|[a-z]+)(?:\s*\))?"
    + r"\s+(?:skill\s+)?check\b"
    + _DC_AFTER,
    re.IGNORECASE,
)

_ABILITY_PATTERN = re.compile(
    _LEAD + _DC_BEFORE
    + r"(?P<ability>[a-z]+)\s+(?:ability\s+)?check\b"
    + _DC_AFTER,
    re.IGNORECASE,
)

_SAVING_PATTERN = re.compile(
    _LEAD + _DC_BEFORE
    + r"(?:(?P<ability>[a-z]+)\s+)?sav(?:ing\s+throw|e)\b"
    + _DC_AFTER,
    re.IGNORECASE,
)

_ATTACK_PATTERN = re.compile(
    _LEAD
    + r"(?:(?P<weapon>[a-z]+)\s+)?attack\s+roll\b"
    + r"(?:\s+(?:against|vs\.?)\s+AC\s*:?\s*(?P<ac>" + _NUM + r"))?",
    re.IGNORECASE,
)

# Phrasings without a "make/roll a" lead, e.g. "succeed on a DC 15 Dexterity
# saving throw" or "A Strength (Athletics) check (DC 15) is needed".
_DC_SAVING_PATTERN = re.compile(
    r"\bDC\s*:?\s*(?P<dc_pre>" + _NUM + r")\s+"
    + r"(?:(?P<ability>[a-z]+)\s+)?sav(?:ing\s+throw|e)\b",
    re.IGNORECASE,
)

_PAREN_SKILL_PATTERN = re.compile(
    r"\b" + _DC_BEFORE
    + r"(?P<ability>[a-z]+)\s*\(\s*"
    + r"(?P<skill>sleight\s+of\s+hand|animal\s+handling|[a-z]+)\s*\)"
    + r"\s+(?:skill\s+)?check\b"
    + _DC_AFTER,
    re.IGNORECASE,
)

# "Roll 2d6 fire damage" belongs to the damage rule, not this one.
_GENERIC_PATTERN = re.compile(
    r"\broll\s+(?:an?\s+|(?P<count>" + _NUM + r")\s*)?d(?P<faces>" + _NUM + r")\b"
    + r"(?!(?:\s*[+-]\s*\d+)?\s+(?:[a-z]+\s+)?damage\b)"
    + _DICE_MODIFIER
    + r"(?:\s+(?:for|to)\s+(?P<label>[a-z]+))?",
    re.IGNORECASE,
)

_DAMAGE_PATTERN = re.compile(
    r"\broll\s+(?:(?P<count>" + _NUM + r")\s*)?d(?P<faces>" + _NUM + r")\b"
    + _DICE_MODIFIER
    + r"\s+(?:(?P<label>[a-z]+)\s+)?damage\b",
    re.IGNORECASE,
)

_INITIATIVE_PATTERN = re.compile(r"\broll\s+(?:for\s+)?initiative\b", re.IGNORECASE)

_BRACKET_PATTERN = re.compile(
    r"\[\s*roll\s*:[^\]]*?(?:vs\.?|against)\s+DC\s*:?\s*(?P<dc>" + _NUM + r")[^\]]*\]",
    re.IGNORECASE,
)
_BRACKET_MODIFIER = re.compile(r"d20\s*\+\s*(?P<token>[a-z]+)", re.IGNORECASE)
_ABILITY_NAME = re.compile(
    r"\b(strength|dexterity|constitution|intelligence|wisdom|charisma)\b",
    re.IGNORECASE,
)


# --- Extractors ---


def _target(m: re.Match) -> int | None:
    groups = m.groupdict()
    for name in ("dc_pre", "dc_post"):
        if groups.get(name):
            return int(groups[name])
    return None


def _words(text: str) -> str:
    return " ".join(text.lower().split())


def _modifier(m: re.Match) -> int:
    if not m.group("mod"):
        return 0
    value = int(m.group("mod"))
    return -value if m.group("sign") == "-" else value


def _extract_skill(m: re.Match) -> dict[str, Any] | None:
    skill = _words(m.group("skill"))
    paren_ability = m.group("ability")

    if skill in ("ability", "saving"):
        return None
    if paren_ability is None and normalize_ability_token(skill) is not None:
        # "Roll a Strength check" is an ability check
        return None
    if skill == "skill":
        return {"target": _target(m)}

    ability = ability_for_skill(skill)
    if ability is None and paren_ability:
        ability = normalize_ability_token(paren_ability)
    return {
        "token": ability.value if ability else skill,
        "skill": skill,
        "target": _target(m),
    }


def _extract_ability(m: re.Match) -> dict[str, Any] | None:
    word = _words(m.group("ability"))
    if word == "ability":
        return {"target": _target(m)}
    ability = normalize_ability_token(word)
    if ability is None:
        return None
    return {"token": ability.value, "target": _target(m)}


def _extract_saving(m: re.Match) -> dict[str, Any] | None:
    token = None
    if m.group("ability"):
        word = _words(m.group("ability"))
        ability = normalize_ability_token(word)
        token = ability.value if ability else word
    return {"token": token, "target": _target(m)}


def _extract_attack(m: re.Match) -> dict[str, Any] | None:
    token = None
    if m.group("weapon"):
        word = _words(m.group("weapon"))
        ability = normalize_ability_token(word)
        token = ability.value if ability else word
    ac = m.group("ac")
    return {"token": token, "target": int(ac) if ac else None}


def _extract_dice(m: re.Match) -> dict[str, Any] | None:
    count = m.group("count")
    label = m.group("label")
    if count is not None and int(count) < 1:
        return None
    return {
        "kind": DiceKind.coerce(m.group("faces")),
        "count": int(count) if count else None,
        "modifier": _modifier(m),
        "label": label.lower() if label else None,
    }


def _extract_initiative(m: re.Match) -> dict[str, Any] | None:
    return {}


def _extract_bracket(m: re.Match) -> dict[str, Any] | None:
    text = m.group(0)
    ability = None
    mod_match = _BRACKET_MODIFIER.search(text)
    if mod_match:
        ability = ability_for_token(mod_match.group("token"))
    if ability is None:
        name_match = _ABILITY_NAME.search(text)
        if name_match:
            ability = normalize_ability_token(name_match.group(1))
    return {
        "token": (ability or Ability.INT).value,
        "target": int(m.group("dc")),
    }


RULES: tuple[DirectiveRule, ...] = (
    DirectiveRule("skill", RollPurpose.SKILL, _SKILL_PATTERN, _extract_skill),
    DirectiveRule("ability", RollPurpose.ABILITY, _ABILITY_PATTERN, _extract_ability),
    DirectiveRule("saving", RollPurpose.SAVING, _SAVING_PATTERN, _extract_saving),
    DirectiveRule("attack", RollPurpose.ATTACK, _ATTACK_PATTERN, _extract_attack),
    DirectiveRule("dc_saving", RollPurpose.SAVING, _DC_SAVING_PATTERN, _extract_saving),
    DirectiveRule("paren_skill", RollPurpose.SKILL, _PAREN_SKILL_PATTERN, _extract_skill),
    DirectiveRule("generic", RollPurpose.GENERIC, _GENERIC_PATTERN, _extract_dice),
    DirectiveRule("damage", RollPurpose.DAMAGE, _DAMAGE_PATTERN, _extract_dice),
    DirectiveRule("initiative", RollPurpose.INITIATIVE, _INITIATIVE_PATTERN, _extract_initiative),
    DirectiveRule("bracket", RollPurpose.ABILITY, _BRACKET_PATTERN, _extract_bracket),
)


def _overlaps(start: int, end: int, claimed: list[tuple[int, int]]) -> bool:
    return any(start < c_end and c_start < end for c_start, c_end in claimed)


def scan(
    text: str,
    rules: tuple[DirectiveRule, ...] = RULES,
) -> list[Directive]:
    """Return every roll directive found in ``text``.

    Never raises on odd input; text without roll phrases yields ``[]``.
    """
    if not text:
        return []

    directives: list[Directive] = []
    claimed: list[tuple[int, int]] = []

    for rule in rules:
        for m in rule.pattern.finditer(text):
            fields = rule.extract(m)
            if fields is None:
                continue
            start, end = m.span()
            if _overlaps(start, end, claimed):
                logger.debug("Dropping %s match %r: span already claimed", rule.name, m.group(0))
                continue
            claimed.append((start, end))
            fields.setdefault("kind", rule.kind)
            directives.append(Directive(
                text=m.group(0),
                start=start,
                end=end,
                purpose=rule.purpose,
                **fields,
            ))

    logger.debug("Scanned %d directive(s) from %d chars", len(directives), len(text))
    return directives
