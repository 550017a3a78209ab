"""Check rule — narrative directive → roll request → outcome, breakdown, effect."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Mapping

from tavern.infra.config import settings
from tavern.modules.dice.abilities import Ability, modifier_from_scores
from tavern.modules.dice.directives import Directive, scan
from tavern.modules.dice.effects import Effect, derive_effects
from tavern.modules.dice.odds import RollBreakdown, breakdown
from tavern.modules.dice.parser import check_count
from tavern.modules.dice.roller import RollOutcome, RollPurpose, RollRequest, resolve

logger = logging.getLogger("tavern-dice.check")

_DICE_PURPOSES = (RollPurpose.DAMAGE, RollPurpose.GENERIC)


@dataclass(frozen=True)
class CheckResult:
    directive: Directive
    outcome: RollOutcome
    breakdown: RollBreakdown
    effect: Effect


def proficiency_bonus_for_level(level: int) -> int:
    """5e proficiency bonus: +2 at level 1, +6 at level 17."""
    return math.ceil(1 + level / 4)


def _governing_ability(directive: Directive) -> Ability | None:
    if directive.purpose is RollPurpose.INITIATIVE:
        return Ability.DEX
    if directive.purpose is RollPurpose.ATTACK:
        # Melee assumption when no ability was named
        return directive.ability or Ability.STR
    return directive.ability


def request_for_directive(
    directive: Directive,
    scores: Mapping[str, int] | None = None,
    proficiency_bonus: int = 0,
) -> RollRequest:
    """Build the roll request a directive asks for.

    Modifiers come from the caller's ability scores; skill checks also add
    ``proficiency_bonus``. Damage and generic rolls use the dice written in
    the text and ignore ability scores.

    Raises:
        ValueError: If the directive asks for fewer than one die or more
            than ``settings.max_dice_count``.
    """
    count = check_count(
        1 if directive.count is None else directive.count,
        settings.max_dice_count,
    )
    if directive.purpose in _DICE_PURPOSES:
        return RollRequest(
            kind=directive.kind,
            count=count,
            modifier=directive.modifier,
            purpose=directive.purpose,
            label=directive.label,
        )

    modifier = modifier_from_scores(scores, _governing_ability(directive))
    if directive.purpose is RollPurpose.SKILL:
        modifier += proficiency_bonus

    return RollRequest(
        kind=directive.kind,
        count=count,
        modifier=modifier,
        purpose=directive.purpose,
        target=directive.target,
        label=directive.skill or directive.token,
    )


def resolve_directive(
    directive: Directive,
    rng: random.Random,
    scores: Mapping[str, int] | None = None,
    proficiency_bonus: int = 0,
) -> CheckResult:
    request = request_for_directive(directive, scores, proficiency_bonus)
    outcome = resolve(request, rng)
    effect = derive_effects(outcome, directive.purpose, directive.skill or directive.token)
    return CheckResult(
        directive=directive,
        outcome=outcome,
        breakdown=breakdown(outcome),
        effect=effect,
    )


def resolve_text(
    text: str,
    rng: random.Random,
    scores: Mapping[str, int] | None = None,
    proficiency_bonus: int = 0,
) -> list[CheckResult]:
    """Scan narrative text and resolve every directive found, in scan order."""
    results = [
        resolve_directive(directive, rng, scores, proficiency_bonus)
        for directive in scan(text)
    ]
    logger.debug("Resolved %d check(s) from narrative text", len(results))
    return results
