"""Event dispatcher — the single entry point for all dice events."""

from __future__ import annotations

import logging
import random

from tavern.domain.rules import check
from tavern.infra.config import settings
from tavern.models.event import (
    DiceEvent,
    EffectsPayload,
    EventType,
    OddsPayload,
    ResolveTextPayload,
    RollPayload,
    ScanPayload,
)
from tavern.models.result import (
    BreakdownResult,
    CheckResultModel,
    DirectiveResult,
    EffectResult,
    EngineResult,
    OddsResult,
    RollOutcomeResult,
)
from tavern.modules.dice import odds
from tavern.modules.dice.directives import scan
from tavern.modules.dice.effects import derive_effects
from tavern.modules.dice.parser import parse_expression
from tavern.modules.dice.roller import DiceKind, resolve

logger = logging.getLogger("tavern-dice.dispatcher")


def dispatch(event: DiceEvent, rng: random.Random) -> EngineResult:
    """Route a DiceEvent to its handler and return an EngineResult."""
    payload = event.payload
    et = payload.event_type

    try:
        if et == EventType.SCAN:
            return _handle_scan(payload)
        elif et == EventType.ROLL:
            return _handle_roll(payload, rng)
        elif et == EventType.RESOLVE_TEXT:
            return _handle_resolve_text(payload, rng)
        elif et == EventType.ODDS:
            return _handle_odds(payload)
        elif et == EventType.EFFECTS:
            return _handle_effects(payload, rng)
        else:
            return EngineResult(
                success=False, event_type=et, error=f"Unhandled event type: {et}"
            )
    except ValueError as exc:
        logger.info("Rejected %s event: %s", et, exc)
        return EngineResult(success=False, event_type=et, error=str(exc))


def odds_for(dice_type: int, modifier: int, target: int) -> OddsResult:
    kind = DiceKind.from_token(dice_type)
    if kind is None:
        raise ValueError(f"Unsupported die: d{dice_type}")
    return OddsResult(
        dice_type=int(kind),
        modifier=modifier,
        target=target,
        needed_face=odds.needed_face(modifier, target),
        odds=odds.success_odds(kind, modifier, target),
    )


def _handle_scan(payload: ScanPayload) -> EngineResult:
    directives = scan(payload.text)
    return EngineResult(
        success=True,
        event_type="scan",
        data={"directives": [DirectiveResult.from_directive(d).model_dump() for d in directives]},
    )


def _handle_roll(payload: RollPayload, rng: random.Random) -> EngineResult:
    request = parse_expression(
        payload.expression,
        purpose=payload.purpose,
        target=payload.target,
        max_count=settings.max_dice_count,
    )
    outcome = resolve(request, rng)
    return EngineResult(
        success=True,
        event_type="roll",
        data={
            "outcome": RollOutcomeResult.from_outcome(outcome).model_dump(),
            "breakdown": BreakdownResult.from_breakdown(odds.breakdown(outcome)).model_dump(),
        },
    )


def _handle_resolve_text(payload: ResolveTextPayload, rng: random.Random) -> EngineResult:
    bonus = check.proficiency_bonus_for_level(payload.level) if payload.level else 0
    results = check.resolve_text(payload.text, rng, payload.scores, bonus)
    return EngineResult(
        success=True,
        event_type="resolve_text",
        data={"checks": [CheckResultModel.from_check(c).model_dump() for c in results]},
    )


def _handle_odds(payload: OddsPayload) -> EngineResult:
    result = odds_for(payload.dice_type, payload.modifier, payload.target)
    return EngineResult(success=True, event_type="odds", data=result.model_dump())


def _handle_effects(payload: EffectsPayload, rng: random.Random) -> EngineResult:
    request = parse_expression(
        payload.expression,
        purpose=payload.purpose,
        target=payload.target,
        max_count=settings.max_dice_count,
    )
    outcome = resolve(request, rng)
    effect = derive_effects(outcome, request.purpose, payload.skill)
    return EngineResult(
        success=True,
        event_type="effects",
        data={
            "outcome": RollOutcomeResult.from_outcome(outcome).model_dump(),
            "effect": EffectResult.from_effect(effect).model_dump(),
        },
    )
