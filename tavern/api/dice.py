"""Dice API — narrative scanning, rolls, odds and event submission."""

from __future__ import annotations

import random
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from tavern.domain.dispatcher import dispatch, odds_for
from tavern.domain.rules import check
from tavern.infra.config import settings
from tavern.infra.rng import get_rng
from tavern.models.event import DiceEvent
from tavern.models.result import (
    BreakdownResult,
    CheckResultModel,
    DirectiveResult,
    EngineResult,
    OddsResult,
    RollOutcomeResult,
)
from tavern.modules.dice import odds
from tavern.modules.dice.directives import scan
from tavern.modules.dice.parser import parse_expression
from tavern.modules.dice.roller import resolve

router = APIRouter(prefix="/api/dice", tags=["dice"])


# --- Request schemas ---


class ScanRequest(BaseModel):
    text: str


class RollRequestBody(BaseModel):
    expression: str
    purpose: str = "generic"
    target: int | None = None


class ResolveTextRequest(BaseModel):
    text: str
    scores: dict[str, int] = {}
    level: int | None = None


class OddsRequest(BaseModel):
    dice_type: int = 20
    modifier: int = 0
    target: int


class RollResponse(BaseModel):
    outcome: RollOutcomeResult
    breakdown: BreakdownResult


# --- Endpoints ---


@router.post("/scan")
async def scan_text(body: ScanRequest) -> list[DirectiveResult]:
    """Find roll directives in a block of narrative text."""
    return [DirectiveResult.from_directive(d) for d in scan(body.text)]


@router.post("/roll")
async def roll_dice(
    body: RollRequestBody,
    rng: Annotated[random.Random, Depends(get_rng)],
) -> RollResponse:
    """Roll dice with a general expression, optionally against a DC."""
    try:
        request = parse_expression(
            body.expression,
            purpose=body.purpose,
            target=body.target,
            max_count=settings.max_dice_count,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    outcome = resolve(request, rng)
    return RollResponse(
        outcome=RollOutcomeResult.from_outcome(outcome),
        breakdown=BreakdownResult.from_breakdown(odds.breakdown(outcome)),
    )


@router.post("/resolve")
async def resolve_text(
    body: ResolveTextRequest,
    rng: Annotated[random.Random, Depends(get_rng)],
) -> list[CheckResultModel]:
    """Scan narrative text and roll every directive with the given ability scores."""
    bonus = check.proficiency_bonus_for_level(body.level) if body.level else 0
    try:
        results = check.resolve_text(body.text, rng, body.scores, bonus)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [CheckResultModel.from_check(c) for c in results]


@router.post("/odds")
async def success_odds(body: OddsRequest) -> OddsResult:
    try:
        return odds_for(body.dice_type, body.modifier, body.target)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/events")
async def submit_event(
    event: DiceEvent,
    rng: Annotated[random.Random, Depends(get_rng)],
) -> EngineResult:
    """Submit a dice event to the engine dispatcher."""
    return dispatch(event, rng)
