"""Engine result schemas — output from the engine dispatcher and API."""

from __future__ import annotations

from pydantic import BaseModel

from tavern.domain.rules.check import CheckResult
from tavern.modules.dice.directives import Directive
from tavern.modules.dice.effects import Effect
from tavern.modules.dice.odds import RollBreakdown
from tavern.modules.dice.roller import RollOutcome


class DirectiveResult(BaseModel):
    text: str
    start: int
    end: int
    purpose: str
    dice_type: int
    token: str | None = None
    target: int | None = None
    count: int | None = None
    modifier: int = 0
    label: str | None = None
    skill: str | None = None

    @classmethod
    def from_directive(cls, directive: Directive) -> DirectiveResult:
        return cls(
            text=directive.text,
            start=directive.start,
            end=directive.end,
            purpose=directive.purpose.value,
            dice_type=int(directive.kind),
            token=directive.token,
            target=directive.target,
            count=directive.count,
            modifier=directive.modifier,
            label=directive.label,
            skill=directive.skill,
        )


class RollOutcomeResult(BaseModel):
    expression: str
    purpose: str
    dice_type: int
    dice_count: int
    modifier: int
    target: int | None = None
    label: str | None = None
    results: list[int]
    total: int
    success: bool | None = None
    critical_success: bool = False
    critical_failure: bool = False

    @classmethod
    def from_outcome(cls, outcome: RollOutcome) -> RollOutcomeResult:
        request = outcome.request
        return cls(
            expression=request.expression,
            purpose=request.purpose.value,
            dice_type=int(request.kind),
            dice_count=request.count,
            modifier=request.modifier,
            target=request.target,
            label=request.label,
            results=list(outcome.results),
            total=outcome.total,
            success=outcome.success,
            critical_success=outcome.critical_success,
            critical_failure=outcome.critical_failure,
        )


class BreakdownResult(BaseModel):
    purpose_label: str
    explanation: str
    natural: int
    modifier: int
    total: int
    target: int | None = None
    needed_face: int | None = None
    odds: float | None = None
    odds_text: str
    critical_note: str | None = None

    @classmethod
    def from_breakdown(cls, bd: RollBreakdown) -> BreakdownResult:
        return cls(
            purpose_label=bd.purpose_label,
            explanation=bd.explanation,
            natural=bd.natural,
            modifier=bd.modifier,
            total=bd.total,
            target=bd.target,
            needed_face=bd.needed_face,
            odds=bd.odds,
            odds_text=bd.odds_text,
            critical_note=bd.critical_note,
        )


class EffectResult(BaseModel):
    description: str
    alignment_shift: str | None = None
    stat_deltas: dict[str, int] = {}

    @classmethod
    def from_effect(cls, effect: Effect) -> EffectResult:
        return cls(
            description=effect.description,
            alignment_shift=effect.alignment_shift.value if effect.alignment_shift else None,
            stat_deltas={a.value: d for a, d in effect.stat_deltas.items()},
        )


class CheckResultModel(BaseModel):
    directive: DirectiveResult
    outcome: RollOutcomeResult
    breakdown: BreakdownResult
    effect: EffectResult

    @classmethod
    def from_check(cls, check: CheckResult) -> CheckResultModel:
        return cls(
            directive=DirectiveResult.from_directive(check.directive),
            outcome=RollOutcomeResult.from_outcome(check.outcome),
            breakdown=BreakdownResult.from_breakdown(check.breakdown),
            effect=EffectResult.from_effect(check.effect),
        )


class OddsResult(BaseModel):
    dice_type: int
    modifier: int
    target: int
    needed_face: int
    odds: float


class EngineResult(BaseModel):
    success: bool
    event_type: str
    data: dict = {}
    error: str | None = None
