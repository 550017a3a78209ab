"""Success odds and roll breakdowns for display.

Odds assume a single die (the d20 check convention). Pools of several dice
are not modelled here.
"""

from __future__ import annotations

from dataclasses import dataclass

from tavern.modules.dice.roller import DiceKind, RollOutcome, face_count


@dataclass(frozen=True)
class RollBreakdown:
    purpose_label: str
    explanation: str
    natural: int
    modifier: int
    total: int
    target: int | None = None
    needed_face: int | None = None
    odds: float | None = None
    critical_note: str | None = None

    @property
    def odds_text(self) -> str:
        return "N/A" if self.odds is None else f"{self.odds:.1f}%"


def needed_face(modifier: int, target: int) -> int:
    """Lowest natural roll that still meets ``target``."""
    return max(1, target - modifier)


def success_odds(kind: DiceKind, modifier: int, target: int) -> float:
    """Percentage chance that one die of ``kind`` plus ``modifier`` meets ``target``."""
    faces = face_count(kind)
    successful_faces = max(0, faces - needed_face(modifier, target) + 1)
    return successful_faces / faces * 100


def breakdown(outcome: RollOutcome) -> RollBreakdown:
    request = outcome.request
    target = request.target

    critical_note = None
    if outcome.critical_success:
        critical_note = (
            "Critical Success! A natural 20 is always a critical success, "
            "often with additional beneficial effects."
        )
    elif outcome.critical_failure:
        critical_note = (
            "Critical Failure! A natural 1 is always a critical failure, "
            "often with additional negative consequences."
        )

    return RollBreakdown(
        purpose_label=request.purpose.label,
        explanation=request.purpose.explanation,
        natural=outcome.natural,
        modifier=request.modifier,
        total=outcome.total,
        target=target,
        needed_face=needed_face(request.modifier, target) if target is not None else None,
        odds=success_odds(request.kind, request.modifier, target) if target is not None else None,
        critical_note=critical_note,
    )
