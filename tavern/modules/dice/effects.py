"""Effect deriver — secondary effects (alignment drift) of a finished roll."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from tavern.modules.dice.abilities import Ability, normalize_token
from tavern.modules.dice.roller import RollOutcome, RollPurpose


class AlignmentShift(str, Enum):
    GOOD = "good"
    EVIL = "evil"
    LAWFUL = "lawful"
    CHAOTIC = "chaotic"


@dataclass(frozen=True)
class Effect:
    description: str
    alignment_shift: AlignmentShift | None = None
    stat_deltas: Mapping[Ability, int] = field(default_factory=lambda: MappingProxyType({}))


# First matching row wins.
ALIGNMENT_RULES: tuple[tuple[frozenset[str], AlignmentShift], ...] = (
    (frozenset({"deception", "stealth"}), AlignmentShift.CHAOTIC),
    (frozenset({"intimidation"}), AlignmentShift.EVIL),
    (frozenset({"persuasion", "diplomacy"}), AlignmentShift.GOOD),
    (frozenset({"religion", "insight"}), AlignmentShift.LAWFUL),
)

_CHECK_PURPOSES = (RollPurpose.SKILL, RollPurpose.ABILITY)


def _alignment_shift(
    outcome: RollOutcome,
    purpose: RollPurpose,
    token: str | None,
) -> AlignmentShift | None:
    if not (outcome.critical_success or outcome.critical_failure):
        return None
    if purpose not in _CHECK_PURPOSES or outcome.success is not True:
        return None
    if not token:
        return None
    skill = normalize_token(token)
    for skills, shift in ALIGNMENT_RULES:
        if skill in skills:
            return shift
    return None


def derive_effects(
    outcome: RollOutcome,
    purpose: RollPurpose | str,
    token: str | None = None,
) -> Effect:
    """Describe what a finished roll means beyond its total.

    Only a successful skill or ability check that shows a 20 or a 1 on some
    d20 can hint at an alignment shift. Nothing here touches character state.
    """
    purpose = RollPurpose.coerce(purpose)
    shift = _alignment_shift(outcome, purpose, token)

    if outcome.success is None:
        description = "Roll complete."
    elif outcome.success:
        description = "Success."
    else:
        description = "Failure."

    if outcome.critical_success:
        description = f"Critical Success! {description}"
    elif outcome.critical_failure:
        description = f"Critical Failure! {description}"

    if shift is not None:
        description += f" Your actions lean {shift.value}."

    return Effect(description=description, alignment_shift=shift)
