"""Dice roller — die kinds, single/multi-die rolls, roll resolution."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger("tavern-dice.roller")


class InvalidCountError(ValueError):
    """Raised when a roll asks for fewer than one die."""

    def __init__(self, count: int) -> None:
        super().__init__(f"Dice count must be at least 1 (got {count})")
        self.count = count


class DiceKind(int, Enum):
    D4 = 4
    D6 = 6
    D8 = 8
    D10 = 10
    D12 = 12
    D20 = 20
    D100 = 100

    @property
    def label(self) -> str:
        return f"d{self.value}"

    @classmethod
    def from_token(cls, token: str | int | None) -> DiceKind | None:
        """Parse "d8", "D8", "8" or 8 into a DiceKind; None if unsupported."""
        if token is None:
            return None
        if isinstance(token, DiceKind):
            return token
        if isinstance(token, int):
            text = str(int(token))
        else:
            text = token.strip().lower()
        if text.startswith("d"):
            text = text[1:]
        if not text.isdigit():
            return None
        try:
            return cls(int(text))
        except ValueError:
            return None

    @classmethod
    def coerce(cls, token: str | int | None) -> DiceKind:
        """Like from_token, but unrecognized tokens fall back to a d20."""
        return cls.from_token(token) or cls.D20


class RollPurpose(str, Enum):
    ATTACK = "attack"
    SAVING = "saving"
    SKILL = "skill"
    ABILITY = "ability"
    DAMAGE = "damage"
    INITIATIVE = "initiative"
    GENERIC = "generic"

    @property
    def label(self) -> str:
        return _PURPOSE_LABELS[self]

    @property
    def explanation(self) -> str:
        return _PURPOSE_EXPLANATIONS[self]

    @classmethod
    def coerce(cls, value: str | RollPurpose | None) -> RollPurpose:
        """Map any purpose string onto the closed set; unknown → generic."""
        if isinstance(value, RollPurpose):
            return value
        if not value:
            return cls.GENERIC
        text = str(value).strip().lower()
        if text == "save":
            return cls.SAVING
        try:
            return cls(text)
        except ValueError:
            return cls.GENERIC


_PURPOSE_LABELS = {
    RollPurpose.ATTACK: "Attack Roll",
    RollPurpose.SAVING: "Saving Throw",
    RollPurpose.SKILL: "Skill Check",
    RollPurpose.ABILITY: "Ability Check",
    RollPurpose.DAMAGE: "Damage Roll",
    RollPurpose.INITIATIVE: "Initiative",
    RollPurpose.GENERIC: "General Roll",
}

_PURPOSE_EXPLANATIONS = {
    RollPurpose.ATTACK: (
        "Attack rolls determine if your attack hits or misses. Roll a d20, "
        "add your attack bonus, and compare to the target's AC."
    ),
    RollPurpose.SAVING: (
        "Saving throws are made to resist effects. Roll a d20, add your saving "
        "throw bonus for the relevant ability, and compare to the DC."
    ),
    RollPurpose.SKILL: (
        "Skill checks test your character's abilities. Roll a d20, add your "
        "skill modifier, and compare to the DC set by the DM."
    ),
    RollPurpose.ABILITY: (
        "Ability checks test your raw abilities. Roll a d20, add your ability "
        "modifier, and compare to the DC set by the DM."
    ),
    RollPurpose.INITIATIVE: (
        "Initiative determines turn order in combat. Roll a d20, add your "
        "Dexterity modifier, and the highest goes first."
    ),
    RollPurpose.DAMAGE: (
        "Damage rolls determine how much damage your attack deals. Roll the "
        "specified damage dice and add any modifiers."
    ),
    RollPurpose.GENERIC: (
        "General rolls determine random outcomes or chances of success."
    ),
}


@dataclass(frozen=True)
class RollRequest:
    kind: DiceKind = DiceKind.D20
    count: int = 1
    modifier: int = 0
    purpose: RollPurpose = RollPurpose.GENERIC
    target: int | None = None  # DC / AC
    label: str | None = None

    def __post_init__(self) -> None:
        if self.count < 1:
            raise InvalidCountError(self.count)
        object.__setattr__(self, "kind", DiceKind.coerce(self.kind))
        object.__setattr__(self, "purpose", RollPurpose.coerce(self.purpose))

    @property
    def expression(self) -> str:
        """Dice notation for this request, e.g. "2d6+3"."""
        expr = f"{self.count}{self.kind.label}"
        if self.modifier:
            expr += f"{self.modifier:+d}"
        return expr


@dataclass(frozen=True)
class RollOutcome:
    request: RollRequest
    results: tuple[int, ...]
    total: int
    success: bool | None = None
    critical_success: bool = False
    critical_failure: bool = False

    @property
    def natural(self) -> int:
        """Face value of the first die."""
        return self.results[0]

    def __str__(self) -> str:
        rolls = ", ".join(str(r) for r in self.results)
        text = f"{self.request.expression} = [{rolls}]"
        if self.request.modifier:
            text += f" {self.request.modifier:+d}"
        text += f" = {self.total}"
        if self.success is not None:
            text += f" vs {self.request.target}: {'SUCCESS' if self.success else 'FAILURE'}"
        return text


def face_count(kind: DiceKind) -> int:
    return int(kind)


def roll_one(kind: DiceKind, rng: random.Random) -> int:
    """Roll a single die of ``kind`` using the injected random source."""
    return rng.randint(1, face_count(kind))


def roll_many(kind: DiceKind, count: int, rng: random.Random) -> tuple[int, ...]:
    """Roll ``count`` independent dice of ``kind``."""
    if count < 1:
        raise InvalidCountError(count)
    return tuple(roll_one(kind, rng) for _ in range(count))


def resolve(request: RollRequest, rng: random.Random) -> RollOutcome:
    """Roll the dice of a request and compute total, success and criticals.

    ``success`` stays None when the request has no target number. Critical
    flags only apply to d20s: any die showing 20 (or 1) in the pool counts.
    """
    results = roll_many(request.kind, request.count, rng)
    total = sum(results) + request.modifier

    success = None
    if request.target is not None:
        success = total >= request.target

    critical_success = False
    critical_failure = False
    if request.kind is DiceKind.D20:
        critical_success = any(r == 20 for r in results)
        critical_failure = any(r == 1 for r in results)

    outcome = RollOutcome(
        request=request,
        results=results,
        total=total,
        success=success,
        critical_success=critical_success,
        critical_failure=critical_failure,
    )
    logger.debug("Resolved %s roll: %s", request.purpose.value, outcome)
    return outcome


def reroll(original: RollOutcome, rng: random.Random) -> RollOutcome:
    """Roll the same request again. The original outcome is left untouched."""
    return resolve(original.request, rng)
