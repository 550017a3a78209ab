"""Dice expression parser — supports NdM, NdM+X, NdM-X and dM."""

from __future__ import annotations

import random
import re

from tavern.modules.dice.roller import (
    DiceKind,
    InvalidCountError,
    RollOutcome,
    RollPurpose,
    RollRequest,
    resolve,
)

_DICE_PATTERN = re.compile(
    r"^(\d*)\s*d\s*(\d+)"  # NdM
    r"(?:\s*([+-])\s*(\d+))?$",  # optional +X or -X
    re.IGNORECASE,
)


def check_count(count: int, max_count: int | None = None) -> int:
    """Validate a dice count against the per-roll limit and return it."""
    if count < 1:
        raise InvalidCountError(count)
    if max_count is not None and count > max_count:
        raise ValueError(f"Cannot roll more than {max_count} dice (got {count})")
    return count


def parse_expression(
    expr: str,
    purpose: RollPurpose | str = RollPurpose.GENERIC,
    target: int | None = None,
    max_count: int | None = None,
) -> RollRequest:
    """Parse a dice expression string into a RollRequest.

    Supported formats:
        NdM        - e.g. 2d6
        NdM+X      - e.g. 2d6+3
        NdM-X      - e.g. 2d6-2
        dM         - e.g. d100 (shorthand for 1dM)

    Args:
        expr: The expression string.
        purpose: Classification tag carried on the request.
        target: Optional DC the total must meet or exceed.
        max_count: Optional upper bound on the number of dice.

    Returns:
        RollRequest with all parsed components.

    Raises:
        ValueError: If the expression cannot be parsed or names an
            unsupported die.
        InvalidCountError: If the expression asks for zero dice.
    """
    expr = expr.strip()
    if not expr:
        raise ValueError("Empty dice expression")

    dice_match = _DICE_PATTERN.match(expr)
    if not dice_match:
        raise ValueError(f"Invalid dice expression: {expr}")

    count_str, sides_str, sign, mod_val = dice_match.groups()
    kind = DiceKind.from_token(sides_str)
    if kind is None:
        raise ValueError(f"Unsupported die: d{sides_str}")

    count = check_count(int(count_str) if count_str else 1, max_count)

    modifier = 0
    if sign and mod_val:
        modifier = int(mod_val) if sign == "+" else -int(mod_val)

    return RollRequest(
        kind=kind,
        count=count,
        modifier=modifier,
        purpose=RollPurpose.coerce(purpose),
        target=target,
    )


def roll_expression(
    expr: str,
    rng: random.Random,
    purpose: RollPurpose | str = RollPurpose.GENERIC,
    target: int | None = None,
) -> RollOutcome:
    """Convenience: parse + resolve in one call."""
    return resolve(parse_expression(expr, purpose, target), rng)
