"""Tests for the dice expression parser."""

import pytest

from tavern.modules.dice.parser import parse_expression, roll_expression
from tavern.modules.dice.roller import DiceKind, InvalidCountError, RollPurpose
from tests.conftest import ScriptedRng


def test_parse_simple_dice():
    request = parse_expression("2d6")
    assert request.count == 2
    assert request.kind is DiceKind.D6
    assert request.modifier == 0
    assert request.purpose is RollPurpose.GENERIC


def test_parse_single_die():
    request = parse_expression("d100")
    assert request.count == 1
    assert request.kind is DiceKind.D100


def test_parse_dice_with_positive_modifier():
    request = parse_expression("3d8+5")
    assert request.count == 3
    assert request.kind is DiceKind.D8
    assert request.modifier == 5


def test_parse_dice_with_negative_modifier():
    request = parse_expression("2d6 - 2")
    assert request.count == 2
    assert request.modifier == -2


def test_parse_uppercase():
    assert parse_expression("1D20+3").kind is DiceKind.D20


def test_parse_carries_purpose_and_target():
    request = parse_expression("1d20+4", purpose="attack", target=13)
    assert request.purpose is RollPurpose.ATTACK
    assert request.target == 13


def test_parse_invalid_expression():
    with pytest.raises(ValueError):
        parse_expression("abc123")


def test_parse_empty_expression():
    with pytest.raises(ValueError):
        parse_expression("")


def test_parse_unsupported_die():
    with pytest.raises(ValueError, match="Unsupported die"):
        parse_expression("2d7")


def test_parse_zero_dice():
    with pytest.raises(InvalidCountError):
        parse_expression("0d6")


def test_parse_max_count():
    with pytest.raises(ValueError, match="Cannot roll more than"):
        parse_expression("500d6", max_count=100)


def test_roll_expression_convenience():
    outcome = roll_expression("2d6+3", ScriptedRng([4, 5]))
    assert outcome.results == (4, 5)
    assert outcome.total == 12
    assert outcome.success is None


def test_roll_expression_with_target():
    outcome = roll_expression("1d20", ScriptedRng([20]), purpose="skill", target=10)
    assert outcome.success is True
    assert outcome.critical_success is True
