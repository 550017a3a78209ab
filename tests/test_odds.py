"""Tests for success odds and roll breakdowns."""

import pytest

from tavern.modules.dice.odds import breakdown, needed_face, success_odds
from tavern.modules.dice.roller import DiceKind, RollPurpose, RollRequest, resolve
from tests.conftest import ScriptedRng


def test_success_odds_standard_check():
    assert success_odds(DiceKind.D20, modifier=2, target=15) == 40.0
    assert needed_face(2, 15) == 13


def test_success_odds_impossible():
    assert success_odds(DiceKind.D20, modifier=0, target=25) == 0


def test_success_odds_guaranteed():
    assert needed_face(10, 5) == 1
    assert success_odds(DiceKind.D20, modifier=10, target=5) == 100.0


@pytest.mark.parametrize(
    "kind,modifier,target,expected",
    [
        (DiceKind.D6, 0, 4, 50.0),
        (DiceKind.D4, 1, 4, 50.0),
        (DiceKind.D100, 0, 91, 10.0),
        (DiceKind.D20, -2, 10, 45.0),
    ],
)
def test_success_odds_other_dice(kind, modifier, target, expected):
    assert success_odds(kind, modifier, target) == pytest.approx(expected)


def test_breakdown_with_target():
    outcome = resolve(
        RollRequest(purpose=RollPurpose.SKILL, modifier=2, target=15),
        ScriptedRng([14]),
    )
    bd = breakdown(outcome)
    assert bd.purpose_label == "Skill Check"
    assert "Skill checks" in bd.explanation
    assert bd.natural == 14
    assert bd.total == 16
    assert bd.needed_face == 13
    assert bd.odds == 40.0
    assert bd.odds_text == "40.0%"
    assert bd.critical_note is None


def test_breakdown_without_target():
    outcome = resolve(
        RollRequest(kind=DiceKind.D8, count=2, purpose="damage"),
        ScriptedRng([3, 8]),
    )
    bd = breakdown(outcome)
    assert bd.purpose_label == "Damage Roll"
    assert bd.odds is None
    assert bd.needed_face is None
    assert bd.odds_text == "N/A"


def test_breakdown_critical_notes():
    crit = breakdown(resolve(RollRequest(purpose="attack"), ScriptedRng([20])))
    assert crit.critical_note.startswith("Critical Success!")

    fumble = breakdown(resolve(RollRequest(purpose="attack"), ScriptedRng([1])))
    assert fumble.critical_note.startswith("Critical Failure!")
