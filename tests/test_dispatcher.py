"""Tests for the dice event dispatcher."""

from tavern.domain.dispatcher import dispatch
from tavern.models.event import (
    DiceEvent,
    EffectsPayload,
    OddsPayload,
    ResolveTextPayload,
    RollPayload,
    ScanPayload,
)
from tests.conftest import ScriptedRng


def test_dispatch_scan():
    event = DiceEvent(payload=ScanPayload(text="Roll a Perception check DC 15."))
    result = dispatch(event, ScriptedRng([]))
    assert result.success is True
    assert result.event_type == "scan"
    [directive] = result.data["directives"]
    assert directive["purpose"] == "skill"
    assert directive["token"] == "WIS"
    assert directive["target"] == 15
    assert directive["dice_type"] == 20


def test_dispatch_roll():
    event = DiceEvent(payload=RollPayload(expression="1d20+3", purpose="attack", target=13))
    result = dispatch(event, ScriptedRng([10]))
    assert result.success is True
    outcome = result.data["outcome"]
    assert outcome["total"] == 13
    assert outcome["success"] is True
    assert outcome["purpose"] == "attack"
    assert result.data["breakdown"]["purpose_label"] == "Attack Roll"


def test_dispatch_roll_invalid_expression():
    event = DiceEvent(payload=RollPayload(expression="roll lots"))
    result = dispatch(event, ScriptedRng([]))
    assert result.success is False
    assert "Invalid dice expression" in result.error


def test_dispatch_roll_zero_dice():
    event = DiceEvent(payload=RollPayload(expression="0d6"))
    result = dispatch(event, ScriptedRng([]))
    assert result.success is False
    assert "at least 1" in result.error


def test_dispatch_resolve_text_with_level():
    event = DiceEvent(payload=ResolveTextPayload(
        text="Roll a Stealth check DC 15",
        scores={"DEX": 16},
        level=5,
    ))
    result = dispatch(event, ScriptedRng([10]))
    assert result.success is True
    [check] = result.data["checks"]
    assert check["outcome"]["modifier"] == 3 + 3
    assert check["outcome"]["total"] == 16
    assert check["outcome"]["success"] is True


def test_dispatch_odds():
    event = DiceEvent(payload=OddsPayload(modifier=2, target=15))
    result = dispatch(event, ScriptedRng([]))
    assert result.data["odds"] == 40.0
    assert result.data["needed_face"] == 13


def test_dispatch_odds_unsupported_die():
    event = DiceEvent(payload=OddsPayload(dice_type=7, target=4))
    result = dispatch(event, ScriptedRng([]))
    assert result.success is False
    assert "Unsupported die" in result.error


def test_dispatch_effects():
    event = DiceEvent(payload=EffectsPayload(skill="intimidation", target=12))
    result = dispatch(event, ScriptedRng([20]))
    assert result.success is True
    assert result.data["effect"]["alignment_shift"] == "evil"
    assert result.data["outcome"]["critical_success"] is True


def test_dispatch_resolve_text_oversized_pool():
    event = DiceEvent(payload=ResolveTextPayload(text="Roll 500d8 damage."))
    result = dispatch(event, ScriptedRng([]))
    assert result.success is False
    assert "Cannot roll more than" in result.error
