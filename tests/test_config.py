"""Tests for settings and the per-request random source."""

from tavern.infra import rng as rng_module
from tavern.infra.config import Settings
from tavern.modules.dice.roller import DiceKind, roll_many


def test_settings_defaults():
    s = Settings(_env_file=None)
    assert s.max_dice_count == 100
    assert s.rng_seed is None
    assert s.log_level == "INFO"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("MAX_DICE_COUNT", "5")
    monkeypatch.setenv("RNG_SEED", "42")
    s = Settings(_env_file=None)
    assert s.max_dice_count == 5
    assert s.rng_seed == 42


def test_explicit_seed_is_reproducible():
    first = roll_many(DiceKind.D20, 10, rng_module.new_rng(7))
    second = roll_many(DiceKind.D20, 10, rng_module.new_rng(7))
    assert first == second


def test_configured_seed_applies_to_every_request(monkeypatch):
    monkeypatch.setattr(rng_module.settings, "rng_seed", 99)
    first = roll_many(DiceKind.D6, 8, rng_module.get_rng())
    second = roll_many(DiceKind.D6, 8, rng_module.get_rng())
    assert first == second
