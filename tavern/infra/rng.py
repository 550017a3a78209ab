"""Random source for dice rolls, one generator per request."""

from __future__ import annotations

import random

from tavern.infra.config import settings


def new_rng(seed: int | None = None) -> random.Random:
    """Create an independent generator, seeded from settings when configured."""
    if seed is None:
        seed = settings.rng_seed
    return random.Random(seed)


def get_rng() -> random.Random:
    """FastAPI dependency that yields a fresh random generator."""
    return new_rng()
