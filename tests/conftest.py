"""Shared test fixtures."""

import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tavern.infra.rng import get_rng
from tavern.main import app


class ScriptedRng(random.Random):
    """Random source that returns predetermined die faces, in order."""

    def __init__(self, faces):
        super().__init__(0)
        self._faces = list(faces)

    def randint(self, a, b):
        if not self._faces:
            raise AssertionError("ScriptedRng ran out of faces")
        face = self._faces.pop(0)
        assert a <= face <= b, f"scripted face {face} outside [{a}, {b}]"
        return face


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def script_rolls(*faces: int) -> None:
    """Make the API roll the given faces for the next request."""
    app.dependency_overrides[get_rng] = lambda: ScriptedRng(faces)
