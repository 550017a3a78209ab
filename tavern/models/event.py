"""Dice event schemas — input to the engine dispatcher."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class EventType(str, Enum):
    SCAN = "scan"
    ROLL = "roll"
    RESOLVE_TEXT = "resolve_text"
    ODDS = "odds"
    EFFECTS = "effects"


# --- Payload models ---


class ScanPayload(BaseModel):
    event_type: Literal["scan"] = "scan"
    text: str


class RollPayload(BaseModel):
    event_type: Literal["roll"] = "roll"
    expression: str  # e.g. 1d20+5
    purpose: str = "generic"
    target: int | None = None


class ResolveTextPayload(BaseModel):
    event_type: Literal["resolve_text"] = "resolve_text"
    text: str
    scores: dict[str, int] = {}  # {"strength": 14, "DEX": 12, ...}
    level: int | None = None  # adds proficiency to skill checks


class OddsPayload(BaseModel):
    event_type: Literal["odds"] = "odds"
    dice_type: int = 20
    modifier: int = 0
    target: int


class EffectsPayload(BaseModel):
    event_type: Literal["effects"] = "effects"
    expression: str = "1d20"
    purpose: str = "skill"
    skill: str | None = None  # persuasion, stealth, ...
    target: int | None = None


EventPayload = Annotated[
    Union[
        ScanPayload,
        RollPayload,
        ResolveTextPayload,
        OddsPayload,
        EffectsPayload,
    ],
    Field(discriminator="event_type"),
]


class DiceEvent(BaseModel):
    """Top-level event submitted by a client to the engine."""

    payload: EventPayload
    source: str | None = None  # chat channel, campaign log, ...
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
