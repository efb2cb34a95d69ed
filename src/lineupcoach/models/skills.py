"""Skill keys and the tri-state observation model for per-skill readings."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class SkillKey(str, Enum):
    KEEPER = "keeper"
    DEFENDING = "defending"
    PLAYMAKING = "playmaking"
    WINGER = "winger"
    PASSING = "passing"
    SCORING = "scoring"
    SETPIECES = "setpieces"


ALL_SKILLS: tuple[SkillKey, ...] = tuple(SkillKey)


class BaseObservation(BaseModel):
    exhausted: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def current(self) -> int | None:
        return None

    @property
    def max(self) -> int | None:
        return None


class Unknown(BaseObservation):
    """No reading available yet."""

    kind: Literal["unknown"] = "unknown"


class KnownCurrent(BaseObservation):
    kind: Literal["current"] = "current"
    value: int = Field(..., ge=0)

    @property
    def current(self) -> int | None:
        return self.value


class KnownMax(BaseObservation):
    kind: Literal["max"] = "max"
    value: int = Field(..., ge=0)

    @property
    def max(self) -> int | None:
        return self.value


class KnownBoth(BaseObservation):
    kind: Literal["both"] = "both"
    current_value: int = Field(..., ge=0)
    max_value: int = Field(..., ge=0)

    @property
    def current(self) -> int | None:
        return self.current_value

    @property
    def max(self) -> int | None:
        return self.max_value


SkillObservation = Annotated[
    Union[Unknown, KnownCurrent, KnownMax, KnownBoth],
    Field(discriminator="kind"),
]

UNKNOWN = Unknown()

_OBSERVATION_TYPES = (Unknown, KnownCurrent, KnownMax, KnownBoth)


def _parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() == "true"


def _parse_level(raw: Any) -> int | None:
    """Return a non-negative skill level or ``None`` when the reading is unusable."""

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Mapping):
        available = raw.get("@_IsAvailable")
        if available is not None and not _parse_flag(available):
            return None
        return _parse_level(raw.get("#text"))
    if isinstance(raw, (int, float)):
        number = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if number != number or number < 0 or number == float("inf"):
        return None
    return int(number)


def _max_reached_flag(raw: Any) -> bool:
    if isinstance(raw, Mapping):
        return _parse_flag(raw.get("@_IsMaxReached"))
    return False


def observe_pair(current_raw: Any, max_raw: Any, *, max_reached: bool = False) -> BaseObservation:
    """Combine separate current and ceiling readings into one observation."""

    current = _parse_level(current_raw)
    maximum = _parse_level(max_raw)
    max_reached = max_reached or _max_reached_flag(current_raw) or _max_reached_flag(max_raw)

    if current is not None and maximum is not None:
        return KnownBoth(
            current_value=current,
            max_value=maximum,
            exhausted=max_reached or current >= maximum,
        )
    if current is not None:
        if max_reached:
            # A reached ceiling pins the max to the current level.
            return KnownBoth(current_value=current, max_value=current, exhausted=True)
        return KnownCurrent(value=current)
    if maximum is not None:
        return KnownMax(value=maximum, exhausted=max_reached)
    return Unknown(exhausted=max_reached)


def observe(raw: Any) -> BaseObservation:
    """Normalize whatever the roster source provides for one skill.

    Accepts ``None``, plain numbers or numeric strings (current level),
    provider dicts carrying ``#text``/``@_IsAvailable``/``@_IsMaxReached``,
    ``(current, max)`` pairs, ``{"current": .., "max": ..}`` mappings and
    already-built observations. Anything unreadable becomes :class:`Unknown`.
    """

    if isinstance(raw, _OBSERVATION_TYPES):
        return raw
    if isinstance(raw, (tuple, list)):
        if len(raw) != 2:
            return UNKNOWN
        return observe_pair(raw[0], raw[1])
    if isinstance(raw, Mapping) and ("current" in raw or "max" in raw):
        return observe_pair(
            raw.get("current"),
            raw.get("max"),
            max_reached=_parse_flag(raw.get("max_reached")),
        )
    return observe_pair(raw, None)
