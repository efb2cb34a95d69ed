"""Canonical player models shared across ingestion and optimizer layers."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from .skills import UNKNOWN, BaseObservation, SkillKey, SkillObservation, observe


# Youth ages advance on a fixed season length, not calendar years.
DAYS_PER_YEAR = 112


class Specialty(IntEnum):
    NONE = 0
    TECHNICAL = 1
    QUICK = 2
    POWERFUL = 3
    UNPREDICTABLE = 4
    HEAD = 5
    RESILIENT = 6
    SUPPORT = 8


class Player(BaseModel):
    """Roster snapshot entry consumed by the ranking engine and optimizers."""

    player_id: int
    name: str = ""
    age_years: Optional[int] = Field(default=None, ge=0)
    age_days: Optional[int] = Field(default=None, ge=0)
    can_be_promoted_in: Optional[int] = None
    specialty: Optional[Specialty] = None
    skills: Dict[SkillKey, SkillObservation] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("skills", mode="before")
    @classmethod
    def _observe_raw_skills(cls, value):
        if value is None:
            return {}
        if isinstance(value, dict):
            known = {skill.value for skill in SkillKey}
            return {
                key: _coerce_observation(raw)
                for key, raw in value.items()
                if getattr(key, "value", key) in known
            }
        return value

    @field_validator("specialty", mode="before")
    @classmethod
    def _unknown_specialty(cls, value):
        if value is None or value == "":
            return None
        try:
            return Specialty(int(value))
        except (TypeError, ValueError):
            return None

    def observation(self, skill: SkillKey) -> BaseObservation:
        return self.skills.get(SkillKey(skill), UNKNOWN)

    @property
    def total_age_days(self) -> int | None:
        if self.age_years is None:
            return None
        return self.age_years * DAYS_PER_YEAR + (self.age_days or 0)

    @property
    def promotion_age_days(self) -> int | None:
        base = self.total_age_days
        if base is None or self.can_be_promoted_in is None:
            return None
        return base + max(0, self.can_be_promoted_in)


def _coerce_observation(raw):
    # Serialized observations carry a ``kind`` tag and validate as-is.
    if isinstance(raw, dict) and "kind" in raw:
        return raw
    return observe(raw)


def age_sort_key(player: Player) -> tuple[int, int, int]:
    """Youngest first; players without an age sort after everyone else."""

    if player.age_years is None:
        return (1, 0, 0)
    return (0, player.age_years, player.age_days or 0)
