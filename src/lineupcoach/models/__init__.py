"""Roster and skill observation models."""

from .player import DAYS_PER_YEAR, Player, Specialty, age_sort_key
from .skills import (
    ALL_SKILLS,
    UNKNOWN,
    BaseObservation,
    KnownBoth,
    KnownCurrent,
    KnownMax,
    SkillKey,
    SkillObservation,
    Unknown,
    observe,
    observe_pair,
)

__all__ = [
    "ALL_SKILLS",
    "DAYS_PER_YEAR",
    "UNKNOWN",
    "BaseObservation",
    "KnownBoth",
    "KnownCurrent",
    "KnownMax",
    "Player",
    "SkillKey",
    "SkillObservation",
    "Specialty",
    "Unknown",
    "age_sort_key",
    "observe",
    "observe_pair",
]
