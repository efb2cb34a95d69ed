from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field

from lineupcoach.models import SkillKey


class RosterRequest(BaseModel):
    players: List[dict[str, Any]] = Field(default_factory=list)
    allow_training_until_maxed_out: bool | None = None
    min_current_level: int | None = Field(default=None, ge=0)
    min_max_level: int | None = Field(default=None, ge=0)


class RankingRequest(RosterRequest):
    skill: SkillKey


class RankedEntryResponse(BaseModel):
    player_id: int
    name: str
    category: str
    current: int | None
    max: int | None
    score: int
    rank: int
    age_years: int | None = None
    age_days: int | None = None


class RankingResponse(BaseModel):
    skill: SkillKey
    entries: List[RankedEntryResponse]


class FocusCandidateResponse(BaseModel):
    player_id: int
    name: str
    skill: SkillKey
    category: str
    score: int
    age_years: int | None = None
    age_days: int | None = None
    promotion_age_days: int | None = None


class AutoSelectionResponse(BaseModel):
    focus_player_id: int | None = None
    primary_skill: SkillKey | None = None
    secondary_skill: SkillKey | None = None
    candidates: List[FocusCandidateResponse] = Field(default_factory=list)


class FormationResponse(BaseModel):
    name: str
    field_slots: List[str]
    bench_slots: List[str]
