from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from lineupcoach.models import SkillKey
from lineupcoach.optimizer import OptimizerMode

from .ranking import FocusCandidateResponse, RankedEntryResponse, RosterRequest


class LineupRequest(RosterRequest):
    focus_player_id: int | None = None
    primary_skill: SkillKey | None = None
    secondary_skill: SkillKey | None = None
    mode: OptimizerMode = OptimizerMode.FOCUS
    formation: str | None = None
    ratings: Dict[str, Any] | None = None
    seed: int | None = None
    require_players: bool = False
    include_debug: bool = True


class LineupSlotResponse(BaseModel):
    slot: str
    player_id: int | None
    name: str | None = None


class SelectionResponse(BaseModel):
    focus_player_id: int
    primary_skill: SkillKey
    secondary_skill: SkillKey
    auto_selected: bool


class TopologyResponse(BaseModel):
    formation: str
    primary: List[str]
    secondary: List[str]
    primary_full: List[str]
    primary_half: List[str]
    secondary_full: List[str]
    secondary_half: List[str]
    all: List[str]


class OptimizerDebugResponse(BaseModel):
    mode: OptimizerMode
    selection: SelectionResponse
    focus_slot: str | None
    topology: TopologyResponse
    primary_ranking: List[RankedEntryResponse]
    secondary_ranking: List[RankedEntryResponse]
    focus_candidates: List[FocusCandidateResponse]


class LineupPlanResponse(BaseModel):
    assignment: Dict[str, int | None]
    slots: List[LineupSlotResponse]
    selection: SelectionResponse
    debug: OptimizerDebugResponse | None = None
    message: str | None = Field(default=None)
