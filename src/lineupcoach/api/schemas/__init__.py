"""Pydantic models for API I/O."""

from .ranking import (
    AutoSelectionResponse,
    FocusCandidateResponse,
    FormationResponse,
    RankedEntryResponse,
    RankingRequest,
    RankingResponse,
    RosterRequest,
)
from .lineup import (
    LineupPlanResponse,
    LineupRequest,
    LineupSlotResponse,
    OptimizerDebugResponse,
    SelectionResponse,
    TopologyResponse,
)

__all__ = [
    "AutoSelectionResponse",
    "FocusCandidateResponse",
    "FormationResponse",
    "LineupPlanResponse",
    "LineupRequest",
    "LineupSlotResponse",
    "OptimizerDebugResponse",
    "RankedEntryResponse",
    "RankingRequest",
    "RankingResponse",
    "RosterRequest",
    "SelectionResponse",
    "TopologyResponse",
]
