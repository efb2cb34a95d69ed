"""Ranking, auto-selection and lineup optimizers."""

from .errors import (
    AlreadyKnown,
    EmptyRoster,
    FocusAlreadyMaxed,
    InvalidFocusPlayer,
    NoSelection,
    NoTrainingSlot,
    OptimizerError,
)
from .ranking import Category, RankedEntry, categorize, observation_score, rank_players
from .selection import AutoSelection, FocusCandidate, auto_select, focus_candidates, training_for_focus
from .service import (
    Assignment,
    LineupPlan,
    OptimizerDebug,
    OptimizerMode,
    Selection,
    advise,
    optimize_by_ratings,
    optimize_for_focus,
    reveal_primary_current,
    reveal_primary_max,
    reveal_secondary_current,
    reveal_secondary_max,
)
from .topology import SlotTopology, slots_for

__all__ = [
    "AlreadyKnown",
    "Assignment",
    "AutoSelection",
    "Category",
    "EmptyRoster",
    "FocusAlreadyMaxed",
    "FocusCandidate",
    "InvalidFocusPlayer",
    "LineupPlan",
    "NoSelection",
    "NoTrainingSlot",
    "OptimizerDebug",
    "OptimizerError",
    "OptimizerMode",
    "RankedEntry",
    "Selection",
    "SlotTopology",
    "advise",
    "auto_select",
    "categorize",
    "focus_candidates",
    "observation_score",
    "optimize_by_ratings",
    "optimize_for_focus",
    "rank_players",
    "reveal_primary_current",
    "reveal_primary_max",
    "reveal_secondary_current",
    "reveal_secondary_max",
    "slots_for",
    "training_for_focus",
]
