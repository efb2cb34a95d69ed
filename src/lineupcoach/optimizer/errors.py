"""Recoverable optimizer failures surfaced to callers."""

from __future__ import annotations

from typing import Optional

from lineupcoach.models import SkillKey


class OptimizerError(Exception):
    code = "optimizer_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidFocusPlayer(OptimizerError):
    code = "invalid_focus_player"

    def __init__(self, player_id: Optional[int]):
        super().__init__(f"Focus player {player_id!r} is not in the roster")
        self.player_id = player_id


class FocusAlreadyMaxed(OptimizerError):
    code = "focus_already_maxed"

    def __init__(self, player_id: int, skill: SkillKey):
        super().__init__(f"Player {player_id} has no training headroom left for {skill.value}")
        self.player_id = player_id
        self.skill = skill


class AlreadyKnown(OptimizerError):
    code = "already_known"

    def __init__(self, player_id: int, skill: SkillKey, fact: str):
        super().__init__(f"Player {player_id} already shows a {fact} value for {skill.value}")
        self.player_id = player_id
        self.skill = skill
        self.fact = fact


class EmptyRoster(OptimizerError):
    code = "empty_roster"

    def __init__(self) -> None:
        super().__init__("Roster has no players")


class NoTrainingSlot(OptimizerError):
    code = "no_training_slot"

    def __init__(self, skill: SkillKey, formation: str, player_id: int | None = None):
        if player_id is None:
            message = f"Formation {formation} has no slot training {skill.value}"
        else:
            message = f"No slot training {skill.value} in formation {formation} accepts player {player_id}"
        super().__init__(message)
        self.skill = skill
        self.formation = formation
        self.player_id = player_id


class NoSelection(OptimizerError):
    code = "no_selection"

    def __init__(self) -> None:
        super().__init__("Unable to choose a focus player and training pair from this roster")
