"""Persist and load CLI advisor profiles."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional


@dataclass
class AdvisorProfile:
    focus_player_id: Optional[int] = None
    primary_skill: Optional[str] = None
    secondary_skill: Optional[str] = None
    formation: Optional[str] = None
    mode: Optional[str] = None
    allow_training_until_maxed_out: Optional[bool] = None

    @classmethod
    def load(cls, path: Path) -> "AdvisorProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            focus_player_id=data.get("focus_player_id"),
            primary_skill=data.get("primary_skill"),
            secondary_skill=data.get("secondary_skill"),
            formation=data.get("formation"),
            mode=data.get("mode"),
            allow_training_until_maxed_out=data.get("allow_training_until_maxed_out"),
        )

    def save(self, path: Path) -> None:
        path.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")
