"""Training policy switches and their environment overrides."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


logger = logging.getLogger(__name__)

_ALLOW_UNTIL_MAXED_ENV = "LINEUPCOACH_ALLOW_TRAINING_UNTIL_MAXED_OUT"
_MIN_CURRENT_ENV = "LINEUPCOACH_MIN_CURRENT_LEVEL"
_MIN_MAX_ENV = "LINEUPCOACH_MIN_MAX_LEVEL"

DEFAULT_ALLOW_TRAINING_UNTIL_MAXED_OUT = True


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    text = raw.strip().lower()
    if text in {"1", "true", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "no", "n", "off"}:
        return False
    logger.warning("Invalid bool for %s: %s; using default %s", name, raw, default)
    return default


class TrainingPolicy(BaseModel):
    """User-level switches that shape ranking and placement.

    ``min_current_level`` and ``min_max_level`` demote a player to the
    don't-care tier when a known reading sits below them; 0 disables the check.
    """

    allow_training_until_maxed_out: bool = DEFAULT_ALLOW_TRAINING_UNTIL_MAXED_OUT
    min_current_level: int = Field(default=0, ge=0)
    min_max_level: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls) -> "TrainingPolicy":
        return cls(
            allow_training_until_maxed_out=_env_bool(
                _ALLOW_UNTIL_MAXED_ENV, DEFAULT_ALLOW_TRAINING_UNTIL_MAXED_OUT
            ),
            min_current_level=_env_int(_MIN_CURRENT_ENV, 0, min_value=0),
            min_max_level=_env_int(_MIN_MAX_ENV, 0, min_value=0),
        )


def resolve_policy(policy: TrainingPolicy | None) -> TrainingPolicy:
    return policy if policy is not None else TrainingPolicy()
