"""Configuration helpers for formations, slots and training policy."""

from .policy import TrainingPolicy, resolve_policy
from .slots import (
    BENCH_SLOTS,
    DEFAULT_FORMATION,
    FIELD_SLOTS,
    Formation,
    get_formation,
    iter_formations,
    rating_keys,
    slot_role,
    training_weight,
)

__all__ = [
    "BENCH_SLOTS",
    "DEFAULT_FORMATION",
    "FIELD_SLOTS",
    "Formation",
    "TrainingPolicy",
    "get_formation",
    "iter_formations",
    "rating_keys",
    "resolve_policy",
    "slot_role",
    "training_weight",
]
