"""Lineup slots, formations and per-role training weights."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Tuple

from lineupcoach.models import SkillKey


FIELD_SLOTS: Tuple[str, ...] = (
    "KP",
    "WB_L",
    "CD_L",
    "CD_C",
    "CD_R",
    "WB_R",
    "W_L",
    "IM_L",
    "IM_C",
    "IM_R",
    "W_R",
    "F_L",
    "F_C",
    "F_R",
)

BENCH_SLOTS: Tuple[str, ...] = ("B_GK", "B_CD", "B_WB", "B_IM", "B_W", "B_F", "B_X")

ROLE_BY_SLOT: Mapping[str, str] = {
    "KP": "GK",
    "WB_L": "WB",
    "WB_R": "WB",
    "CD_L": "CD",
    "CD_C": "CD",
    "CD_R": "CD",
    "W_L": "W",
    "W_R": "W",
    "IM_L": "IM",
    "IM_C": "IM",
    "IM_R": "IM",
    "F_L": "F",
    "F_C": "F",
    "F_R": "F",
    "B_GK": "GK",
    "B_CD": "CD",
    "B_WB": "WB",
    "B_IM": "IM",
    "B_W": "W",
    "B_F": "F",
    # B_X is the wildcard seat and has no role.
}

ROLE_RATING_CODE: Mapping[str, int] = {
    "GK": 100,
    "WB": 101,
    "CD": 103,
    "W": 106,
    "IM": 107,
    "F": 111,
}

ROLE_EFFECTS: Mapping[SkillKey, Mapping[str, float]] = {
    SkillKey.KEEPER: {"GK": 1.0},
    SkillKey.DEFENDING: {"CD": 1.0, "WB": 1.0},
    SkillKey.PLAYMAKING: {"IM": 1.0, "W": 0.5},
    SkillKey.WINGER: {"W": 1.0, "WB": 0.5},
    SkillKey.PASSING: {"IM": 1.0, "W": 1.0, "F": 1.0},
    SkillKey.SCORING: {"F": 1.0},
    SkillKey.SETPIECES: {"GK": 1.0, "CD": 1.0, "WB": 1.0, "W": 1.0, "IM": 1.0, "F": 1.0},
}

# Role whose slots are filled first when several full-weight roles train a skill.
CANONICAL_ROLE: Mapping[SkillKey, str] = {
    SkillKey.KEEPER: "GK",
    SkillKey.DEFENDING: "CD",
    SkillKey.PLAYMAKING: "IM",
    SkillKey.WINGER: "W",
    SkillKey.PASSING: "IM",
    SkillKey.SCORING: "F",
    SkillKey.SETPIECES: "GK",
}

SKILL_PAIRS: Mapping[SkillKey, Tuple[SkillKey, ...]] = {
    SkillKey.SCORING: (SkillKey.PASSING, SkillKey.WINGER),
    SkillKey.PASSING: (SkillKey.SCORING, SkillKey.PLAYMAKING, SkillKey.DEFENDING),
    SkillKey.PLAYMAKING: (SkillKey.PASSING, SkillKey.WINGER, SkillKey.DEFENDING),
    SkillKey.WINGER: (SkillKey.PLAYMAKING,),
    SkillKey.DEFENDING: (SkillKey.PASSING, SkillKey.PLAYMAKING, SkillKey.WINGER),
    SkillKey.KEEPER: (SkillKey.SETPIECES,),
    SkillKey.SETPIECES: (SkillKey.KEEPER,),
}


@dataclass(frozen=True)
class Formation:
    name: str
    field_slots: Tuple[str, ...]
    bench_slots: Tuple[str, ...] = BENCH_SLOTS

    @property
    def slots(self) -> Tuple[str, ...]:
        return self.field_slots + self.bench_slots


def _formation(name: str, *field_slots: str) -> Formation:
    return Formation(name=name, field_slots=("KP", *field_slots))


_FORMATIONS: Dict[str, Formation] = {
    formation.name: formation
    for formation in (
        _formation("5-5-0", "WB_L", "CD_L", "CD_C", "CD_R", "WB_R", "W_L", "IM_L", "IM_C", "IM_R", "W_R"),
        _formation("5-4-1", "WB_L", "CD_L", "CD_C", "CD_R", "WB_R", "W_L", "IM_L", "IM_R", "W_R", "F_C"),
        _formation("5-3-2", "WB_L", "CD_L", "CD_C", "CD_R", "WB_R", "IM_L", "IM_C", "IM_R", "F_L", "F_R"),
        _formation("5-2-3", "WB_L", "CD_L", "CD_C", "CD_R", "WB_R", "IM_L", "IM_R", "F_L", "F_C", "F_R"),
        _formation("4-5-1", "WB_L", "CD_L", "CD_R", "WB_R", "W_L", "IM_L", "IM_C", "IM_R", "W_R", "F_C"),
        _formation("4-4-2", "WB_L", "CD_L", "CD_R", "WB_R", "W_L", "IM_L", "IM_R", "W_R", "F_L", "F_R"),
        _formation("4-3-3", "WB_L", "CD_L", "CD_R", "WB_R", "W_L", "IM_C", "W_R", "F_L", "F_C", "F_R"),
        _formation("3-5-2", "CD_L", "CD_C", "CD_R", "W_L", "IM_L", "IM_C", "IM_R", "W_R", "F_L", "F_R"),
        _formation("3-4-3", "CD_L", "CD_C", "CD_R", "W_L", "IM_L", "IM_R", "W_R", "F_L", "F_C", "F_R"),
        _formation("2-5-3", "CD_L", "CD_R", "W_L", "IM_L", "IM_C", "IM_R", "W_R", "F_L", "F_C", "F_R"),
    )
}

DEFAULT_FORMATION = "4-4-2"


def iter_formations() -> Iterable[Formation]:
    """Return an iterator of all registered formations."""

    return _FORMATIONS.values()


def get_formation(name: Optional[str] = None) -> Formation:
    """Fetch a formation by name, raising KeyError if missing."""

    key = (name or DEFAULT_FORMATION).strip()
    if key not in _FORMATIONS:
        raise KeyError(f"No formation configured for name={name!r}")
    return _FORMATIONS[key]


def slot_role(slot: str) -> Optional[str]:
    return ROLE_BY_SLOT.get(slot)


def training_weight(slot: str, skill: SkillKey) -> float:
    """Fraction of full training a player in ``slot`` receives for ``skill``."""

    if slot not in FIELD_SLOTS:
        return 0.0
    return ROLE_EFFECTS[SkillKey(skill)].get(ROLE_BY_SLOT[slot], 0.0)


def rating_keys(slot: str) -> Tuple[str, ...]:
    """Keys a per-position rating map may use for the role behind ``slot``."""

    role = slot_role(slot)
    if role is None:
        return ()
    return (role, str(ROLE_RATING_CODE[role]))
