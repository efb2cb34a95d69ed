"""Which slots of a formation train a primary/secondary skill pair."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from lineupcoach.config import Formation, get_formation, slot_role, training_weight
from lineupcoach.config.slots import CANONICAL_ROLE
from lineupcoach.models import SkillKey


@dataclass(frozen=True)
class SlotTopology:
    formation: str
    primary_skill: SkillKey
    secondary_skill: SkillKey
    primary_full: Tuple[str, ...]
    primary_half: Tuple[str, ...]
    secondary_full: Tuple[str, ...]
    secondary_half: Tuple[str, ...]
    all: Tuple[str, ...]
    slot_skills: Dict[str, Tuple[SkillKey, ...]]

    @property
    def primary(self) -> Tuple[str, ...]:
        return self.primary_full + self.primary_half

    @property
    def secondary(self) -> Tuple[str, ...]:
        return self.secondary_full + self.secondary_half

    def full_slots(self, skill: SkillKey) -> Tuple[str, ...]:
        return self.primary_full if skill == self.primary_skill else self.secondary_full

    def half_slots(self, skill: SkillKey) -> Tuple[str, ...]:
        return self.primary_half if skill == self.primary_skill else self.secondary_half

    def skills_at(self, slot: str) -> Tuple[SkillKey, ...]:
        return self.slot_skills.get(slot, ())

    def to_dict(self) -> dict[str, Any]:
        return {
            "formation": self.formation,
            "primary": list(self.primary),
            "secondary": list(self.secondary),
            "primary_full": list(self.primary_full),
            "primary_half": list(self.primary_half),
            "secondary_full": list(self.secondary_full),
            "secondary_half": list(self.secondary_half),
            "all": list(self.all),
        }


def _weighted_slots(skill: SkillKey, field_slots: Sequence[str]) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    canonical = CANONICAL_ROLE[skill]
    full = [slot for slot in field_slots if training_weight(slot, skill) >= 1.0]
    half = [slot for slot in field_slots if 0.0 < training_weight(slot, skill) < 1.0]
    # sorted() is stable, so formation order survives inside each role group
    full = sorted(full, key=lambda slot: slot_role(slot) != canonical)
    return tuple(full), tuple(half)


def slots_for(
    primary: SkillKey,
    secondary: Optional[SkillKey] = None,
    formation: Formation | None = None,
) -> SlotTopology:
    """Partition ``formation`` into full and half training slots for both skills.

    Bench slots never train anything. When ``secondary`` equals ``primary``
    (or is omitted) the secondary sets mirror the primary ones.
    """

    formation = formation or get_formation()
    primary = SkillKey(primary)
    secondary = SkillKey(secondary) if secondary is not None else primary

    primary_full, primary_half = _weighted_slots(primary, formation.field_slots)
    if secondary == primary:
        secondary_full, secondary_half = primary_full, primary_half
    else:
        secondary_full, secondary_half = _weighted_slots(secondary, formation.field_slots)

    trained = set(primary_full + primary_half + secondary_full + secondary_half)
    slot_skills: Dict[str, Tuple[SkillKey, ...]] = {}
    for slot in formation.field_slots:
        skills = []
        if slot in primary_full or slot in primary_half:
            skills.append(primary)
        if secondary != primary and (slot in secondary_full or slot in secondary_half):
            skills.append(secondary)
        if skills:
            slot_skills[slot] = tuple(skills)

    return SlotTopology(
        formation=formation.name,
        primary_skill=primary,
        secondary_skill=secondary,
        primary_full=primary_full,
        primary_half=primary_half,
        secondary_full=secondary_full,
        secondary_half=secondary_half,
        all=tuple(slot for slot in formation.field_slots if slot in trained),
        slot_skills=slot_skills,
    )
