"""Per-skill training priority ranking."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from lineupcoach.config import TrainingPolicy, resolve_policy
from lineupcoach.models import BaseObservation, Player, SkillKey, age_sort_key


class Category(str, Enum):
    """Training-need tier, declared from most to least training-worthy."""

    CAT1 = "cat1"
    CAT2 = "cat2"
    CAT3 = "cat3"
    CAT4 = "cat4"
    DONT_CARE = "dontCare"
    EXHAUSTED = "exhausted"

    @property
    def order(self) -> int:
        return _CATEGORY_ORDER[self]

    @property
    def is_trainable(self) -> bool:
        return self in TRAINABLE_CATEGORIES


_CATEGORY_ORDER: Dict[Category, int] = {category: index for index, category in enumerate(Category)}

TRAINABLE_CATEGORIES = frozenset({Category.CAT1, Category.CAT2, Category.CAT3, Category.CAT4})

# Tiers with at least one observed value; auto-selection only trusts these.
OBSERVED_CATEGORIES = frozenset({Category.CAT1, Category.CAT2, Category.CAT3})


@dataclass(frozen=True)
class RankedEntry:
    player_id: int
    name: str
    category: Category
    current: Optional[int]
    max: Optional[int]
    score: int
    rank: int
    age_years: Optional[int] = None
    age_days: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "category": self.category.value,
            "current": self.current,
            "max": self.max,
            "score": self.score,
            "rank": self.rank,
            "age_years": self.age_years,
            "age_days": self.age_days,
        }


def categorize(observation: BaseObservation, policy: TrainingPolicy | None = None) -> Category:
    policy = resolve_policy(policy)
    if observation.exhausted:
        return Category.EXHAUSTED

    current, maximum = observation.current, observation.max
    if current is not None and maximum is not None:
        category = Category.CAT1
    elif current is not None:
        category = Category.CAT2
    elif maximum is not None:
        category = Category.CAT3
    else:
        return Category.CAT4

    if current is not None and current < policy.min_current_level:
        return Category.DONT_CARE
    if maximum is not None and maximum < policy.min_max_level:
        return Category.DONT_CARE
    return category


def observation_score(observation: BaseObservation) -> int:
    """Sort score inside a tier; lower means more training headroom."""

    if observation.exhausted:
        return 0
    current, maximum = observation.current, observation.max
    if current is not None and maximum is not None:
        return current - maximum
    if current is not None:
        return current
    if maximum is not None:
        return -maximum
    return 0


def rank_players(
    players: Sequence[Player],
    skill: SkillKey,
    policy: TrainingPolicy | None = None,
) -> List[RankedEntry]:
    """Order players by training priority for ``skill``.

    Ties on category and score go to the youngest player, then the lowest id,
    so the result is a total order. Exhausted players are dropped entirely
    when the policy forbids training up to the ceiling.
    """

    policy = resolve_policy(policy)
    skill = SkillKey(skill)

    keyed = []
    for player in players:
        observation = player.observation(skill)
        category = categorize(observation, policy)
        if category is Category.EXHAUSTED and not policy.allow_training_until_maxed_out:
            continue
        score = observation_score(observation)
        sort_key = (category.order, score, age_sort_key(player), player.player_id)
        keyed.append((sort_key, player, observation, category, score))

    keyed.sort(key=lambda item: item[0])

    return [
        RankedEntry(
            player_id=player.player_id,
            name=player.name,
            category=category,
            current=observation.current,
            max=observation.max,
            score=score,
            rank=position,
            age_years=player.age_years,
            age_days=player.age_days,
        )
        for position, (_, player, observation, category, score) in enumerate(keyed, start=1)
    ]
