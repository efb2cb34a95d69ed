"""Pick the focus player and training pair when the caller leaves them open."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from lineupcoach.config import TrainingPolicy, resolve_policy
from lineupcoach.config.slots import SKILL_PAIRS
from lineupcoach.models import ALL_SKILLS, Player, SkillKey

from .ranking import OBSERVED_CATEGORIES, Category, RankedEntry, categorize, rank_players


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FocusCandidate:
    player_id: int
    name: str
    skill: SkillKey
    category: Category
    score: int
    age_years: Optional[int] = None
    age_days: Optional[int] = None
    promotion_age_days: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "skill": self.skill.value,
            "category": self.category.value,
            "score": self.score,
            "age_years": self.age_years,
            "age_days": self.age_days,
            "promotion_age_days": self.promotion_age_days,
        }


@dataclass(frozen=True)
class AutoSelection:
    focus_player_id: int
    primary_skill: SkillKey
    secondary_skill: SkillKey


def _candidate_key(candidate: FocusCandidate) -> tuple:
    # Equal scores go to whoever reaches promotion age first, unknown last.
    promotion = candidate.promotion_age_days
    promotion_key = (1, 0) if promotion is None else (0, promotion)
    age_key = (1, 0, 0) if candidate.age_years is None else (0, candidate.age_years, candidate.age_days or 0)
    return (
        candidate.category.order,
        candidate.score,
        promotion_key,
        age_key,
        candidate.player_id,
        ALL_SKILLS.index(candidate.skill),
    )


def _candidate(entry: RankedEntry, skill: SkillKey, player: Player | None = None) -> FocusCandidate:
    return FocusCandidate(
        player_id=entry.player_id,
        name=entry.name,
        skill=skill,
        category=entry.category,
        score=entry.score,
        age_years=entry.age_years,
        age_days=entry.age_days,
        promotion_age_days=player.promotion_age_days if player is not None else None,
    )


def _rank_all(players: Sequence[Player], policy: TrainingPolicy) -> Dict[SkillKey, List[RankedEntry]]:
    return {skill: rank_players(players, skill, policy) for skill in ALL_SKILLS}


def focus_candidates(
    players: Sequence[Player],
    policy: TrainingPolicy | None = None,
    *,
    rankings: Mapping[SkillKey, Sequence[RankedEntry]] | None = None,
) -> List[FocusCandidate]:
    """Every (player, skill) reading with at least one observed value, best first."""

    policy = resolve_policy(policy)
    rankings = rankings if rankings is not None else _rank_all(players, policy)
    by_id = {player.player_id: player for player in players}
    candidates = [
        _candidate(entry, skill, by_id.get(entry.player_id))
        for skill in ALL_SKILLS
        for entry in rankings.get(skill, ())
        if entry.category in OBSERVED_CATEGORIES
    ]
    candidates.sort(key=_candidate_key)
    return candidates


def _secondary_for(
    player: Player,
    primary: SkillKey,
    policy: TrainingPolicy,
    tops: Mapping[SkillKey, FocusCandidate],
) -> SkillKey:
    for paired in SKILL_PAIRS.get(primary, ()):
        if categorize(player.observation(paired), policy).is_trainable:
            return paired

    others = sorted(
        (candidate for skill, candidate in tops.items() if skill != primary),
        key=_candidate_key,
    )
    if others:
        return others[0].skill
    return primary


def auto_select(
    players: Sequence[Player],
    policy: TrainingPolicy | None = None,
    *,
    primary: Optional[SkillKey] = None,
) -> Optional[AutoSelection]:
    """Choose focus player, primary and secondary skill from the roster alone.

    A fixed ``primary`` restricts the focus search to that skill. Returns None
    when no player has an observed reading in the skills searched.
    """

    policy = resolve_policy(policy)
    rankings = _rank_all(players, policy)
    by_id = {player.player_id: player for player in players}

    tops: Dict[SkillKey, FocusCandidate] = {}
    for skill in ALL_SKILLS:
        observed = [
            _candidate(entry, skill, by_id.get(entry.player_id))
            for entry in rankings[skill]
            if entry.category in OBSERVED_CATEGORIES
        ]
        if observed:
            tops[skill] = min(observed, key=_candidate_key)

    searched = tops if primary is None else {skill: tops[skill] for skill in tops if skill == SkillKey(primary)}
    if not searched:
        logger.info("Auto-selection found no observed skill readings across %d players", len(players))
        return None

    best = min(searched.values(), key=_candidate_key)
    focus = by_id[best.player_id]
    secondary = _secondary_for(focus, best.skill, policy, tops)
    logger.debug(
        "Auto-selected focus=%s primary=%s secondary=%s",
        focus.player_id,
        best.skill.value,
        secondary.value,
    )
    return AutoSelection(
        focus_player_id=focus.player_id,
        primary_skill=best.skill,
        secondary_skill=secondary,
    )


def training_for_focus(
    players: Sequence[Player],
    focus_player_id: int,
    policy: TrainingPolicy | None = None,
    *,
    primary: Optional[SkillKey] = None,
) -> Optional[AutoSelection]:
    """Pick the training pair that suits a caller-chosen focus player.

    With ``primary`` fixed only the secondary skill is chosen.
    """

    policy = resolve_policy(policy)
    focus = next((player for player in players if player.player_id == focus_player_id), None)
    if focus is None:
        return None

    own: Dict[SkillKey, FocusCandidate] = {}
    for skill in ALL_SKILLS:
        entry = next(
            (item for item in rank_players([focus], skill, policy) if item.category in OBSERVED_CATEGORIES),
            None,
        )
        if entry is not None:
            own[skill] = _candidate(entry, skill, focus)

    if primary is not None:
        chosen = SkillKey(primary)
    elif own:
        chosen = min(own.values(), key=_candidate_key).skill
    else:
        return None

    return AutoSelection(
        focus_player_id=focus.player_id,
        primary_skill=chosen,
        secondary_skill=_secondary_for(focus, chosen, policy, own),
    )

