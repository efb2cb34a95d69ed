"""Greedy lineup builders that maximize training for a focus player."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from lineupcoach.config import Formation, TrainingPolicy, get_formation, rating_keys, resolve_policy
from lineupcoach.models import ALL_SKILLS, Player, SkillKey

from .errors import (
    AlreadyKnown,
    EmptyRoster,
    FocusAlreadyMaxed,
    InvalidFocusPlayer,
    NoSelection,
    NoTrainingSlot,
)
from .ranking import RankedEntry, rank_players
from .selection import FocusCandidate, auto_select, focus_candidates, training_for_focus
from .topology import SlotTopology, slots_for


logger = logging.getLogger(__name__)

Ratings = Mapping[Any, Mapping[str, float]]

# Field lines split into left, center and right wings, filled center-out.
_FIELD_LINES: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("WB_L", "CD_L"), ("CD_C",), ("CD_R", "WB_R")),
    (("W_L", "IM_L"), ("IM_C",), ("IM_R", "W_R")),
    (("F_L",), ("F_C",), ("F_R",)),
)


class OptimizerMode(str, Enum):
    FOCUS = "focus"
    RATINGS = "ratings"
    REVEAL_PRIMARY_CURRENT = "reveal_primary_current"
    REVEAL_PRIMARY_MAX = "reveal_primary_max"
    REVEAL_SECONDARY_CURRENT = "reveal_secondary_current"
    REVEAL_SECONDARY_MAX = "reveal_secondary_max"


@dataclass(frozen=True)
class Assignment:
    """Slot to player id mapping in formation order; empty slots hold None."""

    slots: Tuple[Tuple[str, Optional[int]], ...]

    @classmethod
    def empty(cls, formation: Formation) -> "Assignment":
        return cls(slots=tuple((slot, None) for slot in formation.slots))

    def get(self, slot: str) -> Optional[int]:
        for name, player_id in self.slots:
            if name == slot:
                return player_id
        return None

    def as_dict(self) -> Dict[str, Optional[int]]:
        return dict(self.slots)

    def assigned_ids(self) -> Tuple[int, ...]:
        return tuple(player_id for _, player_id in self.slots if player_id is not None)

    def slot_of(self, player_id: int) -> Optional[str]:
        for name, assigned in self.slots:
            if assigned == player_id:
                return name
        return None

    def __len__(self) -> int:
        return len(self.slots)


@dataclass(frozen=True)
class Selection:
    focus_player_id: int
    primary_skill: SkillKey
    secondary_skill: SkillKey
    auto_selected: bool = False


@dataclass(frozen=True)
class OptimizerDebug:
    mode: OptimizerMode
    selection: Selection
    focus_slot: Optional[str]
    topology: SlotTopology
    primary_ranking: Tuple[RankedEntry, ...]
    secondary_ranking: Tuple[RankedEntry, ...]
    focus_candidates: Tuple[FocusCandidate, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "selection": {
                "focus_player_id": self.selection.focus_player_id,
                "primary_skill": self.selection.primary_skill.value,
                "secondary_skill": self.selection.secondary_skill.value,
                "auto_selected": self.selection.auto_selected,
            },
            "focus_slot": self.focus_slot,
            "topology": self.topology.to_dict(),
            "primary_ranking": [entry.to_dict() for entry in self.primary_ranking],
            "secondary_ranking": [entry.to_dict() for entry in self.secondary_ranking],
            "focus_candidates": [candidate.to_dict() for candidate in self.focus_candidates],
        }


@dataclass(frozen=True)
class LineupPlan:
    assignment: Assignment
    debug: OptimizerDebug


@dataclass
class _LineupState:
    topology: SlotTopology
    policy: TrainingPolicy
    placed: Dict[str, int] = field(default_factory=dict)
    used: Set[int] = field(default_factory=set)

    def place(self, slot: str, player: Player) -> None:
        self.placed[slot] = player.player_id
        self.used.add(player.player_id)
        logger.debug("Placed player %s in %s", player.player_id, slot)

    def is_free(self, slot: str) -> bool:
        return slot not in self.placed

    def accepts(self, player: Player, slot: str) -> bool:
        if player.player_id in self.used:
            return False
        if self.policy.allow_training_until_maxed_out:
            return True
        return not any(player.observation(skill).exhausted for skill in self.topology.skills_at(slot))

    def to_assignment(self, formation: Formation) -> Assignment:
        return Assignment(slots=tuple((slot, self.placed.get(slot)) for slot in formation.slots))


# Picks one player for a slot out of candidates already in preference order.
Picker = Callable[[str, Sequence[Player]], Player]


def _first_candidate(slot: str, candidates: Sequence[Player]) -> Player:
    return candidates[0]


def _ordered(slots: Iterable[str], rng: Optional[random.Random]) -> List[str]:
    ordered = list(slots)
    if rng is not None:
        rng.shuffle(ordered)
    return ordered


def _line_order(free: Set[str], left: Sequence[str], center: Sequence[str], right: Sequence[str]) -> List[str]:
    lefts = [slot for slot in left if slot in free]
    centers = [slot for slot in center if slot in free]
    rights = [slot for slot in right if slot in free]

    ordered: List[str] = []
    if centers:
        ordered.append(centers.pop(0))
    take_left = True
    while lefts or rights or centers:
        if take_left and lefts:
            ordered.append(lefts.pop(0))
        elif not take_left and rights:
            ordered.append(rights.pop(0))
        elif lefts:
            ordered.append(lefts.pop(0))
        elif rights:
            ordered.append(rights.pop(0))
        else:
            ordered.append(centers.pop(0))
        take_left = not take_left
    return ordered


def _remaining_field_order(state: _LineupState, formation: Formation, rng: Optional[random.Random]) -> List[str]:
    free = {slot for slot in formation.field_slots if state.is_free(slot)}
    ordered = [slot for slot in ("KP",) if slot in free]
    for left, center, right in _FIELD_LINES:
        ordered.extend(_line_order(free, left, center, right))
    # anything outside the known lines keeps formation order
    ordered.extend(slot for slot in formation.field_slots if slot in free and slot not in ordered)
    if rng is not None:
        head, tail = ordered[:1], ordered[1:]
        rng.shuffle(tail)
        ordered = head + tail
    return ordered


def _choose_focus_slot(
    state: _LineupState,
    focus: Player,
    groups: Sequence[Sequence[str]],
    rng: Optional[random.Random],
) -> Optional[str]:
    for group in groups:
        options = [slot for slot in group if state.is_free(slot) and state.accepts(focus, slot)]
        if not options:
            continue
        return rng.choice(options) if rng is not None else options[0]
    return None


def _fill_from_ranking(
    state: _LineupState,
    players_by_id: Mapping[int, Player],
    slots: Sequence[str],
    ranking: Sequence[RankedEntry],
    rng: Optional[random.Random],
    tiebreak: Optional[Callable[[str, Sequence[RankedEntry]], RankedEntry]] = None,
) -> None:
    for slot in _ordered(slots, rng):
        if not state.is_free(slot):
            continue
        candidates = [
            entry
            for entry in ranking
            if entry.category.is_trainable and state.accepts(players_by_id[entry.player_id], slot)
        ]
        if not candidates:
            logger.debug("No trainable candidate left for %s", slot)
            continue
        chosen = tiebreak(slot, candidates) if tiebreak is not None else candidates[0]
        state.place(slot, players_by_id[chosen.player_id])


def _fallback_order(
    roster: Sequence[Player],
    players_by_id: Mapping[int, Player],
    primary_ranking: Sequence[RankedEntry],
    secondary_ranking: Sequence[RankedEntry],
) -> List[Player]:
    seen: Set[int] = set()
    ordered: List[Player] = []
    for player_id in [entry.player_id for entry in primary_ranking] + [
        entry.player_id for entry in secondary_ranking
    ] + [player.player_id for player in roster]:
        if player_id in seen:
            continue
        seen.add(player_id)
        ordered.append(players_by_id[player_id])
    return ordered


def _fill_remaining(
    state: _LineupState,
    formation: Formation,
    fallback: Sequence[Player],
    rng: Optional[random.Random],
    picker: Picker = _first_candidate,
) -> None:
    slots = _remaining_field_order(state, formation, rng) + [
        slot for slot in formation.bench_slots if state.is_free(slot)
    ]
    for slot in slots:
        candidates = [player for player in fallback if state.accepts(player, slot)]
        if not candidates:
            continue
        state.place(slot, picker(slot, candidates))


def _rating_for(ratings: Optional[Ratings], player_id: int, slot: str) -> Optional[float]:
    if not ratings:
        return None
    by_role = ratings.get(player_id)
    if by_role is None:
        by_role = ratings.get(str(player_id))
    if not by_role:
        return None
    keys = rating_keys(slot)
    values = [by_role.get(key) for key in keys] if keys else list(by_role.values())
    numbers = [float(value) for value in values if isinstance(value, (int, float)) and not isinstance(value, bool)]
    return max(numbers) if numbers else None


def _rating_sort_key(rating: Optional[float]) -> Tuple[int, float]:
    return (1, 0.0) if rating is None else (0, -rating)


def _rating_tiebreak(ratings: Optional[Ratings]) -> Callable[[str, Sequence[RankedEntry]], RankedEntry]:
    def pick(slot: str, candidates: Sequence[RankedEntry]) -> RankedEntry:
        top = candidates[0]
        tied = [entry for entry in candidates if (entry.category, entry.score) == (top.category, top.score)]
        return min(tied, key=lambda entry: _rating_sort_key(_rating_for(ratings, entry.player_id, slot)))

    return pick


def _rating_picker(state: _LineupState, ratings: Optional[Ratings]) -> Picker:
    def pick(slot: str, candidates: Sequence[Player]) -> Player:
        skills = state.topology.skills_at(slot)

        def key(player: Player) -> tuple:
            blocked = any(player.observation(skill).exhausted for skill in skills)
            return (int(blocked), _rating_sort_key(_rating_for(ratings, player.player_id, slot)))

        return min(candidates, key=key)

    return pick


_REVEAL_TARGETS: Dict[OptimizerMode, Tuple[str, str]] = {
    OptimizerMode.REVEAL_PRIMARY_CURRENT: ("primary", "current"),
    OptimizerMode.REVEAL_PRIMARY_MAX: ("primary", "max"),
    OptimizerMode.REVEAL_SECONDARY_CURRENT: ("secondary", "current"),
    OptimizerMode.REVEAL_SECONDARY_MAX: ("secondary", "max"),
}


def _focus_groups(
    topology: SlotTopology,
    formation: Formation,
    focus: Player,
    target: SkillKey,
    other: SkillKey,
    *,
    reveal: bool,
) -> List[Tuple[str, ...]]:
    target_full = topology.full_slots(target)
    target_half = topology.half_slots(target)
    other_full = topology.full_slots(other)
    other_all = other_full + topology.half_slots(other)

    groups: List[Tuple[str, ...]] = []
    if other != target and not focus.observation(other).exhausted:
        groups.append(tuple(slot for slot in target_full if slot in other_full))
        groups.append(tuple(slot for slot in target_full if slot in other_all))
    groups.extend([target_full, target_half])
    if not reveal:
        groups.extend([other_all, formation.field_slots, formation.bench_slots])
    return groups


def _run(
    mode: OptimizerMode,
    players: Sequence[Player],
    focus_player_id: int,
    primary_skill: SkillKey,
    secondary_skill: Optional[SkillKey],
    *,
    auto_selected: bool,
    policy: TrainingPolicy | None,
    formation: Formation | None,
    seed: Optional[int],
    require_players: bool,
    ratings: Optional[Ratings] = None,
) -> LineupPlan:
    policy = resolve_policy(policy)
    formation = formation or get_formation()
    primary = SkillKey(primary_skill)
    secondary = SkillKey(secondary_skill) if secondary_skill is not None else primary
    topology = slots_for(primary, secondary, formation)
    selection = Selection(
        focus_player_id=focus_player_id,
        primary_skill=primary,
        secondary_skill=secondary,
        auto_selected=auto_selected,
    )

    roster = list(players)
    if not roster:
        if require_players:
            raise EmptyRoster()
        logger.info("Empty roster; returning an empty %s lineup", formation.name)
        debug = OptimizerDebug(
            mode=mode,
            selection=selection,
            focus_slot=None,
            topology=topology,
            primary_ranking=(),
            secondary_ranking=(),
            focus_candidates=(),
        )
        return LineupPlan(assignment=Assignment.empty(formation), debug=debug)

    players_by_id: Dict[int, Player] = {}
    for player in roster:
        players_by_id.setdefault(player.player_id, player)
    focus = players_by_id.get(focus_player_id)
    if focus is None:
        raise InvalidFocusPlayer(focus_player_id)

    reveal = _REVEAL_TARGETS.get(mode)
    if mode is OptimizerMode.RATINGS and focus.observation(primary).exhausted:
        raise FocusAlreadyMaxed(focus.player_id, primary)

    target, other = primary, secondary
    if reveal is not None:
        which, fact = reveal
        if which == "secondary":
            target, other = secondary, primary
        observation = focus.observation(target)
        known = observation.current if fact == "current" else observation.max
        if known is not None:
            raise AlreadyKnown(focus.player_id, target, fact)
        if not topology.full_slots(target) and not topology.half_slots(target):
            raise NoTrainingSlot(target, formation.name)

    rankings = {skill: rank_players(roster, skill, policy) for skill in ALL_SKILLS}
    primary_ranking = rankings[primary]
    secondary_ranking = rankings[secondary]
    candidates = focus_candidates(roster, policy, rankings=rankings)

    rng = random.Random(seed) if seed is not None else None
    state = _LineupState(topology=topology, policy=policy)

    groups = _focus_groups(topology, formation, focus, target, other, reveal=reveal is not None)
    focus_slot = _choose_focus_slot(state, focus, groups, rng)
    if focus_slot is not None:
        state.place(focus_slot, focus)
    elif reveal is not None:
        raise NoTrainingSlot(target, formation.name, focus.player_id)
    else:
        logger.warning("No slot accepts focus player %s in %s", focus.player_id, formation.name)

    ranking_for = {primary: primary_ranking, secondary: secondary_ranking}
    tiebreak = _rating_tiebreak(ratings) if mode is OptimizerMode.RATINGS else None
    for slots, skill in (
        (topology.full_slots(target), target),
        (topology.full_slots(other), other),
        (topology.half_slots(target), target),
        (topology.half_slots(other), other),
    ):
        _fill_from_ranking(state, players_by_id, slots, ranking_for[skill], rng, tiebreak)

    picker = _rating_picker(state, ratings) if mode is OptimizerMode.RATINGS else _first_candidate
    fallback = _fallback_order(roster, players_by_id, primary_ranking, secondary_ranking)
    _fill_remaining(state, formation, fallback, rng, picker)

    assignment = state.to_assignment(formation)
    logger.info(
        "Built %s lineup: focus=%s slot=%s primary=%s secondary=%s placed=%d/%d",
        mode.value,
        focus.player_id,
        focus_slot,
        primary.value,
        secondary.value,
        len(assignment.assigned_ids()),
        len(assignment),
    )
    debug = OptimizerDebug(
        mode=mode,
        selection=selection,
        focus_slot=focus_slot,
        topology=topology,
        primary_ranking=tuple(primary_ranking),
        secondary_ranking=tuple(secondary_ranking),
        focus_candidates=tuple(candidates),
    )
    return LineupPlan(assignment=assignment, debug=debug)


def optimize_for_focus(
    players: Sequence[Player],
    focus_player_id: int,
    primary_skill: SkillKey,
    secondary_skill: Optional[SkillKey] = None,
    auto_selected: bool = False,
    policy: TrainingPolicy | None = None,
    *,
    formation: Formation | None = None,
    seed: Optional[int] = None,
    require_players: bool = False,
) -> LineupPlan:
    """Put the focus player where both skills train, then fill by training need."""

    return _run(
        OptimizerMode.FOCUS,
        players,
        focus_player_id,
        primary_skill,
        secondary_skill,
        auto_selected=auto_selected,
        policy=policy,
        formation=formation,
        seed=seed,
        require_players=require_players,
    )


def optimize_by_ratings(
    players: Sequence[Player],
    focus_player_id: int,
    primary_skill: SkillKey,
    secondary_skill: Optional[SkillKey] = None,
    auto_selected: bool = False,
    policy: TrainingPolicy | None = None,
    *,
    ratings: Optional[Ratings] = None,
    formation: Formation | None = None,
    seed: Optional[int] = None,
    require_players: bool = False,
) -> LineupPlan:
    """Like :func:`optimize_for_focus`, breaking ties with per-role match ratings.

    ``ratings`` maps player id to a role rating map keyed by role name
    (``"IM"``) or provider position code (``"107"``).
    """

    return _run(
        OptimizerMode.RATINGS,
        players,
        focus_player_id,
        primary_skill,
        secondary_skill,
        auto_selected=auto_selected,
        policy=policy,
        formation=formation,
        seed=seed,
        require_players=require_players,
        ratings=ratings,
    )


def reveal_primary_current(
    players: Sequence[Player],
    focus_player_id: int,
    primary_skill: SkillKey,
    secondary_skill: Optional[SkillKey] = None,
    auto_selected: bool = False,
    policy: TrainingPolicy | None = None,
    *,
    formation: Formation | None = None,
    seed: Optional[int] = None,
    require_players: bool = False,
) -> LineupPlan:
    """Train the focus player on the primary skill until its current level shows up."""

    return _run(
        OptimizerMode.REVEAL_PRIMARY_CURRENT,
        players,
        focus_player_id,
        primary_skill,
        secondary_skill,
        auto_selected=auto_selected,
        policy=policy,
        formation=formation,
        seed=seed,
        require_players=require_players,
    )


def reveal_primary_max(
    players: Sequence[Player],
    focus_player_id: int,
    primary_skill: SkillKey,
    secondary_skill: Optional[SkillKey] = None,
    auto_selected: bool = False,
    policy: TrainingPolicy | None = None,
    *,
    formation: Formation | None = None,
    seed: Optional[int] = None,
    require_players: bool = False,
) -> LineupPlan:
    return _run(
        OptimizerMode.REVEAL_PRIMARY_MAX,
        players,
        focus_player_id,
        primary_skill,
        secondary_skill,
        auto_selected=auto_selected,
        policy=policy,
        formation=formation,
        seed=seed,
        require_players=require_players,
    )


def reveal_secondary_current(
    players: Sequence[Player],
    focus_player_id: int,
    primary_skill: SkillKey,
    secondary_skill: Optional[SkillKey] = None,
    auto_selected: bool = False,
    policy: TrainingPolicy | None = None,
    *,
    formation: Formation | None = None,
    seed: Optional[int] = None,
    require_players: bool = False,
) -> LineupPlan:
    return _run(
        OptimizerMode.REVEAL_SECONDARY_CURRENT,
        players,
        focus_player_id,
        primary_skill,
        secondary_skill,
        auto_selected=auto_selected,
        policy=policy,
        formation=formation,
        seed=seed,
        require_players=require_players,
    )


def reveal_secondary_max(
    players: Sequence[Player],
    focus_player_id: int,
    primary_skill: SkillKey,
    secondary_skill: Optional[SkillKey] = None,
    auto_selected: bool = False,
    policy: TrainingPolicy | None = None,
    *,
    formation: Formation | None = None,
    seed: Optional[int] = None,
    require_players: bool = False,
) -> LineupPlan:
    """Seat the focus player in a secondary-skill slot so its potential gets reported."""

    return _run(
        OptimizerMode.REVEAL_SECONDARY_MAX,
        players,
        focus_player_id,
        primary_skill,
        secondary_skill,
        auto_selected=auto_selected,
        policy=policy,
        formation=formation,
        seed=seed,
        require_players=require_players,
    )


def advise(
    players: Sequence[Player],
    *,
    focus_player_id: Optional[int] = None,
    primary_skill: Optional[SkillKey] = None,
    secondary_skill: Optional[SkillKey] = None,
    mode: OptimizerMode = OptimizerMode.FOCUS,
    policy: TrainingPolicy | None = None,
    formation: Formation | None = None,
    ratings: Optional[Ratings] = None,
    seed: Optional[int] = None,
    require_players: bool = False,
) -> LineupPlan:
    """Resolve any missing selection, then run the optimizer for ``mode``."""

    policy = resolve_policy(policy)
    mode = OptimizerMode(mode)
    roster = list(players)
    if require_players and not roster:
        raise EmptyRoster()

    overridden = any(value is not None for value in (focus_player_id, primary_skill, secondary_skill))
    if focus_player_id is None or primary_skill is None or secondary_skill is None:
        if focus_player_id is None:
            suggestion = auto_select(roster, policy, primary=primary_skill)
        else:
            if all(player.player_id != focus_player_id for player in roster):
                raise InvalidFocusPlayer(focus_player_id)
            suggestion = training_for_focus(roster, focus_player_id, policy, primary=primary_skill)
        if suggestion is None:
            raise NoSelection()
        focus_player_id = suggestion.focus_player_id
        primary_skill = suggestion.primary_skill
        if secondary_skill is None:
            secondary_skill = suggestion.secondary_skill

    if mode is OptimizerMode.FOCUS:
        return optimize_for_focus(
            roster,
            focus_player_id,
            primary_skill,
            secondary_skill,
            not overridden,
            policy,
            formation=formation,
            seed=seed,
            require_players=require_players,
        )
    if mode is OptimizerMode.RATINGS:
        return optimize_by_ratings(
            roster,
            focus_player_id,
            primary_skill,
            secondary_skill,
            not overridden,
            policy,
            ratings=ratings,
            formation=formation,
            seed=seed,
            require_players=require_players,
        )
    return _run(
        mode,
        roster,
        focus_player_id,
        primary_skill,
        secondary_skill,
        auto_selected=not overridden,
        policy=policy,
        formation=formation,
        seed=seed,
        require_players=require_players,
    )
