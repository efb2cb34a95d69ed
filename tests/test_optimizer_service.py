import pytest

from lineupcoach.config import TrainingPolicy, get_formation
from lineupcoach.models import Player, SkillKey
from lineupcoach.optimizer import (
    AlreadyKnown,
    EmptyRoster,
    FocusAlreadyMaxed,
    InvalidFocusPlayer,
    NoSelection,
    NoTrainingSlot,
    OptimizerMode,
    advise,
    optimize_by_ratings,
    optimize_for_focus,
    reveal_primary_current,
    reveal_primary_max,
    reveal_secondary_current,
    reveal_secondary_max,
)


def _player(player_id: int, age_years: int | None = None, **skills) -> Player:
    return Player(player_id=player_id, name=f"Player {player_id}", age_years=age_years, skills=skills)


def _sample_squad() -> list[Player]:
    return [
        _player(1, 16, scoring=3, passing=(4, 7)),
        _player(2, 17, scoring=(5, 6)),
        _player(3, 16, passing=(2, 8)),
        _player(4, 15, defending=(3, 7)),
        _player(5, 17, defending=(6, 6)),
        _player(6, 16, playmaking=4),
        _player(7, 16, winger=(None, 7)),
        _player(8, 17, keeper=(2, 5)),
        *[_player(player_id, 16) for player_id in range(9, 21)],
    ]


def test_focus_player_takes_slot_training_both_skills():
    plan = optimize_for_focus(_sample_squad(), 1, SkillKey.SCORING, SkillKey.PASSING)

    assert plan.debug.focus_slot == "F_L"
    assert plan.assignment.get("F_L") == 1
    assert plan.assignment.get("F_R") == 2
    assert plan.assignment.get("IM_L") == 3
    assert plan.debug.selection.auto_selected is False
    assert plan.debug.mode is OptimizerMode.FOCUS


def test_large_roster_fills_every_slot_once():
    squad = _sample_squad()

    plan = optimize_for_focus(squad, 1, SkillKey.SCORING, SkillKey.PASSING)

    formation = get_formation()
    assigned = plan.assignment.assigned_ids()
    assert len(plan.assignment) == len(formation.slots)
    assert all(plan.assignment.get(slot) is not None for slot in formation.slots)
    assert len(set(assigned)) == len(formation.slots)
    assert set(assigned) <= {player.player_id for player in squad}


def test_same_primary_and_secondary_places_focus_once():
    plan = optimize_for_focus(_sample_squad(), 4, SkillKey.DEFENDING, SkillKey.DEFENDING)

    topology = plan.debug.topology
    assigned = plan.assignment.assigned_ids()
    assert topology.primary_full == topology.secondary_full
    assert assigned.count(4) == 1
    assert len(assigned) == len(set(assigned))
    assert plan.assignment.slot_of(4) == "CD_L"


def test_strict_policy_keeps_exhausted_players_out_of_training_slots():
    players = [
        _player(1, 16, defending=2),
        _player(2, 16, defending=(8, 8)),
        _player(3, 16, defending=(8, 8)),
    ]
    policy = TrainingPolicy(allow_training_until_maxed_out=False)

    plan = optimize_for_focus(players, 1, SkillKey.DEFENDING, SkillKey.DEFENDING, policy=policy)

    trained = set(plan.debug.topology.all)
    assert plan.assignment.slot_of(1) == "CD_L"
    assert plan.assignment.get("KP") == 2
    assert plan.assignment.slot_of(3) == "W_L"
    for player_id in (2, 3):
        assert plan.assignment.slot_of(player_id) not in trained


def test_unknown_focus_player_raises():
    with pytest.raises(InvalidFocusPlayer):
        optimize_for_focus(_sample_squad(), 999, SkillKey.SCORING, SkillKey.PASSING)


def test_empty_roster_returns_empty_lineup():
    plan = optimize_for_focus([], 1, SkillKey.SCORING)

    assert plan.assignment.assigned_ids() == ()
    assert len(plan.assignment) == len(get_formation().slots)
    assert plan.debug.focus_slot is None

    with pytest.raises(EmptyRoster):
        optimize_for_focus([], 1, SkillKey.SCORING, require_players=True)


def test_ratings_break_ties_inside_a_tier():
    players = [_player(1, 16, scoring=3), _player(2), _player(3)]

    by_rank = optimize_for_focus(players, 1, SkillKey.SCORING, SkillKey.SCORING)
    by_rating = optimize_by_ratings(
        players,
        1,
        SkillKey.SCORING,
        SkillKey.SCORING,
        ratings={2: {"F": 5.0}, 3: {"F": 7.5}},
    )
    by_code = optimize_by_ratings(
        players,
        1,
        SkillKey.SCORING,
        SkillKey.SCORING,
        ratings={"2": {"111": 5.0}, "3": {"111": 7.5}},
    )

    assert by_rank.assignment.get("F_R") == 2
    assert by_rating.assignment.get("F_R") == 3
    assert by_code.assignment.get("F_R") == 3
    assert by_rating.debug.mode is OptimizerMode.RATINGS


def test_ratings_optimizer_rejects_maxed_focus():
    with pytest.raises(FocusAlreadyMaxed):
        optimize_by_ratings(_sample_squad(), 5, SkillKey.DEFENDING, SkillKey.PASSING)


def test_reveal_current_rejects_known_value():
    with pytest.raises(AlreadyKnown):
        reveal_primary_current(_sample_squad(), 1, SkillKey.SCORING, SkillKey.PASSING)

    with pytest.raises(AlreadyKnown):
        reveal_secondary_current(_sample_squad(), 6, SkillKey.DEFENDING, SkillKey.PLAYMAKING)


def test_reveal_primary_max_trains_target_skill():
    plan = reveal_primary_max(_sample_squad(), 1, SkillKey.SCORING, SkillKey.PASSING)

    assert plan.debug.focus_slot == "F_L"
    assert plan.assignment.get("F_R") == 2
    assert plan.debug.mode is OptimizerMode.REVEAL_PRIMARY_MAX


def test_reveal_secondary_max_fills_secondary_groups_first():
    plan = reveal_secondary_max(_sample_squad(), 4, SkillKey.DEFENDING, SkillKey.PLAYMAKING)

    assert plan.debug.focus_slot == "IM_L"
    assert plan.assignment.get("IM_R") == 6
    assert plan.debug.mode is OptimizerMode.REVEAL_SECONDARY_MAX


def test_reveal_without_training_slot_raises():
    with pytest.raises(NoTrainingSlot):
        reveal_primary_current(
            _sample_squad(),
            9,
            SkillKey.SCORING,
            SkillKey.PASSING,
            formation=get_formation("5-5-0"),
        )


def test_reveal_raises_when_strict_policy_blocks_every_target_slot():
    players = [
        _player(1, 16, defending=(None, 7), setpieces=(6, 6)),
        *[_player(player_id, 16) for player_id in range(2, 25)],
    ]
    strict = TrainingPolicy(allow_training_until_maxed_out=False)

    with pytest.raises(NoTrainingSlot) as excinfo:
        reveal_primary_current(players, 1, SkillKey.DEFENDING, SkillKey.SETPIECES, policy=strict)

    assert excinfo.value.player_id == 1
    assert excinfo.value.code == "no_training_slot"


def test_reveal_primary_current_trains_unknown_current():
    plan = reveal_primary_current(_sample_squad(), 7, SkillKey.WINGER, SkillKey.PLAYMAKING)

    assert plan.debug.mode is OptimizerMode.REVEAL_PRIMARY_CURRENT
    assert plan.debug.focus_slot in plan.debug.topology.primary_full
    assert plan.assignment.slot_of(7) == plan.debug.focus_slot
    assert len(plan.assignment.assigned_ids()) == len(get_formation().slots)


def test_reveal_secondary_current_trains_secondary_skill():
    plan = reveal_secondary_current(_sample_squad(), 4, SkillKey.DEFENDING, SkillKey.PASSING)

    assert plan.debug.mode is OptimizerMode.REVEAL_SECONDARY_CURRENT
    assert plan.debug.focus_slot in plan.debug.topology.secondary_full
    assert plan.assignment.slot_of(4) == plan.debug.focus_slot
    assert len(plan.assignment.assigned_ids()) == len(get_formation().slots)


def test_reveal_secondary_max_rejects_known_max():
    with pytest.raises(AlreadyKnown):
        reveal_secondary_max(_sample_squad(), 1, SkillKey.SCORING, SkillKey.PASSING)


def test_results_are_deterministic():
    first = optimize_for_focus(_sample_squad(), 1, SkillKey.SCORING, SkillKey.PASSING)
    second = optimize_for_focus(_sample_squad(), 1, SkillKey.SCORING, SkillKey.PASSING)

    assert first.assignment == second.assignment
    assert first.debug.to_dict() == second.debug.to_dict()


def test_seeded_runs_repeat():
    first = advise(_sample_squad(), seed=11)
    second = advise(_sample_squad(), seed=11)

    assert first.assignment == second.assignment
    assert first.debug.focus_slot in {"F_L", "F_R"}
    assert len(set(first.assignment.assigned_ids())) == len(get_formation().slots)


def test_advise_auto_selects_when_nothing_is_given():
    plan = advise(_sample_squad())

    selection = plan.debug.selection
    assert selection.auto_selected is True
    assert (selection.focus_player_id, selection.primary_skill, selection.secondary_skill) == (
        3,
        SkillKey.PASSING,
        SkillKey.SCORING,
    )
    assert plan.assignment.slot_of(3) == plan.debug.focus_slot


def test_advise_completes_partial_selection():
    plan = advise(_sample_squad(), focus_player_id=4)

    selection = plan.debug.selection
    assert selection.auto_selected is False
    assert selection.primary_skill is SkillKey.DEFENDING
    assert selection.secondary_skill is SkillKey.PASSING
    assert plan.debug.focus_slot == "CD_L"


def test_advise_errors():
    with pytest.raises(NoSelection):
        advise([_player(1, 16)])

    with pytest.raises(InvalidFocusPlayer):
        advise(_sample_squad(), focus_player_id=999)
