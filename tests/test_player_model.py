import pytest
from pydantic import ValidationError

from lineupcoach.models import DAYS_PER_YEAR, KnownBoth, KnownCurrent, Player, SkillKey, Specialty, Unknown


def test_player_is_frozen():
    player = Player(player_id=7, name="Test Player", age_years=16)

    assert player.player_id == 7
    assert player.skills == {}

    with pytest.raises((TypeError, ValidationError)):
        player.player_id = 8  # type: ignore[attr-defined]


def test_player_coerces_raw_skill_readings():
    player = Player(
        player_id=1,
        skills={"defending": (4, 7), "scoring": 3, "keeper": None, "juggling": 9},
    )

    defending = player.observation(SkillKey.DEFENDING)
    assert isinstance(defending, KnownBoth)
    assert (defending.current, defending.max) == (4, 7)
    assert not defending.exhausted

    assert isinstance(player.observation(SkillKey.SCORING), KnownCurrent)
    assert isinstance(player.observation(SkillKey.KEEPER), Unknown)
    assert isinstance(player.observation(SkillKey.WINGER), Unknown)
    assert set(player.skills) == {SkillKey.DEFENDING, SkillKey.SCORING, SkillKey.KEEPER}


def test_player_accepts_serialized_observations():
    original = Player(player_id=3, skills={"passing": (5, 5)})
    restored = Player.model_validate(original.model_dump())

    assert restored.observation(SkillKey.PASSING).exhausted
    assert restored == original


def test_specialty_falls_back_to_none():
    assert Player(player_id=1, specialty=5).specialty is Specialty.HEAD
    assert Player(player_id=1, specialty="7").specialty is None
    assert Player(player_id=1, specialty="").specialty is None


def test_age_helpers_use_youth_season_length():
    player = Player(player_id=1, age_years=16, age_days=10, can_be_promoted_in=5)

    assert player.total_age_days == 16 * DAYS_PER_YEAR + 10
    assert player.promotion_age_days == 16 * DAYS_PER_YEAR + 15
    assert Player(player_id=2).total_age_days is None
