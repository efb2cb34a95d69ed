import json

from lineupcoach.ingest import load_ratings_json, load_roster_json, parse_ratings, parse_roster, player_from_chpp
from lineupcoach.models import KnownBoth, SkillKey, Specialty, Unknown


def _chpp_node() -> dict:
    return {
        "YouthPlayerID": "123",
        "FirstName": "Ana",
        "NickName": "",
        "LastName": "Silva",
        "Age": "16",
        "AgeDays": "45",
        "CanBePromotedIn": "10",
        "Specialty": "2",
        "PlayerSkills": {
            "KeeperSkill": {"#text": "3", "@_IsAvailable": "True", "@_IsMaxReached": "False"},
            "KeeperSkillMax": {"#text": "6", "@_IsAvailable": "True"},
            "ScorerSkill": {"@_IsAvailable": "False"},
            "PassingSkill": {"#text": "5", "@_IsAvailable": "True", "@_IsMaxReached": "True"},
        },
    }


def test_player_from_chpp_reads_provider_node():
    player = player_from_chpp(_chpp_node())

    assert player.player_id == 123
    assert player.name == "Ana Silva"
    assert (player.age_years, player.age_days, player.can_be_promoted_in) == (16, 45, 10)
    assert player.specialty is Specialty.QUICK

    keeper = player.observation(SkillKey.KEEPER)
    assert isinstance(keeper, KnownBoth)
    assert (keeper.current, keeper.max, keeper.exhausted) == (3, 6, False)

    passing = player.observation(SkillKey.PASSING)
    assert (passing.current, passing.max, passing.exhausted) == (5, 5, True)

    assert isinstance(player.observation(SkillKey.SCORING), Unknown)


def test_parse_roster_skips_bad_and_duplicate_entries():
    players = parse_roster(
        [
            {"player_id": 1, "name": "First", "skills": {"winger": [2, 6]}},
            {"player_id": 1, "name": "Duplicate"},
            {"name": "No id"},
            _chpp_node(),
        ]
    )

    assert [player.player_id for player in players] == [1, 123]
    assert players[0].name == "First"
    assert players[0].observation(SkillKey.WINGER).max == 6


def test_load_roster_json_accepts_wrapped_list(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text(json.dumps({"players": [{"player_id": 9, "age_years": 15}]}), encoding="utf-8")

    players = load_roster_json(path)

    assert len(players) == 1
    assert players[0].age_years == 15


def test_parse_ratings_shapes(tmp_path):
    endpoint_shape = {"players": [{"id": 5, "name": "X", "ratings": {"107": 6.5, "bad": "n/a"}}]}
    assert parse_ratings(endpoint_shape) == {5: {"107": 6.5}}

    path = tmp_path / "ratings.json"
    path.write_text(json.dumps({"7": {"F": 4}}), encoding="utf-8")
    assert load_ratings_json(path) == {7: {"F": 4.0}}
