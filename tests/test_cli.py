import json

from lineupcoach.cli import main
from lineupcoach.config_loader import AdvisorProfile


def _write_roster(path):
    players = [
        {"player_id": 1, "age_years": 16, "skills": {"scoring": 3, "passing": [4, 7]}},
        {"player_id": 2, "age_years": 17, "skills": {"scoring": [5, 6]}},
    ]
    players.extend({"player_id": player_id} for player_id in range(3, 15))
    path.write_text(json.dumps(players), encoding="utf-8")


def test_cli_writes_plan_and_profile(tmp_path, capsys):
    roster = tmp_path / "roster.json"
    output = tmp_path / "lineup.json"
    profile = tmp_path / "profile.json"
    export = tmp_path / "lineup.csv"
    _write_roster(roster)

    main(
        [
            str(roster),
            "--focus",
            "1",
            "--primary",
            "scoring",
            "--secondary",
            "passing",
            "--strict-max",
            "--output",
            str(output),
            "--csv",
            str(export),
            "--save-profile",
            str(profile),
        ]
    )

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["assignment"]["F_L"] == 1
    assert payload["debug"]["selection"]["primary_skill"] == "scoring"
    assert export.read_text(encoding="utf-8").splitlines()[0] == "slot,player_id,name"

    saved = AdvisorProfile.load(profile)
    assert saved.focus_player_id == 1
    assert saved.allow_training_until_maxed_out is False
    assert "Wrote lineup" in capsys.readouterr().out


def test_cli_loads_profile(tmp_path):
    roster = tmp_path / "roster.json"
    output = tmp_path / "lineup.json"
    profile = tmp_path / "profile.json"
    _write_roster(roster)
    AdvisorProfile(focus_player_id=2, primary_skill="scoring", secondary_skill="passing", formation="4-3-3").save(profile)

    main([str(roster), "--load-profile", str(profile), "--output", str(output)])

    debug = json.loads(output.read_text(encoding="utf-8"))["debug"]
    assert debug["selection"]["focus_player_id"] == 2
    assert debug["topology"]["formation"] == "4-3-3"
