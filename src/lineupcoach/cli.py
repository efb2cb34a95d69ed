"""Command-line interface for building training lineups from a roster snapshot."""

from __future__ import annotations

import argparse
import csv
import json
import sys
from pathlib import Path

from lineupcoach.config import TrainingPolicy, get_formation, iter_formations
from lineupcoach.config_loader import AdvisorProfile
from lineupcoach.ingest import load_ratings_json, load_roster_json
from lineupcoach.models import SkillKey
from lineupcoach.optimizer import OptimizerError, OptimizerMode, advise


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    skills = [skill.value for skill in SkillKey]
    parser = argparse.ArgumentParser(description="Build a youth training lineup around a focus player")
    parser.add_argument("roster", type=Path, help="Path to roster JSON (canonical or provider-shaped)")
    parser.add_argument("--ratings", type=Path, default=None, help="Optional per-position ratings JSON")
    parser.add_argument("--focus", type=int, default=None, help="Focus player id (auto-selected if omitted)")
    parser.add_argument("--primary", choices=skills, default=None, help="Primary training skill")
    parser.add_argument("--secondary", choices=skills, default=None, help="Secondary training skill")
    parser.add_argument(
        "--formation",
        choices=[formation.name for formation in iter_formations()],
        default=None,
        help="Formation shape (default 4-4-2)",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in OptimizerMode],
        default=None,
        help="Optimizer to run (default focus, or ratings when --ratings is given)",
    )
    parser.add_argument(
        "--strict-max",
        action="store_true",
        help="Never place players in slots training a skill they have maxed out",
    )
    parser.add_argument("--min-current", type=int, default=None, help="Demote players below this current level")
    parser.add_argument("--min-max", type=int, default=None, help="Demote players below this potential")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle slot order reproducibly")
    parser.add_argument("--output", type=Path, default=Path("lineup.json"), help="Output JSON path")
    parser.add_argument("--csv", type=Path, default=None, help="Optional slot/player CSV export")
    parser.add_argument("--load-profile", type=Path, help="Load advisor choices JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save advisor choices JSON", default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    profile = AdvisorProfile.load(args.load_profile) if args.load_profile else AdvisorProfile()
    focus = args.focus if args.focus is not None else profile.focus_player_id
    primary = args.primary or profile.primary_skill
    secondary = args.secondary or profile.secondary_skill
    formation_name = args.formation or profile.formation
    mode = args.mode or profile.mode or (OptimizerMode.RATINGS.value if args.ratings else OptimizerMode.FOCUS.value)

    env_policy = TrainingPolicy.from_env()
    allow = env_policy.allow_training_until_maxed_out
    if profile.allow_training_until_maxed_out is not None:
        allow = profile.allow_training_until_maxed_out
    if args.strict_max:
        allow = False
    policy = env_policy.model_copy(
        update={
            "allow_training_until_maxed_out": allow,
            "min_current_level": (
                max(0, args.min_current) if args.min_current is not None else env_policy.min_current_level
            ),
            "min_max_level": max(0, args.min_max) if args.min_max is not None else env_policy.min_max_level,
        }
    )

    players = load_roster_json(args.roster)
    ratings = load_ratings_json(args.ratings) if args.ratings else None

    try:
        plan = advise(
            players,
            focus_player_id=focus,
            primary_skill=SkillKey(primary) if primary else None,
            secondary_skill=SkillKey(secondary) if secondary else None,
            mode=OptimizerMode(mode),
            policy=policy,
            formation=get_formation(formation_name),
            ratings=ratings,
            seed=args.seed,
        )
    except OptimizerError as exc:
        print(f"Unable to build lineup ({exc.code}): {exc.message}", file=sys.stderr)
        raise SystemExit(1) from exc

    selection = plan.debug.selection
    if args.save_profile:
        AdvisorProfile(
            focus_player_id=selection.focus_player_id,
            primary_skill=selection.primary_skill.value,
            secondary_skill=selection.secondary_skill.value,
            formation=plan.debug.topology.formation,
            mode=plan.debug.mode.value,
            allow_training_until_maxed_out=policy.allow_training_until_maxed_out,
        ).save(args.save_profile)
        print(f"Saved advisor profile to {args.save_profile}")

    payload = {"assignment": plan.assignment.as_dict(), "debug": plan.debug.to_dict()}
    args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print(
        "Focus {} in {} training {}/{} ({} of {} slots filled)".format(
            selection.focus_player_id,
            plan.debug.focus_slot or "-",
            selection.primary_skill.value,
            selection.secondary_skill.value,
            len(plan.assignment.assigned_ids()),
            len(plan.assignment),
        )
    )
    print(f"Wrote lineup to {args.output}")

    if args.csv:
        names = {player.player_id: player.name for player in players}
        with args.csv.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["slot", "player_id", "name"])
            for slot, player_id in plan.assignment.slots:
                writer.writerow([slot, "" if player_id is None else player_id, names.get(player_id, "")])
        print(f"Wrote slot export to {args.csv}")


if __name__ == "__main__":
    main()
