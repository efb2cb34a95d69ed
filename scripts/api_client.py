"""Lightweight REST client for the lineupcoach API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_json(path: Path | None):
    if path is None:
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON in {path}: {exc}") from exc


def _roster_nodes(data) -> list[dict]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("players"), list):
        return data["players"]
    raise SystemExit("roster JSON must be a list of players or an object with a players list")


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the lineupcoach REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("roster", type=Path, nargs="?", help="Roster JSON")
    parser.add_argument("--ratings", type=Path, help="Per-position ratings JSON")
    parser.add_argument("--focus", type=int, help="Focus player id")
    parser.add_argument("--primary", help="Primary training skill")
    parser.add_argument("--secondary", help="Secondary training skill")
    parser.add_argument("--formation", help="Formation name, e.g. 4-4-2")
    parser.add_argument("--mode", default="focus", help="Optimizer mode")
    parser.add_argument("--rank", metavar="SKILL", help="Print the ranking for one skill and exit")
    parser.add_argument("--list-formations", action="store_true", help="List formations and exit")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_formations:
            resp = client.get("/formations")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.roster is None:
            raise SystemExit("roster file is required unless using --list-formations")
        players = _roster_nodes(load_json(args.roster))

        if args.rank:
            resp = client.post("/rankings", json={"players": players, "skill": args.rank})
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        request = {
            "players": players,
            "focus_player_id": args.focus,
            "primary_skill": args.primary,
            "secondary_skill": args.secondary,
            "formation": args.formation,
            "mode": args.mode,
            "ratings": load_json(args.ratings),
            "include_debug": False,
        }
        resp = client.post("/lineups", json=request)
        if resp.status_code in (404, 409):
            detail = resp.json().get("detail", {})
            raise SystemExit(f"{detail.get('code')}: {detail.get('message')}")
        resp.raise_for_status()
        payload = resp.json()
        print("Selection:", json.dumps(payload["selection"], indent=2))
        for row in payload["slots"]:
            print(f"{row['slot']:>5}  {row['player_id'] or '-':>10}  {row['name'] or ''}")


if __name__ == "__main__":
    main()
