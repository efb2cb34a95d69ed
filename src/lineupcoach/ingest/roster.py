"""Helpers to load roster snapshots and rating maps into canonical records."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from lineupcoach.models import Player, SkillKey, observe_pair


logger = logging.getLogger(__name__)

# Provider element names for the current level of each skill; the ceiling
# lives under the same name with a ``Max`` suffix.
CHPP_SKILL_FIELDS: Dict[SkillKey, str] = {
    SkillKey.KEEPER: "KeeperSkill",
    SkillKey.DEFENDING: "DefenderSkill",
    SkillKey.PLAYMAKING: "PlaymakerSkill",
    SkillKey.WINGER: "WingerSkill",
    SkillKey.PASSING: "PassingSkill",
    SkillKey.SCORING: "ScorerSkill",
    SkillKey.SETPIECES: "SetPiecesSkill",
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Mapping):
        value = value.get("#text")
    return str(value).strip() if value is not None else ""


def _optional_int(value: Any) -> Optional[int]:
    text = _text(value)
    if not text:
        return None
    try:
        return int(float(text))
    except ValueError:
        return None


def _display_name(payload: Mapping[str, Any]) -> str:
    parts = [_text(payload.get(key)) for key in ("FirstName", "NickName", "LastName")]
    return " ".join(part for part in parts if part)


def _chpp_skills(block: Optional[Mapping[str, Any]]) -> Dict[SkillKey, Any]:
    if not block:
        return {}
    return {
        skill: observe_pair(block.get(field), block.get(f"{field}Max"))
        for skill, field in CHPP_SKILL_FIELDS.items()
    }


def player_from_chpp(payload: Mapping[str, Any]) -> Player:
    """Build a :class:`Player` from a youth (or senior) player node.

    Raises ``ValueError`` when the node carries no usable player id.
    """

    player_id = _optional_int(payload.get("YouthPlayerID"))
    if player_id is None:
        player_id = _optional_int(payload.get("PlayerID"))
    if player_id is None:
        raise ValueError("player node has no YouthPlayerID or PlayerID")

    age_years = _optional_int(payload.get("Age"))
    age_days = _optional_int(payload.get("AgeDays"))
    return Player(
        player_id=player_id,
        name=_display_name(payload),
        age_years=age_years if age_years is not None and age_years >= 0 else None,
        age_days=age_days if age_days is not None and age_days >= 0 else None,
        can_be_promoted_in=_optional_int(payload.get("CanBePromotedIn")),
        specialty=_optional_int(payload.get("Specialty")),
        skills=_chpp_skills(payload.get("PlayerSkills")),
    )


def _player_nodes(data: Any) -> List[Mapping[str, Any]]:
    if isinstance(data, list):
        return [node for node in data if isinstance(node, Mapping)]
    if not isinstance(data, Mapping):
        raise ValueError("roster JSON must be a list or an object with a player list")
    for key in ("players", "PlayerList", "YouthPlayerList"):
        nodes = data.get(key)
        if isinstance(nodes, Mapping):
            # Single-player XML lists collapse to an object.
            nodes = nodes.get("YouthPlayer") or nodes.get("Player") or nodes
        if isinstance(nodes, Mapping):
            nodes = [nodes]
        if isinstance(nodes, list):
            return [node for node in nodes if isinstance(node, Mapping)]
    raise ValueError("roster JSON has no players list")


def _is_chpp_node(node: Mapping[str, Any]) -> bool:
    return "YouthPlayerID" in node or "PlayerID" in node


def parse_roster(data: Any) -> List[Player]:
    """Turn decoded JSON (canonical or provider-shaped) into players.

    Nodes that cannot be read are skipped with a warning; duplicate ids keep
    the first occurrence.
    """

    players: List[Player] = []
    seen: set[int] = set()
    for index, node in enumerate(_player_nodes(data)):
        try:
            player = player_from_chpp(node) if _is_chpp_node(node) else Player.model_validate(node)
        except (ValidationError, ValueError) as exc:
            logger.warning("Skipping roster entry %d: %s", index, exc)
            continue
        if player.player_id in seen:
            logger.warning("Skipping duplicate player id %s", player.player_id)
            continue
        seen.add(player.player_id)
        players.append(player)
    return players


def load_roster_json(path: Path) -> List[Player]:
    data = json.loads(path.read_text(encoding="utf-8"))
    players = parse_roster(data)
    logger.info("Loaded %d players from %s", len(players), path)
    return players


def parse_ratings(data: Any) -> Dict[int, Dict[str, float]]:
    """Normalize per-position rating maps keyed by player id.

    Accepts ``{"players": [{"id": .., "ratings": {..}}]}`` as the ratings
    endpoint returns it, or a plain ``{player_id: {role: rating}}`` object.
    """

    entries: Sequence[tuple[Any, Any]]
    if isinstance(data, Mapping) and isinstance(data.get("players"), list):
        entries = [
            (item.get("id"), item.get("ratings"))
            for item in data["players"]
            if isinstance(item, Mapping)
        ]
    elif isinstance(data, Mapping):
        entries = list(data.items())
    else:
        raise ValueError("ratings JSON must be an object")

    ratings: Dict[int, Dict[str, float]] = {}
    for raw_id, by_role in entries:
        player_id = _optional_int(raw_id)
        if player_id is None or not isinstance(by_role, Mapping):
            continue
        values: Dict[str, float] = {}
        for role, rating in by_role.items():
            if isinstance(rating, bool):
                continue
            try:
                values[str(role)] = float(rating)
            except (TypeError, ValueError):
                continue
        if values:
            ratings[player_id] = values
    return ratings


def load_ratings_json(path: Path) -> Dict[int, Dict[str, float]]:
    return parse_ratings(json.loads(path.read_text(encoding="utf-8")))
