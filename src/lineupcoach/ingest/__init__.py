"""Input adapters that normalize raw roster and rating data."""

from .roster import (
    CHPP_SKILL_FIELDS,
    load_ratings_json,
    load_roster_json,
    parse_ratings,
    parse_roster,
    player_from_chpp,
)

__all__ = [
    "CHPP_SKILL_FIELDS",
    "load_ratings_json",
    "load_roster_json",
    "parse_ratings",
    "parse_roster",
    "player_from_chpp",
]
