"""REST API for the training lineup advisor."""

from __future__ import annotations

import logging
from typing import List, Sequence

from fastapi import FastAPI, HTTPException

from lineupcoach.api.schemas import (
    AutoSelectionResponse,
    FocusCandidateResponse,
    FormationResponse,
    LineupPlanResponse,
    LineupRequest,
    LineupSlotResponse,
    OptimizerDebugResponse,
    RankedEntryResponse,
    RankingRequest,
    RankingResponse,
    RosterRequest,
    SelectionResponse,
)
from lineupcoach.config import TrainingPolicy, get_formation, iter_formations
from lineupcoach.ingest import parse_ratings, parse_roster
from lineupcoach.models import Player
from lineupcoach.optimizer import (
    EmptyRoster,
    InvalidFocusPlayer,
    OptimizerError,
    advise,
    auto_select,
    focus_candidates,
    rank_players,
)


logger = logging.getLogger("uvicorn.error")

_STATUS_BY_ERROR: dict[type[OptimizerError], int] = {
    InvalidFocusPlayer: 404,
    EmptyRoster: 400,
}


def _error_status(exc: OptimizerError) -> int:
    for error_type, status in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status
    return 409


def _policy_for(request: RosterRequest) -> TrainingPolicy:
    base = TrainingPolicy.from_env()
    overrides = {
        key: value
        for key, value in (
            ("allow_training_until_maxed_out", request.allow_training_until_maxed_out),
            ("min_current_level", request.min_current_level),
            ("min_max_level", request.min_max_level),
        )
        if value is not None
    }
    return base.model_copy(update=overrides) if overrides else base


def _players_for(request: RosterRequest) -> List[Player]:
    try:
        return parse_roster(request.players)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail={"code": "invalid_roster", "message": str(exc)}) from exc


def _slot_rows(plan, players: Sequence[Player]) -> List[LineupSlotResponse]:
    names = {player.player_id: player.name for player in players}
    return [
        LineupSlotResponse(slot=slot, player_id=player_id, name=names.get(player_id) if player_id is not None else None)
        for slot, player_id in plan.assignment.slots
    ]


def create_app() -> FastAPI:
    app = FastAPI(title="lineupcoach advisor")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/formations", response_model=list[FormationResponse])
    async def formations() -> list[FormationResponse]:
        return [
            FormationResponse(
                name=formation.name,
                field_slots=list(formation.field_slots),
                bench_slots=list(formation.bench_slots),
            )
            for formation in iter_formations()
        ]

    @app.post("/rankings", response_model=RankingResponse)
    async def rankings(request: RankingRequest) -> RankingResponse:
        players = _players_for(request)
        entries = rank_players(players, request.skill, _policy_for(request))
        return RankingResponse(
            skill=request.skill,
            entries=[RankedEntryResponse(**entry.to_dict()) for entry in entries],
        )

    @app.post("/auto-selection", response_model=AutoSelectionResponse)
    async def auto_selection(request: RosterRequest) -> AutoSelectionResponse:
        players = _players_for(request)
        policy = _policy_for(request)
        candidates = [FocusCandidateResponse(**candidate.to_dict()) for candidate in focus_candidates(players, policy)]
        selection = auto_select(players, policy)
        if selection is None:
            return AutoSelectionResponse(candidates=candidates)
        return AutoSelectionResponse(
            focus_player_id=selection.focus_player_id,
            primary_skill=selection.primary_skill,
            secondary_skill=selection.secondary_skill,
            candidates=candidates,
        )

    @app.post("/lineups", response_model=LineupPlanResponse)
    async def lineups(request: LineupRequest) -> LineupPlanResponse:
        players = _players_for(request)
        try:
            formation = get_formation(request.formation)
        except KeyError as exc:
            raise HTTPException(
                status_code=400,
                detail={"code": "unknown_formation", "message": f"Unknown formation {request.formation!r}"},
            ) from exc
        ratings = parse_ratings(request.ratings) if request.ratings else None

        try:
            plan = advise(
                players,
                focus_player_id=request.focus_player_id,
                primary_skill=request.primary_skill,
                secondary_skill=request.secondary_skill,
                mode=request.mode,
                policy=_policy_for(request),
                formation=formation,
                ratings=ratings,
                seed=request.seed,
                require_players=request.require_players,
            )
        except OptimizerError as exc:
            logger.info("Lineup request rejected (%s): %s", exc.code, exc.message)
            raise HTTPException(
                status_code=_error_status(exc),
                detail={"code": exc.code, "message": exc.message},
            ) from exc

        debug = plan.debug.to_dict()
        logger.info(
            "Lineup built for focus=%s mode=%s formation=%s",
            plan.debug.selection.focus_player_id,
            plan.debug.mode.value,
            formation.name,
        )
        return LineupPlanResponse(
            assignment=plan.assignment.as_dict(),
            slots=_slot_rows(plan, players),
            selection=SelectionResponse(**debug["selection"]),
            debug=OptimizerDebugResponse(**debug) if request.include_debug else None,
            message=None if players else "Roster has no players",
        )

    return app
