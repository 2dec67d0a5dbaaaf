# app/routers/live_routes.py
from __future__ import annotations

import logging
from typing import Any, Dict
from fastapi import APIRouter, HTTPException, Query, Request

from app.core.config import Settings
from app.models.pace_model import compute_metrics
from app.models.pace_types import LiveBoardOut, LiveGameRow
from app.services.live_poller import LivePoller

logger = logging.getLogger("app.live")
router = APIRouter(tags=["CBB Live"])


def _poller(request: Request) -> LivePoller:
    return request.app.state.poller


def _settings(request: Request) -> Settings:
    return request.app.state.settings


# -------------------------
# 🏀  CBB - Live board
# -------------------------
@router.get("/live", response_model=LiveBoardOut)
async def cbb_live(request: Request):
    """
    Current live games with pace + betting insights, as of the last poll tick.
    """
    return _poller(request).board.as_dict()


@router.post("/live/refresh", response_model=LiveBoardOut)
async def cbb_live_refresh(request: Request):
    """
    Run one poll tick now. If a tick is already running, returns the current board.
    """
    board = await _poller(request).tick()
    return board.as_dict()


@router.get("/live/{gameId}", response_model=LiveGameRow)
async def cbb_live_game(gameId: str, request: Request):
    row = _poller(request).board.find(gameId)
    if row is None:
        raise HTTPException(404, "Game not live")
    return row


# -------------------------
# 🧮  CBB - Pace policy / ad-hoc metrics
# -------------------------
@router.get("/policy")
async def cbb_policy(request: Request) -> Dict[str, Any]:
    return _settings(request).policy.as_dict()


@router.get("/metrics")
async def cbb_metrics(
    request: Request,
    home: int = Query(0, ge=0, description="Home score"),
    away: int = Query(0, ge=0, description="Away score"),
    period: int = Query(1, ge=0, description="1 = 1st half, 2+ = 2nd half / OT"),
    clock: str = Query("0:00", description="Time left in period, M:SS"),
):
    """
    Pace + insights for a hand-entered game state.
    """
    m = compute_metrics(home, away, period, clock, _settings(request).policy)
    return {
        "pace": m.pace,
        "projectedTotal": m.projectedTotal,
        "bettingInsights": {
            "paceVsAverage": m.paceVsAverage,
            "overUnderEdge": m.overUnderEdge,
            "gameTempo": m.gameTempo,
            "blowoutRisk": m.blowoutRisk,
        },
    }
