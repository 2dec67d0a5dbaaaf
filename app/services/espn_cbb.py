# app/services/espn_cbb.py
from __future__ import annotations

import httpx
from typing import Any, Dict, List, Optional
import logging

from app.core.config import SCOREBOARD_URL
from app.models.pace_model import DEFAULT_POLICY, PacePolicy, parse_int, project_live_game
from app.models.pace_types import LiveGameRow, ScoreboardGame

logger = logging.getLogger("app.espn_cbb")

HEADERS = {"User-Agent": "Mozilla/5.0", "Accept": "application/json"}

STATUS_FINAL = "STATUS_FINAL"
# in-progress details look like "8:45 - 2nd Half"; "Final", "Halftime", "7:00 PM ET" don't
LIVE_DETAIL_SEPARATOR = " - "
UNKNOWN_TEAM = "Unknown"


def _as_dict(v: Any) -> Dict[str, Any]:
    return v if isinstance(v, dict) else {}


def _as_list(v: Any) -> List[Any]:
    return v if isinstance(v, list) else []


def _score(v: Any) -> int:
    """ESPN sends scores as decimal strings. Anything unusable or negative counts as 0."""
    return max(0, parse_int(v))


def _first_competition(ev: Dict[str, Any]) -> Dict[str, Any]:
    comps = _as_list(ev.get("competitions"))
    return _as_dict(comps[0]) if comps else {}


def _status_name(ev: Dict[str, Any]) -> str:
    name = _as_dict(_as_dict(ev.get("status")).get("type")).get("name")
    if name is None:
        comp_status = _as_dict(_first_competition(ev).get("status"))
        name = _as_dict(comp_status.get("type")).get("name")
    return str(name or "")


def _status_detail(ev: Dict[str, Any]) -> str:
    detail = _as_dict(_as_dict(_first_competition(ev).get("status")).get("type")).get("detail")
    return str(detail or "")


def _side(competitors: List[Any], home_away: str) -> Dict[str, Any]:
    return next(
        (_as_dict(c) for c in competitors if _as_dict(c).get("homeAway") == home_away),
        {},
    )


def normalize_event(ev: Dict[str, Any]) -> ScoreboardGame:
    """
    Validate one scoreboard event at the boundary.

    Every field comes back present: missing scores are 0, a missing clock is
    "0:00", a missing competitor's team name is "Unknown".
    """
    ev = _as_dict(ev)
    comp = _first_competition(ev)
    competitors = _as_list(comp.get("competitors"))
    home = _side(competitors, "home")
    away = _side(competitors, "away")
    status = _as_dict(comp.get("status"))

    clock = status.get("clockDisplayValue") or status.get("displayClock") or "0:00"
    period = max(0, parse_int(status.get("period")))

    return {
        "gameId": str(ev.get("id") or ""),
        "homeTeam": str(_as_dict(home.get("team")).get("displayName") or UNKNOWN_TEAM),
        "awayTeam": str(_as_dict(away.get("team")).get("displayName") or UNKNOWN_TEAM),
        "homeScore": _score(home.get("score")),
        "awayScore": _score(away.get("score")),
        "period": period,
        "clock": str(clock),
        "statusName": _status_name(ev),
        "statusDetail": _status_detail(ev),
    }


def is_live_event(ev: Dict[str, Any]) -> bool:
    ev = _as_dict(ev)
    if _status_name(ev) == STATUS_FINAL:
        return False
    return LIVE_DETAIL_SEPARATOR in _status_detail(ev)


def build_live_rows(events: List[Any], policy: PacePolicy = DEFAULT_POLICY) -> List[LiveGameRow]:
    """Filter a scoreboard `events` array to live games and project each one."""
    rows: List[LiveGameRow] = []
    for ev in _as_list(events):
        if not is_live_event(ev):
            continue
        try:
            rows.append(project_live_game(normalize_event(ev), policy))
        except Exception:
            logger.exception("espn_cbb: skipping event id=%s", _as_dict(ev).get("id"))
    return rows


async def fetch_scoreboard(
    url: str = SCOREBOARD_URL,
    params: Optional[Dict[str, Any]] = None,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = 10.0,
) -> Dict[str, Any]:
    """
    One GET of the scoreboard. No retry loop here; the next poll tick is the retry.
    Pass `client` to reuse a connection pool (or a mock transport in tests).
    """
    try:
        if client is not None:
            r = await client.get(url, params=params)
        else:
            async with httpx.AsyncClient(timeout=timeout, headers=HEADERS) as c:
                r = await c.get(url, params=params)
        r.raise_for_status()
        data = r.json()
    except Exception as e:
        logger.warning("espn_cbb fetch_scoreboard failed: %s", repr(e))
        raise

    if not isinstance(data, dict):
        raise ValueError(f"unexpected scoreboard payload: {type(data).__name__}")
    return data


async def get_live_games(
    url: str = SCOREBOARD_URL,
    policy: PacePolicy = DEFAULT_POLICY,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = 10.0,
) -> List[LiveGameRow]:
    data = await fetch_scoreboard(url, client=client, timeout=timeout)
    events = _as_list(data.get("events"))
    rows = build_live_rows(events, policy)
    logger.info("CBB get_live_games: %d events, %d live", len(events), len(rows))
    return rows
