# app/services/demo_games.py
from __future__ import annotations

from typing import List, Tuple

from app.models.pace_model import DEFAULT_POLICY, PacePolicy, project_live_game
from app.models.pace_types import LiveGameRow, ScoreboardGame

# Static slate shown when the scoreboard can't be reached and nothing is cached.
DEMO_GAMES: Tuple[ScoreboardGame, ...] = (
    {
        "gameId": "demo-1",
        "homeTeam": "Duke Blue Devils",
        "awayTeam": "North Carolina Tar Heels",
        "homeScore": 72,
        "awayScore": 68,
        "period": 2,
        "clock": "8:45",
        "statusName": "STATUS_IN_PROGRESS",
        "statusDetail": "8:45 - 2nd Half",
    },
    {
        "gameId": "demo-2",
        "homeTeam": "Kansas Jayhawks",
        "awayTeam": "Baylor Bears",
        "homeScore": 31,
        "awayScore": 29,
        "period": 1,
        "clock": "4:12",
        "statusName": "STATUS_IN_PROGRESS",
        "statusDetail": "4:12 - 1st Half",
    },
    {
        "gameId": "demo-3",
        "homeTeam": "Gonzaga Bulldogs",
        "awayTeam": "Pepperdine Waves",
        "homeScore": 81,
        "awayScore": 52,
        "period": 2,
        "clock": "6:30",
        "statusName": "STATUS_IN_PROGRESS",
        "statusDetail": "6:30 - 2nd Half",
    },
)


def demo_rows(policy: PacePolicy = DEFAULT_POLICY) -> List[LiveGameRow]:
    return [project_live_game(g, policy) for g in DEMO_GAMES]
