# app/models/pace_types.py
from typing_extensions import TypedDict, Literal
from typing import List, Optional

OverUnderEdge = Literal["OVER_LEAN", "UNDER_LEAN", "NEUTRAL"]
GameTempo = Literal["HOT", "COLD", "NEUTRAL"]
BoardSource = Literal["live", "cached", "demo", "empty"]


class ScoreboardGame(TypedDict):
    gameId: str
    homeTeam: str
    awayTeam: str
    homeScore: int
    awayScore: int
    period: int
    clock: str
    statusName: str
    statusDetail: str


class BettingInsights(TypedDict):
    paceVsAverage: int
    overUnderEdge: OverUnderEdge
    gameTempo: GameTempo
    blowoutRisk: int


class LiveGameRow(TypedDict):
    gameId: str
    homeTeam: str
    awayTeam: str
    homeScore: int
    awayScore: int
    clock: str
    period: int
    pace: int
    projectedTotal: int
    bettingInsights: BettingInsights


class LiveBoardOut(TypedDict):
    games: List[LiveGameRow]
    source: BoardSource
    updatedAt: Optional[str]
    lastError: Optional[str]
