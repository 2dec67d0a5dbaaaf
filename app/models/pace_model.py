# app/models/pace_model.py
"""
Live pace model for men's college basketball.

Turns one normalized scoreboard game into pace / projected total and a few
betting-insight labels. Everything here is a pure function of the game and
the threshold policy.
"""
from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict

from app.models.pace_types import (
    BettingInsights,
    GameTempo,
    LiveGameRow,
    OverUnderEdge,
    ScoreboardGame,
)

HALF_MINUTES = 20.0
GAME_MINUTES = 40.0

_LEADING_INT = re.compile(r"\s*[+-]?\d+")
_LEADING_DECIMAL = re.compile(r"\s*[+-]?\d+(?:\.\d+)?")


@dataclass(frozen=True)
class PacePolicy:
    """
    Named thresholds for the insight labels ("standard" policy).

    over/under lean looks at the projected total only; tempo looks at raw
    pace, with the pace-vs-average delta as a second trigger.
    """
    name: str = "standard"
    average_pace: float = 70.0
    over_total: float = 140.0
    under_total: float = 130.0
    hot_pace: float = 75.0
    cold_pace: float = 65.0
    hot_delta: float = 10.0
    cold_delta: float = -10.0
    blowout_margin: int = 15
    blowout_step: int = 5

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_POLICY = PacePolicy()


@dataclass(frozen=True)
class PaceMetrics:
    pace: int
    projectedTotal: int
    paceVsAverage: int
    overUnderEdge: OverUnderEdge
    gameTempo: GameTempo
    blowoutRisk: int


def round_half_up(x: float) -> int:
    # dashboards have always shown Math.round-style values (2.5 -> 3)
    return int(math.floor(x + 0.5))


def leading_number(s: Any, decimals: bool = False) -> float:
    """
    Leading numeric prefix of a scoreboard string: "24.5" -> 24 (24.5 with
    decimals), "12abc" -> 12, "-3" -> -3, junk or None -> 0.
    """
    m = (_LEADING_DECIMAL if decimals else _LEADING_INT).match(str(s if s is not None else ""))
    return float(m.group(0)) if m else 0.0


def parse_int(s: Any) -> int:
    return int(leading_number(s))


def parse_clock(clock: str | None) -> float:
    """'M:SS' -> minutes left in the period, never negative. Malformed parts count as 0."""
    if not clock:
        clock = "0:00"
    parts = str(clock).split(":")
    minutes = leading_number(parts[0])
    # sub-minute clocks carry tenths ("0:24.5")
    seconds = leading_number(parts[1], decimals=True) if len(parts) > 1 else 0.0
    return max(0.0, minutes + seconds / 60.0)


def minutes_played(period: int, minutes_left: float) -> float:
    if period <= 1:
        return HALF_MINUTES - minutes_left
    return GAME_MINUTES - minutes_left


def minutes_remaining(period: int, minutes_left: float) -> float:
    if period <= 1:
        return HALF_MINUTES + minutes_left
    return minutes_left


def raw_pace(total_points: int, played: float) -> float:
    if played <= 0:
        return 0.0
    return max(0.0, total_points / played * GAME_MINUTES)


def classify_over_under(projected_total: int, policy: PacePolicy = DEFAULT_POLICY) -> OverUnderEdge:
    if projected_total > policy.over_total:
        return "OVER_LEAN"
    if projected_total < policy.under_total:
        return "UNDER_LEAN"
    return "NEUTRAL"


def classify_tempo(pace: float, pace_vs_average: float, policy: PacePolicy = DEFAULT_POLICY) -> GameTempo:
    if pace > policy.hot_pace or pace_vs_average > policy.hot_delta:
        return "HOT"
    if pace < policy.cold_pace or pace_vs_average < policy.cold_delta:
        return "COLD"
    return "NEUTRAL"


def blowout_risk(home_score: int, away_score: int, policy: PacePolicy = DEFAULT_POLICY) -> int:
    diff = abs(home_score - away_score)
    if diff <= policy.blowout_margin:
        return 0
    return max(0, min(100, (diff - policy.blowout_margin) * policy.blowout_step))


def compute_metrics(
    home_score: int,
    away_score: int,
    period: int,
    clock: str | None,
    policy: PacePolicy = DEFAULT_POLICY,
) -> PaceMetrics:
    left = parse_clock(clock)
    played = minutes_played(period, left)
    total = home_score + away_score

    pace = raw_pace(total, played)
    projected = round_half_up(total + (pace / GAME_MINUTES) * minutes_remaining(period, left))
    # O/U and tempo are classified on the same rounded numbers the card shows
    vs_avg = round_half_up(pace - policy.average_pace)
    shown_pace = round_half_up(pace)

    return PaceMetrics(
        pace=shown_pace,
        projectedTotal=projected,
        paceVsAverage=vs_avg,
        overUnderEdge=classify_over_under(projected, policy),
        gameTempo=classify_tempo(shown_pace, vs_avg, policy),
        blowoutRisk=blowout_risk(home_score, away_score, policy),
    )


def project_live_game(game: ScoreboardGame, policy: PacePolicy = DEFAULT_POLICY) -> LiveGameRow:
    m = compute_metrics(game["homeScore"], game["awayScore"], game["period"], game["clock"], policy)
    insights: BettingInsights = {
        "paceVsAverage": m.paceVsAverage,
        "overUnderEdge": m.overUnderEdge,
        "gameTempo": m.gameTempo,
        "blowoutRisk": m.blowoutRisk,
    }
    return {
        "gameId": game["gameId"],
        "homeTeam": game["homeTeam"],
        "awayTeam": game["awayTeam"],
        "homeScore": game["homeScore"],
        "awayScore": game["awayScore"],
        "clock": game["statusDetail"],
        "period": game["period"],
        "pace": m.pace,
        "projectedTotal": m.projectedTotal,
        "bettingInsights": insights,
    }
