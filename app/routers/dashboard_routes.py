# app/routers/dashboard_routes.py
from __future__ import annotations

from html import escape
from typing import List

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.models.pace_types import LiveGameRow

router = APIRouter(tags=["Dashboard"])

EDGE_CLASS = {"OVER_LEAN": "over", "UNDER_LEAN": "under", "NEUTRAL": "neutral"}
TEMPO_CLASS = {"HOT": "hot", "COLD": "cold", "NEUTRAL": "neutral"}

STYLE = """
body{background:#111827;color:#fff;font-family:system-ui,sans-serif;padding:2rem}
h1{text-align:center;margin-bottom:.25rem}
.sub{text-align:center;color:#9ca3af;margin-bottom:2rem}
.grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(300px,1fr));gap:1.5rem;max-width:80rem;margin:0 auto}
.card{background:#1f2937;border:1px solid #374151;border-radius:.5rem;padding:1.5rem}
.clock{text-align:center;color:#9ca3af;font-size:.875rem;margin-bottom:.5rem}
.row{display:flex;justify-content:space-between;margin:.35rem 0}
.score{font-size:1.5rem;font-weight:700}
.stats{margin-top:1rem;padding-top:1rem;border-top:1px solid #374151;font-size:.875rem}
.tag{font-size:.75rem;font-weight:700;padding:.1rem .5rem;border-radius:.25rem;background:#374151}
.over{background:#7f1d1d}.under{background:#1e3a8a}.hot{background:#7c2d12}.cold{background:#164e63}
.empty{text-align:center;margin-top:8rem;font-size:1.875rem;font-weight:700;color:#fde047}
"""


def _signed(n: int) -> str:
    return f"+{n}" if n > 0 else str(n)


def _card(g: LiveGameRow) -> str:
    bi = g["bettingInsights"]
    return f"""<div class="card" data-game="{escape(g['gameId'])}">
<div class="clock">{escape(g['clock'])}</div>
<div class="row"><span>{escape(g['awayTeam'])}</span><span class="score">{g['awayScore']}</span></div>
<div class="row"><span>{escape(g['homeTeam'])}</span><span class="score">{g['homeScore']}</span></div>
<div class="stats">
<div class="row"><span>Current Pace:</span><b>{g['pace']} pts/40 min</b></div>
<div class="row"><span>Projected Final Total:</span><b>{g['projectedTotal']}</b></div>
<div class="row"><span>Pace vs Average:</span><b>{_signed(bi['paceVsAverage'])}</b></div>
<div class="row"><span>O/U Edge:</span><span class="tag {EDGE_CLASS[bi['overUnderEdge']]}">{bi['overUnderEdge'].replace('_', ' ')}</span></div>
<div class="row"><span>Game Tempo:</span><span class="tag {TEMPO_CLASS[bi['gameTempo']]}">{bi['gameTempo']}</span></div>
<div class="row"><span>Blowout Risk:</span><b>{bi['blowoutRisk']}%</b></div>
</div>
</div>"""


def render_dashboard(games: List[LiveGameRow], source: str, refresh_seconds: float) -> str:
    if games:
        body = '<div class="grid">' + "\n".join(_card(g) for g in games) + "</div>"
    else:
        body = '<p class="empty">Go build Legos.</p><p class="sub">No live games right now.</p>'
    note = "" if source == "live" else f' <span class="tag">{escape(source)}</span>'
    return f"""<!doctype html>
<html><head><meta charset="utf-8">
<meta http-equiv="refresh" content="{max(1, int(refresh_seconds))}">
<title>Live NCAA Betting Analytics</title><style>{STYLE}</style></head>
<body><h1>Live NCAA Betting Analytics</h1>
<p class="sub">Real-time pace analysis &amp; betting insights{note}</p>
{body}
</body></html>"""


@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request):
    board = request.app.state.poller.board
    settings = request.app.state.settings
    return render_dashboard(list(board.games), board.source, settings.poll_interval_seconds)
