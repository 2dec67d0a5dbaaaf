# app/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import logging
import time

# ------------ Router imports ------------
from app.routers import dashboard_routes, live_routes
from app.core.config import get_settings
from app.services.demo_games import demo_rows
from app.services.espn_cbb import get_live_games
from app.services.live_poller import LivePoller

# ------------ Logging ------------
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("app")

settings = get_settings()


async def _fetch_live():
    return await get_live_games(
        settings.scoreboard_url,
        policy=settings.policy,
        timeout=settings.http_timeout_seconds,
    )


poller = LivePoller(
    _fetch_live,
    interval_seconds=settings.poll_interval_seconds,
    fallback_mode=settings.fallback_mode,
    demo=lambda: demo_rows(settings.policy),
)


# ------------ Lifespan: start/stop the scoreboard poller ------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    p: LivePoller = app.state.poller
    if app.state.settings.poll_enabled:
        p.start()
    else:
        logger.info("POLL_ENABLED=false; live board only updates via /api/cbb/live/refresh")
    yield
    await p.stop()


# ------------ App ------------
app = FastAPI(
    title="CBB Live Pace API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url=None,
    openapi_url="/openapi.json",
    lifespan=lifespan,
)
app.state.settings = settings
app.state.poller = poller


# ------------ Access log middleware ------------
class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        t0 = time.perf_counter()
        try:
            response = await call_next(request)
            status = response.status_code
        except Exception:
            status = 500
            raise
        finally:
            dt = (time.perf_counter() - t0) * 1000
            logger.info(
                "ACCESS %s %s q=%s -> %s in %.1fms",
                request.method,
                request.url.path,
                request.url.query,
                status,
                dt,
            )
        return response


app.add_middleware(AccessLogMiddleware)

# ------------ CORS (open; dashboard may be served from anywhere) ------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# ------------ Global error handler ------------
@app.exception_handler(Exception)
async def _unhandled(request: Request, exc: Exception):
    logger.exception("UNHANDLED ERROR: %s %s", request.method, request.url)
    return JSONResponse(status_code=500, content={"error": "internal_error"})


# ------------ Health & status ------------
@app.get("/health")
async def health():
    return {"ok": True}


@app.get("/status")
async def status(request: Request):
    p: LivePoller = request.app.state.poller
    s = request.app.state.settings
    board = p.board
    return {
        "ok": True,
        "polling": p.running,
        "intervalSeconds": p.interval_seconds,
        "fallbackMode": p.fallback_mode,
        "policy": s.policy.name,
        "source": board.source,
        "games": len(board.games),
        "updatedAt": board.updatedAt,
        "lastError": board.lastError,
        "ticks": board.ticks,
    }


# ------------ Mount routers ------------
app.include_router(live_routes.router, prefix="/api/cbb")
app.include_router(dashboard_routes.router)
