# app/services/live_poller.py
"""
Background poller that keeps the current live board.

One asyncio task: tick, sleep `interval_seconds`, repeat. A tick fetches the
live rows and swaps in a new LiveBoard; the board is never edited in place.
Only one tick runs at a time, so a manual refresh that lands while the timer
tick is in flight is skipped and gets the current board back.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, Tuple

from app.models.pace_types import BoardSource, LiveBoardOut, LiveGameRow

logger = logging.getLogger("app.live_poller")

FetchLive = Callable[[], Awaitable[List[LiveGameRow]]]
DemoRows = Callable[[], List[LiveGameRow]]


@dataclass(frozen=True)
class LiveBoard:
    games: Tuple[LiveGameRow, ...] = ()
    source: BoardSource = "empty"
    updatedAt: Optional[str] = None
    lastError: Optional[str] = None
    ticks: int = 0

    def as_dict(self) -> LiveBoardOut:
        return {
            "games": list(self.games),
            "source": self.source,
            "updatedAt": self.updatedAt,
            "lastError": self.lastError,
        }

    def find(self, game_id: str) -> Optional[LiveGameRow]:
        return next((g for g in self.games if g["gameId"] == game_id), None)


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class LivePoller:
    def __init__(
        self,
        fetch: FetchLive,
        interval_seconds: float = 8.0,
        fallback_mode: str = "cached",
        demo: Optional[DemoRows] = None,
    ):
        self.fetch = fetch
        self.interval_seconds = interval_seconds
        self.fallback_mode = fallback_mode
        self.demo = demo or (lambda: [])
        self._board = LiveBoard()
        self._has_live = False
        self._inflight = False
        self._task: Optional[asyncio.Task] = None

    @property
    def board(self) -> LiveBoard:
        return self._board

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> LiveBoard:
        if self._inflight:
            logger.info("live_poller: tick already in flight, skipping")
            return self._board

        self._inflight = True
        ticks = self._board.ticks + 1
        try:
            rows = await self.fetch()
        except Exception as e:
            self._board = self._fallback_board(repr(e), ticks)
            logger.warning(
                "live_poller: fetch failed (%s), serving %s board with %d games",
                repr(e),
                self._board.source,
                len(self._board.games),
            )
        else:
            self._board = LiveBoard(
                games=tuple(rows),
                source="live",
                updatedAt=_utcnow_iso(),
                lastError=None,
                ticks=ticks,
            )
            self._has_live = True
        finally:
            self._inflight = False
        return self._board

    def _fallback_board(self, error: str, ticks: int) -> LiveBoard:
        """
        cached: keep the last good games (demo slate if there never were any)
        demo:   always the demo slate
        empty:  nothing
        """
        if self.fallback_mode == "cached" and self._has_live:
            return replace(self._board, source="cached", lastError=error, ticks=ticks)
        if self.fallback_mode in ("cached", "demo"):
            return LiveBoard(
                games=tuple(self.demo()),
                source="demo",
                updatedAt=_utcnow_iso(),
                lastError=error,
                ticks=ticks,
            )
        return LiveBoard(games=(), source="empty", updatedAt=_utcnow_iso(), lastError=error, ticks=ticks)

    async def _run(self) -> None:
        logger.info("live_poller: started, interval=%.1fs", self.interval_seconds)
        while True:
            try:
                await self.tick()
            except Exception:
                # tick() already folds fetch errors into the board
                logger.exception("live_poller: unexpected tick error")
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("live_poller: stopped")
