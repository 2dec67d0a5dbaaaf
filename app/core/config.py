# app/core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from app.models.pace_model import DEFAULT_POLICY, PacePolicy

logger = logging.getLogger("app.config")

T = TypeVar("T")

SCOREBOARD_URL = "https://site.api.espn.com/apis/site/v2/sports/basketball/mens-college-basketball/scoreboard"
FALLBACK_MODES = ("cached", "demo", "empty")


@dataclass(frozen=True)
class Settings:
    scoreboard_url: str = SCOREBOARD_URL
    poll_interval_seconds: float = 8.0
    poll_enabled: bool = True
    fallback_mode: str = "cached"
    http_timeout_seconds: float = 10.0
    policy: PacePolicy = field(default_factory=PacePolicy)


def _env(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except (TypeError, ValueError):
        logger.warning("config: bad value %s=%r, using default %r", name, raw, default)
        return default


def _bool(s: str) -> bool:
    v = s.lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    raise ValueError(s)


def _positive(s: str) -> float:
    v = float(s)
    if v <= 0:
        raise ValueError(s)
    return v


def _non_negative(s: str) -> int:
    v = int(s)
    if v < 0:
        raise ValueError(s)
    return v


def _fallback(s: str) -> str:
    v = s.lower()
    if v not in FALLBACK_MODES:
        raise ValueError(s)
    return v


def load_policy() -> PacePolicy:
    d = DEFAULT_POLICY
    return PacePolicy(
        name=_env("PACE_POLICY_NAME", d.name, str),
        average_pace=_env("PACE_AVERAGE", d.average_pace, float),
        over_total=_env("PACE_OVER_TOTAL", d.over_total, float),
        under_total=_env("PACE_UNDER_TOTAL", d.under_total, float),
        hot_pace=_env("PACE_HOT", d.hot_pace, float),
        cold_pace=_env("PACE_COLD", d.cold_pace, float),
        hot_delta=_env("PACE_HOT_DELTA", d.hot_delta, float),
        cold_delta=_env("PACE_COLD_DELTA", d.cold_delta, float),
        blowout_margin=_env("BLOWOUT_MARGIN", d.blowout_margin, _non_negative),
        blowout_step=_env("BLOWOUT_STEP", d.blowout_step, _non_negative),
    )


def load_settings() -> Settings:
    """Read settings from the environment. Bad values fall back to defaults."""
    return Settings(
        scoreboard_url=os.getenv("SCOREBOARD_URL") or SCOREBOARD_URL,
        poll_interval_seconds=_env("POLL_INTERVAL_SECONDS", 8.0, _positive),
        poll_enabled=_env("POLL_ENABLED", True, _bool),
        fallback_mode=_env("FALLBACK_MODE", "cached", _fallback),
        http_timeout_seconds=_env("HTTP_TIMEOUT_SECONDS", 10.0, _positive),
        policy=load_policy(),
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
