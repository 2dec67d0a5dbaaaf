"""
Pytest fixtures for the live pace service.
"""

import sys
from pathlib import Path

import pytest

# Ensure `import app...` works when pytest is executed without an install.
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


def make_event(
    game_id="401",
    home_score="72",
    away_score="68",
    period=2,
    clock="8:45",
    detail="8:45 - 2nd Half",
    status_name="STATUS_IN_PROGRESS",
    home_name="Duke Blue Devils",
    away_name="North Carolina Tar Heels",
):
    """Build an ESPN-shaped scoreboard event. Pass None to leave a field out."""
    home = {"homeAway": "home", "team": {"displayName": home_name}}
    away = {"homeAway": "away", "team": {"displayName": away_name}}
    if home_score is not None:
        home["score"] = home_score
    if away_score is not None:
        away["score"] = away_score

    comp_status = {"period": period, "type": {"detail": detail}}
    if clock is not None:
        comp_status["clockDisplayValue"] = clock

    return {
        "id": game_id,
        "status": {"type": {"name": status_name}},
        "competitions": [{"competitors": [home, away], "status": comp_status}],
    }


@pytest.fixture
def live_event():
    return make_event()


@pytest.fixture
def final_event():
    return make_event(game_id="402", status_name="STATUS_FINAL", detail="Final")


@pytest.fixture
def event_factory():
    return make_event
