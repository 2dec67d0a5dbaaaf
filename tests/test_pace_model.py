"""
Tests for the live pace transform.

Covers:
- The worked 2nd-half example (72-68, 8:45 left)
- Clock / period edge cases (missing clock, no time elapsed, overlong clock)
- Insight labels under the standard and custom policies
- Blowout risk bounds
"""

import dataclasses

import pytest

from app.models.pace_model import (
    DEFAULT_POLICY,
    PacePolicy,
    blowout_risk,
    classify_over_under,
    classify_tempo,
    compute_metrics,
    parse_clock,
    parse_int,
    project_live_game,
    round_half_up,
)


class TestClock:
    def test_minutes_and_seconds(self):
        assert parse_clock("8:45") == pytest.approx(8.75)

    def test_missing_clock_is_zero(self):
        assert parse_clock(None) == 0.0
        assert parse_clock("") == 0.0

    def test_malformed_parts_count_as_zero(self):
        assert parse_clock("x:30") == pytest.approx(0.5)
        assert parse_clock("12") == 12.0

    def test_sub_minute_clock_keeps_tenths(self):
        assert parse_clock("0:24.5") == pytest.approx(24.5 / 60)

    def test_trailing_junk_keeps_leading_digits(self):
        assert parse_clock("8:45 ") == pytest.approx(8.75)
        assert parse_clock("8:45s") == pytest.approx(8.75)

    def test_negative_clock_clamps_to_zero(self):
        assert parse_clock("-1:00") == 0.0

    def test_negative_clock_never_projects_below_current_total(self):
        m = compute_metrics(60, 50, 2, "-1:00")
        assert m.projectedTotal == 110
        assert m.pace == 110

    def test_sub_minute_clock_still_projects_remaining_time(self):
        m = compute_metrics(70, 70, 2, "0:24.5")
        assert m.projectedTotal > 140


class TestParseInt:
    def test_leading_digits(self):
        assert parse_int("72") == 72
        assert parse_int(" 8.5") == 8
        assert parse_int("12abc") == 12
        assert parse_int("-3") == -3

    def test_unusable_values(self):
        assert parse_int(None) == 0
        assert parse_int("") == 0
        assert parse_int("abc") == 0


class TestRounding:
    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(178.5) == 179
        assert round_half_up(-0.5) == 0
        assert round_half_up(179.2) == 179


class TestComputeMetrics:
    def test_second_half_example(self):
        """72-68 with 8:45 left in the 2nd half."""
        m = compute_metrics(72, 68, 2, "8:45")
        assert m.pace == 179
        assert m.projectedTotal == 179
        assert m.paceVsAverage == 109
        assert m.blowoutRisk == 0
        assert m.overUnderEdge == "OVER_LEAN"
        assert m.gameTempo == "HOT"

    def test_first_half_counts_second_half_as_remaining(self):
        m = compute_metrics(31, 29, 1, "4:12")
        # 60 pts in 15.8 min -> 151.9 per 40; 24.2 min still to play
        assert m.pace == 152
        assert m.projectedTotal == 152
        assert m.paceVsAverage == 82

    def test_no_time_elapsed_gives_zero_pace(self):
        m = compute_metrics(0, 0, 1, "20:00")
        assert m.pace == 0
        assert m.projectedTotal == 0
        assert m.paceVsAverage == -70
        assert m.gameTempo == "COLD"
        assert m.overUnderEdge == "UNDER_LEAN"

    def test_clock_longer_than_period_clamps_pace(self):
        m = compute_metrics(10, 8, 1, "25:00")
        assert m.pace == 0
        assert m.projectedTotal == 18

    def test_missing_clock_in_second_half_means_full_game_played(self):
        m = compute_metrics(35, 35, 2, None)
        assert m.pace == 70
        assert m.projectedTotal == 70
        assert m.paceVsAverage == 0
        assert m.gameTempo == "NEUTRAL"

    def test_idempotent(self):
        a = compute_metrics(72, 68, 2, "8:45")
        b = compute_metrics(72, 68, 2, "8:45")
        assert a == b

    def test_metrics_are_frozen(self):
        m = compute_metrics(72, 68, 2, "8:45")
        with pytest.raises(dataclasses.FrozenInstanceError):
            m.pace = 1

    @pytest.mark.parametrize(
        "home,away,period,clock",
        [
            (0, 0, 1, "20:00"),
            (2, 0, 1, "19:59"),
            (50, 48, 2, "0:00"),
            (100, 40, 3, "4:00"),
            (7, 3, 0, None),
            (60, 60, 1, "99:99"),
        ],
    )
    def test_bounds(self, home, away, period, clock):
        m = compute_metrics(home, away, period, clock)
        assert m.pace >= 0
        assert 0 <= m.blowoutRisk <= 100

    @pytest.mark.parametrize("score", [0, 41, 77])
    def test_tied_game_has_no_blowout_risk(self, score):
        assert compute_metrics(score, score, 2, "5:00").blowoutRisk == 0


class TestLabels:
    def test_over_under_thresholds(self):
        assert classify_over_under(141) == "OVER_LEAN"
        assert classify_over_under(140) == "NEUTRAL"
        assert classify_over_under(130) == "NEUTRAL"
        assert classify_over_under(129) == "UNDER_LEAN"

    def test_tempo_thresholds(self):
        assert classify_tempo(76, 6) == "HOT"
        assert classify_tempo(75, 5) == "NEUTRAL"
        assert classify_tempo(65, -5) == "NEUTRAL"
        assert classify_tempo(64, -6) == "COLD"

    def test_tempo_delta_trigger(self):
        policy = PacePolicy(hot_pace=200, cold_pace=0)
        assert classify_tempo(100, 11, policy) == "HOT"
        assert classify_tempo(50, -11, policy) == "COLD"

    def test_custom_policy_moves_over_line(self):
        assert compute_metrics(72, 68, 2, "8:45", PacePolicy(over_total=170)).overUnderEdge == "OVER_LEAN"
        assert compute_metrics(72, 68, 2, "8:45", PacePolicy(over_total=180)).overUnderEdge == "NEUTRAL"

    def test_average_pace_is_configurable(self):
        m = compute_metrics(72, 68, 2, "8:45", PacePolicy(average_pace=140))
        assert m.paceVsAverage == 39


class TestBlowoutRisk:
    def test_margin_within_fifteen(self):
        assert blowout_risk(80, 65) == 0
        assert blowout_risk(65, 80) == 0

    def test_each_point_past_margin_adds_five(self):
        assert blowout_risk(81, 65) == 5
        assert blowout_risk(90, 70) == 25

    def test_capped_at_hundred(self):
        assert blowout_risk(100, 50) == 100

    def test_negative_step_floors_at_zero(self):
        policy = PacePolicy(blowout_step=-5)
        assert blowout_risk(90, 50, policy) == 0
        assert compute_metrics(90, 50, 2, "5:00", policy).blowoutRisk == 0


def test_project_live_game_row_shape():
    game = {
        "gameId": "401",
        "homeTeam": "Duke Blue Devils",
        "awayTeam": "North Carolina Tar Heels",
        "homeScore": 72,
        "awayScore": 68,
        "period": 2,
        "clock": "8:45",
        "statusName": "STATUS_IN_PROGRESS",
        "statusDetail": "8:45 - 2nd Half",
    }
    row = project_live_game(game, DEFAULT_POLICY)
    assert row["clock"] == "8:45 - 2nd Half"
    assert row["pace"] == 179
    assert row["bettingInsights"] == {
        "paceVsAverage": 109,
        "overUnderEdge": "OVER_LEAN",
        "gameTempo": "HOT",
        "blowoutRisk": 0,
    }
