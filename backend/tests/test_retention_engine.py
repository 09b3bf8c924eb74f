"""
End-to-end tests for a full retention grading run (no DB).
"""

import pytest

from clb_retention.schemas.season import BoxScoreLineup
from clb_retention.services.retention_engine import (
    PlayerManualInputs,
    RetentionEngine,
    TeamManualInputs,
)
from conftest import build_player, build_team


@pytest.fixture
def engine(retention_config):
    return RetentionEngine(retention_config)


@pytest.fixture
def league():
    teams = [
        build_team("Mario Fireballs", wins=12, losses=2, runs_scored=110, runs_allowed=60),
        build_team("Yoshi Eggs", wins=8, losses=6, runs_scored=80, runs_allowed=75),
        build_team("Wario Muscles", wins=5, losses=9, runs_scored=65, runs_allowed=85),
        build_team("Bowser Monarchs", wins=3, losses=11, runs_scored=50, runs_allowed=85),
    ]
    players = [
        build_player("Mario", "Mario Fireballs", hits=18, home_runs=5, rbi=15, total_bases=34),
        build_player("Luigi", "Mario Fireballs", hits=12, home_runs=1, rbi=7, total_bases=17),
        build_player("Yoshi", "Yoshi Eggs", hits=14, home_runs=2, rbi=9, total_bases=22),
        build_player("Wario", "Wario Muscles", hits=11, home_runs=3, rbi=10, total_bases=20),
        build_player("Bowser", "Bowser Monarchs", hits=20, home_runs=7, rbi=18, total_bases=40),
        build_player("Dry Bones", "Bowser Monarchs", hits=6, home_runs=0, rbi=2, total_bases=7,
                     innings=30.0, runs_allowed=12, hits_allowed=25, walks_allowed=8,
                     batters_faced=130),
        build_player("Free Agent", None, hits=30, home_runs=9, total_bases=60),
    ]
    return players, teams


def _by_name(run):
    return {g.player_name: g for g in run.grades}


class TestComputeGrades:

    def test_grades_sorted_by_team_then_name(self, engine, league):
        players, teams = league
        run = engine.compute_grades(players, teams)
        keys = [(g.team, g.player_name) for g in run.grades]
        assert keys == sorted(keys)

    def test_teamless_players_not_graded(self, engine, league):
        players, teams = league
        run = engine.compute_grades(players, teams)
        assert "Free Agent" not in _by_name(run)
        assert len(run.grades) == 6
        # Nor do they enter the pools
        assert run.pool_sizes["avg"] == 6

    def test_standings_computed_when_omitted(self, engine, league):
        players, teams = league
        run = engine.compute_grades(players, teams)
        assert run.standings == {
            "Mario Fireballs": 1, "Yoshi Eggs": 2, "Wario Muscles": 3, "Bowser Monarchs": 4,
        }
        assert _by_name(run)["Mario"].team_success.regular_season == 10

    def test_supplied_standings_win(self, engine, league):
        players, teams = league
        run = engine.compute_grades(players, teams, standings={"Bowser Monarchs": 1})
        grades = _by_name(run)
        assert grades["Bowser"].team_success.regular_season == 10
        assert grades["Mario"].team_success.details.startswith("Reg: No standing data")

    def test_thresholds_from_team_games(self, engine, league):
        players, teams = league
        run = engine.compute_grades(players, teams)
        assert run.thresholds.avg_team_games == 14
        assert run.thresholds.min_at_bats == pytest.approx(29.4)

    def test_details_combine_all_three_factors(self, engine, league):
        players, teams = league
        grade = _by_name(engine.compute_grades(players, teams))["Mario"]
        assert grade.details.startswith("Success: Reg: 10.0 pts (1st place)")
        assert " | Time: GP: " in grade.details
        assert " | Performance: Hit: " in grade.details

    def test_auto_total_is_raw_factor_sum(self, engine, league):
        players, teams = league
        grade = _by_name(engine.compute_grades(players, teams))["Yoshi"]
        assert grade.auto_total == pytest.approx(
            grade.team_success.total + grade.play_time.total + grade.performance.total
        )

    def test_best_hitter_on_last_place_team_is_flagged(self, engine, league):
        players, teams = league
        run = engine.compute_grades(players, teams, standings={"Bowser Monarchs": 8})
        grade = _by_name(run)["Bowser"]
        assert grade.performance.offensive_percentile >= 75
        assert grade.performance.auto_flag_penalty == -4


class TestManualInputs:

    def test_modifiers_added_then_clamped(self, engine, league):
        players, teams = league
        run = engine.compute_grades(
            players, teams,
            postseason={"Mario Fireballs": "Champion"},
            player_inputs={"Mario": PlayerManualInputs(
                team_success_modifier=5, play_time_modifier=-30, chemistry=25,
            )},
        )
        grade = _by_name(run)["Mario"]
        assert grade.team_success.total == 20
        assert grade.team_success_total == 20
        assert grade.play_time_total == 0
        assert grade.chemistry == 20
        assert grade.team_success_modifier == 5

    def test_final_grade_uses_clamped_totals(self, engine, league):
        players, teams = league
        run = engine.compute_grades(
            players, teams,
            player_inputs={"Luigi": PlayerManualInputs(chemistry=12)},
            team_inputs={"Mario Fireballs": TeamManualInputs(direction=16)},
        )
        grade = _by_name(run)["Luigi"]
        expected = engine.combiner.combine(
            grade.team_success_total, grade.play_time_total, grade.performance_total, 12, 16
        )
        assert grade.final_grade == expected
        assert grade.manual_total == engine.combiner.manual_total(12, 16)
        assert grade.grade_band == engine.combiner.grade_band(expected)
        assert 5 <= grade.final_grade <= 95

    def test_team_input_postseason_and_request_override(self, engine, league):
        players, teams = league
        team_inputs = {"Yoshi Eggs": TeamManualInputs(postseason_finish="Semifinal Loss")}

        run = engine.compute_grades(players, teams, team_inputs=team_inputs)
        assert _by_name(run)["Yoshi"].team_success.postseason == 5

        run = engine.compute_grades(
            players, teams, postseason={"Yoshi Eggs": 2}, team_inputs=team_inputs
        )
        assert _by_name(run)["Yoshi"].team_success.postseason == 7.5

    def test_draft_value_drives_expectation_modifier(self, engine, league):
        players, teams = league
        run = engine.compute_grades(
            players, teams, player_inputs={"Luigi": PlayerManualInputs(draft_value="1")}
        )
        grade = _by_name(run)["Luigi"]
        assert grade.draft_value == "1"
        assert grade.performance.expectation_mod == -4.0


class TestLineupData:

    def test_box_scores_feed_play_time(self, engine, league):
        players, teams = league
        box_scores = [
            BoxScoreLineup(
                away_team="Mario Fireballs", home_team="Yoshi Eggs",
                away_lineup=["Mario", "Luigi"], home_lineup=["Yoshi"],
            )
            for _ in range(13)
        ]
        run = engine.compute_grades(players, teams, box_scores=box_scores)
        grades = _by_name(run)
        assert "Lineup: 1.0 spot" in grades["Mario"].play_time.details
        assert grades["Mario"].play_time.games_played == 10  # 13/14
        # No lineup entry: falls back to hitting games and AB/G
        assert "no lineup data" in grades["Wario"].play_time.details
