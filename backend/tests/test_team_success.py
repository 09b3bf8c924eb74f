"""
Tests for the team success factor and the postseason finish parser.
"""

import math

import pytest

from clb_retention.services.team_success import (
    CHAMPION,
    MISSED_PLAYOFFS,
    QUARTERFINAL,
    RUNNER_UP,
    SEMIFINAL,
    TeamSuccessCalculator,
    parse_postseason_finish,
)
from clb_retention.services.tiers import KeyedPoints
from conftest import build_player, build_team


class TestParsePostseasonFinish:

    @pytest.mark.parametrize("value,expected", [
        (1, CHAMPION),
        (2, RUNNER_UP),
        (3, SEMIFINAL),
        (4, SEMIFINAL),
        (5, QUARTERFINAL),
        (8, QUARTERFINAL),
        (9, MISSED_PLAYOFFS),
        (0, MISSED_PLAYOFFS),
        (2.9, RUNNER_UP),
    ])
    def test_numeric_placings(self, value, expected):
        assert parse_postseason_finish(value) == expected

    @pytest.mark.parametrize("value,expected", [
        ("Champion", CHAMPION),
        ("League Champions", CHAMPION),
        ("First", CHAMPION),
        ("Runner-Up", RUNNER_UP),
        ("lost in final (2nd)", RUNNER_UP),
        ("Semifinal Loss", SEMIFINAL),
        ("Quarterfinals", QUARTERFINAL),
        ("3 - lost semis", SEMIFINAL),
        ("6th", QUARTERFINAL),
    ])
    def test_text_finishes(self, value, expected):
        assert parse_postseason_finish(value) == expected

    @pytest.mark.parametrize("value", ["", "   ", None, "did not qualify", math.nan, True])
    def test_unrecognized_is_missed(self, value):
        assert parse_postseason_finish(value) == MISSED_PLAYOFFS


class TestTeamSuccessCalculator:

    def setup_method(self, method):
        self.teams = {
            "Mario Fireballs": build_team("Mario Fireballs"),
            "Yoshi Eggs": build_team("Yoshi Eggs"),
        }

    def _calculator(self, config):
        return TeamSuccessCalculator(config.standing_points, config.postseason_points)

    def test_first_place_champion(self, retention_config):
        calc = self._calculator(retention_config)
        result = calc.calculate(
            build_player(team="Mario Fireballs"),
            self.teams,
            {"Mario Fireballs": 1},
            {"Mario Fireballs": "Champion"},
        )
        assert result.regular_season == 10
        assert result.postseason == 10
        assert result.total == 20
        assert result.details == "Reg: 10.0 pts (1st place), Post: 10.0 pts"

    def test_semifinal_string_and_number_agree(self, retention_config):
        calc = self._calculator(retention_config)
        assert calc.postseason_points_for("Semifinal Loss") == 5.0
        assert calc.postseason_points_for(4) == 5.0
        assert calc.postseason_points_for("") == 0.0

    def test_standing_table(self, retention_config):
        calc = self._calculator(retention_config)
        expected = {1: 10, 2: 6.25, 3: 6.25, 4: 5, 5: 3.75, 6: 2.5, 7: 2.5, 8: 0}
        for standing, points in expected.items():
            result = calc.calculate(build_player(), self.teams, {"Mario Fireballs": standing}, {})
            assert result.regular_season == points

    def test_no_standing_data(self, retention_config):
        result = self._calculator(retention_config).calculate(build_player(), self.teams, {}, {})
        assert result.total == 0
        assert result.details == "Reg: No standing data, Post: 0 pts"

    def test_unknown_standing_scores_zero(self, retention_config):
        result = self._calculator(retention_config).calculate(
            build_player(), self.teams, {"Mario Fireballs": 11}, {}
        )
        assert result.regular_season == 0
        assert "11th place" in result.details

    def test_team_not_found(self, retention_config):
        calc = self._calculator(retention_config)
        result = calc.calculate(build_player(team="Bowser Monarchs"), self.teams, {}, {})
        assert result.total == 0
        assert result.details == "Team not found"

        teamless = calc.calculate(build_player(team=None), self.teams, {}, {})
        assert teamless.details == "Team not found"

    def test_total_not_clamped(self, retention_config):
        calc = TeamSuccessCalculator(
            KeyedPoints.from_mapping("standing", {1: 15}),
            retention_config.postseason_points,
        )
        result = calc.calculate(build_player(), self.teams, {"Mario Fireballs": 1}, {"Mario Fireballs": 1})
        assert result.total == 25
