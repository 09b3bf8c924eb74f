"""
Tests for league stat pool construction.
"""

import pytest

from clb_retention.services.qualification import QualificationThresholds
from clb_retention.services.stat_pool import StatCategory, build_league_stat_pool
from conftest import build_player


THRESHOLDS = QualificationThresholds(avg_team_games=14, min_at_bats=29.4, min_innings=14.0, min_games=7.0)


class TestBuildLeagueStatPool:

    def test_only_qualified_hitters_enter_offensive_pools(self):
        players = [
            build_player("Qualified", at_bats=30, hits=10),
            build_player("Short", at_bats=29, hits=29),
        ]
        pool = build_league_stat_pool(players, THRESHOLDS)
        assert pool.values(StatCategory.AVG) == pytest.approx((1 / 3,))
        assert pool.size(StatCategory.HR) == 1

    def test_pools_sorted_ascending(self):
        players = [
            build_player("A", hits=15, home_runs=5),
            build_player("B", hits=9, home_runs=1),
            build_player("C", hits=12, home_runs=3),
        ]
        pool = build_league_stat_pool(players, THRESHOLDS)
        assert pool.values(StatCategory.HR) == (1, 3, 5)
        avgs = pool.values(StatCategory.AVG)
        assert list(avgs) == sorted(avgs)

    def test_pitching_pools_use_innings_per_game(self):
        pitcher = build_player(
            "Ace", innings=14.0, runs_allowed=6, hits_allowed=14,
            walks_allowed=7, batters_faced=70,
        )
        pool = build_league_stat_pool([pitcher], THRESHOLDS, innings_per_game=7)
        assert pool.values(StatCategory.ERA) == pytest.approx((3.0,))
        assert pool.values(StatCategory.WHIP) == pytest.approx((1.5,))
        assert pool.values(StatCategory.OPPONENT_AVG) == pytest.approx((0.2,))

        nine = build_league_stat_pool([pitcher], THRESHOLDS, innings_per_game=9)
        assert nine.values(StatCategory.ERA) == pytest.approx((6 * 9 / 14,))

    def test_unqualified_pitcher_excluded(self):
        pool = build_league_stat_pool([build_player("Mop", innings=5.0)], THRESHOLDS)
        assert pool.size(StatCategory.ERA) == 0

    def test_net_defense_requires_fielding_games(self):
        players = [
            build_player("Glove", fielding_games=10, nice_plays=6, errors=1),
            build_player("Bench", fielding_games=6, nice_plays=5),
            build_player("Never", fielding_games=0),
        ]
        pool = build_league_stat_pool(players, THRESHOLDS)
        assert pool.values(StatCategory.NET_DEFENSE) == pytest.approx((0.5,))

    def test_teamless_players_excluded_by_default(self):
        players = [build_player("Free Agent", team=None), build_player("Blank", team="  ")]
        pool = build_league_stat_pool(players, THRESHOLDS)
        assert all(size == 0 for size in pool.sizes().values())

        included = build_league_stat_pool(players, THRESHOLDS, include_players_without_teams=True)
        assert included.size(StatCategory.AVG) == 2

    def test_sizes_cover_every_category(self):
        pool = build_league_stat_pool([], THRESHOLDS)
        assert set(pool.sizes()) == {c.value for c in StatCategory}
        assert len(pool.sizes()) == 10

    def test_pools_are_immutable(self):
        pool = build_league_stat_pool([build_player()], THRESHOLDS)
        with pytest.raises(TypeError):
            pool.pools[StatCategory.AVG] = (1.0,)
