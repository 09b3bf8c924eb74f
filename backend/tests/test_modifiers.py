"""
Pure-unit tests for the auto-flagging and draft expectation policies.
"""

import pytest

from clb_retention.services.modifiers import AutoFlaggingPolicy, DraftExpectationPolicy


@pytest.fixture
def auto_flagging(retention_config):
    return AutoFlaggingPolicy(retention_config.auto_flag_tiers, log_firings=False)


@pytest.fixture
def draft_expectations(retention_config):
    return DraftExpectationPolicy(retention_config.draft_bands, log_firings=False)


class TestAutoFlagging:

    @pytest.mark.parametrize("standing,penalty", [(8, -4), (7, -4), (6, -2), (5, -2), (4, 0), (1, 0)])
    def test_elite_hitter_by_standing(self, auto_flagging, standing, penalty):
        assert auto_flagging.evaluate(80.0, standing).points == penalty

    def test_tier_two_only_band(self, auto_flagging):
        """60-75th percentile hitters only reach tier 2, even in last place."""
        assert auto_flagging.evaluate(65.0, 8).points == -2

    def test_below_threshold(self, auto_flagging):
        assert not auto_flagging.evaluate(59.9, 8).fired

    def test_tiers_mutually_exclusive(self, auto_flagging):
        outcome = auto_flagging.evaluate(99.0, 8)
        assert outcome.points == -4
        assert outcome.details == "Auto-Perf Mod: -4 pts (flight risk)"

    def test_requires_percentile_and_standing(self, auto_flagging):
        assert not auto_flagging.evaluate(None, 8).fired
        assert not auto_flagging.evaluate(90.0, None).fired
        assert not auto_flagging.evaluate(90.0, 0).fired

    def test_disabled(self, retention_config):
        policy = AutoFlaggingPolicy(retention_config.auto_flag_tiers, enabled=False)
        assert not policy.evaluate(90.0, 8).fired


class TestDraftExpectations:

    @pytest.mark.parametrize("cost,pct,points", [
        (1, 80, 2.5),
        (2, 40, -4.0),
        (2, 60, 0.0),
        (3, 80, -3.5),
        (5, 30, 2.0),
        (4, 50, 0.0),
        (6, 75, -5.0),
        (9, 39, 3.0),
        (7, 45, 0.0),
    ])
    def test_bands(self, draft_expectations, cost, pct, points):
        assert draft_expectations.evaluate(pct, cost).points == points

    def test_sign_inverts_between_early_and_late_picks(self, draft_expectations):
        early = draft_expectations.evaluate(90, 1).points
        late = draft_expectations.evaluate(90, 8).points
        assert early > 0 > late

    @pytest.mark.parametrize("cost", [None, "", "n/a", 0, -2, "keeper"])
    def test_unparseable_or_non_positive_cost(self, draft_expectations, cost):
        assert not draft_expectations.evaluate(90, cost).fired

    def test_cost_parsed_from_leading_digits(self, draft_expectations):
        assert draft_expectations.evaluate(90, "3rd round").points == -3.5
        assert draft_expectations.evaluate(90, 2.8).points == 2.5

    def test_details_are_signed(self, draft_expectations):
        assert draft_expectations.evaluate(90, 1).details == "Auto-Value Mod: +2.5 pts"
        assert draft_expectations.evaluate(10, 1).details == "Auto-Value Mod: -4.0 pts"

    def test_requires_offensive_percentile(self, draft_expectations):
        assert not draft_expectations.evaluate(None, 1).fired

    def test_band_for(self, draft_expectations):
        assert draft_expectations.band_for(2).label == "high"
        assert draft_expectations.band_for(5).label == "mid"
        assert draft_expectations.band_for(30).label == "late"
        assert draft_expectations.band_for(0) is None
