from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App settings
    app_name: str = "CLB Retention Grades"
    debug: bool = False

    # Database (manual inputs only: draft values, modifiers, chemistry, direction)
    database_url: str = "sqlite+aiosqlite:///./retention.db"

    # Factor weights (must sum to 1.0)
    weight_team_success: float = 0.18
    weight_play_time: float = 0.32
    weight_performance: float = 0.17
    weight_chemistry: float = 0.12
    weight_direction: float = 0.21

    # Every factor is scored 0-20 before weighting
    factor_max_points: float = 20.0

    # Weighted 0-20 composite -> published 5-95 scale
    grade_scale_factor: float = 4.5
    grade_offset: float = 5.0

    # Grade bands (lower bound of each band)
    grade_band_excellent: int = 70
    grade_band_good: int = 55
    grade_band_average: int = 40

    # League context
    nominal_season_games: float = 14   # Used when no team has recorded games
    innings_per_game: int = 7          # 7-inning games, used by ERA

    # Qualification (scaled by average team games played)
    min_ab_multiplier: float = 2.1
    min_ip_multiplier: float = 1.0
    min_gp_fraction: float = 0.5

    # Pitcher classification for the play-time usage fallback
    pitcher_min_innings: float = 5.0

    # Teamless players skew every percentile pool when included
    include_players_without_teams: bool = False

    # Team success
    regular_season_max_points: float = 10.0
    standing_points: dict = {
        1: 10, 2: 6.25, 3: 6.25, 4: 5,
        5: 3.75, 6: 2.5, 7: 2.5, 8: 0,
    }
    postseason_max_points: float = 10.0
    postseason_points: dict = {
        "champion": 10, "runner_up": 7.5, "semifinal": 5,
        "quarterfinal": 2.5, "missed_playoffs": 0,
    }

    # Play time: share of the current team's games
    games_played_tiers: list[dict] = [
        {"label": "full_time", "threshold": 0.85, "points": 10},
        {"label": "regular", "threshold": 0.70, "points": 7.5},
        {"label": "rotation", "threshold": 0.50, "points": 5},
        {"label": "bench", "threshold": 0.25, "points": 2.5},
        {"label": "minimal", "threshold": 0, "points": 0},
    ]

    # Play time: average batting-order slot (lower is better)
    lineup_position_tiers: list[dict] = [
        {"label": "top_three", "threshold": 3.0, "points": 10},
        {"label": "four_five", "threshold": 5.0, "points": 6},
        {"label": "six_seven", "threshold": 7.0, "points": 4},
        {"label": "eight_nine", "threshold": 9.0, "points": 1},
        {"label": "bench", "threshold": 999, "points": 0},
    ]

    # Play time fallback for hitters: AB per game played
    at_bats_per_game_tiers: list[dict] = [
        {"label": "top_three", "threshold": 3.5, "points": 10},
        {"label": "four_five", "threshold": 3.0, "points": 6},
        {"label": "six_seven", "threshold": 2.5, "points": 4},
        {"label": "eight_nine", "threshold": 1.5, "points": 1},
        {"label": "bench", "threshold": 0, "points": 0},
    ]

    # Play time fallback for pitchers: IP per team game
    pitching_usage_tiers: list[dict] = [
        {"label": "ace", "threshold": 2.5, "points": 10},
        {"label": "starter", "threshold": 1.8, "points": 7.5},
        {"label": "swingman", "threshold": 1.2, "points": 5},
        {"label": "reliever", "threshold": 0.6, "points": 2.5},
        {"label": "mop_up", "threshold": 0, "points": 0},
    ]

    # Performance: average offensive percentile (0-14)
    offensive_tiers: list[dict] = [
        {"label": "elite", "threshold": 90, "points": 14},
        {"label": "excellent", "threshold": 75, "points": 12},
        {"label": "above_avg", "threshold": 60, "points": 10},
        {"label": "good", "threshold": 50, "points": 8},
        {"label": "average", "threshold": 40, "points": 6},
        {"label": "below_avg", "threshold": 25, "points": 4},
        {"label": "poor", "threshold": 10, "points": 2},
        {"label": "terrible", "threshold": 0, "points": 0},
    ]

    # Performance: net defense percentile (0-3)
    defensive_tiers: list[dict] = [
        {"label": "gold_glove", "threshold": 90, "points": 3},
        {"label": "excellent", "threshold": 75, "points": 2.5},
        {"label": "strong", "threshold": 60, "points": 2},
        {"label": "solid", "threshold": 40, "points": 1.5},
        {"label": "neutral", "threshold": 25, "points": 1},
        {"label": "below_avg", "threshold": 10, "points": 0.5},
        {"label": "poor", "threshold": 0, "points": 0},
    ]

    # Performance: inverted ERA/WHIP/BAA percentile (0-3)
    pitching_tiers: list[dict] = [
        {"label": "cy_young", "threshold": 90, "points": 3},
        {"label": "excellent", "threshold": 75, "points": 2.5},
        {"label": "strong", "threshold": 60, "points": 2},
        {"label": "good", "threshold": 50, "points": 1.5},
        {"label": "average", "threshold": 40, "points": 1},
        {"label": "below_avg", "threshold": 25, "points": 0.5},
        {"label": "poor", "threshold": 0, "points": 0},
    ]

    # Auto-flagging: strong hitters on weak teams (checked in order, first match wins)
    auto_flagging_enabled: bool = True
    auto_flag_tiers: list[dict] = [
        {"label": "tier_1", "percentile": 75, "standing_min": 7, "standing_max": 8, "penalty": -4},
        {"label": "tier_2", "percentile": 60, "standing_min": 5, "standing_max": 8, "penalty": -2},
    ]

    # Draft expectations: acquisition round vs offensive percentile.
    # "situation" bands reward overperformance, "self_worth" bands penalize it.
    draft_expectations_enabled: bool = True
    draft_bands: list[dict] = [
        {"label": "high", "min_round": 1, "max_round": 2, "framing": "situation",
         "high_percentile": 75, "high_mod": 2.5, "low_percentile": 50, "low_mod": -4.0},
        {"label": "mid", "min_round": 3, "max_round": 5, "framing": "self_worth",
         "high_percentile": 75, "high_mod": -3.5, "low_percentile": 50, "low_mod": 2.0},
        {"label": "late", "min_round": 6, "max_round": None, "framing": "self_worth",
         "high_percentile": 75, "high_mod": -5.0, "low_percentile": 40, "low_mod": 3.0},
    ]

    # Logging
    log_auto_flagging: bool = True
    log_draft_expectations: bool = True
    log_progress_every: int = 20

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "RETENTION_"


settings = Settings()
