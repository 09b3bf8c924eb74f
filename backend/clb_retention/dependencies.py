"""
FastAPI Dependency Injection Container

Provides singleton instances of services to avoid recreating them on every request.
Services are lazy-initialized on first access.
"""
from typing import Optional

from clb_retention.config import settings
from clb_retention.services.retention_config import RetentionConfig
from clb_retention.services.retention_engine import RetentionEngine
from clb_retention.services.standings import StandingsCalculator


class ServiceContainer:
    """
    Container for singleton service instances.
    Services are lazily initialized on first access.
    """

    _retention_config: Optional[RetentionConfig] = None
    _retention_engine: Optional[RetentionEngine] = None
    _standings_calculator: Optional[StandingsCalculator] = None

    @classmethod
    def get_retention_config(cls) -> RetentionConfig:
        """Resolve and validate settings once. Raises ConfigurationError."""
        if cls._retention_config is None:
            cls._retention_config = RetentionConfig.from_settings(settings)
        return cls._retention_config

    @classmethod
    def get_retention_engine(cls) -> RetentionEngine:
        """Get or create the RetentionEngine singleton."""
        if cls._retention_engine is None:
            cls._retention_engine = RetentionEngine(cls.get_retention_config())
        return cls._retention_engine

    @classmethod
    def get_standings_calculator(cls) -> StandingsCalculator:
        if cls._standings_calculator is None:
            cls._standings_calculator = StandingsCalculator()
        return cls._standings_calculator

    @classmethod
    def reset(cls) -> None:
        """Reset all singleton instances. Useful for testing."""
        cls._retention_config = None
        cls._retention_engine = None
        cls._standings_calculator = None


# FastAPI dependency functions
def get_retention_config() -> RetentionConfig:
    return ServiceContainer.get_retention_config()


def get_retention_engine() -> RetentionEngine:
    """
    FastAPI dependency for RetentionEngine.

    Usage:
        @router.post("/grades")
        async def grades(engine: RetentionEngine = Depends(get_retention_engine)):
            ...
    """
    return ServiceContainer.get_retention_engine()


def get_standings_calculator() -> StandingsCalculator:
    return ServiceContainer.get_standings_calculator()
