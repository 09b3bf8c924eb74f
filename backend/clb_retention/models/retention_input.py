from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import String, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from clb_retention.database import Base


class PlayerRetentionInput(Base):
    """Human-entered retention inputs for one player, kept across recalculations."""
    __tablename__ = "player_retention_inputs"

    id: Mapped[int] = mapped_column(primary_key=True)
    player_name: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    normalized_name: Mapped[str] = mapped_column(String(100), index=True)

    # Acquisition cost as entered ("2", "3rd round", ...); parsed at grading time
    draft_value: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    chemistry: Mapped[float] = mapped_column(Float, default=0.0)  # 0-20

    # Added to the automatic factor totals before clamping to 0-20
    team_success_modifier: Mapped[float] = mapped_column(Float, default=0.0)
    play_time_modifier: Mapped[float] = mapped_column(Float, default=0.0)
    performance_modifier: Mapped[float] = mapped_column(Float, default=0.0)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class TeamRetentionInput(Base):
    """Human-entered retention inputs for one team."""
    __tablename__ = "team_retention_inputs"

    id: Mapped[int] = mapped_column(primary_key=True)
    team_name: Mapped[str] = mapped_column(String(100), unique=True, index=True)

    direction: Mapped[float] = mapped_column(Float, default=0.0)  # 0-20
    postseason_finish: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
