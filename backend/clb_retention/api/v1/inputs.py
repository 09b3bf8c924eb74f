from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clb_retention.database import get_db
from clb_retention.models import PlayerRetentionInput, TeamRetentionInput
from clb_retention.schemas.retention import (
    PlayerInputResponse,
    PlayerInputUpdate,
    TeamInputResponse,
    TeamInputUpdate,
)
from clb_retention.utils import normalize_name

router = APIRouter()


def _text_or_none(value) -> Optional[str]:
    return None if value is None else str(value).strip() or None


async def _get_player_input(db: AsyncSession, player_name: str):
    result = await db.execute(
        select(PlayerRetentionInput).where(PlayerRetentionInput.player_name == player_name)
    )
    return result.scalar_one_or_none()


async def _get_team_input(db: AsyncSession, team_name: str):
    result = await db.execute(
        select(TeamRetentionInput).where(TeamRetentionInput.team_name == team_name)
    )
    return result.scalar_one_or_none()


@router.get("/players", response_model=List[PlayerInputResponse])
async def list_player_inputs(db: AsyncSession = Depends(get_db)):
    """List saved player inputs."""
    result = await db.execute(
        select(PlayerRetentionInput).order_by(PlayerRetentionInput.player_name)
    )
    return result.scalars().all()


@router.get("/players/{player_name}", response_model=PlayerInputResponse)
async def get_player_input(player_name: str, db: AsyncSession = Depends(get_db)):
    row = await _get_player_input(db, player_name)
    if not row:
        raise HTTPException(status_code=404, detail="Player input not found")
    return row


@router.put("/players/{player_name}", response_model=PlayerInputResponse)
async def upsert_player_input(
    player_name: str,
    update: PlayerInputUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Create or replace the saved inputs for a player."""
    row = await _get_player_input(db, player_name)
    if row is None:
        row = PlayerRetentionInput(
            player_name=player_name,
            normalized_name=normalize_name(player_name),
        )
        db.add(row)

    row.draft_value = _text_or_none(update.draft_value)
    row.chemistry = update.chemistry
    row.team_success_modifier = update.team_success_modifier
    row.play_time_modifier = update.play_time_modifier
    row.performance_modifier = update.performance_modifier

    await db.commit()
    await db.refresh(row)
    return row


@router.delete("/players/{player_name}")
async def delete_player_input(player_name: str, db: AsyncSession = Depends(get_db)):
    row = await _get_player_input(db, player_name)
    if not row:
        raise HTTPException(status_code=404, detail="Player input not found")
    await db.delete(row)
    await db.commit()
    return {"message": f"Removed inputs for {player_name}"}


@router.get("/teams", response_model=List[TeamInputResponse])
async def list_team_inputs(db: AsyncSession = Depends(get_db)):
    """List saved team inputs."""
    result = await db.execute(
        select(TeamRetentionInput).order_by(TeamRetentionInput.team_name)
    )
    return result.scalars().all()


@router.get("/teams/{team_name}", response_model=TeamInputResponse)
async def get_team_input(team_name: str, db: AsyncSession = Depends(get_db)):
    row = await _get_team_input(db, team_name)
    if not row:
        raise HTTPException(status_code=404, detail="Team input not found")
    return row


@router.put("/teams/{team_name}", response_model=TeamInputResponse)
async def upsert_team_input(
    team_name: str,
    update: TeamInputUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Create or replace the saved direction score and postseason finish for a team."""
    row = await _get_team_input(db, team_name)
    if row is None:
        row = TeamRetentionInput(team_name=team_name)
        db.add(row)

    row.direction = update.direction
    row.postseason_finish = _text_or_none(update.postseason_finish)

    await db.commit()
    await db.refresh(row)
    return row


@router.delete("/teams/{team_name}")
async def delete_team_input(team_name: str, db: AsyncSession = Depends(get_db)):
    row = await _get_team_input(db, team_name)
    if not row:
        raise HTTPException(status_code=404, detail="Team input not found")
    await db.delete(row)
    await db.commit()
    return {"message": f"Removed inputs for {team_name}"}
