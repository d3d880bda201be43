"""/v1/achievements - list and unlock achievements"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from finx_gateway.api.v1.schemas import AchievementSchema
from finx_gateway.api.dependencies import get_request_id
from finx_gateway.infrastructure.database.session import get_db
from finx_gateway.infrastructure.database.repositories import StateRepository
from finx_gateway.domain.exceptions import AchievementNotFoundError
from finx_gateway.domain.models import Achievement

router = APIRouter()


def _to_schema(achievement: Achievement) -> AchievementSchema:
    return AchievementSchema(
        id=achievement.id,
        name=achievement.name,
        description=achievement.description,
        unlocked=achievement.unlocked,
        unlocked_at=achievement.unlocked_at,
    )


@router.get("/achievements", response_model=List[AchievementSchema])
def list_achievements(db: Session = Depends(get_db)):
    session = StateRepository(db).load_session()
    return [_to_schema(a) for a in session.achievements]


@router.post("/achievements/{achievement_id}/unlock", response_model=AchievementSchema)
def unlock(achievement_id: str, request: Request, db: Session = Depends(get_db)):
    """Unlock an achievement; unlocking twice keeps the first timestamp"""
    repo = StateRepository(db)
    session = repo.load_session()
    try:
        achievement = session.unlock(achievement_id)
    except AchievementNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    repo.save_session(session)
    db.commit()

    logging.info(
        "Achievement unlocked",
        extra={"request_id": get_request_id(request), "step": "unlock", "achievement_id": achievement_id},
    )
    return _to_schema(achievement)
