"""
Annual goals router - yearly objectives.

All endpoints require authentication. Goals are looked up by id and then
checked for ownership; a goal owned by someone else answers 404.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user
from app.models.annual_goal import AnnualGoal, AnnualGoalStatus
from app.models.user import User
from app.repositories.annual_goal_repository import AnnualGoalRepository
from app.schemas.annual_goal import AnnualGoalCreate, AnnualGoalOut, AnnualGoalUpdate

logger = logging.getLogger("chronos.routers.annual_goals")

router = APIRouter(prefix="/annual-goals", tags=["annual-goals"])


def get_goal_or_404(repo: AnnualGoalRepository, goal_id: UUID, user_id: UUID) -> AnnualGoal:
    goal = repo.find_by_id(goal_id)
    if goal is None or goal.user_id != user_id:
        if goal is not None:
            logger.warning(
                "Annual goal accessed by non-owner",
                extra={"goal_id": str(goal_id), "user_id": str(user_id)},
            )
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Annual goal not found",
        )
    return goal


@router.post("", response_model=AnnualGoalOut, status_code=status.HTTP_201_CREATED)
def create_annual_goal(
    payload: AnnualGoalCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    goal = AnnualGoal(
        user_id=current_user.id,
        title=payload.title,
        description=payload.description,
        year=payload.year,
        status=AnnualGoalStatus.ACTIVE.value,
    )
    return AnnualGoalRepository(db).create(goal)


@router.get("", response_model=List[AnnualGoalOut])
def list_annual_goals(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return AnnualGoalRepository(db).list_by_user(current_user.id)


@router.patch("/{goal_id}", response_model=AnnualGoalOut)
def update_annual_goal(
    goal_id: UUID,
    payload: AnnualGoalUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update only the fields present in the body."""
    repo = AnnualGoalRepository(db)
    goal = get_goal_or_404(repo, goal_id, current_user.id)

    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(goal, field, value.value if isinstance(value, AnnualGoalStatus) else value)

    return repo.update(goal)


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_annual_goal(
    goal_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    repo = AnnualGoalRepository(db)
    repo.delete(get_goal_or_404(repo, goal_id, current_user.id))
