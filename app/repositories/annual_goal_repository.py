"""
Annual goal repository.
"""

import uuid

from sqlalchemy.orm import Session

from app.models.annual_goal import AnnualGoal


class AnnualGoalRepository:

    def __init__(self, db: Session):
        self.db = db

    def create(self, goal: AnnualGoal) -> AnnualGoal:
        self.db.add(goal)
        self.db.commit()
        self.db.refresh(goal)
        return goal

    def find_by_id(self, goal_id: uuid.UUID) -> AnnualGoal | None:
        return self.db.query(AnnualGoal).filter(AnnualGoal.id == goal_id).first()

    def list_by_user(self, user_id: uuid.UUID) -> list[AnnualGoal]:
        return (
            self.db.query(AnnualGoal)
            .filter(AnnualGoal.user_id == user_id)
            .order_by(AnnualGoal.year.desc(), AnnualGoal.created_at)
            .all()
        )

    def update(self, goal: AnnualGoal) -> AnnualGoal:
        self.db.add(goal)
        self.db.commit()
        self.db.refresh(goal)
        return goal

    def delete(self, goal: AnnualGoal) -> None:
        self.db.delete(goal)
        self.db.commit()
