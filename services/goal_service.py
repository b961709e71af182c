import logging
from datetime import datetime

from models.goal import Goal
from database.goal_dao import GoalDAO
from utils.date_helpers import parse_date, today_str

logger = logging.getLogger(__name__)


class GoalService:
    def __init__(self, goal_dao: GoalDAO):
        self._dao = goal_dao

    def get_all(self) -> list[Goal]:
        return self._dao.get_all(order_by="deadline")

    def get_by_id(self, goal_id: int) -> Goal:
        return self._dao.get_by_id(goal_id)

    def create(
        self,
        name: str,
        target_amount: float,
        deadline: str,
        current_amount: float = 0.0,
    ) -> Goal:
        name = name.strip()
        self._validate(name, target_amount, deadline)
        if current_amount < 0:
            raise ValueError("Current amount cannot be negative.")
        return self._dao.create(
            name=name, target_amount=float(target_amount),
            current_amount=float(current_amount), deadline=deadline,
            created_at=today_str(),
        )

    def update(self, goal_id: int, name: str, target_amount: float, deadline: str) -> Goal:
        """Edit a goal's definition. Saved amounts only change through add_funds."""
        name = name.strip()
        self._validate(name, target_amount, deadline)
        return self._dao.update(
            goal_id, name=name, target_amount=float(target_amount), deadline=deadline,
        )

    def delete(self, goal_id: int):
        self._dao.delete(goal_id)

    def add_funds(self, goal_id: int, amount: float) -> Goal:
        if amount is None or amount <= 0:
            raise ValueError("Please enter a valid amount.")
        goal = self._dao.get_by_id(goal_id)
        updated = self._dao.update(goal_id, current_amount=goal.current_amount + float(amount))
        logger.info("Added %.2f to goal %s", amount, goal.name)
        return updated

    def get_completed(self) -> list[Goal]:
        return [g for g in self.get_all() if g.is_complete]

    def get_active(self) -> list[Goal]:
        return [g for g in self.get_all() if not g.is_complete]

    def get_overdue(self, now: datetime | None = None) -> list[Goal]:
        return [g for g in self.get_all() if g.is_overdue(now)]

    @staticmethod
    def _validate(name, target_amount, deadline):
        if not name:
            raise ValueError("Goal name cannot be empty.")
        if target_amount <= 0:
            raise ValueError("Target amount must be positive.")
        if not parse_date(deadline):
            raise ValueError("Invalid deadline.")
