from dataclasses import dataclass
from datetime import datetime

from utils.metrics import goal_progress, is_overdue


@dataclass
class Goal:
    id: int
    name: str
    target_amount: float
    current_amount: float
    deadline: str           # 'YYYY-MM-DD'
    created_at: str = ""

    @property
    def progress(self) -> float:
        return goal_progress(self.current_amount, self.target_amount)

    @property
    def is_complete(self) -> bool:
        return self.current_amount >= self.target_amount

    def is_overdue(self, now: datetime | None = None) -> bool:
        """Past the deadline without reaching the target."""
        return not self.is_complete and is_overdue(self.deadline, now)
