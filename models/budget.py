from dataclasses import dataclass
from typing import Optional

from utils.metrics import budget_health, budget_status


@dataclass
class Budget:
    id: int
    category: str
    monthly_limit: float
    month: str                  # 'MM'
    year: int
    current_spent: float = 0.0  # derived from transactions, not authoritative
    alert_threshold: Optional[int] = None   # 0-100, overrides the global threshold
    name: str = ""

    @property
    def percentage(self) -> float:
        return budget_health(self.current_spent, self.monthly_limit)

    @property
    def status(self) -> str:
        return budget_status(self.current_spent, self.monthly_limit)

    @property
    def remaining(self) -> float:
        return self.monthly_limit - self.current_spent
