from dataclasses import dataclass
from typing import Optional


@dataclass
class Transaction:
    id: int
    type: str               # 'income' | 'expense'
    amount: float           # magnitude; sign comes from type
    category: str
    description: str
    date: str               # 'YYYY-MM-DD'
    is_recurring: bool = False
    frequency: Optional[str] = None     # 'daily' | 'weekly' | 'monthly' | 'yearly'
    is_active: bool = True
    next_occurrence_date: Optional[str] = None
    end_date: Optional[str] = None
    created_at: str = ""

    @property
    def signed_amount(self) -> float:
        magnitude = abs(self.amount)
        return magnitude if self.type == "income" else -magnitude
