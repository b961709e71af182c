from dataclasses import dataclass


@dataclass
class Category:
    id: int
    name: str
    type: str           # 'income' | 'expense'
    color: str = "#888888"
    is_default: bool = False
