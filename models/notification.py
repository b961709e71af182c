from dataclasses import asdict, dataclass, field, fields
from typing import Optional

from utils.constants import DEFAULT_NOTIFICATION_SETTINGS


@dataclass
class Notification:
    id: str
    budget_id: int
    category: str
    message: str
    description: str
    severity: str           # 'info' | 'warning' | 'error'
    timestamp: str          # ISO 8601
    month: str              # 'MM'
    year: int
    type: str = "budget_alert"
    dismissed: bool = False
    dismissed_at: Optional[str] = None
    data: dict = field(default_factory=dict)   # current_spent, monthly_limit, percentage, remaining

    @property
    def is_active(self) -> bool:
        return not self.dismissed

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict) -> "Notification":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in raw.items() if k in known})


@dataclass
class NotificationSettings:
    budget_alerts: bool = DEFAULT_NOTIFICATION_SETTINGS["budget_alerts"]
    threshold: int = DEFAULT_NOTIFICATION_SETTINGS["threshold"]
    email_notifications: bool = DEFAULT_NOTIFICATION_SETTINGS["email_notifications"]
    push_notifications: bool = DEFAULT_NOTIFICATION_SETTINGS["push_notifications"]

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict) -> "NotificationSettings":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in raw.items() if k in known})
