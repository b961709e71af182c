import logging
from datetime import datetime
from typing import Callable

from models.notification import Notification, NotificationSettings
from services.alert_evaluator import evaluate
from services.budget_service import BudgetService
from services.notification_store import NotificationStore
from utils.date_helpers import current_month_year

logger = logging.getLogger(__name__)


class NotificationService:
    """What the banners, toasts and settings panel talk to."""

    def __init__(
        self,
        budget_service: BudgetService,
        store: NotificationStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._budget = budget_service
        self._store = store
        self._clock = clock

    def check_budget_alerts(self) -> list[Notification]:
        """Raise alerts for current-period budgets over their threshold.

        Returns only the alerts created by this call. A store failure while
        fetching budgets or spend, or while persisting the new alerts, is
        logged and yields no alerts.
        """
        settings = self._store.get_settings()
        if not settings.budget_alerts:
            return []

        now = self._clock()
        month, year = current_month_year(now.date())
        try:
            budgets = self._budget.get_current_budgets(month, year)
        except Exception:
            logger.exception("Error checking budget alerts for %s/%s", month, year)
            return []

        new_alerts = evaluate(
            budgets, settings, self._store.get_active(), month, year, now=now
        )
        if new_alerts:
            try:
                self._store.add(new_alerts)
            except Exception:
                logger.exception("Error saving budget alerts for %s/%s", month, year)
                return []
            for alert in new_alerts:
                logger.info("Budget alert (%s): %s", alert.severity, alert.message)
        return new_alerts

    def get_active_notifications(self) -> list[Notification]:
        return self._store.get_active()

    def get_all_notifications(self) -> list[Notification]:
        return self._store.get_all()

    def dismiss_notification(self, notification_id: str) -> None:
        self._store.dismiss(notification_id)

    def clear_all_notifications(self) -> int:
        return self._store.clear_all()

    def get_settings(self) -> NotificationSettings:
        return self._store.get_settings()

    def update_settings(self, partial: dict) -> NotificationSettings:
        settings = self._store.update_settings(partial)
        logger.info("Notification settings updated: %s", sorted(partial))
        return settings
