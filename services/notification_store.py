import json
import logging
from datetime import datetime
from typing import Callable

from models.notification import Notification, NotificationSettings
from utils.constants import NOTIFICATION_SETTINGS_KEY, NOTIFICATIONS_KEY
from utils.date_helpers import to_datetime

logger = logging.getLogger(__name__)


class NotificationStore:
    """Alert log and notification settings, persisted through a key-value store.

    Alerts move one way only: active -> dismissed. Call ``load()`` before use
    and ``close()`` on shutdown.
    """

    def __init__(self, kv_store, clock: Callable[[], datetime] = datetime.now):
        self._kv = kv_store
        self._clock = clock
        self._alerts: list[Notification] = []
        self._settings = NotificationSettings()
        self._loaded = False
        self._closed = False

    # ── Lifecycle ────────────────────────────────────────────────────────────
    def load(self) -> "NotificationStore":
        records = self._read_json(NOTIFICATIONS_KEY, [])
        if not isinstance(records, list):
            logger.warning("Discarding %s data that is not a list", NOTIFICATIONS_KEY)
            records = []
        self._alerts = []
        for raw in records:
            try:
                self._alerts.append(Notification.from_dict(raw))
            except (TypeError, ValueError, AttributeError):
                logger.warning("Skipping unreadable notification record: %r", raw)
        raw_settings = self._read_json(NOTIFICATION_SETTINGS_KEY, {})
        self._settings = NotificationSettings.from_dict(
            raw_settings if isinstance(raw_settings, dict) else {}
        )
        self._loaded = True
        self._closed = False
        return self

    def close(self) -> None:
        if self._loaded and not self._closed:
            self._save_alerts()
            self._save_settings()
        self._closed = True

    def _read_json(self, key: str, default):
        raw = self._kv.get(key)
        if not raw:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable %s data", key)
            return default

    def _check_open(self):
        if self._closed:
            raise RuntimeError("NotificationStore is closed.")
        if not self._loaded:
            self.load()

    def _save_alerts(self):
        self._kv.set(NOTIFICATIONS_KEY, json.dumps([a.to_dict() for a in self._alerts]))

    def _save_settings(self):
        self._kv.set(NOTIFICATION_SETTINGS_KEY, json.dumps(self._settings.to_dict()))

    # ── Alerts ───────────────────────────────────────────────────────────────
    def get_active(self) -> list[Notification]:
        self._check_open()
        return [a for a in self._alerts if not a.dismissed]

    def get_all(self) -> list[Notification]:
        """Every alert, newest timestamp first."""
        self._check_open()
        return sorted(
            self._alerts,
            key=lambda a: to_datetime(a.timestamp) or datetime.min,
            reverse=True,
        )

    def add(self, alerts: list[Notification]) -> None:
        self._check_open()
        if not alerts:
            return
        self._alerts.extend(alerts)
        self._save_alerts()

    def dismiss(self, notification_id: str) -> bool:
        """Dismiss one alert. Unknown or already-dismissed ids are a no-op."""
        self._check_open()
        alert = next((a for a in self._alerts if a.id == notification_id), None)
        if alert is None:
            logger.debug("Dismiss ignored, no notification %s", notification_id)
            return False
        if alert.dismissed:
            return False
        alert.dismissed = True
        alert.dismissed_at = self._clock().isoformat()
        self._save_alerts()
        return True

    def clear_all(self) -> int:
        """Dismiss every active alert with one shared timestamp."""
        self._check_open()
        stamp = self._clock().isoformat()
        count = 0
        for alert in self._alerts:
            if not alert.dismissed:
                alert.dismissed = True
                alert.dismissed_at = stamp
                count += 1
        if count:
            self._save_alerts()
        return count

    def prune_dismissed(self, before: datetime) -> int:
        """Drop dismissed alerts whose dismissal predates ``before``."""
        self._check_open()
        before = to_datetime(before)

        def expired(alert: Notification) -> bool:
            dismissed_at = to_datetime(alert.dismissed_at) if alert.dismissed else None
            return dismissed_at is not None and dismissed_at < before

        kept = [a for a in self._alerts if not expired(a)]
        removed = len(self._alerts) - len(kept)
        if removed:
            self._alerts = kept
            self._save_alerts()
        return removed

    # ── Settings ─────────────────────────────────────────────────────────────
    def get_settings(self) -> NotificationSettings:
        self._check_open()
        return NotificationSettings(**self._settings.to_dict())

    def update_settings(self, partial: dict) -> NotificationSettings:
        """Shallow-merge ``partial`` into the settings and persist them."""
        self._check_open()
        current = self._settings.to_dict()
        unknown = set(partial) - set(current)
        if unknown:
            raise ValueError(f"Unknown notification setting(s): {', '.join(sorted(unknown))}")
        if "threshold" in partial:
            threshold = partial["threshold"]
            if isinstance(threshold, bool) or not isinstance(threshold, int):
                raise ValueError("Threshold must be a whole number.")
            if not 0 <= threshold <= 100:
                raise ValueError("Threshold must be between 0 and 100.")
        for key in ("budget_alerts", "email_notifications", "push_notifications"):
            if key in partial and not isinstance(partial[key], bool):
                raise ValueError(f"{key} must be true or false.")
        current.update(partial)
        self._settings = NotificationSettings(**current)
        self._save_settings()
        return self.get_settings()
