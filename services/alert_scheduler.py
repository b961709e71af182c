import logging
from typing import Callable

from utils.constants import ALERT_POLL_INTERVAL_MS, ALERT_SETTLE_MS

logger = logging.getLogger(__name__)


class AlertScheduler:
    """Drives budget alert checks from Tk's event loop.

    Checks run on start, every ``interval_ms`` and ``settle_ms`` after a
    transaction is created. ``after``/``after_cancel`` are a widget's timer
    methods. Everything runs on the UI thread; overlapping triggers are
    harmless because the evaluator never raises the same alert twice.
    """

    def __init__(
        self,
        check: Callable[[], list],
        after: Callable,
        after_cancel: Callable,
        interval_ms: int = ALERT_POLL_INTERVAL_MS,
        settle_ms: int = ALERT_SETTLE_MS,
        on_new_alerts: Callable[[list], None] | None = None,
    ):
        self._check = check
        self._after = after
        self._after_cancel = after_cancel
        self.interval_ms = interval_ms
        self.settle_ms = settle_ms
        self._on_new_alerts = on_new_alerts
        self._interval_job = None
        self._settle_job = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self.run_check()
        self._arm_interval()

    def stop(self) -> None:
        self._running = False
        for job in (self._interval_job, self._settle_job):
            if job is not None:
                self._after_cancel(job)
        self._interval_job = None
        self._settle_job = None

    def notify_transaction_created(self, *_args) -> None:
        """Re-check shortly after a new transaction lands."""
        if not self._running or self._settle_job is not None:
            return
        self._settle_job = self._after(self.settle_ms, self._on_settled)

    def run_check(self) -> list:
        """Run one check. A failing check is logged and the schedule carries on."""
        try:
            new_alerts = self._check() or []
            if new_alerts and self._on_new_alerts:
                self._on_new_alerts(new_alerts)
        except Exception:
            logger.exception("Budget alert check failed")
            return []
        return new_alerts

    def _arm_interval(self):
        self._interval_job = self._after(self.interval_ms, self._on_interval)

    def _on_interval(self):
        self._interval_job = None
        if not self._running:
            return
        self.run_check()
        self._arm_interval()

    def _on_settled(self):
        self._settle_job = None
        if self._running:
            logger.debug("Checking budget alerts after new transaction")
            self.run_check()
