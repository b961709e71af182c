import logging

import customtkinter as ctk

from database.db_manager import DatabaseManager
from models.notification import Notification
from models.transaction import Transaction
from services.alert_scheduler import AlertScheduler
from services.budget_service import BudgetService
from services.goal_service import GoalService
from services.notification_service import NotificationService
from services.report_service import ReportService
from services.transaction_service import TransactionService
from ui.components.alert_banner import AlertBanner
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.notifications_tab import NotificationsTab
from ui.tabs.settings_tab import SettingsTab
from utils.constants import ALERT_POLL_INTERVAL_MS, APP_NAME, APP_HEIGHT, APP_WIDTH

logger = logging.getLogger(__name__)

_MAX_BANNERS = 3

_REFRESH_SCOPES: dict[str, set[str]] = {
    "transaction":   {"dashboard"},
    "notifications": {"notifications", "banners"},
    "settings":      {"settings"},
    "full":          {"dashboard", "notifications", "banners", "settings"},
}


class AppWindow(ctk.CTk):
    def __init__(
        self,
        notification_service: NotificationService,
        tx_service: TransactionService,
        report_service: ReportService,
        budget_service: BudgetService,
        goal_service: GoalService,
        db: DatabaseManager | None = None,
        poll_interval_ms: int = ALERT_POLL_INTERVAL_MS,
        startup_transactions: list[Transaction] | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._notif_svc = notification_service
        self._tx_svc = tx_service
        self._report_svc = report_service
        self._budget_svc = budget_service
        self._goal_svc = goal_service
        self._db = db
        self._startup_transactions = startup_transactions or []

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_banner_area()
        self._build_tabs()

        self._scheduler = AlertScheduler(
            check=self._notif_svc.check_budget_alerts,
            after=self.after,
            after_cancel=self.after_cancel,
            interval_ms=poll_interval_ms,
            on_new_alerts=self._on_new_alerts,
        )
        self._tx_svc.add_created_listener(self._on_transaction_created)

        if self._startup_transactions:
            count = len(self._startup_transactions)
            self.after(300, lambda: self._show_recurring_banner(count))

        # Wait for the first draw so banners have somewhere to go.
        self.after(200, self._start_alerts)

    def _start_alerts(self):
        self._scheduler.start()
        self._show_active_banners()

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=0, column=0, sticky="ew", padx=8)

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ("Dashboard", "Notifications", "Settings"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._dashboard_tab = DashboardTab(
            self._tabview.tab("Dashboard"),
            report_service=self._report_svc,
            budget_service=self._budget_svc,
            goal_service=self._goal_svc,
        )
        self._dashboard_tab.grid(row=0, column=0, sticky="nsew")

        self._notifications_tab = NotificationsTab(
            self._tabview.tab("Notifications"),
            notification_service=self._notif_svc,
            notify_refresh=self.notify_tabs_refresh,
        )
        self._notifications_tab.grid(row=0, column=0, sticky="nsew")

        self._settings_tab = SettingsTab(
            self._tabview.tab("Settings"),
            notification_service=self._notif_svc,
            db=self._db,
            notify_refresh=self.notify_tabs_refresh,
        )
        self._settings_tab.grid(row=0, column=0, sticky="nsew")

    # ── Alerts ───────────────────────────────────────────────────────────────
    def _on_transaction_created(self, tx: Transaction):
        self._scheduler.notify_transaction_created(tx)
        self.notify_tabs_refresh("transaction")

    def _on_new_alerts(self, alerts: list[Notification]):
        logger.debug("Showing %d new alert banner(s)", len(alerts))
        self.notify_tabs_refresh("notifications")

    def _show_active_banners(self):
        for w in self._banner_frame.winfo_children():
            w.destroy()
        for notification in self._notif_svc.get_active_notifications()[:_MAX_BANNERS]:
            AlertBanner.for_notification(
                self._banner_frame,
                notification,
                on_dismiss=lambda n=notification: self._dismiss_banner(n),
                action_text="View",
                action_cmd=lambda: self._tabview.set("Notifications"),
            ).pack(fill="x", pady=2)

    def _dismiss_banner(self, notification: Notification):
        self._notif_svc.dismiss_notification(notification.id)
        self._notifications_tab.refresh()

    def _show_recurring_banner(self, count: int):
        banner = AlertBanner(
            self._banner_frame,
            message=f"{count} recurring transaction{'s' if count != 1 else ''} were automatically added.",
            color="#2196F3",
        )
        banner.pack(fill="x", pady=2)

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self, scope: str = "full"):
        tabs = _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["full"])
        if "dashboard"     in tabs: self._dashboard_tab.refresh()
        if "notifications" in tabs: self._notifications_tab.refresh()
        if "banners"       in tabs: self._show_active_banners()
        if "settings"      in tabs: self._settings_tab.refresh()

    def destroy(self):
        self._scheduler.stop()
        self._tx_svc.remove_created_listener(self._on_transaction_created)
        super().destroy()
