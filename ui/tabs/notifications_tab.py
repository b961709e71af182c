import customtkinter as ctk

from models.notification import Notification
from services.notification_service import NotificationService
from utils.constants import SEVERITY_COLORS, SEVERITY_ICONS
from utils.date_helpers import format_display_date


class NotificationsTab(ctk.CTkFrame):
    """Full alert history, newest first, with per-row dismiss and clear all."""

    def __init__(self, master, notification_service: NotificationService, notify_refresh, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = notification_service
        self._notify_refresh = notify_refresh

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        header = ctk.CTkFrame(self, fg_color="transparent")
        header.grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 4))
        self._count_label = ctk.CTkLabel(
            header, text="", font=ctk.CTkFont(size=15, weight="bold"), anchor="w"
        )
        self._count_label.pack(side="left")
        ctk.CTkButton(
            header, text="Clear All", width=100, command=self._clear_all,
        ).pack(side="right")

        self._list = ctk.CTkScrollableFrame(self)
        self._list.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self._list.grid_columnconfigure(0, weight=1)
        self.refresh()

    def refresh(self):
        for w in self._list.winfo_children():
            w.destroy()
        notifications = self._svc.get_all_notifications()
        active = sum(1 for n in notifications if not n.dismissed)
        self._count_label.configure(text=f"Notifications ({active} active)")
        if not notifications:
            ctk.CTkLabel(self._list, text="No notifications yet.", text_color="gray60").grid(
                row=0, column=0, pady=20
            )
        for i, notification in enumerate(notifications):
            self._add_row(notification, i)

    def _add_row(self, notification: Notification, index: int):
        color = SEVERITY_COLORS.get(notification.severity, "#888888")
        if notification.dismissed:
            color = "gray50"
        row = ctk.CTkFrame(self._list, fg_color=("gray90", "gray20"), corner_radius=6)
        row.grid(row=index, column=0, sticky="ew", pady=3, padx=2)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text=SEVERITY_ICONS.get(notification.severity, "·"), text_color=color,
            font=ctk.CTkFont(size=18), width=30,
        ).grid(row=0, column=0, rowspan=2, padx=(8, 4), pady=6)
        ctk.CTkLabel(
            row, text=notification.message, text_color=color,
            font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
        ).grid(row=0, column=1, sticky="ew", pady=(6, 0))
        ctk.CTkLabel(
            row, text=f"{format_display_date(notification.timestamp)} · {notification.description}",
            font=ctk.CTkFont(size=11), text_color=("gray40", "gray70"), anchor="w",
        ).grid(row=1, column=1, sticky="ew", pady=(0, 6))

        if not notification.dismissed:
            ctk.CTkButton(
                row, text="Dismiss", width=70, height=26,
                fg_color="transparent", border_width=1,
                text_color=("gray10", "gray90"),
                command=lambda n=notification: self._dismiss(n),
            ).grid(row=0, column=2, rowspan=2, padx=(4, 8))

    def _dismiss(self, notification: Notification):
        self._svc.dismiss_notification(notification.id)
        self._notify_refresh("notifications")

    def _clear_all(self):
        self._svc.clear_all_notifications()
        self._notify_refresh("notifications")
