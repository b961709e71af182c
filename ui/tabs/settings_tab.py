import customtkinter as ctk
from tkinter import filedialog

from database.db_manager import DatabaseManager
from services.notification_service import NotificationService
from utils.app_config import get_db_folder, set_db_folder


class SettingsTab(ctk.CTkFrame):
    """Settings tab: notification preferences, appearance, DB folder."""

    def __init__(
        self,
        master,
        notification_service: NotificationService,
        db: DatabaseManager | None,
        notify_refresh,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = notification_service
        self._db = db
        self._notify_refresh = notify_refresh

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        scroll = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroll.grid(row=0, column=0, sticky="nsew")
        scroll.grid_columnconfigure(0, weight=1)

        self._build_notification_section(scroll)
        self._build_appearance_section(scroll)
        self._build_db_folder_section(scroll)
        self.refresh()

    def refresh(self):
        """Re-read stored preferences into the form."""
        settings = self._svc.get_settings()
        self._alerts_var.set(settings.budget_alerts)
        self._threshold_var.set(str(settings.threshold))
        self._email_var.set(settings.email_notifications)
        self._push_var.set(settings.push_notifications)
        if self._db:
            appearance = self._db.get_setting("appearance_mode", "system")
            self._appearance_var.set(appearance.title())

    # ── Notifications ─────────────────────────────────────────────────────────

    def _build_notification_section(self, parent):
        section = self._make_section(parent, "Notifications", row=0)

        self._alerts_var = ctk.BooleanVar()
        self._email_var = ctk.BooleanVar()
        self._push_var = ctk.BooleanVar()
        self._threshold_var = ctk.StringVar()

        ctk.CTkSwitch(
            section, text="Budget alerts", variable=self._alerts_var,
        ).grid(row=0, column=0, columnspan=2, sticky="w", padx=8, pady=4)

        ctk.CTkLabel(section, text="Alert at (% of limit):", anchor="e", width=140).grid(
            row=1, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        ctk.CTkEntry(section, textvariable=self._threshold_var, width=60).grid(
            row=1, column=1, padx=4, pady=6, sticky="w"
        )

        ctk.CTkSwitch(
            section, text="Email notifications", variable=self._email_var,
        ).grid(row=2, column=0, columnspan=2, sticky="w", padx=8, pady=4)
        ctk.CTkSwitch(
            section, text="Push notifications", variable=self._push_var,
        ).grid(row=3, column=0, columnspan=2, sticky="w", padx=8, pady=4)

        ctk.CTkButton(
            section, text="Save Notification Settings", width=180,
            command=self._save_notifications,
        ).grid(row=4, column=0, columnspan=2, pady=(10, 4))

        self._notif_status = ctk.CTkLabel(section, text="", font=ctk.CTkFont(size=11))
        self._notif_status.grid(row=5, column=0, columnspan=2, pady=(0, 8))

    def _save_notifications(self):
        raw = self._threshold_var.get().strip()
        try:
            threshold = int(raw)
        except ValueError:
            self._notif_status.configure(
                text=f"Threshold must be a whole number, got '{raw}'.", text_color="#F44336"
            )
            return
        try:
            self._svc.update_settings({
                "budget_alerts": bool(self._alerts_var.get()),
                "threshold": threshold,
                "email_notifications": bool(self._email_var.get()),
                "push_notifications": bool(self._push_var.get()),
            })
        except ValueError as e:
            self._notif_status.configure(text=str(e), text_color="#F44336")
            return
        self._notif_status.configure(text="Notification settings saved.", text_color="#4CAF50")
        self._notify_refresh("settings")

    # ── Appearance ────────────────────────────────────────────────────────────

    def _build_appearance_section(self, parent):
        section = self._make_section(parent, "Appearance", row=1)
        ctk.CTkLabel(section, text="Theme:", anchor="e", width=140).grid(
            row=0, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._appearance_var = ctk.StringVar(value="System")
        ctk.CTkSegmentedButton(
            section,
            values=["Light", "Dark", "System"],
            variable=self._appearance_var,
            command=self._save_appearance,
        ).grid(row=0, column=1, padx=4, pady=6, sticky="w")

    def _save_appearance(self, value: str):
        mode = value.lower()
        ctk.set_appearance_mode(mode)
        if self._db:
            self._db.set_setting("appearance_mode", mode)

    # ── DB folder ─────────────────────────────────────────────────────────────

    def _build_db_folder_section(self, parent):
        section = self._make_section(parent, "Database Folder", row=2)

        self._db_folder_var = ctk.StringVar(value=get_db_folder() or "(default: app folder)")
        ctk.CTkEntry(
            section, textvariable=self._db_folder_var,
            state="readonly", width=340,
        ).grid(row=0, column=0, padx=(8, 4), pady=4, sticky="ew")

        ctk.CTkButton(
            section, text="Browse…", width=90,
            command=self._browse_db_folder,
        ).grid(row=0, column=1, padx=4)

        ctk.CTkButton(
            section, text="Reset to Default", width=120,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._reset_db_folder,
        ).grid(row=0, column=2, padx=(4, 8))

        self._db_restart_label = ctk.CTkLabel(
            section, text="", text_color="#FF9800",
            font=ctk.CTkFont(size=11), anchor="w",
        )
        self._db_restart_label.grid(row=1, column=0, columnspan=3, sticky="w", padx=8, pady=(0, 6))

    def _browse_db_folder(self):
        path = filedialog.askdirectory(title="Choose DB folder")
        if path:
            set_db_folder(path)
            self._db_folder_var.set(path)
            self._db_restart_label.configure(text="Restart the app for the change to take effect.")

    def _reset_db_folder(self):
        set_db_folder(None)
        self._db_folder_var.set("(default: app folder)")
        self._db_restart_label.configure(text="Restart the app for the change to take effect.")

    def _make_section(self, parent, title: str, row: int) -> ctk.CTkFrame:
        outer = ctk.CTkFrame(parent, corner_radius=8)
        outer.grid(row=row, column=0, sticky="ew", padx=12, pady=8)
        outer.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            outer, text=title,
            font=ctk.CTkFont(size=14, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w", padx=12, pady=(10, 4))

        inner = ctk.CTkFrame(outer, fg_color="transparent")
        inner.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 8))
        return inner
