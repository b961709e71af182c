import customtkinter as ctk

from models.notification import Notification
from utils.constants import SEVERITY_COLORS, SEVERITY_ICONS


class AlertBanner(ctk.CTkFrame):
    """A dismissible colored banner for non-blocking notifications."""

    def __init__(self, master, message: str, color: str = "#2196F3",
                 detail: str = "", on_dismiss=None,
                 action_text: str | None = None, action_cmd=None, **kwargs):
        super().__init__(master, fg_color=color, corner_radius=6, **kwargs)
        self._on_dismiss = on_dismiss
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, text_color="white",
            anchor="w", padx=10, pady=(6 if not detail else 2),
            font=ctk.CTkFont(weight="bold"),
        ).grid(row=0, column=0, sticky="ew")
        if detail:
            ctk.CTkLabel(
                self, text=detail, text_color="white",
                anchor="w", padx=10, font=ctk.CTkFont(size=11),
            ).grid(row=1, column=0, sticky="ew", pady=(0, 4))

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=0, column=1, rowspan=2, padx=(0, 4))

        if action_text and action_cmd:
            ctk.CTkButton(
                btn_frame, text=action_text, width=60, height=24,
                fg_color="transparent", border_width=1, border_color="white",
                hover_color="#ffffff",
                text_color="white", command=action_cmd,
            ).pack(side="left", padx=2)

        ctk.CTkButton(
            btn_frame, text="✕", width=28, height=24,
            fg_color="transparent",
            hover_color="#ffffff",
            text_color="white",
            command=self._dismiss,
        ).pack(side="left")

    def _dismiss(self):
        if self._on_dismiss:
            self._on_dismiss()
        self.destroy()

    @classmethod
    def for_notification(cls, master, notification: Notification, on_dismiss=None, **kwargs):
        icon = SEVERITY_ICONS.get(notification.severity, "")
        return cls(
            master,
            message=f"{icon} {notification.message}".strip(),
            detail=notification.description,
            color=SEVERITY_COLORS.get(notification.severity, "#888888"),
            on_dismiss=on_dismiss,
            **kwargs,
        )
