import logging

import customtkinter as ctk

from services.budget_service import BudgetService
from services.goal_service import GoalService
from services.report_service import ReportService
from utils.constants import STATUS_COLORS
from utils.currency import format_currency
from utils.date_helpers import current_month_year, friendly_month, next_period, prev_period
from utils.errors import StoreUnavailable
from utils.metrics import days_until_deadline, format_percent

logger = logging.getLogger(__name__)


class DashboardTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        report_service: ReportService,
        budget_service: BudgetService,
        goal_service: GoalService,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._report_svc = report_service
        self._budget_svc = budget_service
        self._goal_svc = goal_service
        self._month, self._year = current_month_year()
        self._month_var = ctk.StringVar(value=friendly_month(self._month, self._year))

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_month_nav()
        self._build_summary_cards()
        self._build_bottom_section()
        self._load()

    def refresh(self):
        self._load()

    def _build_month_nav(self):
        nav = ctk.CTkFrame(self, fg_color="transparent")
        nav.grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 0))
        ctk.CTkButton(nav, text="◀", width=28, command=self._prev_month).pack(side="left")
        ctk.CTkLabel(
            nav, textvariable=self._month_var,
            font=ctk.CTkFont(size=15, weight="bold"), width=150, anchor="center"
        ).pack(side="left", padx=8)
        ctk.CTkButton(nav, text="▶", width=28, command=self._next_month).pack(side="left")

    def _prev_month(self):
        self._month, self._year = prev_period(self._month, self._year)
        self._load()

    def _next_month(self):
        self._month, self._year = next_period(self._month, self._year)
        self._load()

    def _build_summary_cards(self):
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=1, column=0, sticky="ew", padx=16, pady=12)
        self._card_frame.grid_columnconfigure((0, 1, 2, 3, 4), weight=1)

    def _build_bottom_section(self):
        bottom = ctk.CTkFrame(self, fg_color="transparent")
        bottom.grid(row=2, column=0, sticky="nsew", padx=16, pady=(0, 12))
        bottom.grid_columnconfigure(0, weight=1)
        bottom.grid_columnconfigure(1, weight=1)
        bottom.grid_rowconfigure(0, weight=1)

        self._budget_frame = ctk.CTkScrollableFrame(
            bottom, label_text="Budget Progress", height=260
        )
        self._budget_frame.grid(row=0, column=0, sticky="nsew", padx=(0, 8))

        self._goal_frame = ctk.CTkScrollableFrame(
            bottom, label_text="Savings Goals", height=260
        )
        self._goal_frame.grid(row=0, column=1, sticky="nsew", padx=(8, 0))

    def _load(self):
        self._month_var.set(friendly_month(self._month, self._year))
        for frame in (self._card_frame, self._budget_frame, self._goal_frame):
            for w in frame.winfo_children():
                w.destroy()
        try:
            stats = self._report_svc.get_dashboard_stats(self._month, self._year)
            budgets = self._budget_svc.get_current_budgets(self._month, self._year)
            goals = self._goal_svc.get_all()
        except StoreUnavailable:
            logger.exception("Error loading dashboard")
            ctk.CTkLabel(
                self._card_frame, text="Failed to load dashboard data.",
                text_color="#F44336",
            ).grid(row=0, column=0, columnspan=5, pady=20)
            return

        card_data = [
            ("Total Balance", stats["total_balance"], "#2196F3"),
            ("Income",        stats["monthly_income"], "#4CAF50"),
            ("Expenses",      stats["monthly_expenses"], "#F44336"),
            ("Savings",       stats["savings"], "#4CAF50" if stats["savings"] >= 0 else "#FF9800"),
            ("Accounts",      stats["accounts_balance"], "#9C27B0"),
        ]
        for i, (label, value, color) in enumerate(card_data):
            self._make_card(self._card_frame, i, label, format_currency(value), color)

        if not budgets:
            ctk.CTkLabel(
                self._budget_frame, text="No budgets set for this month.",
                text_color="gray60",
            ).pack(pady=20)
        for b in budgets:
            self._add_progress_row(
                self._budget_frame,
                title=b.category,
                detail=(
                    f"{format_currency(b.current_spent)} / {format_currency(b.monthly_limit)}"
                    f" ({format_percent(b.current_spent, b.monthly_limit)})"
                ),
                fraction=b.percentage / 100,
                color=STATUS_COLORS[b.status],
            )

        if not goals:
            ctk.CTkLabel(
                self._goal_frame, text="No savings goals yet.",
                text_color="gray60",
            ).pack(pady=20)
        for g in goals:
            if g.is_complete:
                days_text, color = "Complete", STATUS_COLORS["good"]
            else:
                days = days_until_deadline(g.deadline)
                days_text = f"{days} days left" if days >= 0 else f"{-days} days overdue"
                color = STATUS_COLORS["over"] if days < 0 else "#2196F3"
            self._add_progress_row(
                self._goal_frame,
                title=g.name,
                detail=f"{g.progress:.0f}% · {days_text}",
                fraction=g.progress / 100,
                color=color,
            )

    def _add_progress_row(self, parent, title: str, detail: str, fraction: float, color: str):
        f = ctk.CTkFrame(parent, fg_color="transparent")
        f.pack(fill="x", pady=4, padx=4)
        top_row = ctk.CTkFrame(f, fg_color="transparent")
        top_row.pack(fill="x")
        ctk.CTkLabel(top_row, text=title, anchor="w").pack(side="left")
        ctk.CTkLabel(top_row, text=detail, anchor="e", text_color="gray60").pack(side="right")
        bar = ctk.CTkProgressBar(f, progress_color=color)
        bar.pack(fill="x", pady=2)
        bar.set(min(max(fraction, 0.0), 1.0))

    def _make_card(self, parent, col, label, text, color):
        card = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text=label, font=ctk.CTkFont(size=12),
            text_color="gray60",
        ).grid(row=0, column=0, pady=(12, 0), padx=16)
        ctk.CTkLabel(
            card, text=text,
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=color,
        ).grid(row=1, column=0, pady=(4, 12), padx=16)
