import logging
import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.record_client import create_record_client
from database.kv_store import DatabaseKeyValueStore, MemoryKeyValueStore
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from database.budget_dao import BudgetDAO
from database.goal_dao import GoalDAO
from database.bank_account_dao import BankAccountDAO

from services.transaction_service import TransactionService
from services.budget_service import BudgetService
from services.goal_service import GoalService
from services.bank_account_service import BankAccountService
from services.category_service import CategoryService
from services.report_service import ReportService
from services.notification_store import NotificationStore
from services.notification_service import NotificationService

from ui.app_window import AppWindow
from utils.app_config import load_config

logger = logging.getLogger(__name__)


def main():
    # ── Bootstrap: read pre-DB config ─────────────────────────────────────────
    config = load_config()
    logging.basicConfig(
        level=getattr(logging, str(config["log_level"]).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # ── Storage ──────────────────────────────────────────────────────────────
    db = None
    if config["backend"] == "sqlite":
        db = DatabaseManager.open(db_folder=config["db_folder"])
    client = create_record_client(config, db)
    kv_store = DatabaseKeyValueStore(db) if db else MemoryKeyValueStore()

    # ── DAOs ─────────────────────────────────────────────────────────────────
    tx_dao = TransactionDAO(client)
    category_dao = CategoryDAO(client)
    budget_dao = BudgetDAO(client)
    goal_dao = GoalDAO(client)
    account_dao = BankAccountDAO(client)

    # ── Services ─────────────────────────────────────────────────────────────
    tx_svc = TransactionService(tx_dao)
    budget_svc = BudgetService(budget_dao, tx_dao)
    goal_svc = GoalService(goal_dao)
    category_svc = CategoryService(category_dao)
    account_svc = BankAccountService(account_dao)
    report_svc = ReportService(tx_svc, budget_svc, goal_svc, bank_account_service=account_svc)
    store = NotificationStore(kv_store).load()
    notification_svc = NotificationService(budget_svc, store)

    added = category_svc.seed_defaults()
    if added:
        logger.info("Seeded %d default categories", added)

    # ── Apply due recurring templates ────────────────────────────────────────
    new_transactions = tx_svc.apply_due_recurring()

    # ── Appearance ───────────────────────────────────────────────────────────
    appearance = db.get_setting("appearance_mode", "system") if db else "system"
    ctk.set_appearance_mode(appearance)
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        notification_service=notification_svc,
        tx_service=tx_svc,
        report_service=report_svc,
        budget_service=budget_svc,
        goal_service=goal_svc,
        db=db,
        poll_interval_ms=int(config["alert_poll_interval_ms"]),
        startup_transactions=new_transactions,
    )

    def on_close():
        app.destroy()
        store.close()
        if db:
            db.close()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
