"""Shared fixtures: services wired over the in-memory record store."""
from datetime import datetime

import pytest

from database.budget_dao import BudgetDAO
from database.bank_account_dao import BankAccountDAO
from database.category_dao import CategoryDAO
from database.goal_dao import GoalDAO
from database.kv_store import MemoryKeyValueStore
from database.record_client import MemoryRecordClient
from database.transaction_dao import TransactionDAO
from services.bank_account_service import BankAccountService
from services.budget_service import BudgetService
from services.category_service import CategoryService
from services.goal_service import GoalService
from services.notification_service import NotificationService
from services.notification_store import NotificationStore
from services.report_service import ReportService
from services.transaction_service import TransactionService

FIXED_NOW = datetime(2024, 3, 15, 12, 0, 0)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def client():
    return MemoryRecordClient()


@pytest.fixture
def tx_dao(client):
    return TransactionDAO(client)


@pytest.fixture
def budget_dao(client):
    return BudgetDAO(client)


@pytest.fixture
def category_dao(client):
    return CategoryDAO(client)


@pytest.fixture
def tx_service(tx_dao):
    return TransactionService(tx_dao)


@pytest.fixture
def budget_service(budget_dao, tx_dao):
    return BudgetService(budget_dao, tx_dao)


@pytest.fixture
def goal_service(client):
    return GoalService(GoalDAO(client))


@pytest.fixture
def category_service(category_dao):
    return CategoryService(category_dao)


@pytest.fixture
def bank_account_service(client):
    return BankAccountService(BankAccountDAO(client))


@pytest.fixture
def report_service(tx_service, budget_service, goal_service, bank_account_service):
    return ReportService(
        tx_service, budget_service, goal_service,
        bank_account_service=bank_account_service,
    )


@pytest.fixture
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture
def store(kv_store, clock):
    return NotificationStore(kv_store, clock=clock).load()


@pytest.fixture
def notification_service(budget_service, store, clock):
    return NotificationService(budget_service, store, clock=clock)
