from models.bank_account import BankAccount
from database.bank_account_dao import BankAccountDAO
from utils.constants import ACCOUNT_TYPE_LABELS


def normalize_account_type(account_type: str) -> str:
    """'money market' -> 'Money Market', 'cd' -> 'CD'; unknown values pass through."""
    return ACCOUNT_TYPE_LABELS.get(account_type.strip().lower(), account_type.strip())


class BankAccountService:
    def __init__(self, account_dao: BankAccountDAO):
        self._dao = account_dao

    def get_all(self) -> list[BankAccount]:
        return self._dao.get_all(order_by="account_name")

    def get_by_id(self, account_id: int) -> BankAccount:
        return self._dao.get_by_id(account_id)

    def create(
        self,
        account_name: str,
        bank_name: str = "",
        account_type: str = "checking",
        balance: float = 0.0,
        currency: str = "USD",
        account_number: str = "",
        routing_number: str = "",
        iban: str = "",
        swift_code: str = "",
    ) -> BankAccount:
        account_name = account_name.strip()
        if not account_name:
            raise ValueError("Account name cannot be empty.")
        if any(a.account_name.lower() == account_name.lower() for a in self.get_all()):
            raise ValueError(f"An account named '{account_name}' already exists.")
        return self._dao.create(
            account_name=account_name, bank_name=bank_name.strip(),
            account_type=normalize_account_type(account_type),
            balance=float(balance), currency=currency.upper() or "USD",
            account_number=account_number.strip(), routing_number=routing_number.strip(),
            iban=iban.strip(), swift_code=swift_code.strip(),
        )

    def update(self, account_id: int, **fields) -> BankAccount:
        """Partial update; only the given fields are written."""
        if "account_name" in fields:
            name = fields["account_name"].strip()
            if not name:
                raise ValueError("Account name cannot be empty.")
            clash = [
                a for a in self.get_all()
                if a.id != account_id and a.account_name.lower() == name.lower()
            ]
            if clash:
                raise ValueError(f"An account named '{name}' already exists.")
            fields["account_name"] = name
        if "account_type" in fields:
            fields["account_type"] = normalize_account_type(fields["account_type"])
        if "balance" in fields:
            fields["balance"] = float(fields["balance"] or 0)
        return self._dao.update(account_id, **fields)

    def delete(self, account_id: int):
        self._dao.delete(account_id)

    def total_balance(self) -> float:
        return sum(a.balance for a in self.get_all())
