from dataclasses import dataclass


@dataclass
class BankAccount:
    id: int
    account_name: str
    bank_name: str = ""
    account_type: str = "Checking"
    account_number: str = ""
    routing_number: str = ""
    balance: float = 0.0
    currency: str = "USD"
    iban: str = ""
    swift_code: str = ""
    last_updated: str = ""

    @property
    def masked_number(self) -> str:
        if len(self.account_number) <= 4:
            return self.account_number
        return "•" * 4 + self.account_number[-4:]
