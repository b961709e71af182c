from database.field_map import Field, FieldMap, as_float, as_str
from database.record_dao import RecordDAO
from models.bank_account import BankAccount


class BankAccountDAO(RecordDAO):
    table = "bank_account_c"
    field_map = FieldMap(BankAccount, [
        Field("account_name", "Name", as_str, str),
        Field("bank_name", "bank_name_c", as_str, str),
        Field("account_type", "account_type_c", as_str, str),
        Field("account_number", "account_number_c", as_str, str),
        Field("routing_number", "routing_number_c", as_str, str),
        Field("balance", "balance_c", as_float, float),
        Field("currency", "currency_c", as_str, str),
        Field("iban", "iban_c", as_str, str),
        Field("swift_code", "swift_code_c", as_str, str),
        Field("last_updated", "ModifiedOn", as_str),
    ])
