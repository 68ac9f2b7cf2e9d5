"""
Chart of accounts models.

Defines account and transaction types, the default chart of accounts seeded
on first run, and the validated inputs for accounts and transactions.
"""

import datetime as dt
from typing import ClassVar, Optional

from pydantic import Field, PositiveInt

from bizdesk.config import MAX_NAME_LENGTH

from .base import InputModel, LabelEnum, Money


class AccountType(LabelEnum):
    """
    Account categories in the chart of accounts.

    Only Income and Expense accounts receive transactions in practice; the
    balance sheet is derived from net profit rather than from Asset,
    Liability and Equity balances.
    """

    INCOME = "Income"
    EXPENSE = "Expense"
    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"


class TransactionType(LabelEnum):
    """Direction of a transaction. Amounts are stored unsigned."""

    INCOME = "Income"
    EXPENSE = "Expense"


# Default chart of accounts: (name, type)
DEFAULT_ACCOUNTS: list[tuple[str, AccountType]] = [
    ("Sales", AccountType.INCOME),
    ("Service Revenue", AccountType.INCOME),
    ("Advertising", AccountType.EXPENSE),
    ("Bank Fees", AccountType.EXPENSE),
    ("Office Supplies", AccountType.EXPENSE),
    ("Rent", AccountType.EXPENSE),
    ("Utilities", AccountType.EXPENSE),
    ("Travel", AccountType.EXPENSE),
    ("Cash on Hand", AccountType.ASSET),
    ("Bank Account", AccountType.ASSET),
]

# Tax category labels keyed by default account name. Legal Fees and Software
# are not seeded but pick up a category if the user creates them first.
DEFAULT_TAX_CATEGORIES: dict[str, str] = {
    "Advertising": "Advertising",
    "Bank Fees": "Bank charges",
    "Office Supplies": "Office expenses",
    "Rent": "Rent or lease",
    "Utilities": "Utilities",
    "Travel": "Travel",
    "Legal Fees": "Legal and professional services",
    "Software": "Office expenses",
}


class AccountInput(InputModel):
    """Validated account fields, shared by create and update."""

    required_on_create: ClassVar[tuple[str, ...]] = ("business_id",)
    label: ClassVar[str] = "account"

    id: Optional[PositiveInt] = None
    business_id: Optional[PositiveInt] = None
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    type: AccountType
    code: Optional[str] = Field(default=None, max_length=50)
    tax_category: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)


class TransactionInput(InputModel):
    """Validated transaction fields, shared by create and update."""

    required_on_create: ClassVar[tuple[str, ...]] = ("business_id",)
    label: ClassVar[str] = "transaction"

    id: Optional[PositiveInt] = None
    business_id: Optional[PositiveInt] = None
    date: dt.date
    description: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    amount: Money
    type: TransactionType
    account_id: Optional[PositiveInt] = None
    client_id: Optional[PositiveInt] = None
