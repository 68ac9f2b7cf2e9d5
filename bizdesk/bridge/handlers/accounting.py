"""
Bookkeeping operations.

Handles the chart of accounts and income/expense transactions.
"""

from bizdesk.errors import NotFoundError
from bizdesk.models import AccountInput, MonthFilter, TransactionInput

from .base import HandlerGroup, operation, payload_id, rows


class AccountingHandler(HandlerGroup):
    """Operations for accounts and transactions."""

    # =========================================================================
    # Chart of Accounts
    # =========================================================================

    @operation("get-accounts", "accounts-data")
    def get_accounts(self, payload):
        business_id = payload_id(payload, "business_id")
        return rows(self.repository.accounts.list_by_business(business_id))

    @operation("save-account", "account-saved")
    def save_account(self, payload):
        account = self.repository.accounts.create(AccountInput.from_payload(payload))
        return account.to_dict()

    @operation("update-account", "account-updated")
    def update_account(self, payload):
        account = AccountInput.from_payload(payload, require_id=True)
        return self.repository.accounts.update(account).to_dict()

    @operation("delete-account", "account-deleted")
    def delete_account(self, payload):
        account_id = payload_id(payload)
        return {"id": account_id, "deleted": self.repository.accounts.delete(account_id)}

    # =========================================================================
    # Transactions
    # =========================================================================

    @operation("save-transaction", "transaction-saved")
    def save_transaction(self, payload):
        txn = self.repository.transactions.create(TransactionInput.from_payload(payload))
        return txn.to_dict()

    @operation("get-transactions", "transactions-data")
    def get_transactions(self, payload):
        """Newest transactions first, optionally for one month (month + year)."""
        business_id = payload_id(payload, "business_id")
        window = MonthFilter.from_options(payload)
        return rows(
            self.repository.transactions.list_by_business(
                business_id, month=window.month, year=window.year
            )
        )

    @operation("get-transaction-by-id", "transaction-data")
    def get_transaction_by_id(self, payload):
        txn_id = payload_id(payload)
        txn = self.repository.transactions.get_by_id(txn_id)
        if txn is None:
            raise NotFoundError("Transaction", txn_id)
        return txn.to_dict()

    @operation("update-transaction", "transaction-updated")
    def update_transaction(self, payload):
        txn = TransactionInput.from_payload(payload, require_id=True)
        return self.repository.transactions.update(txn).to_dict()

    @operation("delete-transaction", "transaction-deleted")
    def delete_transaction(self, payload):
        txn_id = payload_id(payload)
        return {"id": txn_id, "deleted": self.repository.transactions.delete(txn_id)}
