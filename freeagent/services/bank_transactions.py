"""Bank transactions resource."""

from datetime import date, datetime
from typing import Any, List, Optional

from freeagent.models import BankTransaction
from freeagent.services.base import BaseResource


class BankTransactions(BaseResource[BankTransaction]):
    """Access to ``/v2/bank_transactions``.

    Lists are cached per bank account, view and date range; any create,
    update or delete drops every cached list along with the entity itself.
    """

    endpoint = "v2/bank_transactions"
    root_key = "bank_transaction"
    collection_root_key = "bank_transactions"
    model = BankTransaction

    async def get_all(
        self,
        bank_account: Optional[str] = None,
        view: str = "all",
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        updated_since: Optional[datetime] = None,
    ) -> List[BankTransaction]:
        """Fetch bank transactions.

        Args:
            bank_account: Bank account URL to restrict the list to
            view: "all", "unexplained", "explained", "manual", "imported"
                or "marked_for_review"
            from_date: Earliest dated_on to include
            to_date: Latest dated_on to include
            updated_since: Only transactions updated after this timestamp
        """
        return await self._list(
            bank_account=bank_account,
            view=view,
            from_date=from_date,
            to_date=to_date,
            updated_since=updated_since,
        )

    async def get_unexplained(self, bank_account: Optional[str] = None) -> List[BankTransaction]:
        return await self.get_all(bank_account=bank_account, view="unexplained")

    async def get_explained(self, bank_account: Optional[str] = None) -> List[BankTransaction]:
        return await self.get_all(bank_account=bank_account, view="explained")

    async def get_by_id(self, transaction_id: Any) -> BankTransaction:
        return await self._get_entity(transaction_id)

    async def create(self, transaction: BankTransaction) -> BankTransaction:
        return await self._create(transaction)

    async def update(self, transaction_id: Any, transaction: BankTransaction) -> BankTransaction:
        return await self._update(transaction_id, transaction)

    async def delete(self, transaction_id: Any) -> None:
        await self._delete(transaction_id)
