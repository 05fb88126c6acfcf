from __future__ import annotations

import logging

from roadbill.errors import StorageError
from roadbill.models.bill import Bill
from roadbill.repositories.base import BillRepository

logger = logging.getLogger(__name__)


class FallbackBillRepository(BillRepository):
    """Cache-aside wrapper around a primary repository.

    Successful reads refresh an in-memory snapshot. A read that fails with
    ``StorageError`` is answered from the last snapshot (possibly stale, or
    empty if nothing was ever read). Writes always go to the primary and
    its errors propagate; the snapshot only changes after a write succeeds.
    """

    def __init__(self, primary: BillRepository) -> None:
        self.primary = primary
        self._snapshot: list[Bill] = []

    def _copy(self) -> list[Bill]:
        return [bill.model_copy(deep=True) for bill in self._snapshot]

    def list_all(self) -> list[Bill]:
        try:
            bills = self.primary.list_all()
        except StorageError:
            logger.warning("Primary store unavailable, serving %d cached bills", len(self._snapshot))
            return self._copy()
        self._snapshot = [bill.model_copy(deep=True) for bill in bills]
        return bills

    def get_by_id(self, bill_id: str) -> Bill | None:
        return next((bill for bill in self.list_all() if bill.id == bill_id), None)

    def create(self, bill: Bill) -> Bill:
        result = self.primary.create(bill)
        self._snapshot.append(result.model_copy(deep=True))
        return result

    def update(self, bill: Bill) -> Bill:
        result = self.primary.update(bill)
        self._snapshot = [
            result.model_copy(deep=True) if cached.id == result.id else cached for cached in self._snapshot
        ]
        return result

    def delete(self, bill_id: str) -> None:
        self.primary.delete(bill_id)
        self._snapshot = [cached for cached in self._snapshot if cached.id != bill_id]
