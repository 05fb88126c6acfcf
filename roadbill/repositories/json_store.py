from __future__ import annotations

import json
import logging
import threading

from pydantic import ValidationError as PydanticValidationError

from roadbill.errors import BillNotFoundError, StorageError, ValidationError
from roadbill.models.bill import Bill
from roadbill.repositories.base import BillRepository
from roadbill.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class JsonBillRepository(BillRepository):
    """Keeps the whole collection as one JSON array under a single storage key.

    Every mutation reads the array, changes it in memory and writes it back
    while holding ``self._lock``, so two writers in the same process never
    interleave their writes. Lost updates between a read and a later write
    are still possible.
    """

    def __init__(self, storage: StorageBackend, key: str = "bills.json") -> None:
        self.storage = storage
        self.key = key
        self._lock = threading.Lock()

    def _read(self) -> list[Bill]:
        try:
            raw = self.storage.get(self.key)
        except FileNotFoundError:
            logger.debug("Collection %s does not exist yet, starting empty", self.key)
            return []
        except Exception as exc:
            logger.exception("Failed to read collection %s", self.key)
            raise StorageError(f"Failed to read {self.key}") from exc

        if not raw.strip():
            return []
        try:
            records = json.loads(raw)
        except ValueError as exc:
            logger.error("Collection %s is not valid JSON", self.key)
            raise StorageError(f"Corrupt collection {self.key}") from exc
        if not isinstance(records, list):
            logger.error("Collection %s is not a JSON array", self.key)
            raise StorageError(f"Corrupt collection {self.key}")

        try:
            return [Bill.from_record(record) for record in records]
        except PydanticValidationError as exc:
            logger.error("Collection %s holds an unreadable bill record", self.key)
            raise StorageError(f"Corrupt bill record in {self.key}") from exc

    def _write(self, bills: list[Bill]) -> None:
        data = json.dumps([bill.to_record() for bill in bills], indent=2, ensure_ascii=False)
        try:
            self.storage.save(self.key, data.encode("utf-8"), content_type="application/json")
        except Exception as exc:
            logger.exception("Failed to write collection %s", self.key)
            raise StorageError(f"Failed to write {self.key}") from exc
        logger.debug("Wrote %d bills to %s", len(bills), self.key)

    def list_all(self) -> list[Bill]:
        return self._read()

    def get_by_id(self, bill_id: str) -> Bill | None:
        return next((bill for bill in self._read() if bill.id == bill_id), None)

    def create(self, bill: Bill) -> Bill:
        with self._lock:
            bills = self._read()
            if any(existing.id == bill.id for existing in bills):
                raise ValidationError(f"Bill id already exists: {bill.id}", field="id")
            bills.append(bill)
            self._write(bills)
        return bill

    def update(self, bill: Bill) -> Bill:
        with self._lock:
            bills = self._read()
            for index, existing in enumerate(bills):
                if existing.id == bill.id:
                    bills[index] = bill
                    break
            else:
                raise BillNotFoundError(bill.id)
            self._write(bills)
        return bill

    def delete(self, bill_id: str) -> None:
        with self._lock:
            bills = self._read()
            remaining = [bill for bill in bills if bill.id != bill_id]
            if len(remaining) == len(bills):
                raise BillNotFoundError(bill_id)
            self._write(remaining)
