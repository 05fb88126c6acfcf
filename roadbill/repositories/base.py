from abc import ABC, abstractmethod

from roadbill.models.bill import Bill


class BillRepository(ABC):
    """Ordered collection of bills keyed by ``Bill.id``.

    ``update`` and ``delete`` raise ``BillNotFoundError`` for unknown ids and
    leave the collection untouched. Read failures raise ``StorageError``.
    """

    @abstractmethod
    def list_all(self) -> list[Bill]: ...

    @abstractmethod
    def get_by_id(self, bill_id: str) -> Bill | None: ...

    @abstractmethod
    def create(self, bill: Bill) -> Bill: ...

    @abstractmethod
    def update(self, bill: Bill) -> Bill: ...

    @abstractmethod
    def delete(self, bill_id: str) -> None: ...
