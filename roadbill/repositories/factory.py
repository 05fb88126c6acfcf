from functools import lru_cache

from roadbill.repositories.base import BillRepository
from roadbill.settings import settings


@lru_cache(maxsize=1)
def get_bill_repository() -> BillRepository:
    """Process-wide repository, so every caller shares one write lock."""
    from roadbill.repositories.json_store import JsonBillRepository
    from roadbill.storage.factory import get_storage

    repo: BillRepository = JsonBillRepository(get_storage(), settings.bills_key)
    if settings.storage_cache:
        from roadbill.repositories.fallback import FallbackBillRepository

        repo = FallbackBillRepository(repo)
    return repo
