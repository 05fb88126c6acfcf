from roadbill.services.bill_service import BillService
from roadbill.services.image_service import ImageService
from roadbill.storage.memory import MemoryStorage
from web.deps import get_bill_service, get_image_service


class TestDeps:
    def test_services_share_storage(self):
        bill_service = get_bill_service()
        image_service = get_image_service()

        assert isinstance(bill_service, BillService)
        assert isinstance(image_service, ImageService)
        assert isinstance(image_service.storage, MemoryStorage)
        assert bill_service.images.storage is image_service.storage

    def test_repository_shared_between_requests(self):
        assert get_bill_service().bill_repo is get_bill_service().bill_repo
