from roadbill.errors import BillNotFoundError, GenerationError, RoadbillError, StorageError, ValidationError


class TestErrors:
    def test_not_found_carries_id(self):
        exc = BillNotFoundError("abc")
        assert exc.bill_id == "abc"
        assert "abc" in str(exc)
        assert isinstance(exc, LookupError)
        assert isinstance(exc, RoadbillError)

    def test_validation_error_is_value_error(self):
        exc = ValidationError("Missing required field: toMs", field="toMs")
        assert exc.field == "toMs"
        assert isinstance(exc, ValueError)

    def test_hierarchy(self):
        assert issubclass(StorageError, RoadbillError)
        assert issubclass(GenerationError, RoadbillError)
