import pytest

from roadbill.storage.memory import MemoryStorage


class TestMemoryStorage:
    def test_save_and_get(self):
        storage = MemoryStorage()
        assert storage.save("bills.json", b"[]") == "bills.json"
        assert storage.get("bills.json") == b"[]"

    def test_get_missing_raises_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            MemoryStorage().get("bills.json")

    def test_exists(self):
        storage = MemoryStorage()
        assert not storage.exists("a")
        storage.save("a", b"1")
        assert storage.exists("a")

    def test_instances_are_independent(self):
        first, second = MemoryStorage(), MemoryStorage()
        first.save("a", b"1")
        assert not second.exists("a")

    def test_stores_a_copy(self):
        storage = MemoryStorage()
        data = bytearray(b"abc")
        storage.save("k", data)
        data[0] = ord("z")
        assert storage.get("k") == b"abc"
