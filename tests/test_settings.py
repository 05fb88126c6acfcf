import os

from roadbill.settings import _INSECURE_DEFAULT_KEY, Settings


def _clear_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("ROADBILL_") or key == "PORT":
            monkeypatch.delenv(key, raising=False)


class TestSettings:
    def test_defaults(self, monkeypatch):
        _clear_env(monkeypatch)
        s = Settings(_env_file=None)
        assert s.storage_backend == "local"
        assert s.storage_cache is False
        assert s.bills_key == "bills.json"
        assert s.bill_prefix == "ARC"
        assert s.default_checked_by == "ADMIN"
        assert s.default_prepared_by == "ARC"
        assert s.pdf_faint_signatures is True
        assert s.port == 3000
        assert s.s3_presigned_expiry == 604800
        assert s.secret_key == _INSECURE_DEFAULT_KEY

    def test_env_override(self, monkeypatch):
        _clear_env(monkeypatch)
        monkeypatch.setenv("ROADBILL_STORAGE_BACKEND", "s3")
        monkeypatch.setenv("ROADBILL_STORAGE_CACHE", "true")
        monkeypatch.setenv("ROADBILL_PDF_FAINT_SIGNATURES", "false")
        s = Settings(_env_file=None)
        assert s.storage_backend == "s3"
        assert s.storage_cache is True
        assert s.pdf_faint_signatures is False

    def test_plain_port_variable(self, monkeypatch):
        _clear_env(monkeypatch)
        monkeypatch.setenv("PORT", "8080")
        assert Settings(_env_file=None).port == 8080

    def test_prefixed_port_wins(self, monkeypatch):
        _clear_env(monkeypatch)
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("ROADBILL_PORT", "9000")
        assert Settings(_env_file=None).port == 9000

    def test_get_secret_key_generates_random_when_default(self, monkeypatch):
        _clear_env(monkeypatch)
        s = Settings(_env_file=None)
        key = s.get_secret_key()
        assert key != _INSECURE_DEFAULT_KEY
        assert len(key) > 20
        assert s.get_secret_key() == key

    def test_get_secret_key_uses_custom_when_set(self, monkeypatch):
        monkeypatch.setenv("ROADBILL_SECRET_KEY", "my-production-key")
        s = Settings(_env_file=None)
        assert s.get_secret_key() == "my-production-key"
