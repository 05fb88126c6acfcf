import logging
import secrets

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_INSECURE_DEFAULT_KEY = "change-me-in-production"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="ROADBILL_", extra="ignore")

    storage_backend: str = "local"
    storage_local_path: str = "./data"
    storage_cache: bool = False
    bills_key: str = "bills.json"
    images_prefix: str = "images"

    s3_bucket: str = ""
    s3_region: str = ""
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""
    s3_endpoint_url: str = ""
    s3_presigned_expiry: int = 604800  # 7 days in seconds

    bill_prefix: str = "ARC"
    default_checked_by: str = "ADMIN"
    default_prepared_by: str = "ARC"
    pdf_faint_signatures: bool = True
    timezone: str = "Asia/Kolkata"

    host: str = "0.0.0.0"
    port: int = Field(default=3000, validation_alias=AliasChoices("ROADBILL_PORT", "PORT"))

    log_level: str = "INFO"
    log_json: bool = False

    secret_key: str = _INSECURE_DEFAULT_KEY

    def get_secret_key(self) -> str:
        if self.secret_key == _INSECURE_DEFAULT_KEY:
            logger.warning(
                "ROADBILL_SECRET_KEY is not set, using a random key. "
                "Flash messages will not survive restarts. "
                "Set ROADBILL_SECRET_KEY in your environment or .env file."
            )
            self.secret_key = secrets.token_urlsafe(32)
        return self.secret_key


settings = Settings()
