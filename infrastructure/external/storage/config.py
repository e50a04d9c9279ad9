"""Storage signing configuration models."""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, SecretStr


DEFAULT_STORAGE_HOST = "r2.cloudflarestorage.com"


class SignerType(str, Enum):
    """Presigned URL signing strategies."""
    MANUAL = "manual"
    SDK = "sdk"


class StorageConfig(BaseModel):
    """Storage signing configuration model."""

    # Unknown values are rejected by create_signer, per request
    signer: str = SignerType.MANUAL.value

    # Credentials / location
    access_key_id: Optional[str] = None
    secret_access_key: Optional[SecretStr] = None
    bucket_name: Optional[str] = None
    account_id: Optional[str] = None
    storage_host: str = DEFAULT_STORAGE_HOST

    # SigV4 scope
    region: str = "auto"
    service: str = "s3"

    # Expiry policy (seconds)
    upload_expires_in: int = 900
    read_expires_in: int = 3600
    max_expires_in: int = 604800

    public_base_url: Optional[str] = None  # Public/CDN domain
    encode_object_key: bool = False

    def missing_fields(self) -> list[str]:
        """Names of required credential/location settings that are unset."""
        required = {
            "access_key_id": self.access_key_id,
            "secret_access_key": (
                self.secret_access_key.get_secret_value()
                if self.secret_access_key is not None else None
            ),
            "bucket_name": self.bucket_name,
            "account_id": self.account_id,
        }
        return [name for name, value in required.items() if not value]
