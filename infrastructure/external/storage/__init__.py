"""Presigned URL signing entry point."""
from functools import lru_cache

from core.config import settings
from .base import PresignedURLSigner
from .config import StorageConfig, SignerType
from .factory import create_signer, register_signer


@lru_cache
def get_storage_config() -> StorageConfig:
    """Get storage signing configuration from settings.

    Assembles StorageConfig from core.config.settings to maintain
    single source of truth for configuration. Missing credentials are
    kept as None here and reported per request.

    Returns:
        Storage configuration instance
    """
    s = settings.storage
    return StorageConfig(
        signer=s.signer or SignerType.MANUAL.value,
        access_key_id=s.access_key_id,
        secret_access_key=s.secret_access_key,
        bucket_name=s.bucket_name,
        account_id=s.account_id,
        storage_host=s.storage_host,
        region=s.region,
        service=s.service,
        upload_expires_in=s.upload_expires_in,
        read_expires_in=s.read_expires_in,
        max_expires_in=s.max_expires_in,
        public_base_url=s.public_base_url,
        encode_object_key=s.encode_object_key,
    )


# Export public interface
__all__ = [
    # Configuration
    "get_storage_config",
    "StorageConfig",
    "SignerType",

    # Signers
    "PresignedURLSigner",
    "create_signer",
    "register_signer",

    # Models
    "SigningCredentials",
    "BucketLocation",
    "SignRequest",
    "PresignResult",

    # Exceptions
    "StorageError",
    "ConfigurationError",
    "ValidationError",
    "SigningError",
]

from .models import (
    SigningCredentials,
    BucketLocation,
    SignRequest,
    PresignResult,
)
from .exceptions import (
    StorageError,
    ConfigurationError,
    ValidationError,
    SigningError,
)
