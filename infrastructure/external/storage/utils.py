"""Sign request validators and credential helpers.

All checks here run before any hashing, so a rejected request costs no
cryptographic work.
"""
from typing import Optional

from core.logging_config import get_logger
from .config import StorageConfig
from .exceptions import ConfigurationError, ValidationError
from .models import BucketLocation, SigningCredentials, SignRequest

logger = get_logger(__name__)

SUPPORTED_METHODS = frozenset({"GET", "PUT"})
MAX_EXPIRES_IN = 604800  # 7 days, the SigV4 presign ceiling


def validate_sign_request(
    request: SignRequest,
    max_expires_in: int = MAX_EXPIRES_IN,
) -> None:
    """Reject malformed sign requests.

    Args:
        request: Operation to authorize
        max_expires_in: Upper bound for ``expiry_seconds``

    Raises:
        ValidationError: If the key, method or expiry is unusable
    """
    if not request.object_key or not request.object_key.strip():
        raise ValidationError("Object key is required", field="object_key")
    if request.object_key.startswith("/"):
        raise ValidationError(
            "Object key must be a relative path", field="object_key"
        )
    if request.method not in SUPPORTED_METHODS:
        raise ValidationError(
            f"Unsupported method: {request.method}", field="method"
        )

    expires = request.expiry_seconds
    if isinstance(expires, bool) or not isinstance(expires, int) or expires <= 0:
        raise ValidationError(
            "Expiry must be a positive integer", field="expiry_seconds"
        )
    if expires > max_expires_in:
        raise ValidationError(
            f"Expiry exceeds maximum of {max_expires_in} seconds",
            field="expiry_seconds",
        )


def validate_signing_config(config: StorageConfig) -> None:
    """Ensure every credential/location setting is present.

    Raises:
        ConfigurationError: Lists missing field names (never values)
    """
    missing = config.missing_fields()
    if missing:
        logger.error("signing_config_missing", missing=missing)
        raise ConfigurationError(
            f"Missing storage configuration: {', '.join(missing)}",
            missing=missing,
        )


def credentials_from_config(config: StorageConfig) -> SigningCredentials:
    validate_signing_config(config)
    return SigningCredentials(
        access_key_id=config.access_key_id,
        secret_access_key=config.secret_access_key,
    )


def location_from_config(config: StorageConfig) -> BucketLocation:
    validate_signing_config(config)
    return BucketLocation(
        account_id=config.account_id,
        bucket_name=config.bucket_name,
        storage_host=config.storage_host,
    )


def public_url(
    location: BucketLocation,
    canonical_path: str,
    public_base_url: Optional[str] = None,
) -> str:
    """Unsigned URL of an object; carries no authorization.

    Args:
        location: Bucket endpoint
        canonical_path: ``/{bucket}/{key}`` as signed
        public_base_url: Optional CDN / public bucket domain; replaces the
            endpoint and bucket prefix
    """
    if public_base_url:
        key = canonical_path[len(f"/{location.bucket_name}/"):]
        return f"{public_base_url.rstrip('/')}/{key}"
    return f"{location.endpoint}{canonical_path}"
