"""boto3-delegated presigned URL signer."""
from datetime import datetime
from typing import Any, Optional

from core.logging_config import get_logger
from .. import sigv4
from ..config import StorageConfig, SignerType
from ..exceptions import ConfigurationError, SigningError, ValidationError
from ..models import BucketLocation, PresignResult, SignRequest
from ..utils import (
    MAX_EXPIRES_IN,
    credentials_from_config,
    location_from_config,
    public_url,
    validate_sign_request,
)

logger = get_logger(__name__)

_CLIENT_METHODS = {"GET": "get_object", "PUT": "put_object"}


class Boto3PresignSigner:
    """Delegates SigV4 query signing to botocore.

    botocore reads its own clock, so an explicit ``now`` is not honoured;
    use the manual signer where a fixed signing instant is required.
    """

    name = SignerType.SDK.value

    def __init__(
        self,
        client: Any,  # boto3 S3 client
        location: BucketLocation,
        *,
        public_base_url: Optional[str] = None,
        max_expires_in: int = MAX_EXPIRES_IN,
    ):
        self.client = client
        self.location = location
        self.public_base_url = public_base_url
        self.max_expires_in = max_expires_in

    def presign(
        self,
        request: SignRequest,
        now: Optional[datetime] = None,
    ) -> PresignResult:
        """Generate presigned URL via ``generate_presigned_url``."""
        validate_sign_request(request, self.max_expires_in)
        if now is not None:
            logger.debug("presign_clock_ignored", signer=self.name)

        try:
            # ContentType is left out of Params so only `host` is signed
            url = self.client.generate_presigned_url(
                ClientMethod=_CLIENT_METHODS[request.method],
                Params={"Bucket": self.location.bucket_name, "Key": request.object_key},
                ExpiresIn=request.expiry_seconds,
                HttpMethod=request.method,
            )
        except (ConfigurationError, ValidationError):
            raise
        except Exception as e:
            raise SigningError(f"SDK presign failed for {request.object_key}: {e}") from e

        headers = {}
        if request.method == "PUT":
            headers["Content-Type"] = request.content_type or "application/octet-stream"

        # botocore always percent-encodes the key
        path = sigv4.canonical_uri(
            self.location.bucket_name, request.object_key, encode_key=True
        )
        return PresignResult(
            signed_url=url,
            public_url=public_url(self.location, path, self.public_base_url),
            object_key=request.object_key,
            method=request.method,
            expires_in=request.expiry_seconds,
            headers=headers,
        )


def build_sdk_signer(
    config: StorageConfig,
    clock: sigv4.Clock = sigv4.utc_now,
) -> Boto3PresignSigner:
    """Build boto3 signer.

    Args:
        config: Storage configuration
        clock: Unused; botocore timestamps requests itself

    Raises:
        ConfigurationError: If settings are missing or boto3 is unavailable
    """
    credentials = credentials_from_config(config)
    location = location_from_config(config)

    try:
        import boto3
        from botocore.config import Config as BotoConfig
    except ImportError:
        raise ConfigurationError("boto3 is required for the sdk signer")

    boto_config = BotoConfig(
        region_name=config.region,
        signature_version="s3v4",
        s3={"addressing_style": "path"},
    )
    client = boto3.client(
        service_name=config.service,
        endpoint_url=location.endpoint,
        aws_access_key_id=credentials.access_key_id,
        aws_secret_access_key=credentials.secret_access_key.get_secret_value(),
        config=boto_config,
    )
    return Boto3PresignSigner(
        client,
        location,
        public_base_url=config.public_base_url,
        max_expires_in=config.max_expires_in,
    )
