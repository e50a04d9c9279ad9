"""Hand-rolled SigV4 presigned URL signer."""
from datetime import datetime
from typing import Optional

from core.logging_config import get_logger
from .. import sigv4
from ..config import StorageConfig, SignerType
from ..exceptions import ConfigurationError, SigningError, ValidationError
from ..models import BucketLocation, PresignResult, SigningCredentials, SignRequest
from ..utils import (
    MAX_EXPIRES_IN,
    credentials_from_config,
    location_from_config,
    public_url,
    validate_sign_request,
)

logger = get_logger(__name__)


class ManualSigV4Signer:
    """SigV4 query-string signer built on hashlib/hmac.

    The signing key is derived again on every call; nothing computed from
    the secret outlives ``presign``.
    """

    name = SignerType.MANUAL.value

    def __init__(
        self,
        credentials: SigningCredentials,
        location: BucketLocation,
        *,
        region: str = "auto",
        service: str = "s3",
        clock: sigv4.Clock = sigv4.utc_now,
        encode_object_key: bool = False,
        public_base_url: Optional[str] = None,
        max_expires_in: int = MAX_EXPIRES_IN,
    ):
        self.credentials = credentials
        self.location = location
        self.region = region
        self.service = service
        self.clock = clock
        self.encode_object_key = encode_object_key
        self.public_base_url = public_base_url
        self.max_expires_in = max_expires_in

    def presign(
        self,
        request: SignRequest,
        now: Optional[datetime] = None,
    ) -> PresignResult:
        """Generate presigned URL for one GET/PUT."""
        validate_sign_request(request, self.max_expires_in)

        try:
            amz_date, date_stamp = sigv4.format_timestamps(now or self.clock())
            scope = sigv4.credential_scope(date_stamp, self.region, self.service)

            path = sigv4.canonical_uri(
                self.location.bucket_name,
                request.object_key,
                encode_key=self.encode_object_key,
            )
            query = sigv4.canonical_query_string(
                sigv4.presign_query_params(
                    self.credentials.access_key_id,
                    scope,
                    amz_date,
                    request.expiry_seconds,
                )
            )
            canonical = sigv4.build_canonical_request(
                request.method, path, query, self.location.host
            )

            signing_key = sigv4.derive_signing_key(
                self.credentials.secret_access_key.get_secret_value(),
                date_stamp,
                self.region,
                self.service,
            )
            signature = sigv4.compute_signature(
                signing_key, sigv4.string_to_sign(amz_date, scope, canonical)
            )
        except (ConfigurationError, ValidationError):
            raise
        except Exception as e:
            raise SigningError(f"SigV4 signing failed for {request.object_key}: {e}") from e

        headers = {}
        if request.method == "PUT":
            headers["Content-Type"] = request.content_type or "application/octet-stream"

        logger.debug(
            "presign_signed",
            signer=self.name,
            key=request.object_key,
            method=request.method,
            amz_date=amz_date,
        )
        return PresignResult(
            signed_url=f"{self.location.endpoint}{path}?{query}&X-Amz-Signature={signature}",
            public_url=public_url(self.location, path, self.public_base_url),
            object_key=request.object_key,
            method=request.method,
            expires_in=request.expiry_seconds,
            headers=headers,
        )


def build_manual_signer(
    config: StorageConfig,
    clock: sigv4.Clock = sigv4.utc_now,
) -> ManualSigV4Signer:
    """Build manual signer.

    Raises:
        ConfigurationError: If any credential/location setting is missing
    """
    return ManualSigV4Signer(
        credentials_from_config(config),
        location_from_config(config),
        region=config.region,
        service=config.service,
        clock=clock,
        encode_object_key=config.encode_object_key,
        public_base_url=config.public_base_url,
        max_expires_in=config.max_expires_in,
    )
