"""Infrastructure adapter that implements the application PresignPort
by delegating to the configured signer and translating models/errors.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from application.ports.storage import PresignPort, PresignedURL, SignerInfo
from domain.common.exceptions import (
    InvalidSignRequestException,
    SigningConfigurationException,
    SigningFailedException,
)
from shared.codes import BusinessCode
from infrastructure.external.storage import (
    ConfigurationError,
    SignRequest,
    StorageConfig,
    StorageError,
    ValidationError,
    create_signer,
)
from infrastructure.external.storage import sigv4


class SignerPortAdapter(PresignPort):
    """Builds a signer per call so a missing setting surfaces on each request."""

    def __init__(self, config: StorageConfig, clock: sigv4.Clock = sigv4.utc_now):
        self.config = config
        self.clock = clock

    def info(self) -> SignerInfo:
        return SignerInfo(
            signer=self.config.signer,
            bucket=self.config.bucket_name,
            region=self.config.region,
            configured=not self.config.missing_fields(),
        )

    def presign(
        self,
        key: str,
        method: str,
        expires_in: int,
        content_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PresignedURL:
        try:
            signer = create_signer(self.config, self.clock)
            result = signer.presign(
                SignRequest(
                    method=method,
                    object_key=key,
                    expiry_seconds=expires_in,
                    content_type=content_type,
                ),
                now=now,
            )
        except ValidationError as exc:
            raise InvalidSignRequestException(
                str(exc), field=exc.field, code=BusinessCode.PARAM_ERROR
            ) from exc
        except ConfigurationError as exc:
            raise SigningConfigurationException(exc.missing) from exc
        except StorageError as exc:
            raise SigningFailedException() from exc

        return PresignedURL(
            url=result.signed_url,
            public_url=result.public_url,
            key=result.object_key,
            method=result.method,
            expires_in=result.expires_in,
            headers=dict(result.headers),
        )
