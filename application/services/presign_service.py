"""Application layer orchestration for presigned upload/read URLs (application/services)."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from application.dto import ObjectURLResponseDTO, PresignUploadResponseDTO
from application.ports.storage import PresignPort, PresignedURL
from core.logging_config import get_logger
from domain.common.exceptions import (
    BusinessException,
    InvalidSignRequestException,
    SigningFailedException,
)

logger = get_logger(__name__)


class PresignService:
    """Presign use cases bridging API and the signing port.

    Input is checked before the port is touched, so a bad request is a 400
    even when the deployment is also misconfigured.
    """

    def __init__(
        self,
        presigner: PresignPort,
        *,
        upload_expires_in: int = 900,
        read_expires_in: int = 3600,
    ):
        self._presigner = presigner
        self._upload_expires_in = upload_expires_in
        self._read_expires_in = read_expires_in

    async def presign_upload(
        self,
        *,
        file_name: Optional[str],
        content_type: Optional[str],
        now: Optional[datetime] = None,
    ) -> PresignUploadResponseDTO:
        """Issue a presigned PUT for ``file_name``."""
        if not file_name or not content_type:
            raise InvalidSignRequestException(
                "fileName and contentType are required",
                field="fileName" if not file_name else "contentType",
            )

        presigned = self._presign(file_name, "PUT", self._upload_expires_in, content_type, now)
        return PresignUploadResponseDTO(
            presigned_url=presigned.url,
            public_url=presigned.public_url,
            file_name=file_name,
        )

    async def presign_read(
        self,
        *,
        file_name: Optional[str],
        now: Optional[datetime] = None,
    ) -> ObjectURLResponseDTO:
        """Issue a presigned GET for ``file_name``."""
        if not file_name:
            raise InvalidSignRequestException("fileName is required", field="fileName")

        presigned = self._presign(file_name, "GET", self._read_expires_in, None, now)
        return ObjectURLResponseDTO(url=presigned.url, file_name=file_name)

    def _presign(
        self,
        key: str,
        method: str,
        expires_in: int,
        content_type: Optional[str],
        now: Optional[datetime],
    ) -> PresignedURL:
        try:
            presigned = self._presigner.presign(
                key=key,
                method=method,
                expires_in=expires_in,
                content_type=content_type,
                now=now,
            )
        except BusinessException as exc:
            logger.error(
                "signing_failed",
                key=key,
                method=method,
                error_type=exc.error_type,
                error=exc.message,
            )
            raise
        except Exception as exc:
            logger.error(
                "signing_failed",
                key=key,
                method=method,
                error_type=type(exc).__name__,
                error=str(exc),
                exc_info=True,
            )
            raise SigningFailedException() from exc

        logger.info(
            "presigned_url_generated",
            key=key,
            method=method,
            expires_in=expires_in,
            signer=self._presigner.info().signer,
        )
        return presigned
