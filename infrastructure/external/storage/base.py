"""Presigned URL signer protocol definitions."""
from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from .models import PresignResult, SignRequest


@runtime_checkable
class PresignedURLSigner(Protocol):
    """Issues SigV4 presigned URLs for single-object GET/PUT.

    Implementations are stateless apart from their immutable credentials
    and location, and are safe to call concurrently.
    """

    name: str

    def presign(
        self,
        request: SignRequest,
        now: Optional[datetime] = None,
    ) -> PresignResult:
        """Sign one operation.

        Args:
            request: Operation to authorize
            now: Signing instant; the current UTC time when omitted
        """
        ...
