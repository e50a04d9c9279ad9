"""Application-owned presign port abstraction (hexagonal architecture).

Defines the minimal surface the presign use cases need so that the
application layer does not depend on signer or SDK details.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Protocol, runtime_checkable


@dataclass
class PresignedURL:
    url: str
    public_url: str
    key: str
    method: str = "GET"
    expires_in: int = 0
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class SignerInfo:
    signer: str
    bucket: Optional[str]
    region: str
    configured: bool


@runtime_checkable
class PresignPort(Protocol):
    def info(self) -> SignerInfo: ...

    def presign(
        self,
        key: str,
        method: str,
        expires_in: int,
        content_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PresignedURL: ...
