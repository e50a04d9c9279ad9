"""AWS Signature Version 4 primitives for presigned (query-string) URLs.

Only what a presigned single-object GET/PUT needs is implemented:

- one signed header (``host``), so the eventual request may carry any
  Content-Type / Content-Length without invalidating the signature
- ``UNSIGNED-PAYLOAD`` as the payload hash, since the body is not known
  when the URL is issued
- the five ``X-Amz-*`` query parameters, in canonical (alphabetical) order

Every function here is pure; the only input that varies between two calls
with the same arguments is the clock, and that is passed in explicitly.
"""
from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable
from urllib.parse import quote

from .exceptions import ConfigurationError

ALGORITHM = "AWS4-HMAC-SHA256"
UNSIGNED_PAYLOAD = "UNSIGNED-PAYLOAD"
SIGNED_HEADERS = "host"
SCOPE_TERMINATOR = "aws4_request"
AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


def format_timestamps(now: datetime) -> tuple[str, str]:
    """Return ``(amz_date, date_stamp)`` for an instant.

    Naive datetimes are taken as UTC. Sub-second precision is dropped, not
    rounded.

    Example:
        2024-01-01T00:00:00.999Z -> ("20240101T000000Z", "20240101")
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    amz_date = now.strftime(AMZ_DATE_FORMAT)
    return amz_date, amz_date[:8]


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def uri_encode(value: str, *, encode_slash: bool = True) -> str:
    """URI-encode using the SigV4 rules.

    Unreserved characters (``A-Z a-z 0-9 - _ . ~``) pass through, everything
    else becomes ``%XX`` with uppercase hex over the UTF-8 bytes.
    """
    return quote(value, safe="" if encode_slash else "/")


def canonical_uri(bucket_name: str, object_key: str, *, encode_key: bool = False) -> str:
    """Path-style URI ``/{bucket}/{key}``.

    The key is embedded verbatim unless ``encode_key`` is set, in which case
    each segment is encoded and ``/`` separators are kept.
    """
    key = uri_encode(object_key, encode_slash=False) if encode_key else object_key
    return f"/{bucket_name}/{key}"


def credential_scope(date_stamp: str, region: str = "auto", service: str = "s3") -> str:
    return f"{date_stamp}/{region}/{service}/{SCOPE_TERMINATOR}"


# ---------------------------------------------------------------------------
# Canonical request
# ---------------------------------------------------------------------------


def presign_query_params(
    access_key_id: str,
    scope: str,
    amz_date: str,
    expires_in: int,
) -> list[tuple[str, str]]:
    """Ordered ``(name, encoded value)`` table of the presign parameters.

    The order is the canonical sort order; adding a parameter means adding
    one row in its alphabetical position.
    """
    return [
        ("X-Amz-Algorithm", ALGORITHM),
        ("X-Amz-Credential", uri_encode(f"{access_key_id}/{scope}")),
        ("X-Amz-Date", amz_date),
        ("X-Amz-Expires", str(expires_in)),
        ("X-Amz-SignedHeaders", SIGNED_HEADERS),
    ]


def canonical_query_string(params: list[tuple[str, str]]) -> str:
    return "&".join(f"{name}={value}" for name, value in params)


@dataclass(frozen=True)
class CanonicalRequest:
    """The six canonical fields that get hashed and signed."""

    method: str
    uri: str
    query_string: str
    host: str
    signed_headers: str = SIGNED_HEADERS
    payload_hash: str = UNSIGNED_PAYLOAD

    @property
    def canonical_headers(self) -> str:
        return f"host:{self.host}\n"

    def render(self) -> str:
        return "\n".join([
            self.method,
            self.uri,
            self.query_string,
            self.canonical_headers,
            self.signed_headers,
            self.payload_hash,
        ])

    def __str__(self) -> str:
        return self.render()


def build_canonical_request(
    method: str,
    uri: str,
    query_string: str,
    host: str,
) -> CanonicalRequest:
    """Assemble the canonical request.

    Raises:
        ConfigurationError: If any field is empty
    """
    fields = {"method": method, "uri": uri, "query_string": query_string, "host": host}
    empty = [name for name, value in fields.items() if not value]
    if empty:
        raise ConfigurationError(
            f"Canonical request fields are empty: {', '.join(empty)}",
            missing=empty,
        )
    return CanonicalRequest(method=method, uri=uri, query_string=query_string, host=host)


# ---------------------------------------------------------------------------
# Hashing / key derivation
# ---------------------------------------------------------------------------


def sha256_hex(data: str) -> str:
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def hmac_sha256(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def derive_signing_key(
    secret_access_key: str,
    date_stamp: str,
    region: str = "auto",
    service: str = "s3",
) -> bytes:
    """Four-stage HMAC chain: date -> region -> service -> ``aws4_request``."""
    k_date = hmac_sha256(f"AWS4{secret_access_key}".encode("utf-8"), date_stamp)
    k_region = hmac_sha256(k_date, region)
    k_service = hmac_sha256(k_region, service)
    return hmac_sha256(k_service, SCOPE_TERMINATOR)


def string_to_sign(amz_date: str, scope: str, canonical_request: CanonicalRequest) -> str:
    return "\n".join([
        ALGORITHM,
        amz_date,
        scope,
        sha256_hex(canonical_request.render()),
    ])


def compute_signature(signing_key: bytes, to_sign: str) -> str:
    return hmac.new(signing_key, to_sign.encode("utf-8"), hashlib.sha256).hexdigest()
