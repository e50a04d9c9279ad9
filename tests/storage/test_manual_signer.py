import re
from datetime import timedelta
from urllib.parse import parse_qs, urlsplit

import pytest

from infrastructure.external.storage import SignRequest, ValidationError, sigv4
from infrastructure.external.storage.signers.manual import build_manual_signer


UPLOAD = SignRequest(
    method="PUT", object_key="posts/u1/abc.jpg", expiry_seconds=900, content_type="image/jpeg"
)
READ = SignRequest(method="GET", object_key="posts/u1/abc.jpg", expiry_seconds=3600)


def _query(url: str) -> dict:
    return {k: v[0] for k, v in parse_qs(urlsplit(url).query).items()}


def test_upload_url_shape(storage_config, fixed_now):
    signer = build_manual_signer(storage_config)
    result = signer.presign(UPLOAD, now=fixed_now)

    parts = urlsplit(result.signed_url)
    assert parts.scheme == "https"
    assert parts.netloc == "acct123.r2.cloudflarestorage.com"
    assert parts.path == "/media/posts/u1/abc.jpg"

    query = _query(result.signed_url)
    assert query["X-Amz-Algorithm"] == "AWS4-HMAC-SHA256"
    assert query["X-Amz-Credential"] == "AKIDEXAMPLE/20240101/auto/s3/aws4_request"
    assert query["X-Amz-Date"] == "20240101T000000Z"
    assert query["X-Amz-Expires"] == "900"
    assert query["X-Amz-SignedHeaders"] == "host"
    assert re.fullmatch(r"[0-9a-f]{64}", query["X-Amz-Signature"])

    # Signature is the last parameter and the credential slashes stay encoded
    assert "X-Amz-Credential=AKIDEXAMPLE%2F20240101%2Fauto%2Fs3%2Faws4_request" in result.signed_url
    assert result.signed_url.rsplit("&", 1)[1].startswith("X-Amz-Signature=")

    assert result.public_url == "https://acct123.r2.cloudflarestorage.com/media/posts/u1/abc.jpg"
    assert result.method == "PUT"
    assert result.expires_in == 900
    assert result.headers == {"Content-Type": "image/jpeg"}


def test_read_url_differs_from_upload(storage_config, fixed_now):
    signer = build_manual_signer(storage_config)
    upload = signer.presign(UPLOAD, now=fixed_now)
    read = signer.presign(READ, now=fixed_now)

    assert _query(read.signed_url)["X-Amz-Expires"] == "3600"
    assert read.headers == {}
    assert read.public_url == upload.public_url
    assert _query(read.signed_url)["X-Amz-Signature"] != _query(upload.signed_url)["X-Amz-Signature"]


def test_presign_is_deterministic(storage_config, fixed_now):
    signer = build_manual_signer(storage_config)
    assert signer.presign(UPLOAD, now=fixed_now) == signer.presign(UPLOAD, now=fixed_now)


def test_signature_tracks_clock_and_expiry(storage_config, fixed_now):
    signer = build_manual_signer(storage_config)
    base = _query(signer.presign(UPLOAD, now=fixed_now).signed_url)["X-Amz-Signature"]
    later = _query(signer.presign(UPLOAD, now=fixed_now + timedelta(seconds=1)).signed_url)
    longer = _query(
        signer.presign(UPLOAD.model_copy(update={"expiry_seconds": 901}), now=fixed_now).signed_url
    )
    assert later["X-Amz-Signature"] != base
    assert longer["X-Amz-Signature"] != base


def test_injected_clock_used_when_now_omitted(storage_config, fixed_now):
    signer = build_manual_signer(storage_config, clock=lambda: fixed_now)
    assert signer.presign(READ) == build_manual_signer(storage_config).presign(READ, now=fixed_now)


def test_put_defaults_content_type(storage_config, fixed_now):
    signer = build_manual_signer(storage_config)
    result = signer.presign(UPLOAD.model_copy(update={"content_type": None}), now=fixed_now)
    assert result.headers == {"Content-Type": "application/octet-stream"}


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"object_key": ""}, "object_key"),
        ({"object_key": "   "}, "object_key"),
        ({"object_key": "/posts/abc.jpg"}, "object_key"),
        ({"method": "DELETE"}, "method"),
        ({"expiry_seconds": 0}, "expiry_seconds"),
        ({"expiry_seconds": -5}, "expiry_seconds"),
        ({"expiry_seconds": 604801}, "expiry_seconds"),
    ],
)
def test_invalid_requests_rejected_before_hashing(storage_config, fixed_now, monkeypatch, overrides, field):
    def _no_crypto(*args, **kwargs):
        raise AssertionError("hashing must not run for rejected requests")

    monkeypatch.setattr(sigv4, "derive_signing_key", _no_crypto)
    monkeypatch.setattr(sigv4, "sha256_hex", _no_crypto)

    signer = build_manual_signer(storage_config)
    with pytest.raises(ValidationError) as exc_info:
        signer.presign(UPLOAD.model_copy(update=overrides), now=fixed_now)
    assert exc_info.value.field == field


def test_max_expiry_is_accepted(storage_config, fixed_now):
    signer = build_manual_signer(storage_config)
    result = signer.presign(READ.model_copy(update={"expiry_seconds": 604800}), now=fixed_now)
    assert _query(result.signed_url)["X-Amz-Expires"] == "604800"


def test_public_base_url_override(storage_config, fixed_now):
    config = storage_config.model_copy(update={"public_base_url": "https://cdn.example.com/"})
    result = build_manual_signer(config).presign(UPLOAD, now=fixed_now)
    assert result.public_url == "https://cdn.example.com/posts/u1/abc.jpg"
    assert urlsplit(result.signed_url).netloc == "acct123.r2.cloudflarestorage.com"


def test_object_key_verbatim_unless_encoding_enabled(storage_config, fixed_now):
    request = READ.model_copy(update={"object_key": "posts/my photo.jpg"})

    verbatim = build_manual_signer(storage_config).presign(request, now=fixed_now)
    assert "/media/posts/my photo.jpg?" in verbatim.signed_url

    config = storage_config.model_copy(update={"encode_object_key": True})
    encoded = build_manual_signer(config).presign(request, now=fixed_now)
    assert "/media/posts/my%20photo.jpg?" in encoded.signed_url
    assert encoded.public_url.endswith("/media/posts/my%20photo.jpg")


def test_secret_never_in_url(storage_config, fixed_now):
    result = build_manual_signer(storage_config).presign(UPLOAD, now=fixed_now)
    assert "test-secret-access-key" not in result.signed_url
    assert "test-secret-access-key" not in repr(build_manual_signer(storage_config).credentials)
