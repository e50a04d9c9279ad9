import pytest

from application.ports.storage import PresignPort, PresignedURL, SignerInfo
from application.services.presign_service import PresignService
from domain.common.exceptions import (
    InvalidSignRequestException,
    SigningConfigurationException,
    SigningFailedException,
)
from infrastructure.adapters.storage_port import SignerPortAdapter
from infrastructure.external.storage import StorageConfig
from shared.codes import BusinessCode


class StubPresigner(PresignPort):
    def __init__(self, error: Exception | None = None):
        self.calls = []
        self.error = error

    def info(self) -> SignerInfo:  # type: ignore[override]
        return SignerInfo(signer="stub", bucket="media", region="auto", configured=True)

    def presign(self, key, method, expires_in, content_type=None, now=None):  # type: ignore[override]
        self.calls.append((key, method, expires_in, content_type))
        if self.error is not None:
            raise self.error
        return PresignedURL(url=f"https://signed/{key}", public_url=f"https://public/{key}", key=key, method=method)


@pytest.mark.asyncio
async def test_presign_upload_uses_put_and_upload_expiry():
    stub = StubPresigner()
    svc = PresignService(stub, upload_expires_in=120)
    dto = await svc.presign_upload(file_name="posts/u1/abc.jpg", content_type="image/jpeg")
    assert stub.calls == [("posts/u1/abc.jpg", "PUT", 120, "image/jpeg")]
    assert dto.model_dump(by_alias=True) == {
        "presignedUrl": "https://signed/posts/u1/abc.jpg",
        "publicUrl": "https://public/posts/u1/abc.jpg",
        "fileName": "posts/u1/abc.jpg",
    }


@pytest.mark.asyncio
async def test_presign_read_uses_get_and_read_expiry():
    stub = StubPresigner()
    svc = PresignService(stub, read_expires_in=60)
    dto = await svc.presign_read(file_name="posts/u1/abc.jpg")
    assert stub.calls == [("posts/u1/abc.jpg", "GET", 60, None)]
    assert dto.model_dump(by_alias=True) == {"url": "https://signed/posts/u1/abc.jpg", "fileName": "posts/u1/abc.jpg"}


@pytest.mark.asyncio
@pytest.mark.parametrize("file_name, content_type", [(None, "image/jpeg"), ("a.jpg", None), (None, None)])
async def test_upload_requires_both_fields(file_name, content_type):
    stub = StubPresigner()
    with pytest.raises(InvalidSignRequestException) as exc_info:
        await PresignService(stub).presign_upload(file_name=file_name, content_type=content_type)
    assert exc_info.value.message == "fileName and contentType are required"
    assert stub.calls == []


@pytest.mark.asyncio
async def test_read_requires_file_name():
    with pytest.raises(InvalidSignRequestException) as exc_info:
        await PresignService(StubPresigner()).presign_read(file_name=None)
    assert exc_info.value.message == "fileName is required"


@pytest.mark.asyncio
async def test_unexpected_port_error_becomes_signing_failure():
    svc = PresignService(StubPresigner(error=RuntimeError("boom")))
    with pytest.raises(SigningFailedException) as exc_info:
        await svc.presign_read(file_name="a.jpg")
    assert exc_info.value.code == BusinessCode.SIGNING_ERROR
    assert "boom" not in exc_info.value.message


@pytest.mark.asyncio
async def test_missing_input_wins_over_missing_config():
    svc = PresignService(SignerPortAdapter(StorageConfig()))
    with pytest.raises(InvalidSignRequestException):
        await svc.presign_upload(file_name=None, content_type="image/jpeg")


@pytest.mark.asyncio
async def test_missing_config_reported_without_values():
    config = StorageConfig(access_key_id="AKIDEXAMPLE", bucket_name="media")
    svc = PresignService(SignerPortAdapter(config))
    with pytest.raises(SigningConfigurationException) as exc_info:
        await svc.presign_read(file_name="a.jpg")
    assert exc_info.value.message == "Server configuration error"
    assert exc_info.value.details == {"missing": ["secret_access_key", "account_id"]}


@pytest.mark.asyncio
async def test_adapter_maps_invalid_key_to_param_error(storage_config):
    svc = PresignService(SignerPortAdapter(storage_config))
    with pytest.raises(InvalidSignRequestException) as exc_info:
        await svc.presign_read(file_name="/etc/passwd")
    assert exc_info.value.code == BusinessCode.PARAM_ERROR
    assert exc_info.value.field == "object_key"


@pytest.mark.asyncio
async def test_adapter_round_trip(storage_config, fixed_now):
    adapter = SignerPortAdapter(storage_config)
    assert adapter.info().configured is True
    assert adapter.info().signer == "manual"

    dto = await PresignService(adapter).presign_upload(
        file_name="posts/u1/abc.jpg", content_type="image/jpeg", now=fixed_now
    )
    assert dto.presigned_url.startswith(
        "https://acct123.r2.cloudflarestorage.com/media/posts/u1/abc.jpg?X-Amz-Algorithm=AWS4-HMAC-SHA256&"
    )
    assert "X-Amz-Date=20240101T000000Z" in dto.presigned_url
    assert "X-Amz-Expires=900" in dto.presigned_url
    assert dto.public_url == "https://acct123.r2.cloudflarestorage.com/media/posts/u1/abc.jpg"


def test_adapter_reports_default_signer_value():
    assert SignerPortAdapter(StorageConfig()).info().signer == "manual"
