import pytest

from infrastructure.external.storage import (
    ConfigurationError,
    PresignedURLSigner,
    SignerType,
    StorageConfig,
    create_signer,
)
from infrastructure.external.storage.signers.manual import ManualSigV4Signer


def test_create_manual_signer(storage_config):
    signer = create_signer(storage_config)
    assert isinstance(signer, ManualSigV4Signer)
    assert isinstance(signer, PresignedURLSigner)
    assert signer.name == SignerType.MANUAL.value


def test_unknown_signer_rejected(storage_config):
    config = storage_config.model_copy(update={"signer": "presto"})
    with pytest.raises(ConfigurationError):
        create_signer(config)


def test_missing_settings_are_listed_by_name():
    config = StorageConfig(access_key_id="AKIDEXAMPLE", bucket_name="media")
    with pytest.raises(ConfigurationError) as exc_info:
        create_signer(config)
    assert exc_info.value.missing == ["secret_access_key", "account_id"]
    assert "AKIDEXAMPLE" not in str(exc_info.value)


def test_blank_secret_counts_as_missing(storage_config):
    config = storage_config.model_copy(update={"secret_access_key": None})
    assert config.missing_fields() == ["secret_access_key"]


def test_default_signer_is_plain_value():
    assert StorageConfig().signer == "manual"
    assert StorageConfig(signer=SignerType.SDK.value).signer == "sdk"


def test_unknown_signer_in_settings_does_not_break_config_loading(monkeypatch):
    from core.config import settings
    from infrastructure.external.storage import get_storage_config

    monkeypatch.setattr(settings.storage, "signer", "bogus")
    get_storage_config.cache_clear()
    try:
        config = get_storage_config()
        assert config.signer == "bogus"
        with pytest.raises(ConfigurationError):
            create_signer(config)
    finally:
        get_storage_config.cache_clear()
