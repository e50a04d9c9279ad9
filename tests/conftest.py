"""Pytest bootstrap configuration.

Pin the environment before application settings are imported so tests never
pick up real R2 credentials from the shell or a local .env.
"""
import os

for _name in ("R2_ACCESS_KEY_ID", "R2_SECRET_ACCESS_KEY", "R2_BUCKET_NAME", "R2_ACCOUNT_ID"):
    os.environ.pop(_name, None)
os.environ.setdefault("DEBUG", "false")

from datetime import datetime, timezone

import pytest

from infrastructure.external.storage import StorageConfig


TEST_ACCESS_KEY_ID = "AKIDEXAMPLE"
TEST_SECRET_ACCESS_KEY = "test-secret-access-key"
TEST_BUCKET = "media"
TEST_ACCOUNT_ID = "acct123"
FIXED_NOW = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def storage_config() -> StorageConfig:
    return StorageConfig(
        access_key_id=TEST_ACCESS_KEY_ID,
        secret_access_key=TEST_SECRET_ACCESS_KEY,
        bucket_name=TEST_BUCKET,
        account_id=TEST_ACCOUNT_ID,
    )
