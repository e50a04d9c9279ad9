"""Storage signing data transfer objects."""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, SecretStr


class SigningCredentials(BaseModel):
    """Long-lived key pair; only the access key id ever leaves the process."""
    model_config = ConfigDict(frozen=True)

    access_key_id: str
    secret_access_key: SecretStr


class BucketLocation(BaseModel):
    """Endpoint and path prefix of one bucket."""
    model_config = ConfigDict(frozen=True)

    account_id: str
    bucket_name: str
    storage_host: str = "r2.cloudflarestorage.com"

    @property
    def host(self) -> str:
        return f"{self.account_id}.{self.storage_host}"

    @property
    def endpoint(self) -> str:
        return f"https://{self.host}"


class SignRequest(BaseModel):
    """A single operation to authorize."""
    model_config = ConfigDict(frozen=True)

    method: str
    object_key: str
    expiry_seconds: int
    content_type: Optional[str] = None  # Echoed to the caller, never signed


class PresignResult(BaseModel):
    """Presigned URL plus the unsigned public location of the object."""
    signed_url: str
    public_url: str
    object_key: str
    method: str = "GET"
    expires_in: int
    headers: dict[str, str] = Field(default_factory=dict)
