"""
配置文件 - 项目配置管理
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from pydantic import model_validator


class StorageSettings(BaseModel):
    # Credentials / location (all required at signing time, never at startup)
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    bucket_name: Optional[str] = None
    account_id: Optional[str] = None
    storage_host: str = "r2.cloudflarestorage.com"
    # SigV4 scope
    region: str = "auto"
    service: str = "s3"
    # Signing strategy: manual (hand-rolled SigV4) or sdk (boto3)
    signer: str = "manual"
    # Expiry policy (seconds)
    upload_expires_in: int = 900
    read_expires_in: int = 3600
    max_expires_in: int = 604800
    # Public/CDN domain used for publicUrl instead of the API endpoint
    public_base_url: Optional[str] = None
    # Percent-encode object key segments in the canonical URI
    encode_object_key: bool = False


class Settings(BaseSettings):
    """项目配置"""

    # 基础配置
    PROJECT_NAME: str = Field(default="Presigned URL Service")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")

    storage: StorageSettings = Field(default_factory=StorageSettings)

    # Flat aliases kept for deployments that export R2_* variables
    R2_ACCESS_KEY_ID: Optional[str] = None
    R2_SECRET_ACCESS_KEY: Optional[str] = None
    R2_BUCKET_NAME: Optional[str] = None
    R2_ACCOUNT_ID: Optional[str] = None

    # CORS配置：所有响应均返回 Access-Control-Allow-Origin: *
    CORS_ALLOW_ORIGIN: str = Field(default="*")
    CORS_ALLOW_HEADERS: list = Field(
        default=["authorization", "x-client-info", "apikey", "content-type"],
    )

    # 日志/请求体记录配置
    LOG_REQUEST_BODY_ENABLE_BY_DEFAULT: bool = Field(default=True)
    LOG_REQUEST_BODY_MAX_BYTES: int = Field(default=2048)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )

    @model_validator(mode="after")
    def _apply_r2_aliases(self):
        # 嵌套配置优先；未设置时回退到 R2_* 扁平变量
        s = self.storage
        s.access_key_id = s.access_key_id or self.R2_ACCESS_KEY_ID
        s.secret_access_key = s.secret_access_key or self.R2_SECRET_ACCESS_KEY
        s.bucket_name = s.bucket_name or self.R2_BUCKET_NAME
        s.account_id = s.account_id or self.R2_ACCOUNT_ID
        return self

    @field_validator("CORS_ALLOW_HEADERS", mode="before")
    @classmethod
    def _parse_cors_headers(cls, v):
        """允许 JSON 字符串或逗号分隔字符串两种格式。"""
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                import json
                try:
                    arr = json.loads(s)
                    if isinstance(arr, list):
                        return arr
                except ValueError:
                    pass
            if "," in s:
                return [item.strip() for item in s.split(",") if item.strip()]
            return [s]
        return v


settings = Settings()
