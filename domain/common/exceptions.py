"""领域层业务异常定义，供领域与基础设施使用。

核心（core）层仅负责全局映射与异常处理，尽量避免领域层反向依赖核心层。
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """业务异常基类"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class InvalidSignRequestException(BusinessException):
    """Caller sent a request that cannot be signed (retry after fixing input)."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        code: int = BusinessCode.PARAM_MISSING,
        details: dict | None = None,
    ):
        super().__init__(
            code=code,
            message=message,
            error_type="InvalidSignRequest",
            details=details,
            field=field,
        )


class SigningConfigurationException(BusinessException):
    """Deployment is missing signing settings (not retryable until ops fix it)."""

    def __init__(self, missing: Optional[list[str]] = None):
        details = {"missing": list(missing)} if missing else None
        super().__init__(
            code=BusinessCode.CONFIGURATION_ERROR,
            message="Server configuration error",
            error_type="ConfigurationError",
            details=details,
        )


class SigningFailedException(BusinessException):
    def __init__(self, message: str = "Failed to generate presigned URL"):
        super().__init__(
            code=BusinessCode.SIGNING_ERROR,
            message=message,
            error_type="SigningFailed",
        )
