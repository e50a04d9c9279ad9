"""
统一响应格式定义

调用方（前端上传流程）只识别扁平的 `{"error": "..."}` 错误体，
因此错误响应不再包裹 code/data 信封。
"""
from typing import Iterable, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """错误响应体"""
    error: str = Field(..., description="简短错误描述，不包含内部异常细节")


class HealthResponse(BaseModel):
    status: str = "healthy"
    signer: Optional[str] = None


def error_response(message: str) -> ErrorResponse:
    """
    创建错误响应

    Args:
        message: 返回给调用方的错误消息

    Returns:
        ErrorResponse: 错误响应对象
    """
    return ErrorResponse(error=message)


def cors_headers(allow_origin: str, allow_headers: Iterable[str]) -> dict[str, str]:
    """浏览器调用方需要的 CORS 响应头（中间件与全局异常处理器共用）"""
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": ", ".join(allow_headers),
    }
