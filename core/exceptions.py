"""
自定义异常映射与全局异常处理器
"""
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uuid
from starlette import status as http_status

from .config import settings
from .response import cors_headers, error_response
from shared.codes import BusinessCode
from core.logging_config import get_logger
from domain.common.exceptions import BusinessException


def business_code_to_http_status(code: int) -> int:
    """根据业务码映射HTTP状态码（默认400）。"""
    mapping = {
        BusinessCode.PARAM_ERROR: http_status.HTTP_400_BAD_REQUEST,
        BusinessCode.PARAM_MISSING: http_status.HTTP_400_BAD_REQUEST,
        BusinessCode.PARAM_TYPE_ERROR: http_status.HTTP_400_BAD_REQUEST,
        BusinessCode.PARAM_VALIDATION_ERROR: http_status.HTTP_400_BAD_REQUEST,

        BusinessCode.BUSINESS_ERROR: http_status.HTTP_400_BAD_REQUEST,
        BusinessCode.NOT_FOUND: http_status.HTTP_404_NOT_FOUND,

        BusinessCode.SYSTEM_ERROR: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
        BusinessCode.CONFIGURATION_ERROR: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
        BusinessCode.SIGNING_ERROR: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
    try:
        bc = BusinessCode(code)
    except ValueError:
        return http_status.HTTP_400_BAD_REQUEST
    return mapping.get(bc, http_status.HTTP_400_BAD_REQUEST)


def _request_id(request: Request) -> str:
    return getattr(getattr(request, "state", object()), "request_id", None) or str(uuid.uuid4())


def register_exception_handlers(app: FastAPI):
    """
    注册全局异常处理器

    Args:
        app: FastAPI应用实例
    """

    logger = get_logger(__name__)

    @app.exception_handler(BusinessException)
    async def business_exception_handler(request: Request, exc: BusinessException):
        """处理业务异常"""
        status_code = business_code_to_http_status(exc.code)
        log = logger.warning if status_code < 500 else logger.error
        log(
            "business_exception",
            request_id=_request_id(request),
            code=int(exc.code),
            error_type=exc.error_type,
            field=exc.field,
            details=exc.details,
        )
        response = error_response(exc.message)
        return JSONResponse(status_code=status_code, content=response.model_dump())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """处理参数验证异常（包括无法解析的 JSON 请求体）"""
        errors = exc.errors()
        first_error = errors[0] if errors else {}
        field = ".".join(str(loc) for loc in first_error.get("loc", [])[1:])
        logger.warning(
            "request_validation_failed",
            request_id=_request_id(request),
            field=field,
            reason=first_error.get("msg", "unknown"),
        )
        message = f"Invalid request body: {first_error.get('msg', 'unknown')}"
        if field:
            message = f"Invalid request field '{field}': {first_error.get('msg', 'unknown')}"
        return JSONResponse(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            content=error_response(message).model_dump(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """处理HTTP异常"""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(str(exc.detail)).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """处理所有未捕获的异常：只返回简短消息，细节仅写日志"""
        logger.error(
            "unhandled_exception",
            request_id=_request_id(request),
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response("Internal server error").model_dump(),
            # ServerErrorMiddleware 位于 CORS 中间件之外，需自行补齐 CORS 头
            headers=cors_headers(settings.CORS_ALLOW_ORIGIN, settings.CORS_ALLOW_HEADERS),
        )
