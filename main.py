"""
FastAPI应用主入口
"""
from fastapi import FastAPI
from contextlib import asynccontextmanager

from api.routes import storage as storage_routes
from api.middleware import RequestIDMiddleware, LoggingMiddleware, PermissiveCORSMiddleware
from core.config import settings
from core.exceptions import register_exception_handlers
from core.response import HealthResponse
from core.logging_config import get_logger, configure_logging
from infrastructure.external.storage import SignerType, get_storage_config


# 初始化日志：在入口处显式配置，避免模块导入时的副作用
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    config = get_storage_config()
    missing = config.missing_fields()
    if config.signer not in {t.value for t in SignerType}:
        logger.warning("signer_unknown", signer=config.signer)
    elif missing:
        # 不阻止启动：每个请求都会返回 500 配置错误，直到补齐配置
        logger.warning("signing_config_incomplete", missing=missing, signer=config.signer)
    else:
        logger.info(
            "signer_configured",
            signer=config.signer,
            bucket=config.bucket_name,
            storage_host=config.storage_host,
        )
    yield
    logger.info("application_shutdown", message="Application shutdown")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        description="SigV4 presigned URL issuer for S3-compatible object storage",
    )

    # 添加中间件（注意顺序：从下往上执行）
    # 1. 日志中间件（依赖request_id）
    app.add_middleware(LoggingMiddleware)

    # 2. Request ID中间件
    app.add_middleware(RequestIDMiddleware)

    # 3. CORS中间件（最外层，预检请求直接返回）
    app.add_middleware(
        PermissiveCORSMiddleware,
        allow_origin=settings.CORS_ALLOW_ORIGIN,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    register_exception_handlers(app)

    app.include_router(storage_routes.router, prefix="/api/v1")

    @app.get("/health", tags=["Health"], response_model=HealthResponse)
    async def health_check():
        """健康检查端点"""
        return HealthResponse(status="healthy", signer=get_storage_config().signer)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
