"""
GutCare Backend - Main Application

FastAPI 应用入口点。配置在 create_app 中加载一次并保存在 app.state 上。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import sys
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from bootstrap.config import Settings, load_settings
from domains.assistant.presentation import router as assistant_router
from domains.health.presentation import router as health_router
from domains.identity.domain.services import PasswordService, SecretCipher, TokenService
from domains.identity.presentation import router as identity_router
from exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    DecryptionError,
    ExternalServiceError,
    GutCareError,
    NoApiKeyConfiguredError,
    NotFoundError,
    PermissionDeniedError,
    StorageUnavailableError,
    TokenError,
    ValidationError,
)
from libs.db.database import close_db, create_tables, init_db
from libs.llm.gemini import gemini_client_factory
from libs.middleware import LoggingMiddleware
from utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理"""
    settings: Settings = fastapi_app.state.settings
    logger.info("=" * 60)
    logger.info("启动 GutCare Backend")
    logger.info("  APP_ENV: %s (is_development=%s)", settings.app_env, settings.is_development)
    logger.info("  API_PREFIX: %s", settings.api_prefix)
    logger.info("  AI_MODEL: %s", settings.ai_model)
    logger.info("=" * 60)

    await init_db(settings)
    if settings.database_auto_create:
        await create_tables()
        logger.info("Database tables ensured")

    yield

    try:
        import litellm  # pylint: disable=import-outside-toplevel

        if hasattr(litellm, "close_litellm_async_clients"):
            await litellm.close_litellm_async_clients()
    except Exception as e:
        logger.warning("Error closing LiteLLM async clients: %s", type(e).__name__)

    await close_db()
    logger.info("GutCare Backend stopped")


# =============================================================================
# 全局异常处理器
# =============================================================================


def _error_response(
    status_code: int,
    message: str,
    code: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """构建错误响应"""
    content: dict[str, Any] = {"error": message}
    if code:
        content["code"] = code
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


# 异常类型 -> (HTTP 状态码, 日志级别)
_ERROR_STATUS: list[tuple[type[GutCareError], int, str]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST, "warning"),
    (NoApiKeyConfiguredError, status.HTTP_400_BAD_REQUEST, "info"),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "info"),
    (TokenError, status.HTTP_403_FORBIDDEN, "info"),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN, "warning"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "warning"),
    (ConflictError, status.HTTP_409_CONFLICT, "info"),
    (DecryptionError, status.HTTP_500_INTERNAL_SERVER_ERROR, "error"),
    (StorageUnavailableError, status.HTTP_500_INTERNAL_SERVER_ERROR, "error"),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY, "error"),
    (GutCareError, status.HTTP_500_INTERNAL_SERVER_ERROR, "error"),
]


def _make_handler(status_code: int, level: str) -> Any:
    async def handler(request: Request, exc: GutCareError) -> JSONResponse:
        getattr(logger, level)(
            "%s on %s %s: %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.message,
        )
        return _error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code,
            details=exc.details,
        )

    return handler


async def request_validation_error_handler(
    _request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """请求体校验失败统一返回 400

    只返回字段位置和原因，不回显输入值（可能包含密码）。
    """
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning("Request validation failed: %s", [e["loc"] for e in errors])
    return _error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message="Invalid request",
        code="VALIDATION_ERROR",
        details={"errors": errors},
    )


async def general_exception_handler(
    _request: Request,
    exc: Exception,
) -> JSONResponse:
    """处理未捕获的异常"""
    logger.exception("Unhandled exception: %s", type(exc).__name__)
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="Internal server error",
        code="INTERNAL_ERROR",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """注册异常处理器"""
    for exc_type, status_code, level in _ERROR_STATUS:
        app.add_exception_handler(exc_type, _make_handler(status_code, level))
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)


# =============================================================================
# 应用工厂
# =============================================================================


def create_app(settings: Settings | None = None) -> FastAPI:
    """创建 FastAPI 应用

    Args:
        settings: 应用配置，默认从环境变量和 .env 加载

    Raises:
        ConfigurationError: 必需配置缺失或格式错误
    """
    settings = settings or load_settings()
    setup_logging(log_level=settings.log_level, is_development=settings.is_development)

    app = FastAPI(
        title=settings.app_name,
        description="GutCare 后端 API",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # 配置与无状态服务只创建一次
    app.state.settings = settings
    app.state.password_service = PasswordService(settings)
    app.state.token_service = TokenService(settings)
    app.state.cipher = SecretCipher(settings)
    app.state.ai_client_factory = gemini_client_factory(settings)

    # 通配源不能与 allow_credentials 同时使用
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    # =========================================================================
    # API 路由
    # =========================================================================
    prefix = settings.api_prefix.rstrip("/")
    app.include_router(identity_router, prefix=prefix, tags=["Authentication"])
    app.include_router(health_router, prefix=prefix, tags=["Health Records"])
    app.include_router(assistant_router, prefix=f"{prefix}/gemini", tags=["Assistant"])

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """健康检查"""
        return {"status": "healthy"}

    return app


def run() -> None:
    """命令行入口：加载配置并启动 uvicorn

    配置错误时以非零状态退出。
    """
    setup_logging()
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.critical("Startup aborted: %s", e.message)
        sys.exit(1)

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
