"""
Exceptions - 自定义异常类

提供统一的异常层次结构，便于错误处理和 API 响应。
异常消息与 details 中不得包含密码、API Key 或服务端密钥。
"""

from typing import Any


class GutCareError(Exception):
    """GutCare 基础异常

    所有自定义异常的基类。

    Attributes:
        message: 错误消息
        code: 错误代码（可选）
        details: 额外详情（可选）
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigurationError(GutCareError):
    """配置错误

    启动时核心密钥缺失或格式错误，进程必须终止。
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        code: str = "CONFIGURATION_ERROR",
        fields: list[str] | None = None,
    ) -> None:
        super().__init__(message, code, {"fields": fields} if fields else None)
        self.fields = fields or []


class ValidationError(GutCareError):
    """验证错误

    当输入数据验证失败时抛出。
    """

    def __init__(
        self,
        message: str = "Validation failed",
        code: str = "VALIDATION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class NotFoundError(GutCareError):
    """资源不存在

    当请求的资源不存在时抛出。
    """

    def __init__(
        self,
        resource: str,
        resource_id: str | None = None,
        code: str = "NOT_FOUND",
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} not found: {resource_id}"
        super().__init__(message, code, {"resource": resource, "id": resource_id})
        self.resource = resource
        self.resource_id = resource_id


class PermissionDeniedError(GutCareError):
    """权限不足

    当请求携带凭证但凭证不被接受时抛出（HTTP 403）。
    """

    def __init__(
        self,
        message: str = "Permission denied",
        code: str = "PERMISSION_DENIED",
        action: str | None = None,
        resource: str | None = None,
    ) -> None:
        details = {}
        if action:
            details["action"] = action
        if resource:
            details["resource"] = resource
        super().__init__(message, code, details)


class AuthenticationError(GutCareError):
    """认证错误

    凭证错误或缺少 Token 时抛出（HTTP 401）。
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        code: str = "AUTHENTICATION_ERROR",
    ) -> None:
        super().__init__(message, code)


class TokenError(PermissionDeniedError):
    """Token 错误

    Token 存在但签名无效或已过期时抛出。过期与伪造使用同一异常类型，
    调用方无法据此区分两者。
    """

    def __init__(
        self,
        message: str = "Invalid or expired token",
        code: str = "TOKEN_ERROR",
    ) -> None:
        super().__init__(message, code)


class ConflictError(GutCareError):
    """资源冲突

    当操作导致资源冲突时抛出（如重复注册）。
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        code: str = "CONFLICT",
        resource: str | None = None,
    ) -> None:
        details = {"resource": resource} if resource else {}
        super().__init__(message, code, details)


class NoApiKeyConfiguredError(GutCareError):
    """未配置 API Key 错误"""

    def __init__(
        self,
        message: str = "No API key configured. Please add your Gemini API key first.",
        code: str = "NO_API_KEY",
    ) -> None:
        super().__init__(message, code)


class DecryptionError(GutCareError):
    """解密错误

    存储的密文损坏或服务端密钥不匹配。消息中只描述失败类别。
    """

    def __init__(
        self,
        message: str = "Stored API key is unusable, please re-enter your API key",
        code: str = "DECRYPTION_ERROR",
        reason: str | None = None,
    ) -> None:
        super().__init__(message, code)
        self.reason = reason


class StorageUnavailableError(GutCareError):
    """存储不可用

    数据库连接丢失时抛出，只影响当前请求。
    """

    def __init__(
        self,
        operation: str,
        message: str = "Storage unavailable",
        code: str = "STORAGE_UNAVAILABLE",
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, code, {"operation": operation})
        self.operation = operation
        self.original_error = original_error


class ExternalServiceError(GutCareError):
    """外部服务错误

    当调用外部服务（Gemini 等）失败时抛出，不自动重试。
    """

    def __init__(
        self,
        service: str,
        message: str | None = None,
        code: str = "EXTERNAL_SERVICE_ERROR",
        original_error: Exception | None = None,
    ) -> None:
        msg = message or f"External service error: {service}"
        super().__init__(msg, code, {"service": service})
        self.service = service
        self.original_error = original_error
