"""Reve 客户端异常类。

reve-ai v0.1.0

ReveError
├── ConfigurationError          客户端配置无效（如缺少 API key）
├── ValidationError             请求参数在发出请求前被拒绝
├── NetworkError                传输层错误（无 HTTP 状态码）
│   ├── TimeoutError
│   └── ConnectionError
└── APIError                    HTTP 错误响应
    ├── BadRequestError            400
    ├── UnauthorizedError          401
    ├── InsufficientCreditsError   402
    ├── ForbiddenError             403
    ├── NotFoundError              404
    ├── UnprocessableEntityError   422
    ├── RateLimitError             429
    └── ServerError                5xx
"""

from __future__ import annotations

from typing import Any, Mapping

__all__ = [
    "ReveError",
    "ConfigurationError",
    "ValidationError",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "APIError",
    "BadRequestError",
    "UnauthorizedError",
    "InsufficientCreditsError",
    "ForbiddenError",
    "NotFoundError",
    "UnprocessableEntityError",
    "RateLimitError",
    "ServerError",
    "ERROR_CODE_MAP",
    "error_class_for_status",
    "get_header",
]

REQUEST_ID_HEADER = "x-reve-request-id"


def get_header(headers: Mapping[str, str], name: str) -> str | None:
    """不区分大小写地读取响应头。"""
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def parse_int(value: Any) -> int | None:
    """把响应头中的整数字符串转为 int，无法解析时返回 None。"""
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class ReveError(Exception):
    """Reve 客户端基础异常。"""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(ReveError):
    """配置错误（如缺少 API key）。"""
    pass


class ValidationError(ReveError):
    """请求参数校验失败，请求不会发出。"""
    pass


class NetworkError(ReveError):
    """网络层错误（连接或传输失败，而非 API 错误）。"""
    pass


class TimeoutError(NetworkError):
    """请求超时。"""
    pass


class ConnectionError(NetworkError):
    """无法建立连接（DNS 失败、连接被拒绝等）。"""
    pass


class APIError(ReveError):
    """API 返回的 HTTP 错误。

    Attributes:
        status: HTTP 状态码
        body: 解析后的响应体
        headers: 响应头
        message: 错误消息
    """

    def __init__(
        self,
        message: str = "",
        status: int | None = None,
        body: dict[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.status = status
        self.body = body if body is not None else {}
        self.headers = dict(headers) if headers is not None else {}
        super().__init__(message)

    @classmethod
    def from_response(
        cls,
        status: int,
        body: dict[str, Any],
        headers: Mapping[str, str],
    ) -> APIError:
        """根据状态码构建对应的异常实例。"""
        error_class = error_class_for_status(status)
        message = body.get("message") or body.get("error") or "Unknown error"
        return error_class(str(message), status=status, body=body, headers=headers)

    @property
    def request_id(self) -> str | None:
        """响应头中的请求 ID（排查问题时提供给支持团队）。"""
        return get_header(self.headers, REQUEST_ID_HEADER)

    @property
    def error_code(self) -> str | None:
        """响应体中的错误码（如 PROMPT_TOO_LONG、INVALID_API_KEY）。"""
        return self.body.get("error_code")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, message={self.message!r})"


class BadRequestError(APIError):
    """400：请求参数无效。"""
    pass


class UnauthorizedError(APIError):
    """401：API key 无效或缺失。"""
    pass


class InsufficientCreditsError(APIError):
    """402：账户额度不足。"""
    pass


class ForbiddenError(APIError):
    """403：API key 无权执行该操作。"""
    pass


class NotFoundError(APIError):
    """404：资源不存在。"""
    pass


class UnprocessableEntityError(APIError):
    """422：输入无法被理解或处理（如参考图不是合法 base64）。"""
    pass


class RateLimitError(APIError):
    """429：超出速率限制。"""

    @property
    def retry_after(self) -> int | None:
        """建议重试等待时间（秒）。"""
        return parse_int(get_header(self.headers, "retry-after"))


class ServerError(APIError):
    """5xx：服务端错误，通常是暂时性的。"""
    pass


ERROR_CODE_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    402: InsufficientCreditsError,
    403: ForbiddenError,
    404: NotFoundError,
    422: UnprocessableEntityError,
    429: RateLimitError,
}


def error_class_for_status(status: int) -> type[APIError]:
    """状态码 -> 异常类；未映射的 5xx 为 ServerError，其余为 APIError。"""
    error_class = ERROR_CODE_MAP.get(status)
    if error_class is not None:
        return error_class
    if status >= 500:
        return ServerError
    return APIError
