"""Reve 图像生成 API 的 Python 客户端。

reve-ai v0.1.0

提供图像生成（create）、编辑（edit）和混合（remix）的 aiohttp 异步封装。

用法:
    import reve_ai

    reve_ai.configure(api_key="your-api-key", timeout=120)

    async with reve_ai.ReveClient() as client:
        result = await client.images.create(prompt="A sunset over mountains")
        result.save("sunset.png")
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import (
    DEFAULT_BASE_URL,
    MAX_PROMPT_LENGTH,
    MAX_REFERENCE_IMAGES,
    VALID_ASPECT_RATIOS,
    ReveConfig,
    configure,
    get_configuration,
    reset_configuration,
)
from .errors import (
    APIError,
    BadRequestError,
    ConfigurationError,
    ConnectionError,
    ForbiddenError,
    InsufficientCreditsError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ReveError,
    ServerError,
    TimeoutError,
    UnauthorizedError,
    UnprocessableEntityError,
    ValidationError,
)
from .types import ImageResponse, Response
from .http_client import HTTPClient
from .resources import Images
from .client import ReveClient


def client(api_key: str | None = None, **options) -> ReveClient:
    """创建客户端，等同于 ReveClient(api_key, **options)。"""
    return ReveClient(api_key, **options)


__all__ = [
    "__version__",
    # Client
    "ReveClient",
    "client",
    "HTTPClient",
    "Images",
    # Config
    "DEFAULT_BASE_URL",
    "MAX_PROMPT_LENGTH",
    "MAX_REFERENCE_IMAGES",
    "VALID_ASPECT_RATIOS",
    "ReveConfig",
    "configure",
    "get_configuration",
    "reset_configuration",
    # Errors
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
    # Types
    "Response",
    "ImageResponse",
]
