"""Reve API 客户端。

reve-ai v0.1.0
"""

from __future__ import annotations

import logging

from .config import ReveConfig, get_configuration
from .errors import ConfigurationError
from .http_client import HTTPClient
from .resources import Images

__all__ = ["ReveClient"]


class ReveClient:
    """Reve API 客户端。

    配置优先级：api_key 参数 > 其他命名参数 > config 参数 或 全局配置
    > REVE_AI_API_KEY 环境变量 > 默认值。缺少 API key 时在构造阶段
    抛出 ConfigurationError，不会发出任何请求。

    Example:
        async with ReveClient(api_key="your-key", timeout=60) as client:
            result = await client.images.create(prompt="A cat wearing a top hat")
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: ReveConfig | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        open_timeout: float | None = None,
        max_retries: int | None = None,
        logger: logging.Logger | None = None,
        debug: bool | None = None,
    ) -> None:
        """初始化客户端。

        Args:
            api_key: API key（可选，默认使用全局配置或环境变量）
            config: 基础配置（可选，默认使用全局配置）
            base_url: API 基础 URL
            timeout: 请求超时（秒）
            open_timeout: 连接超时（秒）
            max_retries: 最大重试次数
            logger: 调试日志 logger
            debug: 是否记录请求/响应调试日志
        """
        base = config or get_configuration() or ReveConfig()
        self._config = base.merge(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            open_timeout=open_timeout,
            max_retries=max_retries,
            logger=logger,
            debug=debug,
        )

        if not self._config.is_valid:
            raise ConfigurationError("API key is required")

        self._http_client: HTTPClient | None = None
        self._images: Images | None = None

    @property
    def configuration(self) -> ReveConfig:
        return self._config

    @property
    def http_client(self) -> HTTPClient:
        if self._http_client is None:
            self._http_client = HTTPClient(self._config)
        return self._http_client

    @property
    def images(self) -> Images:
        """图像生成、编辑和混合操作。"""
        if self._images is None:
            self._images = Images(self)
        return self._images

    async def close(self) -> None:
        """关闭底层 HTTP 会话。"""
        if self._http_client is not None:
            await self._http_client.close()

    async def __aenter__(self) -> ReveClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"ReveClient({self._config!r})"
