"""Reve API HTTP 层。

reve-ai v0.1.0

使用 aiohttp 发送 POST 请求：
1. 可重试状态码（429/5xx）和超时按指数退避自动重试
2. 传输层异常统一转换为 NetworkError 子类，不泄露 aiohttp 异常
3. 非 2xx 响应按状态码转换为对应的 APIError 子类
"""

from __future__ import annotations

import asyncio
import json
import logging
import platform
import time
from typing import Any

import aiohttp

from . import __version__
from .config import ReveConfig
from .debug_utils import sanitize_body, sanitize_headers
from .errors import APIError, ConnectionError, NetworkError, TimeoutError, get_header
from .types import Response

__all__ = [
    "HTTPClient",
    "RETRY_STATUSES",
    "parse_body",
]

logger = logging.getLogger(__name__)

# 重试配置
RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})
RETRY_INTERVAL = 0.5
RETRY_BACKOFF_FACTOR = 2

# 连接失败消息中表示超时的关键字
_TIMEOUT_MARKERS = ("timed out", "timeout", "execution expired")


def parse_body(text: str | None) -> dict[str, Any]:
    """解析响应体。

    空响应体返回 {}；无法解析为 JSON 对象时返回 {"raw": text}。不会抛异常。
    """
    if not text:
        return {}
    try:
        data = json.loads(text)
    except ValueError:
        return {"raw": text}
    if not isinstance(data, dict):
        return {"raw": text}
    return data


def _describe(error: BaseException) -> str:
    return str(error) or type(error).__name__


class HTTPClient:
    """Reve API 底层 HTTP 客户端。

    aiohttp 会话在第一次请求时创建并在之后复用。会话创建过程中没有
    await，同一事件循环中的并发任务会共享同一个会话；不要跨事件循环
    或线程共享同一个实例。
    """

    def __init__(self, config: ReveConfig) -> None:
        self._config = config
        self._session: aiohttp.ClientSession | None = None

    @property
    def configuration(self) -> ReveConfig:
        return self._config

    @property
    def user_agent(self) -> str:
        return f"reve-ai-python/{__version__} Python/{platform.python_version()}"

    @property
    def headers(self) -> dict[str, str]:
        """每个请求都携带的固定请求头。"""
        return {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    def _build_url(self, path: str) -> str:
        if path.startswith("/"):
            path = path[1:]
        return f"{self._config.base_url.rstrip('/')}/{path}"

    async def _get_session(self) -> aiohttp.ClientSession:
        """获取或创建 HTTP 会话。"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self.headers,
                timeout=aiohttp.ClientTimeout(
                    total=self._config.timeout,
                    connect=self._config.open_timeout,
                ),
            )
        return self._session

    async def close(self) -> None:
        """关闭 HTTP 会话。"""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def post(self, path: str, body: dict[str, Any] | None = None) -> Response:
        """发送 POST 请求。

        Args:
            path: 相对路径（如 /v1/image/create）
            body: JSON 请求体

        Returns:
            2xx 响应对应的 Response

        Raises:
            APIError: 非 2xx 响应（按状态码细分）
            TimeoutError: 请求超时
            ConnectionError: 无法建立连接
            NetworkError: 其他传输层错误
        """
        url = self._build_url(path)
        payload = body if body is not None else {}

        try:
            status, headers, text = await self._post_with_retry(url, payload)
        except (asyncio.TimeoutError, aiohttp.ServerTimeoutError) as e:
            raise TimeoutError(f"Request timed out: {_describe(e)}") from e
        except aiohttp.ClientConnectionError as e:
            raise self._connection_failed(e) from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"Network error: {_describe(e)}") from e

        return self._handle_response(status, headers, text)

    def _connection_failed(self, error: aiohttp.ClientConnectionError) -> NetworkError:
        message = _describe(error)
        if any(marker in message.lower() for marker in _TIMEOUT_MARKERS):
            return TimeoutError(f"Request timed out: {message}")
        return ConnectionError(f"Connection failed: {message}")

    async def _post_with_retry(
        self,
        url: str,
        payload: dict[str, Any],
    ) -> tuple[int, dict[str, str], str]:
        """发送请求并处理重试。

        Returns:
            (status, headers, text) 元组，为最后一次尝试的结果
        """
        session = await self._get_session()
        max_retries = max(0, self._config.max_retries)
        attempt = 0

        while True:
            self._log_request(url, payload)
            start_time = time.monotonic()
            try:
                async with session.post(url, json=payload) as resp:
                    status = resp.status
                    headers = dict(resp.headers)
                    text = await resp.text(errors="replace")
            except (asyncio.TimeoutError, aiohttp.ServerTimeoutError) as e:
                if attempt >= max_retries:
                    raise
                delay = self._retry_delay(attempt)
                logger.warning(f"Request timed out, retrying in {delay}s: {_describe(e)}")
                await self._sleep(delay)
                attempt += 1
                continue

            duration_ms = int((time.monotonic() - start_time) * 1000)
            self._log_response(status, headers, text, duration_ms)

            if status in RETRY_STATUSES and attempt < max_retries:
                delay = self._retry_delay(attempt, headers)
                logger.warning(f"API error {status}, retrying in {delay}s: {text[:200]}")
                await self._sleep(delay)
                attempt += 1
                continue

            return status, headers, text

    def _retry_delay(self, attempt: int, headers: dict[str, str] | None = None) -> float:
        """计算第 attempt 次重试前的等待时间。

        Retry-After 响应头只会延长指数退避时间，不会缩短。
        """
        backoff = RETRY_INTERVAL * (RETRY_BACKOFF_FACTOR ** attempt)
        if headers:
            retry_after = get_header(headers, "retry-after")
            if retry_after:
                try:
                    return max(backoff, float(retry_after))
                except ValueError:
                    pass
        return backoff

    async def _sleep(self, delay: float) -> None:
        await asyncio.sleep(delay)

    def _handle_response(self, status: int, headers: dict[str, str], text: str) -> Response:
        body = parse_body(text)
        if 200 <= status <= 299:
            return Response(status=status, headers=headers, body=body)
        raise APIError.from_response(status, body, headers)

    def _log_request(self, url: str, payload: dict[str, Any]) -> None:
        if not (self._config.debug and self._config.logger):
            return
        self._config.logger.debug(
            f"POST {url} headers={sanitize_headers(self.headers)} "
            f"body={sanitize_body(payload)}"
        )

    def _log_response(
        self,
        status: int,
        headers: dict[str, str],
        text: str,
        duration_ms: int,
    ) -> None:
        if not (self._config.debug and self._config.logger):
            return
        self._config.logger.debug(
            f"Response {status} ({duration_ms}ms) headers={headers} "
            f"body={sanitize_body(parse_body(text))}"
        )
