"""Pytest 配置和 fixtures。"""

from __future__ import annotations

import asyncio
import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from unittest import mock

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

# 项目根目录
PROJECT_ROOT = Path(__file__).parent.parent

# 添加 src 目录到 Python 路径
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from reve_ai import ReveClient, ReveConfig, reset_configuration  # noqa: E402

TEST_API_KEY = "test_api_key"

# 1x1 透明 PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@dataclass
class RecordedRequest:
    """Fake API 收到的请求。"""
    method: str
    path: str
    headers: Any
    raw_body: str
    json: Any = None


@dataclass
class ScriptedResponse:
    """Fake API 依次返回的响应。"""
    status: int = 200
    body: Any = None
    text: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    delay: float = 0.0


class FakeReveAPI:
    """本地运行的 Reve API 替身。

    按 enqueue() 的顺序返回响应，队列为空时返回默认的成功响应。
    """

    def __init__(self) -> None:
        self.requests: list[RecordedRequest] = []
        self._responses: list[ScriptedResponse] = []
        self.server: TestServer | None = None

    @property
    def base_url(self) -> str:
        assert self.server is not None
        return str(self.server.make_url("/")).rstrip("/")

    def enqueue(
        self,
        status: int = 200,
        body: Any = None,
        *,
        text: str | None = None,
        headers: dict[str, str] | None = None,
        delay: float = 0.0,
    ) -> None:
        self._responses.append(ScriptedResponse(
            status=status,
            body=body,
            text=text,
            headers=headers or {},
            delay=delay,
        ))

    async def handle(self, request: web.Request) -> web.Response:
        raw = await request.text()
        try:
            parsed = json.loads(raw) if raw else None
        except ValueError:
            parsed = None
        self.requests.append(RecordedRequest(
            method=request.method,
            path=request.path,
            headers=request.headers.copy(),
            raw_body=raw,
            json=parsed,
        ))

        if self._responses:
            scripted = self._responses.pop(0)
        else:
            scripted = ScriptedResponse(body={"image": PNG_BASE64})

        if scripted.delay:
            await asyncio.sleep(scripted.delay)

        if scripted.text is not None:
            text = scripted.text
        elif scripted.body is not None:
            text = json.dumps(scripted.body)
        else:
            text = ""
        return web.Response(status=scripted.status, text=text, headers=scripted.headers)


@pytest.fixture(autouse=True)
def clean_environment():
    """每个测试前清空全局配置和 REVE_AI_API_KEY。"""
    reset_configuration()
    env = {k: v for k, v in os.environ.items() if k != "REVE_AI_API_KEY"}
    with mock.patch.dict(os.environ, env, clear=True):
        yield
    reset_configuration()


@pytest_asyncio.fixture
async def fake_api():
    """启动本地 Fake Reve API。"""
    api = FakeReveAPI()
    app = web.Application()
    app.router.add_post("/{tail:.*}", api.handle)
    server = TestServer(app)
    await server.start_server()
    api.server = server
    try:
        yield api
    finally:
        await server.close()


@pytest.fixture
def config_factory(fake_api: FakeReveAPI):
    """生成指向 Fake API 的配置。"""

    def factory(**overrides: Any) -> ReveConfig:
        options = {"api_key": TEST_API_KEY, "base_url": fake_api.base_url}
        options.update(overrides)
        return ReveConfig(**options)

    return factory


@pytest_asyncio.fixture
async def client(config_factory):
    """指向 Fake API 的客户端。"""
    reve = ReveClient(config=config_factory())
    try:
        yield reve
    finally:
        await reve.close()
