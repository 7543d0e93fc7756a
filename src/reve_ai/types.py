"""Reve API 响应类型。

reve-ai v0.1.0
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import REQUEST_ID_HEADER, ReveError, get_header, parse_int

__all__ = [
    "Response",
    "ImageResponse",
]

VERSION_HEADER = "x-reve-version"
CONTENT_VIOLATION_HEADER = "x-reve-content-violation"
CREDITS_USED_HEADER = "x-reve-credits-used"
CREDITS_REMAINING_HEADER = "x-reve-credits-remaining"


@dataclass(frozen=True)
class Response:
    """API 响应。

    Attributes:
        status: HTTP 状态码
        headers: 响应头
        body: 解析后的 JSON 响应体
    """
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        """状态码是否为 2xx。"""
        return 200 <= self.status <= 299

    @property
    def request_id(self) -> str | None:
        """请求 ID，优先取响应体，其次取响应头。"""
        value = self.body.get("request_id")
        if value is not None:
            return value
        return get_header(self.headers, REQUEST_ID_HEADER)


@dataclass(frozen=True)
class ImageResponse(Response):
    """图像生成/编辑/混合接口的响应。

    响应体字段优先，缺失时回退到对应的 x-reve-* 响应头。

    Example:
        result = await client.images.create(prompt="A sunset")
        result.save("sunset.png")
    """

    @classmethod
    def from_response(cls, response: Response) -> ImageResponse:
        return cls(status=response.status, headers=response.headers, body=response.body)

    @property
    def image(self) -> str | None:
        """Base64 编码的 PNG 图片。"""
        return self.body.get("image")

    @property
    def base64(self) -> str | None:
        """image 的别名。"""
        return self.image

    @property
    def version(self) -> str | None:
        """生成所用的模型版本（如 reve-create@20250915）。"""
        value = self.body.get("version")
        if value is not None:
            return value
        return get_header(self.headers, VERSION_HEADER)

    @property
    def content_violation(self) -> bool:
        """生成内容是否违反内容政策。"""
        return (
            self.body.get("content_violation") is True
            or get_header(self.headers, CONTENT_VIOLATION_HEADER) == "true"
        )

    @property
    def credits_used(self) -> int | None:
        """本次请求消耗的额度。"""
        return self._counter("credits_used", CREDITS_USED_HEADER)

    @property
    def credits_remaining(self) -> int | None:
        """请求后剩余的额度。"""
        return self._counter("credits_remaining", CREDITS_REMAINING_HEADER)

    def _counter(self, key: str, header: str) -> int | None:
        value = self.body.get(key)
        if value is not None:
            return value
        return parse_int(get_header(self.headers, header))

    def image_bytes(self) -> bytes:
        """解码后的图片字节。

        Raises:
            ReveError: 响应中没有图片，或图片不是合法的 base64
        """
        if not self.image:
            raise ReveError("Response does not contain image data")
        try:
            return base64.b64decode(self.image, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ReveError(f"Invalid image data: {e}") from e

    def save(self, path: str | Path) -> str:
        """把图片写入文件。

        Returns:
            写入文件的绝对路径
        """
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(self.image_bytes())
        return str(file_path.absolute())
