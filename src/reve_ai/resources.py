"""Reve API 资源。

reve-ai v0.1.0

Images 提供图像生成（create）、编辑（edit）和混合（remix）三个操作。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from .types import ImageResponse
from .validation import (
    validate_aspect_ratio,
    validate_prompt,
    validate_reference_image,
    validate_reference_images,
)

if TYPE_CHECKING:
    from .client import ReveClient

__all__ = ["Images"]

CREATE_ENDPOINT = "/v1/image/create"
EDIT_ENDPOINT = "/v1/image/edit"
REMIX_ENDPOINT = "/v1/image/remix"


def _with_options(
    body: dict[str, Any],
    aspect_ratio: str | None,
    version: str | None,
) -> dict[str, Any]:
    """只在提供时加入 aspect_ratio / version。"""
    if aspect_ratio is not None:
        body["aspect_ratio"] = aspect_ratio
    if version is not None:
        body["version"] = version
    return body


class Images:
    """图像生成、编辑和混合操作。

    所有返回的图片均为 base64 编码的 PNG。

    Example:
        client = ReveClient(api_key="your-key")
        result = await client.images.create(
            prompt="A sunset over mountains with a lake in the foreground",
            aspect_ratio="16:9",
        )
        result.save("sunset.png")
    """

    def __init__(self, client: ReveClient) -> None:
        self._client = client

    async def _post(self, path: str, body: dict[str, Any]) -> ImageResponse:
        response = await self._client.http_client.post(path, body)
        return ImageResponse.from_response(response)

    async def create(
        self,
        prompt: str,
        aspect_ratio: str | None = None,
        version: str | None = None,
    ) -> ImageResponse:
        """根据文本提示词生成图片。

        Args:
            prompt: 图片描述（最多 2560 字符）
            aspect_ratio: 输出纵横比（16:9/9:16/3:2/2:3/4:3/3:4/1:1），默认由 API 决定
            version: 模型版本，默认 latest

        Raises:
            ValidationError: prompt 为空或超长，或 aspect_ratio 无效
            APIError: API 返回错误
        """
        validate_prompt(prompt)
        validate_aspect_ratio(aspect_ratio)

        body = _with_options({"prompt": prompt}, aspect_ratio, version)
        return await self._post(CREATE_ENDPOINT, body)

    async def edit(
        self,
        edit_instruction: str,
        reference_image: str,
        aspect_ratio: str | None = None,
        version: str | None = None,
    ) -> ImageResponse:
        """按文本指令编辑已有图片。

        Args:
            edit_instruction: 编辑指令（最多 2560 字符）
            reference_image: base64 编码的待编辑图片
            aspect_ratio: 输出纵横比，默认与参考图一致
            version: 模型版本，默认 latest

        Raises:
            ValidationError: 指令为空或超长、参考图为空，或 aspect_ratio 无效
            UnprocessableEntityError: 参考图不是合法的 base64
        """
        validate_prompt(edit_instruction, field_name="Edit instruction")
        validate_reference_image(reference_image)
        validate_aspect_ratio(aspect_ratio)

        body = _with_options(
            {"edit_instruction": edit_instruction, "reference_image": reference_image},
            aspect_ratio,
            version,
        )
        return await self._post(EDIT_ENDPOINT, body)

    async def remix(
        self,
        prompt: str,
        reference_images: Sequence[str],
        aspect_ratio: str | None = None,
        version: str | None = None,
    ) -> ImageResponse:
        """混合多张参考图生成新图片。

        prompt 中可以用 <img>N</img> 引用参考图，原样发送给 API。

        Args:
            prompt: 图片描述（最多 2560 字符）
            reference_images: base64 编码的参考图列表（1-6 张）
            aspect_ratio: 输出纵横比
            version: 模型版本，默认 latest

        Raises:
            ValidationError: prompt 无效、参考图数量不在 1-6 之间或包含空图片，
                或 aspect_ratio 无效
        """
        validate_prompt(prompt)
        validate_reference_images(reference_images)
        validate_aspect_ratio(aspect_ratio)

        body = _with_options(
            {"prompt": prompt, "reference_images": list(reference_images)},
            aspect_ratio,
            version,
        )
        return await self._post(REMIX_ENDPOINT, body)
