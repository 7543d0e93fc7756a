"""请求参数校验。

reve-ai v0.1.0

所有校验在发出请求之前执行，失败时抛出 ValidationError。
"""

from __future__ import annotations

from typing import Sequence

from .config import MAX_PROMPT_LENGTH, MAX_REFERENCE_IMAGES, VALID_ASPECT_RATIOS
from .errors import ValidationError

__all__ = [
    "validate_prompt",
    "validate_aspect_ratio",
    "validate_reference_image",
    "validate_reference_images",
]


def validate_prompt(prompt: str | None, field_name: str = "Prompt") -> None:
    """校验提示词（或编辑指令）非空且不超长。

    Args:
        prompt: 提示词
        field_name: 错误消息中使用的字段名（如 "Edit instruction"）
    """
    if not prompt:
        raise ValidationError(f"{field_name} is required")
    if len(prompt) > MAX_PROMPT_LENGTH:
        raise ValidationError(
            f"{field_name} exceeds maximum length of {MAX_PROMPT_LENGTH} characters"
        )


def validate_aspect_ratio(aspect_ratio: str | None) -> None:
    """校验纵横比；None 表示使用 API 默认值。"""
    if aspect_ratio is None:
        return
    if aspect_ratio not in VALID_ASPECT_RATIOS:
        raise ValidationError(
            f"Invalid aspect_ratio '{aspect_ratio}'. "
            f"Must be one of: {', '.join(VALID_ASPECT_RATIOS)}"
        )


def validate_reference_image(image: str | None) -> None:
    if not image:
        raise ValidationError("Reference image is required")


def validate_reference_images(images: Sequence[str | None] | None) -> None:
    """校验参考图列表：1 到 MAX_REFERENCE_IMAGES 张，且均非空。

    只报告第一张（下标最小的）空图片，下标从 0 开始。
    """
    if not images:
        raise ValidationError("Reference images are required")
    if len(images) > MAX_REFERENCE_IMAGES:
        raise ValidationError(f"Maximum {MAX_REFERENCE_IMAGES} reference images allowed")
    for index, image in enumerate(images):
        if not image:
            raise ValidationError(f"Reference image at index {index} is empty")
