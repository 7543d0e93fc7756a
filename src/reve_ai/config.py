"""Reve API 客户端配置。

reve-ai v0.1.0

环境变量:
    REVE_AI_API_KEY: API 认证 token（未显式传入 api_key 时使用）

全局配置:
    configure(...) 在进程启动时设置一次，之后创建的客户端以其为基础；
    reset_configuration() 清空（用于测试）。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace

__all__ = [
    "API_KEY_ENV",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_OPEN_TIMEOUT",
    "DEFAULT_MAX_RETRIES",
    "MAX_PROMPT_LENGTH",
    "MAX_REFERENCE_IMAGES",
    "VALID_ASPECT_RATIOS",
    "ReveConfig",
    "configure",
    "get_configuration",
    "reset_configuration",
]

API_KEY_ENV = "REVE_AI_API_KEY"

# 连接参数默认值
DEFAULT_BASE_URL = "https://api.reve.com"
DEFAULT_TIMEOUT = 120
DEFAULT_OPEN_TIMEOUT = 30
DEFAULT_MAX_RETRIES = 2

# 输入校验常量
MAX_PROMPT_LENGTH = 2560
MAX_REFERENCE_IMAGES = 6
VALID_ASPECT_RATIOS = ("16:9", "9:16", "3:2", "2:3", "4:3", "3:4", "1:1")


def _api_key_from_env() -> str | None:
    return os.environ.get(API_KEY_ENV)


def _mask_token(token: str | None) -> str:
    """脱敏 token，只显示前4位和后4位。"""
    if not token:
        return "(empty)"
    if len(token) <= 8:
        return token[:2] + "***"
    return f"{token[:4]}...{token[-4:]}"


@dataclass(frozen=True)
class ReveConfig:
    """Reve 客户端配置。

    构造后不可变；需要不同参数时用 merge() 得到新实例。

    Attributes:
        api_key: API 认证 token（默认读取 REVE_AI_API_KEY）
        base_url: API 基础 URL
        timeout: 单次请求超时（秒）
        open_timeout: 建立连接超时（秒）
        max_retries: 可重试错误的最大重试次数
        logger: 调试日志使用的 logger
        debug: 是否记录请求/响应调试日志（需同时设置 logger）
    """

    api_key: str | None = field(default_factory=_api_key_from_env)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    open_timeout: float = DEFAULT_OPEN_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    logger: logging.Logger | None = None
    debug: bool = False

    @property
    def is_valid(self) -> bool:
        """检查是否已配置 API key。"""
        return self.api_key is not None and self.api_key != ""

    def merge(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        open_timeout: float | None = None,
        max_retries: int | None = None,
        logger: logging.Logger | None = None,
        debug: bool | None = None,
    ) -> ReveConfig:
        """返回覆盖了非 None 参数的新配置。"""
        overrides = {
            "api_key": api_key,
            "base_url": base_url,
            "timeout": timeout,
            "open_timeout": open_timeout,
            "max_retries": max_retries,
            "logger": logger,
            "debug": debug,
        }
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)

    def __repr__(self) -> str:
        parts = []
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "api_key":
                parts.append(f"api_key={_mask_token(value)}")
            else:
                parts.append(f"{f.name}={value!r}")
        return f"ReveConfig({', '.join(parts)})"


# 全局配置实例（未配置时为 None）
_configuration: ReveConfig | None = None


def configure(
    *,
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
    open_timeout: float | None = None,
    max_retries: int | None = None,
    logger: logging.Logger | None = None,
    debug: bool | None = None,
) -> ReveConfig:
    """设置全局配置。

    重复调用时在已有全局配置上叠加覆盖项。应在创建客户端之前、
    由单一调用方完成。

    Example:
        reve_ai.configure(api_key="your-api-key", timeout=90)
        client = reve_ai.ReveClient()
    """
    global _configuration
    base = _configuration if _configuration is not None else ReveConfig()
    _configuration = base.merge(
        api_key=api_key,
        base_url=base_url,
        timeout=timeout,
        open_timeout=open_timeout,
        max_retries=max_retries,
        logger=logger,
        debug=debug,
    )
    return _configuration


def get_configuration() -> ReveConfig | None:
    """获取全局配置实例。"""
    return _configuration


def reset_configuration() -> None:
    """清空全局配置（用于测试）。"""
    global _configuration
    _configuration = None
