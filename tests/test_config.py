"""Config 模块测试。

测试默认值、REVE_AI_API_KEY 环境变量和全局配置管理。
"""

from __future__ import annotations

import logging
import os
from dataclasses import FrozenInstanceError
from unittest import mock

import pytest

from reve_ai.config import (
    DEFAULT_BASE_URL,
    MAX_PROMPT_LENGTH,
    MAX_REFERENCE_IMAGES,
    VALID_ASPECT_RATIOS,
    ReveConfig,
    configure,
    get_configuration,
    reset_configuration,
)


class TestDefaults:
    """测试默认值。"""

    def test_connection_defaults(self):
        config = ReveConfig()
        assert config.base_url == DEFAULT_BASE_URL == "https://api.reve.com"
        assert config.timeout == 120
        assert config.open_timeout == 30
        assert config.max_retries == 2
        assert config.logger is None
        assert config.debug is False

    def test_validation_constants(self):
        assert MAX_PROMPT_LENGTH == 2560
        assert MAX_REFERENCE_IMAGES == 6
        assert VALID_ASPECT_RATIOS == ("16:9", "9:16", "3:2", "2:3", "4:3", "3:4", "1:1")

    def test_api_key_defaults_to_none_without_env(self):
        assert ReveConfig().api_key is None


class TestEnvironment:
    """测试 REVE_AI_API_KEY 环境变量。"""

    def test_reads_api_key_from_env(self):
        with mock.patch.dict(os.environ, {"REVE_AI_API_KEY": "env_key"}):
            assert ReveConfig().api_key == "env_key"

    def test_env_read_at_construction_time(self):
        config = ReveConfig()
        with mock.patch.dict(os.environ, {"REVE_AI_API_KEY": "later_key"}):
            assert config.api_key is None
            assert ReveConfig().api_key == "later_key"

    def test_explicit_api_key_wins_over_env(self):
        with mock.patch.dict(os.environ, {"REVE_AI_API_KEY": "env_key"}):
            assert ReveConfig(api_key="explicit").api_key == "explicit"


class TestValidity:
    """测试 is_valid。"""

    def test_valid_with_api_key(self):
        assert ReveConfig(api_key="key").is_valid is True

    @pytest.mark.parametrize("api_key", [None, ""])
    def test_invalid_without_api_key(self, api_key):
        assert ReveConfig(api_key=api_key).is_valid is False


class TestMerge:
    """测试 merge()。"""

    def test_overrides_given_fields(self):
        logger = logging.getLogger("reve-test")
        config = ReveConfig(api_key="key").merge(
            timeout=60, max_retries=5, logger=logger, debug=True
        )
        assert config.api_key == "key"
        assert config.timeout == 60
        assert config.max_retries == 5
        assert config.logger is logger
        assert config.debug is True

    def test_none_overrides_are_ignored(self):
        original = ReveConfig(api_key="key", timeout=90)
        merged = original.merge(timeout=None, api_key=None)
        assert merged.timeout == 90
        assert merged.api_key == "key"

    def test_merge_does_not_mutate_original(self):
        original = ReveConfig(api_key="key")
        original.merge(base_url="https://example.test")
        assert original.base_url == DEFAULT_BASE_URL

    def test_false_debug_override_applies(self):
        config = ReveConfig(api_key="key", debug=True).merge(debug=False)
        assert config.debug is False

    def test_unknown_option_rejected(self):
        with pytest.raises(TypeError):
            ReveConfig().merge(colour="blue")

    def test_config_is_frozen(self):
        config = ReveConfig(api_key="key")
        with pytest.raises(FrozenInstanceError):
            config.api_key = "other"


class TestRepr:
    """repr 中不泄露 API key。"""

    def test_api_key_masked(self):
        config = ReveConfig(api_key="sk-abcdefghijklmnop")
        text = repr(config)
        assert "sk-abcdefghijklmnop" not in text
        assert "sk-a...mnop" in text

    def test_missing_api_key(self):
        assert "api_key=(empty)" in repr(ReveConfig())


class TestGlobalConfiguration:
    """测试全局配置管理。"""

    def test_unset_by_default(self):
        assert get_configuration() is None

    def test_configure_sets_global(self):
        config = configure(api_key="global_key", timeout=90)
        assert get_configuration() is config
        assert config.api_key == "global_key"
        assert config.timeout == 90

    def test_configure_accumulates(self):
        configure(api_key="global_key")
        config = configure(debug=True)
        assert config.api_key == "global_key"
        assert config.debug is True

    def test_reset_clears_global(self):
        configure(api_key="global_key")
        reset_configuration()
        assert get_configuration() is None
