"""
Unit tests for ParserConfig.
"""

import logging

import pytest
from pydantic import ValidationError

from formslice import ParserConfig


class TestParserConfig:
    """Test ParserConfig validation and defaults."""

    def test_defaults(self):
        config = ParserConfig()

        assert config.max_body_size is None
        assert config.log_level == "INFO"
        assert config.log_level_number == logging.INFO
        assert config.json_logs is False
        assert config.environment == "production"

    def test_log_level_normalised(self):
        config = ParserConfig(log_level="debug")

        assert config.log_level == "DEBUG"
        assert config.log_level_number == logging.DEBUG

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            ParserConfig(log_level="chatty")

    @pytest.mark.parametrize("size", [0, -1])
    def test_max_body_size_must_be_positive(self, size):
        with pytest.raises(ValidationError):
            ParserConfig(max_body_size=size)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            ParserConfig(max_size=10)

    def test_frozen(self):
        config = ParserConfig()

        with pytest.raises(ValidationError):
            config.max_body_size = 10

    def test_from_mapping_skips_none(self):
        config = ParserConfig.from_mapping(
            {"max_body_size": 1024, "log_level": None, "json_logs": True}
        )

        assert config.max_body_size == 1024
        assert config.log_level == "INFO"
        assert config.json_logs is True
