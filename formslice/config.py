import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, PositiveInt, field_validator


class ParserConfig(BaseModel):
    """Settings shared by the ASGI adapter and the command line tool."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Bodies larger than this are rejected before parsing. None means unbounded.
    max_body_size: Optional[PositiveInt] = None
    log_level: str = "INFO"
    json_logs: bool = False
    environment: str = "production"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level: {value}")
        return value

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ParserConfig":
        """Build a config from a mapping, ignoring keys set to None."""
        return cls(**{key: value for key, value in values.items() if value is not None})
