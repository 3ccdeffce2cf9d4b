"""Configuration via environment variables (SSEFRAME_ prefix) or defaults."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class SSEFrameConfig(BaseSettings):
    join_data_with_newline: bool = False
    chunk_size: int = Field(default=65_536, gt=0)
    http_timeout: float = 30.0
    log_dir: str | None = None
    log_level: str = "INFO"

    model_config = {"env_prefix": "SSEFRAME_"}
