from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Error-handling settings loaded from environment (.env), prefixed HTTPERR_.

    Only read when a routing table is built with ErrorRouter.from_settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="HTTPERR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Response body format for handler errors
    ERROR_WRITER: Literal["text", "json"] = Field(default="text", description="text|json")

    # Upper bound on errors inspected while resolving a status code
    MAX_UNWRAP_DEPTH: int = Field(default=100, ge=1)
