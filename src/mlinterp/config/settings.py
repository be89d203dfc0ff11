"""Evaluator settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Python frames per evaluation level times this must fit sys.setrecursionlimit.
MAX_DEPTH_LIMIT = 100_000


class EvalSettings(BaseSettings):
    """Evaluation limits and behaviour switches."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MLINTERP_",
        case_sensitive=False,
        extra="ignore",
    )

    max_depth: int = Field(default=5000, ge=1, le=MAX_DEPTH_LIMIT)
    trace: bool = Field(default=False)
    capture_function_env: bool = Field(default=True)


def load_settings(**overrides: object) -> EvalSettings:
    """Load settings from the environment, with optional explicit overrides."""
    return EvalSettings(**overrides)
