"""Configuration package."""

from mlinterp.config.settings import MAX_DEPTH_LIMIT, EvalSettings, load_settings

__all__ = [
    "MAX_DEPTH_LIMIT",
    "EvalSettings",
    "load_settings",
]
