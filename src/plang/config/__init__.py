"""Configuration package."""

from plang.config.settings import EvalSettings, LoopMode, load_settings

__all__ = [
    "EvalSettings",
    "LoopMode",
    "load_settings",
]
