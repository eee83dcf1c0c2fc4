"""Interpreter settings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LoopMode = Literal["fixed", "conditional"]


class EvalSettings(BaseSettings):
    """Evaluation settings.

    ``loop_mode="fixed"`` evaluates a loop condition once and runs the body
    ``loop_iterations`` times. ``loop_mode="conditional"`` re-evaluates the
    condition before every iteration and stops once it is not 1.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PLANG_",
        case_sensitive=False,
        extra="ignore",
    )

    loop_mode: LoopMode = Field(default="fixed")
    loop_iterations: int = Field(default=4, ge=0)
    loop_limit: int | None = Field(default=None, ge=1)


def load_settings(**overrides: Any) -> EvalSettings:
    """Load settings from the environment, applying non-None overrides."""
    return EvalSettings(**{key: value for key, value in overrides.items() if value is not None})
