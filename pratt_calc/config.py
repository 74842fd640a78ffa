"""
Settings for the calculator REPL.

Values come from PRATT_CALC_* environment variables (a .env file in the
working directory is loaded first) and can be overridden by CLI flags.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

from .evaluator import MAX_EXPONENT

ENV_PREFIX = "PRATT_CALC_"


class Settings(BaseModel):
    """Validated REPL and evaluator settings."""
    log_level: str = "WARNING"
    history_file: str = Field(default_factory=lambda: os.path.expanduser("~/.pratt_calc_history"))
    prompt: str = "> "
    show_tokens: bool = False
    show_tree: bool = False
    rollback_on_error: bool = False
    max_exponent: int = Field(default=MAX_EXPONENT, ge=0)

    @field_validator('log_level')
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('history_file')
    @classmethod
    def expand_history_path(cls, v: str) -> str:
        return os.path.expanduser(v.strip())


def load_settings(overrides: Optional[Dict[str, Any]] = None, dotenv: bool = True) -> Settings:
    """Build Settings from the environment, then apply non-None overrides."""
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))
    values: Dict[str, Any] = {}
    for name in Settings.model_fields:
        raw = os.getenv(ENV_PREFIX + name.upper())
        if raw is not None:
            values[name] = raw
    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
