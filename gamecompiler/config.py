"""
Compiler settings and logging setup.

Settings come from the environment (optionally a .env file), and the
command-line scripts override them with their own flags.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator


LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

DEFAULT_GAME_NAME = "MyGame"
DEFAULT_NOT_FOUND_TEXT = "<statement not found>"


class CompilerSettings(BaseModel):
    log_level: str = "INFO"
    default_game: str = DEFAULT_GAME_NAME
    not_found_text: str = DEFAULT_NOT_FOUND_TEXT
    strict: bool = False  # treat warnings as failures in the CLI

    @field_validator('log_level')
    @classmethod
    def level_known(cls, v):
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v


def load_settings(env_file: Path | None = None) -> CompilerSettings:
    """
    Build settings from environment variables.

    Reads GAMECOMPILER_LOG_LEVEL, GAMECOMPILER_DEFAULT_GAME,
    GAMECOMPILER_NOT_FOUND_TEXT and GAMECOMPILER_STRICT, after loading
    env_file (or a .env in the working directory) if present.
    """
    load_dotenv(env_file)
    return CompilerSettings(
        log_level=os.getenv("GAMECOMPILER_LOG_LEVEL", "INFO"),
        default_game=os.getenv("GAMECOMPILER_DEFAULT_GAME", DEFAULT_GAME_NAME),
        not_found_text=os.getenv("GAMECOMPILER_NOT_FOUND_TEXT", DEFAULT_NOT_FOUND_TEXT),
        strict=os.getenv("GAMECOMPILER_STRICT", "0") in ("1", "true", "yes"),
    )


def configure_logging(level: str = "INFO"):
    """Configure root logging the same way for every script."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)
