"""
Configuration

Builds the read-only Config once at process start. Values come from the
process environment, optionally seeded from a .env file. Nothing
downstream reads the environment; the Config is injected instead.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .models import Config

# Config field -> (environment variable, converter)
ENV_VARS = {
    "gemini_api_key": ("GEMINI_API_KEY", str),
    "gemini_model": ("GEMINI_MODEL", str),
    "anthropic_api_key": ("ANTHROPIC_API_KEY", str),
    "openai_api_key": ("OPENAI_API_KEY", str),
    "ollama_host": ("OLLAMA_HOST", str),
    "ollama_model": ("OLLAMA_MODEL", str),
    "vision_provider": ("VISION_PROVIDER", str),
    "max_attempts": ("AI_MAX_ATTEMPTS", int),
    "initial_delay": ("AI_INITIAL_DELAY_SECONDS", float),
    "call_timeout": ("AI_CALL_TIMEOUT_SECONDS", float),
    "viewport_width": ("VIEWPORT_WIDTH", int),
    "viewport_height": ("VIEWPORT_HEIGHT", int),
}


def find_env_file(env_file: Optional[Path] = None) -> Optional[Path]:
    """First existing of: env_file, ./.env, ~/.env"""
    for candidate in (env_file, Path(".env"), Path.home() / ".env"):
        if candidate is not None and candidate.exists():
            return candidate
    return None


def load_config(env_file: Optional[Path] = None) -> Config:
    """
    Load configuration from a .env file and environment variables.

    Variables already set in the environment win over .env values.
    Unset variables fall back to the Config defaults.

    Args:
        env_file: Optional path to .env file

    Returns:
        Config object with all settings

    Raises:
        pydantic.ValidationError: If a value is out of range
        ValueError: If a numeric variable is not a number

    Example:
        config = load_config()
        assembler = ReportAssembler.from_config(config)
    """
    found = find_env_file(env_file)
    if found is not None:
        load_dotenv(found)

    values = {}
    for field, (name, convert) in ENV_VARS.items():
        raw = os.getenv(name)
        if raw is not None and raw != "":
            values[field] = convert(raw)

    return Config(**values)
