# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - MongoConfig (dataclass)
#     host: str          (default "localhost")
#     port: int          (default 27017)
#     user: str | None   (default None)
#     password: str | None (default None)
#     database: str      (default "warc_converter")
#
# - BufferConfig (dataclass)
#     buffer_size: int   (default 50)   records per worker batch
#     workers: int       (default 1)    transform threads
#
# - FilterSettings (dataclass)
#     config_path: str | None (default None) JSON rule file
#
# - AppConfig (dataclass)
#     mongo: MongoConfig
#     buffer: BufferConfig
#     filter: FilterSettings
#     output_sink: str   (default "jsonl")  "jsonl" or "mongo"
#     request_timeout_seconds: float (default 30.0)
#
# FUNCTIONS:
# ----------
# - load_config(env_path=None) -> AppConfig
#     Read .env using python-dotenv, build a fresh AppConfig.
# - get_config() -> AppConfig
#     Same as load_config() but returns a singleton.
#
# USAGE:
# ------
#   from warc_converter.config import get_config
#   config = get_config()
#   print(config.buffer.workers)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv


SINK_TYPES = ("jsonl", "mongo")


@dataclass
class MongoConfig:
    """MongoDB output configuration."""
    host: str = "localhost"
    port: int = 27017
    user: Optional[str] = None
    password: Optional[str] = None
    database: str = "warc_converter"


@dataclass
class BufferConfig:
    """Batching and parallelism for the driver loop."""
    buffer_size: int = 50
    workers: int = 1


@dataclass
class FilterSettings:
    """Where the document filter rules come from."""
    config_path: Optional[str] = None


@dataclass
class AppConfig:
    """Main application configuration."""
    mongo: MongoConfig = field(default_factory=MongoConfig)
    buffer: BufferConfig = field(default_factory=BufferConfig)
    filter: FilterSettings = field(default_factory=FilterSettings)
    output_sink: str = "jsonl"
    request_timeout_seconds: float = 30.0

    def __post_init__(self):
        if self.output_sink not in SINK_TYPES:
            raise ValueError(f"OUTPUT_SINK must be one of {SINK_TYPES}, got {self.output_sink!r}")
        if self.buffer.buffer_size < 1:
            raise ValueError("BUFFER_SIZE must be at least 1")
        if self.buffer.workers < 1:
            raise ValueError("WORKERS must be at least 1")


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _int_env(name: str, default: str) -> int:
    value = os.getenv(name, default)
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def load_config(env_path: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Build configuration from environment variables / .env file.

    Args:
        env_path: .env file to load. Defaults to the project root .env.
            Variables already set in the environment take precedence.

    Returns:
        AppConfig: Application configuration

    Raises:
        ValueError: If a numeric variable or OUTPUT_SINK is invalid
    """
    if env_path is None:
        env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    mongo_config = MongoConfig(
        host=os.getenv("MONGO_HOST", "localhost"),
        port=_int_env("MONGO_PORT", "27017"),
        user=os.getenv("MONGO_USER") or None,
        password=os.getenv("MONGO_PASSWORD") or None,
        database=os.getenv("MONGO_DATABASE", "warc_converter")
    )

    buffer_config = BufferConfig(
        buffer_size=_int_env("BUFFER_SIZE", "50"),
        workers=_int_env("WORKERS", "1")
    )

    filter_settings = FilterSettings(
        config_path=os.getenv("FILTER_CONFIG") or None
    )

    timeout = os.getenv("REQUEST_TIMEOUT_SECONDS", "30.0")
    try:
        timeout_seconds = float(timeout)
    except ValueError:
        raise ValueError(f"REQUEST_TIMEOUT_SECONDS must be a number, got {timeout!r}") from None

    return AppConfig(
        mongo=mongo_config,
        buffer=buffer_config,
        filter=filter_settings,
        output_sink=os.getenv("OUTPUT_SINK", "jsonl").lower(),
        request_timeout_seconds=timeout_seconds
    )


def get_config() -> AppConfig:
    """
    Load configuration once and return the same instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = load_config()

    return _config_instance
