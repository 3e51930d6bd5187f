"""
Configuration for llmdocs.

Settings come from environment variables (optionally via a .env file).
CLI flags override them. Category maps are JSON files grouping operation
ids under category names:

    {
        "Database": ["select", "insert", "update"],
        "Auth": ["sign-up", "sign-in"]
    }

The same mapping may also be nested under a "categories" key.
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional
import logging

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from llmdocs.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "LLMDOCS_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

_category_map_adapter = TypeAdapter(Dict[str, List[str]])


class Settings(BaseModel):
    """Runtime settings resolved from the environment."""
    output_dir: Path = Field(default=Path("./output"), description="Default output directory")
    filename_prefix: Optional[str] = Field(None, description="Default output filename prefix")
    include_metadata: bool = Field(default=True, description="Emit the Format/Generated comment")
    log_level: str = Field(default="INFO", description="Logging level for the CLI")


def load_settings() -> Settings:
    """
    Load settings from LLMDOCS_* environment variables.

    A .env file found from the working directory upwards is loaded first;
    variables already set in the environment take precedence over it.

    Raises:
        ConfigError: If a variable holds an invalid value
    """
    load_dotenv(find_dotenv(usecwd=True))

    values = {}

    output_dir = os.getenv(f"{ENV_PREFIX}OUTPUT_DIR")
    if output_dir:
        values["output_dir"] = Path(output_dir)

    prefix = os.getenv(f"{ENV_PREFIX}FILENAME_PREFIX")
    if prefix:
        values["filename_prefix"] = prefix

    include_metadata = os.getenv(f"{ENV_PREFIX}INCLUDE_METADATA")
    if include_metadata is not None and include_metadata.strip():
        values["include_metadata"] = _parse_bool(f"{ENV_PREFIX}INCLUDE_METADATA", include_metadata)

    log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
    if log_level:
        log_level = log_level.strip().upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got '{log_level}'")
        values["log_level"] = log_level

    return Settings(**values)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be true or false, got '{raw}'")


def load_category_map(path: Path) -> Dict[str, List[str]]:
    """
    Load a category map from a JSON file.

    Args:
        path: JSON file with {category: [operation ids]} (or the same under "categories")

    Returns:
        Ordered mapping of category name -> operation ids

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the file is not valid JSON or has the wrong shape
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Category map {path} is not valid JSON: {e}") from e

    if isinstance(raw, dict) and isinstance(raw.get("categories"), dict):
        raw = raw["categories"]

    try:
        category_map = _category_map_adapter.validate_python(raw, strict=True)
    except ValidationError as e:
        raise ConfigError(
            f"Category map {path} must map category names to lists of operation ids: {e}"
        ) from e

    logger.debug(f"Loaded {len(category_map)} categories from {path}")
    return category_map
