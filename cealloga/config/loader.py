"""Configuration loading utilities."""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cealloga.config.schema import ClientConfig

ENV_PREFIX = "CEALLOGA_"


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".cealloga" / "config.json"


def load_config(config_path: Path | None = None, **overrides: Any) -> ClientConfig:
    """
    Load configuration from file, environment and ``overrides``.

    Args:
        config_path: Optional path to config file. Uses default if not provided.
        overrides: Field values that win over file and environment; ``None`` is ignored.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()
    data: dict[str, Any] = {}

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Failed to load config from {path}: {e}. "
                "Fix the file or remove it to use defaults."
            ) from e
        if not isinstance(raw, dict):
            raise ValueError(f"Failed to load config from {path}: top-level value must be an object")
        data = _drop_env_overridden(convert_keys(raw))

    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return ClientConfig(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid cealloga config ({path}): {e}") from e


def _drop_env_overridden(data: dict[str, Any]) -> dict[str, Any]:
    """Init values beat env vars in pydantic-settings; file values must not."""
    env_keys = {key.upper() for key in os.environ}
    return {k: v for k, v in data.items() if f"{ENV_PREFIX}{k}".upper() not in env_keys}


def convert_keys(data: Any) -> Any:
    """Convert camelCase keys to snake_case for Pydantic.
    Keys under ``headers`` are preserved (they are HTTP header names)."""
    if isinstance(data, dict):
        result: dict[str, Any] = {}
        for k, v in data.items():
            new_k = camel_to_snake(k)
            if new_k == "headers" and isinstance(v, dict):
                result[new_k] = dict(v)
            else:
                result[new_k] = convert_keys(v)
        return result
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.lower())
    return "".join(result)
