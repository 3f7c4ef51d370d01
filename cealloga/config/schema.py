"""Configuration schema using Pydantic.

Values come from (highest first): explicit arguments, ``CEALLOGA_*``
environment variables, ``~/.cealloga/config.json``, then defaults.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseSettings):
    """Root configuration for a cealloga API client."""

    model_config = SettingsConfigDict(env_prefix="CEALLOGA_", extra="ignore")

    host: str = "http://localhost:3000"  # Base URL; endpoint paths are appended to it
    timeout: float = 20.0  # Transport timeout in seconds
    same_origin: bool = True  # Reject requests that leave `host`'s origin
    decode_buffer_payloads: bool = True  # Service may reply with {"type": "Buffer", "data": [...]}
    headers: dict[str, str] = Field(default_factory=dict)  # Sent with every request
    log_level: str = "WARNING"

    @field_validator("host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value
