"""Server configuration model and loader.

Provides the ServerConfig Pydantic model for validated, immutable Postmark
settings and the loader function to create it from configuration
dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final, cast

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

#: Default API endpoint. The legacy plaintext ``http://`` URL is still accepted.
DEFAULT_API_URL: Final[str] = "https://api.postmarkapp.com/email"

#: Default transport timeout in seconds.
DEFAULT_TIMEOUT: Final[float] = 30.0


class ServerConfig(BaseModel):
    """Validated, immutable Postmark server configuration.

    Example:
        >>> config = ServerConfig(api_key="token", default_from="noreply@example.com")
        >>> config.api_url
        'https://api.postmarkapp.com/email'
        >>> config.timeout
        30.0
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    default_from: str | None = None
    default_reply_to: str | None = None
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    @field_validator("api_key", "default_from", "default_reply_to", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Coerce empty or whitespace-only strings to None.

        Treats empty strings from config files as "not configured" rather
        than explicit empty values, so an unset token never reaches the API.

        Examples:
            >>> ServerConfig._coerce_empty_string_to_none("  ") is None
            True
            >>> ServerConfig._coerce_empty_string_to_none("token")
            'token'
        """
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _validate_config(self) -> ServerConfig:
        """Catch common configuration mistakes early.

        Raises:
            ValueError: When timeout is not positive or api_url is not an
                http(s) URL.

        Example:
            >>> ServerConfig(timeout=-1.0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if not self.api_url.startswith(("http://", "https://")):
            raise ValueError(f"api_url must be an http(s) URL, got {self.api_url!r}")
        return self

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> config = ServerConfig(api_key="secret-token")
            >>> "secret-token" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"ServerConfig({', '.join(fields)})"


def load_server_config_from_dict(config_dict: Mapping[str, Any]) -> ServerConfig:
    """Load ServerConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    ServerConfig model, reading the ``[postmark]`` section.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.

    Returns:
        Configured server settings with defaults for missing values.

    Example:
        >>> config = load_server_config_from_dict({"postmark": {"api_key": "token"}})
        >>> config.api_key
        'token'
        >>> load_server_config_from_dict({}).api_key is None
        True
    """
    section: Any = config_dict.get("postmark", {})

    # Non-dict sections (e.g. "postmark": "invalid") go straight to validation
    if not isinstance(section, Mapping):
        return ServerConfig.model_validate(section)

    return ServerConfig.model_validate(dict(cast(Mapping[str, Any], section)))


__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT",
    "ServerConfig",
    "load_server_config_from_dict",
]
