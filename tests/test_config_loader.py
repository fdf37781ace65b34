"""Configuration loader stories: bundled defaults, caching, profile validation."""

from __future__ import annotations

import pytest

from postmark_lite.adapters.config.loader import get_config, get_default_config_path, validate_profile


@pytest.mark.os_agnostic
def test_default_config_file_is_bundled() -> None:
    """defaultconfig.toml ships next to the loader."""
    path = get_default_config_path()

    assert path.name == "defaultconfig.toml"
    assert path.is_file()


@pytest.mark.os_agnostic
def test_bundled_defaults_describe_postmark_section(clear_config_cache: None) -> None:
    """The defaults hold the HTTPS endpoint and the 30 s timeout."""
    config = get_config()

    assert config.get("postmark.api_url", default=None) == "https://api.postmarkapp.com/email"
    assert config.get("postmark.timeout", default=None) == 30.0


@pytest.mark.os_agnostic
def test_get_config_is_cached(clear_config_cache: None) -> None:
    """Repeated loads return the cached object."""
    assert get_config() is get_config()


@pytest.mark.os_agnostic
def test_cache_clear_forces_reload(clear_config_cache: None) -> None:
    """cache_clear drops the cached config."""
    first = get_config()

    get_config.cache_clear()

    assert get_config() is not first


@pytest.mark.os_agnostic
@pytest.mark.parametrize("profile", ["staging", "prod_2", "sandbox-eu"])
def test_validate_profile_accepts_safe_names(profile: str) -> None:
    """Alphanumerics, hyphens, and underscores are fine."""
    validate_profile(profile)


@pytest.mark.os_agnostic
@pytest.mark.parametrize("profile", ["", "../secrets", "a/b"])
def test_validate_profile_rejects_unsafe_names(profile: str) -> None:
    """Path-like or empty names never become path components."""
    with pytest.raises(ValueError):
        validate_profile(profile)


@pytest.mark.os_agnostic
def test_get_config_rejects_unsafe_profile(clear_config_cache: None) -> None:
    """The loader validates profiles before reading anything."""
    with pytest.raises(ValueError):
        get_config(profile="../etc")
