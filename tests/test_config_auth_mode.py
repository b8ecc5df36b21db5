# ruff: noqa: INP001
"""Settings validation tests for auth-mode configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from supertodo.core.auth_mode import AuthMode
from supertodo.core.config import Settings


def test_local_mode_requires_non_empty_token() -> None:
    with pytest.raises(
        ValidationError,
        match="LOCAL_AUTH_TOKEN must be at least 50 characters and non-placeholder when AUTH_MODE=local",
    ):
        Settings(
            _env_file=None,
            auth_mode=AuthMode.LOCAL,
            local_auth_token="",
        )


def test_local_mode_requires_minimum_length() -> None:
    with pytest.raises(
        ValidationError,
        match="LOCAL_AUTH_TOKEN must be at least 50 characters and non-placeholder when AUTH_MODE=local",
    ):
        Settings(
            _env_file=None,
            auth_mode=AuthMode.LOCAL,
            local_auth_token="x" * 49,
        )


def test_local_mode_rejects_placeholder_token() -> None:
    with pytest.raises(
        ValidationError,
        match="LOCAL_AUTH_TOKEN must be at least 50 characters and non-placeholder when AUTH_MODE=local",
    ):
        Settings(
            _env_file=None,
            auth_mode=AuthMode.LOCAL,
            local_auth_token="change-me",
        )


def test_local_mode_accepts_real_token() -> None:
    token = "a" * 50
    settings = Settings(
        _env_file=None,
        auth_mode=AuthMode.LOCAL,
        local_auth_token=token,
    )

    assert settings.auth_mode == AuthMode.LOCAL
    assert settings.local_auth_token == token


def test_proxy_mode_requires_user_header() -> None:
    with pytest.raises(
        ValidationError,
        match="PROXY_USER_HEADER must be non-empty when AUTH_MODE=proxy",
    ):
        Settings(
            _env_file=None,
            auth_mode=AuthMode.PROXY,
            proxy_user_header="  ",
        )


def test_proxy_mode_does_not_need_local_token() -> None:
    settings = Settings(
        _env_file=None,
        auth_mode=AuthMode.PROXY,
        local_auth_token="",
    )

    assert settings.proxy_user_header == "X-Forwarded-User"


def test_dev_environment_enables_auto_migrate_unless_set() -> None:
    dev = Settings(_env_file=None, auth_mode=AuthMode.PROXY, environment="dev")
    prod = Settings(_env_file=None, auth_mode=AuthMode.PROXY, environment="production")
    explicit = Settings(
        _env_file=None,
        auth_mode=AuthMode.PROXY,
        environment="dev",
        db_auto_migrate=False,
    )

    assert dev.db_auto_migrate is True
    assert prod.db_auto_migrate is False
    assert explicit.db_auto_migrate is False


def test_tag_ownership_enforced_by_default() -> None:
    settings = Settings(_env_file=None, auth_mode=AuthMode.PROXY)

    assert settings.enforce_tag_ownership is True
    assert settings.stats_timezone == ""


def test_unknown_stats_timezone_is_rejected() -> None:
    with pytest.raises(ValidationError, match="STATS_TIMEZONE must be an IANA zone name"):
        Settings(
            _env_file=None,
            auth_mode=AuthMode.PROXY,
            stats_timezone="Mars/Olympus_Mons",
        )


def test_utc_stats_timezone_is_accepted() -> None:
    settings = Settings(_env_file=None, auth_mode=AuthMode.PROXY, stats_timezone=" UTC ")

    assert settings.stats_timezone == "UTC"
