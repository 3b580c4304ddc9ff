"""Unit tests covering environment variable overrides for settings."""

from __future__ import annotations

import json

import pytest

from infofinder.settings.config import PROJECT_ROOT, reload_settings


def _clear_env(monkeypatch: object, *names: str) -> None:
    """Remove env vars for every alias and prefixed variant."""

    for name in names:
        monkeypatch.delenv(name, raising=False)
        if name.startswith("INFOFINDER_"):
            monkeypatch.delenv(name.removeprefix("INFOFINDER_"), raising=False)
        else:
            monkeypatch.delenv(f"INFOFINDER_{name}", raising=False)


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    yield
    reload_settings()


def test_defaults_loaded(monkeypatch: object) -> None:
    """Default settings come from the bundled TOML file."""

    _clear_env(monkeypatch, "INFOFINDER_LOOKUP_USER_AGENT", "INFOFINDER_LOOKUP_ENDPOINTS", "INFOFINDER_LOG_LEVEL")

    settings = reload_settings(env="dev")
    assert settings.env == "dev"
    assert settings.lookup.user_agent == "InfoFinder/1.0"
    assert settings.lookup.endpoints == {}
    assert settings.lookup.default_category == "mobile"
    assert settings.project_root == PROJECT_ROOT
    assert not settings.is_local


def test_lookup_env_overrides(monkeypatch: object) -> None:
    """Verify user agent and endpoint overrides from flat env vars."""

    _clear_env(monkeypatch, "INFOFINDER_LOOKUP_USER_AGENT", "INFOFINDER_LOOKUP_ENDPOINTS")

    monkeypatch.setenv("INFOFINDER_LOOKUP_USER_AGENT", "InfoFinder-Test/2.0")
    monkeypatch.setenv(
        "INFOFINDER_LOOKUP_ENDPOINTS",
        "Mobile=https://mirror.example.test/m, bank_code=https://ifsc.example.test/",
    )

    settings = reload_settings(env="dev")
    assert settings.user_agent == "InfoFinder-Test/2.0"
    assert settings.lookup.endpoints == {
        "mobile": "https://mirror.example.test/m",
        "bank_code": "https://ifsc.example.test/",
    }


def test_lookup_endpoints_accept_json(monkeypatch: object) -> None:
    _clear_env(monkeypatch, "INFOFINDER_LOOKUP_ENDPOINTS")
    monkeypatch.setenv("INFOFINDER_LOOKUP_ENDPOINTS", json.dumps({"vehicle": "https://rc.example.test/"}))

    settings = reload_settings(env="dev")
    assert settings.lookup.endpoints == {"vehicle": "https://rc.example.test/"}


def test_log_level_override(monkeypatch: object) -> None:
    _clear_env(monkeypatch, "INFOFINDER_LOG_LEVEL")
    monkeypatch.setenv("INFOFINDER_LOG_LEVEL", "debug")

    settings = reload_settings(env="dev")
    assert settings.log_level == "DEBUG"
