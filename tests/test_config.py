"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pubdev_search.config import BotSettings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PUBSEARCH_TELEGRAM_TOKEN", "123:abc")


def test_defaults_follow_pub_dev():
    settings = BotSettings()

    assert settings.telegram_token.get_secret_value() == "123:abc"
    assert settings.registry.base() == "https://pub.dev"
    assert settings.registry.request_timeout_seconds is None
    assert settings.palette.primary_action == "copy-install-command"
    assert settings.palette.package_manager == "flutter pub"
    assert settings.palette.open_package_page is False


def test_nested_env_overrides(monkeypatch):
    monkeypatch.setenv("PUBSEARCH_PALETTE__PRIMARY_ACTION", "open-in-browser")
    monkeypatch.setenv("PUBSEARCH_PALETTE__DEBOUNCE_SECONDS", "0.25")
    monkeypatch.setenv("PUBSEARCH_REGISTRY__BASE_URL", "https://pub.example.com")
    monkeypatch.setenv("PUBSEARCH_REGISTRY__REQUEST_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("PUBSEARCH_ADMIN_TELEGRAM_ID", "42")

    settings = BotSettings()

    assert settings.palette.primary_action == "open-in-browser"
    assert settings.palette.debounce_seconds == 0.25
    assert settings.registry.base() == "https://pub.example.com"
    assert settings.registry.request_timeout_seconds == 5
    assert settings.admin_telegram_id == 42


def test_unknown_primary_action_is_rejected(monkeypatch):
    monkeypatch.setenv("PUBSEARCH_PALETTE__PRIMARY_ACTION", "open-in-terminal")

    with pytest.raises(ValidationError):
        BotSettings()


def test_token_is_required(monkeypatch):
    monkeypatch.delenv("PUBSEARCH_TELEGRAM_TOKEN")

    with pytest.raises(ValidationError):
        BotSettings()
