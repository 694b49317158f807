"""Functional test bootstrap.

Codec tests are pure and need no setup. Configuration and webhook tests must
not pick up FORMWIRE_* variables or config files from the developer's
environment, so every test runs with those variables cleared.
"""

from __future__ import annotations

import os

import pytest

from formwire.config import AppConfig, WebhookConfig


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("FORMWIRE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(webhook=WebhookConfig(path="/webhook"))
