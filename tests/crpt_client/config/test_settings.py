from __future__ import annotations

import pytest
from pydantic import ValidationError

from crpt_client.config.settings import AppConfig
from crpt_client.config.urls import get_create_document_url


def test_defaults():
    cfg = AppConfig()
    assert cfg.period_seconds == 1.0
    assert cfg.limit == 10
    assert cfg.endpoint_url == "https://ismp.crpt.ru/api/v3/lk/documents/create"
    assert cfg.timeout_seconds == 20.0
    assert cfg.max_workers is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CRPT_CLIENT_LIMIT", "3")
    monkeypatch.setenv("CRPT_CLIENT_PERIOD_SECONDS", "60")
    monkeypatch.setenv("CRPT_CLIENT_ENDPOINT_URL", "https://crpt.test/create")

    cfg = AppConfig()
    assert cfg.limit == 3
    assert cfg.period_seconds == 60.0
    assert cfg.endpoint_url == "https://crpt.test/create"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"limit": 0},
        {"period_seconds": 0},
        {"timeout_seconds": -1},
        {"max_workers": 0},
        {"unknown": 1},
    ],
)
def test_invalid_settings_rejected(kwargs):
    with pytest.raises(ValidationError):
        AppConfig(**kwargs)


def test_create_document_url_from_base():
    assert get_create_document_url("https://x.test/api/v3/") == "https://x.test/api/v3/lk/documents/create"
