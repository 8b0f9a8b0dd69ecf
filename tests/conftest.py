"""
Shared fixtures for the weekly export test suite.
"""
from pathlib import Path
from typing import Any, Dict, Iterable
from unittest.mock import MagicMock

import pytest
import requests

from orders_export.core.settings import Settings


ENV_VARS = (
    "ORDERING_API_KEY",
    "API_KEY",
    "ORDERING_BUSINESS_SLUG",
    "BUSINESS_SLUG",
    "ORDERING_API_HOST",
    "ORDERING_API_VERSION",
    "ORDERING_LOCALE",
    "EXPORT_OUTPUT_DIR",
    "EXPORT_CONNECT_TIMEOUT_SECONDS",
    "EXPORT_READ_TIMEOUT_SECONDS",
    "LOG_LEVEL",
    "LOG_FILE",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Removes every variable Settings.from_env reads."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def settings_values(tmp_path) -> Dict[str, Any]:
    return {
        "api_key": "test-api-key",
        "business_slug": "test_store",
        "api_host": "apiv4.ordering.co",
        "api_version": "v400",
        "locale": "en",
        "output_dir": tmp_path,
        "connect_timeout_seconds": 5,
        "read_timeout_seconds": 30,
        "log_level": "DEBUG",
        "log_file": None,
    }


@pytest.fixture
def settings(settings_values) -> Settings:
    return Settings(**settings_values)


def make_response(status_code: int = 200, chunks: Iterable[bytes] = (), reason: str = "OK") -> MagicMock:
    """Builds a streamed requests.Response stand-in usable as a context manager."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.iter_content.return_value = iter(list(chunks))
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


def make_session(response: MagicMock) -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.get.return_value = response
    return session


@pytest.fixture
def csv_bytes() -> bytes:
    return (
        b"id,business,delivery_datetime,status,total\n"
        b"1001,test_store,03/04/2024 12:30:00,11,25.50\n"
        b"1002,test_store,03/09/2024 19:05:12,11,12.00\n"
    )
