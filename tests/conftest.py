"""Shared fixtures for Household Ledger tests."""

import pytest

from household_ledger.config import get_settings


SETTINGS_ENV_VARS = (
    "LEDGER_DEFAULT_CURRENCY",
    "LEDGER_SUPPORTED_CURRENCIES",
    "APP_ENVIRONMENT",
    "DEBUG_MODE",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """
    Run every test against default settings, unaffected by the host environment.

    Settings read `.env` from the working directory, so tests run from an
    empty temporary directory.
    """
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
