"""DataSettings: defaults, environment overrides, validation, caching."""

import pytest
from pydantic import ValidationError

from auditguard.config.settings import DataSettings, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DEFAULT_PAGE_SIZE", raising=False)
    settings = DataSettings(_env_file=None)
    assert settings.app_name == "auditguard"
    assert settings.database_url == "sqlite://"
    assert settings.default_page_size == 50


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://db/app")
    monkeypatch.setenv("default_page_size", "25")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = get_settings()

    assert settings.database_url == "postgresql+psycopg://db/app"
    assert settings.default_page_size == 25
    assert settings.log_level == "DEBUG"


def test_page_size_bounds():
    with pytest.raises(ValidationError):
        DataSettings(_env_file=None, default_page_size=0)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
