"""Tests for environment-driven settings."""

from garage_crm.config import DEFAULT_DATABASE_URL, Settings, get_settings


def test_defaults(monkeypatch):
    for name in ('DATABASE_URL', 'FIO_MAX_DISTANCE', 'PHONE_MIN_DIGITS', 'PLATE_LOOKALIKE_AWARE', 'LOG_LEVEL', 'LOG_DIR'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr('garage_crm.config.load_dotenv', lambda: None)

    settings = get_settings()
    assert settings == Settings()
    assert settings.database_url == DEFAULT_DATABASE_URL


def test_overrides(monkeypatch):
    monkeypatch.setattr('garage_crm.config.load_dotenv', lambda: None)
    monkeypatch.setenv('DATABASE_URL', 'sqlite+aiosqlite:///other.db')
    monkeypatch.setenv('FIO_MAX_DISTANCE', '2')
    monkeypatch.setenv('PHONE_MIN_DIGITS', '11')
    monkeypatch.setenv('PLATE_LOOKALIKE_AWARE', 'yes')
    monkeypatch.setenv('LOG_LEVEL', 'debug')

    settings = get_settings()
    assert settings.database_url == 'sqlite+aiosqlite:///other.db'
    assert settings.fio_max_distance == 2
    assert settings.phone_min_digits == 11
    assert settings.plate_lookalike_aware is True
    assert settings.log_level == 'DEBUG'
