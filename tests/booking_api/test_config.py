import pytest

from booking_api.core import config


def test_get_database_url_prefers_explicit_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('booking_api.core.config.DATABASE_URL', 'sqlite:///./bookings.db')

    assert config.get_database_url() == 'sqlite:///./bookings.db'


def test_get_database_url_builds_from_parts(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('booking_api.core.config.DATABASE_URL', None)
    monkeypatch.setattr('booking_api.core.config.DB_HOST', 'db.internal')
    monkeypatch.setattr('booking_api.core.config.DB_PORT', 3307)
    monkeypatch.setattr('booking_api.core.config.DB_USER', 'booking')
    monkeypatch.setattr('booking_api.core.config.DB_PASSWORD', 's3cret')
    monkeypatch.setattr('booking_api.core.config.DB_NAME', 'bookings')

    url = config.get_database_url()

    assert url.drivername == 'mysql+pymysql'
    assert url.host == 'db.internal'
    assert url.port == 3307
    assert url.username == 'booking'
    assert url.password == 's3cret'
    assert url.database == 'bookings'


@pytest.mark.parametrize(
    ('value', 'expected'),
    [(None, False), ('true', True), (' YES ', True), ('0', False), ('off', False)],
)
def test_get_bool(value, expected: bool) -> None:
    assert config._get_bool(value) is expected


def test_get_list_splits_and_trims() -> None:
    assert config._get_list('http://a.test, http://b.test,,', default=[]) == ['http://a.test', 'http://b.test']
    assert config._get_list(None, default=['x']) == ['x']


def test_validate_runtime_config_allows_development(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('booking_api.core.config.APP_ENV', 'development')
    monkeypatch.setattr('booking_api.core.config.DATABASE_URL', None)
    monkeypatch.setattr('booking_api.core.config.DB_PASSWORD', '')

    config.validate_runtime_config()
