import pytest
from p2p import create_app
from p2p.config.calendar import CalendarSettings, load_calendar_settings
from p2p.config.pagination import normalize_pagination, DEFAULT_LIMIT, MAX_LIMIT


def test_calendar_defaults_are_sequential_and_strict():
    settings = load_calendar_settings({})
    assert settings == CalendarSettings()
    assert settings.max_workers == 1 and not settings.concurrent
    assert settings.fetch_timeout == 30.0
    assert not settings.isolate_failures and not settings.skip_stale_keys


def test_calendar_env_strings_parse():
    settings = load_calendar_settings({
        'CALENDAR_MAX_WORKERS': '8', 'CALENDAR_FETCH_TIMEOUT': '2.5',
        'CALENDAR_ISOLATE_FAILURES': 'Yes', 'CALENDAR_SKIP_STALE_KEYS': 'on',
    })
    assert settings == CalendarSettings(max_workers=8, fetch_timeout=2.5, isolate_failures=True, skip_stale_keys=True)
    assert settings.concurrent


@pytest.mark.parametrize('config', [
    {'CALENDAR_MAX_WORKERS': '0'},
    {'CALENDAR_MAX_WORKERS': 'many'},
    {'CALENDAR_FETCH_TIMEOUT': '-1'},
    {'CALENDAR_ISOLATE_FAILURES': 'maybe'},
])
def test_calendar_invalid_values_rejected(config):
    with pytest.raises(ValueError):
        load_calendar_settings(config)


def test_create_app_rejects_bad_settings_at_startup():
    with pytest.raises(ValueError):
        create_app({'CALENDAR_MAX_WORKERS': 'zero'})


def test_app_exposes_loaded_settings(app_instance):
    assert isinstance(app_instance.config['CALENDAR_SETTINGS'], CalendarSettings)


def test_pagination_normalization():
    assert normalize_pagination(None, None) == (DEFAULT_LIMIT, 0)
    assert normalize_pagination('', '') == (DEFAULT_LIMIT, 0)
    assert normalize_pagination('0', '5') == (1, 5)
    assert normalize_pagination(str(MAX_LIMIT + 50), '0') == (MAX_LIMIT, 0)
    with pytest.raises(ValueError):
        normalize_pagination('x', None)
    with pytest.raises(ValueError):
        normalize_pagination('10', '-1')
