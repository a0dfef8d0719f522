from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping

TRUE_VALUES = ('1', 'true', 'yes', 'on')
FALSE_VALUES = ('0', 'false', 'no', 'off', '')


@dataclass(frozen=True)
class CalendarSettings:
    max_workers: int = 1
    fetch_timeout: float = 30.0
    isolate_failures: bool = False
    skip_stale_keys: bool = False

    @property
    def concurrent(self) -> bool:
        return self.max_workers > 1


def _flag(name: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    value = str(raw).strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f'{name} must be a boolean flag')


def load_calendar_settings(config: Mapping[str, Any]) -> CalendarSettings:
    """Build feed settings from app config values (env strings or native types)."""
    try:
        max_workers = int(config.get('CALENDAR_MAX_WORKERS', 1))
        fetch_timeout = float(config.get('CALENDAR_FETCH_TIMEOUT', 30))
    except (TypeError, ValueError):
        raise ValueError('CALENDAR_MAX_WORKERS/CALENDAR_FETCH_TIMEOUT must be numeric')
    if max_workers < 1:
        raise ValueError('CALENDAR_MAX_WORKERS must be >= 1')
    if fetch_timeout <= 0:
        raise ValueError('CALENDAR_FETCH_TIMEOUT must be > 0')
    return CalendarSettings(
        max_workers=max_workers,
        fetch_timeout=fetch_timeout,
        isolate_failures=_flag('CALENDAR_ISOLATE_FAILURES', config.get('CALENDAR_ISOLATE_FAILURES', False)),
        skip_stale_keys=_flag('CALENDAR_SKIP_STALE_KEYS', config.get('CALENDAR_SKIP_STALE_KEYS', False)),
    )

__all__ = ['CalendarSettings', 'load_calendar_settings']
