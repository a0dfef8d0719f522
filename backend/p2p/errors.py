"""Domain exceptions raised below the HTTP layer.

Routes never build error payloads for these themselves; the handlers
registered in ``create_app`` translate them.
"""
from __future__ import annotations
from typing import Any, Optional


class SessionExpired(Exception):
    """No staff identifier is attached to the current request."""


class LookupFailure(Exception):
    """A named query failed at the data-access boundary."""

    def __init__(self, query_name: str, message: Optional[str] = None):
        self.query_name = query_name
        super().__init__(message or f'Lookup {query_name} failed')


class StaleKeyError(LookupFailure):
    """A detail lookup found nothing for a key its list query just returned."""

    def __init__(self, query_name: str, key: Any):
        self.key = key
        super().__init__(query_name, f'Lookup {query_name} found no record for {key!r}')


class FetchTimeout(LookupFailure):
    """Concurrent feed lookups for a module did not finish within the fetch timeout."""

    def __init__(self, module: str, timeout: float):
        self.timeout = timeout
        super().__init__(module, f'Lookups for {module} exceeded {timeout:g}s')


__all__ = ['SessionExpired', 'LookupFailure', 'StaleKeyError', 'FetchTimeout']
