"""Builds one staff member's calendar feed from the modules they may read.

Sequential mode (one worker) runs each provider's list query and then its
detail fetches in turn. Concurrent mode fans the list queries out across a
bounded pool, then every (provider, header) detail fetch, and gathers the
results in submission order so both modes emit the same sequence.
"""
from __future__ import annotations
import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait, FIRST_EXCEPTION, ALL_COMPLETED
from typing import Callable, List, Optional
from p2p.config.calendar import CalendarSettings
from p2p.errors import SessionExpired, StaleKeyError, FetchTimeout
from p2p.services.calendar.events import CalendarEvent
from p2p.services.calendar.providers import EventProvider, build_providers
from p2p.services.calendar.selector import select_sources

log = logging.getLogger(__name__)


def _release_worker_session():
    from p2p import release_db
    release_db()


class EventAggregator:
    def __init__(self, resolver, runner, settings: Optional[CalendarSettings] = None,
                 registry=None, release: Optional[Callable[[], None]] = None):
        self.resolver = resolver
        self.runner = runner
        self.settings = settings or CalendarSettings()
        self.registry = registry
        self.release = release or _release_worker_session
        self.failures: List[str] = []

    def build_feed(self, staff_code) -> List[CalendarEvent]:
        if not staff_code or not str(staff_code).strip():
            raise SessionExpired()
        self.failures = []
        permission_set = self.resolver.resolve(staff_code)
        tags = select_sources(permission_set)
        providers = build_providers(tags, self.runner, self.registry)
        if not providers:
            return []
        log.debug('Building feed for %s from %s', staff_code, [t.value for t in tags])
        if self.settings.concurrent:
            return self._run_concurrent(providers)
        return self._run_sequential(providers)

    # --- shared ---
    def _fetch(self, provider: EventProvider, header):
        try:
            return provider.fetch_detail(header)
        except StaleKeyError as e:
            if not self.settings.skip_stale_keys:
                raise
            log.warning('Skipping stale %s key %r', provider.module, e.key)
            return None

    def _record_failure(self, provider: EventProvider, error: BaseException):
        if provider.module not in self.failures:
            self.failures.append(provider.module)
        log.error('Calendar source %s failed: %s', provider.module, error, exc_info=error)

    # --- sequential ---
    def _run_provider(self, provider: EventProvider) -> List[CalendarEvent]:
        events = []
        for header in provider.list_headers():
            detail = self._fetch(provider, header)
            if detail is not None:
                events.append(provider.normalize(header, detail))
        return events

    def _run_sequential(self, providers: List[EventProvider]) -> List[CalendarEvent]:
        feed: List[CalendarEvent] = []
        for provider in providers:
            if not self.settings.isolate_failures:
                feed.extend(self._run_provider(provider))
                continue
            try:
                events = self._run_provider(provider)
            except Exception as e:
                self._record_failure(provider, e)
                continue
            feed.extend(events)
        return feed

    # --- concurrent ---
    def _in_worker(self, fn, *args):
        try:
            return fn(*args)
        finally:
            self.release()

    def _remaining(self, deadline: float) -> float:
        return max(0.0, deadline - time.monotonic())

    def _settle(self, jobs, deadline: float) -> list:
        """Wait on (provider, future) jobs; results align with jobs.

        Under isolation a failed job's provider is recorded in ``failures``
        and its slot holds ``None``.
        """
        futures = [f for _, f in jobs]
        if not futures:
            return []
        isolate = self.settings.isolate_failures
        done, _ = wait(futures, timeout=self._remaining(deadline),
                       return_when=ALL_COMPLETED if isolate else FIRST_EXCEPTION)
        if not isolate:
            for provider, fut in jobs:
                if fut in done and fut.exception() is not None:
                    raise fut.exception()
            for provider, fut in jobs:
                if fut not in done:
                    raise FetchTimeout(provider.module, self.settings.fetch_timeout)
            return [f.result() for f in futures]
        results = []
        for provider, fut in jobs:
            error = fut.exception() if fut in done else FetchTimeout(provider.module, self.settings.fetch_timeout)
            if error is None:
                results.append(fut.result())
            else:
                self._record_failure(provider, error)
                results.append(None)
        return results

    def _normalize_all(self, provider: EventProvider, fetched) -> List[CalendarEvent]:
        return [provider.normalize(header, detail) for header, detail in fetched if detail is not None]

    def _run_concurrent(self, providers: List[EventProvider]) -> List[CalendarEvent]:
        deadline = time.monotonic() + self.settings.fetch_timeout
        pool = ThreadPoolExecutor(max_workers=self.settings.max_workers, thread_name_prefix='calendar-feed')
        try:
            list_jobs = [(p, pool.submit(self._in_worker, p.list_headers)) for p in providers]
            listed = self._settle(list_jobs, deadline)
            detail_jobs = []
            headers = []
            for provider, provider_headers in zip(providers, listed):
                if provider.module in self.failures:
                    continue
                for header in provider_headers:
                    headers.append(header)
                    detail_jobs.append((provider, pool.submit(self._in_worker, self._fetch, provider, header)))
            details = self._settle(detail_jobs, deadline)
        finally:
            pool.shutdown(wait=False, cancel_futures=True)
        fetched = {id(p): [] for p in providers}
        for (provider, _), header, detail in zip(detail_jobs, headers, details):
            fetched[id(provider)].append((header, detail))
        feed: List[CalendarEvent] = []
        for provider in providers:
            if provider.module in self.failures:
                continue
            if not self.settings.isolate_failures:
                feed.extend(self._normalize_all(provider, fetched[id(provider)]))
                continue
            try:
                events = self._normalize_all(provider, fetched[id(provider)])
            except Exception as e:
                self._record_failure(provider, e)
                continue
            feed.extend(events)
        return feed


__all__ = ['EventAggregator']
