import threading
import pytest
from p2p.config.calendar import CalendarSettings
from p2p.errors import SessionExpired, LookupFailure, FetchTimeout
from p2p.services.calendar.aggregator import EventAggregator
from p2p.constants.permissions import ModuleTag
from p2p.services.calendar.providers import PROVIDERS, RequisitionProvider
from test_utils_fakes import FakeRunner, FakeResolver, document_runner

ALL_DOCS = ['GRNInfo', 'PurchaseRequisition', 'PurchaseOrder']


class ReleaseCounter:
    def __init__(self):
        self.count = 0
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.count += 1


def _aggregator(names, runner, **settings):
    release = ReleaseCounter()
    agg = EventAggregator(FakeResolver(names), runner, CalendarSettings(**settings), release=release)
    return agg, release


@pytest.mark.parametrize('staff_code', [None, '', '   '])
def test_missing_staff_is_session_expired_without_calls(staff_code):
    runner = FakeRunner()
    agg, _ = _aggregator(ALL_DOCS, runner)
    with pytest.raises(SessionExpired):
        agg.build_feed(staff_code)
    assert agg.resolver.calls == []
    assert runner.calls == []


def test_empty_permission_set_invokes_no_provider():
    runner = document_runner()
    agg, _ = _aggregator([], runner)
    assert agg.build_feed('ST001') == []
    assert agg.resolver.calls == ['ST001']
    assert runner.calls == []


def test_only_unknown_names_yield_empty_feed():
    runner = document_runner()
    agg, _ = _aggregator(['Payroll', 'Leave'], runner)
    assert agg.build_feed('ST001') == []
    assert runner.calls == []


def test_feed_follows_provider_order_not_chronology():
    agg, _ = _aggregator(ALL_DOCS, document_runner())
    feed = agg.build_feed('ST001')
    assert [e.id for e in feed] == ['GRN-1', 'PR-1', 'PR-2', 'PO-1']
    assert [e.module for e in feed] == ['GRNInfo', 'PurchaseRequisition', 'PurchaseRequisition', 'PurchaseOrder']


def test_concurrent_matches_sequential():
    sequential, _ = _aggregator(ALL_DOCS, document_runner())
    concurrent, release = _aggregator(ALL_DOCS, document_runner(), max_workers=4)
    expected = [e.to_json() for e in sequential.build_feed('ST001')]
    assert [e.to_json() for e in concurrent.build_feed('ST001')] == expected
    # three list tasks plus four detail tasks, each releasing its session
    assert release.count == 7


@pytest.mark.parametrize('workers', [1, 3])
def test_provider_failure_fails_whole_feed(workers):
    runner = document_runner(fail=['calendar.orders.detail'])
    agg, _ = _aggregator(ALL_DOCS, runner, max_workers=workers)
    with pytest.raises(LookupFailure) as exc:
        agg.build_feed('ST001')
    assert exc.value.query_name == 'calendar.orders.detail'


@pytest.mark.parametrize('workers', [1, 3])
def test_isolated_failure_drops_only_that_module(workers):
    runner = document_runner(fail=['calendar.requisitions.list'])
    agg, _ = _aggregator(ALL_DOCS, runner, max_workers=workers, isolate_failures=True)
    feed = agg.build_feed('ST001')
    assert [e.id for e in feed] == ['GRN-1', 'PO-1']
    assert agg.failures == ['PurchaseRequisition']


@pytest.mark.parametrize('workers', [1, 3])
def test_isolated_detail_failure_drops_whole_module(workers):
    def flaky(params):
        if params['code'] == 'PR-2':
            raise LookupFailure('calendar.requisitions.detail')
        return document_runner().details['calendar.requisitions.detail'](params)

    runner = document_runner()
    runner.details['calendar.requisitions.detail'] = flaky
    agg, _ = _aggregator(ALL_DOCS, runner, max_workers=workers, isolate_failures=True)
    feed = agg.build_feed('ST001')
    assert [e.id for e in feed] == ['GRN-1', 'PO-1']
    assert agg.failures == ['PurchaseRequisition']


class BrokenRowRequisitions(RequisitionProvider):
    def normalize(self, header, detail):
        if header.code == 'PR-2':
            raise ValueError('bad row')
        return super().normalize(header, detail)


def _broken_row_aggregator(workers, isolate):
    registry = dict(PROVIDERS)
    registry[ModuleTag.REQUISITION] = BrokenRowRequisitions
    settings = CalendarSettings(max_workers=workers, isolate_failures=isolate)
    return EventAggregator(FakeResolver(ALL_DOCS), document_runner(), settings,
                           registry=registry, release=ReleaseCounter())


@pytest.mark.parametrize('workers', [1, 3])
def test_isolated_normalize_failure_drops_whole_module(workers):
    agg = _broken_row_aggregator(workers, isolate=True)
    feed = agg.build_feed('ST001')
    assert [e.id for e in feed] == ['GRN-1', 'PO-1']
    assert agg.failures == ['PurchaseRequisition']


@pytest.mark.parametrize('workers', [1, 3])
def test_normalize_failure_fails_feed_without_isolation(workers):
    agg = _broken_row_aggregator(workers, isolate=False)
    with pytest.raises(ValueError):
        agg.build_feed('ST001')


def test_stale_key_fails_by_default_and_skips_when_enabled():
    def vanishing(params):
        if params['code'] == 'PR-1':
            return [[], []]
        return document_runner().details['calendar.requisitions.detail'](params)

    runner = document_runner()
    runner.details['calendar.requisitions.detail'] = vanishing
    strict, _ = _aggregator(['PurchaseRequisition'], runner)
    with pytest.raises(LookupFailure):
        strict.build_feed('ST001')
    lenient, _ = _aggregator(['PurchaseRequisition'], runner, skip_stale_keys=True)
    assert [e.id for e in lenient.build_feed('ST001')] == ['PR-2']


def test_concurrent_timeout_cancels_request():
    gate = threading.Event()

    def slow(params):
        gate.wait(5)
        return document_runner().details['calendar.orders.detail'](params)

    runner = document_runner()
    runner.details['calendar.orders.detail'] = slow
    agg, _ = _aggregator(['PurchaseOrder'], runner, max_workers=2, fetch_timeout=0.05)
    try:
        with pytest.raises(FetchTimeout) as exc:
            agg.build_feed('ST001')
        assert exc.value.query_name == 'PurchaseOrder'
    finally:
        gate.set()
