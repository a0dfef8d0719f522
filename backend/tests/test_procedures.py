import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError
from p2p import get_db
from p2p.errors import LookupFailure
from p2p.models.staff import Staff
from p2p.services.procedures import ProcedureRunner, PROCEDURES, procedure, rows
from p2p.services.permissions import PermissionResolver
from test_utils_seed import ensure_staff, grant


def _staff_names(session, params):
    return [rows(session.execute(select(Staff.code, Staff.full_name).order_by(Staff.code)))]


def _duplicate_staff(session, params):
    stmt = text("INSERT INTO staff (code, full_name, email) VALUES ('DUP', 'Dup', 'dup@example.com')")
    session.execute(stmt)
    session.execute(stmt)
    return 1


def test_runner_returns_dict_rows():
    ensure_staff('ST001', 'Alice')
    runner = ProcedureRunner(session_factory=get_db, registry={'staff.names': _staff_names})
    assert runner.rows('staff.names') == [{'code': 'ST001', 'full_name': 'Alice'}]
    assert runner.result_sets('staff.names') == [[{'code': 'ST001', 'full_name': 'Alice'}]]


def test_unknown_procedure_is_key_error():
    with pytest.raises(KeyError):
        ProcedureRunner(registry={}).rows('nope')


def test_store_errors_become_lookup_failures():
    runner = ProcedureRunner(session_factory=get_db, registry={'staff.dup': _duplicate_staff})
    with pytest.raises(LookupFailure) as exc:
        runner.execute('staff.dup')
    assert exc.value.query_name == 'staff.dup'
    assert isinstance(exc.value.__cause__, IntegrityError)
    # session was rolled back and stays usable
    assert get_db().execute(select(Staff).where(Staff.code == 'DUP')).first() is None


def test_duplicate_registration_rejected():
    @procedure('tests.once')
    def once(session, params):
        return []
    try:
        with pytest.raises(ValueError):
            procedure('tests.once')(once)
    finally:
        PROCEDURES.pop('tests.once', None)


def test_builtin_procedures_registered():
    ProcedureRunner()
    for name in ('account.read_permissions', 'account.permissions', 'notifications.all',
                 'calendar.requisitions.list', 'calendar.stock_requests.detail', 'calendar.orders.detail'):
        assert name in PROCEDURES


def test_resolver_reads_only_read_grants_once_each():
    ensure_staff('ST001', 'Alice')
    grant('ST001', ['GRNInfo', 'StockPlanning'])
    grant('ST001', ['PurchaseOrder'], perm_type='Write')
    resolved = PermissionResolver(ProcedureRunner()).resolve('ST001')
    assert resolved.names == ('GRNInfo', 'StockPlanning')
    assert 'GRNInfo' in resolved
    assert 'PurchaseOrder' not in resolved
