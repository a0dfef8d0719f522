from datetime import datetime
from sqlalchemy.exc import OperationalError
from p2p.config.calendar import CalendarSettings
from p2p.services.procedures import PROCEDURES
import p2p.queries.calendar  # noqa: F401
from test_utils_seed import (
    auth_headers, ensure_staff, grant, add_requisition, add_quotation_request, add_registered_quotation,
    add_purchase_order, add_goods_receipt, add_goods_return, add_quality_check, add_stock_request,
    add_material_plan, DAY,
)

ALL_READ = ['PurchaseRequisition', 'RequestForQuotation', 'RegisterQuotation', 'PurchaseOrder',
            'GRNInfo', 'GoodsReturnInfo', 'QualityCheckInfo', 'StockPlanning']


def test_alice_sees_her_requisition(client, app_instance):
    ensure_staff('ST001', 'Alice')
    grant('ST001', ['PurchaseRequisition'])
    add_requisition('PR-1001', 'ST001')
    resp = client.get('/calendar/events', headers=auth_headers(app_instance, 'ST001'))
    assert resp.status_code == 200
    feed = resp.get_json()
    assert len(feed) == 1
    event = feed[0]
    assert event['id'] == 'PR-1001'
    assert event['title'] == 'Purchase Requisition Is Added By Alice'
    assert event['start'] == '2025-03-14T09:30:00'
    props = event['extendedProps']
    assert props['module'] == 'PurchaseRequisition'
    assert props['RequiredDate'] == '20/03/2025'
    assert props['PriorityName'] == 'High'
    assert len(props['Items']) == 2
    assert [i['ItemName'] for i in props['Items']] == ['Steel Rod', 'Copper Wire']


def test_write_only_grant_shows_nothing(client, app_instance):
    ensure_staff('ST001', 'Alice')
    grant('ST001', ['PurchaseRequisition'], perm_type='Write')
    add_requisition('PR-1001', 'ST001')
    resp = client.get('/calendar/events', headers=auth_headers(app_instance, 'ST001'))
    assert resp.status_code == 200
    assert resp.get_json() == []


def _seed_every_module():
    ensure_staff('ST001', 'Alice')
    ensure_staff('ST002', 'Bilal')
    grant('ST001', ALL_READ)
    add_requisition('PR-1', 'ST001')
    add_quotation_request('RFQ-1', 'PR-1', 'ST001')
    add_registered_quotation('RQ-1', 'RFQ-1', 'ST001')
    add_registered_quotation('RQ-2', 'RFQ-1', 'ST001', added_date=datetime(2025, 3, 14, 17, 0))
    add_registered_quotation('RQ-3', 'RFQ-1', 'ST002')
    add_purchase_order('PO-1', 'ST002')
    add_goods_receipt('GRN-1', 'PO-1', 'ST002')
    add_goods_return('GR-1', 'GRN-1', 'ST002')
    add_quality_check('QC-1', 'GRN-1-I1', 'ST002', status='Confirmed')
    add_quality_check('QC-2', 'GRN-1-I1', 'ST002', status='Failed')
    add_stock_request('ISR', 'ST002')
    add_stock_request('JIT', 'ST002')
    add_stock_request('JIT', 'ST002', added_date=datetime(2025, 3, 15, 8, 0))
    add_material_plan('MRP-1', 'ST001')


def test_every_module_in_selection_order(client, app_instance):
    _seed_every_module()
    resp = client.get('/calendar/events', headers=auth_headers(app_instance, 'ST001'))
    assert resp.status_code == 200
    feed = resp.get_json()
    assert [e['id'] for e in feed] == [
        'ISR-20250314-ST002', 'MRP-1', 'JIT-20250314-ST002', 'JIT-20250315-ST002',
        'PR-1', 'RFQ-1', 'RQ-20250314-ST001', 'RQ-20250314-ST002', 'PO-1', 'GRN-1', 'GR-1',
        'QC-20250314-Confirmed', 'QC-20250314-Failed',
    ]
    by_id = {e['id']: e for e in feed}
    assert by_id['RQ-20250314-ST001']['title'] == '2 Quotations Are Registered By Alice'
    assert [i['RegisterQuotationCode'] for i in by_id['RQ-20250314-ST001']['extendedProps']['Items']] == ['RQ-1', 'RQ-2']
    assert by_id['RQ-20250314-ST002']['extendedProps']['Items'][0]['ShippingCharges'] == 12.5
    assert by_id['RFQ-1']['end'] == '2025-03-28'
    assert by_id['PO-1']['extendedProps']['TermConditions'] == ['Net 30', 'FOB destination']
    assert by_id['GRN-1']['extendedProps']['Items'][0]['TaxRate'] == '18%'
    assert by_id['GR-1']['extendedProps']['Items'][0]['ItemName'] == 'Steel Rod'
    assert by_id['QC-20250314-Failed']['title'] == '1 Item Has Failed Quality Check'
    assert by_id['QC-20250314-Failed']['extendedProps']['Items'][0]['SampleTestFailed'] == 2
    assert by_id['MRP-1']['extendedProps']['Items'][0]['Quantity'] == 40
    assert by_id['ISR-20250314-ST002']['extendedProps']['module'] == 'ItemStockRefill'
    assert by_id['JIT-20250315-ST002']['title'] == '1 Just In Time Request Is Registered By Bilal'


def test_missing_token_is_session_expired(client):
    resp = client.get('/calendar/events')
    assert resp.status_code == 401
    assert resp.get_json() == {'success': False, 'message': 'Session expired'}


def test_garbage_token_is_session_expired(client):
    resp = client.get('/calendar/events', headers={'Authorization': 'Bearer not-a-jwt'})
    assert resp.status_code == 401
    assert resp.get_json() == {'success': False, 'message': 'Session expired'}


def _boom(session, params):
    raise OperationalError('SELECT secret_table', {}, Exception('disk I/O error'))


def test_lookup_failure_fails_feed_without_leaking(client, app_instance, monkeypatch):
    ensure_staff('ST001', 'Alice')
    grant('ST001', ['PurchaseRequisition', 'PurchaseOrder'])
    add_requisition('PR-1', 'ST001')
    monkeypatch.setitem(PROCEDURES, 'calendar.orders.list', _boom)
    resp = client.get('/calendar/events', headers=auth_headers(app_instance, 'ST001'))
    assert resp.status_code == 500
    body = resp.get_json()
    assert body['error'] == {'status': 500, 'title': 'Internal Server Error', 'detail': 'Unexpected error'}
    assert 'secret_table' not in resp.get_data(as_text=True)


def test_isolated_failure_reports_module_header(client, app_instance, monkeypatch):
    ensure_staff('ST001', 'Alice')
    grant('ST001', ['PurchaseRequisition', 'PurchaseOrder'])
    add_requisition('PR-1', 'ST001')
    monkeypatch.setitem(PROCEDURES, 'calendar.orders.list', _boom)
    monkeypatch.setitem(app_instance.config, 'CALENDAR_SETTINGS', CalendarSettings(isolate_failures=True))
    resp = client.get('/calendar/events', headers=auth_headers(app_instance, 'ST001'))
    assert resp.status_code == 200
    assert [e['id'] for e in resp.get_json()] == ['PR-1']
    assert resp.headers['X-Calendar-Failed-Modules'] == 'PurchaseOrder'


def test_feed_ignores_requesting_staff_for_headers(client, app_instance):
    ensure_staff('ST001', 'Alice')
    ensure_staff('ST002', 'Bilal')
    grant('ST002', ['PurchaseRequisition'])
    add_requisition('PR-1', 'ST001', added_date=DAY)
    resp = client.get('/calendar/events', headers=auth_headers(app_instance, 'ST002'))
    assert [e['title'] for e in resp.get_json()] == ['Purchase Requisition Is Added By Alice']
