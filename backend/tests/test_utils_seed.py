"""Test seeding utilities to reduce duplication.

These helpers centralize creation of staff, permission grants and procurement
documents so feed tests only state what differs between scenarios.
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Iterable, Optional, Tuple
from flask_jwt_extended import create_access_token
from p2p import get_db
from p2p.models.staff import Staff, Permission, StaffPermission, Item, Vendor
from p2p.models.requisition import PurchaseRequisition, RequisitionItem
from p2p.models.quotation import RequestForQuotation, QuotationRequestItem, RegisteredQuotation
from p2p.models.purchase_order import PurchaseOrder, OrderItem, OrderTerm
from p2p.models.receipt import GoodsReceipt, ReceiptItem, GoodsReturn, ReturnItem
from p2p.models.quality_check import QualityCheck
from p2p.models.stock_planning import StockRequest, MaterialPlan, MaterialPlanItem
from p2p.models.notification import Notification

DAY = datetime(2025, 3, 14, 9, 30, 0)


def auth_headers(app, staff_code: str):
    with app.app_context():
        token = create_access_token(identity=staff_code)
    return {'Authorization': f'Bearer {token}'}


def ensure_staff(code: str, full_name: Optional[str] = None) -> Staff:
    session = get_db()
    s = session.get(Staff, code)
    if not s:
        s = Staff(code=code, full_name=full_name or code, email=f'{code.lower()}@example.com')
        session.add(s); session.commit()
    return s


def grant(staff_code: str, names: Iterable[str], perm_type: str = 'Read'):
    session = get_db()
    for name in names:
        p = session.query(Permission).filter_by(type=perm_type, name=name).one_or_none()
        if not p:
            p = Permission(type=perm_type, name=name)
            session.add(p); session.flush()
        if not session.query(StaffPermission).filter_by(staff_code=staff_code, permission_id=p.id).one_or_none():
            session.add(StaffPermission(staff_code=staff_code, permission_id=p.id))
            session.flush()
    session.commit()


def ensure_items(*pairs: Tuple[str, str]):
    session = get_db()
    for code, name in pairs:
        if not session.get(Item, code):
            session.add(Item(code=code, name=name))
    session.commit()


def ensure_vendor(name: str = 'Acme Supplies') -> Vendor:
    session = get_db()
    v = session.query(Vendor).filter_by(name=name).one_or_none()
    if not v:
        v = Vendor(name=name, contact_email='sales@acme.example')
        session.add(v); session.commit()
    return v


def add_requisition(code: str, staff_code: str, added_date: datetime = DAY, items=(('ITM-1', 10), ('ITM-2', 4))):
    session = get_db()
    ensure_items(('ITM-1', 'Steel Rod'), ('ITM-2', 'Copper Wire'), ('ITM-3', 'Bolt'))
    session.add(PurchaseRequisition(
        code=code, description='Raw material', required_date=date(2025, 3, 20), status='Pending',
        priority='High', added_by=staff_code, added_date=added_date,
    ))
    session.flush()
    for i, (item_code, qty) in enumerate(items, start=1):
        session.add(RequisitionItem(code=f'{code}-I{i}', pr_code=code, item_code=item_code, required_quantity=qty))
    session.commit()


def add_quotation_request(code: str, pr_code: str, staff_code: str, expected_date: Optional[date] = date(2025, 3, 28)):
    session = get_db()
    session.add(RequestForQuotation(
        code=code, pr_code=pr_code, description='Quote please', expected_date=expected_date,
        delivery_address='Plant 2', accountant_code=staff_code, added_by=staff_code, added_date=DAY,
    ))
    session.flush()
    session.add(QuotationRequestItem(rfq_code=code, pr_item_code=f'{pr_code}-I1'))
    session.commit()


def add_registered_quotation(code: str, rfq_code: str, staff_code: str, added_date: datetime = DAY):
    session = get_db()
    v = ensure_vendor()
    session.add(RegisteredQuotation(
        code=code, rfq_code=rfq_code, vendor_id=v.id, delivery_date=date(2025, 4, 1), status='Pending',
        shipping_charges=Decimal('12.50'), added_by=staff_code, added_date=added_date,
    ))
    session.commit()


def add_purchase_order(code: str, staff_code: str, terms=('Net 30', 'FOB destination')):
    session = get_db()
    ensure_items(('ITM-1', 'Steel Rod'))
    v = ensure_vendor()
    session.add(PurchaseOrder(
        code=code, vendor_id=v.id, status='Approved', total_amount=Decimal('1500.00'),
        shipping_charges=Decimal('25.00'), billing_address='HQ', accountant_code=staff_code,
        added_by=staff_code, added_date=DAY, approved_by=staff_code, approved_date=DAY,
    ))
    session.flush()
    session.add(OrderItem(code=f'{code}-I1', po_code=code, item_code='ITM-1',
                          cost_per_unit=Decimal('150.00'), discount=5, quantity=10))
    for term in terms:
        session.add(OrderTerm(po_code=code, name=term))
    session.commit()


def add_goods_receipt(code: str, po_code: str, staff_code: str):
    session = get_db()
    session.add(GoodsReceipt(
        code=code, po_code=po_code, invoice_no='INV-77', invoice_date=date(2025, 3, 13),
        company_address='Plant 2', total_amount=Decimal('1500.00'), shipping_charges=Decimal('25.00'),
        added_by=staff_code, added_date=DAY,
    ))
    session.flush()
    session.add(ReceiptItem(code=f'{code}-I1', grn_code=code, item_code='ITM-1', quantity=10,
                            cost_per_unit=Decimal('150.00'), discount=5, tax_rate='18%', final_amount=Decimal('1425.00')))
    session.commit()


def add_goods_return(code: str, grn_code: str, staff_code: str):
    session = get_db()
    session.add(GoodsReturn(
        code=code, grn_code=grn_code, transporter_name='FastMove', transport_contact_no='555-0100',
        vehicle_no='MH12AB1234', vehicle_type='Truck', reason='Damaged', added_by=staff_code, added_date=DAY,
    ))
    session.flush()
    session.add(ReturnItem(code=f'{code}-I1', return_code=code, item_code='ITM-1', reason='Bent'))
    session.commit()


def add_quality_check(code: str, grn_item_code: str, staff_code: str, status: str = 'Confirmed',
                      added_date: datetime = DAY):
    session = get_db()
    session.add(QualityCheck(
        code=code, grn_item_code=grn_item_code, status=status, inspection_frequency=2,
        sample_checked=5, sample_failed=0 if status == 'Confirmed' else 2,
        added_by=staff_code, added_date=added_date,
    ))
    session.commit()


def add_stock_request(kind: str, staff_code: str, added_date: datetime = DAY, item_code: str = 'ITM-1'):
    session = get_db()
    ensure_items(('ITM-1', 'Steel Rod'))
    session.add(StockRequest(kind=kind, item_code=item_code, quantity=3, required_date=date(2025, 3, 30),
                             added_by=staff_code, added_date=added_date))
    session.commit()


def add_material_plan(code: str, staff_code: str):
    session = get_db()
    ensure_items(('ITM-1', 'Steel Rod'))
    session.add(MaterialPlan(code=code, plan_name='Q2 plan', year=2025, from_date=date(2025, 4, 1),
                             to_date=date(2025, 6, 30), added_by=staff_code, added_date=DAY))
    session.flush()
    session.add(MaterialPlanItem(plan_code=code, item_code='ITM-1', quantity=40))
    session.commit()


def add_notification(staff_code: str, message: str, is_read: bool = False, created_at: Optional[datetime] = None) -> int:
    session = get_db()
    n = Notification(staff_code=staff_code, message=message, is_read=is_read)
    if created_at is not None:
        n.created_at = created_at
    session.add(n); session.commit()
    return n.id
