"""Calendar list/detail procedures, one pair per module.

List procedures return one result-set of header rows. Detail procedures return
the header row set followed by its line-item set(s); bucket details return the
bucket's entries as a single set. Bucket procedures take a half-open
``[day_start, day_end)`` range rather than comparing dates as strings.
"""
from __future__ import annotations
from sqlalchemy import select, func
from sqlalchemy.orm import aliased
from p2p.services.procedures import procedure, rows
from p2p.models.staff import Staff, Item, Vendor
from p2p.models.requisition import PurchaseRequisition, RequisitionItem
from p2p.models.quotation import RequestForQuotation, QuotationRequestItem, RegisteredQuotation
from p2p.models.purchase_order import PurchaseOrder, OrderItem, OrderTerm
from p2p.models.receipt import GoodsReceipt, ReceiptItem, GoodsReturn, ReturnItem
from p2p.models.quality_check import QualityCheck
from p2p.models.stock_planning import StockRequest, MaterialPlan, MaterialPlanItem


def _document_list(session, model):
    adder = aliased(Staff)
    stmt = (
        select(model.code, adder.full_name.label('added_by'), model.added_date)
        .join(adder, adder.code == model.added_by)
        .order_by(model.added_date.asc(), model.code.asc())
    )
    return [rows(session.execute(stmt))]


# --- Purchase requisitions ---
@procedure('calendar.requisitions.list')
def requisitions_list(session, params):
    return _document_list(session, PurchaseRequisition)


@procedure('calendar.requisitions.detail')
def requisition_detail(session, params):
    adder, approver = aliased(Staff), aliased(Staff)
    header = (
        select(
            PurchaseRequisition.code.label('pr_code'),
            PurchaseRequisition.required_date,
            PurchaseRequisition.status.label('status_name'),
            PurchaseRequisition.description,
            adder.full_name.label('added_by'),
            PurchaseRequisition.added_date,
            approver.full_name.label('approved_by'),
            PurchaseRequisition.approved_date,
            PurchaseRequisition.priority.label('priority_name'),
        )
        .join(adder, adder.code == PurchaseRequisition.added_by)
        .outerjoin(approver, approver.code == PurchaseRequisition.approved_by)
        .where(PurchaseRequisition.code == params['code'])
    )
    items = (
        select(
            RequisitionItem.pr_code,
            RequisitionItem.code.label('pr_item_code'),
            RequisitionItem.item_code,
            Item.name.label('item_name'),
            RequisitionItem.required_quantity,
        )
        .join(Item, Item.code == RequisitionItem.item_code)
        .where(RequisitionItem.pr_code == params['code'])
        .order_by(RequisitionItem.code.asc())
    )
    return [rows(session.execute(header)), rows(session.execute(items))]


# --- Requests for quotation ---
@procedure('calendar.quotation_requests.list')
def quotation_requests_list(session, params):
    adder = aliased(Staff)
    stmt = (
        select(
            RequestForQuotation.code,
            adder.full_name.label('added_by'),
            RequestForQuotation.added_date,
            RequestForQuotation.expected_date,
        )
        .join(adder, adder.code == RequestForQuotation.added_by)
        .order_by(RequestForQuotation.added_date.asc(), RequestForQuotation.code.asc())
    )
    return [rows(session.execute(stmt))]


@procedure('calendar.quotation_requests.detail')
def quotation_request_detail(session, params):
    adder, accountant = aliased(Staff), aliased(Staff)
    header = (
        select(
            RequestForQuotation.code.label('rfq_code'),
            RequestForQuotation.pr_code,
            adder.full_name.label('added_by'),
            RequestForQuotation.added_date,
            RequestForQuotation.expected_date,
            RequestForQuotation.description,
            accountant.full_name.label('accountant_name'),
            accountant.email.label('accountant_email'),
            RequestForQuotation.delivery_address,
        )
        .join(adder, adder.code == RequestForQuotation.added_by)
        .outerjoin(accountant, accountant.code == RequestForQuotation.accountant_code)
        .where(RequestForQuotation.code == params['code'])
    )
    items = (
        select(
            QuotationRequestItem.rfq_code,
            QuotationRequestItem.pr_item_code,
            RequisitionItem.item_code,
            Item.name.label('item_name'),
            RequisitionItem.required_quantity,
        )
        .join(RequisitionItem, RequisitionItem.code == QuotationRequestItem.pr_item_code)
        .join(Item, Item.code == RequisitionItem.item_code)
        .where(QuotationRequestItem.rfq_code == params['code'])
        .order_by(QuotationRequestItem.id.asc())
    )
    return [rows(session.execute(header)), rows(session.execute(items))]


# --- Registered quotations (bucketed by day and registering staff) ---
@procedure('calendar.quotations.list')
def quotations_list(session, params):
    bucket = func.date(RegisteredQuotation.added_date)
    stmt = (
        select(
            bucket.label('bucket_date'),
            Staff.code.label('staff_code'),
            Staff.full_name.label('added_by'),
            func.count(RegisteredQuotation.code).label('entry_count'),
        )
        .join(Staff, Staff.code == RegisteredQuotation.added_by)
        .group_by(bucket, Staff.code, Staff.full_name)
        .order_by(bucket.asc(), Staff.code.asc())
    )
    return [rows(session.execute(stmt))]


@procedure('calendar.quotations.detail')
def quotations_detail(session, params):
    adder, approver = aliased(Staff), aliased(Staff)
    stmt = (
        select(
            RegisteredQuotation.code.label('register_quotation_code'),
            RegisteredQuotation.rfq_code,
            Vendor.name.label('vendor_name'),
            RegisteredQuotation.status.label('status_name'),
            adder.full_name.label('added_by'),
            RegisteredQuotation.delivery_date,
            RegisteredQuotation.added_date,
            approver.full_name.label('approved_by'),
            RegisteredQuotation.approved_date,
            RegisteredQuotation.shipping_charges,
        )
        .join(Vendor, Vendor.id == RegisteredQuotation.vendor_id)
        .join(adder, adder.code == RegisteredQuotation.added_by)
        .outerjoin(approver, approver.code == RegisteredQuotation.approved_by)
        .where(
            RegisteredQuotation.added_date >= params['day_start'],
            RegisteredQuotation.added_date < params['day_end'],
            RegisteredQuotation.added_by == params['staff_code'],
        )
        .order_by(RegisteredQuotation.added_date.asc(), RegisteredQuotation.code.asc())
    )
    return [rows(session.execute(stmt))]


# --- Purchase orders (header, items, terms) ---
@procedure('calendar.orders.list')
def orders_list(session, params):
    return _document_list(session, PurchaseOrder)


@procedure('calendar.orders.detail')
def order_detail(session, params):
    adder, approver, accountant = aliased(Staff), aliased(Staff), aliased(Staff)
    header = (
        select(
            PurchaseOrder.code.label('po_code'),
            PurchaseOrder.status.label('status_name'),
            PurchaseOrder.added_date,
            PurchaseOrder.approved_date,
            PurchaseOrder.total_amount,
            PurchaseOrder.billing_address,
            Vendor.name.label('vendor_name'),
            adder.full_name.label('added_by'),
            approver.full_name.label('approved_by'),
            PurchaseOrder.shipping_charges,
            accountant.full_name.label('accountant_name'),
        )
        .join(Vendor, Vendor.id == PurchaseOrder.vendor_id)
        .join(adder, adder.code == PurchaseOrder.added_by)
        .outerjoin(approver, approver.code == PurchaseOrder.approved_by)
        .outerjoin(accountant, accountant.code == PurchaseOrder.accountant_code)
        .where(PurchaseOrder.code == params['code'])
    )
    items = (
        select(
            OrderItem.po_code,
            OrderItem.code.label('po_item_code'),
            OrderItem.rq_item_code,
            OrderItem.item_code,
            Item.name.label('item_name'),
            OrderItem.cost_per_unit,
            OrderItem.discount,
            OrderItem.quantity,
            OrderItem.status.label('status_name'),
        )
        .join(Item, Item.code == OrderItem.item_code)
        .where(OrderItem.po_code == params['code'])
        .order_by(OrderItem.code.asc())
    )
    terms = (
        select(OrderTerm.name.label('term'))
        .where(OrderTerm.po_code == params['code'])
        .order_by(OrderTerm.id.asc())
    )
    return [rows(session.execute(header)), rows(session.execute(items)), rows(session.execute(terms))]


# --- Goods receipts ---
@procedure('calendar.receipts.list')
def receipts_list(session, params):
    return _document_list(session, GoodsReceipt)


@procedure('calendar.receipts.detail')
def receipt_detail(session, params):
    header = (
        select(
            GoodsReceipt.po_code,
            GoodsReceipt.code.label('grn_code'),
            PurchaseOrder.added_date.label('po_date'),
            GoodsReceipt.added_date.label('grn_date'),
            GoodsReceipt.invoice_date,
            Vendor.name.label('vendor_name'),
            GoodsReceipt.invoice_no.label('invoice_code'),
            GoodsReceipt.company_address,
            PurchaseOrder.billing_address,
            GoodsReceipt.status.label('status_name'),
            GoodsReceipt.total_amount,
            GoodsReceipt.shipping_charges,
        )
        .join(PurchaseOrder, PurchaseOrder.code == GoodsReceipt.po_code)
        .join(Vendor, Vendor.id == PurchaseOrder.vendor_id)
        .where(GoodsReceipt.code == params['code'])
    )
    items = (
        select(
            ReceiptItem.grn_code,
            ReceiptItem.code.label('grn_item_code'),
            ReceiptItem.item_code,
            Item.name.label('item_name'),
            ReceiptItem.quantity,
            ReceiptItem.cost_per_unit,
            ReceiptItem.discount,
            ReceiptItem.tax_rate,
            ReceiptItem.final_amount,
        )
        .join(Item, Item.code == ReceiptItem.item_code)
        .where(ReceiptItem.grn_code == params['code'])
        .order_by(ReceiptItem.code.asc())
    )
    return [rows(session.execute(header)), rows(session.execute(items))]


# --- Goods returns ---
@procedure('calendar.returns.list')
def returns_list(session, params):
    return _document_list(session, GoodsReturn)


@procedure('calendar.returns.detail')
def return_detail(session, params):
    adder = aliased(Staff)
    header = (
        select(
            GoodsReturn.code.label('goods_return_code'),
            GoodsReturn.grn_code,
            GoodsReturn.transporter_name,
            GoodsReturn.transport_contact_no,
            GoodsReturn.vehicle_no,
            GoodsReturn.vehicle_type,
            GoodsReturn.reason,
            adder.full_name.label('added_by'),
            GoodsReturn.added_date,
            GoodsReturn.status.label('status_name'),
        )
        .join(adder, adder.code == GoodsReturn.added_by)
        .where(GoodsReturn.code == params['code'])
    )
    items = (
        select(
            ReturnItem.code.label('gr_item_code'),
            ReturnItem.item_code,
            Item.name.label('item_name'),
            ReturnItem.reason,
        )
        .join(Item, Item.code == ReturnItem.item_code)
        .where(ReturnItem.return_code == params['code'])
        .order_by(ReturnItem.code.asc())
    )
    return [rows(session.execute(header)), rows(session.execute(items))]


# --- Quality checks (bucketed by day and outcome) ---
@procedure('calendar.quality_checks.list')
def quality_checks_list(session, params):
    bucket = func.date(QualityCheck.added_date)
    stmt = (
        select(
            bucket.label('bucket_date'),
            QualityCheck.status,
            func.count(QualityCheck.code).label('entry_count'),
        )
        .group_by(bucket, QualityCheck.status)
        .order_by(bucket.asc(), QualityCheck.status.asc())
    )
    return [rows(session.execute(stmt))]


@procedure('calendar.quality_checks.detail')
def quality_checks_detail(session, params):
    checker, failer = aliased(Staff), aliased(Staff)
    stmt = (
        select(
            QualityCheck.code.label('quality_check_code'),
            QualityCheck.status.label('status_name'),
            QualityCheck.grn_item_code,
            ReceiptItem.item_code,
            Item.name.label('item_name'),
            ReceiptItem.quantity,
            QualityCheck.inspection_frequency,
            QualityCheck.sample_checked.label('sample_quality_checked'),
            QualityCheck.sample_failed.label('sample_test_failed'),
            checker.full_name.label('qc_added_by'),
            QualityCheck.added_date.label('qc_added_date'),
            failer.full_name.label('qc_failed_added_by'),
            QualityCheck.failed_date.label('qc_failed_date'),
            QualityCheck.reason,
        )
        .join(ReceiptItem, ReceiptItem.code == QualityCheck.grn_item_code)
        .join(Item, Item.code == ReceiptItem.item_code)
        .join(checker, checker.code == QualityCheck.added_by)
        .outerjoin(failer, failer.code == QualityCheck.failed_by)
        .where(
            QualityCheck.added_date >= params['day_start'],
            QualityCheck.added_date < params['day_end'],
            QualityCheck.status == params['status'],
        )
        .order_by(QualityCheck.added_date.asc(), QualityCheck.code.asc())
    )
    return [rows(session.execute(stmt))]


# --- Stock refill / just-in-time requests (bucketed by day and requester) ---
@procedure('calendar.stock_requests.list')
def stock_requests_list(session, params):
    bucket = func.date(StockRequest.added_date)
    stmt = (
        select(
            bucket.label('bucket_date'),
            Staff.code.label('staff_code'),
            Staff.full_name.label('added_by'),
            func.count(StockRequest.id).label('entry_count'),
        )
        .join(Staff, Staff.code == StockRequest.added_by)
        .where(StockRequest.kind == params['kind'])
        .group_by(bucket, Staff.code, Staff.full_name)
        .order_by(bucket.asc(), Staff.code.asc())
    )
    return [rows(session.execute(stmt))]


@procedure('calendar.stock_requests.detail')
def stock_requests_detail(session, params):
    stmt = (
        select(
            StockRequest.item_code,
            Item.name.label('item_name'),
            StockRequest.quantity,
            StockRequest.required_date,
            StockRequest.status.label('status_name'),
            Staff.full_name.label('added_by'),
            StockRequest.added_date,
        )
        .join(Item, Item.code == StockRequest.item_code)
        .join(Staff, Staff.code == StockRequest.added_by)
        .where(
            StockRequest.kind == params['kind'],
            StockRequest.added_date >= params['day_start'],
            StockRequest.added_date < params['day_end'],
            StockRequest.added_by == params['staff_code'],
        )
        .order_by(StockRequest.added_date.asc(), StockRequest.id.asc())
    )
    return [rows(session.execute(stmt))]


# --- Material requirement plans ---
@procedure('calendar.material_plans.list')
def material_plans_list(session, params):
    return _document_list(session, MaterialPlan)


@procedure('calendar.material_plans.detail')
def material_plan_detail(session, params):
    adder, approver = aliased(Staff), aliased(Staff)
    header = (
        select(
            MaterialPlan.code.label('material_req_planning_code'),
            MaterialPlan.plan_name,
            MaterialPlan.year.label('plan_year'),
            MaterialPlan.from_date,
            MaterialPlan.to_date,
            MaterialPlan.status.label('status_name'),
            adder.full_name.label('added_by'),
            MaterialPlan.added_date,
            approver.full_name.label('approved_by'),
            MaterialPlan.approved_date,
            MaterialPlan.reason,
        )
        .join(adder, adder.code == MaterialPlan.added_by)
        .outerjoin(approver, approver.code == MaterialPlan.approved_by)
        .where(MaterialPlan.code == params['code'])
    )
    items = (
        select(
            MaterialPlanItem.id.label('issue_items_id'),
            MaterialPlanItem.item_code,
            Item.name.label('item_name'),
            MaterialPlanItem.quantity,
        )
        .join(Item, Item.code == MaterialPlanItem.item_code)
        .where(MaterialPlanItem.plan_code == params['code'])
        .order_by(MaterialPlanItem.id.asc())
    )
    return [rows(session.execute(header)), rows(session.execute(items))]
