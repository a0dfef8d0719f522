"""Calendar event and per-module payload types.

Payload dataclasses carry snake_case attributes matching the query labels;
each attribute renders under a PascalCase wire name (overridable through
``wire('...')`` for acronyms such as ``PRCode``). ``extendedProps.module``
is the discriminator the client switches on.
"""
from __future__ import annotations
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from decimal import Decimal
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Union

PAYLOAD_DATE_FORMAT = '%d/%m/%Y'
EVENT_DATETIME_FORMAT = '%Y-%m-%dT%H:%M:%S'
EVENT_DATE_FORMAT = '%Y-%m-%d'


def wire(name: Optional[str] = None, default: Any = None):
    return field(default=default, metadata={'wire': name} if name else {})


def wire_list(name: str = 'Items'):
    return field(default_factory=list, metadata={'wire': name})


def _pascal(name: str) -> str:
    return ''.join(part[:1].upper() + part[1:] for part in name.split('_'))


def render_value(value: Any) -> Any:
    if isinstance(value, WireRecord):
        return value.to_wire()
    if isinstance(value, (datetime, date)):
        return value.strftime(PAYLOAD_DATE_FORMAT)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (list, tuple)):
        return [render_value(v) for v in value]
    return value


def as_date(value: Any) -> date:
    """Coerce a bucket date coming back from ``func.date`` (a string on SQLite)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def iso_datetime(value: Union[date, datetime]) -> str:
    if not isinstance(value, datetime):
        value = datetime.combine(value, datetime.min.time())
    return value.strftime(EVENT_DATETIME_FORMAT)


def iso_date(value: Union[date, datetime]) -> str:
    return value.strftime(EVENT_DATE_FORMAT)


class WireRecord:
    """Mixin for dataclasses rendered to the client under wire field names."""

    @classmethod
    def wire_fields(cls) -> List[str]:
        return [f.metadata.get('wire') or _pascal(f.name) for f in fields(cls)]

    @classmethod
    def from_row(cls, row: Mapping[str, Any], **extra: Any):
        values = {f.name: row.get(f.name) for f in fields(cls) if f.name in row}
        values.update(extra)
        return cls(**values)

    def to_wire(self) -> Dict[str, Any]:
        return {
            f.metadata.get('wire') or _pascal(f.name): render_value(getattr(self, f.name))
            for f in fields(self)
        }


class ModulePayload(WireRecord):
    MODULE: ClassVar[str] = ''

    def extended_props(self) -> Dict[str, Any]:
        props: Dict[str, Any] = {'module': self.MODULE}
        props.update(self.to_wire())
        return props


# --- Headers (list stage) ---
@dataclass(frozen=True)
class DocumentHeader:
    code: str
    added_by: Optional[str]
    added_date: datetime
    end_date: Optional[date] = None

    @property
    def key(self) -> str:
        return self.code


@dataclass(frozen=True)
class BucketHeader:
    """One day's worth of entries grouped by a secondary key (staff code or status)."""
    bucket_date: date
    count: int
    added_by: Optional[str] = None
    staff_code: Optional[str] = None
    status: Optional[str] = None

    @property
    def secondary(self) -> Optional[str]:
        return self.staff_code if self.staff_code is not None else self.status

    @property
    def key(self) -> Tuple[date, Optional[str]]:
        return (self.bucket_date, self.secondary)


Header = Union[DocumentHeader, BucketHeader]


@dataclass
class CalendarEvent:
    id: str
    title: str
    start: str
    color: str
    payload: ModulePayload
    end: Optional[str] = None

    @property
    def module(self) -> str:
        return self.payload.MODULE

    def to_json(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {'id': self.id, 'title': self.title, 'start': self.start}
        if self.end is not None:
            out['end'] = self.end
        out['color'] = self.color
        out['extendedProps'] = self.payload.extended_props()
        return out


# --- Purchase requisition ---
@dataclass
class RequisitionItem(WireRecord):
    pr_code: Optional[str] = wire('PRCode')
    pr_item_code: Optional[str] = wire('PRItemCode')
    item_code: Optional[str] = wire()
    item_name: Optional[str] = wire()
    required_quantity: Optional[int] = wire()


@dataclass
class RequisitionPayload(ModulePayload):
    MODULE: ClassVar[str] = 'PurchaseRequisition'
    pr_code: Optional[str] = wire('PRCode')
    required_date: Optional[date] = wire()
    status_name: Optional[str] = wire()
    description: Optional[str] = wire()
    added_by: Optional[str] = wire()
    added_date: Optional[datetime] = wire()
    approved_by: Optional[str] = wire()
    approved_date: Optional[datetime] = wire()
    priority_name: Optional[str] = wire()
    items: List[RequisitionItem] = wire_list()


# --- Request for quotation ---
@dataclass
class QuotationRequestItem(WireRecord):
    rfq_code: Optional[str] = wire('RFQCode')
    pr_item_code: Optional[str] = wire('PRItemCode')
    item_code: Optional[str] = wire()
    item_name: Optional[str] = wire()
    required_quantity: Optional[int] = wire()


@dataclass
class QuotationRequestPayload(ModulePayload):
    MODULE: ClassVar[str] = 'RequestForQuotation'
    rfq_code: Optional[str] = wire('RFQCode')
    pr_code: Optional[str] = wire('PRCode')
    expected_date: Optional[date] = wire()
    description: Optional[str] = wire()
    added_by: Optional[str] = wire()
    added_date: Optional[datetime] = wire()
    accountant_name: Optional[str] = wire()
    accountant_email: Optional[str] = wire()
    delivery_address: Optional[str] = wire()
    items: List[QuotationRequestItem] = wire_list()


# --- Registered quotations (bucket) ---
@dataclass
class RegisteredQuotationEntry(WireRecord):
    register_quotation_code: Optional[str] = wire()
    rfq_code: Optional[str] = wire('RFQCode')
    vendor_name: Optional[str] = wire()
    status_name: Optional[str] = wire()
    added_by: Optional[str] = wire()
    delivery_date: Optional[date] = wire()
    added_date: Optional[datetime] = wire()
    approved_by: Optional[str] = wire()
    approved_date: Optional[datetime] = wire()
    shipping_charges: Optional[Decimal] = wire()


@dataclass
class QuotationRegistrationPayload(ModulePayload):
    MODULE: ClassVar[str] = 'RegisterQuotation'
    items: List[RegisteredQuotationEntry] = wire_list()


# --- Purchase order ---
@dataclass
class OrderItem(WireRecord):
    po_code: Optional[str] = wire('POCode')
    po_item_code: Optional[str] = wire('POItemCode')
    rq_item_code: Optional[str] = wire('RQItemCode')
    item_code: Optional[str] = wire()
    item_name: Optional[str] = wire()
    cost_per_unit: Optional[Decimal] = wire()
    discount: Optional[int] = wire()
    quantity: Optional[int] = wire()
    status_name: Optional[str] = wire()


@dataclass
class OrderPayload(ModulePayload):
    MODULE: ClassVar[str] = 'PurchaseOrder'
    po_code: Optional[str] = wire('POCode')
    status_name: Optional[str] = wire()
    added_date: Optional[datetime] = wire()
    approved_date: Optional[datetime] = wire()
    total_amount: Optional[Decimal] = wire()
    billing_address: Optional[str] = wire()
    vendor_name: Optional[str] = wire()
    added_by: Optional[str] = wire()
    approved_by: Optional[str] = wire()
    accountant_name: Optional[str] = wire()
    shipping_charges: Optional[Decimal] = wire()
    items: List[OrderItem] = wire_list()
    term_conditions: List[str] = wire_list('TermConditions')


# --- Goods receipt ---
@dataclass
class ReceiptItem(WireRecord):
    grn_code: Optional[str] = wire('GRNCode')
    grn_item_code: Optional[str] = wire('GRNItemCode')
    item_code: Optional[str] = wire()
    item_name: Optional[str] = wire()
    quantity: Optional[int] = wire()
    cost_per_unit: Optional[Decimal] = wire()
    discount: Optional[int] = wire()
    tax_rate: Optional[str] = wire()
    final_amount: Optional[Decimal] = wire()


@dataclass
class ReceiptPayload(ModulePayload):
    MODULE: ClassVar[str] = 'GRNInfo'
    po_code: Optional[str] = wire('POCode')
    grn_code: Optional[str] = wire('GRNCode')
    po_date: Optional[datetime] = wire('PODate')
    grn_date: Optional[datetime] = wire('GRNDate')
    invoice_date: Optional[date] = wire()
    vendor_name: Optional[str] = wire()
    invoice_code: Optional[str] = wire()
    company_address: Optional[str] = wire()
    billing_address: Optional[str] = wire()
    status_name: Optional[str] = wire()
    total_amount: Optional[Decimal] = wire()
    shipping_charges: Optional[Decimal] = wire()
    items: List[ReceiptItem] = wire_list()


# --- Goods return ---
@dataclass
class ReturnItem(WireRecord):
    gr_item_code: Optional[str] = wire('GRItemCode')
    item_code: Optional[str] = wire()
    item_name: Optional[str] = wire()
    reason: Optional[str] = wire()


@dataclass
class ReturnPayload(ModulePayload):
    MODULE: ClassVar[str] = 'GoodsReturnInfo'
    goods_return_code: Optional[str] = wire()
    grn_code: Optional[str] = wire('GRNCode')
    transporter_name: Optional[str] = wire()
    transport_contact_no: Optional[str] = wire()
    vehicle_no: Optional[str] = wire()
    vehicle_type: Optional[str] = wire()
    reason: Optional[str] = wire()
    added_by: Optional[str] = wire()
    added_date: Optional[datetime] = wire()
    status_name: Optional[str] = wire()
    items: List[ReturnItem] = wire_list()


# --- Quality check (bucket) ---
@dataclass
class QualityCheckEntry(WireRecord):
    quality_check_code: Optional[str] = wire()
    status_name: Optional[str] = wire()
    grn_item_code: Optional[str] = wire('GRNItemCode')
    item_code: Optional[str] = wire()
    item_name: Optional[str] = wire()
    quantity: Optional[int] = wire()
    inspection_frequency: Optional[int] = wire()
    sample_quality_checked: Optional[int] = wire()
    sample_test_failed: Optional[int] = wire()
    qc_added_by: Optional[str] = wire('QCAddedBy')
    qc_added_date: Optional[datetime] = wire('QCAddedDate')
    qc_failed_added_by: Optional[str] = wire('QCFailedAddedBy')
    qc_failed_date: Optional[datetime] = wire('QCFailedDate')
    reason: Optional[str] = wire()


@dataclass
class QualityCheckPayload(ModulePayload):
    MODULE: ClassVar[str] = 'QualityCheckInfo'
    items: List[QualityCheckEntry] = wire_list()


# --- Stock refill / just in time (bucket) ---
@dataclass
class StockRequestEntry(WireRecord):
    item_code: Optional[str] = wire()
    item_name: Optional[str] = wire()
    quantity: Optional[int] = wire()
    required_date: Optional[date] = wire()
    status_name: Optional[str] = wire()
    added_by: Optional[str] = wire()
    added_date: Optional[datetime] = wire()


@dataclass
class StockRefillPayload(ModulePayload):
    MODULE: ClassVar[str] = 'ItemStockRefill'
    items: List[StockRequestEntry] = wire_list()


@dataclass
class JustInTimePayload(ModulePayload):
    MODULE: ClassVar[str] = 'JustInTime'
    items: List[StockRequestEntry] = wire_list()


# --- Material requirement planning ---
@dataclass
class MaterialPlanItem(WireRecord):
    issue_items_id: Optional[int] = wire()
    item_code: Optional[str] = wire()
    item_name: Optional[str] = wire()
    quantity: Optional[int] = wire()


@dataclass
class MaterialPlanPayload(ModulePayload):
    MODULE: ClassVar[str] = 'MaterialReqPlanningInfo'
    material_req_planning_code: Optional[str] = wire()
    plan_name: Optional[str] = wire()
    plan_year: Optional[int] = wire()
    from_date: Optional[date] = wire()
    to_date: Optional[date] = wire()
    status_name: Optional[str] = wire()
    added_by: Optional[str] = wire()
    added_date: Optional[datetime] = wire()
    approved_by: Optional[str] = wire()
    approved_date: Optional[datetime] = wire()
    reason: Optional[str] = wire()
    items: List[MaterialPlanItem] = wire_list()
