"""Module event providers: list headers, fetch one detail per header, normalize.

Document providers key details by business code; bucket providers key them
by ``(day, secondary key)`` where the secondary key is the registering staff
code or the quality-check status.
"""
from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Any, ClassVar, Dict, List, Optional, Type
from p2p.constants.permissions import ModuleTag
from p2p.errors import StaleKeyError
from p2p.models.stock_planning import StockRequest
from p2p.services.calendar import events as ev


def _plural(count: int, noun: str) -> str:
    return f'{count} {noun}' + ('' if count == 1 else 's')


def _verb(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


class EventProvider:
    tag: ClassVar[ModuleTag]
    color: ClassVar[str]
    list_query: ClassVar[str]
    detail_query: ClassVar[str]
    payload_cls: ClassVar[Type[ev.ModulePayload]]
    item_cls: ClassVar[Type[ev.WireRecord]]

    def __init__(self, runner):
        self.runner = runner

    @property
    def module(self) -> str:
        return self.payload_cls.MODULE

    def list_params(self) -> Dict[str, Any]:
        return {}

    def list_headers(self) -> List[ev.Header]:
        return [self.header_from_row(r) for r in self.runner.rows(self.list_query, **self.list_params())]

    def fetch_detail(self, header: ev.Header) -> ev.ModulePayload:
        sets = self.runner.result_sets(self.detail_query, **self.detail_params(header))
        if not sets or not sets[0]:
            raise StaleKeyError(self.detail_query, header.key)
        return self.build_payload(header, sets)

    def header_from_row(self, row: Dict[str, Any]) -> ev.Header:
        raise NotImplementedError

    def detail_params(self, header: ev.Header) -> Dict[str, Any]:
        raise NotImplementedError

    def build_payload(self, header: ev.Header, sets) -> ev.ModulePayload:
        raise NotImplementedError

    def normalize(self, header: ev.Header, detail: ev.ModulePayload) -> ev.CalendarEvent:
        raise NotImplementedError

    def __repr__(self):
        return f'<{type(self).__name__} {self.tag.value}>'


class DocumentProvider(EventProvider):
    title_template: ClassVar[str]

    def header_from_row(self, row):
        return ev.DocumentHeader(code=row['code'], added_by=row.get('added_by'), added_date=row['added_date'])

    def detail_params(self, header):
        return {'code': header.code}

    def build_payload(self, header, sets):
        items = [self.item_cls.from_row(r) for r in (sets[1] if len(sets) > 1 else [])]
        return self.payload_cls.from_row(sets[0][0], items=items)

    def normalize(self, header, detail):
        return ev.CalendarEvent(
            id=header.code,
            title=self.title_template.format(name=header.added_by),
            start=ev.iso_datetime(header.added_date),
            color=self.color,
            payload=detail,
        )


class BucketProvider(EventProvider):
    id_prefix: ClassVar[str]
    secondary_param: ClassVar[str] = 'staff_code'

    def header_from_row(self, row):
        return ev.BucketHeader(
            bucket_date=ev.as_date(row['bucket_date']),
            count=int(row['entry_count']),
            added_by=row.get('added_by'),
            staff_code=row.get('staff_code'),
            status=row.get('status'),
        )

    def detail_params(self, header):
        day_start = datetime.combine(header.bucket_date, datetime.min.time())
        params = dict(self.list_params())
        params.update({
            'day_start': day_start,
            'day_end': day_start + timedelta(days=1),
            self.secondary_param: header.secondary,
        })
        return params

    def build_payload(self, header, sets):
        return self.payload_cls(items=[self.item_cls.from_row(r) for r in sets[0]])

    def title(self, header: ev.BucketHeader) -> str:
        raise NotImplementedError

    def normalize(self, header, detail):
        return ev.CalendarEvent(
            id=f'{self.id_prefix}-{header.bucket_date:%Y%m%d}-{header.secondary}',
            title=self.title(header),
            start=ev.iso_date(header.bucket_date),
            color=self.color,
            payload=detail,
        )


class RequisitionProvider(DocumentProvider):
    tag = ModuleTag.REQUISITION
    color = '#007bff'
    title_template = 'Purchase Requisition Is Added By {name}'
    list_query = 'calendar.requisitions.list'
    detail_query = 'calendar.requisitions.detail'
    payload_cls = ev.RequisitionPayload
    item_cls = ev.RequisitionItem


class QuotationRequestProvider(DocumentProvider):
    tag = ModuleTag.QUOTATION_REQUEST
    color = '#17a2b8'
    title_template = 'Request For Quotation Is Added By {name}'
    list_query = 'calendar.quotation_requests.list'
    detail_query = 'calendar.quotation_requests.detail'
    payload_cls = ev.QuotationRequestPayload
    item_cls = ev.QuotationRequestItem

    def header_from_row(self, row):
        return ev.DocumentHeader(
            code=row['code'], added_by=row.get('added_by'),
            added_date=row['added_date'], end_date=row.get('expected_date'),
        )

    def normalize(self, header, detail):
        event = super().normalize(header, detail)
        event.start = ev.iso_date(header.added_date)
        event.end = ev.iso_date(header.end_date or date.today())
        return event


class QuotationRegistrationProvider(BucketProvider):
    tag = ModuleTag.QUOTATION_REGISTRATION
    color = '#6f42c1'
    id_prefix = 'RQ'
    list_query = 'calendar.quotations.list'
    detail_query = 'calendar.quotations.detail'
    payload_cls = ev.QuotationRegistrationPayload
    item_cls = ev.RegisteredQuotationEntry

    def title(self, header):
        n = header.count
        return f"{_plural(n, 'Quotation')} {_verb(n, 'Is', 'Are')} Registered By {header.added_by}"


class OrderProvider(DocumentProvider):
    tag = ModuleTag.ORDER
    color = '#fd7e14'
    title_template = 'Purchase Order Is Added By {name}'
    list_query = 'calendar.orders.list'
    detail_query = 'calendar.orders.detail'
    payload_cls = ev.OrderPayload
    item_cls = ev.OrderItem

    def build_payload(self, header, sets):
        payload = super().build_payload(header, sets)
        payload.term_conditions = [r['term'] for r in (sets[2] if len(sets) > 2 else [])]
        return payload


class ReceiptProvider(DocumentProvider):
    tag = ModuleTag.RECEIPT
    color = '#28a745'
    title_template = 'GRN Is Added By {name}'
    list_query = 'calendar.receipts.list'
    detail_query = 'calendar.receipts.detail'
    payload_cls = ev.ReceiptPayload
    item_cls = ev.ReceiptItem


class ReturnProvider(DocumentProvider):
    tag = ModuleTag.RETURN
    color = '#ffc107'
    title_template = 'Goods Return Entry Is Added By {name}'
    list_query = 'calendar.returns.list'
    detail_query = 'calendar.returns.detail'
    payload_cls = ev.ReturnPayload
    item_cls = ev.ReturnItem


class QualityCheckProvider(BucketProvider):
    tag = ModuleTag.QUALITY_CHECK
    color = '#dc3545'
    id_prefix = 'QC'
    secondary_param = 'status'
    list_query = 'calendar.quality_checks.list'
    detail_query = 'calendar.quality_checks.detail'
    payload_cls = ev.QualityCheckPayload
    item_cls = ev.QualityCheckEntry

    PASSED_STATUS = 'Confirmed'

    def title(self, header):
        n = header.count
        outcome = 'Passed' if header.status == self.PASSED_STATUS else 'Failed'
        return f"{_plural(n, 'Item')} {_verb(n, 'Has', 'Have')} {outcome} Quality Check"


class StockRefillProvider(BucketProvider):
    tag = ModuleTag.STOCK_REFILL
    color = '#6610f2'
    id_prefix = 'ISR'
    kind = StockRequest.KIND_REFILL
    noun = 'Item Stock Refill Request'
    list_query = 'calendar.stock_requests.list'
    detail_query = 'calendar.stock_requests.detail'
    payload_cls = ev.StockRefillPayload
    item_cls = ev.StockRequestEntry

    def list_params(self):
        return {'kind': self.kind}

    def title(self, header):
        n = header.count
        return f"{_plural(n, self.noun)} {_verb(n, 'Is', 'Are')} Registered By {header.added_by}"


class JustInTimeProvider(StockRefillProvider):
    tag = ModuleTag.JUST_IN_TIME
    color = '#0d6efd'
    id_prefix = 'JIT'
    kind = StockRequest.KIND_JUST_IN_TIME
    noun = 'Just In Time Request'
    payload_cls = ev.JustInTimePayload


class MaterialPlanningProvider(DocumentProvider):
    tag = ModuleTag.MATERIAL_PLANNING
    color = '#20c997'
    title_template = 'Material Requirement Planning Entry Is Added By {name}'
    list_query = 'calendar.material_plans.list'
    detail_query = 'calendar.material_plans.detail'
    payload_cls = ev.MaterialPlanPayload
    item_cls = ev.MaterialPlanItem


PROVIDERS: Dict[ModuleTag, Type[EventProvider]] = {
    cls.tag: cls for cls in (
        RequisitionProvider,
        QuotationRequestProvider,
        QuotationRegistrationProvider,
        OrderProvider,
        ReceiptProvider,
        ReturnProvider,
        QualityCheckProvider,
        StockRefillProvider,
        JustInTimeProvider,
        MaterialPlanningProvider,
    )
}


def build_providers(tags, runner, registry: Optional[Dict[ModuleTag, Type[EventProvider]]] = None) -> List[EventProvider]:
    registry = registry or PROVIDERS
    return [registry[tag](runner) for tag in tags]


__all__ = ['EventProvider', 'DocumentProvider', 'BucketProvider', 'PROVIDERS', 'build_providers']
