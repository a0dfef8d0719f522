from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, ForeignKey, DateTime, Date, Text, Numeric
from typing import Optional

from .staff import Base


class RequestForQuotation(Base):
    __tablename__ = 'quotation_requests'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    pr_code: Mapped[str] = mapped_column(ForeignKey('purchase_requisitions.code'), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    expected_date: Mapped[Optional[date]] = mapped_column(Date)
    delivery_address: Mapped[Optional[str]] = mapped_column(String(255))
    accountant_code: Mapped[Optional[str]] = mapped_column(ForeignKey('staff.code'))
    added_by: Mapped[str] = mapped_column(ForeignKey('staff.code'), nullable=False)
    added_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)


class QuotationRequestItem(Base):
    __tablename__ = 'quotation_request_items'
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    rfq_code: Mapped[str] = mapped_column(ForeignKey('quotation_requests.code', ondelete='CASCADE'), nullable=False, index=True)
    pr_item_code: Mapped[str] = mapped_column(ForeignKey('requisition_items.code'), nullable=False)


class RegisteredQuotation(Base):
    __tablename__ = 'registered_quotations'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    rfq_code: Mapped[str] = mapped_column(ForeignKey('quotation_requests.code'), nullable=False, index=True)
    vendor_id: Mapped[int] = mapped_column(ForeignKey('vendors.id'), nullable=False)
    delivery_date: Mapped[Optional[date]] = mapped_column(Date)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default='Pending', index=True)
    shipping_charges: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    added_by: Mapped[str] = mapped_column(ForeignKey('staff.code'), nullable=False)
    added_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    approved_by: Mapped[Optional[str]] = mapped_column(ForeignKey('staff.code'))
    approved_date: Mapped[Optional[datetime]] = mapped_column(DateTime)


class QuotationItem(Base):
    __tablename__ = 'quotation_items'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    rq_code: Mapped[str] = mapped_column(ForeignKey('registered_quotations.code', ondelete='CASCADE'), nullable=False, index=True)
    item_code: Mapped[str] = mapped_column(ForeignKey('items.code'), nullable=False)
    cost_per_unit: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
