from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, ForeignKey, DateTime, Numeric
from typing import Optional

from .staff import Base


class PurchaseOrder(Base):
    __tablename__ = 'purchase_orders'
    # Status constants
    STATUS_PENDING = 'Pending'
    STATUS_APPROVED = 'Approved'
    STATUS_REJECTED = 'Rejected'
    ALL_STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    vendor_id: Mapped[int] = mapped_column(ForeignKey('vendors.id'), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=STATUS_PENDING, index=True)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    shipping_charges: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    billing_address: Mapped[Optional[str]] = mapped_column(String(255))
    accountant_code: Mapped[Optional[str]] = mapped_column(ForeignKey('staff.code'))
    added_by: Mapped[str] = mapped_column(ForeignKey('staff.code'), nullable=False)
    added_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    approved_by: Mapped[Optional[str]] = mapped_column(ForeignKey('staff.code'))
    approved_date: Mapped[Optional[datetime]] = mapped_column(DateTime)


class OrderItem(Base):
    __tablename__ = 'purchase_order_items'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    po_code: Mapped[str] = mapped_column(ForeignKey('purchase_orders.code', ondelete='CASCADE'), nullable=False, index=True)
    rq_item_code: Mapped[Optional[str]] = mapped_column(ForeignKey('quotation_items.code'))
    item_code: Mapped[str] = mapped_column(ForeignKey('items.code'), nullable=False)
    cost_per_unit: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    discount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    quantity: Mapped[Optional[int]] = mapped_column(Integer)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=PurchaseOrder.STATUS_PENDING)


class OrderTerm(Base):
    __tablename__ = 'purchase_order_terms'
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    po_code: Mapped[str] = mapped_column(ForeignKey('purchase_orders.code', ondelete='CASCADE'), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
