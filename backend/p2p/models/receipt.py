from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, ForeignKey, DateTime, Date, Numeric, Text
from typing import Optional

from .staff import Base


class GoodsReceipt(Base):
    """Goods receipt note (GRN) raised against a purchase order."""
    __tablename__ = 'goods_receipts'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    po_code: Mapped[str] = mapped_column(ForeignKey('purchase_orders.code'), nullable=False, index=True)
    invoice_no: Mapped[Optional[str]] = mapped_column(String(64))
    invoice_date: Mapped[Optional[date]] = mapped_column(Date)
    company_address: Mapped[Optional[str]] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(32), nullable=False, default='Received', index=True)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    shipping_charges: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    added_by: Mapped[str] = mapped_column(ForeignKey('staff.code'), nullable=False)
    added_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)


class ReceiptItem(Base):
    __tablename__ = 'goods_receipt_items'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    grn_code: Mapped[str] = mapped_column(ForeignKey('goods_receipts.code', ondelete='CASCADE'), nullable=False, index=True)
    item_code: Mapped[str] = mapped_column(ForeignKey('items.code'), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cost_per_unit: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    discount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tax_rate: Mapped[Optional[str]] = mapped_column(String(16))
    final_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)


class GoodsReturn(Base):
    __tablename__ = 'goods_returns'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    grn_code: Mapped[str] = mapped_column(ForeignKey('goods_receipts.code'), nullable=False, index=True)
    transporter_name: Mapped[Optional[str]] = mapped_column(String(128))
    transport_contact_no: Mapped[Optional[str]] = mapped_column(String(32))
    vehicle_no: Mapped[Optional[str]] = mapped_column(String(32))
    vehicle_type: Mapped[Optional[str]] = mapped_column(String(64))
    reason: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default='Pending', index=True)
    added_by: Mapped[str] = mapped_column(ForeignKey('staff.code'), nullable=False)
    added_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)


class ReturnItem(Base):
    __tablename__ = 'goods_return_items'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    return_code: Mapped[str] = mapped_column(ForeignKey('goods_returns.code', ondelete='CASCADE'), nullable=False, index=True)
    item_code: Mapped[str] = mapped_column(ForeignKey('items.code'), nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(Text)
