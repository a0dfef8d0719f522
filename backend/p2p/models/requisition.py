from __future__ import annotations
from datetime import date, datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, ForeignKey, DateTime, Date, Text
from typing import Optional

from .staff import Base


class PurchaseRequisition(Base):
    __tablename__ = 'purchase_requisitions'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    required_date: Mapped[Optional[date]] = mapped_column(Date)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default='Pending', index=True)
    priority: Mapped[Optional[str]] = mapped_column(String(32))
    added_by: Mapped[str] = mapped_column(ForeignKey('staff.code'), nullable=False)
    added_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    approved_by: Mapped[Optional[str]] = mapped_column(ForeignKey('staff.code'))
    approved_date: Mapped[Optional[datetime]] = mapped_column(DateTime)


class RequisitionItem(Base):
    __tablename__ = 'requisition_items'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    pr_code: Mapped[str] = mapped_column(ForeignKey('purchase_requisitions.code', ondelete='CASCADE'), nullable=False, index=True)
    item_code: Mapped[str] = mapped_column(ForeignKey('items.code'), nullable=False)
    required_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
