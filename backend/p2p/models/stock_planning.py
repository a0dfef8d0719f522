from __future__ import annotations
from datetime import date, datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, ForeignKey, DateTime, Date, Text
from typing import Optional

from .staff import Base


class StockRequest(Base):
    """Item stock refill and just-in-time requests share one table, split by kind."""
    __tablename__ = 'stock_requests'
    KIND_REFILL = 'ISR'
    KIND_JUST_IN_TIME = 'JIT'
    ALL_KINDS = (KIND_REFILL, KIND_JUST_IN_TIME)
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    kind: Mapped[str] = mapped_column(String(8), nullable=False, index=True)
    item_code: Mapped[str] = mapped_column(ForeignKey('items.code'), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    required_date: Mapped[Optional[date]] = mapped_column(Date)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default='Pending')
    added_by: Mapped[str] = mapped_column(ForeignKey('staff.code'), nullable=False)
    added_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)


class MaterialPlan(Base):
    __tablename__ = 'material_plans'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    plan_name: Mapped[str] = mapped_column(String(128), nullable=False)
    year: Mapped[Optional[int]] = mapped_column(Integer)
    from_date: Mapped[Optional[date]] = mapped_column(Date)
    to_date: Mapped[Optional[date]] = mapped_column(Date)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default='Pending', index=True)
    reason: Mapped[Optional[str]] = mapped_column(Text)
    added_by: Mapped[str] = mapped_column(ForeignKey('staff.code'), nullable=False)
    added_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    approved_by: Mapped[Optional[str]] = mapped_column(ForeignKey('staff.code'))
    approved_date: Mapped[Optional[datetime]] = mapped_column(DateTime)


class MaterialPlanItem(Base):
    __tablename__ = 'material_plan_items'
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    plan_code: Mapped[str] = mapped_column(ForeignKey('material_plans.code', ondelete='CASCADE'), nullable=False, index=True)
    item_code: Mapped[str] = mapped_column(ForeignKey('items.code'), nullable=False)
    quantity: Mapped[Optional[int]] = mapped_column(Integer)
