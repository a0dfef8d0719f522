from __future__ import annotations
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, ForeignKey, DateTime, Text
from typing import Optional

from .staff import Base


class QualityCheck(Base):
    __tablename__ = 'quality_checks'
    STATUS_CONFIRMED = 'Confirmed'
    STATUS_FAILED = 'Failed'
    ALL_STATUSES = (STATUS_CONFIRMED, STATUS_FAILED)
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    grn_item_code: Mapped[str] = mapped_column(ForeignKey('goods_receipt_items.code'), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=STATUS_CONFIRMED, index=True)
    inspection_frequency: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sample_checked: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sample_failed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    added_by: Mapped[str] = mapped_column(ForeignKey('staff.code'), nullable=False)
    added_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    failed_by: Mapped[Optional[str]] = mapped_column(ForeignKey('staff.code'))
    failed_date: Mapped[Optional[datetime]] = mapped_column(DateTime)
    reason: Mapped[Optional[str]] = mapped_column(Text)
