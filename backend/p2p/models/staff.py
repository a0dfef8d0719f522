from __future__ import annotations
from datetime import datetime
from sqlalchemy.orm import declarative_base, relationship, Mapped, mapped_column
from sqlalchemy import String, Integer, Boolean, ForeignKey, UniqueConstraint, DateTime, text
from typing import Optional

Base = declarative_base()

# --- Core Models ---
class Staff(Base):
    __tablename__ = 'staff'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    full_name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    department: Mapped[Optional[str]] = mapped_column(String(64))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    permissions = relationship('StaffPermission', back_populates='staff', cascade='all, delete-orphan')
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=text('CURRENT_TIMESTAMP'), server_onupdate=text('CURRENT_TIMESTAMP'))

class Permission(Base):
    __tablename__ = 'permissions'
    TYPE_READ = 'Read'
    TYPE_WRITE = 'Write'
    TYPE_APPROVE = 'Approve'
    ALL_TYPES = (TYPE_READ, TYPE_WRITE, TYPE_APPROVE)
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False, default=TYPE_READ)
    name: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    __table_args__ = (UniqueConstraint('type', 'name', name='uq_permission_type_name'),)

class StaffPermission(Base):
    __tablename__ = 'staff_permissions'
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    staff_code: Mapped[str] = mapped_column(ForeignKey('staff.code', ondelete='CASCADE'), nullable=False)
    permission_id: Mapped[int] = mapped_column(ForeignKey('permissions.id', ondelete='CASCADE'), nullable=False)

    staff = relationship('Staff', back_populates='permissions')
    permission = relationship('Permission')

    __table_args__ = (UniqueConstraint('staff_code', 'permission_id', name='uq_staff_permission'),)

class Item(Base):
    __tablename__ = 'items'
    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)

class Vendor(Base):
    __tablename__ = 'vendors'
    STATUS_ACTIVE = 'ACTIVE'
    STATUS_INACTIVE = 'INACTIVE'
    ALL_STATUSES = (STATUS_ACTIVE, STATUS_INACTIVE)
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False, index=True, unique=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(150), index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=STATUS_ACTIVE, index=True)
