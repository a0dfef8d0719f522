from __future__ import annotations
from sqlalchemy import select, update, func
from p2p.services.procedures import procedure, rows
from p2p.models.staff import Permission, StaffPermission
from p2p.models.notification import Notification


# --- Permissions ---
@procedure('account.read_permissions')
def read_permissions(session, params):
    stmt = (
        select(Permission.name)
        .join(StaffPermission, StaffPermission.permission_id == Permission.id)
        .where(StaffPermission.staff_code == params['staff_code'], Permission.type == Permission.TYPE_READ)
        .order_by(StaffPermission.id.asc())
    )
    return [rows(session.execute(stmt))]


@procedure('account.permissions')
def all_permissions(session, params):
    stmt = (
        select(Permission.type, Permission.name)
        .join(StaffPermission, StaffPermission.permission_id == Permission.id)
        .where(StaffPermission.staff_code == params['staff_code'])
        .order_by(StaffPermission.id.asc())
    )
    return [rows(session.execute(stmt))]


# --- Notifications ---
def _notification_columns():
    return (Notification.id, Notification.message, Notification.is_read, Notification.created_at)


@procedure('notifications.unread')
def unread_notifications(session, params):
    stmt = (
        select(*_notification_columns())
        .where(Notification.staff_code == params['staff_code'], Notification.is_read.is_(False))
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    return [rows(session.execute(stmt))]


@procedure('notifications.all')
def all_notifications(session, params):
    """Page of notifications, then a one-row set carrying the total and latest timestamp."""
    owned = Notification.staff_code == params['staff_code']
    page = (
        select(*_notification_columns())
        .where(owned)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset(params['offset'])
        .limit(params['limit'])
    )
    summary = select(
        func.count(Notification.id).label('total'),
        func.max(Notification.created_at).label('latest'),
    ).where(owned)
    return [rows(session.execute(page)), rows(session.execute(summary))]


@procedure('notifications.mark_read')
def mark_read(session, params):
    stmt = (
        update(Notification)
        .where(Notification.id == params['notification_id'], Notification.staff_code == params['staff_code'])
        .values(is_read=True)
    )
    return session.execute(stmt).rowcount


@procedure('notifications.mark_all_read')
def mark_all_read(session, params):
    stmt = (
        update(Notification)
        .where(Notification.staff_code == params['staff_code'], Notification.is_read.is_(False))
        .values(is_read=True)
    )
    return session.execute(stmt).rowcount
