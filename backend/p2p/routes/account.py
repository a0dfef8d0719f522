from __future__ import annotations
from flask import Blueprint, abort, g
from p2p.decorators.auth import require_staff_session
from p2p.services.procedures import ProcedureRunner
from p2p.services.permissions import PermissionResolver
from p2p.services.notifications import NotificationService
from p2p.utils.listing import request_pagination, make_cached_list_response, handle_conditional

account_bp = Blueprint('account', __name__)


@account_bp.get('/permissions')
@require_staff_session
def list_permissions():
    permissions = PermissionResolver(ProcedureRunner()).all_permissions(g.staff_code)
    return {'success': True, 'permissions': permissions}


@account_bp.get('/notifications')
@require_staff_session
def unread_notifications():
    data = NotificationService(ProcedureRunner()).unread(g.staff_code)
    return {'success': True, 'data': data}


@account_bp.get('/notifications/all')
@require_staff_session
def all_notifications():
    limit, offset = request_pagination()
    rows, total, latest_ts = NotificationService(ProcedureRunner()).page(g.staff_code, limit, offset)
    resp, etag = make_cached_list_response(rows, total, limit, offset, latest_ts)
    cond = handle_conditional(etag)
    if cond:
        return cond
    return resp


@account_bp.post('/notifications/<int:notification_id>/read')
@require_staff_session
def mark_notification_read(notification_id: int):
    if not NotificationService(ProcedureRunner()).mark_read(g.staff_code, notification_id):
        abort(404, description='Notification not found')
    return {'success': True, 'id': notification_id}


@account_bp.post('/notifications/read-all')
@require_staff_session
def mark_all_notifications_read():
    updated = NotificationService(ProcedureRunner()).mark_all_read(g.staff_code)
    return {'success': True, 'updated': updated}
