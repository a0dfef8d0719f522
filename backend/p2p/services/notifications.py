from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime

log = logging.getLogger(__name__)


def notification_json(row: Dict[str, Any]) -> Dict[str, Any]:
    created = row.get('created_at')
    return {
        'id': row['id'],
        'message': row['message'],
        'is_read': bool(row['is_read']),
        'created_at': created.isoformat() if isinstance(created, datetime) else created,
    }


class NotificationService:
    def __init__(self, runner):
        self.runner = runner

    def unread(self, staff_code: str) -> List[Dict[str, Any]]:
        return [notification_json(r) for r in self.runner.rows('notifications.unread', staff_code=staff_code)]

    def page(self, staff_code: str, limit: int, offset: int) -> Tuple[List[Dict[str, Any]], int, Optional[datetime]]:
        """One page of notifications plus the total count and most recent creation time."""
        sets = self.runner.result_sets('notifications.all', staff_code=staff_code, limit=limit, offset=offset)
        page_rows = sets[0] if sets else []
        summary = sets[1][0] if len(sets) > 1 and sets[1] else {}
        latest = summary.get('latest')
        if latest is not None and not isinstance(latest, datetime):
            latest = datetime.fromisoformat(str(latest))
        return [notification_json(r) for r in page_rows], int(summary.get('total') or 0), latest

    def mark_read(self, staff_code: str, notification_id: int) -> bool:
        updated = self.runner.execute('notifications.mark_read', staff_code=staff_code, notification_id=notification_id)
        return updated > 0

    def mark_all_read(self, staff_code: str) -> int:
        updated = self.runner.execute('notifications.mark_all_read', staff_code=staff_code)
        log.info('Marked %s notifications read for %s', updated, staff_code)
        return updated


__all__ = ['NotificationService', 'notification_json']
