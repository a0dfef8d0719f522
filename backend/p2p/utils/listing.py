from __future__ import annotations
from typing import Iterable, Optional, Tuple
from flask import request, abort, make_response
from p2p.config.pagination import normalize_pagination
import hashlib
from datetime import datetime, timezone
from email.utils import format_datetime


def canonicalize_timestamp(dt: datetime) -> datetime:
    """Return UTC tz-aware timestamp truncated to whole seconds (microseconds removed)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.replace(microsecond=0)


def request_pagination() -> Tuple[int, int]:
    try:
        return normalize_pagination(request.args.get('limit'), request.args.get('offset'))
    except ValueError as e:
        abort(400, description=str(e))


def compute_etag(ids: Iterable[int], total: int, limit: int, offset: int, latest_ts: Optional[str] = '') -> str:
    seed = f"{list(ids)}|{total}|{limit}|{offset}|{latest_ts or ''}"
    return hashlib.sha256(seed.encode()).hexdigest()[:32]


def build_list_payload(rows: list, total: int, limit: int, offset: int):
    return {
        'data': rows,
        'pagination': {
            'total': total,
            'limit': limit,
            'offset': offset,
            'returned': len(rows)
        }
    }


def _iso(dt: Optional[datetime]) -> str:
    return canonicalize_timestamp(dt).isoformat().replace('+00:00', 'Z') if dt else ''


def make_cached_list_response(rows: list, total: int, limit: int, offset: int, latest_ts: Optional[datetime] = None):
    etag = compute_etag([r.get('id') for r in rows], total, limit, offset, _iso(latest_ts))
    resp = make_response(build_list_payload(rows, total, limit, offset))
    resp.headers['ETag'] = etag
    if latest_ts:
        resp.headers['Last-Modified'] = format_datetime(canonicalize_timestamp(latest_ts), usegmt=True)
    return resp, etag


def handle_conditional(etag_value: str):
    """304 response when If-None-Match matches the list's ETag, else None."""
    inm = request.headers.get('If-None-Match')
    if inm and inm.strip('"') == etag_value:
        resp = make_response('', 304)
        resp.headers['ETag'] = etag_value
        return resp
    return None
