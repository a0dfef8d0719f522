from __future__ import annotations
from flask import Blueprint, current_app, jsonify, make_response
from p2p.decorators.auth import current_staff_code
from p2p.services.procedures import ProcedureRunner
from p2p.services.permissions import PermissionResolver
from p2p.services.calendar.aggregator import EventAggregator

calendar_bp = Blueprint('calendar', __name__)

FAILED_MODULES_HEADER = 'X-Calendar-Failed-Modules'


def feed_aggregator() -> EventAggregator:
    runner = ProcedureRunner()
    return EventAggregator(PermissionResolver(runner), runner, current_app.config['CALENDAR_SETTINGS'])


@calendar_bp.get('/events')
def list_events():
    # A missing identity surfaces as SessionExpired from build_feed, not a JWT 401
    aggregator = feed_aggregator()
    feed = aggregator.build_feed(current_staff_code())
    resp = make_response(jsonify([event.to_json() for event in feed]))
    if aggregator.failures:
        resp.headers[FAILED_MODULES_HEADER] = ','.join(aggregator.failures)
    return resp
