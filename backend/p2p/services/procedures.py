"""Named-query gateway to the store.

Every read or write the services perform goes through a registered procedure:
a function taking ``(session, params)`` and returning an ordered list of
result-sets, each a list of plain dict rows. Callers only know procedure
names and parameter names, never SQL.

    @procedure('calendar.requisitions.list')
    def list_requisitions(session, params):
        return [rows(session.execute(stmt))]

    runner = ProcedureRunner()
    runner.rows('calendar.requisitions.list')
    runner.result_sets('calendar.requisitions.detail', code='PR-1')
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from p2p.errors import LookupFailure

log = logging.getLogger(__name__)

Row = Dict[str, Any]
ResultSets = List[List[Row]]
ProcedureFn = Callable[[Session, Dict[str, Any]], Any]

PROCEDURES: Dict[str, ProcedureFn] = {}


def procedure(name: str):
    def outer(fn: ProcedureFn) -> ProcedureFn:
        if name in PROCEDURES:
            raise ValueError(f'Procedure {name} already registered')
        PROCEDURES[name] = fn
        return fn
    return outer


def rows(result) -> List[Row]:
    """Materialize a SQLAlchemy result into dict rows keyed by column label."""
    return [dict(r._mapping) for r in result]


def _default_session():
    from p2p import get_db
    return get_db()


class ProcedureRunner:
    def __init__(self, session_factory: Optional[Callable[[], Session]] = None,
                 registry: Optional[Dict[str, ProcedureFn]] = None):
        if registry is None:
            # importing the query modules registers the built-in procedures
            import p2p.queries.calendar  # noqa: F401
            import p2p.queries.account  # noqa: F401
            registry = PROCEDURES
        self.registry = registry
        self.session_factory = session_factory or _default_session

    def _lookup(self, name: str) -> ProcedureFn:
        try:
            return self.registry[name]
        except KeyError:
            raise KeyError(f'Unknown procedure {name}')

    def result_sets(self, name: str, **params: Any) -> ResultSets:
        fn = self._lookup(name)
        session = self.session_factory()
        try:
            return fn(session, params)
        except SQLAlchemyError as e:
            session.rollback()
            log.error('Procedure %s failed: %s', name, e)
            raise LookupFailure(name) from e

    def rows(self, name: str, **params: Any) -> List[Row]:
        sets = self.result_sets(name, **params)
        return sets[0] if sets else []

    def execute(self, name: str, **params: Any) -> int:
        """Run a writing procedure inside the session transaction; returns affected row count."""
        fn = self._lookup(name)
        session = self.session_factory()
        try:
            affected = fn(session, params)
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            log.error('Procedure %s failed: %s', name, e)
            raise LookupFailure(name) from e
        return int(affected or 0)


__all__ = ['ProcedureRunner', 'procedure', 'rows', 'PROCEDURES']
