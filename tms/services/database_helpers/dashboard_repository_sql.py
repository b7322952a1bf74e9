# /tms/services/database_helpers/dashboard_repository_sql.py

"""
This module contains the read-only SQLAlchemy query capability the dashboard
service is built on. It is the direct interface to the database for every
dashboard figure.

Unlike the request-scoped repositories, this one is handed a session
*factory*: the dashboard fans its queries out across worker threads, and a
SQLAlchemy `Session` must never be shared between threads. Each method
therefore opens, uses and closes its own short-lived session.

Callers pass SQLAlchemy filter expressions as `*criteria`; soft-delete and
tenant scoping are the caller's responsibility and are always expressed
there, so every query reads exactly as it is filtered.
"""

from typing import Any, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import sessionmaker


class DashboardRepositorySQL:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def count(self, model, *criteria) -> int:
        """Counts rows of `model` matching every criterion."""
        with self._session_factory() as session:
            return session.query(func.count(model.id)).filter(*criteria).scalar() or 0

    def sum(self, column, *criteria) -> Any:
        """Sums `column` over the matching rows. An empty match sums to 0, not None."""
        with self._session_factory() as session:
            return session.query(func.sum(column)).filter(*criteria).scalar() or 0

    def find_many(
        self,
        model,
        *criteria,
        order_by=None,
        limit: Optional[int] = None,
        options: Iterable = (),
    ) -> List[Any]:
        """
        Retrieves matching rows, optionally ordered and limited.

        The rows are returned detached from their (closed) session, so any
        relationship the caller wants to read must be eager-loaded through
        `options` (e.g. `joinedload(Model.relation)`).
        """
        with self._session_factory() as session:
            query = session.query(model).options(*options).filter(*criteria)
            if order_by is not None:
                query = query.order_by(order_by)
            if limit is not None:
                query = query.limit(limit)
            return query.all()

    def find_one(self, model, *criteria, options: Iterable = ()) -> Optional[Any]:
        """Retrieves the first matching row, or None."""
        with self._session_factory() as session:
            return session.query(model).options(*options).filter(*criteria).first()
