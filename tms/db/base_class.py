# /tms/db/base_class.py

from sqlalchemy import Boolean, Column
from sqlalchemy.orm import declarative_base


class SoftDeleteMixin:
    """Every business table carries a soft-delete flag instead of being purged."""
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)


# All ORM models inherit from this Base.
Base = declarative_base()
