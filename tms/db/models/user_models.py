# /tms/db/models/user_models.py

"""
SQLAlchemy models for system users, their notifications, and the append-only
audit log that records every create/update/delete action.
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base, SoftDeleteMixin


class User(SoftDeleteMixin, Base):
    """
    A login account. Company staff are linked to their bedrift, students to
    their elev record; system administrators are linked to neither.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    fornavn = Column(String, nullable=False)
    etternavn = Column(String, nullable=False)
    # ADMIN, SYSTEM_ADMIN, HOVEDBRUKER, TRAFIKKLARER or ELEV.
    rolle = Column(String, nullable=False)
    bedrift_id = Column(Integer, ForeignKey("bedrifter.id"), nullable=True, index=True)
    elev_id = Column(Integer, ForeignKey("elever.id"), nullable=True, index=True)

    notifications = relationship("Notification", back_populates="mottaker")


class Notification(SoftDeleteMixin, Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    mottaker_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    tittel = Column(String, nullable=False)
    lest = Column(Boolean, nullable=False, default=False)
    opprettet = Column(DateTime(timezone=True), server_default=func.now())

    mottaker = relationship("User", back_populates="notifications")


class AuditLog(SoftDeleteMixin, Base):
    """
    One row per data-changing action. `user_id` is empty for actions
    performed by the system itself.
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    # CREATE, UPDATE or DELETE.
    action = Column(String, nullable=False)
    table_name = Column(String, nullable=False)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    user = relationship("User")
