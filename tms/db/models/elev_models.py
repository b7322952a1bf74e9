# /tms/db/models/elev_models.py

"""
This module defines the SQLAlchemy ORM models for students (`Elev`) and their
applications to a driving school (`ElevSoknad`).
"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base, SoftDeleteMixin


class Elev(SoftDeleteMixin, Base):
    """
    SQLAlchemy model representing a student enrolled at one bedrift.

    The safety-control progression rows and earned achievements hang off the
    student and are what the student dashboard is computed from.
    """
    __tablename__ = "elever"

    id = Column(Integer, primary_key=True, index=True)
    bedrift_id = Column(Integer, ForeignKey("bedrifter.id"), nullable=False, index=True)
    fornavn = Column(String, nullable=False)
    etternavn = Column(String, nullable=False)
    opprettet = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    bedrift = relationship("Bedrift", back_populates="elever")
    sikkerhetskontroll_progresjon = relationship("SikkerhetskontrollElevProgresjon", back_populates="elev")
    sikkerhetskontroll_achievements = relationship("SikkerhetskontrollElevAchievement", back_populates="elev")


class ElevSoknad(SoftDeleteMixin, Base):
    __tablename__ = "elev_soknader"

    id = Column(Integer, primary_key=True, index=True)
    bedrift_id = Column(Integer, ForeignKey("bedrifter.id"), nullable=False, index=True)
    fornavn = Column(String, nullable=False)
    etternavn = Column(String, nullable=False)
    # PENDING, APPROVED or REJECTED.
    status = Column(String, nullable=False, default="PENDING")
