# /tms/db/models/bedrift_models.py

"""
This module defines the SQLAlchemy ORM models for a driving school (`Bedrift`)
and the resources it owns directly: employees, subscribed services, vehicles
and internal tasks.
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base, SoftDeleteMixin


class Bedrift(SoftDeleteMixin, Base):
    """
    SQLAlchemy model representing a company (driving school).

    A bedrift is the tenant boundary: employees, students, contracts and
    vehicles all belong to exactly one bedrift.
    """
    __tablename__ = "bedrifter"

    id = Column(Integer, primary_key=True, index=True)
    navn = Column(String, nullable=False)
    organisasjonsnummer = Column(String, nullable=True)
    opprettet = Column(DateTime(timezone=True), server_default=func.now())

    ansatte = relationship("Ansatt", back_populates="bedrift")
    elever = relationship("Elev", back_populates="bedrift")
    kontrakter = relationship("Kontrakt", back_populates="bedrift")
    kjoretoy = relationship("Kjoretoy", back_populates="bedrift")


class Ansatt(SoftDeleteMixin, Base):
    """An employee of a bedrift. Instructors on calendar events are ansatte."""
    __tablename__ = "ansatte"

    id = Column(Integer, primary_key=True, index=True)
    bedrift_id = Column(Integer, ForeignKey("bedrifter.id"), nullable=False, index=True)
    fornavn = Column(String, nullable=False)
    etternavn = Column(String, nullable=False)
    aktiv = Column(Boolean, nullable=False, default=True)

    bedrift = relationship("Bedrift", back_populates="ansatte")


class BedriftService(SoftDeleteMixin, Base):
    __tablename__ = "bedrift_services"

    id = Column(Integer, primary_key=True, index=True)
    bedrift_id = Column(Integer, ForeignKey("bedrifter.id"), nullable=False, index=True)
    navn = Column(String, nullable=False)
    aktiv = Column(Boolean, nullable=False, default=True)


class Kjoretoy(SoftDeleteMixin, Base):
    """A vehicle in the school's fleet."""
    __tablename__ = "kjoretoy"

    id = Column(Integer, primary_key=True, index=True)
    bedrift_id = Column(Integer, ForeignKey("bedrifter.id"), nullable=False, index=True)
    registreringsnummer = Column(String, nullable=False)
    status = Column(String, nullable=False, default="AKTIV")

    bedrift = relationship("Bedrift", back_populates="kjoretoy")


class Oppgave(SoftDeleteMixin, Base):
    __tablename__ = "oppgaver"

    id = Column(Integer, primary_key=True, index=True)
    bedrift_id = Column(Integer, ForeignKey("bedrifter.id"), nullable=False, index=True)
    tittel = Column(String, nullable=False)
    # One of IKKE_PAABEGYNT, PAABEGYNT, FERDIG.
    status = Column(String, nullable=False, default="IKKE_PAABEGYNT")
