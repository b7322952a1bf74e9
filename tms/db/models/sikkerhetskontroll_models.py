# /tms/db/models/sikkerhetskontroll_models.py

"""
This module defines the SQLAlchemy ORM models for the safety-control
(sikkerhetskontroll) training feature: the checklists a bedrift runs, the
quiz categories and questions, each student's per-category progression, and
the achievements a student can earn.
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base, SoftDeleteMixin


class Sikkerhetskontroll(SoftDeleteMixin, Base):
    """A safety-control checklist configured by a bedrift."""
    __tablename__ = "sikkerhetskontroller"

    id = Column(Integer, primary_key=True, index=True)
    bedrift_id = Column(Integer, ForeignKey("bedrifter.id"), nullable=False, index=True)
    tittel = Column(String, nullable=False)
    aktiv = Column(Boolean, nullable=False, default=True)


class SikkerhetskontrollKategori(SoftDeleteMixin, Base):
    """A quiz category, e.g. 'Lys' or 'Dekk'. Categories are shared by all schools."""
    __tablename__ = "sikkerhetskontroll_kategorier"

    id = Column(Integer, primary_key=True, index=True)
    navn = Column(String, nullable=False)
    aktiv = Column(Boolean, nullable=False, default=True)

    sporsmal = relationship("SikkerhetskontrollSporsmal", back_populates="kategori")
    elev_progresjon = relationship("SikkerhetskontrollElevProgresjon", back_populates="kategori")


class SikkerhetskontrollSporsmal(SoftDeleteMixin, Base):
    __tablename__ = "sikkerhetskontroll_sporsmal"

    id = Column(Integer, primary_key=True, index=True)
    kategori_id = Column(Integer, ForeignKey("sikkerhetskontroll_kategorier.id"), nullable=False, index=True)
    sporsmal = Column(String, nullable=False)
    aktiv = Column(Boolean, nullable=False, default=True)

    kategori = relationship("SikkerhetskontrollKategori", back_populates="sporsmal")


class SikkerhetskontrollElevProgresjon(SoftDeleteMixin, Base):
    """
    One row per (student, category): how many questions the student has seen,
    how many attempts were right or wrong, XP earned, and whether the category
    is mastered.
    """
    __tablename__ = "sikkerhetskontroll_elev_progresjon"

    id = Column(Integer, primary_key=True, index=True)
    elev_id = Column(Integer, ForeignKey("elever.id"), nullable=False, index=True)
    kategori_id = Column(Integer, ForeignKey("sikkerhetskontroll_kategorier.id"), nullable=False, index=True)
    antall_sporsmal_sett = Column(Integer, nullable=False, default=0)
    antall_riktige_forsok = Column(Integer, nullable=False, default=0)
    antall_gale_forsok = Column(Integer, nullable=False, default=0)
    xp_opptjent = Column(Integer, nullable=False, default=0)
    mestret = Column(Boolean, nullable=False, default=False)
    mestret_dato = Column(DateTime(timezone=True), nullable=True)
    siste_aktivitet = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    elev = relationship("Elev", back_populates="sikkerhetskontroll_progresjon")
    kategori = relationship("SikkerhetskontrollKategori", back_populates="elev_progresjon")


class SikkerhetskontrollAchievement(SoftDeleteMixin, Base):
    __tablename__ = "sikkerhetskontroll_achievements"

    id = Column(Integer, primary_key=True, index=True)
    navn = Column(String, nullable=False)
    beskrivelse = Column(String, nullable=False, default="")
    ikon_url = Column(String, nullable=True)
    xp_belonning = Column(Integer, nullable=False, default=0)
    sjelden = Column(Boolean, nullable=False, default=False)


class SikkerhetskontrollElevAchievement(SoftDeleteMixin, Base):
    """Join of a student to an achievement they have earned."""
    __tablename__ = "sikkerhetskontroll_elev_achievements"

    id = Column(Integer, primary_key=True, index=True)
    elev_id = Column(Integer, ForeignKey("elever.id"), nullable=False, index=True)
    achievement_id = Column(Integer, ForeignKey("sikkerhetskontroll_achievements.id"), nullable=False)
    oppnadd_dato = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    elev = relationship("Elev", back_populates="sikkerhetskontroll_achievements")
    achievement = relationship("SikkerhetskontrollAchievement")
