# /tms/db/models/kontrakt_models.py

from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base, SoftDeleteMixin


class Kontrakt(SoftDeleteMixin, Base):
    """
    A payment/training contract between a bedrift and a student.

    The student's name is copied onto the contract, so a contract can exist
    before (or without) a linked elev row.
    """
    __tablename__ = "kontrakter"

    id = Column(Integer, primary_key=True, index=True)
    bedrift_id = Column(Integer, ForeignKey("bedrifter.id"), nullable=False, index=True)
    elev_id = Column(Integer, ForeignKey("elever.id"), nullable=True, index=True)
    elev_fornavn = Column(String, nullable=False)
    elev_etternavn = Column(String, nullable=False)
    status = Column(String, nullable=False, default="AKTIV")
    opprettet = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    bedrift = relationship("Bedrift", back_populates="kontrakter")
    payment_transactions = relationship("PaymentTransaction", back_populates="kontrakt")


class PaymentTransaction(SoftDeleteMixin, Base):
    __tablename__ = "payment_transactions"

    id = Column(Integer, primary_key=True, index=True)
    kontrakt_id = Column(Integer, ForeignKey("kontrakter.id"), nullable=False, index=True)
    belop = Column(Float, nullable=False)
    # PENDING, COMPLETED, FAILED or REFUNDED.
    status = Column(String, nullable=False, default="PENDING")
    betalingsdato = Column(DateTime(timezone=True), nullable=False, index=True)

    kontrakt = relationship("Kontrakt", back_populates="payment_transactions")
