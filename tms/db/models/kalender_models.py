# /tms/db/models/kalender_models.py

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base, SoftDeleteMixin


class KalenderEvent(SoftDeleteMixin, Base):
    """
    A scheduled lesson or activity. Instructor and student are optional, since
    internal meetings and theory classes have neither.
    """
    __tablename__ = "kalender_events"

    id = Column(Integer, primary_key=True, index=True)
    bedrift_id = Column(Integer, ForeignKey("bedrifter.id"), nullable=False, index=True)
    elev_id = Column(Integer, ForeignKey("elever.id"), nullable=True, index=True)
    instruktor_id = Column(Integer, ForeignKey("ansatte.id"), nullable=True)
    tittel = Column(String, nullable=False)
    type = Column(String, nullable=False, default="KJORETIME")
    # PLANLAGT, GJENNOMFØRT or AVLYST.
    status = Column(String, nullable=False, default="PLANLAGT")
    start_dato = Column(DateTime(timezone=True), nullable=False, index=True)
    slutt_dato = Column(DateTime(timezone=True), nullable=False)
    lokasjon = Column(String, nullable=True)
    opprettet = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    instruktor = relationship("Ansatt")
    elev = relationship("Elev")
