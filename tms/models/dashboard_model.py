# /tms/models/dashboard_model.py

# --- Core Imports ---
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ActivityStatus = Literal["success", "warning", "error"]
CategoryStatus = Literal["ikke_sett", "sett", "vanskelig", "mestret"]


# --- System Health (placeholder) ---

class DatabaseHealth(BaseModel):
    status: str
    connections: int
    maxConnections: int


class ApiHealth(BaseModel):
    status: str
    responseTime: int
    requestsPerMinute: int
    errorRate: float


class MemoryHealth(BaseModel):
    used: int
    total: int
    percentage: float


class CpuHealth(BaseModel):
    usage: float
    cores: int


class ServiceHealth(BaseModel):
    name: str
    status: str
    uptime: float


class SystemHealth(BaseModel):
    """
    Defines the system-health block of the admin dashboard.

    None of these figures are measured. They are fixed placeholder values until
    a monitoring backend is wired in, and `synthetic` is always true so that
    clients can label them accordingly.
    """

    synthetic: bool = Field(
        default=True,
        description="True when the figures below are placeholders, not measurements.",
    )
    note: str = Field(
        default="Placeholder values; no monitoring backend is connected.",
    )
    database: DatabaseHealth
    api: ApiHealth
    memory: MemoryHealth
    cpu: CpuHealth
    services: List[ServiceHealth]


# --- Role-scoped Statistics ---

class AdminDashboardStats(BaseModel):
    """
    Defines the data contract for the system administrator's dashboard.
    Every count excludes soft-deleted rows.
    """

    totalBedrifter: int = Field(..., ge=0, examples=[12])
    activeBedrifter: int = Field(
        ..., ge=0,
        description="Companies with at least one active employee.",
        examples=[9],
    )
    totalBrukere: int = Field(..., ge=0, examples=[240])
    activeServices: int = Field(..., ge=0, examples=[31])
    totalSikkerhetskontroller: int = Field(..., ge=0, examples=[23])
    totalKontrakter: int = Field(..., ge=0, examples=[180])
    totalElever: int = Field(..., ge=0, examples=[89])
    totalAnsatte: int = Field(..., ge=0, examples=[156])
    systemHealth: SystemHealth


class BedriftDashboardStats(BaseModel):
    """
    Defines the data contract for a company's dashboard. All figures are
    scoped to the caller's bedrift.
    """

    totalAnsatte: int = Field(..., ge=0)
    totalElever: int = Field(..., ge=0)
    aktiveSikkerhetskontroller: int = Field(..., ge=0)
    fullforteKontroller: int = Field(..., ge=0)
    ventendeSoknader: int = Field(..., ge=0)
    aktiverKontrakter: int = Field(..., ge=0)
    totalInntekter: float = Field(
        ...,
        description="Sum of completed payments dated this calendar month.",
        examples=[5000.0],
    )
    aktivKjoretoy: int = Field(..., ge=0)
    planlagteTimer: int = Field(..., ge=0)
    fullforteTimer: int = Field(..., ge=0)
    ventendeTasks: int = Field(..., ge=0)
    systemNotifikasjoner: int = Field(..., ge=0)


class ElevDashboardStats(BaseModel):
    """Defines the data contract for a student's own dashboard."""

    totalSikkerhetskontroller: int = Field(..., ge=0)
    fullforteSikkerhetskontroller: int = Field(..., ge=0)
    progresjonProsent: int = Field(..., ge=0, examples=[60])
    aktiveKurs: int = Field(..., ge=0)
    fullforteKurs: int = Field(..., ge=0)
    plannedeLektioner: int = Field(..., ge=0)
    fullforteLektioner: int = Field(..., ge=0)
    achievements: int = Field(..., ge=0)
    totalXP: int = Field(..., ge=0)
    streak: int = Field(
        ..., ge=0,
        description="Whole days since the student's most recent safety-control activity.",
    )
    kontrakterAktive: int = Field(..., ge=0)
    sisteAktivitet: datetime


# --- Lists ---

class ActivityItem(BaseModel):
    """One entry of a merged activity feed."""

    id: str = Field(..., description="Source-prefixed id, unique within one feed.", examples=["elev-42"])
    type: str
    beskrivelse: str
    tidspunkt: datetime
    status: ActivityStatus
    xpGain: Optional[int] = None


class UpcomingEvent(BaseModel):
    id: str
    tittel: str
    dato: datetime
    type: str
    instruktor: Optional[str] = None
    elev: Optional[str] = None
    lokasjon: Optional[str] = None


class Achievement(BaseModel):
    id: str
    navn: str
    beskrivelse: str
    ikonUrl: Optional[str] = None
    oppnaddDato: datetime
    xpBelonning: int
    sjelden: bool


class SikkerhetskontrollProgress(BaseModel):
    """Progress of one student in one safety-control category."""

    model_config = ConfigDict(from_attributes=True)

    kategori: str
    totalSporsmal: int = Field(..., ge=0)
    besvartSporsmal: int = Field(..., ge=0)
    korrekteSvar: int = Field(..., ge=0)
    progresjonProsent: int = Field(..., ge=0)
    status: CategoryStatus
