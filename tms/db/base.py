# /tms/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# By importing them all here, we ensure that the Base class knows about them
# when Alembic runs its auto-generation scan (and when tests call create_all).

from .base_class import Base

from .models.bedrift_models import Bedrift, Ansatt, BedriftService, Kjoretoy, Oppgave
from .models.user_models import User, Notification, AuditLog
from .models.elev_models import Elev, ElevSoknad
from .models.kontrakt_models import Kontrakt, PaymentTransaction
from .models.kalender_models import KalenderEvent
from .models.sikkerhetskontroll_models import (
    Sikkerhetskontroll,
    SikkerhetskontrollKategori,
    SikkerhetskontrollSporsmal,
    SikkerhetskontrollElevProgresjon,
    SikkerhetskontrollAchievement,
    SikkerhetskontrollElevAchievement,
)
