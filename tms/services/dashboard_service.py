# /tms/services/dashboard_service.py

"""
This service module computes every dashboard figure: the role-scoped
statistics snapshots, the merged activity feeds, upcoming events,
achievements and the per-category safety-control progress.

It is strictly read-only. Independent queries of one call are issued
concurrently (`asyncio.gather` over `asyncio.to_thread`, one session per
query) and all of them must succeed: any failing query fails the whole call
and its exception propagates unchanged to the router.
"""

import asyncio
from typing import List, Optional

import structlog
from fastapi import Depends
from sqlalchemy import and_
from sqlalchemy.orm import joinedload, selectinload

from ..config import Settings, get_settings
from ..db.database import get_session_factory
from ..db.models.bedrift_models import Ansatt, Bedrift, BedriftService, Kjoretoy, Oppgave
from ..db.models.elev_models import Elev, ElevSoknad
from ..db.models.kalender_models import KalenderEvent
from ..db.models.kontrakt_models import Kontrakt, PaymentTransaction
from ..db.models.sikkerhetskontroll_models import (
    Sikkerhetskontroll,
    SikkerhetskontrollAchievement,
    SikkerhetskontrollElevAchievement,
    SikkerhetskontrollElevProgresjon,
    SikkerhetskontrollKategori,
    SikkerhetskontrollSporsmal,
)
from ..db.models.user_models import Notification, User
from ..models.dashboard_model import (
    Achievement,
    ActivityItem,
    AdminDashboardStats,
    BedriftDashboardStats,
    ElevDashboardStats,
    SikkerhetskontrollProgress,
    UpcomingEvent,
)
from ..utils.clock import Clock, SystemClock
from ..utils.datetime import as_utc, start_of_month, whole_days_since
from .dashboard_helpers import activity_sources
from .dashboard_helpers.activity_feed import merge_activity_feed, per_source_limit
from .dashboard_helpers.progress import percentage, project_category_progress
from .dashboard_helpers.scope import AdminScope, BedriftScope, DashboardScope, ElevScope
from .dashboard_helpers.system_health import placeholder_system_health
from .database_helpers.dashboard_repository_sql import DashboardRepositorySQL

logger = structlog.get_logger(__name__)


class ElevNotFoundError(LookupError):
    """The requested student does not exist (or is soft-deleted)."""

    def __init__(self, elev_id: int):
        super().__init__("Elev not found")
        self.elev_id = elev_id


def _live(model):
    return model.is_deleted.is_(False)


def _full_name(person) -> Optional[str]:
    return f"{person.fornavn} {person.etternavn}" if person is not None else None


class DashboardService:
    def __init__(self, repository: DashboardRepositorySQL, clock: Optional[Clock] = None, overfetch: bool = False):
        """
        Args:
            repository: The read-only query capability, injected so tests can
                substitute a fake.
            clock: Source of "now" for month boundaries, streaks and upcoming events.
            overfetch: Give every activity source the full limit instead of
                its ceil(limit / k) share (see `activity_feed`).
        """
        self.repo = repository
        self.clock = clock or SystemClock()
        self.overfetch = overfetch

    # --- Fan-out primitives ---

    async def _count(self, model, *criteria) -> int:
        return await asyncio.to_thread(self.repo.count, model, *criteria)

    async def _sum(self, column, *criteria):
        return await asyncio.to_thread(self.repo.sum, column, *criteria)

    async def _find_many(self, model, *criteria, **kwargs) -> list:
        return await asyncio.to_thread(self.repo.find_many, model, *criteria, **kwargs)

    # --- Role dispatch ---

    async def get_dashboard_stats(self, scope: DashboardScope):
        """Computes the statistics snapshot for whichever role `scope` names."""
        if isinstance(scope, AdminScope):
            return await self.get_admin_dashboard_stats()
        if isinstance(scope, BedriftScope):
            return await self.get_bedrift_dashboard_stats(scope.id)
        if isinstance(scope, ElevScope):
            return await self.get_elev_dashboard_stats(scope.id)
        raise ValueError(f"Unknown dashboard scope: {scope!r}")

    async def get_recent_activity(self, scope: DashboardScope, limit: int = 10) -> List[ActivityItem]:
        """
        Builds the merged, newest-first activity feed for `scope`, holding at
        most `limit` items.
        """
        sources = activity_sources.sources_for(scope)
        take = per_source_limit(limit, len(sources), self.overfetch)
        if take == 0:
            return []

        results = await asyncio.gather(*(asyncio.to_thread(source, self.repo, take) for source in sources))
        feed = merge_activity_feed(results, limit)

        logger.debug(
            "activity_feed_merged",
            scope=scope.kind,
            limit=limit,
            per_source=take,
            fetched=sum(len(r) for r in results),
            returned=len(feed),
        )
        return feed

    # --- Admin Dashboard ---

    async def get_admin_dashboard_stats(self) -> AdminDashboardStats:
        (
            total_bedrifter,
            active_bedrifter,
            total_brukere,
            active_services,
            total_sikkerhetskontroller,
            total_kontrakter,
            total_elever,
            total_ansatte,
        ) = await asyncio.gather(
            self._count(Bedrift, _live(Bedrift)),
            self._count(Bedrift, _live(Bedrift), Bedrift.ansatte.any(and_(_live(Ansatt), Ansatt.aktiv.is_(True)))),
            self._count(User, _live(User)),
            self._count(BedriftService, _live(BedriftService), BedriftService.aktiv.is_(True)),
            self._count(Sikkerhetskontroll, _live(Sikkerhetskontroll), Sikkerhetskontroll.aktiv.is_(True)),
            self._count(Kontrakt, _live(Kontrakt)),
            self._count(Elev, _live(Elev)),
            self._count(Ansatt, _live(Ansatt)),
        )

        return AdminDashboardStats(
            totalBedrifter=total_bedrifter,
            activeBedrifter=active_bedrifter,
            totalBrukere=total_brukere,
            activeServices=active_services,
            totalSikkerhetskontroller=total_sikkerhetskontroller,
            totalKontrakter=total_kontrakter,
            totalElever=total_elever,
            totalAnsatte=total_ansatte,
            systemHealth=placeholder_system_health(),
        )

    async def get_admin_recent_activity(self, limit: int = 10) -> List[ActivityItem]:
        return await self.get_recent_activity(AdminScope(), limit)

    # --- Company Dashboard ---

    async def get_bedrift_dashboard_stats(self, bedrift_id: int) -> BedriftDashboardStats:
        """
        Computes the company dashboard. An unknown `bedrift_id` is not an
        error; every figure simply comes out as zero.
        """
        month_start = start_of_month(self.clock.now())
        elev_of_bedrift = and_(Elev.bedrift_id == bedrift_id, _live(Elev))

        (
            total_ansatte,
            total_elever,
            aktive_sikkerhetskontroller,
            fullforte_kontroller,
            ventende_soknader,
            aktive_kontrakter,
            aktive_kjoretoy,
            planlagte_timer,
            fullforte_timer,
            ventende_tasks,
            system_notifikasjoner,
            payments,
        ) = await asyncio.gather(
            self._count(Ansatt, Ansatt.bedrift_id == bedrift_id, _live(Ansatt), Ansatt.aktiv.is_(True)),
            self._count(Elev, elev_of_bedrift),
            self._count(
                Sikkerhetskontroll,
                Sikkerhetskontroll.bedrift_id == bedrift_id,
                _live(Sikkerhetskontroll),
                Sikkerhetskontroll.aktiv.is_(True),
            ),
            self._count(
                SikkerhetskontrollElevProgresjon,
                _live(SikkerhetskontrollElevProgresjon),
                SikkerhetskontrollElevProgresjon.mestret.is_(True),
                SikkerhetskontrollElevProgresjon.elev.has(elev_of_bedrift),
            ),
            self._count(ElevSoknad, ElevSoknad.bedrift_id == bedrift_id, _live(ElevSoknad), ElevSoknad.status == "PENDING"),
            self._count(Kontrakt, Kontrakt.bedrift_id == bedrift_id, _live(Kontrakt), Kontrakt.status == "AKTIV"),
            self._count(Kjoretoy, Kjoretoy.bedrift_id == bedrift_id, _live(Kjoretoy), Kjoretoy.status == "AKTIV"),
            self._count(KalenderEvent, KalenderEvent.bedrift_id == bedrift_id, _live(KalenderEvent)),
            self._count(
                KalenderEvent,
                KalenderEvent.bedrift_id == bedrift_id,
                _live(KalenderEvent),
                KalenderEvent.status == "GJENNOMFØRT",
            ),
            self._count(
                Oppgave,
                Oppgave.bedrift_id == bedrift_id,
                _live(Oppgave),
                Oppgave.status.in_(["IKKE_PAABEGYNT", "PAABEGYNT"]),
            ),
            self._count(
                Notification,
                _live(Notification),
                Notification.lest.is_(False),
                Notification.mottaker.has(and_(User.bedrift_id == bedrift_id, _live(User))),
            ),
            self._find_many(
                PaymentTransaction,
                _live(PaymentTransaction),
                PaymentTransaction.status == "COMPLETED",
                PaymentTransaction.betalingsdato >= month_start,
                PaymentTransaction.kontrakt.has(and_(Kontrakt.bedrift_id == bedrift_id, _live(Kontrakt))),
            ),
        )

        total_inntekter = sum(payment.belop for payment in payments)

        logger.debug("bedrift_income_summed", bedrift_id=bedrift_id, payments=len(payments), month_start=month_start.isoformat())

        return BedriftDashboardStats(
            totalAnsatte=total_ansatte,
            totalElever=total_elever,
            aktiveSikkerhetskontroller=aktive_sikkerhetskontroller,
            fullforteKontroller=fullforte_kontroller,
            ventendeSoknader=ventende_soknader,
            aktiverKontrakter=aktive_kontrakter,
            totalInntekter=total_inntekter,
            aktivKjoretoy=aktive_kjoretoy,
            planlagteTimer=planlagte_timer,
            fullforteTimer=fullforte_timer,
            ventendeTasks=ventende_tasks,
            systemNotifikasjoner=system_notifikasjoner,
        )

    async def get_bedrift_recent_activity(self, bedrift_id: int, limit: int = 10) -> List[ActivityItem]:
        return await self.get_recent_activity(BedriftScope(bedrift_id), limit)

    async def get_bedrift_upcoming_events(self, bedrift_id: int, limit: int = 10) -> List[UpcomingEvent]:
        events = await self._find_many(
            KalenderEvent,
            KalenderEvent.bedrift_id == bedrift_id,
            _live(KalenderEvent),
            KalenderEvent.start_dato >= self.clock.now(),
            order_by=KalenderEvent.start_dato.asc(),
            limit=limit,
            options=(joinedload(KalenderEvent.instruktor), joinedload(KalenderEvent.elev)),
        )
        return [_to_upcoming_event(event, include_elev=True) for event in events]

    # --- Student Dashboard ---

    async def get_elev_dashboard_stats(self, elev_id: int) -> ElevDashboardStats:
        """
        Computes a student's own dashboard.

        Raises:
            ElevNotFoundError: if no live student has this id.
        """
        elev = await asyncio.to_thread(
            self.repo.find_one,
            Elev,
            Elev.id == elev_id,
            _live(Elev),
            options=(
                selectinload(Elev.sikkerhetskontroll_progresjon),
                selectinload(Elev.sikkerhetskontroll_achievements),
            ),
        )
        if elev is None:
            raise ElevNotFoundError(elev_id)

        aktiv_kategori = and_(_live(SikkerhetskontrollKategori), SikkerhetskontrollKategori.aktiv.is_(True))

        (
            total_kategorier,
            mestrede_kategorier,
            planlagte_lektioner,
            fullforte_lektioner,
            achievements,
            total_xp,
            aktive_kontrakter,
        ) = await asyncio.gather(
            self._count(SikkerhetskontrollKategori, aktiv_kategori),
            self._count(
                SikkerhetskontrollElevProgresjon,
                SikkerhetskontrollElevProgresjon.elev_id == elev_id,
                _live(SikkerhetskontrollElevProgresjon),
                SikkerhetskontrollElevProgresjon.mestret.is_(True),
                SikkerhetskontrollElevProgresjon.kategori.has(aktiv_kategori),
            ),
            self._count(KalenderEvent, KalenderEvent.elev_id == elev_id, _live(KalenderEvent)),
            self._count(
                KalenderEvent,
                KalenderEvent.elev_id == elev_id,
                _live(KalenderEvent),
                KalenderEvent.status == "GJENNOMFØRT",
            ),
            self._count(
                SikkerhetskontrollElevAchievement,
                SikkerhetskontrollElevAchievement.elev_id == elev_id,
                _live(SikkerhetskontrollElevAchievement),
                SikkerhetskontrollElevAchievement.achievement.has(_live(SikkerhetskontrollAchievement)),
            ),
            self._sum(
                SikkerhetskontrollElevProgresjon.xp_opptjent,
                SikkerhetskontrollElevProgresjon.elev_id == elev_id,
                _live(SikkerhetskontrollElevProgresjon),
            ),
            self._count(Kontrakt, Kontrakt.elev_id == elev_id, _live(Kontrakt), Kontrakt.status == "AKTIV"),
        )

        now = self.clock.now()
        touched = [as_utc(p.siste_aktivitet) for p in elev.sikkerhetskontroll_progresjon
                   if not p.is_deleted and p.siste_aktivitet is not None]
        siste_aktivitet = max(touched) if touched else None

        return ElevDashboardStats(
            totalSikkerhetskontroller=total_kategorier,
            fullforteSikkerhetskontroller=mestrede_kategorier,
            progresjonProsent=percentage(mestrede_kategorier, total_kategorier),
            # There is no course system yet; these stay at zero rather than invented figures.
            aktiveKurs=0,
            fullforteKurs=0,
            plannedeLektioner=planlagte_lektioner,
            fullforteLektioner=fullforte_lektioner,
            achievements=achievements,
            totalXP=int(total_xp),
            streak=whole_days_since(siste_aktivitet, now) if siste_aktivitet else 0,
            kontrakterAktive=aktive_kontrakter,
            sisteAktivitet=siste_aktivitet or now,
        )

    async def get_elev_recent_activity(self, elev_id: int, limit: int = 10) -> List[ActivityItem]:
        return await self.get_recent_activity(ElevScope(elev_id), limit)

    async def get_elev_upcoming_lessons(self, elev_id: int, limit: int = 10) -> List[UpcomingEvent]:
        lessons = await self._find_many(
            KalenderEvent,
            KalenderEvent.elev_id == elev_id,
            _live(KalenderEvent),
            KalenderEvent.start_dato >= self.clock.now(),
            order_by=KalenderEvent.start_dato.asc(),
            limit=limit,
            options=(joinedload(KalenderEvent.instruktor),),
        )
        return [_to_upcoming_event(lesson, include_elev=False) for lesson in lessons]

    async def get_elev_recent_achievements(self, elev_id: int, limit: int = 5) -> List[Achievement]:
        earned = await self._find_many(
            SikkerhetskontrollElevAchievement,
            SikkerhetskontrollElevAchievement.elev_id == elev_id,
            _live(SikkerhetskontrollElevAchievement),
            SikkerhetskontrollElevAchievement.achievement.has(_live(SikkerhetskontrollAchievement)),
            order_by=SikkerhetskontrollElevAchievement.oppnadd_dato.desc(),
            limit=limit,
            options=(joinedload(SikkerhetskontrollElevAchievement.achievement),),
        )
        return [
            Achievement(
                id=str(row.id),
                navn=row.achievement.navn,
                beskrivelse=row.achievement.beskrivelse,
                ikonUrl=row.achievement.ikon_url,
                oppnaddDato=as_utc(row.oppnadd_dato),
                xpBelonning=row.achievement.xp_belonning,
                sjelden=row.achievement.sjelden,
            )
            for row in earned
        ]

    async def get_elev_sikkerhetskontroll_progress(self, elev_id: int) -> List[SikkerhetskontrollProgress]:
        """
        Projects the student's progress onto every active category. A category
        the student has never touched is reported as `ikke_sett`.
        """
        kategorier = await self._find_many(
            SikkerhetskontrollKategori,
            _live(SikkerhetskontrollKategori),
            SikkerhetskontrollKategori.aktiv.is_(True),
            order_by=SikkerhetskontrollKategori.id.asc(),
            options=(
                selectinload(SikkerhetskontrollKategori.sporsmal.and_(
                    _live(SikkerhetskontrollSporsmal), SikkerhetskontrollSporsmal.aktiv.is_(True),
                )),
                selectinload(SikkerhetskontrollKategori.elev_progresjon.and_(
                    SikkerhetskontrollElevProgresjon.elev_id == elev_id,
                    _live(SikkerhetskontrollElevProgresjon),
                )),
            ),
        )
        return [project_category_progress(kategori) for kategori in kategorier]


def _to_upcoming_event(event: KalenderEvent, include_elev: bool) -> UpcomingEvent:
    return UpcomingEvent(
        id=str(event.id),
        tittel=event.tittel,
        dato=as_utc(event.start_dato),
        type=event.type.lower(),
        instruktor=_full_name(event.instruktor),
        elev=_full_name(event.elev) if include_elev else None,
        lokasjon=event.lokasjon or None,
    )


# --- Dependency Provider ---

def get_dashboard_service(settings: Settings = Depends(get_settings)) -> DashboardService:
    """
    FastAPI dependency that provides a DashboardService bound to the
    application's session factory.
    """
    repository = DashboardRepositorySQL(get_session_factory())
    return DashboardService(repository, overfetch=settings.activity_feed_overfetch)
