# /tms/services/dashboard_helpers/activity_sources.py

"""
The individual recent-event sources an activity feed is merged from.

Every source is a plain function `(repository, take) -> List[ActivityItem]`:
it queries at most `take` rows, newest first, and maps them into the common
feed shape. Ids are prefixed with the source name so items stay unique after
merging. `sources_for(scope)` returns the sources for one role.
"""

from functools import partial
from typing import Callable, List, Optional

from sqlalchemy import and_
from sqlalchemy.orm import joinedload

from ...db.models.elev_models import Elev
from ...db.models.kalender_models import KalenderEvent
from ...db.models.kontrakt_models import Kontrakt
from ...db.models.sikkerhetskontroll_models import (
    SikkerhetskontrollAchievement,
    SikkerhetskontrollElevAchievement,
    SikkerhetskontrollElevProgresjon,
)
from ...db.models.user_models import AuditLog
from ...models.dashboard_model import ActivityItem
from ...utils.datetime import as_utc
from .scope import AdminScope, BedriftScope, DashboardScope, ElevScope

ActivitySource = Callable[[object, int], List[ActivityItem]]


def _scoped_to_bedrift(model, bedrift_id: Optional[int]) -> list:
    criteria = [model.is_deleted.is_(False)]
    if bedrift_id is not None:
        criteria.append(model.bedrift_id == bedrift_id)
    return criteria


def _live_elev(bedrift_id: Optional[int] = None):
    criteria = [Elev.is_deleted.is_(False)]
    if bedrift_id is not None:
        criteria.append(Elev.bedrift_id == bedrift_id)
    return SikkerhetskontrollElevProgresjon.elev.has(and_(*criteria))


# --- Admin-only source ---

def audit_log_activity(repo, take: int) -> List[ActivityItem]:
    logs = repo.find_many(
        AuditLog,
        AuditLog.is_deleted.is_(False),
        order_by=AuditLog.timestamp.desc(),
        limit=take,
        options=(joinedload(AuditLog.user),),
    )
    items = []
    for log in logs:
        actor = log.user.fornavn if log.user is not None and not log.user.is_deleted else "System"
        items.append(ActivityItem(
            id=f"audit-{log.id}",
            type=log.table_name.lower(),
            beskrivelse=f"{log.action} {log.table_name} av {actor}",
            tidspunkt=as_utc(log.timestamp),
            status="warning" if log.action == "DELETE" else "success",
        ))
    return items


# --- Company-wide (or system-wide, when bedrift_id is None) sources ---

def elev_registration_activity(repo, take: int, bedrift_id: Optional[int] = None) -> List[ActivityItem]:
    elever = repo.find_many(
        Elev,
        *_scoped_to_bedrift(Elev, bedrift_id),
        order_by=Elev.opprettet.desc(),
        limit=take,
    )
    return [
        ActivityItem(
            id=f"elev-{elev.id}",
            type="elev",
            beskrivelse=f"Ny elev registrert: {elev.fornavn} {elev.etternavn}",
            tidspunkt=as_utc(elev.opprettet),
            status="success",
        )
        for elev in elever
    ]


def kontroll_completion_activity(repo, take: int, bedrift_id: Optional[int] = None) -> List[ActivityItem]:
    rows = repo.find_many(
        SikkerhetskontrollElevProgresjon,
        SikkerhetskontrollElevProgresjon.is_deleted.is_(False),
        SikkerhetskontrollElevProgresjon.mestret.is_(True),
        SikkerhetskontrollElevProgresjon.mestret_dato.isnot(None),
        _live_elev(bedrift_id),
        order_by=SikkerhetskontrollElevProgresjon.mestret_dato.desc(),
        limit=take,
        options=(
            joinedload(SikkerhetskontrollElevProgresjon.elev),
            joinedload(SikkerhetskontrollElevProgresjon.kategori),
        ),
    )
    return [
        ActivityItem(
            id=f"kontroll-{row.id}",
            type="sikkerhetskontroll",
            beskrivelse=(
                f"Sikkerhetskontroll fullført: {row.kategori.navn if row.kategori else 'Ukjent'}"
                f" av {row.elev.fornavn}"
            ),
            tidspunkt=as_utc(row.mestret_dato),
            status="success",
        )
        for row in rows
    ]


def kontrakt_activity(repo, take: int, bedrift_id: Optional[int] = None) -> List[ActivityItem]:
    kontrakter = repo.find_many(
        Kontrakt,
        *_scoped_to_bedrift(Kontrakt, bedrift_id),
        order_by=Kontrakt.opprettet.desc(),
        limit=take,
    )
    return [
        ActivityItem(
            id=f"kontrakt-{kontrakt.id}",
            type="kontrakt",
            beskrivelse=f"Ny kontrakt opprettet for {kontrakt.elev_fornavn} {kontrakt.elev_etternavn}",
            tidspunkt=as_utc(kontrakt.opprettet),
            status="success",
        )
        for kontrakt in kontrakter
    ]


def kalender_activity(repo, take: int, bedrift_id: Optional[int] = None) -> List[ActivityItem]:
    events = repo.find_many(
        KalenderEvent,
        *_scoped_to_bedrift(KalenderEvent, bedrift_id),
        order_by=KalenderEvent.opprettet.desc(),
        limit=take,
    )
    return [
        ActivityItem(
            id=f"event-{event.id}",
            type="kalender",
            beskrivelse=f"Kalenderoppføring: {event.tittel}",
            tidspunkt=as_utc(event.opprettet),
            status="warning" if event.status == "AVLYST" else "success",
        )
        for event in events
    ]


# --- Student sources ---

def elev_progress_activity(repo, take: int, elev_id: int) -> List[ActivityItem]:
    rows = repo.find_many(
        SikkerhetskontrollElevProgresjon,
        SikkerhetskontrollElevProgresjon.elev_id == elev_id,
        SikkerhetskontrollElevProgresjon.is_deleted.is_(False),
        SikkerhetskontrollElevProgresjon.mestret.is_(True),
        SikkerhetskontrollElevProgresjon.mestret_dato.isnot(None),
        order_by=SikkerhetskontrollElevProgresjon.mestret_dato.desc(),
        limit=take,
        options=(joinedload(SikkerhetskontrollElevProgresjon.kategori),),
    )
    return [
        ActivityItem(
            id=f"progress-{row.id}",
            type="sikkerhetskontroll",
            beskrivelse=f"Fullført sikkerhetskontroll: {row.kategori.navn if row.kategori else 'Ukjent kategori'}",
            tidspunkt=as_utc(row.mestret_dato),
            status="success",
            xpGain=row.xp_opptjent,
        )
        for row in rows
    ]


def elev_achievement_activity(repo, take: int, elev_id: int) -> List[ActivityItem]:
    earned = repo.find_many(
        SikkerhetskontrollElevAchievement,
        SikkerhetskontrollElevAchievement.elev_id == elev_id,
        SikkerhetskontrollElevAchievement.is_deleted.is_(False),
        SikkerhetskontrollElevAchievement.achievement.has(SikkerhetskontrollAchievement.is_deleted.is_(False)),
        order_by=SikkerhetskontrollElevAchievement.oppnadd_dato.desc(),
        limit=take,
        options=(joinedload(SikkerhetskontrollElevAchievement.achievement),),
    )
    return [
        ActivityItem(
            id=f"achievement-{row.id}",
            type="achievement",
            beskrivelse=f"Ny prestasjon oppnådd: {row.achievement.navn}",
            tidspunkt=as_utc(row.oppnadd_dato),
            status="success",
            xpGain=row.achievement.xp_belonning,
        )
        for row in earned
    ]


def elev_lesson_activity(repo, take: int, elev_id: int) -> List[ActivityItem]:
    lessons = repo.find_many(
        KalenderEvent,
        KalenderEvent.elev_id == elev_id,
        KalenderEvent.is_deleted.is_(False),
        KalenderEvent.status == "GJENNOMFØRT",
        order_by=KalenderEvent.slutt_dato.desc(),
        limit=take,
        options=(joinedload(KalenderEvent.instruktor),),
    )
    return [
        ActivityItem(
            id=f"lesson-{lesson.id}",
            type="lesson",
            beskrivelse=(
                f"{lesson.tittel} fullført med "
                f"{lesson.instruktor.fornavn if lesson.instruktor else 'ukjent instruktør'}"
            ),
            tidspunkt=as_utc(lesson.slutt_dato),
            status="success",
        )
        for lesson in lessons
    ]


def sources_for(scope: DashboardScope) -> List[ActivitySource]:
    """The feed sources for one role, in a fixed order."""
    if isinstance(scope, AdminScope):
        return [
            audit_log_activity,
            elev_registration_activity,
            kontroll_completion_activity,
            kontrakt_activity,
            kalender_activity,
        ]
    if isinstance(scope, BedriftScope):
        return [
            partial(elev_registration_activity, bedrift_id=scope.id),
            partial(kontroll_completion_activity, bedrift_id=scope.id),
            partial(kontrakt_activity, bedrift_id=scope.id),
            partial(kalender_activity, bedrift_id=scope.id),
        ]
    if isinstance(scope, ElevScope):
        return [
            partial(elev_progress_activity, elev_id=scope.id),
            partial(elev_achievement_activity, elev_id=scope.id),
            partial(elev_lesson_activity, elev_id=scope.id),
        ]
    raise ValueError(f"Unknown dashboard scope: {scope!r}")
