# /tms/services/dashboard_helpers/progress.py

"""
Pure calculations behind the student dashboard: percentages, the four-state
category status, and the per-category progress projection.
"""

from typing import Iterable, Optional

from ...db.models.sikkerhetskontroll_models import (
    SikkerhetskontrollElevProgresjon,
    SikkerhetskontrollKategori,
)
from ...models.dashboard_model import CategoryStatus, SikkerhetskontrollProgress


def percentage(part: int, total: int) -> int:
    """`part` as a whole-number percentage of `total`; 0 when there is no total."""
    if total <= 0:
        return 0
    # Half rounds up (12.5 -> 13), unlike round().
    return int(part * 100 / total + 0.5)


def category_status(progresjon: Optional[SikkerhetskontrollElevProgresjon]) -> CategoryStatus:
    if progresjon is None:
        return "ikke_sett"
    if progresjon.mestret:
        return "mestret"
    if (progresjon.antall_gale_forsok or 0) > (progresjon.antall_riktige_forsok or 0):
        return "vanskelig"
    if (progresjon.antall_sporsmal_sett or 0) > 0:
        return "sett"
    return "ikke_sett"


def _live(rows: Iterable) -> list:
    return [row for row in rows if not row.is_deleted]


def project_category_progress(kategori: SikkerhetskontrollKategori) -> SikkerhetskontrollProgress:
    """
    Builds the progress entry for one category. The category must arrive with
    its questions and the student's progression rows already loaded and
    filtered to the one student.
    """
    sporsmal = [s for s in _live(kategori.sporsmal) if s.aktiv]
    rows = _live(kategori.elev_progresjon)
    progresjon = rows[0] if rows else None

    total = len(sporsmal)
    besvart = progresjon.antall_sporsmal_sett if progresjon else 0
    korrekte = progresjon.antall_riktige_forsok if progresjon else 0

    return SikkerhetskontrollProgress(
        kategori=kategori.navn,
        totalSporsmal=total,
        besvartSporsmal=besvart or 0,
        korrekteSvar=korrekte or 0,
        progresjonProsent=percentage(besvart or 0, total),
        status=category_status(progresjon),
    )
