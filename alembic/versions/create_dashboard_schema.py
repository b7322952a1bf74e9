"""Create the schema read by the dashboard service

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column('id', sa.Integer(), primary_key=True)


def _is_deleted() -> sa.Column:
    return sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false(), index=True)


def _created(name: str = 'opprettet') -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), index=True)


def upgrade() -> None:
    """Create every table the dashboards aggregate over."""
    # --- Tenants and shared reference data ---
    op.create_table(
        'bedrifter', _id(),
        sa.Column('navn', sa.String(), nullable=False),
        sa.Column('organisasjonsnummer', sa.String(), nullable=True),
        _created(), _is_deleted(),
    )
    op.create_table(
        'sikkerhetskontroll_kategorier', _id(),
        sa.Column('navn', sa.String(), nullable=False),
        sa.Column('aktiv', sa.Boolean(), nullable=False, server_default=sa.true()),
        _is_deleted(),
    )
    op.create_table(
        'sikkerhetskontroll_achievements', _id(),
        sa.Column('navn', sa.String(), nullable=False),
        sa.Column('beskrivelse', sa.String(), nullable=False, server_default=''),
        sa.Column('ikon_url', sa.String(), nullable=True),
        sa.Column('xp_belonning', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sjelden', sa.Boolean(), nullable=False, server_default=sa.false()),
        _is_deleted(),
    )

    # --- Company-owned resources ---
    op.create_table(
        'ansatte', _id(),
        sa.Column('bedrift_id', sa.Integer(), sa.ForeignKey('bedrifter.id'), nullable=False, index=True),
        sa.Column('fornavn', sa.String(), nullable=False),
        sa.Column('etternavn', sa.String(), nullable=False),
        sa.Column('aktiv', sa.Boolean(), nullable=False, server_default=sa.true()),
        _is_deleted(),
    )
    op.create_table(
        'bedrift_services', _id(),
        sa.Column('bedrift_id', sa.Integer(), sa.ForeignKey('bedrifter.id'), nullable=False, index=True),
        sa.Column('navn', sa.String(), nullable=False),
        sa.Column('aktiv', sa.Boolean(), nullable=False, server_default=sa.true()),
        _is_deleted(),
    )
    op.create_table(
        'kjoretoy', _id(),
        sa.Column('bedrift_id', sa.Integer(), sa.ForeignKey('bedrifter.id'), nullable=False, index=True),
        sa.Column('registreringsnummer', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='AKTIV'),
        _is_deleted(),
    )
    op.create_table(
        'oppgaver', _id(),
        sa.Column('bedrift_id', sa.Integer(), sa.ForeignKey('bedrifter.id'), nullable=False, index=True),
        sa.Column('tittel', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='IKKE_PAABEGYNT'),
        _is_deleted(),
    )
    op.create_table(
        'sikkerhetskontroller', _id(),
        sa.Column('bedrift_id', sa.Integer(), sa.ForeignKey('bedrifter.id'), nullable=False, index=True),
        sa.Column('tittel', sa.String(), nullable=False),
        sa.Column('aktiv', sa.Boolean(), nullable=False, server_default=sa.true()),
        _is_deleted(),
    )
    op.create_table(
        'sikkerhetskontroll_sporsmal', _id(),
        sa.Column('kategori_id', sa.Integer(), sa.ForeignKey('sikkerhetskontroll_kategorier.id'), nullable=False, index=True),
        sa.Column('sporsmal', sa.String(), nullable=False),
        sa.Column('aktiv', sa.Boolean(), nullable=False, server_default=sa.true()),
        _is_deleted(),
    )

    # --- Students, users and everything that points at them ---
    op.create_table(
        'elever', _id(),
        sa.Column('bedrift_id', sa.Integer(), sa.ForeignKey('bedrifter.id'), nullable=False, index=True),
        sa.Column('fornavn', sa.String(), nullable=False),
        sa.Column('etternavn', sa.String(), nullable=False),
        _created(), _is_deleted(),
    )
    op.create_table(
        'elev_soknader', _id(),
        sa.Column('bedrift_id', sa.Integer(), sa.ForeignKey('bedrifter.id'), nullable=False, index=True),
        sa.Column('fornavn', sa.String(), nullable=False),
        sa.Column('etternavn', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='PENDING'),
        _is_deleted(),
    )
    op.create_table(
        'users', _id(),
        sa.Column('email', sa.String(), nullable=False, unique=True, index=True),
        sa.Column('fornavn', sa.String(), nullable=False),
        sa.Column('etternavn', sa.String(), nullable=False),
        sa.Column('rolle', sa.String(), nullable=False),
        sa.Column('bedrift_id', sa.Integer(), sa.ForeignKey('bedrifter.id'), nullable=True, index=True),
        sa.Column('elev_id', sa.Integer(), sa.ForeignKey('elever.id'), nullable=True, index=True),
        _is_deleted(),
    )
    op.create_table(
        'notifications', _id(),
        sa.Column('mottaker_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('tittel', sa.String(), nullable=False),
        sa.Column('lest', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('opprettet', sa.DateTime(timezone=True), server_default=sa.func.now()),
        _is_deleted(),
    )
    op.create_table(
        'audit_logs', _id(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('table_name', sa.String(), nullable=False),
        _created('timestamp'), _is_deleted(),
    )
    op.create_table(
        'kontrakter', _id(),
        sa.Column('bedrift_id', sa.Integer(), sa.ForeignKey('bedrifter.id'), nullable=False, index=True),
        sa.Column('elev_id', sa.Integer(), sa.ForeignKey('elever.id'), nullable=True, index=True),
        sa.Column('elev_fornavn', sa.String(), nullable=False),
        sa.Column('elev_etternavn', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='AKTIV'),
        _created(), _is_deleted(),
    )
    op.create_table(
        'payment_transactions', _id(),
        sa.Column('kontrakt_id', sa.Integer(), sa.ForeignKey('kontrakter.id'), nullable=False, index=True),
        sa.Column('belop', sa.Float(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='PENDING'),
        sa.Column('betalingsdato', sa.DateTime(timezone=True), nullable=False, index=True),
        _is_deleted(),
    )
    op.create_table(
        'kalender_events', _id(),
        sa.Column('bedrift_id', sa.Integer(), sa.ForeignKey('bedrifter.id'), nullable=False, index=True),
        sa.Column('elev_id', sa.Integer(), sa.ForeignKey('elever.id'), nullable=True, index=True),
        sa.Column('instruktor_id', sa.Integer(), sa.ForeignKey('ansatte.id'), nullable=True),
        sa.Column('tittel', sa.String(), nullable=False),
        sa.Column('type', sa.String(), nullable=False, server_default='KJORETIME'),
        sa.Column('status', sa.String(), nullable=False, server_default='PLANLAGT'),
        sa.Column('start_dato', sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column('slutt_dato', sa.DateTime(timezone=True), nullable=False),
        sa.Column('lokasjon', sa.String(), nullable=True),
        _created(), _is_deleted(),
    )
    op.create_table(
        'sikkerhetskontroll_elev_progresjon', _id(),
        sa.Column('elev_id', sa.Integer(), sa.ForeignKey('elever.id'), nullable=False, index=True),
        sa.Column('kategori_id', sa.Integer(), sa.ForeignKey('sikkerhetskontroll_kategorier.id'), nullable=False, index=True),
        sa.Column('antall_sporsmal_sett', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('antall_riktige_forsok', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('antall_gale_forsok', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('xp_opptjent', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('mestret', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('mestret_dato', sa.DateTime(timezone=True), nullable=True),
        sa.Column('siste_aktivitet', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        _is_deleted(),
    )
    op.create_table(
        'sikkerhetskontroll_elev_achievements', _id(),
        sa.Column('elev_id', sa.Integer(), sa.ForeignKey('elever.id'), nullable=False, index=True),
        sa.Column('achievement_id', sa.Integer(), sa.ForeignKey('sikkerhetskontroll_achievements.id'), nullable=False),
        sa.Column('oppnadd_dato', sa.DateTime(timezone=True), server_default=sa.func.now(), index=True),
        _is_deleted(),
    )


def downgrade() -> None:
    """Drop every dashboard table, children first."""
    for table in (
        'sikkerhetskontroll_elev_achievements',
        'sikkerhetskontroll_elev_progresjon',
        'kalender_events',
        'payment_transactions',
        'kontrakter',
        'audit_logs',
        'notifications',
        'users',
        'elev_soknader',
        'elever',
        'sikkerhetskontroll_sporsmal',
        'sikkerhetskontroller',
        'oppgaver',
        'kjoretoy',
        'bedrift_services',
        'ansatte',
        'sikkerhetskontroll_achievements',
        'sikkerhetskontroll_kategorier',
        'bedrifter',
    ):
        op.drop_table(table)
