# /tests/test_dashboard_repository_sql.py

from datetime import datetime, timedelta

from sqlalchemy.orm import joinedload

from tms.db.models.bedrift_models import Ansatt, Bedrift
from tms.db.models.kontrakt_models import Kontrakt, PaymentTransaction

T0 = datetime(2025, 3, 1, 9, 0)


def _seed_company(seed):
    seed(Bedrift(id=1, navn="Trafikkskolen Øst"))
    seed(
        Ansatt(id=1, bedrift_id=1, fornavn="Kari", etternavn="A", aktiv=True),
        Ansatt(id=2, bedrift_id=1, fornavn="Per", etternavn="B", aktiv=False),
        Ansatt(id=3, bedrift_id=1, fornavn="Nils", etternavn="C", aktiv=True, is_deleted=True),
    )


def test_count_applies_every_criterion(repository, seed):
    _seed_company(seed)

    assert repository.count(Ansatt) == 3
    assert repository.count(Ansatt, Ansatt.is_deleted.is_(False)) == 2
    assert repository.count(Ansatt, Ansatt.is_deleted.is_(False), Ansatt.aktiv.is_(True)) == 1


def test_count_of_nothing_is_zero(repository):
    assert repository.count(Ansatt) == 0


def test_sum_of_no_rows_is_zero_not_none(repository, seed):
    seed(Bedrift(id=1, navn="Tom"))
    assert repository.sum(PaymentTransaction.belop, PaymentTransaction.kontrakt_id == 1) == 0


def test_find_many_orders_and_limits(repository, seed):
    seed(Bedrift(id=1, navn="Trafikkskolen Øst"))
    seed(*[
        Kontrakt(id=i, bedrift_id=1, elev_fornavn="Ola", elev_etternavn=str(i), opprettet=T0 + timedelta(days=i))
        for i in range(1, 6)
    ])

    rows = repository.find_many(Kontrakt, order_by=Kontrakt.opprettet.desc(), limit=3)

    assert [row.id for row in rows] == [5, 4, 3]


def test_find_many_returns_eager_loaded_relationships_after_the_session_closes(repository, seed):
    _seed_company(seed)

    [ansatt] = repository.find_many(Ansatt, Ansatt.id == 1, options=(joinedload(Ansatt.bedrift),))

    assert ansatt.bedrift.navn == "Trafikkskolen Øst"


def test_find_one_returns_none_when_nothing_matches(repository, seed):
    _seed_company(seed)

    assert repository.find_one(Ansatt, Ansatt.id == 2).fornavn == "Per"
    assert repository.find_one(Ansatt, Ansatt.id == 99) is None
