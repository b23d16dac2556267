"""
Contract tests run against both storage variants (SQLite file and memory).
"""
from __future__ import annotations

import dataclasses

import pytest
from sqlalchemy import update

from reparto.db.models import ClientRecord
from reparto.db.session import Base, make_engine
from reparto.domain.dates import today
from reparto.domain.errors import NotFoundError, StorageError, ValidationError
from reparto.domain.models import Visit
from reparto.repositories import MemoryRepository, SQLRepository


def _change_client_prices(repo, client_id, price_fardo, price_botellon):
    """Mutate a stored client behind the repository's back."""
    if repo.backend == "sql":
        with repo._session() as session:
            session.execute(
                update(ClientRecord)
                .where(ClientRecord.id == client_id)
                .values(price_fardo=price_fardo, price_botellon=price_botellon)
            )
        return
    clients = repo.store.clients
    for index, client in enumerate(clients):
        if client.id == client_id:
            clients[index] = dataclasses.replace(client, price_fardo=price_fardo, price_botellon=price_botellon)


@pytest.mark.parametrize("name", [None, "", "   "])
def test_create_client_requires_name(repo, name):
    with pytest.raises(ValidationError):
        repo.create_client(name, phone="555")
    assert repo.list_clients() == []


def test_create_client_applies_defaults(repo):
    client = repo.create_client("Ana")
    assert client.phone == ""
    assert client.address == ""
    assert client.price_fardo == 0
    assert client.price_botellon == 0
    assert repo.get_client(client.id) == client
    assert repo.get_client("missing") is None


def test_list_clients_newest_first(repo):
    first = repo.create_client("Ana")
    second = repo.create_client("Bruno")
    third = repo.create_client("Carla")
    assert [c.id for c in repo.list_clients()] == [third.id, second.id, first.id]


def test_list_clients_filter_matches_name_or_phone_ignoring_case(repo):
    ana = repo.create_client("Ana", phone="555-1234")
    bruno = repo.create_client("Bruno", phone="099 ABC")
    mariana = repo.create_client("MARIANA")

    assert [c.id for c in repo.list_clients("ana")] == [mariana.id, ana.id]
    assert [c.id for c in repo.list_clients("ANA")] == [mariana.id, ana.id]
    assert [c.id for c in repo.list_clients("555")] == [ana.id]
    assert [c.id for c in repo.list_clients("abc")] == [bruno.id]
    assert len(repo.list_clients("")) == 3
    assert repo.list_clients("zzz") == []


def test_list_clients_filter_treats_wildcards_literally(repo):
    repo.create_client("Ana")
    percent = repo.create_client("100% Agua")
    assert [c.id for c in repo.list_clients("%")] == [percent.id]
    assert repo.list_clients("_") == []


def test_create_visit_requires_client_id(repo):
    with pytest.raises(ValidationError):
        repo.create_visit(None, qty_fardo=1)


def test_create_visit_for_unknown_client_persists_nothing(repo):
    with pytest.raises(NotFoundError):
        repo.create_visit("missing", qty_fardo=1)
    total, rows = repo.list_visits_by_date(today(repo.clock))
    assert total == 0
    assert rows == []


def test_visit_snapshots_client_prices(repo):
    client = repo.create_client("Ana", price_fardo=5, price_botellon=10)
    visit = repo.create_visit(client.id, qty_fardo=2, qty_botellon=1)

    assert visit.unit_price_fardo == 5
    assert visit.unit_price_botellon == 10
    assert visit.subtotal == 2 * 5 + 1 * 10

    _change_client_prices(repo, client.id, 50, 100)
    assert repo.get_client(client.id).price_fardo == 50

    _, rows = repo.list_visits_by_date(visit.date)
    stored = rows[0].visit
    assert stored == visit
    assert stored.subtotal == 20

    later = repo.create_visit(client.id, qty_fardo=1)
    assert later.unit_price_fardo == 50
    assert later.subtotal == 50


def test_create_visit_applies_defaults(repo):
    client = repo.create_client("Ana", price_fardo=5)
    visit = repo.create_visit(client.id)
    assert visit.qty_fardo == 0
    assert visit.qty_botellon == 0
    assert visit.vacios_recogidos == 0
    assert visit.note == ""
    assert visit.subtotal == 0
    assert visit.date == today(repo.clock)


def test_create_visit_does_not_reject_negative_quantities(repo):
    client = repo.create_client("Ana", price_fardo=5, price_botellon=10)
    visit = repo.create_visit(client.id, qty_fardo=-1, vacios_recogidos=3, note="sin vacios")
    assert visit.subtotal == -5
    assert visit.vacios_recogidos == 3
    assert visit.note == "sin vacios"


@pytest.mark.parametrize("bad_date", ["not-a-date", "2024-5-3", 20240503])
def test_invalid_date_falls_back_to_today(repo, bad_date):
    client = repo.create_client("Ana")
    visit = repo.create_visit(client.id, date=bad_date)
    assert visit.date == today(repo.clock)
    _, rows = repo.list_visits_by_date(visit.date)
    assert [row.visit.id for row in rows] == [visit.id]


def test_list_visits_by_date_filters_and_totals(repo):
    ana = repo.create_client("Ana", price_fardo=5, price_botellon=10)
    bruno = repo.create_client("Bruno", price_fardo=4, price_botellon=8)

    v1 = repo.create_visit(ana.id, date="2024-05-03", qty_fardo=2, qty_botellon=1)
    v2 = repo.create_visit(bruno.id, date="2024-05-03", qty_botellon=3)
    repo.create_visit(ana.id, date="2024-05-04", qty_fardo=10)
    v3 = repo.create_visit(ana.id, date="2024-05-03", qty_fardo=1)

    total, rows = repo.list_visits_by_date("2024-05-03")
    assert [row.visit.id for row in rows] == [v3.id, v2.id, v1.id]
    assert {row.visit.date for row in rows} == {"2024-05-03"}
    assert total == sum(row.visit.subtotal for row in rows) == 20 + 24 + 5
    assert [row.client_name for row in rows] == ["Ana", "Bruno", "Ana"]
    assert rows[0].to_dict()["client_name"] == "Ana"

    total, rows = repo.list_visits_by_date("2024-05-03", ana.id)
    assert [row.visit.id for row in rows] == [v3.id, v1.id]
    assert total == 25

    assert repo.list_visits_by_date("2024-01-01") == (0, [])


def test_orphan_visits_are_not_listed(repo):
    orphan = Visit(
        id="orphan",
        client_id="gone",
        date="2024-05-03",
        qty_fardo=1,
        qty_botellon=0,
        unit_price_fardo=5,
        unit_price_botellon=0,
        subtotal=5,
        vacios_recogidos=0,
        note="",
        created_at="2024-05-03T10:00:00.000000+00:00",
    )
    repo._add_visit(orphan)
    assert repo.list_visits_by_date("2024-05-03") == (0, [])


def test_delete_visit_removes_exactly_one(repo):
    client = repo.create_client("Ana", price_fardo=5)
    keep = repo.create_visit(client.id, date="2024-05-03", qty_fardo=1)
    drop = repo.create_visit(client.id, date="2024-05-03", qty_fardo=2)

    repo.delete_visit(drop.id)
    total, rows = repo.list_visits_by_date("2024-05-03")
    assert [row.visit.id for row in rows] == [keep.id]
    assert total == 5

    with pytest.raises(NotFoundError):
        repo.delete_visit(drop.id)
    with pytest.raises(NotFoundError):
        repo.delete_visit("missing")
    _, rows = repo.list_visits_by_date("2024-05-03")
    assert [row.visit.id for row in rows] == [keep.id]


def test_sql_failure_is_reported_as_storage_error(sql_repo):
    Base.metadata.drop_all(bind=sql_repo.engine)
    with pytest.raises(StorageError) as excinfo:
        sql_repo.list_clients()
    assert excinfo.value.status_code == 500
    assert excinfo.value.message == "Error DB"


def test_memory_repositories_are_isolated(clock):
    first = MemoryRepository(clock=clock)
    second = MemoryRepository(clock=clock)
    first.create_client("Ana")
    assert second.list_clients() == []


def test_sql_data_survives_reopening_the_file(tmp_path, clock):
    url = f"sqlite:///{tmp_path / 'reparto.db'}"
    first = SQLRepository(make_engine(url), clock=clock)
    client = first.create_client("Ana", phone="555", price_fardo=5, price_botellon=10)
    visit = first.create_visit(client.id, date="2024-05-03", qty_fardo=2, qty_botellon=1, note="portón")
    first.dispose()

    reopened = SQLRepository(make_engine(url), clock=clock)
    try:
        assert reopened.get_client(client.id) == client
        total, rows = reopened.list_visits_by_date("2024-05-03")
        assert [row.visit for row in rows] == [visit]
        assert rows[0].visit.unit_price_fardo == 5
        assert rows[0].visit.unit_price_botellon == 10
        assert total == 20
    finally:
        reopened.dispose()


def test_listing_date_defaults_to_today(repo):
    assert repo.listing_date("2024-05-03") == "2024-05-03"
    assert repo.listing_date(None) == today(repo.clock)
    assert repo.listing_date("") == today(repo.clock)
