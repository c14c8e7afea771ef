import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cancer_api.db.session import SessionLocal
from cancer_api.db.store import HistoryStore
from cancer_api.errors import PersistenceError, RetrievalError
from cancer_api.inference.inference import format_result


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def broken_db():
    # A database without the predictions table.
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    session = sessionmaker(bind=engine)()
    yield session
    session.close()


def test_put_then_list_returns_whole_document(db):
    store = HistoryStore(db)
    record = format_result(0.92)

    store.put(record)

    assert store.list_all() == [{"id": record.id, "history": record.model_dump()}]


def test_put_is_an_upsert_keyed_by_id(db):
    store = HistoryStore(db)
    record = format_result(0.3)

    store.put(record)
    store.put(record)

    assert len(store.list_all()) == 1


def test_list_all_returns_every_record(db):
    store = HistoryStore(db)
    records = [format_result(p) for p in (0.1, 0.6, 0.9)]
    for record in records:
        store.put(record)

    stored = {entry["id"]: entry["history"] for entry in store.list_all()}
    assert stored == {r.id: r.model_dump() for r in records}


def test_list_all_on_empty_store(db):
    assert HistoryStore(db).list_all() == []


def test_put_failure_raises_persistence_error(broken_db):
    with pytest.raises(PersistenceError):
        HistoryStore(broken_db).put(format_result(0.9))


def test_list_failure_raises_retrieval_error(broken_db):
    with pytest.raises(RetrievalError):
        HistoryStore(broken_db).list_all()
