# Live PostgreSQL check: only runs when TEST_DATABASE_URL points at a Postgres server.
import uuid

import pytest
from decouple import config
from sqlalchemy import delete, select

from storefront.database import Database
from storefront.models import settings

TEST_DATABASE_URL = config("TEST_DATABASE_URL", default="")

pytestmark = pytest.mark.skipif(
    not TEST_DATABASE_URL.startswith("postgresql"),
    reason="TEST_DATABASE_URL is not set to a PostgreSQL URL",
)


@pytest.fixture
def pg():
    db = Database(TEST_DATABASE_URL, pool_size=2, max_overflow=0, pool_timeout=5)
    db.create_schema()
    yield db
    db.dispose()


def test_postgres_connection(pg):
    assert pg.ping()


def test_postgres_upsert_uses_native_on_conflict(pg):
    key = f"conn-test-{uuid.uuid4().hex}"
    try:
        pg.upsert(settings, {"key": key, "value": [1]}, conflict=("key",), update=("value",))
        row = pg.upsert(settings, {"key": key, "value": [2]}, conflict=("key",), update=("value",))
        assert row["value"] == [2]
        assert len(pg.query_many(select(settings).where(settings.c.key == key))) == 1
    finally:
        pg.execute(delete(settings).where(settings.c.key == key))
