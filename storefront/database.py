# storefront/database.py
# ------------------------------------------------------------
# SQLAlchemy engine + pooled query executor
# - One Database per process, created in the app lifespan and injected with Depends(get_db)
# - Each call borrows a connection for exactly one statement
# - PostgreSQL in production (psycopg2), SQLite for local runs and tests
# ------------------------------------------------------------
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from decouple import config
from fastapi import Request
from sqlalchemy import Table, create_engine, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

DATABASE_URL = config("DATABASE_URL", default="sqlite:///./storefront.db")
DB_POOL_SIZE = config("DB_POOL_SIZE", cast=int, default=5)
DB_MAX_OVERFLOW = config("DB_MAX_OVERFLOW", cast=int, default=10)
DB_POOL_TIMEOUT = config("DB_POOL_TIMEOUT", cast=float, default=30)
APP_ENV = config("APP_ENV", default="development")

Base = declarative_base()


@dataclass
class ExecResult:
    generated_id: Any
    affected_count: int
    row: Optional[dict] = None


class Database:
    """Bounded connection pool plus the three query primitives handlers use.

    Statements are SQLAlchemy Core constructs; bind parameters are rendered in
    the engine's own paramstyle, so handlers never touch placeholder syntax.
    """

    def __init__(
        self,
        url: str = DATABASE_URL,
        *,
        pool_size: int = DB_POOL_SIZE,
        max_overflow: int = DB_MAX_OVERFLOW,
        pool_timeout: float = DB_POOL_TIMEOUT,
        env: str = APP_ENV,
    ):
        kwargs = {"pool_pre_ping": True}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url.rstrip("/") == "sqlite:":
                # A private in-memory DB only exists on one connection
                kwargs["poolclass"] = StaticPool
        elif env == "production" and url.startswith("postgresql"):
            kwargs["connect_args"] = {"sslmode": "require"}

        if "poolclass" not in kwargs:
            kwargs.update(pool_size=pool_size, max_overflow=max_overflow, pool_timeout=pool_timeout)

        self.engine = create_engine(url, **kwargs)
        logger.info(f"Database engine created ({self.engine.dialect.name}, pool={self.engine.pool.status()})")

    # ---------------- primitives ---------------- #
    def query_many(self, statement, params: Optional[Mapping[str, Any]] = None) -> List[dict]:
        with self.engine.connect() as conn:
            return [dict(r) for r in conn.execute(statement, params).mappings()]

    def query_one(self, statement, params: Optional[Mapping[str, Any]] = None) -> Optional[dict]:
        with self.engine.connect() as conn:
            row = conn.execute(statement, params).mappings().first()
            return dict(row) if row is not None else None

    def execute(self, statement, params: Optional[Mapping[str, Any]] = None) -> ExecResult:
        """Run an insert/update/delete in its own transaction.

        If the statement has a RETURNING clause the first returned row is
        included in the result. Inserts without one still report their new
        primary key through the dialect's inserted_primary_key support.
        """
        with self.engine.begin() as conn:
            result = conn.execute(statement, params)
            row = None
            generated_id = None
            if result.returns_rows:
                first = result.mappings().first()
                if first is not None:
                    row = dict(first)
                    generated_id = row.get("id")
            elif result.is_insert and result.inserted_primary_key:
                generated_id = result.inserted_primary_key[0]
            return ExecResult(generated_id=generated_id, affected_count=result.rowcount, row=row)

    # ---------------- conflict helpers ---------------- #
    def _insert(self, table: Table):
        name = self.engine.dialect.name
        if name == "postgresql":
            return postgresql.insert(table)
        if name == "sqlite":
            return sqlite.insert(table)
        raise NotImplementedError(f"ON CONFLICT is not supported for dialect {name!r}")

    def insert_or_ignore(self, table: Table, values: Mapping[str, Any], conflict: Iterable[str]) -> Optional[dict]:
        """Insert a row unless it collides with a unique key; returns None on collision."""
        stmt = (
            self._insert(table)
            .values(**values)
            .on_conflict_do_nothing(index_elements=list(conflict))
            .returning(table)
        )
        return self.execute(stmt).row

    def upsert(self, table: Table, values: Mapping[str, Any], conflict: Iterable[str], update: Iterable[str]) -> dict:
        """Insert a row, or overwrite the `update` columns of the row holding the same unique key."""
        stmt = self._insert(table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=list(conflict),
            set_={col: stmt.excluded[col] for col in update},
        ).returning(table)
        return self.execute(stmt).row

    # ---------------- lifecycle ---------------- #
    def create_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ensured.")

    def ping(self) -> bool:
        return self.query_one(text("SELECT 1")) is not None

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database pool disposed.")


def get_db(request: Request) -> Database:
    """Dependency: the process-wide Database attached to the app at startup."""
    return request.app.state.db
