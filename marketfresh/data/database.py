# marketfresh/data/database.py
from pathlib import Path
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from marketfresh.utils.logging import get_logger
from marketfresh.utils.retry import db_retry

logger = get_logger(__name__)

Base = declarative_base()


class DatabaseNotInitialized(RuntimeError):
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class Database:
    """
    Store handle owned by the application and passed in explicitly.
    Lifecycle: initialize (connect + create_all + seed) -> session() -> dispose.
    """

    def __init__(self, url: str, seed: bool = False):
        self.url = url
        self.seed = seed
        self.engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def is_initialized(self) -> bool:
        return self._session_factory is not None

    def _create_engine(self) -> Engine:
        if not self.url.startswith("sqlite"):
            return create_engine(self.url, pool_pre_ping=True)

        path = make_url(self.url).database
        if path and path != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)

        kwargs = {"connect_args": {"check_same_thread": False}}
        if self.url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

        engine = create_engine(self.url, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    def initialize(self) -> None:
        if self.is_initialized:
            return

        self.engine = self._create_engine()
        self._migrate()
        self._session_factory = sessionmaker(bind=self.engine)

        if self.seed:
            from marketfresh.data.seed import seed_if_empty

            with self.session() as db:
                seed_if_empty(db)

        logger.info(f"Database ready ({self.engine.url.render_as_string(hide_password=True)})")

    @db_retry()
    def _migrate(self) -> None:
        # every model has to be registered in Base.metadata before create_all
        import marketfresh.data.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Tables: {sorted(Base.metadata.tables.keys())}")

    def session(self) -> Session:
        if self._session_factory is None:
            raise DatabaseNotInitialized("Database accessed before initialize()")
        return self._session_factory()

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("Database disposed")


def get_db(request: Request) -> Iterator[Session]:
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
