from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from pettrail.core.config import settings

# SQLAlchemy Base class for models to inherit
Base = declarative_base()


def _serialize_sqlite_writers(engine) -> None:
    """Open every SQLite transaction with BEGIN IMMEDIATE.

    pysqlite defers BEGIN until the first write, so SELECT ... FOR UPDATE
    (which SQLite ignores) would leave reads unprotected. Taking the write
    lock up front gives the same per-walk serialization a row lock gives
    on PostgreSQL.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str):
    """Create an engine for `url`.

    SQLite connections are shared across FastAPI's worker threads, and an
    in-memory database must live on a single connection or every new
    connection would see an empty schema.
    """
    kwargs = {"pool_pre_ping": True}  # helps avoid stale connections
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(url, **kwargs)

    kwargs["connect_args"] = {"check_same_thread": False}
    if parsed.database in (None, "", ":memory:"):
        # One shared connection; there is nobody to serialize against
        kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    engine = create_engine(url, **kwargs)
    _serialize_sqlite_writers(engine)
    return engine


engine = build_engine(settings.database_url)

# Factory that creates DB sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Dependency we will use in FastAPI routes
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
