from __future__ import annotations

import os

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL, Engine, make_url

DEFAULT_POOL_SIZE = 10


def database_url_from_env() -> str | URL:
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    host = os.getenv("DB_HOST")
    database = os.getenv("DB_NAME")
    if not host or not database:
        raise RuntimeError("DATABASE_URL is not set and DB_HOST/DB_NAME are incomplete")

    port = os.getenv("DB_PORT")
    return URL.create(
        "postgresql+psycopg",
        username=os.getenv("DB_USER"),
        password=os.getenv("DB_PASSWORD"),
        host=host,
        port=int(port) if port else None,
        database=database,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(
    database_url: str | URL | None = None,
    timeout_seconds: float = 5.0,
    pool_size: int | None = None,
) -> Engine:
    """Create the connection pool handle for one application instance."""
    url = make_url(database_url or database_url_from_env())

    if url.get_backend_name() == "sqlite":
        engine = create_engine(url, pool_pre_ping=True)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    size = pool_size or int(os.getenv("DB_POOL_SIZE", str(DEFAULT_POOL_SIZE)))
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=size,
        connect_args={"connect_timeout": max(1, int(timeout_seconds))},
    )


def ping_database(engine: Engine) -> bool:
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
