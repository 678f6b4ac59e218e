from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from app.core.config import DATABASE_URL, DB_ECHO, DB_POOL_SIZE, DB_MAX_OVERFLOW


def enable_sqlite_foreign_keys(engine):
    # SQLite ignores ON DELETE rules unless each connection opts in
    @event.listens_for(engine, "connect")
    def _fk_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def build_engine(url: str, echo: bool = False):
    # SQLite has no server-side pool to tune; it only needs cross-thread access
    if url.startswith("sqlite"):
        return enable_sqlite_foreign_keys(
            create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                future=True,
            )
        )

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,  # drops dead connections automatically
        pool_size=DB_POOL_SIZE,
        max_overflow=DB_MAX_OVERFLOW,
        future=True,
    )


# ---------------------
# SQLAlchemy engine / session / Base
# ---------------------
engine = build_engine(DATABASE_URL, echo=DB_ECHO)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
