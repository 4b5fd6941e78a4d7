# storefront/database.py
from sqlmodel import SQLModel, create_engine, Session

from storefront.core.config import get_settings

settings = get_settings()


def build_database_url(url: str, ssl_required: bool = True) -> str:
    """
    Append sslmode=require to Postgres URLs that don't specify one.

    SQLite and already-configured URLs are returned unchanged.
    """
    if not url.startswith("postgres") or not ssl_required:
        return url
    if "sslmode=" in url:
        return url
    if "?" in url:
        return url + "&sslmode=require"
    return url + "?sslmode=require"


def build_engine(url: str, echo: bool = False):
    """
    Create the SQLAlchemy engine for the given URL.

    - SQLite needs check_same_thread=False because FastAPI runs sync
      endpoints in a threadpool.
    - pool_pre_ping validates pooled Postgres connections before use.
    """
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
    return create_engine(url, echo=echo, pool_pre_ping=True)


engine = build_engine(
    build_database_url(settings.DATABASE_URL, settings.DATABASE_SSL_REQUIRED),
    echo=settings.DATABASE_ECHO,
)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
