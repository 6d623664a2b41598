from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi import Request

Base = declarative_base()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Creates the SQLAlchemy engine for the given URL.

    SQLite connections are shared with FastAPI's threadpool, and an in-memory
    database must stay on a single connection or every session sees an empty
    schema.
    """
    kwargs = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    """Yields a request-scoped session from the app's session factory"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
