from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from billflow.config import settings

# Base class for all SQLAlchemy models
Base = declarative_base()


# ============================================================
# ENGINE + SESSION FACTORY
# ============================================================

def make_engine(database_url: str = None):
    """
    Build a SQLAlchemy engine for the given URL (defaults to DATABASE_URL).
    SQLite connections are shared across the request thread pool.
    """
    url = database_url or settings.database_url
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args)


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_schema(engine):
    """Create every table registered on Base."""
    # Register the ORM tables before create_all
    import billflow.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
