from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from app.core.config import settings

# SQLAlchemy Base class for models to inherit
Base = declarative_base()


def database_url():
    """Resolve the configured URL, applying DATABASE_NAME when set."""
    url = make_url(settings.database_url)
    if settings.database_name:
        url = url.set(database=settings.database_name)
    return url


def _engine_options(url) -> dict:
    options = {"pool_pre_ping": True}  # helps avoid stale connections
    if url.get_backend_name() == "sqlite":
        # Requests are served from the threadpool
        options["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            # One shared connection, otherwise every checkout sees an empty db
            options["poolclass"] = StaticPool
    return options


_url = database_url()

# Create SQLAlchemy engine (Postgres in production, sqlite for tests)
engine = create_engine(_url, **_engine_options(_url))

# Factory that creates DB sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Dependency we will use in FastAPI routes
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
