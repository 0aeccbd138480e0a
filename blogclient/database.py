# blogclient/database.py
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from blogclient.core.config import get_settings

# Import models so SQLModel metadata is populated before create_all()
from blogclient.models import user as _user_models  # noqa: F401
from blogclient.models import session as _session_models  # noqa: F401
from blogclient.models import content as _content_models  # noqa: F401


# ---------------------------------------------------------
# Supabase Postgres connection (via pooler)
#
# The client talks to the tables through PostgREST at runtime. The
# direct Postgres connection is only opened to provision the schema:
#
# - sslmode=require   : enforce SSL when running against the cloud
# - pool_size=1       : keep only 1 connection to the Supabase pooler
# - max_overflow=0    : do not open extra connections beyond the pool
# - pool_pre_ping=True: validate connections before using them
# ---------------------------------------------------------


def _with_sslmode(db_url: str) -> str:
    """Append sslmode=require to Postgres URLs that don't set it."""
    if not db_url.startswith("postgres") or "sslmode=" in db_url:
        return db_url
    if "?" in db_url:
        return db_url + "&sslmode=require"
    return db_url + "?sslmode=require"


def get_engine(db_url: str | None = None) -> Engine:
    """
    Build an engine for `db_url` (defaults to settings.DATABASE_URL).

    Raises:
        RuntimeError: if no database URL is configured.
    """
    db_url = db_url or get_settings().DATABASE_URL
    if not db_url:
        raise RuntimeError("Missing DATABASE_URL in .env")

    if db_url.startswith("sqlite"):
        return create_engine(db_url, echo=False)

    return create_engine(
        _with_sslmode(db_url),
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


def create_db_and_tables(engine: Engine | None = None) -> None:
    """
    Create users / sessions / content tables if they do not exist.

    Called by `blogclient init-db`.
    """
    SQLModel.metadata.create_all(engine or get_engine())
