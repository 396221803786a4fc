import logging
import os
import tempfile

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "tic-tac-toe-default.sqlite"


def get_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    db_path = os.getenv("TIC_TAC_DB_PATH")
    if db_path:
        db_dir = os.path.dirname(os.path.abspath(db_path))
        if not os.path.exists(db_dir):
            logger.info("Creating directory for database: %s", db_dir)
            os.makedirs(db_dir, exist_ok=True)
        return f"sqlite:///{db_path}"

    return f"sqlite:///{os.path.join(tempfile.gettempdir(), DEFAULT_DB_NAME)}"


def create_db_engine(url: str):
    """Build an engine; SQLite connections are shared across Flask threads."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # in-memory databases live only as long as their one connection
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url)


DATABASE_URL = get_database_url()

engine = create_db_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db(bind=None):
    """Create missing tables. Stands in for a migration run outside production."""
    # models must be imported so their tables are registered on Base.metadata
    import models.win_state  # noqa: F401

    target = bind if bind is not None else engine
    Base.metadata.create_all(bind=target)
    logger.info("Database schema is up to date (%s)", target.url)
