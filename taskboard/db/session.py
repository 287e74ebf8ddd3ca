import logging
from sqlmodel import create_engine, Session, SQLModel
from ..core.config import settings

logger = logging.getLogger(__name__)

# Helper function to ensure URL format is correct
def get_db_url():
    url = settings.DATABASE_URL
    if not url:
        return "sqlite:///./tasks.db"
    # Heroku/Neon style URLs; SQLAlchemy only accepts the long scheme
    return url.replace("postgres://", "postgresql://", 1)

db_url = get_db_url()

# --- CONFIGURATION FOR SQLITE ---
if db_url.startswith("sqlite"):
    # Requests run in the threadpool, so the connection may cross threads
    sync_engine = create_engine(
        db_url,
        echo=settings.SQL_ECHO,
        connect_args={"check_same_thread": False}
    )

# --- CONFIGURATION FOR POSTGRESQL ---
else:
    # Sync engine over psycopg2-binary
    sync_engine = create_engine(
        db_url,
        echo=settings.SQL_ECHO,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10
    )


def create_db_and_tables(engine=None):
    # Register both tables on the metadata before creating them
    from .. import models  # noqa: F401

    engine = engine or sync_engine
    logger.info("Creating tables on %s", engine.url.render_as_string(hide_password=True))
    SQLModel.metadata.create_all(engine)


# Dependency: one session per request
def get_session():
    with Session(sync_engine) as session:
        yield session
