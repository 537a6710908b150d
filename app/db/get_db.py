# app/db/get_db.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.core import config


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # single shared connection so an in-memory database survives across sessions
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    options = {"pool_timeout": config.DB_POOL_TIMEOUT, "pool_pre_ping": True}
    if url.startswith("postgresql"):
        options["connect_args"] = {
            "options": f"-c statement_timeout={config.DB_STATEMENT_TIMEOUT_MS} -c timezone=UTC",
            "connect_timeout": config.DB_POOL_TIMEOUT,
        }
    return options


engine = create_engine(config.DATABASE_URL, echo=False, future=True, **_engine_options(config.DATABASE_URL))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
