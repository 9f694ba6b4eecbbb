# auditguard/infrastructure/database/session.py

from typing import Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from auditguard.config.settings import DataSettings, get_settings


def create_db_engine(settings: Optional[DataSettings] = None) -> Engine:
    """Build the SQLAlchemy engine from settings. In-memory SQLite shares one connection."""
    settings = settings or get_settings()
    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        return create_engine(
            url,
            echo=settings.database_echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
    )
