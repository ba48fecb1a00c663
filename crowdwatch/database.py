# crowdwatch/database.py
"""
Engine construction and table creation.
Uses SQLAlchemy with an in-memory SQLite database by default, so all state
lives exactly as long as the process. All models are imported in
create_tables() so one call creates every table.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def make_engine(database_url: str) -> Engine:
    """Build an engine. In-memory SQLite needs one shared connection or every
    new connection would see an empty database."""
    if database_url.startswith("sqlite") and (":memory:" in database_url or database_url == "sqlite://"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )
    return create_engine(database_url, pool_pre_ping=True, echo=False)


def create_tables(engine: Engine):
    """Creates all tables. Safe to call multiple times."""
    from crowdwatch.models.gate import Gate                   # noqa
    from crowdwatch.models.alert import Alert                 # noqa
    from crowdwatch.models.chat_message import ChatMessage    # noqa
    from crowdwatch.models.media import MediaRecord           # noqa

    Base.metadata.create_all(bind=engine)
