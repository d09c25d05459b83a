"""Generate database session"""

import os
from functools import lru_cache
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from chesscore.db.schema import Base

DEFAULT_DATABASE_URL = "sqlite:///chesscore.db"


def database_url() -> str:
    return os.environ.get("CHESSCORE_DATABASE_URL", DEFAULT_DATABASE_URL)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Created on first use, so importing this module never touches a database"""
    echo = os.environ.get("CHESSCORE_SQL_ECHO", "0") == "1"
    engine = create_engine(database_url(), echo=echo)
    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


def get_db() -> Generator[Session, None, None]:
    session_local = sessionmaker(bind=get_engine())
    db = session_local()
    try:
        yield db
    finally:
        db.close()
