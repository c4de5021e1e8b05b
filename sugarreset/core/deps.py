"""
FastAPI dependencies shared by the routers.

Tests override get_clock to pin "now"; get_store wraps the request-scoped
session so services only ever see a PersistenceStore.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from sugarreset.core.clock import Clock, SystemClock
from sugarreset.db.base import get_db
from sugarreset.services.sql_store import SqlAlchemyStore

_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock


def get_store(db: Session = Depends(get_db)) -> SqlAlchemyStore:
    return SqlAlchemyStore(db)
