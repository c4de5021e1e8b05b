"""
Shared pytest fixtures.

Uses a SQLite database so no Postgres is required for tests. The clock
dependency is pinned to NOW; tests that need time to pass move `clock.at`.
"""
from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import sugarreset.models  # noqa: F401
from sugarreset.core.clock import FixedClock
from sugarreset.core.deps import get_clock
from sugarreset.core.errors import PersistenceError
from sugarreset.db.base import Base, get_db
from sugarreset.main import app
from sugarreset.services.records import (
    CheckIn,
    CommunitySummary,
    StreakState,
    UserProfile,
    UserStreakRecord,
)

SQLITE_URL = "sqlite:///./test_sugarreset.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

NOW = datetime(2026, 10, 18, 12, 0)
PLAN_START = datetime(2026, 10, 1, 9, 0)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def new_user_id() -> str:
    return f"user-{uuid.uuid4().hex[:12]}"


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def clock():
    return FixedClock(NOW)


@pytest.fixture()
def client(clock):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# In-memory PersistenceStore for service-level tests
# ---------------------------------------------------------------------------

class FakeStore:
    """
    Dict-backed PersistenceStore with staged writes. commit() makes the
    working state durable; rollback() restores the last committed state.
    Operations named in `fail_on` raise PersistenceError.
    """

    def __init__(self):
        self.users: dict[str, UserProfile] = {}
        self.check_ins: dict[tuple[str, date], CheckIn] = {}
        self.summary: Optional[CommunitySummary] = None
        self.fail_on: set[str] = set()
        self.commits = 0
        self.rollbacks = 0
        self.read_limits: list[int] = []
        self._committed = self._snapshot()

    def _snapshot(self):
        return dict(self.users), dict(self.check_ins), self.summary

    def _check(self, op: str) -> None:
        if op in self.fail_on:
            raise PersistenceError(op)

    # users
    def get_user(self, user_id):
        self._check("get_user")
        return self.users.get(user_id)

    def add_user(self, profile):
        self._check("add_user")
        self.users[profile.user_id] = profile

    def save_streak(self, user_id, streak: StreakState, updated_at):
        self._check("save_streak")
        self.users[user_id] = replace(
            self.users[user_id], streak=streak, stats_updated_at=updated_at
        )

    def set_health_score(self, user_id, score, updated_at):
        self._check("set_health_score")
        self.users[user_id] = replace(
            self.users[user_id], health_score=score, stats_updated_at=updated_at
        )

    # check-ins
    def get_check_in(self, user_id, day):
        self._check("get_check_in")
        return self.check_ins.get((user_id, day))

    def put_check_in(self, user_id, check_in):
        self._check("put_check_in")
        self.check_ins[(user_id, check_in.day)] = check_in

    def list_check_ins(self, user_id, start, end):
        self._check("list_check_ins")
        rows = [
            c for (uid, day), c in self.check_ins.items()
            if uid == user_id
            and (start is None or day >= start)
            and (end is None or day <= end)
        ]
        return sorted(rows, key=lambda c: c.day, reverse=True)

    # community
    def _streak_records(self):
        return [
            UserStreakRecord(
                user_id=p.user_id,
                current_streak=p.streak.current_streak,
                health_score=p.health_score,
                updated_at=p.stats_updated_at,
                last_check_in=p.streak.last_check_in,
            )
            for p in self.users.values()
        ]

    def get_all_user_streak_records(self, limit):
        self._check("get_all_user_streak_records")
        self.read_limits.append(limit)
        return self._streak_records()[:limit]

    def top_users_by_health_score(self, limit):
        records = sorted(
            self._streak_records(),
            key=lambda r: (-r.health_score, -r.current_streak, r.user_id),
        )
        return records[:limit]

    def get_community_summary(self):
        return self.summary

    def replace_community_summary(self, summary):
        self._check("replace_community_summary")
        self.summary = summary

    # unit of work
    def commit(self):
        self._check("commit")
        self._committed = self._snapshot()
        self.commits += 1

    def rollback(self):
        users, check_ins, summary = self._committed
        self.users, self.check_ins, self.summary = dict(users), dict(check_ins), summary
        self.rollbacks += 1


@pytest.fixture()
def store():
    return FakeStore()
