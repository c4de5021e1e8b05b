"""
Enrollment: putting a user on a plan and keeping their health score.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Union

from sugarreset.core.clock import Clock, to_local_naive
from sugarreset.core.errors import (
    InvalidHealthScoreError,
    PersistenceError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from sugarreset.models.user import PlanType
from sugarreset.services.plan_catalog import get_plan
from sugarreset.services.records import UserProfile
from sugarreset.services.store import PersistenceStore

logger = logging.getLogger(__name__)


def enroll_user(
    store: PersistenceStore,
    clock: Clock,
    user_id: str,
    plan_type: Union[PlanType, str],
    plan_started_at: Optional[datetime] = None,
) -> UserProfile:
    """Create a user on `plan_type`. The plan starts now unless a start is given."""
    plan = get_plan(plan_type)
    if store.get_user(user_id) is not None:
        raise UserAlreadyExistsError(user_id)

    profile = UserProfile(
        user_id=user_id,
        plan_type=plan.plan_type,
        plan_started_at=to_local_naive(plan_started_at or clock.now()),
        stats_updated_at=clock.now(),
    )
    try:
        store.add_user(profile)
        store.commit()
    except PersistenceError:
        store.rollback()
        raise
    logger.info("Enrolled user=%s on plan=%s", user_id, plan.plan_type.value)
    return profile


def get_profile(store: PersistenceStore, user_id: str) -> UserProfile:
    profile = store.get_user(user_id)
    if profile is None:
        raise UserNotFoundError(user_id)
    return profile


def update_health_score(
    store: PersistenceStore, clock: Clock, user_id: str, score: int
) -> UserProfile:
    if not 0 <= score <= 100:
        raise InvalidHealthScoreError(score)
    get_profile(store, user_id)
    try:
        store.set_health_score(user_id, score, clock.now())
        store.commit()
    except PersistenceError:
        store.rollback()
        raise
    return get_profile(store, user_id)
