"""Dependency Providers — wire RecordService and its collaborators per request.

Invariants:
    - One RecordService (and one repository) per request, bound to that request's AsyncSession
    - The fault decision is built once per process from settings (seeded RNG)
    - Every provider is overridable via app.dependency_overrides (tests)

Design Decisions:
    - lru_cache on get_fault_decision: a seeded generator must be shared across
      requests, otherwise every request would replay the same draws
"""

import random
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from person_registry.config import Settings, get_settings
from person_registry.infrastructure.database import get_db
from person_registry.infrastructure.retry_executor import (
    FaultDecision, RetryExecutor, random_faults,
)
from person_registry.services.person_repository import SqlPersonRepository
from person_registry.services.record_service import RecordService


@lru_cache
def get_fault_decision() -> FaultDecision:
    settings = get_settings()
    return random_faults(
        settings.fault_injection_probability,
        random.Random(settings.fault_injection_seed),
    )


def get_retry_executor(
    settings: Settings = Depends(get_settings),
) -> RetryExecutor:
    return RetryExecutor(
        max_retries=settings.retry_max_retries,
        backoff_base_seconds=settings.retry_backoff_base_seconds,
    )


def get_record_service(
    db: AsyncSession = Depends(get_db),
    retry_executor: RetryExecutor = Depends(get_retry_executor),
    fault_decision: FaultDecision = Depends(get_fault_decision),
) -> RecordService:
    return RecordService(
        SqlPersonRepository(db), retry_executor, fault_decision,
    )
