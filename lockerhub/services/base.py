# lockerhub/services/base.py
"""
Shared plumbing for every engine operation.

Each operation is an async unit of work: it may suspend first (simulated
backend latency), then does its whole read-check-write inside one store
transaction, and finally returns an ApiResponse envelope. Business-rule
violations (LockerHubError) become failure envelopes; anything else
propagates to the caller.
"""

import asyncio
import functools

from lockerhub.config import settings
from lockerhub.errors import LockerHubError, NotFoundError, ValidationFailed
from lockerhub.schemas.common import ApiResponse
from lockerhub.utils.logger import get_logger

logger = get_logger(__name__)


async def simulate_latency():
    if settings.SIMULATED_LATENCY_MS > 0:
        await asyncio.sleep(settings.SIMULATED_LATENCY_MS / 1000)


def engine_operation(func):
    """Wrap an async operation body: latency, then envelope its result or rejection."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> ApiResponse:
        await simulate_latency()
        try:
            data = await func(*args, **kwargs)
        except LockerHubError as exc:
            logger.warning(f"[{func.__name__}] rejected ({exc.code.value}): {exc.message}")
            return ApiResponse.fail(exc)
        return ApiResponse.ok(data)

    return wrapper


def load_or_raise(db, model, entity_id: str, label: str):
    """Load a row by primary key or raise NotFoundError('<label> not found')."""
    row = db.get(model, entity_id)
    if row is None:
        raise NotFoundError(f"{label} not found")
    return row


def coerce_enum(enum_cls, value, label: str):
    """Turn caller input into enum_cls or raise ValidationFailed('Invalid <label>: <value>')."""
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationFailed(f"Invalid {label}: {value}")


def snapshot(schema, rows) -> list:
    """Copy ORM rows into detached pydantic models."""
    return [schema.model_validate(r) for r in rows]
