# lockerhub/utils/clock.py
"""Single time source for every timestamp the engine writes (naive UTC)."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
