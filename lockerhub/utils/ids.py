# lockerhub/utils/ids.py
"""Identifier generation for entities and package tracking numbers."""

import time
import uuid


def new_id() -> str:
    """Opaque entity id. UUID4, so no collision check is needed."""
    return str(uuid.uuid4())


def new_tracking_number() -> str:
    """Human-facing tracking number, e.g. TRK1760745600000A1B2C3."""
    return f"TRK{int(time.time() * 1000)}{uuid.uuid4().hex[:6].upper()}"
