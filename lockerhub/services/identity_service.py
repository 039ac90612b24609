# lockerhub/services/identity_service.py
"""
Identity verification collaborator used at pickup.

The engine only needs a yes/no answer. The default verifier is a stub that
returns FACE_VERIFICATION_STUB_RESULT; a real biometric check can be
passed to pickup() as any async callable with the same signature.
"""

from typing import Awaitable, Callable

from lockerhub.config import settings
from lockerhub.schemas.package import PackageOut
from lockerhub.utils.logger import get_logger

logger = get_logger(__name__)

IdentityVerifier = Callable[[str, PackageOut], Awaitable[bool]]


async def stub_verifier(user_id: str, package: PackageOut) -> bool:
    result = settings.FACE_VERIFICATION_STUB_RESULT
    logger.debug(f"[Identity] stub verification for user={user_id} package={package.id}: {result}")
    return result
