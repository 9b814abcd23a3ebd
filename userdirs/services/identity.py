"""
Identity lookup: which user does a request belong to, and which users exist.

Only the single-user variant exists today (`DefaultUserProvider`); anything
implementing `IdentityProvider` can be injected into `create_app` instead.
"""
from __future__ import annotations
import logging
from typing import List, Mapping, Optional, Protocol, runtime_checkable

from starlette.requests import HTTPConnection

from userdirs.config import Settings, get_settings
from userdirs.constants import DEFAULT_USER
from userdirs.errors import UnknownUserError
from userdirs.models.user import UserProfile
from userdirs.utils.utils import get_user_directories, sanitize_handle

logger = logging.getLogger(__name__)


@runtime_checkable
class IdentityProvider(Protocol):
    async def current_handle(self, request: Optional[HTTPConnection]) -> str: ...

    async def all_handles(self) -> List[str]: ...

    async def init_storage(self) -> None: ...

    def profile_for(self, handle: str) -> UserProfile: ...


class DefaultUserProvider:
    """Every request belongs to one hardcoded user."""

    def __init__(self, profile: UserProfile = DEFAULT_USER):
        self.profile = profile

    async def current_handle(self, request: Optional[HTTPConnection]) -> str:
        return self.profile.handle

    async def all_handles(self) -> List[str]:
        return [self.profile.handle]

    async def init_storage(self) -> None:
        return None

    def profile_for(self, handle: str) -> UserProfile:
        if handle != self.profile.handle:
            raise UnknownUserError(handle)
        return self.profile


def default_user_provider(settings: Optional[Settings] = None) -> DefaultUserProvider:
    """Single-user provider for the configured default handle."""
    settings = settings or get_settings()
    handle = sanitize_handle(settings.default_handle)
    return DefaultUserProvider(DEFAULT_USER.model_copy(update={"handle": handle}))


# built on first use, from the settings current at that time
_provider: Optional[IdentityProvider] = None

def get_identity_provider() -> IdentityProvider:
    global _provider
    if _provider is None:
        _provider = default_user_provider()
    return _provider

def set_identity_provider(provider: Optional[IdentityProvider]) -> None:
    """Install `provider` process-wide; None goes back to the settings default."""
    global _provider
    if provider is not None:
        logger.info("Identity provider set to %s", type(provider).__name__)
    _provider = provider

# ============================================================================
# Module-level shortcuts (process default provider)
# ============================================================================
async def init_user_storage() -> None:
    await get_identity_provider().init_storage()

async def get_current_user_handle(request: Optional[HTTPConnection] = None) -> str:
    return await get_identity_provider().current_handle(request)

async def get_all_user_handles() -> List[str]:
    return await get_identity_provider().all_handles()

async def get_current_user_directories(request: Optional[HTTPConnection] = None,
                                       provider: Optional[IdentityProvider] = None,
                                       data_root: Optional[str] = None) -> Mapping[str, str]:
    provider = provider or get_identity_provider()
    handle = await provider.current_handle(request)
    return get_user_directories(handle, data_root)
