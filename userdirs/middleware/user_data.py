"""Attaches the current user's profile and directories to every HTTP request."""
from __future__ import annotations

import logging
from typing import Optional

from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

from userdirs.models.user import UserContext
from userdirs.services.identity import IdentityProvider, get_identity_provider
from userdirs.utils.utils import get_user_directories

logger = logging.getLogger(__name__)


class UserDataMiddleware:
    """Sets request.state.user to a UserContext, then always calls through."""

    def __init__(
        self,
        app: ASGIApp,
        provider: Optional[IdentityProvider] = None,
        data_root: Optional[str] = None,
    ) -> None:
        self.app = app
        self.provider = provider
        self.data_root = data_root

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        provider = self.provider or get_identity_provider()
        conn = HTTPConnection(scope)
        handle = await provider.current_handle(conn)
        directories = get_user_directories(handle, self.data_root)
        scope.setdefault("state", {})["user"] = UserContext(
            profile=provider.profile_for(handle),
            directories=directories,
        )
        logger.debug("User %s attached to %s", handle, scope.get("path"))

        await self.app(scope, receive, send)
