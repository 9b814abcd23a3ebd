from __future__ import annotations


class UserDirsError(Exception):
    """Base class for user directory errors."""


class InvalidHandleError(UserDirsError, ValueError):
    def __init__(self, handle: str):
        super().__init__(f"Invalid user handle {handle!r}: use [a-zA-Z0-9._-]")
        self.handle = handle


class UnknownUserError(UserDirsError, LookupError):
    def __init__(self, handle: str):
        super().__init__(f"Unknown user handle {handle!r}")
        self.handle = handle


class FileServeError(UserDirsError):
    """Requested path is outside the served root or is not a regular file."""


class UserContextMissingError(UserDirsError, RuntimeError):
    def __init__(self):
        super().__init__("request.state.user is not set: is UserDataMiddleware installed?")
