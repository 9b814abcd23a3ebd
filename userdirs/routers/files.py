from __future__ import annotations
import logging
import mimetypes
import os
from typing import BinaryIO, Callable, Iterator, List, Tuple

from fastapi import APIRouter, Path as FPath, Request, Response, status
from fastapi.responses import StreamingResponse

from userdirs.errors import FileServeError, UserContextMissingError
from userdirs.models.user import UserContext
from userdirs.utils.utils import resolve_file

logger = logging.getLogger(__name__)

router = APIRouter(tags=["User files"])
FILE_PATH_DOC = "File path relative to the user directory"

DirectorySelector = Callable[[UserContext], str]
CHUNK_SIZE = 64 * 1024

# (URL prefix, key in the user's directory list)
FILE_ROUTES: List[Tuple[str, str]] = [
    ("/backgrounds", "backgrounds"),
    ("/characters", "characters"),
    ("/User Avatars", "avatars"),
    ("/assets", "assets"),
    ("/user/images", "userImages"),
    ("/user/files", "files"),
    ("/scripts/extensions/third-party", "extensions"),
]

# ============================================================================
# Helpers
# ============================================================================
def get_user_context(request: Request) -> UserContext:
    user = getattr(request.state, "user", None)
    if user is None:
        raise UserContextMissingError()
    return user

def _iter_file(fp: BinaryIO) -> Iterator[bytes]:
    with fp:
        yield from iter(lambda: fp.read(CHUNK_SIZE), b"")

def directory_selector(key: str) -> DirectorySelector:
    return lambda user: user.directories[key]

def create_route_handler(selector: DirectorySelector):
    """Endpoint streaming `file_path` from the directory picked by `selector`."""
    async def serve_user_file(request: Request,
                              file_path: str = FPath(..., description=FILE_PATH_DOC)):
        user = get_user_context(request)
        try:
            root = selector(user)
            full = resolve_file(root, file_path)
            # open() errors belong to the 404 branch below
            fp = full.open("rb")
            try:
                size = os.fstat(fp.fileno()).st_size
            except OSError:
                fp.close()
                raise
        except (FileServeError, OSError, ValueError, KeyError) as exc:
            logger.error("Cannot serve %s: %s", request.url.path, exc)
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        media_type = mimetypes.guess_type(full.name)[0] or "application/octet-stream"
        return StreamingResponse(_iter_file(fp), media_type=media_type,
                                 headers={"content-length": str(size)})
    return serve_user_file

# ============================================================================
# Routes
# ============================================================================
for _prefix, _key in FILE_ROUTES:
    router.add_api_route(
        f"{_prefix}/{{file_path:path}}",
        create_route_handler(directory_selector(_key)),
        methods=["GET"],
        name=f"serve_{_key}",
        summary=f"File from the user's {_key} directory",
    )
