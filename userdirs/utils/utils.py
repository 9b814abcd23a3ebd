from __future__ import annotations
import os
import re
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from userdirs.config import ALLOWED_HANDLE_PATTERN, get_settings
from userdirs.constants import USER_DIRECTORY_TEMPLATE
from userdirs.errors import FileServeError, InvalidHandleError

# ============================================================================
# Handle validation
# ============================================================================
_ALLOWED_HANDLE = re.compile(ALLOWED_HANDLE_PATTERN)

def sanitize_handle(raw: str) -> str:
    if not raw or raw in (".", "..") or not _ALLOWED_HANDLE.match(raw):
        raise InvalidHandleError(raw)
    return raw

# ============================================================================
# FS helpers
# ============================================================================
def ensure_dir(p: Path) -> Path:
    p.mkdir(parents=True, exist_ok=True)
    return p

def resolve_file(root: str, relative_path: str) -> Path:
    """
    Resolve `relative_path` under `root` and make sure the result:
    - does not escape `root` (symlinks included, both sides are resolved)
    - is an existing regular file
    """
    base = Path(root).resolve()
    full = (base / relative_path).resolve()
    if not full.is_relative_to(base):
        raise FileServeError(f"{relative_path!r} escapes {root!r}")
    if not full.is_file():
        raise FileServeError(f"{relative_path!r} is not a file under {root!r}")
    return full

# ============================================================================
# Layout  <data_root>/<handle>/...
# ============================================================================
def get_user_directories(handle: str, data_root: Optional[str] = None) -> Mapping[str, str]:
    """Directories of `handle`, e.g. {"worlds": "./data/default-user/worlds/", ...}."""
    root = get_settings().data_root if data_root is None else data_root
    handle = sanitize_handle(handle)
    return MappingProxyType({
        key: os.path.join(root, handle, fragment)
        for key, fragment in USER_DIRECTORY_TEMPLATE.items()
    })

def ensure_user_directories(handle: str, data_root: Optional[str] = None) -> Mapping[str, str]:
    directories = get_user_directories(handle, data_root)
    for d in directories.values():
        ensure_dir(Path(d))
    return directories
