from __future__ import annotations
from types import MappingProxyType
from typing import Mapping

from userdirs.models.user import UserProfile

# ============================================================================
# Layout  <data_root>/<handle>/...
#   every fragment ends with "/" so resolved directories do too
# ============================================================================
USER_DIRECTORY_TEMPLATE: Mapping[str, str] = MappingProxyType({
    "root": "",
    "thumbnails": "thumbnails/",
    "thumbnailsBg": "thumbnails/bg/",
    "thumbnailsAvatar": "thumbnails/avatar/",
    "worlds": "worlds/",
    "user": "user/",
    "avatars": "User Avatars/",
    "userImages": "user/images/",
    "groups": "groups/",
    "groupChats": "group chats/",
    "chats": "chats/",
    "characters": "characters/",
    "backgrounds": "backgrounds/",
    "novelAI_Settings": "NovelAI Settings/",
    "koboldAI_Settings": "KoboldAI Settings/",
    "openAI_Settings": "OpenAI Settings/",
    "textGen_Settings": "TextGen Settings/",
    "themes": "themes/",
    "movingUI": "movingUI/",
    "extensions": "extensions/",
    "instruct": "instruct/",
    "context": "context/",
    "quickreplies": "QuickReplies/",
    "assets": "assets/",
    "comfyWorkflows": "user/workflows/",
    "files": "user/files/",
    "vectors": "vectors/",
})

DEFAULT_USER = UserProfile(
    uuid="00000000-0000-0000-0000-000000000000",
    handle="default-user",
    name="User",
    created=0,
    password="",
)
