from pathlib import Path

import pytest
from pydantic import ValidationError

from userdirs.config import Settings, get_settings
from userdirs.constants import DEFAULT_USER
from userdirs.errors import UnknownUserError
from userdirs.main import create_app
from userdirs.models.user import UserProfile
from userdirs.services.identity import (
    DefaultUserProvider,
    IdentityProvider,
    get_all_user_handles,
    get_current_user_directories,
    get_current_user_handle,
    get_identity_provider,
    init_user_storage,
    set_identity_provider,
)


class DummyRequest:
    headers = {"x-user": "mallory"}


@pytest.fixture
def restore_provider():
    previous = get_identity_provider()
    yield
    get_settings.cache_clear()
    set_identity_provider(previous)


def test_default_provider_satisfies_protocol():
    assert isinstance(DefaultUserProvider(), IdentityProvider)


@pytest.mark.asyncio
async def test_current_handle_ignores_the_request():
    provider = DefaultUserProvider()

    assert await provider.current_handle(None) == "default-user"
    assert await provider.current_handle(DummyRequest()) == "default-user"


@pytest.mark.asyncio
async def test_all_handles_is_the_default_user_only():
    assert await DefaultUserProvider().all_handles() == ["default-user"]


@pytest.mark.asyncio
async def test_init_storage_is_a_noop():
    assert await DefaultUserProvider().init_storage() is None


def test_profile_lookup():
    provider = DefaultUserProvider()

    assert provider.profile_for("default-user") is DEFAULT_USER
    with pytest.raises(UnknownUserError):
        provider.profile_for("someone-else")


def test_default_user_profile_is_frozen():
    assert DEFAULT_USER.uuid == "00000000-0000-0000-0000-000000000000"
    assert DEFAULT_USER.name == "User"
    with pytest.raises(ValidationError):
        DEFAULT_USER.handle = "other"


@pytest.mark.asyncio
async def test_module_shortcuts_use_the_default_provider():
    await init_user_storage()

    assert await get_current_user_handle(DummyRequest()) == "default-user"
    assert await get_all_user_handles() == ["default-user"]
    directories = await get_current_user_directories(DummyRequest(), data_root="./data")
    assert directories["characters"] == "./data/default-user/characters/"


@pytest.mark.asyncio
async def test_injected_provider_is_used(restore_provider):
    alice = UserProfile(uuid="1", handle="alice", name="Alice")
    set_identity_provider(DefaultUserProvider(alice))

    assert await get_current_user_handle() == "alice"
    assert await get_all_user_handles() == ["alice"]
    directories = await get_current_user_directories(data_root="/srv")
    assert directories["files"] == "/srv/alice/user/files/"


@pytest.mark.asyncio
async def test_shortcuts_follow_configured_default_handle(monkeypatch, restore_provider):
    monkeypatch.setenv("USERDIRS_DEFAULT_HANDLE", "bob")
    get_settings.cache_clear()
    set_identity_provider(None)

    assert await get_current_user_handle(DummyRequest()) == "bob"
    assert await get_all_user_handles() == ["bob"]
    directories = await get_current_user_directories(data_root="./data")
    assert directories["chats"] == "./data/bob/chats/"


@pytest.mark.asyncio
async def test_create_app_registers_its_provider(tmp_path: Path, restore_provider):
    create_app(Settings(data_root=str(tmp_path), default_handle="carol"))

    assert await get_current_user_handle() == "carol"
    assert await get_all_user_handles() == ["carol"]
    assert get_identity_provider().profile_for("carol").uuid == DEFAULT_USER.uuid
