from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from userdirs.config import Settings
from userdirs.main import create_app


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_root=str(tmp_path / "data"), create_directories=True)


@pytest.fixture
def user_root(settings: Settings) -> Path:
    return Path(settings.data_root) / settings.default_handle


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as c:
        yield c
