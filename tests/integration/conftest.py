import shutil
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.api.server import create_app
from app.api.services import Services, build_services
from app.config.settings import Settings


@pytest.fixture
def test_settings() -> Settings:
    return Settings(translation_provider="example", export_format="xlsx")


@pytest.fixture
def upload_root(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def services(test_settings: Settings, upload_root: Path) -> Services:
    return build_services(test_settings, upload_root=upload_root)


@pytest.fixture
def client(test_settings: Settings, services: Services) -> Generator[TestClient, None, None]:
    with TestClient(create_app(test_settings, services)) as test_client:
        yield test_client


@pytest.fixture
def tesseract_available() -> None:
    if shutil.which("tesseract") is None:
        pytest.skip("tesseract binary not installed")
