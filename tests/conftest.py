import pytest

from src.media.uploads import UploadLifecycleManager
from tests.fakes import FakeTextClient, FakeVisionClient


@pytest.fixture
def text_client():
    return FakeTextClient()


@pytest.fixture
def vision_client():
    return FakeVisionClient()


@pytest.fixture
def uploads(tmp_path):
    return UploadLifecycleManager(tmp_path / "uploads")
