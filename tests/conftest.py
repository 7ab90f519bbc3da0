import os
import uuid
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from src.core.repository.interface import CommandRepository
from src.core.repository.memory import InMemoryCommandRepository
from src.core.repository.storage import StorageCommandRepository
from src.core.storage.interface import StorageInterface
from src.core.storage.memory import MemoryStorage
from tests.helpers import make_commands


@pytest.fixture
def memory_storage() -> StorageInterface:
    """Fixture for memory storage"""
    return MemoryStorage(base_url="memory://test")


@pytest.fixture
def storage_repository(memory_storage: StorageInterface) -> StorageCommandRepository:
    """Fixture for a storage-backed repository over memory storage"""
    return StorageCommandRepository(memory_storage)


@pytest.fixture
def empty_repository() -> InMemoryCommandRepository:
    return InMemoryCommandRepository()


@pytest.fixture
def single_command_repository() -> InMemoryCommandRepository:
    """Repository holding exactly one command with id 1"""
    return InMemoryCommandRepository(make_commands(1))


def _client_for(repository: CommandRepository) -> Iterator[TestClient]:
    from src.app import app
    from src.routers.commands import get_command_repository

    app.dependency_overrides[get_command_repository] = lambda: repository
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def empty_client(empty_repository: InMemoryCommandRepository) -> Iterator[TestClient]:
    """Test client whose command repository is empty"""
    yield from _client_for(empty_repository)


@pytest.fixture
def client(
    single_command_repository: InMemoryCommandRepository,
) -> Iterator[TestClient]:
    """Test client whose command repository holds one command"""
    yield from _client_for(single_command_repository)


@pytest.fixture
def minio_available() -> bool:
    """Check if S3-compatible storage credentials are available for testing"""
    has_endpoint = os.environ.get("S3_ENDPOINT")
    has_access_key = os.environ.get("S3_ACCESS_KEY_ID")
    has_secret_key = os.environ.get("S3_SECRET_ACCESS_KEY")
    has_bucket = os.environ.get("S3_BUCKET")

    return all([has_endpoint, has_access_key, has_secret_key, has_bucket])


@pytest.fixture
def minio_storage(minio_available: bool) -> StorageInterface:
    """Fixture for S3-compatible storage (MinIO/GCS)"""
    if not minio_available:
        pytest.skip("S3-compatible storage credentials not available for testing")

    from src.core.storage.minio import MinioCloudStorage

    secure = (os.environ.get("S3_SECURE") or "True").lower() == "true"
    return MinioCloudStorage(
        endpoint=os.environ["S3_ENDPOINT"],
        access_key=os.environ.get("S3_ACCESS_KEY_ID"),
        secret_key=os.environ.get("S3_SECRET_ACCESS_KEY"),
        secure=secure,
        bucket_name=os.environ["S3_BUCKET"],
    )


@pytest.fixture
def unique_test_id() -> str:
    """Generate a unique test identifier for test isolation"""
    return str(uuid.uuid4())
