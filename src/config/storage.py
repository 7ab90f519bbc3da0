import logging
import os
from typing import Optional

from src.core.repository.interface import CommandRepository
from src.core.repository.memory import InMemoryCommandRepository
from src.core.repository.storage import StorageCommandRepository
from src.core.storage.interface import StorageInterface
from src.core.storage.memory import MemoryStorage
from src.core.storage.minio import MinioCloudStorage
from src.config.constants import (
    DEFAULT_BUCKET_NAME,
    DEFAULT_REPOSITORY_TYPE,
    DEFAULT_S3_ENDPOINT,
    DEFAULT_STORAGE_TYPE,
    MEMORY_STORAGE_BASE_URL,
)

logger = logging.getLogger(__name__)

# Process-wide storage provider, created on first use
_storage_provider: Optional[StorageInterface] = None

# Process-wide repository when COMMAND_REPOSITORY_TYPE=memory
_memory_repository: Optional[InMemoryCommandRepository] = None


def create_storage(storage_type: Optional[str] = None) -> StorageInterface:
    """
    Build a storage provider from environment configuration

    Args:
        storage_type: 'memory' or 'minio'. Defaults to COMMAND_STORAGE_TYPE.

    Returns:
        StorageInterface implementation
    """
    storage_type = (
        storage_type or os.environ.get("COMMAND_STORAGE_TYPE", DEFAULT_STORAGE_TYPE)
    ).lower()

    if storage_type == "memory":
        return MemoryStorage(base_url=MEMORY_STORAGE_BASE_URL)

    if storage_type == "minio":
        bucket_name = os.environ.get("S3_BUCKET", DEFAULT_BUCKET_NAME)
        endpoint = os.environ.get("S3_ENDPOINT", DEFAULT_S3_ENDPOINT)
        secure = os.environ.get("S3_SECURE", "True").lower() == "true"
        protocol = "https" if secure else "http"
        return MinioCloudStorage(
            bucket_name=bucket_name,
            endpoint=endpoint,
            access_key=os.environ.get("S3_ACCESS_KEY_ID"),
            secret_key=os.environ.get("S3_SECRET_ACCESS_KEY"),
            secure=secure,
            base_url=f"{protocol}://{endpoint}/{bucket_name}",
        )

    raise ValueError(f"Unknown storage type: {storage_type}")


def get_command_storage() -> StorageInterface:
    """Get the storage provider that holds command documents"""
    global _storage_provider
    if _storage_provider is None:
        _storage_provider = create_storage()
        logger.info(f"Command storage initialized: {type(_storage_provider).__name__}")
    return _storage_provider


def create_command_repository(
    storage: StorageInterface, repository_type: Optional[str] = None
) -> CommandRepository:
    """
    Build the repository for one request

    Args:
        storage: Storage provider used by the 'storage' repository
        repository_type: 'storage' or 'memory'. Defaults to COMMAND_REPOSITORY_TYPE.

    Returns:
        A fresh StorageCommandRepository over storage, or the process-wide
        InMemoryCommandRepository
    """
    global _memory_repository
    repository_type = (
        repository_type
        or os.environ.get("COMMAND_REPOSITORY_TYPE", DEFAULT_REPOSITORY_TYPE)
    ).lower()

    if repository_type == "storage":
        return StorageCommandRepository(storage)

    if repository_type == "memory":
        if _memory_repository is None:
            _memory_repository = InMemoryCommandRepository()
            logger.info("Using process-local in-memory command repository")
        return _memory_repository

    raise ValueError(f"Unknown repository type: {repository_type}")
