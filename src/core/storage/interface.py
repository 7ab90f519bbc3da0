from abc import ABC, abstractmethod
from typing import Dict, Any, List


class StorageInterface(ABC):
    """Abstract interface for all storage operations"""

    @abstractmethod
    async def save_bytes(self, data: bytes, path: str) -> str:
        """
        Save binary data to storage and return access URL

        Args:
            data: Binary data to save
            path: Storage path (e.g., "commands/1.json")

        Returns:
            URL to access the saved data
        """
        pass

    @abstractmethod
    async def get_bytes(self, path: str) -> bytes:
        """
        Get binary data from storage

        Args:
            path: Storage path to retrieve

        Returns:
            Binary data

        Raises:
            FileNotFoundError: If nothing is stored at path
        """
        pass

    @abstractmethod
    async def save_json(self, data: Dict[str, Any], path: str) -> str:
        """
        Save JSON data to storage and return access URL

        Args:
            data: JSON data to save
            path: Storage path (e.g., "commands/1.json")

        Returns:
            URL to access the saved JSON
        """
        pass

    @abstractmethod
    async def get_json(self, path: str) -> Dict[str, Any]:
        """
        Get JSON data from storage

        Args:
            path: Storage path to retrieve

        Returns:
            JSON data as dictionary
        """
        pass

    @abstractmethod
    async def list_files(self, prefix: str) -> List[str]:
        """
        List files in storage with given prefix

        Args:
            prefix: Path prefix to list

        Returns:
            List of file paths
        """
        pass

    @abstractmethod
    async def delete(self, path: str) -> None:
        """
        Delete a stored object

        Args:
            path: Storage path to remove

        Raises:
            FileNotFoundError: If nothing is stored at path
        """
        pass

    @abstractmethod
    def get_url(self, path: str) -> str:
        """
        Get public URL for a stored object

        Args:
            path: Storage path

        Returns:
            Public URL for accessing the object
        """
        pass
