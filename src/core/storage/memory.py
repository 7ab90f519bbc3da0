import json
import time
from typing import Dict, Any, List
from src.core.storage.interface import StorageInterface
import obstore as obs
from obstore.store import MemoryStore


class MemoryStorage(StorageInterface):
    """
    In-memory implementation of StorageInterface, used for local runs and tests
    (or environments where no bucket is available)
    """

    def __init__(self, base_url: str = "memory://"):
        """
        Initialize in-memory storage

        Args:
            base_url: Base URL prefix for virtual URLs
        """
        self._store = MemoryStore()
        self._base_url: str = base_url
        self._metadata: Dict[str, Dict[str, Any]] = {}

    async def save_bytes(self, data: bytes, path: str) -> str:
        """Save binary data to in-memory storage"""
        await obs.put_async(self._store, path, data)
        self._metadata[path] = {"timestamp": time.time(), "size": len(data)}
        return self.get_url(path)

    async def get_bytes(self, path: str) -> bytes:
        """Get binary data from in-memory storage"""
        try:
            result = await obs.get_async(self._store, path)
            return bytes(await result.bytes_async())
        except Exception:
            raise FileNotFoundError(f"Path not found in memory storage: {path}")

    async def save_json(self, data: Dict[str, Any], path: str) -> str:
        """Save JSON data to in-memory storage"""
        json_str = json.dumps(data)
        return await self.save_bytes(json_str.encode("utf-8"), path)

    async def get_json(self, path: str) -> Dict[str, Any]:
        """Get JSON data from in-memory storage"""
        data = await self.get_bytes(path)
        return json.loads(data.decode("utf-8"))

    async def list_files(self, prefix: str) -> List[str]:
        """List files in in-memory storage with given prefix"""
        objects = self._store.list(prefix=prefix)
        return [obj["path"] for obj in await objects.collect_async()]

    async def delete(self, path: str) -> None:
        """Remove an object from in-memory storage"""
        if path not in self._metadata:
            raise FileNotFoundError(f"Path not found in memory storage: {path}")
        await obs.delete_async(self._store, path)
        del self._metadata[path]

    def get_url(self, path: str) -> str:
        """Get URL for a stored object (virtual URL for in-memory storage)"""
        return f"{self._base_url}/{path}"
