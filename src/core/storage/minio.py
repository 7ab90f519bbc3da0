import json
import logging
import os
from typing import Dict, Any, List, Optional
import obstore as obs
from obstore.store import S3Store

from src.core.storage.interface import StorageInterface

logger = logging.getLogger(__name__)


class MinioCloudStorage(StorageInterface):
    """Storage implementation for any S3-compatible storage using obstore S3Store"""

    def __init__(
        self,
        bucket_name: str,
        endpoint: str = "storage.googleapis.com",
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        region: str = "auto",
        secure: bool = True,
        base_url: Optional[str] = None,
    ):
        """
        Initialize S3-compatible storage client

        Args:
            bucket_name: Name of the S3 bucket
            endpoint: S3-compatible service endpoint (default: storage.googleapis.com for GCS)
            access_key: Access key (will use environment variables if not provided)
            secret_key: Secret key (will use environment variables if not provided)
            region: S3 region (default: "auto")
            secure: Use HTTPS if True (default: True)
            base_url: Base URL for public access (default: {endpoint}/{bucket_name})
        """
        self._bucket_name = bucket_name

        self._access_key = access_key or os.environ.get("S3_ACCESS_KEY_ID")
        self._secret_key = secret_key or os.environ.get("S3_SECRET_ACCESS_KEY")

        if not self._access_key or not self._secret_key:
            raise ValueError(
                "Access key and secret key must be provided either as arguments or through environment variables"
            )

        client_options = {}
        if not secure:
            client_options["allow_http"] = True

        self._store = S3Store(
            bucket_name,
            endpoint=f"{'https' if secure else 'http'}://{endpoint}",
            access_key_id=self._access_key,
            secret_access_key=self._secret_key,
            region=region,
            virtual_hosted_style_request=False,
            client_options=client_options,
        )

        self._base_url = base_url or f"{endpoint}/{bucket_name}"

    @property
    def bucket_name(self) -> str:
        """Get the bucket name"""
        return self._bucket_name

    async def save_bytes(self, data: bytes, path: str) -> str:
        """Save binary data to S3 bucket"""
        await obs.put_async(self._store, path, data)
        return self.get_url(path)

    async def get_bytes(self, path: str) -> bytes:
        """Get binary data from S3 bucket"""
        try:
            result = await obs.get_async(self._store, path)
        except FileNotFoundError as e:
            raise FileNotFoundError(f"Object not found in bucket {self._bucket_name}: {path}") from e
        return bytes(await result.bytes_async())

    async def save_json(self, data: Dict[str, Any], path: str) -> str:
        """Save JSON data to S3 bucket"""
        json_str = json.dumps(data)
        return await self.save_bytes(json_str.encode("utf-8"), path)

    async def get_json(self, path: str) -> Dict[str, Any]:
        """Get JSON data from S3 bucket"""
        data = await self.get_bytes(path)
        return json.loads(data.decode("utf-8"))

    async def list_files(self, prefix: str) -> List[str]:
        """List files in S3 bucket with given prefix"""
        objects = self._store.list(prefix=prefix)
        return [obj["path"] for obj in await objects.collect_async()]

    async def delete(self, path: str) -> None:
        """Delete an object from the S3 bucket"""
        # S3 deletes are idempotent, so check existence first
        try:
            await obs.head_async(self._store, path)
        except FileNotFoundError as e:
            raise FileNotFoundError(f"Object not found in bucket {self._bucket_name}: {path}") from e
        await obs.delete_async(self._store, path)
        logger.debug(f"Deleted {path} from bucket {self._bucket_name}")

    def get_url(self, path: str) -> str:
        """Get public URL for an S3 object"""
        return f"{self._base_url}/{path}"
