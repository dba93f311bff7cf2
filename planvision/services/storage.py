"""
Google Cloud Storage wrapper for uploads and URL signing.
"""
import os
import time
import logging
from datetime import timedelta
from typing import Optional
from google.cloud import storage

logger = logging.getLogger(__name__)


class StorageService:
    """Uploads objects to one bucket and translates between URLs and object names."""

    def __init__(
        self,
        bucket_name: Optional[str] = None,
        project_id: Optional[str] = None,
        public_domain: Optional[str] = None,
        client: Optional[storage.Client] = None,
    ):
        self.bucket_name = bucket_name or os.getenv("GCS_BUCKET")
        if not self.bucket_name:
            raise ValueError("GCS_BUCKET is required")

        self.project_id = project_id or os.getenv("GCP_PROJECT_ID")
        if not self.project_id:
            raise ValueError("GCP_PROJECT_ID is required")

        # Uses application default credentials when no client is given
        self.client = client or storage.Client(project=self.project_id)

        custom_domain = public_domain if public_domain is not None else os.getenv("GCS_PUBLIC_DOMAIN")
        if custom_domain:
            self.public_url_prefix = custom_domain.rstrip("/") + "/"
        else:
            self.public_url_prefix = f"https://storage.googleapis.com/{self.bucket_name}/"

    def _bucket(self):
        return self.client.bucket(self.bucket_name)

    def upload_file(
        self,
        filename: str,
        data: bytes,
        content_type: str,
        destination: Optional[str] = None,
    ) -> str:
        """
        Upload an uploaded file's bytes.

        Returns:
            Object name inside the bucket
        """
        object_name = destination or f"{int(time.time() * 1000)}-{filename}"
        blob = self._bucket().blob(object_name)
        blob.upload_from_string(data, content_type=content_type)
        logger.info(f"✅ Uploaded {len(data)} bytes to gs://{self.bucket_name}/{object_name}")
        return object_name

    def upload_buffer(self, data: bytes, destination: str, content_type: str) -> str:
        """Upload raw bytes and return their public URL."""
        blob = self._bucket().blob(destination)
        blob.upload_from_string(data, content_type=content_type)
        logger.info(f"✅ Uploaded {len(data)} bytes to gs://{self.bucket_name}/{destination}")
        return self.get_public_url(destination)

    def get_signed_url(self, object_name: str, expires_in_seconds: int = 3600) -> str:
        blob = self._bucket().blob(object_name)
        return blob.generate_signed_url(
            version="v4",
            expiration=timedelta(seconds=expires_in_seconds),
            method="GET",
        )

    def get_public_url(self, object_name: str) -> str:
        return f"{self.public_url_prefix}{object_name}"

    def extract_object_name(self, url_or_object_name: str) -> str:
        if url_or_object_name.startswith(self.public_url_prefix):
            return url_or_object_name[len(self.public_url_prefix):]
        return url_or_object_name


_storage_service: Optional[StorageService] = None


def get_storage_service() -> StorageService:
    """Get or create the process-wide StorageService."""
    global _storage_service
    if _storage_service is None:
        _storage_service = StorageService()
    return _storage_service
