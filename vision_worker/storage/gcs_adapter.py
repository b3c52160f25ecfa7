from google.cloud import storage

from vision_worker.logging.logger import Log
from vision_worker.processor.models import ImageRef
from vision_worker.storage.base import BaseImageSource, BaseResultStore
from vision_worker.storage.exceptions import StorageError


class GcsImageSource(BaseImageSource):
    """Lists images in a Cloud Storage bucket.

    Only the first listing page is read; buckets larger than one page are
    expected to be driven by upload events instead.
    """

    def __init__(self, client: storage.Client | None = None) -> None:
        self._client = client if client is not None else storage.Client()

    def list_images(self, bucket: str) -> list[ImageRef]:
        try:
            pages = self._client.list_blobs(bucket).pages
            first_page = next(pages, [])
            names = [blob.name for blob in first_page]
        except Exception as exc:
            raise StorageError(f"Failed to list bucket '{bucket}': {exc}") from exc

        images = [ImageRef(bucket=bucket, name=name) for name in names if not name.endswith("/")]
        Log.info(f"Found {len(images)} images in bucket '{bucket}'")
        return images


class GcsResultStore(BaseResultStore):
    """Writes text artifacts to Cloud Storage."""

    def __init__(self, client: storage.Client | None = None) -> None:
        self._client = client if client is not None else storage.Client()

    def save(self, bucket: str, name: str, content: str) -> None:
        try:
            blob = self._client.bucket(bucket).blob(name)
            blob.upload_from_string(content, content_type="text/plain")
        except Exception as exc:
            raise StorageError(f"Failed to write gs://{bucket}/{name}: {exc}") from exc
