from abc import ABC, abstractmethod

from vision_worker.processor.models import ImageRef


class BaseImageSource(ABC):
    """Contract for adapters that enumerate candidate images."""

    @abstractmethod
    def list_images(self, bucket: str) -> list[ImageRef]:
        """List images currently stored in ``bucket``.

        Raises:
            StorageError: if the bucket cannot be listed.
        """


class BaseResultStore(ABC):
    """Contract for adapters that persist result artifacts."""

    @abstractmethod
    def save(self, bucket: str, name: str, content: str) -> None:
        """Write ``content`` as a text object ``name`` in ``bucket``.

        Raises:
            StorageError: if the object cannot be written.
        """
