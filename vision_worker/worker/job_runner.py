from vision_worker.logging.logger import Log
from vision_worker.processor.models import DocumentResult, ImageRef
from vision_worker.processor.processor import ImageProcessor


class ImageJobRunner:
    """Run one image of a batch and contain its failure."""

    def __init__(self, processor: ImageProcessor) -> None:
        self._processor = processor

    async def run(self, image: ImageRef) -> DocumentResult | None:
        """Process a single image. Returns None if the image failed."""
        try:
            return await self._processor.process(image)
        except Exception as exc:
            Log.exception(
                f"Image {image.uri} failed: {exc}",
                image=image.uri,
                cause=type(exc).__name__,
            )
            return None
