import asyncio

from vision_worker.config.settings import Settings
from vision_worker.logging.logger import Log
from vision_worker.processor.exceptions import EventValidationError
from vision_worker.processor.models import DocumentResult, ImageRef
from vision_worker.processor.processor import ImageProcessor
from vision_worker.storage.base import BaseImageSource
from vision_worker.worker.events import ScanRequest, UploadEvent
from vision_worker.worker.job_runner import ImageJobRunner


class BatchDriver:
    """Resolves the images a trigger refers to and dispatches them."""

    def __init__(
        self,
        processor: ImageProcessor,
        job_runner: ImageJobRunner,
        image_source: BaseImageSource,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._job_runner = job_runner
        self._image_source = image_source
        self._settings = settings

    async def handle_upload(self, event: UploadEvent) -> DocumentResult | None:
        """Process the single image named by an upload event.

        Deletion events are a no-op. Validation and publish errors propagate.
        """
        if event.is_deletion:
            Log.info(f"Skipping deletion event for {event.bucket}/{event.name}")
            return None
        return await self._processor.process(event.to_image_ref())

    async def handle_scan(self, request: ScanRequest) -> int:
        """Process every image in the requested (or configured) bucket.

        Returns the number of images dispatched. Per-image failures are logged
        by the job runner and never stop the rest of the batch.
        """
        bucket = request.image_location or self._settings.image_bucket
        if not bucket:
            raise EventValidationError("No image bucket configured or requested for scan")

        images = await asyncio.to_thread(self._image_source.list_images, bucket)
        if not images:
            Log.info(f"No images to process in bucket '{bucket}'")
            return 0

        semaphore = asyncio.Semaphore(max(1, self._settings.max_concurrent_images))

        async def run_with_limit(image: ImageRef) -> DocumentResult | None:
            async with semaphore:
                return await self._job_runner.run(image)

        results = await asyncio.gather(*(run_with_limit(image) for image in images))
        succeeded = sum(1 for result in results if result is not None)
        Log.info(f"Batch complete for bucket '{bucket}': {succeeded}/{len(images)} published")
        return len(images)
