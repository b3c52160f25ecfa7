from dataclasses import replace

from vision_worker.config.settings import Settings
from vision_worker.logging.logger import Log
from vision_worker.processor.exceptions import EventValidationError
from vision_worker.processor.models import DocumentResult, ImageRef
from vision_worker.processor.pipeline import PipelineContext, PipelineStep
from vision_worker.processor.steps import (
    FaceDetectionStep,
    LabelDetectionStep,
    PublishStep,
    SafetyDetectionStep,
    TextDetectionStep,
)
from vision_worker.publishing.base import BasePublisher
from vision_worker.vision.base import BaseVisionClient


class ImageProcessor:
    """Runs the per-image pipeline.

    Pipeline: text -> safety -> labels -> faces -> publish.
    A failing analysis stage is logged and recorded in ``failed_stages``;
    the remaining stages still run. Publish failures propagate.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    async def process(self, image: ImageRef) -> DocumentResult:
        """Analyze one image and publish its aggregated result."""
        if not image.bucket:
            raise EventValidationError(
                'Bucket not provided. Make sure you have a "bucket" property in your request'
            )
        if not image.name:
            raise EventValidationError(
                'Filename not provided. Make sure you have a "name" property in your request'
            )

        Log.info(f"Processing image {image.uri}")
        context = PipelineContext(image=image, document=DocumentResult(filename=image.name))
        for step in self._steps:
            context = await self._run_step(step, context)
        Log.info(f"File {image.name} processed")
        return context.document

    async def _run_step(self, step: PipelineStep, context: PipelineContext) -> PipelineContext:
        document = context.document
        try:
            return await step.run(context)
        except Exception as exc:
            if not step.recoverable:
                raise
            Log.error(
                f"Stage '{step.name}' failed for {context.image.uri}: {exc}",
                image=context.image.uri,
                stage=step.name,
                cause=type(exc).__name__,
            )
            # A failed stage contributes nothing, even if it assigned a partial document.
            context.document = replace(
                document,
                failed_stages=[*document.failed_stages, step.name],
            )
            return context


def build_processor(
    settings: Settings,
    vision_client: BaseVisionClient,
    publisher: BasePublisher,
) -> ImageProcessor:
    """Build an ImageProcessor with the stages enabled in settings."""
    steps: list[PipelineStep] = [
        TextDetectionStep(vision_client),
        SafetyDetectionStep(vision_client),
    ]
    if settings.label_detection_enabled:
        steps.append(LabelDetectionStep(vision_client))
    if settings.face_detection_enabled:
        steps.append(FaceDetectionStep(vision_client))
    steps.append(PublishStep(publisher, settings.result_topic))
    return ImageProcessor(steps)
