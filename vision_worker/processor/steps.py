import asyncio

from vision_worker.logging.logger import Log
from vision_worker.processor.aggregator import merge_faces, merge_labels, merge_safety, merge_text
from vision_worker.processor.payload import encode_payload
from vision_worker.processor.pipeline import PipelineContext, PipelineStep
from vision_worker.publishing.base import BasePublisher
from vision_worker.vision.base import BaseVisionClient


class TextDetectionStep(PipelineStep):
    name = "text"
    recoverable = True

    def __init__(self, vision_client: BaseVisionClient) -> None:
        self._vision_client = vision_client

    async def run(self, context: PipelineContext) -> PipelineContext:
        response = await asyncio.to_thread(self._vision_client.detect_text, context.image)
        context.document = merge_text(context.document, response)
        Log.info(
            f"Text detection for {context.image.uri}: "
            f"{len(context.document.text or '')} chars"
        )
        return context


class SafetyDetectionStep(PipelineStep):
    name = "safety"
    recoverable = True

    def __init__(self, vision_client: BaseVisionClient) -> None:
        self._vision_client = vision_client

    async def run(self, context: PipelineContext) -> PipelineContext:
        response = await asyncio.to_thread(self._vision_client.detect_safety, context.image)
        context.document = merge_safety(context.document, response)
        doc = context.document
        Log.info(
            f"Safety detection for {context.image.uri}: adult={_name(doc.adult)} "
            f"spoof={_name(doc.spoof)} medical={_name(doc.medical)} "
            f"violence={_name(doc.violence)}"
        )
        return context


class LabelDetectionStep(PipelineStep):
    name = "labels"
    recoverable = True

    def __init__(self, vision_client: BaseVisionClient) -> None:
        self._vision_client = vision_client

    async def run(self, context: PipelineContext) -> PipelineContext:
        response = await asyncio.to_thread(self._vision_client.detect_labels, context.image)
        context.document = merge_labels(context.document, response)
        Log.info(f"Label detection for {context.image.uri}: {len(context.document.labels)} labels")
        return context


class FaceDetectionStep(PipelineStep):
    name = "faces"
    recoverable = True

    def __init__(self, vision_client: BaseVisionClient) -> None:
        self._vision_client = vision_client

    async def run(self, context: PipelineContext) -> PipelineContext:
        response = await asyncio.to_thread(self._vision_client.detect_faces, context.image)
        context.document = merge_faces(context.document, response)
        Log.info(f"Face detection for {context.image.uri}: {len(context.document.faces)} faces")
        return context


class PublishStep(PipelineStep):
    name = "publish"

    def __init__(self, publisher: BasePublisher, topic: str) -> None:
        self._publisher = publisher
        self._topic = topic

    async def run(self, context: PipelineContext) -> PipelineContext:
        data = encode_payload(context.document)
        Log.debug(f"Publishing payload for {context.image.uri}: {data!r}")
        context.message_id = await asyncio.to_thread(self._publisher.publish, self._topic, data)
        Log.info(
            f"Published result for {context.image.uri} to topic '{self._topic}'",
            message_id=context.message_id,
        )
        return context


def _name(value: object) -> str:
    return getattr(value, "value", None) or "undefined"
