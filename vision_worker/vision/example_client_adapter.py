"""Example vision client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseVisionClient and register the provider in VisionClientFactory.
"""

from typing import ClassVar

from vision_worker.processor.models import ImageRef
from vision_worker.vision.base import BaseVisionClient
from vision_worker.vision.models import (
    FaceAnnotation,
    FaceResponse,
    LabelResponse,
    Likelihood,
    SafetyResponse,
    TextResponse,
)


class ExampleVisionAdapter(BaseVisionClient):
    """Example adapter that returns fixed detections for every image.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    DEFAULT_TEXT: ClassVar[str] = "example text"
    DEFAULT_LABELS: ClassVar[tuple[str, ...]] = ("example", "image")

    def detect_text(self, image: ImageRef) -> TextResponse:
        _ = image
        return TextResponse(full_text=self.DEFAULT_TEXT)

    def detect_safety(self, image: ImageRef) -> SafetyResponse:
        _ = image
        return SafetyResponse(
            adult=Likelihood.VERY_UNLIKELY,
            spoof=Likelihood.VERY_UNLIKELY,
            medical=Likelihood.VERY_UNLIKELY,
            violence=Likelihood.VERY_UNLIKELY,
        )

    def detect_labels(self, image: ImageRef) -> LabelResponse:
        _ = image
        return LabelResponse(descriptions=list(self.DEFAULT_LABELS))

    def detect_faces(self, image: ImageRef) -> FaceResponse:
        _ = image
        return FaceResponse(faces=[])
