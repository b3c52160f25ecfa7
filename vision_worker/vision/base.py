from abc import ABC, abstractmethod

from vision_worker.processor.models import ImageRef
from vision_worker.vision.models import FaceResponse, LabelResponse, SafetyResponse, TextResponse


class BaseVisionClient(ABC):
    """Contract for all vision analysis adapters.

    Each method performs exactly one call to the analysis service and raises
    VisionAnalysisError (or a subclass) on any failure.
    """

    @abstractmethod
    def detect_text(self, image: ImageRef) -> TextResponse:
        """Run OCR on the image and return its full-text annotation."""

    @abstractmethod
    def detect_safety(self, image: ImageRef) -> SafetyResponse:
        """Return adult/spoof/medical/violence likelihoods."""

    @abstractmethod
    def detect_labels(self, image: ImageRef) -> LabelResponse:
        """Return label descriptions in detection order."""

    @abstractmethod
    def detect_faces(self, image: ImageRef) -> FaceResponse:
        """Return emotion likelihoods for every detected face."""
