from collections.abc import Callable
from typing import Any

from google.api_core import exceptions as google_exceptions
from google.cloud import vision

from vision_worker.logging.logger import Log
from vision_worker.processor.models import ImageRef
from vision_worker.vision.base import BaseVisionClient
from vision_worker.vision.exceptions import VisionAnalysisError, VisionNetworkError
from vision_worker.vision.models import (
    FaceAnnotation,
    FaceResponse,
    LabelResponse,
    Likelihood,
    SafetyResponse,
    TextResponse,
)


class GoogleVisionAdapter(BaseVisionClient):
    """Vision client adapter built on the Cloud Vision ImageAnnotatorClient."""

    def __init__(
        self,
        *,
        timeout_seconds: int,
        client: vision.ImageAnnotatorClient | None = None,
    ) -> None:
        self._client = client if client is not None else vision.ImageAnnotatorClient()
        self._timeout_seconds = timeout_seconds

    def detect_text(self, image: ImageRef) -> TextResponse:
        response = self._annotate(self._client.text_detection, image)
        text = response.full_text_annotation.text
        return TextResponse(full_text=text or None)

    def detect_safety(self, image: ImageRef) -> SafetyResponse:
        response = self._annotate(self._client.safe_search_detection, image)
        annotation = response.safe_search_annotation
        return SafetyResponse(
            adult=_likelihood(annotation.adult),
            spoof=_likelihood(annotation.spoof),
            medical=_likelihood(annotation.medical),
            violence=_likelihood(annotation.violence),
        )

    def detect_labels(self, image: ImageRef) -> LabelResponse:
        response = self._annotate(self._client.label_detection, image)
        return LabelResponse(
            descriptions=[label.description for label in response.label_annotations]
        )

    def detect_faces(self, image: ImageRef) -> FaceResponse:
        response = self._annotate(self._client.face_detection, image)
        faces = [
            FaceAnnotation(
                joy=_likelihood(face.joy_likelihood),
                anger=_likelihood(face.anger_likelihood),
                sorrow=_likelihood(face.sorrow_likelihood),
                surprise=_likelihood(face.surprise_likelihood),
            )
            for face in response.face_annotations
        ]
        return FaceResponse(faces=faces)

    def _annotate(self, detect: Callable[..., Any], image: ImageRef) -> Any:
        request_image = vision.Image(source=vision.ImageSource(image_uri=image.uri))
        try:
            response = detect(image=request_image, timeout=self._timeout_seconds)
        except (google_exceptions.GoogleAPICallError, google_exceptions.RetryError) as exc:
            raise VisionNetworkError(f"Vision API call failed for {image.uri}: {exc}") from exc

        if response.error.message:
            raise VisionAnalysisError(
                f"Vision API error for {image.uri}: {response.error.message}"
            )
        Log.debug(f"Vision response for {image.uri}:\n{response}")
        return response


def _likelihood(value: object) -> Likelihood | None:
    try:
        return Likelihood.parse(vision.Likelihood(value).name)
    except (TypeError, ValueError):
        return None
