import base64
from collections.abc import Callable

import pytest

from vision_worker.config.settings import Settings
from vision_worker.processor.models import ImageRef
from vision_worker.processor.processor import build_processor
from vision_worker.publishing.base import BasePublisher
from vision_worker.storage.base import BaseImageSource, BaseResultStore
from vision_worker.vision.base import BaseVisionClient
from vision_worker.vision.models import (
    FaceAnnotation,
    FaceResponse,
    LabelResponse,
    Likelihood,
    SafetyResponse,
    TextResponse,
)
from vision_worker.worker.batch_driver import BatchDriver
from vision_worker.worker.job_runner import ImageJobRunner


class RecordingPublisher(BasePublisher):
    """In-memory topic: keeps every published message body."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, bytes]] = []

    def publish(self, topic: str, data: bytes) -> str:
        self.messages.append((topic, data))
        return str(len(self.messages))

    def delivered(self) -> list[str]:
        """Message bodies as a Pub/Sub push subscriber receives them (base64)."""
        return [base64.b64encode(data).decode("ascii") for _topic, data in self.messages]


class InMemoryResultStore(BaseResultStore):
    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], str] = {}

    def save(self, bucket: str, name: str, content: str) -> None:
        self.objects[(bucket, name)] = content


class StaticImageSource(BaseImageSource):
    def __init__(self, names: list[str]) -> None:
        self._names = names

    def list_images(self, bucket: str) -> list[ImageRef]:
        return [ImageRef(bucket=bucket, name=name) for name in self._names]


class ScriptedVisionClient(BaseVisionClient):
    """Returns the same detections for every image and counts calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.failing: set[str] = set()

    def _record(self, method: str, image: ImageRef) -> None:
        self.calls.append((method, image.name))
        if method in self.failing:
            raise RuntimeError(f"{method} unavailable")

    def detect_text(self, image: ImageRef) -> TextResponse:
        self._record("text", image)
        return TextResponse(full_text="hello")

    def detect_safety(self, image: ImageRef) -> SafetyResponse:
        self._record("safety", image)
        return SafetyResponse(
            adult=Likelihood.UNLIKELY,
            spoof=Likelihood.VERY_UNLIKELY,
            medical=Likelihood.VERY_UNLIKELY,
            violence=Likelihood.UNLIKELY,
        )

    def detect_labels(self, image: ImageRef) -> LabelResponse:
        self._record("labels", image)
        return LabelResponse(descriptions=["cat", "outdoor"])

    def detect_faces(self, image: ImageRef) -> FaceResponse:
        self._record("faces", image)
        return FaceResponse(
            faces=[
                FaceAnnotation(
                    joy=Likelihood.LIKELY,
                    anger=Likelihood.VERY_UNLIKELY,
                    sorrow=Likelihood.VERY_UNLIKELY,
                    surprise=Likelihood.UNLIKELY,
                )
            ]
        )


@pytest.fixture()
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture()
def result_store() -> InMemoryResultStore:
    return InMemoryResultStore()


@pytest.fixture()
def vision_client() -> ScriptedVisionClient:
    return ScriptedVisionClient()


@pytest.fixture()
def make_driver(publisher: RecordingPublisher) -> Callable[..., BatchDriver]:
    """Wire a real BatchDriver around the in-memory collaborators."""

    def _make(
        settings: Settings,
        vision: BaseVisionClient,
        names: list[str] | None = None,
    ) -> BatchDriver:
        processor = build_processor(settings, vision, publisher)
        return BatchDriver(
            processor=processor,
            job_runner=ImageJobRunner(processor),
            image_source=StaticImageSource(names or []),
            settings=settings,
        )

    return _make
