import pytest

from vision_worker.processor.models import DocumentResult, FaceSignal, ImageRef
from vision_worker.vision.models import (
    FaceAnnotation,
    FaceResponse,
    LabelResponse,
    Likelihood,
    SafetyResponse,
    TextResponse,
)


@pytest.fixture()
def image() -> ImageRef:
    return ImageRef(bucket="b", name="img1.png")


@pytest.fixture()
def text_response() -> TextResponse:
    return TextResponse(full_text="hello")


@pytest.fixture()
def safety_response() -> SafetyResponse:
    return SafetyResponse(
        adult=Likelihood.UNLIKELY,
        spoof=Likelihood.VERY_UNLIKELY,
        medical=Likelihood.POSSIBLE,
        violence=Likelihood.UNKNOWN,
    )


@pytest.fixture()
def label_response() -> LabelResponse:
    return LabelResponse(descriptions=["cat", "outdoor"])


@pytest.fixture()
def face_response() -> FaceResponse:
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
def full_document() -> DocumentResult:
    """A fully populated result for img1.png."""
    return DocumentResult(
        filename="img1.png",
        text="hello",
        labels=["cat", "outdoor"],
        faces=[
            FaceSignal(
                joy=Likelihood.LIKELY,
                anger=Likelihood.VERY_UNLIKELY,
                sorrow=Likelihood.VERY_UNLIKELY,
                surprise=Likelihood.UNLIKELY,
            )
        ],
        adult=Likelihood.UNLIKELY,
        spoof=Likelihood.VERY_UNLIKELY,
        medical=Likelihood.POSSIBLE,
        violence=Likelihood.UNKNOWN,
    )
