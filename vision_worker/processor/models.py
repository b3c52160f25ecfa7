from dataclasses import dataclass, field

from vision_worker.vision.models import Likelihood


@dataclass(frozen=True)
class ImageRef:
    """Location of a single image in object storage."""

    bucket: str
    name: str

    @property
    def uri(self) -> str:
        return f"gs://{self.bucket}/{self.name}"


@dataclass(frozen=True)
class FaceSignal:
    """Emotion likelihoods recorded for one face."""

    joy: Likelihood | None = None
    anger: Likelihood | None = None
    sorrow: Likelihood | None = None
    surprise: Likelihood | None = None


@dataclass(frozen=True)
class DocumentResult:
    """Aggregated analysis record for one image.

    failed_stages names the analysis stages that raised for this image, so an
    empty ``labels`` list can be told apart from a failed label detection.
    """

    filename: str
    text: str | None = None
    labels: list[str] = field(default_factory=list)
    faces: list[FaceSignal] = field(default_factory=list)
    adult: Likelihood | None = None
    spoof: Likelihood | None = None
    medical: Likelihood | None = None
    violence: Likelihood | None = None
    failed_stages: list[str] = field(default_factory=list)
