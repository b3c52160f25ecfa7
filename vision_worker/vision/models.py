from dataclasses import dataclass, field
from enum import Enum


class Likelihood(str, Enum):
    """Ordinal confidence returned for safety and face attributes."""

    UNKNOWN = "UNKNOWN"
    VERY_UNLIKELY = "VERY_UNLIKELY"
    UNLIKELY = "UNLIKELY"
    POSSIBLE = "POSSIBLE"
    LIKELY = "LIKELY"
    VERY_LIKELY = "VERY_LIKELY"

    @classmethod
    def parse(cls, raw: object) -> "Likelihood | None":
        """Map a likelihood name (or member) to the enum; anything else is None."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls[raw.upper()]
            except KeyError:
                return None
        return None


@dataclass(frozen=True)
class TextResponse:
    """Text detection output; full_text is None when nothing was read."""

    full_text: str | None = None


@dataclass(frozen=True)
class SafetyResponse:
    """Safe-search detection output."""

    adult: Likelihood | None = None
    spoof: Likelihood | None = None
    medical: Likelihood | None = None
    violence: Likelihood | None = None


@dataclass(frozen=True)
class LabelResponse:
    """Label detection output, in the order the service returned them."""

    descriptions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FaceAnnotation:
    """Emotion likelihoods for one detected face."""

    joy: Likelihood | None = None
    anger: Likelihood | None = None
    sorrow: Likelihood | None = None
    surprise: Likelihood | None = None


@dataclass(frozen=True)
class FaceResponse:
    """Face detection output, one annotation per face in detection order."""

    faces: list[FaceAnnotation] = field(default_factory=list)
