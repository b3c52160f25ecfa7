"""Merge functions folding each vision response into a DocumentResult.

Every function is total: a missing, empty or malformed response returns the
document unchanged, and the input document is never mutated.
"""

from dataclasses import replace

from vision_worker.processor.models import DocumentResult, FaceSignal
from vision_worker.vision.models import (
    FaceAnnotation,
    FaceResponse,
    LabelResponse,
    Likelihood,
    SafetyResponse,
    TextResponse,
)


def merge_text(doc: DocumentResult, response: TextResponse | None) -> DocumentResult:
    """Set ``text`` from the full-text annotation, if one was returned."""
    if not isinstance(response, TextResponse) or response.full_text is None:
        return doc
    return replace(doc, text=response.full_text)


def merge_safety(doc: DocumentResult, response: SafetyResponse | None) -> DocumentResult:
    """Copy the four safe-search ratings verbatim."""
    if not isinstance(response, SafetyResponse):
        return doc
    return replace(
        doc,
        adult=Likelihood.parse(response.adult),
        spoof=Likelihood.parse(response.spoof),
        medical=Likelihood.parse(response.medical),
        violence=Likelihood.parse(response.violence),
    )


def merge_labels(doc: DocumentResult, response: LabelResponse | None) -> DocumentResult:
    """Append label descriptions in response order."""
    if not isinstance(response, LabelResponse):
        return doc
    descriptions = [d for d in response.descriptions if isinstance(d, str)]
    if not descriptions:
        return doc
    return replace(doc, labels=[*doc.labels, *descriptions])


def merge_faces(doc: DocumentResult, response: FaceResponse | None) -> DocumentResult:
    """Append one FaceSignal per detected face; index order is sequence order."""
    if not isinstance(response, FaceResponse):
        return doc
    signals = [
        _face_to_signal(face) for face in response.faces if isinstance(face, FaceAnnotation)
    ]
    if not signals:
        return doc
    return replace(doc, faces=[*doc.faces, *signals])


def _face_to_signal(face: FaceAnnotation) -> FaceSignal:
    return FaceSignal(
        joy=Likelihood.parse(face.joy),
        anger=Likelihood.parse(face.anger),
        sorrow=Likelihood.parse(face.sorrow),
        surprise=Likelihood.parse(face.surprise),
    )
