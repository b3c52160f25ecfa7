"""Wire codec for DocumentResult messages exchanged over the result topic."""

import base64
import binascii
import json
from typing import Any

from vision_worker.processor.exceptions import EventValidationError, PayloadDecodeError
from vision_worker.processor.models import DocumentResult, FaceSignal
from vision_worker.vision.models import Likelihood

_SAFETY_FIELDS = ("adult", "spoof", "medical", "violence")
_FACE_FIELDS = ("joy", "anger", "sorrow", "surprise")


def encode_payload(doc: DocumentResult) -> bytes:
    """Serialize a DocumentResult to UTF-8 JSON. Absent values become null."""
    payload: dict[str, Any] = {
        "filename": doc.filename,
        "text": doc.text,
        "labels": list(doc.labels),
        "faces": [
            {name: _likelihood_name(getattr(face, name)) for name in _FACE_FIELDS}
            for face in doc.faces
        ],
    }
    for name in _SAFETY_FIELDS:
        payload[name] = _likelihood_name(getattr(doc, name))
    payload["failed_stages"] = list(doc.failed_stages)
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def decode_message(data: str | bytes) -> DocumentResult:
    """Decode a base64 message body into a DocumentResult.

    Raises:
        PayloadDecodeError: if the body is not valid base64-encoded JSON.
        EventValidationError: if the payload has no filename.
    """
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise PayloadDecodeError(f"Message data is not valid base64: {exc}") from exc
    return decode_payload(raw)


def decode_payload(raw: str | bytes) -> DocumentResult:
    """Parse JSON payload bytes into a DocumentResult."""
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise PayloadDecodeError(f"Invalid JSON payload: {exc}") from exc

    if not isinstance(parsed, dict):
        raise PayloadDecodeError("JSON payload must be an object")
    return build_document(parsed)


def build_document(data: dict[str, Any]) -> DocumentResult:
    filename = data.get("filename")
    if not filename or not isinstance(filename, str):
        raise EventValidationError(
            'Filename not provided. Make sure you have a "filename" property in your request'
        )
    text = data.get("text")
    if text is not None and not isinstance(text, str):
        raise PayloadDecodeError("'text' must be a string or null")

    return DocumentResult(
        filename=filename,
        text=text,
        labels=_build_labels(data.get("labels")),
        faces=_build_faces(data.get("faces")),
        adult=Likelihood.parse(data.get("adult")),
        spoof=Likelihood.parse(data.get("spoof")),
        medical=Likelihood.parse(data.get("medical")),
        violence=Likelihood.parse(data.get("violence")),
        failed_stages=_build_string_list(data.get("failed_stages"), "failed_stages"),
    )


def _build_labels(raw: Any) -> list[str]:
    return _build_string_list(raw, "labels")


def _build_string_list(raw: Any, field: str) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise PayloadDecodeError(f"'{field}' must be a list of strings")
    return list(raw)


def _build_faces(raw: Any) -> list[FaceSignal]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise PayloadDecodeError("'faces' must be a list")
    faces: list[FaceSignal] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise PayloadDecodeError(f"faces[{i}] must be an object")
        faces.append(FaceSignal(**{name: Likelihood.parse(item.get(name)) for name in _FACE_FIELDS}))
    return faces


def _likelihood_name(value: Likelihood | None) -> str | None:
    return value.value if value is not None else None
