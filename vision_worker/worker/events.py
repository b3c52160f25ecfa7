import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any

from vision_worker.processor.exceptions import EventValidationError, PayloadDecodeError
from vision_worker.processor.models import ImageRef

DELETED_STATE = "not_exists"
_DELETED_EVENT_SUFFIX = ".deleted"


@dataclass(frozen=True)
class UploadEvent:
    """Storage notification naming a single uploaded (or deleted) object."""

    bucket: str | None
    name: str | None
    resource_state: str = "exists"

    @classmethod
    def from_dict(cls, data: dict[str, Any], event_type: str | None = None) -> "UploadEvent":
        """Build from storage event data; CloudEvents of a deleted type count as deletions."""
        state = data.get("resourceState") or "exists"
        if event_type and event_type.endswith(_DELETED_EVENT_SUFFIX):
            state = DELETED_STATE
        return cls(bucket=data.get("bucket"), name=data.get("name"), resource_state=state)

    @property
    def is_deletion(self) -> bool:
        return self.resource_state == DELETED_STATE

    def to_image_ref(self) -> ImageRef:
        if not self.bucket:
            raise EventValidationError(
                'Bucket not provided. Make sure you have a "bucket" property in your request'
            )
        if not self.name:
            raise EventValidationError(
                'Filename not provided. Make sure you have a "name" property in your request'
            )
        return ImageRef(bucket=self.bucket, name=self.name)


@dataclass(frozen=True)
class ScanRequest:
    """Queue message asking for every image in a bucket to be analyzed."""

    image_location: str | None = None

    @classmethod
    def from_message(cls, data: str | bytes | None) -> "ScanRequest":
        """Decode a base64 JSON message body. An empty body scans the default bucket."""
        if not data:
            return cls()
        try:
            parsed = json.loads(base64.b64decode(data, validate=True))
        except (binascii.Error, ValueError) as exc:
            raise PayloadDecodeError(f"Invalid scan request message: {exc}") from exc
        if not isinstance(parsed, dict):
            raise PayloadDecodeError("Scan request message must be a JSON object")
        location = parsed.get("imageLocation")
        if location is not None and not isinstance(location, str):
            raise PayloadDecodeError("'imageLocation' must be a string")
        return cls(image_location=location or None)
