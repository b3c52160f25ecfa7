from vision_worker.logging.logger import Log
from vision_worker.processor.models import DocumentResult
from vision_worker.processor.payload import decode_message
from vision_worker.storage.base import BaseResultStore
from vision_worker.vision.models import Likelihood

_UNDEFINED = "undefined"


def result_filename(filename: str) -> str:
    """Append a .txt suffix to the image name."""
    return f"{filename}.txt"


def render_text(doc: DocumentResult) -> str:
    """Render the flat-text artifact: OCR, safety, labels, then faces."""
    parts = [
        f"\nocr : {doc.text if doc.text is not None else _UNDEFINED}",
        f"\nimageadult{_render(doc.adult)}",
        f"\nimagespoof{_render(doc.spoof)}",
        f"\nimagemedical{_render(doc.medical)}",
        f"\nimageviolence{_render(doc.violence)}",
    ]
    parts.extend(f"\nlabel{label}" for label in doc.labels)
    for face in doc.faces:
        parts.append(
            f"\nfacejoy{_render(face.joy)}"
            f"\nfaceanger{_render(face.anger)}"
            f"\nfacesorrow{_render(face.sorrow)}"
            f"\nfacesurprise{_render(face.surprise)}"
        )
    return "".join(parts)


def _render(value: Likelihood | None) -> str:
    return value.value if value is not None else _UNDEFINED


class ResultWriter:
    """Decodes delivered results and stores them as text artifacts."""

    def __init__(self, store: BaseResultStore, result_bucket: str) -> None:
        self._store = store
        self._result_bucket = result_bucket

    def save_message(self, data: str | bytes) -> str:
        """Decode a base64 message body and write its artifact. Returns the object name."""
        doc = decode_message(data)
        return self.write(doc)

    def write(self, doc: DocumentResult) -> str:
        name = result_filename(doc.filename)
        Log.info(f"Saving result to {name} in bucket {self._result_bucket}")
        self._store.save(self._result_bucket, name, render_text(doc))
        Log.info(f"File {name} saved")
        return name
