from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from vision_worker.processor.models import DocumentResult, ImageRef


@dataclass(slots=True)
class PipelineContext:
    image: ImageRef
    document: DocumentResult
    message_id: str | None = None


class PipelineStep(ABC):
    """One stage of the per-image pipeline.

    Recoverable steps may fail without aborting the image: the processor logs
    the error and moves on with the accumulator as it was before the step.
    """

    name: ClassVar[str]
    recoverable: ClassVar[bool] = False

    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
