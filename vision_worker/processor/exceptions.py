class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class EventValidationError(ProcessorError):
    """Raised when a trigger event lacks a bucket, object name or filename."""


class PayloadDecodeError(ProcessorError):
    """Raised when a published message cannot be decoded into a DocumentResult."""
