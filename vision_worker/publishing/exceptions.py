class PublishError(Exception):
    """Raised when a result cannot be delivered to the message topic."""
