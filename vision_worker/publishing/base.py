from abc import ABC, abstractmethod


class BasePublisher(ABC):
    """Contract for message publishing adapters."""

    @abstractmethod
    def publish(self, topic: str, data: bytes) -> str:
        """Publish one message to ``topic``, creating the topic if absent.

        Returns:
            The message id assigned by the transport.

        Raises:
            PublishError: if the message could not be delivered.
        """
