from google.api_core import exceptions as google_exceptions
from google.cloud import pubsub_v1

from vision_worker.logging.logger import Log
from vision_worker.publishing.base import BasePublisher
from vision_worker.publishing.exceptions import PublishError


class PubSubPublisher(BasePublisher):
    """Publishes results to Cloud Pub/Sub, creating missing topics on first use."""

    def __init__(
        self,
        *,
        project_id: str,
        timeout_seconds: int,
        client: pubsub_v1.PublisherClient | None = None,
    ) -> None:
        self._client = client if client is not None else pubsub_v1.PublisherClient()
        self._project_id = project_id
        self._timeout_seconds = timeout_seconds
        self._known_topics: set[str] = set()

    def publish(self, topic: str, data: bytes) -> str:
        topic_path = self._topic_path(topic)
        try:
            self._ensure_topic(topic_path)
            future = self._client.publish(topic_path, data)
            return str(future.result(timeout=self._timeout_seconds))
        except PublishError:
            raise
        except Exception as exc:
            raise PublishError(f"Failed to publish to {topic_path}: {exc}") from exc

    def _topic_path(self, topic: str) -> str:
        if topic.startswith("projects/"):
            return topic
        if not self._project_id:
            raise PublishError(
                f"gcp_project_id is required to resolve topic '{topic}'"
            )
        return self._client.topic_path(self._project_id, topic)

    def _ensure_topic(self, topic_path: str) -> None:
        if topic_path in self._known_topics:
            return
        try:
            self._client.get_topic(request={"topic": topic_path})
        except google_exceptions.NotFound:
            Log.info(f"Topic {topic_path} not found, creating it")
            try:
                self._client.create_topic(request={"name": topic_path})
            except google_exceptions.AlreadyExists:
                Log.debug(f"Topic {topic_path} was created concurrently")
        self._known_topics.add(topic_path)
