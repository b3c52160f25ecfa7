from vision_worker.config.settings import Settings
from vision_worker.vision.base import BaseVisionClient
from vision_worker.vision.example_client_adapter import ExampleVisionAdapter
from vision_worker.vision.google_vision_adapter import GoogleVisionAdapter


class VisionClientFactory:
    """Creates the configured vision client adapter."""

    PROVIDERS: tuple[str, ...] = ("google", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseVisionClient:
        provider = settings.vision_provider.lower()
        if provider == "example":
            return ExampleVisionAdapter()
        if provider == "google":
            return GoogleVisionAdapter(timeout_seconds=settings.vision_timeout_seconds)
        raise ValueError(
            f"Unknown vision provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
