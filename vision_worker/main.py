import asyncio
from functools import lru_cache
from typing import Any

import functions_framework
from cloudevents.http import CloudEvent

from vision_worker.config.settings import Settings
from vision_worker.logging.logger import Log
from vision_worker.processor.processor import build_processor
from vision_worker.publishing.pubsub_adapter import PubSubPublisher
from vision_worker.results.writer import ResultWriter
from vision_worker.storage.gcs_adapter import GcsImageSource, GcsResultStore
from vision_worker.vision.factory import VisionClientFactory
from vision_worker.worker.batch_driver import BatchDriver
from vision_worker.worker.events import ScanRequest, UploadEvent
from vision_worker.worker.job_runner import ImageJobRunner


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = Settings()
    Log.configure(settings.log_level)
    return settings


@lru_cache(maxsize=1)
def build_driver() -> BatchDriver:
    """Build the analysis side: vision client -> processor -> driver."""
    settings = get_settings()
    vision_client = VisionClientFactory.create(settings)
    publisher = PubSubPublisher(
        project_id=settings.gcp_project_id,
        timeout_seconds=settings.publish_timeout_seconds,
    )
    processor = build_processor(settings, vision_client, publisher)
    return BatchDriver(
        processor=processor,
        job_runner=ImageJobRunner(processor),
        image_source=GcsImageSource(),
        settings=settings,
    )


@lru_cache(maxsize=1)
def build_result_writer() -> ResultWriter:
    settings = get_settings()
    if not settings.result_bucket:
        raise ValueError("result_bucket is required to save results")
    return ResultWriter(GcsResultStore(), settings.result_bucket)


@functions_framework.cloud_event
def process_image(cloud_event: CloudEvent) -> None:
    """Triggered by Cloud Storage when a file is uploaded or deleted."""
    event = UploadEvent.from_dict(cloud_event.data or {}, event_type=cloud_event["type"])
    asyncio.run(build_driver().handle_upload(event))


@functions_framework.cloud_event
def process_bucket(cloud_event: CloudEvent) -> None:
    """Triggered by a Pub/Sub message; analyzes every image in the bucket."""
    request = ScanRequest.from_message(_message_data(cloud_event))
    asyncio.run(build_driver().handle_scan(request))


@functions_framework.cloud_event
def save_result(cloud_event: CloudEvent) -> None:
    """Triggered by a message on the result topic; writes the text artifact."""
    data = _message_data(cloud_event)
    if not data:
        raise ValueError("Pub/Sub message carries no data")
    build_result_writer().save_message(data)


def _message_data(cloud_event: CloudEvent) -> Any:
    payload = cloud_event.data or {}
    return payload.get("message", {}).get("data")


def main() -> None:
    """Entry point: scan the configured image bucket once."""
    driver = build_driver()
    asyncio.run(driver.handle_scan(ScanRequest()))


if __name__ == "__main__":
    main()
