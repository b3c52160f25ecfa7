"""End-to-end runs: upload/scan trigger -> analysis -> topic -> result artifact."""

import asyncio
import json
from collections.abc import Callable
from typing import Any

import pytest

from vision_worker.config.settings import Settings
from vision_worker.processor.exceptions import EventValidationError
from vision_worker.results.writer import ResultWriter
from vision_worker.vision.example_client_adapter import ExampleVisionAdapter
from vision_worker.worker.batch_driver import BatchDriver
from vision_worker.worker.events import ScanRequest, UploadEvent

MakeDriver = Callable[..., BatchDriver]


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "image_bucket": "images",
        "result_bucket": "results",
        "result_topic": "vision-results",
        "max_concurrent_images": 2,
    }
    values.update(overrides)
    return Settings(**values)


def _deliver_all(publisher: Any, result_store: Any, bucket: str) -> None:
    writer = ResultWriter(result_store, bucket)
    for message in publisher.delivered():
        writer.save_message(message)


class TestUploadToArtifact:
    def test_upload_event_produces_payload_and_text_file(
        self,
        make_driver: MakeDriver,
        vision_client: Any,
        publisher: Any,
        result_store: Any,
    ) -> None:
        settings = _settings()
        driver = make_driver(settings, vision_client)
        event = UploadEvent.from_dict({"bucket": "b", "name": "img1.png", "resourceState": "exists"})

        asyncio.run(driver.handle_upload(event))

        assert len(publisher.messages) == 1
        topic, data = publisher.messages[0]
        assert topic == "vision-results"
        payload = json.loads(data)
        assert payload["filename"] == "img1.png"
        assert payload["text"] == "hello"
        assert payload["labels"] == ["cat", "outdoor"]
        assert payload["faces"] == [
            {
                "joy": "LIKELY",
                "anger": "VERY_UNLIKELY",
                "sorrow": "VERY_UNLIKELY",
                "surprise": "UNLIKELY",
            }
        ]
        assert payload["adult"] == "UNLIKELY"

        _deliver_all(publisher, result_store, settings.result_bucket)

        assert result_store.objects == {
            ("results", "img1.png.txt"): (
                "\nocr : hello"
                "\nimageadultUNLIKELY"
                "\nimagespoofVERY_UNLIKELY"
                "\nimagemedicalVERY_UNLIKELY"
                "\nimageviolenceUNLIKELY"
                "\nlabelcat"
                "\nlabeloutdoor"
                "\nfacejoyLIKELY"
                "\nfaceangerVERY_UNLIKELY"
                "\nfacesorrowVERY_UNLIKELY"
                "\nfacesurpriseUNLIKELY"
            )
        }

    def test_deletion_event_makes_no_calls(
        self,
        make_driver: MakeDriver,
        vision_client: Any,
        publisher: Any,
    ) -> None:
        driver = make_driver(_settings(), vision_client)
        event = UploadEvent.from_dict(
            {"bucket": "b", "name": "img1.png", "resourceState": "not_exists"}
        )

        assert asyncio.run(driver.handle_upload(event)) is None
        assert vision_client.calls == []
        assert publisher.messages == []

    def test_missing_name_rejected_before_analysis(
        self,
        make_driver: MakeDriver,
        vision_client: Any,
    ) -> None:
        driver = make_driver(_settings(), vision_client)

        with pytest.raises(EventValidationError):
            asyncio.run(driver.handle_upload(UploadEvent.from_dict({"bucket": "b"})))

        assert vision_client.calls == []

    def test_failed_safety_stage_renders_undefined(
        self,
        make_driver: MakeDriver,
        vision_client: Any,
        publisher: Any,
        result_store: Any,
    ) -> None:
        vision_client.failing = {"safety"}
        driver = make_driver(_settings(), vision_client)

        asyncio.run(driver.handle_upload(UploadEvent(bucket="b", name="img1.png")))
        _deliver_all(publisher, result_store, "results")

        content = result_store.objects[("results", "img1.png.txt")]
        assert "\nimageadultundefined" in content
        assert "\nlabelcat" in content
        assert json.loads(publisher.messages[0][1])["failed_stages"] == ["safety"]


class TestBucketScan:
    def test_scan_publishes_one_message_per_image(
        self,
        make_driver: MakeDriver,
        publisher: Any,
        result_store: Any,
    ) -> None:
        settings = _settings(vision_provider="example")
        names = ["a.png", "b.png", "c.png"]
        driver = make_driver(settings, ExampleVisionAdapter(), names)

        count = asyncio.run(driver.handle_scan(ScanRequest()))

        assert count == 3
        published = sorted(json.loads(data)["filename"] for _topic, data in publisher.messages)
        assert published == names

        _deliver_all(publisher, result_store, settings.result_bucket)
        assert sorted(name for _bucket, name in result_store.objects) == [
            "a.png.txt",
            "b.png.txt",
            "c.png.txt",
        ]

    def test_failing_image_does_not_block_batch(
        self,
        make_driver: MakeDriver,
        vision_client: Any,
        publisher: Any,
    ) -> None:
        publish = publisher.publish

        def flaky_publish(topic: str, data: bytes) -> str:
            if json.loads(data)["filename"] == "bad.png":
                raise RuntimeError("topic unavailable")
            return publish(topic, data)

        publisher.publish = flaky_publish
        driver = make_driver(_settings(), vision_client, ["a.png", "bad.png", "c.png"])

        assert asyncio.run(driver.handle_scan(ScanRequest())) == 3
        published = sorted(json.loads(data)["filename"] for _topic, data in publisher.messages)
        assert published == ["a.png", "c.png"]

    def test_disabled_optional_stages_keep_record_shape(
        self,
        make_driver: MakeDriver,
        vision_client: Any,
        publisher: Any,
    ) -> None:
        settings = _settings(label_detection_enabled=False, face_detection_enabled=False)
        driver = make_driver(settings, vision_client, ["a.png"])

        asyncio.run(driver.handle_scan(ScanRequest()))

        assert [method for method, _name in vision_client.calls] == ["text", "safety"]
        payload = json.loads(publisher.messages[0][1])
        assert payload["labels"] == []
        assert payload["faces"] == []
        assert payload["failed_stages"] == []
