from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    gcp_project_id: str = ""
    image_bucket: str = ""
    result_bucket: str = ""
    result_topic: str = "vision-results"

    vision_provider: str = "google"
    vision_timeout_seconds: int = 30
    label_detection_enabled: bool = True
    face_detection_enabled: bool = True

    max_concurrent_images: int = 5
    publish_timeout_seconds: int = 30
