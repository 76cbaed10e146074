from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3000

    upload_dir: str = "uploads"
    upload_field_name: str = "images"
    max_upload_files: int = 10

    crop_top_px: int = 30
    crop_bottom_px: int = 50
    crop_right_px: int = 100

    ocr_language: str = "hin"
    tesseract_cmd: str = ""

    translation_provider: str = "google"
    translation_source_language: str = "hi"
    translation_target_language: str = "en"
    translation_openai_api_key: str = ""
    translation_openai_model_name: str = ""
    translation_openai_timeout_seconds: int = 30
    translation_openai_base_url: str = ""

    max_concurrent_images: int = 1
    stage_timeout_seconds: float = 0.0

    export_format: str = "xlsx"
    export_filename: str = ""
    export_sheet_name: str = "Data"
