import pytest
from pydantic import ValidationError

from app.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_port(self) -> None:
        s = Settings()
        assert s.port == 3000

    def test_default_upload_limits(self) -> None:
        s = Settings()
        assert s.upload_field_name == "images"
        assert s.max_upload_files == 10

    def test_default_crop_margins(self) -> None:
        s = Settings()
        assert (s.crop_top_px, s.crop_bottom_px, s.crop_right_px) == (30, 50, 100)

    def test_default_languages(self) -> None:
        s = Settings()
        assert s.ocr_language == "hin"
        assert s.translation_source_language == "hi"
        assert s.translation_target_language == "en"

    def test_default_translation_provider(self) -> None:
        s = Settings()
        assert s.translation_provider == "google"

    def test_default_pipeline_is_sequential_without_timeout(self) -> None:
        s = Settings()
        assert s.max_concurrent_images == 1
        assert s.stage_timeout_seconds == 0.0

    def test_default_export(self) -> None:
        s = Settings()
        assert s.export_format == "xlsx"
        assert s.export_sheet_name == "Data"


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_crop_margin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CROP_RIGHT_PX", "120")
        s = Settings()
        assert s.crop_right_px == 120

    def test_loads_ocr_language(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OCR_LANGUAGE", "ben")
        s = Settings()
        assert s.ocr_language == "ben"

    def test_loads_stage_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STAGE_TIMEOUT_SECONDS", "2.5")
        s = Settings()
        assert s.stage_timeout_seconds == 2.5


class TestSettingsValidation:
    def test_invalid_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_max_upload_files_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_UPLOAD_FILES", "abc")
        with pytest.raises(ValidationError):
            Settings()
