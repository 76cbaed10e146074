import uvicorn

from app.api.server import create_app
from app.config.settings import Settings
from app.logging.logger import Log


def main() -> None:
    """Entry point: settings -> logging -> services -> HTTP server."""
    settings = Settings()
    Log.configure(settings.log_level)
    app = create_app(settings)
    Log.info(
        f"Starting scan translation service on {settings.host}:{settings.port} "
        f"(env={settings.app_env}, ocr={settings.ocr_language}, "
        f"translation={settings.translation_provider})"
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
