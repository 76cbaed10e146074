from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.routes import router
from app.api.services import Services, build_services
from app.config.settings import Settings
from app.export.exceptions import EmptyAccumulatorError, ExportError
from app.logging.logger import Log
from app.processor.exceptions import (
    NoFilesError,
    PreprocessOrExtractError,
    ProcessorError,
    TooManyFilesError,
)

_CLIENT_ERRORS = (NoFilesError, TooManyFilesError, EmptyAccumulatorError)


def create_app(settings: Settings, services: Services | None = None) -> FastAPI:
    """Build the HTTP application around one set of shared services."""
    app = FastAPI(title="Scan Translate")
    app.state.services = services if services is not None else build_services(settings)
    app.include_router(router)

    @app.exception_handler(ProcessorError)
    async def processor_error_handler(request: Request, exc: ProcessorError) -> JSONResponse:
        if isinstance(exc, _CLIENT_ERRORS):
            Log.warning(f"Rejected {request.url.path}: {exc}")
            return JSONResponse(status_code=400, content={"detail": str(exc)})
        if isinstance(exc, PreprocessOrExtractError):
            Log.error(f"Batch failed on {request.url.path}: {exc}")
        else:
            Log.exception(f"Unexpected processing error on {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"detail": "An error occurred while processing the images."},
        )

    @app.exception_handler(ExportError)
    async def export_error_handler(request: Request, exc: ExportError) -> JSONResponse:
        if isinstance(exc, _CLIENT_ERRORS):
            Log.warning(f"Rejected {request.url.path}: {exc}")
            return JSONResponse(status_code=400, content={"detail": str(exc)})
        Log.error(f"Export failed on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"detail": "An error occurred while generating the export file."},
        )

    return app
