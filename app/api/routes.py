import asyncio
from typing import Any

from fastapi import APIRouter, Request
from starlette.datastructures import UploadFile

from app.api.responses import ArtifactResponse
from app.api.services import Services
from app.logging.logger import Log

router = APIRouter()


def _services(request: Request) -> Services:
    return request.app.state.services


@router.post("/process-images")
async def process_images(request: Request) -> dict[str, Any]:
    """Accept a multipart batch of images and accumulate their rows."""
    services = _services(request)
    field = services.settings.upload_field_name
    form = await request.form(max_files=services.settings.max_upload_files + 1)
    try:
        # Empty file inputs arrive as parts without a filename.
        uploads = [
            part
            for part in form.getlist(field)
            if isinstance(part, UploadFile) and part.filename
        ]
        files = [(upload.filename or "upload", await upload.read()) for upload in uploads]
    finally:
        await form.close()

    Log.info(f"Received {len(files)} files in field '{field}'")
    result = await services.batch_processor.process_uploads(files)
    return {
        "batch_id": result.batch_id,
        "images_processed": result.images_processed,
        "rows_appended": result.rows_appended,
        "lines_skipped": result.lines_skipped,
        "download_url": str(request.url_for("download")),
    }


@router.get("/download", name="download")
async def download(request: Request) -> ArtifactResponse:
    """Stream the accumulated rows as a spreadsheet."""
    export_manager = _services(request).export_manager
    artifact = await asyncio.to_thread(export_manager.prepare)
    return ArtifactResponse(artifact, export_manager)


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    return {"status": "ok", "pending_rows": len(_services(request).accumulator)}
