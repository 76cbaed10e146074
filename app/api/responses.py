from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from app.export.manager import ExportArtifact, ExportManager


class ArtifactResponse(Response):
    """File download whose completion commits the export.

    The body is sent through ExportManager.deliver, so the accumulator is
    cleared and temp files purged only when the send finished cleanly.
    """

    def __init__(self, artifact: ExportArtifact, export_manager: ExportManager) -> None:
        super().__init__(
            content=artifact.content,
            media_type=artifact.media_type,
            headers={
                "Content-Disposition": f'attachment; filename="{artifact.filename}"',
            },
        )
        self._artifact = artifact
        self._export_manager = export_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        async def send_body() -> None:
            await Response.__call__(self, scope, receive, send)

        await self._export_manager.deliver(self._artifact, send_body)
