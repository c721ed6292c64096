"""Namecast Web Server - REST API for personalized image batches.

Exposes:
- GET /ping - Health check
- POST /api/upload - Template + list upload, name extraction
- POST /api/preview - Render the first (or chosen) name
- POST /api/generate - Render a batch window and build the archive
- GET /api/download/{session_id} - Stream the archive, then destroy the session
- GET /api/sessions/{session_id} - Session status
- DELETE /api/sessions/{session_id} - Explicit invalidation
"""

import base64
import re
import time
import uuid
from datetime import datetime
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.concurrency import run_in_threadpool

from namecast.config import ARCHIVE_NAME, NAMES_PREVIEW_LIMIT, Config
from namecast.exceptions import (
    NamecastError,
    SessionBusyError,
    UploadError,
    UploadTooLargeError,
)
from namecast.extraction import NameExtractor
from namecast.generation import BatchGenerationEngine
from namecast.logger import Logger, session_logger
from namecast.rendering import FontResolver, TextOverlayCompositor
from namecast.sessions import InMemorySessionStore, SessionManager
from namecast.validation.models import (
    GenerateOutput,
    GenerateRequest,
    PreviewOutput,
    PreviewRequest,
    SessionStatusOutput,
    UploadOutput,
)
from namecast.web_server.responses import (
    error,
    error_from_exception,
    success,
    validation_error,
)

UPLOAD_CHUNK_SIZE = 1024 * 1024
DOWNLOAD_CHUNK_SIZE = 64 * 1024


def _stored_upload_name(filename: Optional[str]) -> str:
    """Unique on-disk name for an upload: ``<ms>-<random>-<original_name>``."""
    original = Path(filename or "upload").name
    original = re.sub(r"\s+", "_", original)
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:10]}-{original}"


class NamecastWebServer:
    """FastAPI web server for upload, preview, generation and download."""

    def __init__(
        self,
        session_manager: Optional[SessionManager] = None,
        extractor: Optional[NameExtractor] = None,
        engine: Optional[BatchGenerationEngine] = None,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize the namecast web server.

        Args:
            session_manager: Session manager (in-memory store if None)
            extractor: Name extractor (default strategies if None)
            engine: Batch generation engine (built from Config if None)
            logger: Logger instance (shared console logger if None)
        """
        self.app = FastAPI(
            title="namecast",
            description="Personalized image batch generation REST API",
        )
        self.logger: Logger = logger or session_logger

        Config.ensure_directories()
        self.uploads_dir = Config.get_uploads_dir()
        self.max_upload_bytes = Config.get_max_upload_mb() * 1024 * 1024

        self.session_manager = session_manager or SessionManager(
            session_store=InMemorySessionStore(logger=self.logger), logger=self.logger
        )
        self.extractor = extractor or NameExtractor(logger=self.logger)
        self.engine = engine or BatchGenerationEngine(
            session_manager=self.session_manager,
            work_dir=Config.get_work_dir(),
            compositor=TextOverlayCompositor(
                font_resolver=FontResolver(Config.get_fonts_dir(), logger=self.logger),
                logger=self.logger,
            ),
            max_batch_size=Config.get_max_batch_size(),
            jpeg_quality=Config.get_jpeg_quality(),
            logger=self.logger,
        )

        self.logger.info(
            "Namecast web server initialized",
            uploads_dir=str(self.uploads_dir),
            work_dir=str(self.engine.work_dir),
            max_batch_size=self.engine.max_batch_size,
        )
        self._setup_exception_handlers()
        self._setup_routes()

    # ------------------------------------------------------------------
    # Error handling
    # ------------------------------------------------------------------

    def _setup_exception_handlers(self) -> None:
        @self.app.exception_handler(NamecastError)
        async def namecast_error_handler(request: Request, exc: NamecastError):
            self.logger.warning(
                f"{request.url.path} failed",
                error_code=exc.code,
                error=exc.message,
                details=exc.details,
            )
            return error_from_exception(exc)

        @self.app.exception_handler(RequestValidationError)
        async def request_validation_handler(request: Request, exc: RequestValidationError):
            self.logger.warning(f"{request.url.path} invalid request", errors=len(exc.errors()))
            return validation_error(list(exc.errors()))

    # ------------------------------------------------------------------
    # Uploads
    # ------------------------------------------------------------------

    async def _persist_upload(self, upload: UploadFile, field: str) -> Path:
        destination = self.uploads_dir / _stored_upload_name(upload.filename)
        written = 0
        try:
            with destination.open("wb") as handle:
                while True:
                    chunk = await upload.read(UPLOAD_CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_upload_bytes:
                        raise UploadTooLargeError(field, self.max_upload_bytes // (1024 * 1024))
                    handle.write(chunk)
        except BaseException:
            destination.unlink(missing_ok=True)
            raise
        finally:
            await upload.close()
        self.logger.debug("Upload stored", field=field, path=str(destination), size_bytes=written)
        return destination

    def _destroy_once(self, session_id: str) -> None:
        try:
            self.session_manager.destroy_session(session_id)
        except Exception as e:
            # cleanup is best effort and never reaches the client
            self.logger.error("Session cleanup failed", session_id=session_id, error=str(e))

    async def _stream_archive(self, path: Path, session_id: str) -> AsyncIterator[bytes]:
        """Yield the archive in chunks; the session is destroyed however the transfer ends.

        The caller holds the session (``acquire_session``); it is released
        only after the destroy, so no preview or generation can slip in.
        """
        try:
            with path.open("rb") as handle:
                while True:
                    chunk = await run_in_threadpool(handle.read, DOWNLOAD_CHUNK_SIZE)
                    if not chunk:
                        break
                    yield chunk
            self.logger.info("Archive download completed", session_id=session_id)
        finally:
            self._destroy_once(session_id)
            self.session_manager.release_session(session_id)

    def _open_download(self, session_id: str):
        """Reserve the session and start streaming its archive.

        Raises:
            SessionNotFoundError: If the session does not exist
            SessionBusyError: If a preview, generation or download is running
        """
        self.session_manager.acquire_session(session_id)
        archive_path = self.engine.archive_path(session_id)
        if not archive_path.is_file():
            self.session_manager.release_session(session_id)
            return error(code="ARCHIVE_NOT_FOUND", message="ZIP not found", status_code=404)

        return StreamingResponse(
            self._stream_archive(archive_path, session_id),
            media_type="application/zip",
            headers={
                "Content-Disposition": f'attachment; filename="{ARCHIVE_NAME}"',
                "Content-Length": str(archive_path.stat().st_size),
            },
        )

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    def _setup_routes(self) -> None:
        """Set up all API routes."""

        @self.app.get("/ping")
        async def ping():
            """Health check endpoint."""
            current_time = datetime.now().isoformat()
            self.logger.debug("GET /ping", timestamp=current_time)
            return JSONResponse(
                content={"status": "ok", "timestamp": current_time, "service": "namecast"}
            )

        @self.app.post("/api/upload")
        async def upload(
            template: Optional[UploadFile] = File(None),
            model: Optional[UploadFile] = File(None),
            list_file: Optional[UploadFile] = File(None, alias="list"),
        ):
            """
            Receive the template image and the list document.

            Form fields:
            - template (or model): template image
            - list: names document (.csv, .txt, .xlsx, .docx, .pdf, ...)
            """
            template = template or model
            if template is None or list_file is None:
                raise UploadError("Model image and list file are required.")

            self.logger.info(
                "POST /api/upload",
                template=template.filename,
                list=list_file.filename,
            )
            template_path = await self._persist_upload(template, "template")
            try:
                list_path = await self._persist_upload(list_file, "list")
            except BaseException:
                template_path.unlink(missing_ok=True)
                raise

            list_extension = Path(list_file.filename or "").suffix.lower() or None
            session_id = self.session_manager.create_session()
            try:
                self.session_manager.attach_upload(
                    session_id, template_path, list_path, list_extension
                )
                result = await run_in_threadpool(
                    self.extractor.extract, list_path, None, list_extension
                )
                session = self.session_manager.set_names(session_id, result.names)
            except BaseException:
                self._destroy_once(session_id)
                raise

            self.logger.info(
                "/api/upload completed",
                session_id=session_id,
                names_total=len(session.names),
                extraction_status=result.status.value,
            )
            return success(
                UploadOutput(
                    session_id=session_id,
                    names_preview=session.names[:NAMES_PREVIEW_LIMIT],
                    names_total=len(session.names),
                    extraction_status=result.status.value,
                    extraction_reason=result.reason,
                )
            )

        @self.app.post("/api/preview")
        async def preview(body: PreviewRequest):
            """Render one name with the given style and return it as a data URL."""
            self.logger.info("POST /api/preview", session_id=body.session_id, index=body.index)
            with self.session_manager.session_lock(body.session_id) as session:
                png = await run_in_threadpool(
                    self.engine.preview, session, body.style(), body.index
                )
                index = body.index if body.index < len(session.names) else 0
                name = session.names[index] if session.names else ""

            encoded = base64.b64encode(png).decode("ascii")
            return success(
                PreviewOutput(
                    session_id=body.session_id,
                    name=name,
                    preview=f"data:image/png;base64,{encoded}",
                )
            )

        @self.app.post("/api/generate")
        async def generate(body: GenerateRequest):
            """Render a batch window of names and build the session archive."""
            self.logger.info(
                "POST /api/generate",
                session_id=body.session_id,
                format=body.output_format.value,
                offset=body.offset,
                limit=body.limit,
            )
            with self.session_manager.session_lock(body.session_id) as session:
                result = await run_in_threadpool(
                    self.engine.generate,
                    session,
                    body.style(),
                    body.output_format,
                    body.offset,
                    body.limit,
                )

            return success(
                GenerateOutput(
                    session_id=body.session_id,
                    download_url=f"/api/download/{body.session_id}",
                    processed=result.processed,
                    offset=result.offset,
                    total=result.total,
                    format=result.output_format.value,
                )
            )

        @self.app.get("/api/download/{session_id}")
        async def download(session_id: str):
            """Stream the archive; the session is destroyed when the transfer ends."""
            self.logger.info("GET /api/download", session_id=session_id)
            return self._open_download(session_id)

        @self.app.get("/api/sessions/{session_id}")
        async def session_status(session_id: str):
            session = self.session_manager.require_session(session_id)
            return success(
                SessionStatusOutput(
                    session_id=session.session_id,
                    created_at=session.created_at,
                    names_total=len(session.names),
                    has_template=bool(session.template_path),
                    is_ready=session.is_ready,
                    archive_available=self.engine.has_archive(session_id),
                )
            )

        @self.app.delete("/api/sessions/{session_id}")
        async def invalidate_session(session_id: str):
            self.logger.info("DELETE /api/sessions", session_id=session_id)
            self.session_manager.require_session(session_id)
            if self.session_manager.is_busy(session_id):
                raise SessionBusyError(session_id)
            self._destroy_once(session_id)
            return success({"session_id": session_id}, message="Session terminated and all files deleted")
