"""Batch generation engine.

Drives the compositor over a window of a session's names, converts to the
requested format, and zips the window's artifacts.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from namecast.archive import ArchiveBuilder
from namecast.config import ARCHIVE_NAME, OUTPUT_SUBDIR, PREVIEW_NAME
from namecast.exceptions import InvalidSessionStateError, RenderingError
from namecast.generation.window import BatchWindow, artifact_filename
from namecast.logger import Logger, session_logger
from namecast.rendering import TextOverlayCompositor, to_jpeg
from namecast.sessions import Session, SessionManager
from namecast.validation.models import OutputFormat, OverlayStyle


@dataclass
class GenerationResult:
    session_id: str
    window: BatchWindow
    output_format: OutputFormat
    archive_path: Path
    files: List[str] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return self.window.count

    @property
    def offset(self) -> int:
        return self.window.start

    @property
    def total(self) -> int:
        return self.window.total


class BatchGenerationEngine:
    """Renders one artifact per name in a batch window and archives them."""

    def __init__(
        self,
        session_manager: SessionManager,
        work_dir: Union[str, Path],
        compositor: Optional[TextOverlayCompositor] = None,
        archive_builder: Optional[ArchiveBuilder] = None,
        max_batch_size: int = 50,
        jpeg_quality: int = 90,
        logger: Optional[Logger] = None,
    ):
        self.session_manager = session_manager
        self.work_dir = Path(work_dir)
        self.logger = logger or session_logger
        self.compositor = compositor or TextOverlayCompositor(logger=self.logger)
        self.archive_builder = archive_builder or ArchiveBuilder(logger=self.logger)
        self.max_batch_size = max_batch_size
        self.jpeg_quality = jpeg_quality

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def session_dir(self, session_id: str) -> Path:
        return self.work_dir / session_id

    def output_dir(self, session_id: str) -> Path:
        return self.session_dir(session_id) / OUTPUT_SUBDIR

    def archive_path(self, session_id: str) -> Path:
        return self.session_dir(session_id) / ARCHIVE_NAME

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def preview(self, session: Session, style: OverlayStyle, index: int = 0) -> bytes:
        """
        Render a single name (the first by default) as a PNG.

        Raises:
            InvalidSessionStateError: If the template or names are missing
            RenderingError: If composition fails
        """
        self._require_ready(session)
        index = index if 0 <= index < len(session.names) else 0
        name = session.names[index]

        session_dir = self._prepare_session_dir(session.session_id)
        destination = session_dir / PREVIEW_NAME
        png = self.compositor.render(session.template_path, style.with_text(name), destination)
        self.logger.info("Preview rendered", session_id=session.session_id, index=index)
        return png

    def generate(
        self,
        session: Session,
        style: OverlayStyle,
        output_format: OutputFormat = OutputFormat.PNG,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> GenerationResult:
        """
        Render the batch window and build the session archive.

        Args:
            session: Session with template and names
            style: Overlay position and styling
            output_format: PNG or JPEG
            offset: First name index (0-based)
            limit: Requested number of names, capped by max_batch_size

        Returns:
            GenerationResult describing the window and archive

        Raises:
            InvalidSessionStateError: If the template or names are missing
            RenderingError: If any name fails to render (the call aborts)
            ArchiveError: If the archive cannot be built
        """
        self._require_ready(session)
        session_id = session.session_id
        window = BatchWindow.clamp(
            total=len(session.names),
            offset=offset,
            limit=limit,
            max_batch_size=self.max_batch_size,
        )
        self.logger.info(
            "Generation started",
            session_id=session_id,
            total=window.total,
            start=window.start,
            limit_requested=limit if limit is not None else "all",
            will_process=window.count,
            format=output_format.value,
        )

        self._prepare_session_dir(session_id)
        out_dir = self._reset_output_dir(session_id)

        files = []
        for idx in window.indexes():
            name = session.names[idx]
            final_path = out_dir / artifact_filename(idx, name, output_format.extension)
            spec = style.with_text(name)
            if output_format == OutputFormat.PNG:
                self.compositor.render(session.template_path, spec, final_path)
            else:
                self._render_converted(session.template_path, spec, final_path)
            files.append(final_path.name)

        summary = self.archive_builder.build(out_dir, self.archive_path(session_id))
        self.logger.info(
            "Generation completed",
            session_id=session_id,
            processed=window.count,
            archive_files=summary.file_count,
            archive_bytes=summary.size_bytes,
        )
        return GenerationResult(
            session_id=session_id,
            window=window,
            output_format=output_format,
            archive_path=summary.path,
            files=files,
        )

    def has_archive(self, session_id: str) -> bool:
        return self.archive_path(session_id).is_file()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_ready(self, session: Session) -> None:
        if not session.is_ready:
            raise InvalidSessionStateError(
                "Missing model or names",
                details={
                    "session_id": session.session_id,
                    "has_template": bool(session.template_path),
                    "names_total": len(session.names),
                },
            )

    def _prepare_session_dir(self, session_id: str) -> Path:
        session_dir = self.session_dir(session_id)
        # Registered before anything is written so partial output is still cleaned up
        self.session_manager.register_cleanup_path(session_id, session_dir)
        session_dir.mkdir(parents=True, exist_ok=True)
        return session_dir

    def _reset_output_dir(self, session_id: str) -> Path:
        out_dir = self.output_dir(session_id)
        if out_dir.exists():
            shutil.rmtree(out_dir)
        self.archive_path(session_id).unlink(missing_ok=True)
        out_dir.mkdir(parents=True)
        return out_dir

    def _render_converted(self, template_path: str, spec, final_path: Path) -> None:
        tmp_png = final_path.with_name(final_path.stem + ".tmp.png")
        try:
            png = self.compositor.render(template_path, spec, tmp_png)
            final_path.write_bytes(to_jpeg(png, quality=self.jpeg_quality))
        except OSError as e:
            raise RenderingError("Converted image could not be saved", details={"error": str(e)})
        finally:
            tmp_png.unlink(missing_ok=True)
