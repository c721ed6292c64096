"""ZIP archive builder.

Streams every file of a directory into one deflate-compressed archive. The
archive is written to a temporary sibling first and moved into place only
after the zip stream has been closed, so the destination is either the
previous archive or a complete new one.
"""

import asyncio
import os
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from namecast.exceptions import ArchiveError
from namecast.logger import Logger, session_logger

COMPRESSION_LEVEL = 9


@dataclass
class ArchiveSummary:
    path: Path
    file_count: int
    size_bytes: int


class ArchiveBuilder:
    """Builds flat ZIP archives from a directory."""

    def __init__(self, logger: Optional[Logger] = None, compresslevel: int = COMPRESSION_LEVEL):
        self.logger = logger or session_logger
        self.compresslevel = compresslevel

    def build(
        self, source_dir: Union[str, Path], destination: Union[str, Path]
    ) -> ArchiveSummary:
        """
        Zip the regular files directly inside ``source_dir``.

        Entries are stored by file name only, in sorted order.

        Raises:
            ArchiveError: If the source is missing or any read/write fails
        """
        source = Path(source_dir)
        dest = Path(destination)
        if not source.is_dir():
            raise ArchiveError(
                "Nothing to archive", details={"source_dir": str(source), "reason": "missing"}
            )

        tmp_path = dest.with_name(f".{dest.name}.part")
        file_count = 0
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(
                tmp_path,
                mode="w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=self.compresslevel,
            ) as zf:
                for path in sorted(source.iterdir()):
                    if not path.is_file():
                        continue
                    zf.write(path, arcname=path.name)
                    file_count += 1
            os.replace(tmp_path, dest)
        except (OSError, zipfile.BadZipFile, ValueError) as e:
            tmp_path.unlink(missing_ok=True)
            self.logger.error(
                "Archive build failed",
                source_dir=str(source),
                destination=str(dest),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ArchiveError("Archive could not be built", details={"error": str(e)})

        size = dest.stat().st_size
        self.logger.info(
            "Archive built", destination=str(dest), file_count=file_count, size_bytes=size
        )
        return ArchiveSummary(path=dest, file_count=file_count, size_bytes=size)

    async def build_async(
        self, source_dir: Union[str, Path], destination: Union[str, Path]
    ) -> ArchiveSummary:
        """Run ``build`` in a worker thread; returns once the archive is complete."""
        return await asyncio.to_thread(self.build, source_dir, destination)
