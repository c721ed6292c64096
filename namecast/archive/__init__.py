"""Archive assembly."""

from namecast.archive.builder import ArchiveBuilder, ArchiveSummary

__all__ = ["ArchiveBuilder", "ArchiveSummary"]
