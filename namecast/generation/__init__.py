"""Batch generation."""

from namecast.generation.engine import BatchGenerationEngine, GenerationResult
from namecast.generation.window import BatchWindow, artifact_filename, slugify_name

__all__ = [
    "BatchGenerationEngine",
    "GenerationResult",
    "BatchWindow",
    "artifact_filename",
    "slugify_name",
]
