"""namecast - personalized image batch generation service."""

__version__ = "1.0.0"
