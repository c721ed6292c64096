"""Session model."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Session(BaseModel):
    """Server-side state of one upload until it is downloaded or invalidated."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    session_id: str
    created_at: str
    created_ts: float
    template_path: Optional[str] = None
    list_path: Optional[str] = None
    list_extension: Optional[str] = None
    names: List[str] = Field(default_factory=list)
    cleanup_paths: List[str] = Field(default_factory=list)

    @property
    def is_ready(self) -> bool:
        """Both a template and at least one name are present."""
        return bool(self.template_path) and len(self.names) > 0
