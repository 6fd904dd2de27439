from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional

from .errors import UploadError


PDF_MEDIA_TYPE = "application/pdf"
MAX_FILE_SIZE = 50 * 1024 * 1024
CONFIRMATION_SECONDS = 2.0


class Phase(str, Enum):
    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class Panel(str, Enum):
    DROP_ZONE = "drop_zone"
    FILE_INFO = "file_info"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SelectedFile:
    name: str
    media_type: str
    size: int
    data: bytes = field(default=b"", repr=False)


@dataclass(frozen=True)
class UploadForm:
    name: str = ""
    year: str = ""
    type: str = ""


@dataclass(frozen=True)
class UploadRequest:
    """Everything the pipeline needs, frozen at the moment of submission."""

    file: SelectedFile
    path: str
    name: str
    year: int
    type: str


@dataclass(frozen=True)
class StoredObject:
    path: str
    public_url: str


@dataclass(frozen=True)
class PdfFileRow:
    """Row sent to the metadata store; ``filename`` is the storage path."""

    filename: str
    original_name: str
    name: str
    year: int
    type: str
    file_size: int
    file_url: str


@dataclass(frozen=True)
class MetadataRecord:
    id: int
    filename: str
    original_name: str
    name: str
    year: int
    type: str
    file_size: int
    file_url: str
    created_at: Optional[str] = None


@dataclass(frozen=True)
class UploadOutcome:
    stored: StoredObject
    record: MetadataRecord


@dataclass(frozen=True)
class WorkflowState:
    phase: Phase = Phase.IDLE
    file: Optional[SelectedFile] = None
    form: UploadForm = field(default_factory=UploadForm)
    public_url: Optional[str] = None
    current_upload_id: Optional[int] = None
    error: Optional[UploadError] = None
    # Clock deadlines (seconds) for the copy/save confirmations.
    copied_until: float = 0.0
    saved_until: float = 0.0

    @property
    def submit_enabled(self) -> bool:
        return self.file is not None and self.phase is not Phase.LOADING

    @property
    def visible_panels(self) -> FrozenSet[Panel]:
        panels = {Panel.FILE_INFO if self.file is not None else Panel.DROP_ZONE}
        if self.phase is Phase.LOADING:
            panels.add(Panel.LOADING)
        elif self.phase is Phase.SUCCESS:
            panels.add(Panel.SUCCESS)
        elif self.phase is Phase.ERROR:
            panels.add(Panel.ERROR)
        return frozenset(panels)

    def copy_confirmed(self, now: float) -> bool:
        return now < self.copied_until

    def save_acknowledged(self, now: float) -> bool:
        return now < self.saved_until
