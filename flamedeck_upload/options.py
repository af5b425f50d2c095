"""Records passed into and out of the uploader."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UploadOptions:
    api_key: str
    scenario: str
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    commit_sha: Optional[str] = None
    branch: Optional[str] = None
    notes: Optional[str] = None
    folder_id: Optional[str] = None
    # raw JSON text, forwarded as-is once it parses
    metadata: Optional[str] = None
    public: bool = False
    api_url: Optional[str] = None


@dataclass(frozen=True)
class UploadResult:
    trace_id: str
    view_url: str
