from __future__ import annotations

from typing import List, Literal

from pydantic import Field

from .models import MirrorModel

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
ALLOWED_UPLOAD_TYPES = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
    }
)


class UploadedFile(MirrorModel):
    name: str
    url: str
    public_id: str
    type: Literal["image", "pdf", "document"] = "document"
    size: int = 0
    format: str | None = None


class UploadResponse(MirrorModel):
    message: str = ""
    file: UploadedFile


class MultipleUploadResponse(MirrorModel):
    message: str = ""
    files: List[UploadedFile] = Field(default_factory=list)
