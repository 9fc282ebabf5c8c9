from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence
from urllib.parse import quote

from ..models import MessageResponse
from ..models_media import ALLOWED_UPLOAD_TYPES, MAX_UPLOAD_BYTES, MultipleUploadResponse, UploadResponse
from .base import BaseClient


@dataclass(frozen=True)
class FileCheck:
    is_valid: bool
    error: str | None = None


def guess_content_type(path: Path) -> str:
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or "application/octet-stream"


def validate_file(path: Path) -> FileCheck:
    if path.stat().st_size > MAX_UPLOAD_BYTES:
        return FileCheck(False, "File size must be less than 10MB")
    if guess_content_type(path) not in ALLOWED_UPLOAD_TYPES:
        return FileCheck(False, "Invalid file type. Only images, PDFs, and documents are allowed.")
    return FileCheck(True)


def format_file_size(size: int) -> str:
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


class UploadClient(BaseClient):
    async def upload_file(self, path: Path) -> UploadResponse:
        files = {"file": (path.name, path.read_bytes(), guess_content_type(path))}
        data = await self._request("POST", "/api/upload/single", files=files)
        return self._parse(UploadResponse, data)

    async def upload_files(self, paths: Sequence[Path]) -> MultipleUploadResponse:
        files = [("files", (path.name, path.read_bytes(), guess_content_type(path))) for path in paths]
        data = await self._request("POST", "/api/upload/multiple", files=files)
        return self._parse(MultipleUploadResponse, data or {})

    async def delete_file(self, public_id: str) -> MessageResponse:
        data = await self._request("DELETE", f"/api/upload/{quote(public_id, safe='')}")
        return self._parse(MessageResponse, data or {})
