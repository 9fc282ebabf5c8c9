from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from urllib.parse import unquote

_FILENAME_STAR_RE = re.compile(r"filename\*\s*=\s*(?:[\w-]+'[\w-]*')?([^;]+)", re.IGNORECASE)
_FILENAME_RE = re.compile(r"filename\s*=\s*([^;]+)", re.IGNORECASE)


@dataclass(frozen=True)
class DownloadedFile:
    filename: str
    content: bytes
    content_type: str | None = None

    def save(self, directory: str | Path) -> Path:
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / Path(self.filename).name
        target.write_bytes(self.content)
        return target


def default_export_filename(prefix: str, today: date | None = None) -> str:
    stamp = (today or date.today()).isoformat()
    return f"{prefix}_report_{stamp}.xlsx"


def filename_from_content_disposition(header: str | None) -> str | None:
    if not header:
        return None
    starred = _FILENAME_STAR_RE.search(header)
    if starred:
        name = unquote(starred.group(1).strip().strip('"'))
        if name:
            return name
    plain = _FILENAME_RE.search(header)
    if plain:
        name = plain.group(1).strip().replace('"', "")
        if name:
            return name
    return None
