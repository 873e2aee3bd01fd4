"""
File Upload Utility - Validate and store resume files on disk.

Supported formats:
- PDF (.pdf)
- Word (.doc, .docx)

Max file size: 5MB (MAX_RESUME_SIZE_MB)
Stored as <upload_dir>/resumes/<epoch-ms>_<sanitized name>, served under /uploads.
"""

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from fastapi import UploadFile, HTTPException
from fastapi.staticfiles import StaticFiles

from app.core.config import Settings
from app.utils.text_utils import sanitize_filename

LOG = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {'.pdf', '.doc', '.docx'}
RESUME_SUBDIR = "resumes"


@dataclass
class StoredResume:
    filename: str        # original name sent by the browser
    stored_as: str       # name on disk
    path: Path           # absolute path on disk
    relative_path: str   # path under /uploads
    size: int


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


async def read_resume(file: UploadFile, max_size_bytes: int) -> bytes:
    """
    Validate type and size of an uploaded resume and return its bytes.

    Raises:
        HTTPException(400) on a disallowed extension or oversized file
    """
    ext = get_file_extension(file.filename or "")
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(status_code=400, detail="Only PDF, DOC, or DOCX files are allowed.")

    # limit + 1 bytes is enough to detect an oversized file
    content = await file.read(max_size_bytes + 1)
    if len(content) > max_size_bytes:
        max_mb = max_size_bytes // (1024 * 1024)
        raise HTTPException(status_code=400, detail=f"File too large. Max {max_mb} MB.")

    return content


def store_resume(content: bytes, filename: str, upload_dir: str) -> StoredResume:
    """Write resume bytes under upload_dir/resumes with a timestamped name."""
    target_dir = Path(upload_dir).resolve() / RESUME_SUBDIR
    target_dir.mkdir(parents=True, exist_ok=True)

    stored_as = f"{int(time.time() * 1000)}_{sanitize_filename(filename)}"
    path = target_dir / stored_as
    path.write_bytes(content)

    return StoredResume(
        filename=filename,
        stored_as=stored_as,
        path=path,
        relative_path=f"/uploads/{RESUME_SUBDIR}/{stored_as}",
        size=len(content),
    )


def remove_file(path: Path) -> bool:
    """Delete a stored file; returns False when it was already gone."""
    try:
        os.remove(path)
        LOG.info(f"Resume file deleted: {path}")
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        LOG.error(f"Error deleting resume file {path}: {e}")
        return False


def remove_file_later(path: Path, delay_seconds: float) -> None:
    """Background task: wait, then delete the file."""
    time.sleep(delay_seconds)
    remove_file(path)


def get_supported_formats(max_size_mb: int) -> dict:
    """Get info about supported file formats."""
    return {
        "supported_formats": [
            {"extension": ".pdf", "name": "PDF"},
            {"extension": ".doc", "name": "Word 97-2003 Document"},
            {"extension": ".docx", "name": "Word Document"}
        ],
        "max_size_mb": max_size_mb
    }


class UploadFiles(StaticFiles):
    """Serves settings.upload_dir, following changes to the setting."""

    def __init__(self, settings: Settings):
        self.settings = settings
        super().__init__(directory=settings.upload_dir, check_dir=False)

    async def __call__(self, scope, receive, send) -> None:
        if self.directory != self.settings.upload_dir:
            self.directory = self.settings.upload_dir
            self.all_directories = self.get_directories(self.directory)
            self.config_checked = False
        await super().__call__(scope, receive, send)
