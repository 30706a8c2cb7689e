import os
import uuid
import logging
from pathlib import Path
from fastapi import UploadFile, HTTPException

logger = logging.getLogger(__name__)

UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", "uploads")).resolve()

ALLOWED_MIME_TYPES = {
    "image/png",
    "image/jpeg",
    "image/jpg",   # some clients send this
    "image/webp",
    "image/gif",
    "image/svg+xml",
}

# Fallback allowlist by extension (browsers sometimes send application/octet-stream)
ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp", ".gif", ".svg"}

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5 MB


def save_upload(file: UploadFile, subfolder: str = "project-logos") -> tuple[str, str, int]:
    """Store an uploaded image under UPLOAD_DIR. Returns (relative_path, original_name, size)."""
    original_name = Path(file.filename).name if file.filename else "unnamed"
    ext = Path(original_name).suffix.lower()
    content_type = (file.content_type or "").lower().strip()

    mime_ok = bool(content_type) and (content_type in ALLOWED_MIME_TYPES)
    ext_ok = ext in ALLOWED_EXTENSIONS
    if not mime_ok and not ext_ok:
        raise HTTPException(status_code=400, detail=f"File type not allowed: {file.content_type}")

    content = file.file.read()
    size = len(content)
    if size > MAX_FILE_SIZE:
        raise HTTPException(status_code=413, detail="File too large (max 5MB)")
    if size == 0:
        raise HTTPException(status_code=400, detail="Empty file")

    relative = f"{subfolder}/{uuid.uuid4().hex}{ext}"
    target = UPLOAD_DIR / relative
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.info(f"Stored upload: {relative} ({size} bytes)")
    except OSError as e:
        logger.error(f"Upload write failed for {relative}: {e}")
        raise HTTPException(status_code=500, detail="File upload failed")

    return relative, original_name, size


def delete_file(relative: str) -> bool:
    """Remove a stored file; a missing file is not an error."""
    try:
        (UPLOAD_DIR / relative).unlink(missing_ok=True)
        logger.info(f"Deleted upload: {relative}")
        return True
    except OSError as e:
        logger.error(f"Delete failed for {relative}: {e}")
        return False
