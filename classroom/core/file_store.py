"""
File storage for assignment attachments, submission files and course resources.

Rows only ever store the key returned by ``upload``; ``to_url`` turns it into
something a browser can fetch. Older rows may already hold absolute URLs,
which ``to_url`` hands back untouched.
"""

import logging
import re
import shutil
import uuid
from pathlib import Path

from fastapi import UploadFile

from classroom.core.config import settings

logger = logging.getLogger(__name__)

ASSIGNMENTS = "assignments"
SUBMISSIONS = "submissions"
RESOURCES = "resources"

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]+")


def is_absolute_url(value: str) -> bool:
    return bool(_SCHEME_RE.match(value))


def _safe_filename(filename: str | None) -> str:
    name = Path(filename or "file").name
    return _UNSAFE_CHARS_RE.sub("_", name) or "file"


class LocalFileStore:
    def __init__(self, root: str | Path, public_url: str):
        self.root = Path(root)
        self.public_url = public_url.rstrip("/")

    def upload(self, file: UploadFile, category: str) -> str:
        key = f"{category}/{uuid.uuid4().hex}-{_safe_filename(file.filename)}"
        target = self.root / key
        target.parent.mkdir(parents=True, exist_ok=True)

        with target.open("wb") as out:
            shutil.copyfileobj(file.file, out)

        logger.info("Stored %s (%s)", key, file.content_type)
        return key

    def to_url(self, key: str | None) -> str | None:
        if not key:
            return None
        if is_absolute_url(key):
            return key
        return f"{self.public_url}/{key}"


def get_file_store() -> LocalFileStore:
    return LocalFileStore(settings.UPLOAD_DIR, settings.PUBLIC_FILES_URL)


def is_pdf(file: UploadFile) -> bool:
    return file.content_type == "application/pdf" or (
        file.filename or ""
    ).lower().endswith(".pdf")
