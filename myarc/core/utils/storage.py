"""Local object storage for uploaded entry media."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

from flask import current_app
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)

EXTENSION_KEY = "object_storage"
UPLOAD_URL_PREFIX = "/uploads/"
_UPLOAD_REF_RE = re.compile(re.escape(UPLOAD_URL_PREFIX) + r"([A-Za-z0-9._-]+)")


class ObjectStorage:
    """Flat key/value file store rooted at the upload folder."""

    def __init__(self, root: str) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        safe = secure_filename(key)
        if not safe or safe != key:
            raise ValueError("invalid_key")
        return self.root / safe

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Deleted upload object %s", key)
        return True


def extract_upload_keys(html: str) -> List[str]:
    """Return object keys referenced as ``/uploads/<key>`` in entry markup."""
    keys: List[str] = []
    for key in _UPLOAD_REF_RE.findall(html or ""):
        if key not in keys:
            keys.append(key)
    return keys


def get_storage() -> ObjectStorage:
    return current_app.extensions[EXTENSION_KEY]
