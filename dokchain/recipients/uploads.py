# recipients/uploads.py
import logging
import os
import random
import time
from dataclasses import dataclass, asdict

from django.conf import settings

from .exceptions import ClientInputError

logger = logging.getLogger(__name__)


@dataclass
class BufferedFile:
    originalname: str
    filename: str
    mimetype: str
    size: int
    path: str
    absolute_path: str

    def to_dict(self) -> dict:
        """The public metadata of the buffered file (no absolute path)."""
        data = asdict(self)
        data.pop("absolute_path")
        return data


def generate_stored_name(original_name: str) -> str:
    """`<epoch millis>-<random integer><original extension>`"""
    _, ext = os.path.splitext(original_name or "")
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"


class UploadBuffer:
    """
    Writes incoming file parts to a local storage directory before they are pinned.
    The caller owns the buffered copy; nothing here ever deletes it.
    """

    def __init__(self, storage, base_dir=None):
        self.storage = storage
        self.base_dir = base_dir or settings.BASE_DIR

    def stage(self, file_obj) -> BufferedFile:
        if file_obj is None:
            raise ClientInputError("No file uploaded")

        original_name = os.path.basename(file_obj.name or "")
        # The storage appends a suffix if the generated name is somehow taken.
        saved_name = self.storage.save(generate_stored_name(original_name), file_obj)
        absolute_path = self.storage.path(saved_name)

        buffered = BufferedFile(
            originalname=original_name,
            filename=os.path.basename(saved_name),
            mimetype=getattr(file_obj, "content_type", None) or "application/octet-stream",
            size=self.storage.size(saved_name),
            path=os.path.relpath(absolute_path, self.base_dir),
            absolute_path=absolute_path,
        )
        logger.info(f"Buffered upload '{original_name}' as {buffered.path} ({buffered.size} bytes)")
        return buffered
