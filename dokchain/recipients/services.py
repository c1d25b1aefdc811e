# recipients/services.py
import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.core.files.storage import storages
from bson.errors import BSONError
from pymongo.errors import PyMongoError

from pinning_internals.clients import PinataClient, upstream_error_details
from .exceptions import ClientInputError, RecipientNotFound, UpstreamPinningError
from .repository import RecipientRepository, connect
from .uploads import BufferedFile, UploadBuffer

logger = logging.getLogger(__name__)


@dataclass
class UploadOutcome:
    file: BufferedFile
    pinata: dict
    recipient: Optional[dict]


class RecipientFileService:
    """
    The service layer for uploads: buffer to disk, pin, then record the file
    under its recipient. Built once per process (see RecipientsConfig.ready).
    """

    def __init__(self, *, upload_buffer: UploadBuffer, pinning_client: PinataClient,
                 repository: RecipientRepository):
        self.upload_buffer = upload_buffer
        self.pinning_client = pinning_client
        self.repository = repository

    def upload(self, *, file_obj, recipient: str) -> UploadOutcome:
        # 1. Buffer the file part to local disk. Raises ClientInputError when there is none.
        buffered = self.upload_buffer.stage(file_obj)

        # 2. Pin it. Any failure here ends the request.
        try:
            pin_result = self.pinning_client.pin(buffered.absolute_path, buffered.originalname)
        except Exception as e:
            logger.error(f"Pinning failed for {buffered.path}: {e}", exc_info=True)
            raise UpstreamPinningError(str(e) or None, details=upstream_error_details(e)) from e

        # 3. The recipient is checked only once the file is pinned.
        if not isinstance(recipient, str) or not recipient:
            logger.warning(f"Upload {buffered.filename} was pinned but no recipient was given.")
            raise ClientInputError("Missing recipient in request body")

        # 4. Record it. The pin already succeeded, so a storage failure must not fail the upload.
        entry = {**buffered.to_dict(), "pinata": pin_result}
        try:
            recipient_doc = self.repository.append_file(recipient, entry)
        except (PyMongoError, BSONError) as e:
            logger.warning(f"Failed to update recipient record for '{recipient}': {e}")
            recipient_doc = None

        return UploadOutcome(file=buffered, pinata=pin_result, recipient=recipient_doc)

    def find_files(self, *, identifier: str) -> dict:
        recipient = self.repository.find_by_identifier(identifier)
        if recipient is None:
            raise RecipientNotFound()
        return recipient


def build_recipient_file_service() -> RecipientFileService:
    """Wires the service from Django settings."""
    return RecipientFileService(
        upload_buffer=UploadBuffer(storages["uploads"]),
        pinning_client=PinataClient.from_settings(),
        repository=RecipientRepository(
            connect(settings.MONGO_URI, settings.MONGO_DB_NAME, settings.MONGO_TIMEOUT_MS)
        ),
    )
