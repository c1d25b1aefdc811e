# recipients/repository.py

import logging
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from pymongo import ASCENDING, MongoClient, ReturnDocument
from bson.errors import BSONError
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

RECIPIENTS_COLLECTION = "recipients"
FILES_COLLECTION = "files"


def connect(uri: str, db_name: str = None, timeout_ms: int = 3000):
    """
    Opens the process-wide MongoClient and returns the configured database.
    The client connects lazily; `timeout_ms` bounds how long any operation
    waits for an unreachable server (index creation at startup included).
    """
    client = MongoClient(uri, tz_aware=True, serverSelectionTimeoutMS=timeout_ms)
    if db_name:
        return client[db_name]
    return client.get_default_database(default="dokchain")


class RecipientRepository:
    """
    Data access layer for recipients and their embedded file entries.
    All direct MongoDB interactions live in this class.
    """

    def __init__(self, database):
        self.db = database
        self.recipients = database[RECIPIENTS_COLLECTION]
        self.files = database[FILES_COLLECTION]

    def ensure_indexes(self) -> None:
        """
        `name` is the recipient's identity, so it must be unique;
        the flat file records are queried by recipient name.
        """
        self.recipients.create_index([("name", ASCENDING)], unique=True)
        self.files.create_index([("recipient", ASCENDING)])

    def append_file(self, recipient_name: str, entry: dict) -> dict:
        """
        Atomically finds-or-creates the recipient named `recipient_name` and appends
        `entry` to its `files`. Returns the document as it is after the update.

        Also writes a flat copy of the entry to the files collection. That second
        write is best-effort: a failure is logged and never raised.
        """
        now = datetime.now(timezone.utc)
        entry = {"_id": ObjectId(), **entry, "createdAt": now}

        recipient = self.recipients.find_one_and_update(
            {"name": recipient_name},
            {
                "$push": {"files": entry},
                "$setOnInsert": {"createdAt": now},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"Appended file '{entry.get('filename')}' to recipient '{recipient_name}' "
                    f"({len(recipient.get('files', []))} file(s) total)")

        self._write_file_record(recipient_name, entry)
        return recipient

    def _write_file_record(self, recipient_name: str, entry: dict) -> None:
        record = {key: value for key, value in entry.items() if key != "_id"}
        record["recipient"] = recipient_name
        try:
            self.files.insert_one(record)
        except (PyMongoError, BSONError) as e:
            logger.warning(f"Could not write file record for recipient '{recipient_name}': {e}")

    def find_by_id(self, recipient_id) -> Optional[dict]:
        return self.recipients.find_one({"_id": ObjectId(recipient_id)})

    def find_by_name(self, name: str) -> Optional[dict]:
        return self.recipients.find_one({"name": name})

    def find_by_identifier(self, identifier: str) -> Optional[dict]:
        """
        Resolves `identifier` as an ObjectId first (when it is a valid one),
        then falls back to an exact name match.

        Returns:
            The recipient document or None if not found.
        """
        recipient = None
        if ObjectId.is_valid(identifier):
            recipient = self.find_by_id(identifier)
        if recipient is None:
            recipient = self.find_by_name(identifier)
        return recipient

