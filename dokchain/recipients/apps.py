import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class RecipientsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'recipients'

    # Process-wide RecipientFileService, handed to the views by reference.
    service = None

    def ready(self):
        from pymongo.errors import PyMongoError
        from .services import build_recipient_file_service

        self.service = build_recipient_file_service()

        if settings.MONGO_ENSURE_INDEXES:
            try:
                self.service.repository.ensure_indexes()
            except PyMongoError as e:
                logger.warning(f"MongoDB connection error, indexes not ensured: {e}")
