# recipients/management/commands/ensure_indexes.py

from django.apps import apps
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = 'Creates the MongoDB indexes for the recipients and files collections.'

    def handle(self, *args, **options):
        repository = apps.get_app_config('recipients').service.repository
        repository.ensure_indexes()
        self.stdout.write(self.style.SUCCESS(
            f"Indexes ensured on '{repository.recipients.full_name}' and '{repository.files.full_name}'."
        ))
