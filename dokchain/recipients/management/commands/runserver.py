# recipients/management/commands/runserver.py

from django.conf import settings
from django.core.management.commands.runserver import Command as RunserverCommand


class Command(RunserverCommand):
    """`runserver` that listens on settings.PORT when no address is given."""
    default_port = str(settings.PORT)
