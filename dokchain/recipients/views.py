# recipients/views.py
import logging

from django.apps import apps
from django.http import HttpResponse
from django.views.decorators.http import require_GET
from pymongo.errors import PyMongoError
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import (
    ClientInputError, RecipientNotFound, StorageError, UpstreamPinningError, failure_body, failure_response,
)
from .serializers import RecipientFilesSerializer, UploadResponseSerializer

logger = logging.getLogger(__name__)


@require_GET
def banner_view(request):
    return HttpResponse('Dokchain API: POST /upload to upload files', content_type='text/plain')


class RecipientServiceMixin:
    @property
    def service(self):
        return apps.get_app_config('recipients').service


class FileUploadAPIView(RecipientServiceMixin, APIView):
    """
    Expects a multipart form with a `file` part and a `recipient` field.
    The file is buffered, pinned, then recorded under the recipient.
    """
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        file_obj = request.FILES.get('file')
        recipient = request.data.get('recipient')

        try:
            outcome = self.service.upload(file_obj=file_obj, recipient=recipient)
        except (ClientInputError, UpstreamPinningError) as e:
            return failure_response(e)
        except Exception as e:
            logger.error(f"Unexpected error during upload: {e}", exc_info=True)
            return Response(failure_body("An unexpected error occurred during file upload."),
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(UploadResponseSerializer(outcome).data)


class RecipientFilesAPIView(RecipientServiceMixin, APIView):

    def get(self, request, identifier):
        try:
            recipient = self.service.find_files(identifier=identifier)
        except RecipientNotFound as e:
            return failure_response(e)
        except PyMongoError as e:
            logger.error(f"Failed to fetch files for recipient '{identifier}': {e}", exc_info=True)
            return failure_response(StorageError(str(e) or None))

        return Response(RecipientFilesSerializer(recipient).data, status=status.HTTP_200_OK)
