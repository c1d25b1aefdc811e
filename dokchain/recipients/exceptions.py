"""Error taxonomy for the recipients app and the JSON failure envelope."""
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound
from rest_framework.response import Response
from rest_framework.views import exception_handler


class ClientInputError(APIException):
    """A required part of the request (file or recipient) is missing."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request."
    default_code = "client_input"


class UpstreamPinningError(APIException):
    """The pinning service rejected the upload or could not be reached."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Pinata upload failed"
    default_code = "upstream_pinning"

    def __init__(self, detail=None, details=None):
        super().__init__(detail)
        self.details = details


class StorageError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to fetch recipient files"
    default_code = "storage"


class RecipientNotFound(NotFound):
    default_detail = "Recipient not found"


def failure_body(message, details=None):
    body = {"success": False, "message": message}
    if details is not None:
        body["details"] = details
    return body


def failure_exception_handler(exc, context):
    """
    DRF exception handler that renders every error as
    {"success": false, "message": ..., "details"?: ...}.
    """
    response = exception_handler(exc, context)
    if response is None:
        # Not an APIException: let Django's 500 handling take over.
        return None

    if isinstance(exc, APIException):
        detail = exc.detail
        message = detail if isinstance(detail, str) else str(exc)
    else:
        message = str(exc)

    response.data = failure_body(message, getattr(exc, "details", None))
    return response


def failure_response(exc):
    """Response for an APIException raised and caught inside a view."""
    return Response(
        failure_body(str(exc.detail), getattr(exc, "details", None)),
        status=exc.status_code,
    )
