"""
LocalTasks - typed job errors and the DRF exception handler.

Every failure the job engine can report is a ``JobError`` subclass with a
stable ``code``. The handler turns those, DRF's own errors and anything
unexpected into ``{"message": ..., "code": ...}`` bodies.
"""
import logging

from django.conf import settings
from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Something went wrong!"


class JobError(exceptions.APIException):
    """Base exception for job lifecycle failures"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Job operation failed"
    default_code = "job_error"

    def __init__(self, message=None, errors=None):
        self.message = message or self.default_detail
        self.errors = errors
        super().__init__(detail=self.message, code=self.default_code)

    def to_dict(self):
        body = {'message': self.message, 'code': self.default_code}
        if self.errors:
            body['errors'] = self.errors
        return body


class NotFound(JobError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Job not found"
    default_code = "not_found"


class Forbidden(JobError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized to perform this action"
    default_code = "forbidden"


class InvalidState(JobError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Action not allowed in the job's current status"
    default_code = "invalid_state"


class ValidationError(JobError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation error"
    default_code = "validation_error"


class Conflict(JobError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Job was modified by another request, please retry"
    default_code = "conflict"


def _flatten(detail):
    if isinstance(detail, list) and len(detail) == 1:
        return _flatten(detail[0])
    return detail


def exception_handler(exc, context):
    """DRF ``EXCEPTION_HANDLER`` producing uniform error bodies."""
    if isinstance(exc, JobError):
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, Http404):
        exc = NotFound("Not found")
        return Response(exc.to_dict(), status=exc.status_code)

    response = drf_exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, exceptions.ValidationError):
            response.data = {
                'message': "Validation error",
                'code': ValidationError.default_code,
                'errors': exc.detail,
            }
        elif isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
            response.status_code = status.HTTP_401_UNAUTHORIZED
            response.data = {'message': "Please authenticate", 'code': 'not_authenticated'}
        else:
            codes = exc.get_codes() if isinstance(exc, exceptions.APIException) else None
            response.data = {
                'message': str(_flatten(exc.detail)) if hasattr(exc, 'detail') else str(exc),
                'code': _flatten(codes) if isinstance(_flatten(codes), str) else 'error',
            }
        return response

    view = context.get('view')
    if isinstance(exc, DatabaseError):
        logger.error(f"Database error in {view.__class__.__name__}: {str(exc)}", exc_info=exc)
    else:
        logger.error(f"Unhandled error in {view.__class__.__name__}: {str(exc)}", exc_info=exc)

    body = {'message': INTERNAL_ERROR_MESSAGE, 'code': 'internal_error'}
    if settings.DEBUG:
        body['detail'] = f"{exc.__class__.__name__}: {exc}"
    return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
