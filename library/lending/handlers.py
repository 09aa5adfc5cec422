from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import BorrowingConflictError, LendingError


def lending_exception_handler(exc, context):
    if isinstance(exc, BorrowingConflictError):
        return Response(
            {'errors': exc.message, 'code': exc.code, 'retryable': True},
            status=status.HTTP_409_CONFLICT,
        )
    if isinstance(exc, LendingError):
        return Response(
            {'errors': exc.message, 'code': exc.code},
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )
    return exception_handler(exc, context)
