from __future__ import annotations

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    DRF exception handler that keeps the default rendering for API exceptions and
    turns anything else into a logged, opaque 500.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    request = context.get("request")
    if isinstance(exc, DatabaseError):
        logger.exception(
            "Persistence failure in %s (%s %s)",
            view.__class__.__name__ if view else "unknown view",
            getattr(request, "method", "-"),
            getattr(request, "path", "-"),
        )
    else:
        logger.exception(
            "Unhandled error in %s (%s %s)",
            view.__class__.__name__ if view else "unknown view",
            getattr(request, "method", "-"),
            getattr(request, "path", "-"),
        )
    return Response({"detail": "Internal server error."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
