"""View mixins for common functionality"""

import logging

from rest_framework import status
from rest_framework.response import Response

from shop.services.base import ServiceError

logger = logging.getLogger(__name__)


class ServiceErrorResponseMixin:
    """
    Mixin for views that call the service layer

    Turns a ServiceError into the API error payload.
    """

    def service_error_response(self, error: ServiceError, status_code: int = status.HTTP_400_BAD_REQUEST) -> Response:
        """
        Build the error response

        Args:
            error: service error raised by a service method
            status_code: HTTP status (400 by default)

        Returns:
            Response: {"error": message, "code": code[, "details": ...]}
        """
        logger.info(
            "[API] service error | view=%s, code=%s, message=%s",
            self.__class__.__name__,
            error.code,
            error.message,
        )
        return Response(error.to_response(), status=status_code)
