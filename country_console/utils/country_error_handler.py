# country_console/utils/country_error_handler.py

import logging
from enum import Enum
from typing import Optional

from .country_api_service import (
    CountryAPIError,
    CountryNotFoundError,
    CountryServerError,
    CountryTransportError,
)

logger = logging.getLogger(__name__)

class ErrorKind(Enum):
    """Failures surfaced to the user"""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER = "server"
    TRANSPORT = "transport"

class CountryValidationError(Exception):
    """Raised locally, before any request is sent"""
    pass

class CountryErrorHandler:
    """Turns client-side and backend failures into user-facing messages"""

    @staticmethod
    def classify(exception: Exception) -> ErrorKind:
        if isinstance(exception, CountryValidationError):
            return ErrorKind.VALIDATION
        if isinstance(exception, CountryNotFoundError):
            return ErrorKind.NOT_FOUND
        if isinstance(exception, CountryTransportError):
            return ErrorKind.TRANSPORT
        return ErrorKind.SERVER

    @staticmethod
    def server_message(exception: Exception, fallback: str) -> str:
        """
        Most specific message for a failed request:
        structured body message > raw response text > fallback
        """
        if isinstance(exception, (CountryNotFoundError, CountryServerError)) and exception.message:
            return exception.message
        return fallback

    @staticmethod
    def log_error(operation: str, exception: Exception, context: Optional[dict] = None) -> ErrorKind:
        """Log a failure at a level matching its kind and return the kind"""
        kind = CountryErrorHandler.classify(exception)
        extra = {"operation": operation, "error_kind": kind.value}
        if isinstance(exception, CountryAPIError):
            extra["status_code"] = exception.status_code
        if context:
            extra.update(context)

        if kind == ErrorKind.VALIDATION:
            logger.info(f"Validation failed in {operation}: {exception}", extra=extra)
        elif kind == ErrorKind.NOT_FOUND:
            logger.warning(f"Not found in {operation}: {exception}", extra=extra)
        else:
            logger.error(f"Country API failure in {operation}: {exception}", extra=extra)
        return kind
