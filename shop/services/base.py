"""Shared service layer utilities

Base exception and the call-logging decorator used by every service class.
"""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

SLOW_CALL_MS = 100


def log_service_call(func: Callable[..., T]) -> Callable[..., T]:
    """
    Service method call logging decorator

    - DEBUG lines on call start/finish with elapsed time (ms)
    - WARNING for slow calls (over 100ms)
    - WARNING for business errors (ServiceError subclasses)
    - ERROR with traceback for anything else

    Usage:
        @staticmethod
        @log_service_call
        def some_method(...):
            ...

    Note:
        password/token/secret kwargs are never logged.
    """

    @wraps(func)
    def wrapper(*args, **kwargs) -> T:
        module_name = func.__module__
        service_name = module_name.split(".")[-1].replace("_service", "").title().replace("_", "") + "Service"

        func_name = func.__name__
        start_time = time.perf_counter()

        safe_kwargs = {k: v for k, v in kwargs.items() if k not in ("password", "token", "secret")}

        logger.debug(
            "[%s.%s] call start | args=%s, kwargs=%s",
            service_name,
            func_name,
            args[1:3] if len(args) > 1 else (),
            safe_kwargs,
        )

        try:
            result = func(*args, **kwargs)
            elapsed = (time.perf_counter() - start_time) * 1000

            logger.debug(
                "[%s.%s] call done | elapsed=%.2fms",
                service_name,
                func_name,
                elapsed,
            )

            if elapsed > SLOW_CALL_MS:
                logger.warning(
                    "[%s.%s] slow call | elapsed=%.2fms",
                    service_name,
                    func_name,
                    elapsed,
                )

            return result

        except ServiceError as e:
            elapsed = (time.perf_counter() - start_time) * 1000
            logger.warning(
                "[%s.%s] business error | code=%s, message=%s, elapsed=%.2fms",
                service_name,
                func_name,
                e.code,
                e.message,
                elapsed,
            )
            raise

        except Exception as e:
            elapsed = (time.perf_counter() - start_time) * 1000
            logger.error(
                "[%s.%s] unexpected error | error=%s, elapsed=%.2fms",
                service_name,
                func_name,
                str(e),
                elapsed,
                exc_info=True,
            )
            raise

    return wrapper


class ServiceError(Exception):
    """
    Base exception for the service layer

    Attributes:
        message: error message
        code: error code returned to API clients
        details: extra context

    Usage:
        class CartServiceError(ServiceError):
            pass

        raise CartServiceError("Not enough stock", code="INSUFFICIENT_STOCK")
    """

    def __init__(self, message: str, code: str = "SERVICE_ERROR", details: dict | None = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_response(self) -> dict:
        """Error payload for API responses"""
        payload = {"error": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload
