"""
Service layer primitives shared by every app.

Services never let domain failures escape as exceptions; they raise one of
the ServiceException subclasses internally and hand a ServiceResult back to
views, tasks and commands.
"""
import logging
from typing import Any, Dict, Optional


class BaseService:
    """
    Parent for all services. Gives each subclass its own named logger and
    helpers that attach keyword context to the log record.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def log_info(self, message: str, **context) -> None:
        """
        Log at INFO level.

        Args:
            message: Human readable message
            **context: Stored on the record as `record.context`
        """
        self.logger.info(message, extra={'context': context})

    def log_warning(self, message: str, **context) -> None:
        self.logger.warning(message, extra={'context': context})

    def log_error(self, message: str, exception: Optional[Exception] = None, **context) -> None:
        """
        Log at ERROR level, with the traceback of `exception` when given.
        """
        self.logger.error(message, exc_info=exception, extra={'context': context})


class ServiceException(Exception):
    """
    Root of the service error family.

    `code` becomes ServiceResult.error_code and drives the HTTP status the
    views answer with. `details` is diagnostic data for logs.
    """

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ValidationError(ServiceException):
    """Caller input is missing or malformed."""


class NotFoundError(ServiceException):
    """A student or payment lookup matched nothing."""


class ExternalServiceError(ServiceException):
    """A third-party API call failed."""


class GatewayError(ExternalServiceError):
    """The payment gateway was unreachable, refused the call or sent an unreadable body."""


class PersistenceError(ServiceException):
    """A datastore read or write failed."""

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message, code="PERSISTENCE_ERROR", details=details)


class ServiceResult:
    """
    Outcome of a service call.

    Either `data` is set (success) or `error` and `error_code` are. Falsy
    when the call failed, so `if not result:` reads naturally.
    """

    def __init__(self, success: bool, data: Optional[Any] = None,
                 error: Optional[str] = None, error_code: Optional[str] = None,
                 details: Optional[Dict] = None):
        self.success = success
        self.data = data
        self.error = error
        self.error_code = error_code
        # Raw diagnostics such as the gateway's own error code; not for end users
        self.details = details or {}

    @classmethod
    def ok(cls, data: Any = None) -> 'ServiceResult':
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_code: Optional[str] = None,
             details: Optional[Dict] = None) -> 'ServiceResult':
        return cls(success=False, error=error, error_code=error_code, details=details)

    @classmethod
    def from_exception(cls, exc: ServiceException) -> 'ServiceResult':
        """Failed result carrying the exception's message, code and details."""
        return cls.fail(str(exc), error_code=exc.code, details=exc.details)

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        if self.success:
            return f"<ServiceResult ok data={self.data!r}>"
        return f"<ServiceResult failed code={self.error_code} error={self.error!r}>"
