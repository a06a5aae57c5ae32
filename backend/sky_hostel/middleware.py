"""
Request logging middleware.
"""
import logging
import time

from django.conf import settings

logger = logging.getLogger('sky_hostel.requests')

# Never written to the log
REDACTED_HEADERS = {'HTTP_AUTHORIZATION', 'HTTP_COOKIE'}


class RequestLoggingMiddleware:
    """
    Logs every request and its response status when
    REQUEST_LOGGING_ENABLED is set.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not getattr(settings, 'REQUEST_LOGGING_ENABLED', False):
            return self.get_response(request)

        start_time = time.time()
        level = logging.getLevelName(
            getattr(settings, 'REQUEST_LOGGING_LEVEL', 'INFO'))

        logger.log(
            level,
            f"INCOMING REQUEST: {request.method} {request.path} "
            f"User-Agent: {request.META.get('HTTP_USER_AGENT', 'unknown')[:50]}",
            extra={'context': {'headers': safe_headers(request.META)}}
        )

        try:
            response = self.get_response(request)
        except Exception as e:
            logger.error(
                f"ERROR handling request: {request.method} {request.path} "
                f"Error: {e}"
            )
            raise

        duration = time.time() - start_time
        logger.log(
            level,
            f"RESPONSE: {request.method} {request.path} "
            f"Status: {response.status_code} "
            f"Duration: {duration:.3f}s"
        )

        return response


def safe_headers(meta):
    """HTTP headers from a WSGI environ with credentials removed."""
    return {
        key: value
        for key, value in meta.items()
        if key.startswith('HTTP_') and key not in REDACTED_HEADERS
    }
