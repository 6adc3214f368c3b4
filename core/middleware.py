import logging
import time

logger = logging.getLogger('localtasks.requests')


class RequestLoggingMiddleware:
    """Log one structured line per request.

    The method, path, status code, duration and caller id go out as
    ``extra`` fields so handlers can render them as key/value pairs or JSON.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)
        duration_ms = round((time.monotonic() - started) * 1000, 2)

        user = getattr(request, 'user', None)
        user_id = user.pk if user is not None and user.is_authenticated else None

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(
            level,
            f"{request.method} {request.path} {response.status_code}",
            extra={
                'method': request.method,
                'path': request.path,
                'status_code': response.status_code,
                'duration_ms': duration_ms,
                'user_id': user_id,
            },
        )
        return response
