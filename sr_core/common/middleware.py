from __future__ import annotations

import logging
import re
import time

from django.utils.deprecation import MiddlewareMixin

from sr_core.common.api.exceptions import ensure_request_id

logger = logging.getLogger(__name__)

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{8,64}$")


class RequestIdMiddleware(MiddlewareMixin):
    """
    Attaches a request id to every request and echoes it back.

    Behavior:
      - Reuses an incoming X-Request-ID header when it looks sane, otherwise generates one.
      - Sets request.request_id (read by the error envelope builder).
      - Adds X-Request-ID to the response.
      - Logs one line per /api/ request: method, path, status, duration.
    """

    REQUEST_META_KEY = "HTTP_X_REQUEST_ID"
    RESPONSE_HEADER = "X-Request-ID"

    LOGGED_PREFIXES = ("/api/",)
    QUIET_PREFIXES = ("/api/docs/", "/api/schema/")

    def _should_log(self, path: str) -> bool:
        if any(path.startswith(p) for p in self.QUIET_PREFIXES):
            return False
        return any(path.startswith(p) for p in self.LOGGED_PREFIXES)

    def process_request(self, request):
        incoming = request.META.get(self.REQUEST_META_KEY, "")
        if incoming and _VALID_REQUEST_ID.match(incoming):
            request.request_id = incoming
        else:
            ensure_request_id(request)
        request._started_at = time.monotonic()
        return None

    def process_response(self, request, response):
        rid = ensure_request_id(request)
        response[self.RESPONSE_HEADER] = rid

        path = getattr(request, "path", "") or ""
        if self._should_log(path):
            started = getattr(request, "_started_at", None)
            elapsed_ms = (time.monotonic() - started) * 1000 if started is not None else 0.0
            level = logging.WARNING if response.status_code >= 500 else logging.INFO
            logger.log(
                level,
                "%s %s -> %s (%.1fms) request_id=%s",
                request.method,
                path,
                response.status_code,
                elapsed_ms,
                rid,
            )
        return response
