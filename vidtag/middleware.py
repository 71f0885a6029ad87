"""Request middleware."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from pathlib import Path

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from whitenoise.middleware import WhiteNoiseMiddleware

from vidtag.logging import bind_log_context, reset_log_context


class RequestContextMiddleware:
    """Bind request id, path, language and user to log records for the request."""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.META.get("HTTP_X_REQUEST_ID") or uuid.uuid4().hex

        user = getattr(request, "user", None)
        user_id = user.pk if user is not None and user.is_authenticated else None

        token = bind_log_context(
            request_id=request_id,
            path=request.path,
            method=request.method,
            language=getattr(request, "LANGUAGE_CODE", None),
            user_id=user_id,
        )
        request.request_id = request_id  # type: ignore[attr-defined]
        try:
            response = self.get_response(request)
        finally:
            reset_log_context(token)

        response.headers.setdefault("X-Request-ID", request_id)
        return response


class MediaWhiteNoiseMiddleware(WhiteNoiseMiddleware):
    """WhiteNoise that also serves stored files from MEDIA_ROOT."""

    def __init__(self, get_response):
        super().__init__(get_response)
        media_root = getattr(settings, "MEDIA_ROOT", None)
        media_url = getattr(settings, "MEDIA_URL", "")
        if media_root and media_url.startswith("/"):
            prefix = media_url.strip("/")
            self.add_files(str(Path(media_root)), prefix=f"{prefix}/" if prefix else "")
