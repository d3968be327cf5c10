# sr_core/iam/auth.py
from __future__ import annotations

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication


def access_cookie_name() -> str:
    return (getattr(settings, "SIMPLE_JWT", {}) or {}).get("AUTH_COOKIE", "sr_access")


class CookieOrHeaderJWTAuthentication(JWTAuthentication):
    """Bearer header when present, otherwise the access cookie set at login."""

    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            raw_token = self.get_raw_token(header)
        else:
            raw_token = request.COOKIES.get(access_cookie_name())

        if not raw_token:
            return None

        token = self.get_validated_token(raw_token)
        return self.get_user(token), token
