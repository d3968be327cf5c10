# sr_core/iam/api/auth.py
"""
Login, token refresh and logout for the registration front end.

The JWT pair travels as two HttpOnly cookies (names in ``SIMPLE_JWT``);
API clients may still send the access token as a Bearer header.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.contrib.auth.models import update_last_login
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.settings import api_settings as jwt_api_settings
from rest_framework_simplejwt.tokens import RefreshToken

from sr_core.iam.api.schema_serializers import (
    LoginRequestSerializer,
    LoginResponseSerializer,
    LogoutResponseSerializer,
    RefreshResponseSerializer,
)
from sr_core.iam.selectors import find_user_by_email, user_summary

logger = logging.getLogger(__name__)

CREDENTIALS_REQUIRED_MSG = "Email and password are required"
INVALID_CREDENTIALS_MSG = "Invalid email or password"
LOGIN_OK_MSG = "Login successful"


class InvalidCredentials(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = INVALID_CREDENTIALS_MSG
    default_code = "invalid_credentials"


class AuthCookies:
    """Reads and writes the access/refresh cookie pair."""

    def __init__(self):
        cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
        self.access_name = cfg.get("AUTH_COOKIE", "sr_access")
        self.refresh_name = cfg.get("AUTH_COOKIE_REFRESH", "sr_refresh")
        self.secure = bool(cfg.get("AUTH_COOKIE_SECURE", False))
        self.samesite = cfg.get("AUTH_COOKIE_SAMESITE", "Lax")

    def refresh_token(self, request) -> str | None:
        return request.COOKIES.get(self.refresh_name)

    def store(self, response: Response, *, access: str, refresh: str) -> None:
        pairs = (
            (self.access_name, access, jwt_api_settings.ACCESS_TOKEN_LIFETIME),
            (self.refresh_name, refresh, jwt_api_settings.REFRESH_TOKEN_LIFETIME),
        )
        for name, token, lifetime in pairs:
            response.set_cookie(
                name,
                token,
                max_age=int(lifetime.total_seconds()),
                httponly=True,
                secure=self.secure,
                samesite=self.samesite,
                path="/",
            )

    def clear(self, response: Response) -> None:
        response.delete_cookie(self.access_name, path="/")
        response.delete_cookie(self.refresh_name, path="/")


def authenticate_email(email: str, password: str):
    """Active user whose email and password match, else InvalidCredentials."""
    user = find_user_by_email(email)
    if user is None or not user.is_active or not user.check_password(password):
        logger.info("login rejected email=%s", email)
        raise InvalidCredentials()
    return user


class LoginView(APIView):
    """
    Email + password login. Answers with the user summary the front end
    keeps in session storage and sets the JWT cookies.
    """
    permission_classes = [AllowAny]
    # stale cookies are ignored here
    authentication_classes: list = []

    @extend_schema(request=LoginRequestSerializer, responses={200: LoginResponseSerializer}, tags=["IAM"])
    def post(self, request):
        s = LoginRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        email = (s.validated_data.get("email") or "").strip()
        password = s.validated_data.get("password") or ""
        if not email or not password:
            raise ValidationError({"detail": CREDENTIALS_REQUIRED_MSG})

        user = authenticate_email(email, password)
        token = RefreshToken.for_user(user)
        if jwt_api_settings.UPDATE_LAST_LOGIN:
            update_last_login(None, user)

        res = Response({"success": True, "message": LOGIN_OK_MSG, "user": user_summary(user)})
        AuthCookies().store(res, access=str(token.access_token), refresh=str(token))
        logger.info("login ok user_id=%s", user.id)
        return res


class RefreshView(APIView):
    """Trades the refresh cookie for a new access cookie (and a rotated refresh)."""
    permission_classes = [AllowAny]
    authentication_classes: list = []

    @extend_schema(request=None, responses={200: RefreshResponseSerializer}, tags=["IAM"])
    def post(self, request):
        cookies = AuthCookies()
        current = cookies.refresh_token(request)

        s = TokenRefreshSerializer(data={"refresh": current})
        s.is_valid(raise_exception=True)

        res = Response({"detail": "refreshed"})
        cookies.store(res, access=s.validated_data["access"], refresh=s.validated_data.get("refresh", current))
        return res


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses={200: LogoutResponseSerializer}, tags=["IAM"])
    def post(self, request):
        res = Response({"detail": "logged out"})
        AuthCookies().clear(res)
        return res
