# sr_core/iam/openapi.py
from drf_spectacular.extensions import OpenApiAuthenticationExtension

from sr_core.iam.auth import access_cookie_name


class CookieOrHeaderJWTAuthenticationScheme(OpenApiAuthenticationExtension):
    target_class = "sr_core.iam.auth.CookieOrHeaderJWTAuthentication"
    name = "BearerOrCookieJWT"

    def get_security_definition(self, auto_schema):
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": f"Access token as a Bearer header or the `{access_cookie_name()}` cookie from /api/login/.",
        }
