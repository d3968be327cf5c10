# config/settings/prod.py
from .base import *  # noqa

DEBUG = False
ALLOWED_HOSTS = env_list("DJANGO_ALLOWED_HOSTS")  # noqa: F405

SIMPLE_JWT["AUTH_COOKIE_SECURE"] = True  # noqa: F405
