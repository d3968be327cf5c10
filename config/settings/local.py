# config/settings/local.py
from .base import *  # noqa

DEBUG = True

# any dev origin unless CORS_ALLOWED_ORIGINS narrows it
CORS_ALLOW_ALL_ORIGINS = not CORS_ALLOWED_ORIGINS  # noqa: F405
