"""
settings.py — Django project configuration for the Captain Board backend

What this file configures
===============================================================================
- Core Django wiring (INSTALLED_APPS, MIDDLEWARE, TEMPLATES, DB)
- REST Framework defaults (JWT auth, IsAuthenticated, throttling)
- SimpleJWT (access/refresh) + blacklist app (logout invalidates refresh)
- CORS for FE ↔ BE requests
- Static handling via WhiteNoise
- Swagger (drf-yasg) configured to use Bearer tokens in the Authorize dialog
- CSP (django-csp v4) with img-src open to the image host
- Announcement board knobs (page size, image host, captain config key)

How environment variables drive behavior
===============================================================================
DJANGO_DEBUG                      -> Enables dev mode when true. Defaults to True locally.
DJANGO_SECRET_KEY                 -> Required when DJANGO_DEBUG=False (production).
DJANGO_ALLOWED_HOSTS              -> Comma-separated list of allowed hostnames in prod.
CORS_ALLOW_ALL_ORIGINS            -> Dev toggle to allow any origin (default True in dev).
CORS_ALLOWED_ORIGINS              -> Comma-separated list of exact origins (prod).
DATABASE_URL                      -> Postgres/SQLite URL; SQLite file when unset.
IMGBB_API_KEY                     -> API key for the image host. Uploads fail when unset.
IMGBB_UPLOAD_URL                  -> Upload endpoint (default https://api.imgbb.com/1/upload).
IMAGE_UPLOAD_TIMEOUT              -> Seconds before one image upload gives up (default 30).
ANNOUNCEMENTS_PAGE_SIZE           -> Records per feed page (default 5).
ANNOUNCEMENTS_MAX_PAGE_SIZE       -> Upper bound for ?page_size= on the API (default 50).
ANNOUNCEMENTS_REQUIRE_ALL_UPLOADS -> When true, one failed image upload blocks the post.
CAPTAIN_CONFIG_KEY                -> Key of the AdminConfig row holding the captain email.

Why some ordering matters
===============================================================================
- We compute DEBUG first so SECRET_KEY can enforce “prod requires a key.”
- SECRET_KEY only falls back to a dev key when DEBUG=True.
"""

from pathlib import Path
from datetime import timedelta
from urllib.parse import urlparse
import os
import sys

import dj_database_url


# ---------------------------
# Helpers for env parsing
# ---------------------------
def _get_bool(env_key: str, default: bool = False) -> bool:
    """Parse booleans from env like '1', 'true', 'yes'."""
    raw = os.environ.get(env_key, str(default))
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}

def _get_int(env_key: str, default: int) -> int:
    raw = os.environ.get(env_key)
    if raw is None or not raw.strip():
        return default
    return int(raw)

def _get_list(env_key: str, default=None):
    """Parse comma-separated lists from env (e.g., 'a.com,b.com')."""
    if default is None:
        default = []
    raw = os.environ.get(env_key)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]

def _origin_from(url: str) -> str:
    """Turn a full URL into an origin string (scheme://host[:port])."""
    p = urlparse(url or "")
    if not p.scheme or not p.hostname:
        return ""
    return f"{p.scheme}://{p.hostname}" + (f":{p.port}" if p.port else "")


BASE_DIR = Path(__file__).resolve().parent.parent

# Reads DJANGO_DEBUG from env. Defaults to True for dev.
DEBUG = _get_bool("DJANGO_DEBUG", True)

TESTING = "test" in sys.argv or "pytest" in sys.modules


# --- Frontend URL & CORS/CSRF (dev-friendly defaults) ---
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5173/")

CORS_ALLOW_ALL_ORIGINS = _get_bool("CORS_ALLOW_ALL_ORIGINS", DEBUG)

CORS_ALLOWED_ORIGINS = _get_list("CORS_ALLOWED_ORIGINS", [])
if not CORS_ALLOWED_ORIGINS and FRONTEND_URL:
    derived = _origin_from(FRONTEND_URL)
    if derived:
        CORS_ALLOWED_ORIGINS = [derived]

CSRF_TRUSTED_ORIGINS = _get_list("CSRF_TRUSTED_ORIGINS", [])
if not CSRF_TRUSTED_ORIGINS and FRONTEND_URL:
    derived = _origin_from(FRONTEND_URL)
    if derived:
        CSRF_TRUSTED_ORIGINS = [derived]


# --- Image hosting ------------------------------------------------------------
IMGBB_API_KEY = os.environ.get("IMGBB_API_KEY", "")
IMGBB_UPLOAD_URL = os.environ.get("IMGBB_UPLOAD_URL", "https://api.imgbb.com/1/upload")
IMAGE_UPLOAD_TIMEOUT = _get_int("IMAGE_UPLOAD_TIMEOUT", 30)

# --- Announcement board -------------------------------------------------------
ANNOUNCEMENTS_PAGE_SIZE = _get_int("ANNOUNCEMENTS_PAGE_SIZE", 5)
ANNOUNCEMENTS_MAX_PAGE_SIZE = _get_int("ANNOUNCEMENTS_MAX_PAGE_SIZE", 50)
ANNOUNCEMENTS_REQUIRE_ALL_UPLOADS = _get_bool("ANNOUNCEMENTS_REQUIRE_ALL_UPLOADS", False)
CAPTAIN_CONFIG_KEY = os.environ.get("CAPTAIN_CONFIG_KEY", "admin")

# Entry page for anyone without an identity (or a captain-only page visited by a non-captain)
LOGIN_URL = "/accounts/login/"
LOGIN_REDIRECT_URL = "/board/"
LOGOUT_REDIRECT_URL = "/accounts/login/"


# django-csp v4+ format. Hosted images come from any https origin the image host hands out.
CONTENT_SECURITY_POLICY = {
    "DIRECTIVES": {
        "img-src": ["'self'", "https:", "data:"],
        "frame-ancestors": ["'self'"],
    }
}


# SECRET_KEY with safe production enforcement
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY") or (
    "django-insecure-c4pt41n-b0ard-dev-0nly-k3y-(r2w!x9q#l7m@t5v" if DEBUG else None
)
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY must be set when DJANGO_DEBUG=False")


ALLOWED_HOSTS = _get_list("DJANGO_ALLOWED_HOSTS", [] if DEBUG else ["127.0.0.1"])


INSTALLED_APPS = [
    # Django core
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third-party
    'rest_framework',
    'corsheaders',
    'drf_yasg',                                   # Swagger/OpenAPI docs
    'rest_framework_simplejwt.token_blacklist',   # refresh-token blacklist

    # Local apps
    'users',
    'announcements',
    'csp',
]

SWAGGER_SETTINGS = {
    "USE_SESSION_AUTH": False,
    "SECURITY_DEFINITIONS": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Paste: Bearer <access-token>",
        }
    },
}

MIDDLEWARE = [
    # CORS should be as high as possible
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',

    'django.middleware.security.SecurityMiddleware',
    "csp.middleware.CSPMiddleware",
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    "DEFAULT_THROTTLE_CLASSES": [ "rest_framework.throttling.AnonRateThrottle" ],
    "DEFAULT_THROTTLE_RATES": {"anon": "10/min"},
}

# Disable throttling when running tests
if TESTING:
    REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=6),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
}

ROOT_URLCONF = 'board_backend.urls'
WSGI_APPLICATION = 'board_backend.wsgi.application'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]


# --- Database (DATABASE_URL when set; SQLite otherwise) ---
DB_URL = os.environ.get("DATABASE_URL", "").strip()
IS_POSTGRES = DB_URL.startswith("postgres://") or DB_URL.startswith("postgresql://")

if DB_URL:
    DATABASES = {
        "default": dj_database_url.parse(
            DB_URL,
            conn_max_age=600,
            ssl_require=IS_POSTGRES,
        )
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }


AUTHENTICATION_BACKENDS = [
    "django.contrib.auth.backends.ModelBackend",
]

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "django.request": {  # 500s, 404s with exceptions
            "handlers": ["console"],
            "level": "ERROR",
            "propagate": True,
        },
        "django": {
            "handlers": ["console"],
            "level": "INFO",
        },
        "announcements": {
            "handlers": ["console"],
            "level": "INFO",
        },
        "users": {
            "handlers": ["console"],
            "level": "INFO",
        },
    },
}
