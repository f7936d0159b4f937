# hyperdrive/settings/base.py
from __future__ import annotations
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# Inerte si .env absent
_dotenv_path = find_dotenv(filename=os.getenv("DOTENV_FILE", ".env"), usecwd=True)
if _dotenv_path:
    load_dotenv(_dotenv_path, override=False)

BASE_DIR = Path(__file__).resolve().parents[2]  # racine du repo (manage.py)

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return bool(default)
    return str(value).strip().lower() in _TRUE_VALUES


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return int(default)


# --------------------------------------------------------------------------------------
# Clés & debug
# --------------------------------------------------------------------------------------
SECRET_KEY = os.getenv('SECRET_KEY', 'CHANGE_ME_DEV_ONLY')
DEBUG = False  # Par défaut: sécurisé. Dev.py le passera à True.

ALLOWED_HOSTS: list[str] = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "").split(",") if h.strip()]

# --------------------------------------------------------------------------------------
# Apps
# --------------------------------------------------------------------------------------
DJANGO_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.staticfiles',
]

LOCAL_APPS = [
    "apps.injection.apps.InjectionConfig",
    "apps.pages.apps.PagesConfig",
]

INSTALLED_APPS = DJANGO_APPS + LOCAL_APPS

# --------------------------------------------------------------------------------------
# Middleware
# WhiteNoise doit être juste après SecurityMiddleware
# --------------------------------------------------------------------------------------
MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    "apps.injection.middleware.resources.PageResourcesMiddleware",
]

ROOT_URLCONF = 'hyperdrive.urls'

# --------------------------------------------------------------------------------------
# Templates
# --------------------------------------------------------------------------------------
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.template.context_processors.debug',
            ],
        },
    },
]

WSGI_APPLICATION = 'hyperdrive.wsgi.application'

# --------------------------------------------------------------------------------------
# Database (aucun modèle ; sqlite suffit pour le runner de tests)
# --------------------------------------------------------------------------------------
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

LANGUAGE_CODE = 'en'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# --------------------------------------------------------------------------------------
# Static
# --------------------------------------------------------------------------------------
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"
    },
}

# --------------------------------------------------------------------------------------
# Hyperdrive
# --------------------------------------------------------------------------------------
HYPERDRIVE_ENABLED = env_flag("HYPERDRIVE_ENABLED", default=True)
HYPERDRIVE_MAX_DEPTH = max(1, _int_env("HYPERDRIVE_MAX_DEPTH", 32))
# Quirk hérité : le premier batch [""] n'est jamais sauté. True = normaliser.
HYPERDRIVE_SKIP_EMPTY_FIRST_BATCH = env_flag("HYPERDRIVE_SKIP_EMPTY_FIRST_BATCH", default=False)
HYPERDRIVE_INCLUDE_STYLES = env_flag("HYPERDRIVE_INCLUDE_STYLES", default=True)
HYPERDRIVE_MANIFESTS = [BASE_DIR / "configs" / "hyperdrive" / "resources.yml"]

# --------------------------------------------------------------------------------------
# Sécurité (par défaut sûrs; dev.py relâche)
# --------------------------------------------------------------------------------------
SECURE_SSL_REDIRECT = env_flag("SECURE_SSL_REDIRECT", default=True)
SECURE_REFERRER_POLICY = "same-origin"
SECURE_CROSS_ORIGIN_OPENER_POLICY = "same-origin"
X_FRAME_OPTIONS = "DENY"

if os.getenv('USE_X_FORWARDED_PROTO', '1') in ('1', 'true', 'True'):
    SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

# --------------------------------------------------------------------------------------
# Logging (propre, exploitable)
# --------------------------------------------------------------------------------------
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '[{levelname}] {name}: {message}', 'style': '{'},
        'verbose': {'format': '{asctime} [{levelname}] {name} {module}:{lineno} - {message}', 'style': '{'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'verbose'},
    },
    'root': {'handlers': ['console'], 'level': LOG_LEVEL},
    'loggers': {
        'django.request': {'handlers': ['console'], 'level': 'WARNING', 'propagate': True},
        'hyperdrive': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
    },
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Playwright suite (navigateur réel) désactivée par défaut
ENABLE_PLAYWRIGHT_TESTS = env_flag("ENABLE_PLAYWRIGHT_TESTS", default=False)
