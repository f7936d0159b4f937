# hyperdrive/settings/dev.py
# export DJANGO_SETTINGS_MODULE=hyperdrive.settings.dev

from .base import *

DEBUG = True

ALLOWED_HOSTS = ['127.0.0.1', 'localhost', 'testserver']

# Dev: pas de redirection SSL forcée
SECURE_SSL_REDIRECT = False

LOGGING['loggers']['hyperdrive']['level'] = 'DEBUG'

# Dev: permettre la recherche disque pour les fichiers statiques
WHITENOISE_AUTOREFRESH = True
WHITENOISE_USE_FINDERS = True
STORAGES["staticfiles"] = {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"}
