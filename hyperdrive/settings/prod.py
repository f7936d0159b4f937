# hyperdrive/settings/prod.py
from .base import *

DEBUG = False

SITE_DOMAIN = os.getenv('SITE_DOMAIN')  # ex: "www.example.com"
if not SITE_DOMAIN:
    raise RuntimeError("SITE_DOMAIN n'est pas défini en production.")

ALLOWED_HOSTS = [SITE_DOMAIN, "127.0.0.1"] + ALLOWED_HOSTS
CSRF_TRUSTED_ORIGINS = [f"https://{SITE_DOMAIN}"]

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"

# Log niveau INFO/ERROR
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOGGING['root']['level'] = LOG_LEVEL
LOGGING['loggers']['django.request']['level'] = 'ERROR'
