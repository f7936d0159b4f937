"""
URL configuration for the hyperdrive project.

The demo pages app is mounted at the root; static files are served by
WhiteNoise (or by the staticfiles app in DEBUG).
"""
from django.urls import include, path

urlpatterns = [
    path("", include(("apps.pages.urls", "pages"), namespace="pages")),
]
