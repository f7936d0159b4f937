# apps/pages/views/views.py
from __future__ import annotations

import logging

from django.views.generic import TemplateView

from apps.injection import services

log = logging.getLogger("pages.home")


class HomeView(TemplateView):
    """
    Page d'accueil de démonstration.

    Le manifest apps/pages/hyperdrive.yml déclare les ressources du site ;
    la vue ajoute un script propre à la page. Le template engage Hyperdrive
    dans <head> puis laisse l'hôte imprimer ce qui reste (conditionnels).
    """
    template_name = "pages/home.html"

    def get(self, request, *args, **kwargs):
        services.register(
            request,
            "script",
            "demo-home",
            "/static/pages/js/home.js",
            deps=["demo-app"],
            ver="1.0.0",
            enqueue=True,
        )
        return super().get(request, *args, **kwargs)


class LegacyView(TemplateView):
    """Même page, Hyperdrive désactivé : chargement classique par balises."""
    template_name = "pages/legacy.html"
