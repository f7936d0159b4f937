# apps/injection/middleware/resources.py
from apps.injection.resources.registry import PageResources


class PageResourcesMiddleware:
    """Attache un registre scripts/styles frais (copie des défauts) à chaque requête."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.page_resources = PageResources.from_defaults()
        return self.get_response(request)
