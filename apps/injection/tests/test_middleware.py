from __future__ import annotations

from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase

from apps.injection import services
from apps.injection.middleware.resources import PageResourcesMiddleware
from apps.injection.resources import registry


class PageResourcesMiddlewareTests(SimpleTestCase):
    def setUp(self) -> None:
        self._snapshot = registry.snapshot_defaults()
        registry.clear_defaults()
        registry.register_default("script", "app", "/app.js", enqueue=True)
        self.rf = RequestFactory()

    def tearDown(self) -> None:
        registry.restore_defaults(self._snapshot)

    def test_each_request_gets_a_fresh_copy_of_defaults(self) -> None:
        seen = []

        def view(request):
            seen.append(request.page_resources)
            request.page_resources.scripts.dequeue("app")
            return HttpResponse("ok")

        mw = PageResourcesMiddleware(view)
        mw(self.rf.get("/"))
        mw(self.rf.get("/"))

        self.assertIsNot(seen[0], seen[1])
        self.assertEqual(seen[1].scripts.queue, [])
        self.assertEqual(registry.defaults_for("script").queue, ["app"])

    def test_services_fallback_without_middleware(self) -> None:
        request = self.rf.get("/")
        resources = services.page_resources(request)
        self.assertIs(services.page_resources(request), resources)
        self.assertEqual(resources.scripts.queue, ["app"])
