from __future__ import annotations

from django.template import Context, Template, TemplateSyntaxError
from django.test import RequestFactory, SimpleTestCase

from apps.injection.resources.registry import PageResources


def render(source: str, request) -> str:
    return Template("{% load hyperdrive %}" + source).render(Context({"request": request}))


class HyperdriveTagsTests(SimpleTestCase):
    def setUp(self) -> None:
        self.request = RequestFactory().get("/")
        self.request.page_resources = PageResources()

    def test_register_and_enqueue_from_templates(self) -> None:
        out = render(
            '{% register_script "core" "/core.js" ver="1" %}'
            '{% register_script "app" "/app.js" deps="core, " %}'
            '{% register_style "site" "/site.css" enqueue=True %}'
            '{% enqueue_script "app" %}',
            self.request,
        )
        self.assertEqual(out, "")
        resources = self.request.page_resources
        self.assertEqual(resources.scripts.deps_for("app"), ("core",))
        self.assertEqual(resources.scripts.queue, ["app"])
        self.assertEqual(resources.styles.queue, ["site"])

    def test_hyperdrive_then_print_resources(self) -> None:
        out = render(
            '{% register_script "core" "/core.js" %}'
            '{% register_script "app" "/app.js" deps="core" enqueue=True %}'
            '{% register_script "shiv" "/shiv.js" conditional="lt IE 9" enqueue=True %}'
            "{% hyperdrive %}{% print_resources %}",
            self.request,
        )
        self.assertIn('fetchInject(["/app.js"], fetchInject(["/core.js"]));', out)
        self.assertIn('<!--[if lt IE 9]><script id="shiv-js" src="/shiv.js"></script><![endif]-->', out)
        self.assertNotIn('src="/app.js"', out)

    def test_print_resources_without_hyperdrive(self) -> None:
        out = render(
            '{% register_style "site" "/site.css" ver="2" enqueue=True %}'
            '{% register_script "core" "/core.js" %}'
            '{% register_script "app" "/app.js" deps="core" enqueue=True %}'
            "{% print_resources %}",
            self.request,
        )
        self.assertEqual(
            out,
            '<link rel="stylesheet" id="site-css" href="/site.css?ver=2">\n'
            '<script id="core-js" src="/core.js"></script>\n'
            '<script id="app-js" src="/app.js"></script>',
        )

    def test_request_is_required(self) -> None:
        with self.assertRaises(TemplateSyntaxError):
            Template("{% load hyperdrive %}{% hyperdrive %}").render(Context({}))
