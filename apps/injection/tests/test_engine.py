from __future__ import annotations

from django.test import SimpleTestCase, override_settings

from apps.injection.compose import engine
from apps.injection.resources.registry import PageResources


def page(*, cyclic: bool = False) -> PageResources:
    resources = PageResources()
    scripts = resources.scripts
    scripts.register("core", "/core.js", deps=["app"] if cyclic else ())
    scripts.register("app", "/app.js", deps=["core"])
    scripts.register("shiv", "/shiv.js", conditional="lt IE 9")
    scripts.enqueue("app")
    scripts.enqueue("shiv")
    return resources


class EngageTests(SimpleTestCase):
    def test_emits_inline_loader(self) -> None:
        resources = page()
        html = engine.engage(resources)

        self.assertTrue(html.startswith("<script>/*!\n * Hyperdrive v1.0.0-beta.3"))
        self.assertTrue(html.endswith("})();</script>"))
        self.assertIn("if (!window.fetch) return;", html)
        self.assertIn('fetchInject(["/app.js"], fetchInject(["/core.js"]));', html)

    def test_collected_resources_leave_the_queue(self) -> None:
        resources = page()
        engine.engage(resources)
        self.assertEqual(resources.scripts.queue, ["shiv"])

    def test_failure_emits_nothing_and_keeps_queue(self) -> None:
        resources = page(cyclic=True)
        with self.assertLogs("hyperdrive.engine", level="ERROR"):
            html = engine.engage(resources, max_depth=4)
        self.assertEqual(html, "")
        self.assertEqual(resources.scripts.queue, ["app", "shiv"])

    def test_unknown_dependency_falls_back(self) -> None:
        resources = PageResources()
        resources.scripts.register("app", "/app.js", deps=["missing"])
        resources.scripts.enqueue("app")
        with self.assertLogs("hyperdrive.engine", level="ERROR"):
            self.assertEqual(engine.engage(resources), "")
        self.assertEqual(resources.scripts.queue, ["app"])

    @override_settings(HYPERDRIVE_ENABLED=False)
    def test_disabled(self) -> None:
        resources = page()
        self.assertEqual(engine.engage(resources), "")
        self.assertEqual(resources.scripts.queue, ["app", "shiv"])

    def test_nothing_enqueued(self) -> None:
        self.assertEqual(engine.engage(PageResources()), "")

    def test_only_conditional_resources(self) -> None:
        resources = PageResources()
        resources.scripts.register("shiv", "/shiv.js", conditional="lt IE 9")
        resources.scripts.enqueue("shiv")
        self.assertEqual(engine.engage(resources), "")
        self.assertEqual(resources.scripts.queue, ["shiv"])


class PlanTests(SimpleTestCase):
    def test_plan_does_not_touch_the_page_registry(self) -> None:
        resources = page()
        flight = engine.plan(resources)

        self.assertEqual(flight.batches, [["/core.js"], ["/app.js"]])
        self.assertEqual(resources.scripts.queue, ["app", "shiv"])
        self.assertEqual(flight.resources.scripts.queue, ["shiv"])
        self.assertEqual([n.handle for n in flight.calibration], ["app"])

    def test_styles_are_batched_with_scripts(self) -> None:
        resources = page()
        resources.styles.register("site", "/site.css")
        resources.styles.enqueue("site")

        self.assertEqual(engine.plan(resources).batches, [["/core.js"], ["/app.js", "/site.css"]])
        self.assertEqual(engine.plan(resources, include_styles=False).batches, [["/core.js"], ["/app.js"]])

    def test_enter_hyperspace(self) -> None:
        self.assertEqual(engine.enter_hyperspace(""), "")
        self.assertEqual(engine.enter_hyperspace("go();"), "<script>go();</script>")
