from __future__ import annotations

from django.test import SimpleTestCase

from apps.injection.errors import UnknownHandle
from apps.injection.resources import registry
from apps.injection.resources.registry import PageResources, Resource, ResourceRegistry


class ResourceTests(SimpleTestCase):
    def test_url_appends_version_only_with_src(self) -> None:
        self.assertEqual(Resource("a", "/a.js", ver="1.2").url, "/a.js?ver=1.2")
        self.assertEqual(Resource("a", "/a.js").url, "/a.js")
        self.assertEqual(Resource("group", "", ver="1.2").url, "")


class ResourceRegistryTests(SimpleTestCase):
    def test_first_registration_wins(self) -> None:
        reg = ResourceRegistry()
        self.assertTrue(reg.register("a", "/a.js"))
        self.assertFalse(reg.register("a", "/other.js"))
        self.assertEqual(reg.src_for("a"), "/a.js")

    def test_deps_are_normalized_to_tuple(self) -> None:
        reg = ResourceRegistry()
        reg.register("a", "/a.js", deps=["x", "y"])
        reg.register("b", "/b.js", deps="x")
        reg.register("c", "/c.js", deps=None)
        self.assertEqual(reg.deps_for("a"), ("x", "y"))
        self.assertEqual(reg.deps_for("b"), ("x",))
        self.assertEqual(reg.deps_for("c"), ())

    def test_blank_handle_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ResourceRegistry().register("  ", "/a.js")

    def test_unknown_kind_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ResourceRegistry("image")

    def test_enqueue_and_dequeue(self) -> None:
        reg = ResourceRegistry()
        reg.register("a", "/a.js")
        reg.enqueue("a")
        reg.enqueue("a")
        self.assertEqual(reg.queue, ["a"])
        self.assertTrue(reg.is_enqueued("a"))
        reg.dequeue("a")
        reg.dequeue("a")
        self.assertEqual(reg.queue, [])

    def test_enqueue_unknown_handle_raises(self) -> None:
        with self.assertRaises(UnknownHandle) as ctx:
            ResourceRegistry("style").enqueue("missing")
        self.assertEqual(ctx.exception.handle, "missing")
        self.assertEqual(ctx.exception.kind, "style")

    def test_resolve_queue_orders_dependencies_first_once(self) -> None:
        reg = ResourceRegistry()
        reg.register("core", "/core.js")
        reg.register("lib", "", deps=["core"])
        reg.register("a", "/a.js", deps=["lib"])
        reg.register("b", "/b.js", deps=["core", "missing"])
        reg.enqueue("a")
        reg.enqueue("b")
        with self.assertLogs("hyperdrive.registry", level="WARNING"):
            ordered = [r.handle for r in reg.resolve_queue()]
        self.assertEqual(ordered, ["core", "lib", "a", "b"])

    def test_resolve_queue_breaks_cycles(self) -> None:
        reg = ResourceRegistry()
        reg.register("a", "/a.js", deps=["b"])
        reg.register("b", "/b.js", deps=["a"])
        reg.enqueue("a")
        with self.assertLogs("hyperdrive.registry", level="WARNING"):
            self.assertEqual([r.handle for r in reg.resolve_queue()], ["b", "a"])

    def test_copy_is_independent(self) -> None:
        reg = ResourceRegistry()
        reg.register("a", "/a.js")
        reg.enqueue("a")
        clone = reg.copy()
        clone.dequeue("a")
        clone.register("b", "/b.js")
        self.assertEqual(reg.queue, ["a"])
        self.assertNotIn("b", reg.registered)


class PageResourcesTests(SimpleTestCase):
    def test_adopt_takes_queues_from_working_copy(self) -> None:
        resources = PageResources()
        resources.scripts.register("a", "/a.js")
        resources.scripts.enqueue("a")
        working = resources.copy()
        working.scripts.dequeue("a")
        self.assertEqual(resources.scripts.queue, ["a"])
        resources.adopt(working)
        self.assertEqual(resources.scripts.queue, [])

    def test_for_kind(self) -> None:
        resources = PageResources()
        self.assertIs(resources.for_kind("style"), resources.styles)
        self.assertIs(resources.for_kind("script"), resources.scripts)
        with self.assertRaises(ValueError):
            resources.for_kind("font")


class DefaultsRegistryTests(SimpleTestCase):
    def setUp(self) -> None:
        self._snapshot = registry.snapshot_defaults()
        registry.clear_defaults()

    def tearDown(self) -> None:
        registry.restore_defaults(self._snapshot)

    def test_bulk_register_reports_invalid_and_collisions(self) -> None:
        count, warnings = registry.bulk_register(
            "script",
            [
                {"handle": "core", "src": "/core.js", "ver": "1"},
                {"handle": "app", "src": "/app.js", "deps": ["core"], "enqueue": True},
                {"handle": "core", "src": "/other.js"},
                {"src": "/nameless.js"},
                "not-a-mapping",
            ],
        )
        self.assertEqual(count, 2)
        self.assertEqual(len(warnings), 3)
        self.assertIn("collision", warnings[0])

        reg = registry.defaults_for("script")
        self.assertEqual(reg.src_for("core"), "/core.js?ver=1")
        self.assertEqual(reg.queue, ["app"])

    def test_bulk_register_override(self) -> None:
        registry.bulk_register("style", [{"handle": "site", "src": "/a.css"}])
        count, warnings = registry.bulk_register("style", [{"handle": "site", "src": "/b.css"}], override=True)
        self.assertEqual((count, warnings), (1, []))
        self.assertEqual(registry.defaults_for("style").src_for("site"), "/b.css")

    def test_defaults_are_copied_per_request(self) -> None:
        registry.register_default("script", "app", "/app.js", enqueue=True)
        first = PageResources.from_defaults()
        first.scripts.dequeue("app")
        second = PageResources.from_defaults()
        self.assertEqual(second.scripts.queue, ["app"])
        self.assertEqual(registry.default_handles("script"), ["app"])
