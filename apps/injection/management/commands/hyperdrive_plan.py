"""Print the batches Hyperdrive would emit for a set of enqueued handles."""
from __future__ import annotations

import json

from django.core.management.base import BaseCommand, CommandError

from apps.injection.compose import engine
from apps.injection.compose.particles import to_nested
from apps.injection.compose.runtime import render_loader
from apps.injection.errors import HyperdriveError, UnknownHandle
from apps.injection.resources.registry import PageResources


class Command(BaseCommand):
    help = "Build a registry from the default manifests, enqueue handles and show the loading plan."

    def add_arguments(self, parser):
        parser.add_argument("handles", nargs="*", help="Script handles to enqueue (default: manifest enqueues).")
        parser.add_argument("--style", action="append", default=[], dest="styles", help="Style handle to enqueue.")
        parser.add_argument("--json", action="store_true", help="Dump the plan as JSON.")
        parser.add_argument("--snippet", action="store_true", help="Print the inline loader script.")

    def handle(self, *args, **options) -> None:
        resources = PageResources.from_defaults()
        try:
            for handle in options["handles"]:
                resources.scripts.enqueue(handle)
            for handle in options["styles"]:
                resources.styles.enqueue(handle)
        except UnknownHandle as exc:
            raise CommandError(str(exc)) from exc

        try:
            flight = engine.plan(resources)
        except HyperdriveError as exc:
            raise CommandError(f"Hyperdrive pipeline failed: {exc}") from exc

        if options["snippet"]:
            self.stdout.write(render_loader(flight.fold) if flight.fold.expression else "")
            return

        if options["json"]:
            payload = {
                "particles": to_nested(flight.particles),
                "batches": flight.batches,
                "expression": flight.fold.render(),
                "left_to_host": {
                    "scripts": list(flight.resources.scripts.queue),
                    "styles": list(flight.resources.styles.queue),
                },
            }
            self.stdout.write(json.dumps(payload, indent=2))
            return

        self.stdout.write("=== hyperdrive plan ===")
        if not flight.batches:
            self.stdout.write("(nothing to defer)")
        for idx, batch in enumerate(flight.batches, start=1):
            self.stdout.write(f"batch {idx}: {', '.join(batch)}")
        left = list(flight.resources.styles.queue) + list(flight.resources.scripts.queue)
        if left:
            self.stdout.write(f"left to host: {', '.join(left)}")
        self.stdout.write("=== end plan ===")
