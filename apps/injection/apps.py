from django.apps import AppConfig
import logging

log = logging.getLogger("hyperdrive.apps")


class InjectionConfig(AppConfig):
    name = "apps.injection"
    label = "injection"
    verbose_name = "Hyperdrive injection"

    def ready(self):
        from . import checks  # noqa: F401  (enregistre les system checks)
        from .resources import discovery

        # Ressources par défaut déclarées dans les manifests YAML
        count, warns = discovery.discover(override_existing=False)
        if count:
            log.info("Hyperdrive resources discovered: %d", count)
        for w in warns:
            log.warning(w)
