from .views import HomeView, LegacyView

__all__ = ["HomeView", "LegacyView"]
