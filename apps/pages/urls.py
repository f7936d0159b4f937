from django.urls import path

from .views import HomeView, LegacyView

app_name = "pages"

urlpatterns = [
    path("", HomeView.as_view(), name="home"),
    path("legacy/", LegacyView.as_view(), name="legacy"),
]
