from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/v1/bot/", include("apps.rates.api.v1.urls")),
]
