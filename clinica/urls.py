"""Configuração principal de URLs da clínica.

Inclui o admin, a API da agenda e o endpoint /metrics (Prometheus).
"""

from __future__ import annotations

import json

from django.contrib import admin
from django.http import HttpRequest, HttpResponse
from django.urls import include, path
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from rest_framework.authtoken.views import obtain_auth_token


def metrics_view(_request: HttpRequest) -> HttpResponse:
    """Endpoint de métricas Prometheus."""
    try:
        output = generate_latest()
    except (ValueError, RuntimeError):  # falhas previsíveis ao gerar métricas
        return HttpResponse(
            json.dumps({"status": "error", "detail": "Falha ao gerar métricas"}),
            status=500,
            content_type="application/json",
        )
    return HttpResponse(output, content_type=CONTENT_TYPE_LATEST)


urlpatterns = [
    path("django-admin/", admin.site.urls),
    path("metrics/", metrics_view, name="metrics"),
    path("api/token/", obtain_auth_token, name="api-token"),
    path("", include("agendamentos.urls", namespace="agendamentos")),
]
