from django.urls import include, path
from rest_framework import routers

from .api_views import AgendamentoViewSet, BloqueioHorarioViewSet, DisponibilidadeViewSet

router = routers.DefaultRouter()
router.register(r"disponibilidades", DisponibilidadeViewSet, basename="disponibilidade")
router.register(r"bloqueios", BloqueioHorarioViewSet, basename="bloqueio")
router.register(r"agendamentos", AgendamentoViewSet, basename="agendamento")

app_name = "agendamentos"
urlpatterns = [
    path("api/", include(router.urls)),
]
