"""Este módulo contém as views da API para o app de agendamentos."""

from __future__ import annotations

from typing import ClassVar

from django.conf import settings
from django.db.models import QuerySet
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, permissions, status, viewsets
from rest_framework import serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.request import Request
from rest_framework.response import Response

from cadastros.models import Psicologo

from .calendario import PAPEL_PSICOLOGO, FiltrosCalendario, ModoVisualizacao, intervalo_visualizacao, projetar
from .exceptions import AgendamentoError, ConflitoAgendamento
from .filters import AgendamentoFilter
from .horarios import parse_hora
from .models import Agendamento, AuditoriaAgendamento, BloqueioHorario, DisponibilidadePsicologo
from .permissions import (
    IsAgendaPsicologoOuSecretaria,
    IsAgendaSecretaria,
    eh_secretaria,
    solicitante_do_usuario,
)
from .serializers import (
    AgendamentoSerializer,
    AtendimentoSerializer,
    AuditoriaAgendamentoSerializer,
    BloqueioHorarioSerializer,
    CalendarioQuerySerializer,
    DisponibilidadePsicologoSerializer,
    SlotSerializer,
    SlotsQuerySerializer,
    VisaoCalendarioSerializer,
)
from .services import (
    CAMPOS_EDITAVEIS,
    AgendamentoService,
    AtendimentoService,
    BloqueioService,
    DisponibilidadeService,
)

PERMISSOES_AGENDA: list[type[permissions.BasePermission]] = [
    permissions.IsAuthenticated,
    IsAgendaPsicologoOuSecretaria,
]


def _resposta_erro(exc: AgendamentoError) -> Response:
    """Converte erro de regra em resposta HTTP (409 para conflito, 400 para o resto)."""
    if isinstance(exc, ConflitoAgendamento):
        return Response(exc.resultado.como_dict(), status=status.HTTP_409_CONFLICT)
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


class _EscopoPsicologoMixin:
    """Psicólogos só enxergam e gravam os próprios registros."""

    def _solicitante(self):
        return solicitante_do_usuario(self.request.user)

    def _escopo(self, qs: QuerySet) -> QuerySet:
        solicitante = self._solicitante()
        if solicitante is None:
            return qs.none()
        if solicitante.papel == PAPEL_PSICOLOGO:
            return qs.filter(psicologo_id=solicitante.psicologo_id)
        return qs

    def _psicologo_para_gravacao(self, informado):
        solicitante = self._solicitante()
        if solicitante is not None and solicitante.papel == PAPEL_PSICOLOGO:
            if informado is not None and informado.pk != solicitante.psicologo_id:
                msg = "Psicólogos só podem gerenciar a própria agenda."
                raise PermissionDenied(msg)
            return Psicologo.objects.get(pk=solicitante.psicologo_id)
        if informado is None:
            raise drf_serializers.ValidationError({"psicologo": ["Este campo é obrigatório."]})
        return informado

    def _psicologo_id_para_consulta(self, informado_id):
        solicitante = self._solicitante()
        if solicitante is not None and solicitante.papel == PAPEL_PSICOLOGO:
            if informado_id is not None and informado_id != solicitante.psicologo_id:
                msg = "Psicólogos só podem consultar a própria agenda."
                raise PermissionDenied(msg)
            return solicitante.psicologo_id
        if informado_id is None:
            raise drf_serializers.ValidationError({"psicologo": ["Este campo é obrigatório."]})
        return informado_id


class DisponibilidadeViewSet(_EscopoPsicologoMixin, viewsets.ModelViewSet):
    """Janelas semanais de atendimento dos psicólogos."""

    queryset = DisponibilidadePsicologo.objects.select_related("psicologo")
    serializer_class = DisponibilidadePsicologoSerializer
    permission_classes: ClassVar[list[type[permissions.BasePermission]]] = PERMISSOES_AGENDA
    filter_backends: ClassVar = [DjangoFilterBackend]
    filterset_fields: ClassVar = ["psicologo", "dia_semana", "ativo", "remoto"]

    def get_queryset(self) -> QuerySet[DisponibilidadePsicologo]:
        return self._escopo(super().get_queryset()).order_by("psicologo_id", "dia_semana", "hora_inicio")

    def create(self, request: Request, *args, **kwargs) -> Response:
        try:
            return super().create(request, *args, **kwargs)
        except AgendamentoError as e:
            return _resposta_erro(e)

    def update(self, request: Request, *args, **kwargs) -> Response:
        try:
            return super().update(request, *args, **kwargs)
        except AgendamentoError as e:
            return _resposta_erro(e)

    def destroy(self, request: Request, *args, **kwargs) -> Response:
        try:
            return super().destroy(request, *args, **kwargs)
        except AgendamentoError as e:
            return _resposta_erro(e)

    def perform_create(self, serializer: drf_serializers.Serializer) -> None:
        dados = serializer.validated_data
        serializer.instance = DisponibilidadeService.criar_janela(
            psicologo=self._psicologo_para_gravacao(dados.get("psicologo")),
            dia_semana=dados["dia_semana"],
            hora_inicio=dados["hora_inicio"],
            hora_fim=dados["hora_fim"],
            remoto=dados.get("remoto", False),
        )

    def perform_update(self, serializer: drf_serializers.Serializer) -> None:
        campos = {k: v for k, v in serializer.validated_data.items() if k != "psicologo"}
        serializer.instance = DisponibilidadeService.atualizar_janela(serializer.instance, **campos)

    def perform_destroy(self, instance: DisponibilidadePsicologo) -> None:
        DisponibilidadeService.remover_janela(instance)

    @action(detail=True, methods=["post"])
    def desativar(self, request: Request, pk: str | None = None) -> Response:
        """Desativa a janela mantendo o histórico."""
        del request, pk
        janela = self.get_object()
        try:
            DisponibilidadeService.desativar_janela(janela)
        except AgendamentoError as e:
            return _resposta_erro(e)
        return Response(self.get_serializer(janela).data)


class BloqueioHorarioViewSet(
    _EscopoPsicologoMixin,
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Solicitação e aprovação de bloqueios de agenda."""

    queryset = BloqueioHorario.objects.select_related("psicologo")
    serializer_class = BloqueioHorarioSerializer
    permission_classes: ClassVar[list[type[permissions.BasePermission]]] = PERMISSOES_AGENDA
    filter_backends: ClassVar = [DjangoFilterBackend]
    filterset_fields: ClassVar = ["psicologo", "aprovado"]

    def get_queryset(self) -> QuerySet[BloqueioHorario]:
        return self._escopo(super().get_queryset())

    def create(self, request: Request, *args, **kwargs) -> Response:
        try:
            return super().create(request, *args, **kwargs)
        except AgendamentoError as e:
            return _resposta_erro(e)

    def perform_create(self, serializer: drf_serializers.Serializer) -> None:
        dados = serializer.validated_data
        serializer.instance = BloqueioService.solicitar(
            psicologo=self._psicologo_para_gravacao(dados.get("psicologo")),
            data_inicio=dados["data_inicio"],
            data_fim=dados["data_fim"],
            motivo=dados.get("motivo"),
        )

    @action(
        detail=True,
        methods=["post"],
        permission_classes=[permissions.IsAuthenticated, IsAgendaSecretaria],
    )
    def aprovar(self, request: Request, pk: str | None = None) -> Response:
        """Aprova o bloqueio (somente secretaria)."""
        del pk
        bloqueio = BloqueioService.aprovar(self.get_object(), user=request.user)
        return Response(self.get_serializer(bloqueio).data)


class AgendamentoViewSet(_EscopoPsicologoMixin, viewsets.ModelViewSet):
    """ViewSet para gerenciar Agendamentos."""

    queryset = Agendamento.objects.select_related("paciente", "psicologo", "sala", "filial")
    serializer_class = AgendamentoSerializer
    permission_classes: ClassVar[list[type[permissions.BasePermission]]] = PERMISSOES_AGENDA
    filter_backends: ClassVar = [DjangoFilterBackend]
    filterset_class = AgendamentoFilter

    def get_queryset(self) -> QuerySet[Agendamento]:
        return self._escopo(super().get_queryset()).order_by("data", "hora_inicio", "id")

    def create(self, request: Request, *args, **kwargs) -> Response:
        try:
            return super().create(request, *args, **kwargs)
        except AgendamentoError as e:
            return _resposta_erro(e)

    def update(self, request: Request, *args, **kwargs) -> Response:
        try:
            return super().update(request, *args, **kwargs)
        except AgendamentoError as e:
            return _resposta_erro(e)

    def perform_create(self, serializer: drf_serializers.Serializer) -> None:
        """Criação centralizada no AgendamentoService para garantir as regras."""
        dados = dict(serializer.validated_data)
        dados["psicologo"] = self._psicologo_para_gravacao(dados.get("psicologo"))
        serializer.instance = AgendamentoService.criar(
            **{k: v for k, v in dados.items() if k in CAMPOS_EDITAVEIS},
            user=self.request.user,
        )

    def perform_update(self, serializer: drf_serializers.Serializer) -> None:
        dados = {k: v for k, v in serializer.validated_data.items() if k in CAMPOS_EDITAVEIS}
        if "psicologo" in dados:
            dados["psicologo"] = self._psicologo_para_gravacao(dados["psicologo"])
        serializer.instance = AgendamentoService.atualizar(serializer.instance, user=self.request.user, **dados)

    def perform_destroy(self, instance: Agendamento) -> None:
        if not eh_secretaria(self.request.user):
            msg = "Somente a secretaria pode excluir agendamentos."
            raise PermissionDenied(msg)
        AgendamentoService.excluir(instance, user=self.request.user)

    def _transicao(self, request: Request, operacao, **kwargs) -> Response:
        ag = self.get_object()
        try:
            operacao(ag, user=request.user, **kwargs)
        except AgendamentoError as e:
            return _resposta_erro(e)
        return Response({"id": ag.pk, "status": ag.status})

    @action(detail=True, methods=["post"])
    def confirmar(self, request: Request, pk: str | None = None) -> Response:
        del pk
        return self._transicao(request, AgendamentoService.confirmar)

    @action(detail=True, methods=["post"])
    def cancelar(self, request: Request, pk: str | None = None) -> Response:
        """Cancela um agendamento."""
        del pk
        motivo = request.data.get("motivo") or "Cancelado via API"
        return self._transicao(request, AgendamentoService.cancelar, motivo=motivo)

    @action(detail=True, methods=["post"])
    def realizar(self, request: Request, pk: str | None = None) -> Response:
        """Marca como realizado; exige atendimento registrado."""
        del pk
        return self._transicao(request, AgendamentoService.marcar_realizado)

    @action(detail=True, methods=["post"])
    def atendimento(self, request: Request, pk: str | None = None) -> Response:
        """Registra o atendimento da sessão (confirmado vira realizado)."""
        del pk
        ag = self.get_object()
        ser = AtendimentoSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        dados = {k: v for k, v in ser.validated_data.items() if k in ("observacoes", "evolucao", "encaminhamento", "duracao")}
        try:
            atendimento = AtendimentoService.registrar(ag, user=request.user, **dados)
        except AgendamentoError as e:
            return _resposta_erro(e)
        ag.refresh_from_db(fields=["status"])
        return Response(
            {"agendamento": ag.pk, "status": ag.status, "atendimento": AtendimentoSerializer(atendimento).data},
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["post"])
    def remoto(self, request: Request, pk: str | None = None) -> Response:
        """Liga/desliga atendimento remoto; ligar remove a sala."""
        del pk
        ag = self.get_object()
        valor = drf_serializers.BooleanField().to_internal_value(request.data.get("remoto", True))
        try:
            AgendamentoService.atualizar(ag, remoto=valor, user=request.user)
        except AgendamentoError as e:
            return _resposta_erro(e)
        return Response(self.get_serializer(ag).data)

    @action(detail=True, methods=["get"])
    def auditoria(self, request: Request, pk: str | None = None) -> Response:
        del request, pk
        ag = self.get_object()
        eventos = AuditoriaAgendamento.objects.filter(agendamento=ag).select_related("user")
        return Response(AuditoriaAgendamentoSerializer(eventos, many=True).data)

    @action(detail=False, methods=["get"])
    def calendario(self, request: Request) -> Response:
        """Visão de dia/semana/mês dos agendamentos visíveis ao usuário."""
        params = CalendarioQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        q = params.validated_data
        modo = ModoVisualizacao(q["modo"])
        inicio, fim = intervalo_visualizacao(modo, q["data"])
        filtros = FiltrosCalendario(
            modo=modo,
            ancora=q["data"],
            psicologo_id=q.get("psicologo"),
            filial_id=q.get("filial"),
            solicitante=self._solicitante(),
            granularidade_minutos=settings.AGENDAMENTOS_GRANULARIDADE_MINUTOS,
            inicio_grade=parse_hora(settings.AGENDAMENTOS_CALENDARIO_INICIO),
            fim_grade=parse_hora(settings.AGENDAMENTOS_CALENDARIO_FIM),
            limite_por_dia=settings.AGENDAMENTOS_CALENDARIO_LIMITE_DIA,
        )
        agendamentos = self.get_queryset().filter(data__gte=inicio, data__lte=fim)
        visao = projetar(agendamentos, filtros)
        return Response(VisaoCalendarioSerializer(visao).data)

    @action(detail=False, methods=["get"])
    def slots(self, request: Request) -> Response:
        """Horários livres de um psicólogo em uma data."""
        params = SlotsQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        q = params.validated_data
        psicologo_id = self._psicologo_id_para_consulta(q.get("psicologo"))
        slots = DisponibilidadeService.slots(
            psicologo_id,
            q["data"],
            granularidade_minutos=q.get("granularidade"),
            remoto=q.get("remoto") or None,
        )
        return Response(
            {
                "psicologo": psicologo_id,
                "data": q["data"].isoformat(),
                "slots": SlotSerializer(list(slots), many=True).data,
            }
        )
