"""Acesso a dados da agenda.

Os serviços dependem apenas dos protocolos; a implementação padrão usa o ORM do
Django. Erros do banco (``IntegrityError``, ``OperationalError``) sobem sem
tratamento.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol

from django.db.models import Q

from agendamentos.models import Agendamento, BloqueioHorario, DisponibilidadePsicologo
from cadastros.models import Psicologo, Sala


class AgendamentoStore(Protocol):
    def por_psicologo_e_periodo(self, psicologo_id: int, inicio: date, fim: date) -> list[Agendamento]: ...

    def por_sala_e_periodo(self, sala_id: int, inicio: date, fim: date) -> list[Agendamento]: ...

    def inserir(self, agendamento: Agendamento) -> Agendamento: ...

    def atualizar(self, agendamento: Agendamento, campos: list[str] | None = None) -> Agendamento: ...

    def remover(self, agendamento_id: int) -> None: ...

    def travar_recursos(self, psicologo_id: int, sala_id: int | None = None) -> None: ...


class DisponibilidadeStore(Protocol):
    def janelas_por_psicologo(self, psicologo_id: int) -> list[DisponibilidadePsicologo]: ...

    def bloqueios_por_psicologo_e_data(self, psicologo_id: int, data: date) -> list[BloqueioHorario]: ...


class DjangoAgendamentoStore:
    """Implementação ORM; períodos são inclusivos nas duas pontas (datas)."""

    def por_psicologo_e_periodo(self, psicologo_id, inicio, fim):
        return list(
            Agendamento.objects.filter(psicologo_id=psicologo_id, data__gte=inicio, data__lte=fim).order_by(
                "data", "hora_inicio", "id"
            )
        )

    def por_sala_e_periodo(self, sala_id, inicio, fim):
        return list(
            Agendamento.objects.filter(sala_id=sala_id, data__gte=inicio, data__lte=fim).order_by(
                "data", "hora_inicio", "id"
            )
        )

    def inserir(self, agendamento):
        agendamento.save(force_insert=True)
        return agendamento

    def atualizar(self, agendamento, campos=None):
        if campos:
            agendamento.save(update_fields=[*campos, "updated_at"])
        else:
            agendamento.save()
        return agendamento

    def remover(self, agendamento_id):
        Agendamento.objects.filter(pk=agendamento_id).delete()

    def travar_recursos(self, psicologo_id, sala_id=None):
        # deve rodar dentro de transaction.atomic()
        list(Psicologo.objects.select_for_update().filter(pk=psicologo_id).values_list("pk", flat=True))
        if sala_id is not None:
            list(Sala.objects.select_for_update().filter(pk=sala_id).values_list("pk", flat=True))


class DjangoDisponibilidadeStore:
    def janelas_por_psicologo(self, psicologo_id):
        return list(
            DisponibilidadePsicologo.objects.filter(psicologo_id=psicologo_id, ativo=True).order_by(
                "dia_semana", "hora_inicio"
            )
        )

    def bloqueios_por_psicologo_e_data(self, psicologo_id, data):
        return list(
            BloqueioHorario.objects.filter(
                Q(psicologo_id=psicologo_id) & Q(data_inicio__lte=data) & Q(data_fim__gte=data)
            ).order_by("data_inicio", "id")
        )
