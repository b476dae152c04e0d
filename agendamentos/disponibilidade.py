"""Modelo de disponibilidade: janelas semanais recorrentes e horário da clínica.

Funções puras sobre sequências de ``DisponibilidadePsicologo`` (ou objetos com os
mesmos atributos). Não acessam o banco; quem precisa do store usa
``DisponibilidadeService``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from datetime import date, time

from django.conf import settings

from agendamentos.exceptions import HorarioClinicaInvalido
from agendamentos.horarios import formatar_hora, intervalos_sobrepoem, parse_hora
from agendamentos.models import DIAS_SEMANA

_NOMES_DIAS = dict(DIAS_SEMANA)

DOMINGO = 0
SABADO = 6


def dia_semana(data: date) -> int:
    """Dia da semana com domingo = 0 e sábado = 6."""
    return data.isoweekday() % 7


def formatar_dia_semana(dia: int) -> str:
    return _NOMES_DIAS.get(dia, "")


def janelas_do_dia(janelas: Iterable, psicologo_id: int, data: date, *, remoto: bool = False) -> list:
    """Janelas ativas do psicólogo no dia da semana de ``data``, ordenadas pelo início."""
    dia = dia_semana(data)
    selecionadas = [
        j
        for j in janelas
        if j.psicologo_id == psicologo_id
        and j.dia_semana == dia
        and getattr(j, "ativo", True)
        and (not remoto or j.remoto)
    ]
    return sorted(selecionadas, key=lambda j: (j.hora_inicio, j.hora_fim, j.pk or 0))


def esta_dentro_disponibilidade(
    janelas: Iterable,
    psicologo_id: int,
    data: date,
    hora_inicio: time,
    hora_fim: time,
    *,
    remoto: bool = False,
) -> bool:
    for janela in janelas_do_dia(janelas, psicologo_id, data, remoto=remoto):
        if janela.hora_inicio <= hora_inicio and hora_fim <= janela.hora_fim:
            return True
    return False


def janelas_sobrepostas(candidata, janelas: Iterable) -> list:
    """Janelas ativas do mesmo psicólogo e dia que se sobrepõem à candidata."""
    return [
        j
        for j in janelas
        if j.psicologo_id == candidata.psicologo_id
        and j.dia_semana == candidata.dia_semana
        and getattr(j, "ativo", True)
        and (candidata.pk is None or j.pk != candidata.pk)
        and intervalos_sobrepoem(j.hora_inicio, j.hora_fim, candidata.hora_inicio, candidata.hora_fim)
    ]


@dataclasses.dataclass(frozen=True)
class HorarioClinica:
    abertura: time
    fechamento: time
    ultimo_inicio: time


def horario_clinica(data: date) -> HorarioClinica | None:
    """Horário de funcionamento do dia; ``None`` quando a clínica não abre."""
    dia = dia_semana(data)
    if dia == DOMINGO:
        return None
    config = settings.AGENDAMENTOS_HORARIO_CLINICA
    abertura, fechamento, ultimo = config["sabado"] if dia == SABADO else config["semana"]
    return HorarioClinica(parse_hora(abertura), parse_hora(fechamento), parse_hora(ultimo))


def validar_horario_clinica(data: date, hora_inicio: time, hora_fim: time) -> None:
    horario = horario_clinica(data)
    if horario is None:
        msg = "A clínica não funciona aos domingos."
        raise HorarioClinicaInvalido(msg)
    if hora_inicio < horario.abertura:
        msg = (
            "O horário de início deve ser após o horário de abertura da clínica "
            f"({formatar_hora(horario.abertura)})."
        )
        raise HorarioClinicaInvalido(msg)
    if hora_inicio > horario.ultimo_inicio:
        msg = f"O último horário permitido para agendamento é {formatar_hora(horario.ultimo_inicio)}."
        raise HorarioClinicaInvalido(msg)
    if hora_fim > horario.fechamento:
        msg = (
            "O horário de término deve ser antes do horário de fechamento da clínica "
            f"({formatar_hora(horario.fechamento)})."
        )
        raise HorarioClinicaInvalido(msg)
