"""Detecção de conflitos de um agendamento proposto.

``verificar_conflito`` é puro: recebe o candidato e os dados já carregados
(agendamentos do psicólogo e da sala, bloqueios e, opcionalmente, janelas de
disponibilidade) e devolve o primeiro conflito encontrado, na ordem
psicólogo, sala, bloqueio, disponibilidade.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from typing import ClassVar

from agendamentos.disponibilidade import dia_semana, esta_dentro_disponibilidade, formatar_dia_semana, janelas_do_dia
from agendamentos.horarios import formatar_hora, intervalos_sobrepoem
from agendamentos.models import STATUS_ATIVOS


@dataclasses.dataclass(frozen=True)
class ResultadoConflito:
    tipo: ClassVar[str] = "sem_conflito"
    bloqueante: ClassVar[bool] = False

    @property
    def tem_conflito(self) -> bool:
        return self.tipo != SemConflito.tipo

    @property
    def mensagem(self) -> str:
        return "Horário disponível para agendamento."

    def como_dict(self) -> dict:
        dados = {"conflito": self.tipo, "detail": self.mensagem}
        dados.update({f.name: getattr(self, f.name) for f in dataclasses.fields(self) if f.name.endswith("_id")})
        return dados


@dataclasses.dataclass(frozen=True)
class SemConflito(ResultadoConflito):
    pass


@dataclasses.dataclass(frozen=True)
class _ConflitoComAgendamento(ResultadoConflito):
    agendamento_id: int | None
    hora_inicio: object = None
    hora_fim: object = None

    bloqueante: ClassVar[bool] = True

    @property
    def mensagem(self) -> str:
        if self.hora_inicio is None or self.hora_fim is None:
            return "Existe um agendamento conflitante no horário selecionado."
        return (
            "Existe um agendamento conflitante no horário das "
            f"{formatar_hora(self.hora_inicio)} às {formatar_hora(self.hora_fim)}."
        )


@dataclasses.dataclass(frozen=True)
class ConflitoPsicologo(_ConflitoComAgendamento):
    tipo: ClassVar[str] = "psicologo"


@dataclasses.dataclass(frozen=True)
class ConflitoSala(_ConflitoComAgendamento):
    tipo: ClassVar[str] = "sala"

    @property
    def mensagem(self) -> str:
        return f"Sala ocupada. {super().mensagem}"


@dataclasses.dataclass(frozen=True)
class BloqueioAgenda(ResultadoConflito):
    bloqueio_id: int | None
    motivo: str | None = None

    tipo: ClassVar[str] = "bloqueio"
    bloqueante: ClassVar[bool] = True

    @property
    def mensagem(self) -> str:
        return (
            "O psicólogo está indisponível na data selecionada devido a "
            f"{self.motivo or 'um bloqueio de agenda'}."
        )


@dataclasses.dataclass(frozen=True)
class ForaDisponibilidade(ResultadoConflito):
    # preenchido quando o psicólogo não tem nenhuma janela ativa naquele dia
    dia_semana: int | None = None

    tipo: ClassVar[str] = "fora_disponibilidade"

    @property
    def mensagem(self) -> str:
        if self.dia_semana is not None:
            return f"O psicólogo não atende neste dia da semana ({formatar_dia_semana(self.dia_semana)})."
        return "O horário escolhido está fora da disponibilidade do psicólogo."


def _sobrepoe(candidato, outro) -> bool:
    return outro.data == candidato.data and intervalos_sobrepoem(
        candidato.hora_inicio, candidato.hora_fim, outro.hora_inicio, outro.hora_fim
    )


def _primeiro_sobreposto(candidato, existentes: Iterable, mesmo_recurso) -> object | None:
    achados = [
        ag
        for ag in existentes
        if ag.status in STATUS_ATIVOS
        and (candidato.pk is None or ag.pk != candidato.pk)
        and mesmo_recurso(ag)
        and _sobrepoe(candidato, ag)
    ]
    if not achados:
        return None
    return min(achados, key=lambda ag: (ag.hora_inicio, ag.pk or 0))


def verificar_conflito(candidato, existentes: Iterable, bloqueios: Iterable, janelas: Iterable | None = None):
    """Verifica o candidato contra agendamentos, bloqueios e disponibilidade.

    ``existentes`` pode conter agendamentos de outros recursos e o próprio
    candidato (edição); ambos são ignorados. Quando ``janelas`` é ``None`` a
    checagem de disponibilidade não é feita.
    """
    existentes = tuple(existentes)

    ag = _primeiro_sobreposto(candidato, existentes, lambda a: a.psicologo_id == candidato.psicologo_id)
    if ag is not None:
        return ConflitoPsicologo(ag.pk, ag.hora_inicio, ag.hora_fim)

    if candidato.sala_id is not None:
        ag = _primeiro_sobreposto(candidato, existentes, lambda a: a.sala_id == candidato.sala_id)
        if ag is not None:
            return ConflitoSala(ag.pk, ag.hora_inicio, ag.hora_fim)

    ativos = [
        b for b in bloqueios if b.aprovado and b.psicologo_id == candidato.psicologo_id and b.cobre(candidato.data)
    ]
    if ativos:
        bloqueio = min(ativos, key=lambda b: (b.data_inicio, b.pk or 0))
        return BloqueioAgenda(bloqueio.pk, bloqueio.motivo)

    if janelas is not None:
        janelas = tuple(janelas)
    if janelas is not None and not esta_dentro_disponibilidade(
        janelas,
        candidato.psicologo_id,
        candidato.data,
        candidato.hora_inicio,
        candidato.hora_fim,
        remoto=bool(candidato.remoto),
    ):
        if not janelas_do_dia(janelas, candidato.psicologo_id, candidato.data):
            return ForaDisponibilidade(dia_semana(candidato.data))
        return ForaDisponibilidade()

    return SemConflito()
