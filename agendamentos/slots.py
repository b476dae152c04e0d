"""Resolução de slots livres de um psicólogo em uma data."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator
from datetime import date, time

from agendamentos.disponibilidade import janelas_do_dia
from agendamentos.horarios import de_minutos, intervalos_sobrepoem, para_minutos
from agendamentos.models import STATUS_ATIVOS


@dataclasses.dataclass(frozen=True)
class Slot:
    data: date
    inicio: time
    fim: time


class SlotsDisponiveis:
    """Sequência finita e reiniciável de slots livres.

    As entradas são copiadas na construção; cada ``iter()`` recalcula os slots
    sob demanda a partir dessa cópia.
    """

    def __init__(self, psicologo_id, data, granularidade_minutos, agendamentos, janelas, bloqueios, remoto=None):
        if granularidade_minutos <= 0:
            msg = "Granularidade deve ser maior que zero"
            raise ValueError(msg)
        self.psicologo_id = psicologo_id
        self.data = data
        self.granularidade_minutos = granularidade_minutos
        self.remoto = remoto
        self._agendamentos = tuple(agendamentos)
        self._janelas = tuple(janelas)
        self._bloqueios = tuple(bloqueios)

    def _bloqueado(self) -> bool:
        return any(
            b.aprovado and b.psicologo_id == self.psicologo_id and b.cobre(self.data)
            for b in self._bloqueios
        )

    def _ocupados(self) -> list[tuple[time, time]]:
        return [
            (ag.hora_inicio, ag.hora_fim)
            for ag in self._agendamentos
            if ag.psicologo_id == self.psicologo_id and ag.data == self.data and ag.status in STATUS_ATIVOS
        ]

    def __iter__(self) -> Iterator[Slot]:
        if self._bloqueado():
            return
        ocupados = self._ocupados()
        passo = self.granularidade_minutos
        for janela in janelas_do_dia(self._janelas, self.psicologo_id, self.data, remoto=bool(self.remoto)):
            inicio = para_minutos(janela.hora_inicio)
            limite = para_minutos(janela.hora_fim)
            while inicio + passo <= limite:
                slot_inicio = de_minutos(inicio)
                slot_fim = de_minutos(inicio + passo)
                if not any(intervalos_sobrepoem(slot_inicio, slot_fim, oi, of) for oi, of in ocupados):
                    yield Slot(self.data, slot_inicio, slot_fim)
                inicio += passo

    def __repr__(self):
        return f"<SlotsDisponiveis psicologo={self.psicologo_id} data={self.data} passo={self.granularidade_minutos}>"


def resolver_slots(
    psicologo_id: int,
    data: date,
    granularidade_minutos: int,
    agendamentos: Iterable,
    janelas: Iterable,
    bloqueios: Iterable,
    *,
    remoto: bool | None = None,
) -> SlotsDisponiveis:
    return SlotsDisponiveis(psicologo_id, data, granularidade_minutos, agendamentos, janelas, bloqueios, remoto)
