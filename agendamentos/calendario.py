"""Projeção de agendamentos em visões de dia, semana e mês.

``projetar`` é uma função pura: não altera a entrada e, para a mesma entrada,
devolve uma visão igual (dataclasses congeladas e tuplas).
"""

from __future__ import annotations

import calendar
import dataclasses
import enum
from collections.abc import Iterable
from datetime import date, time, timedelta

from agendamentos.horarios import de_minutos, para_minutos

PAPEL_PSICOLOGO = "psicologo"


class ModoVisualizacao(str, enum.Enum):
    DIA = "dia"
    SEMANA = "semana"
    MES = "mes"


@dataclasses.dataclass(frozen=True)
class Solicitante:
    papel: str
    psicologo_id: int | None = None


@dataclasses.dataclass(frozen=True)
class FiltrosCalendario:
    modo: ModoVisualizacao
    ancora: date
    psicologo_id: int | None = None
    filial_id: int | None = None
    solicitante: Solicitante | None = None
    granularidade_minutos: int = 30
    inicio_grade: time = time(8, 0)
    fim_grade: time = time(20, 0)
    limite_por_dia: int = 3


@dataclasses.dataclass(frozen=True)
class ItemCalendario:
    id: int
    data: date
    hora_inicio: time
    hora_fim: time
    status: str
    psicologo_id: int
    paciente_id: int
    filial_id: int
    sala_id: int | None = None
    remoto: bool = False

    @classmethod
    def de_agendamento(cls, ag) -> ItemCalendario:
        return cls(
            id=ag.pk,
            data=ag.data,
            hora_inicio=ag.hora_inicio,
            hora_fim=ag.hora_fim,
            status=str(ag.status),
            psicologo_id=ag.psicologo_id,
            paciente_id=ag.paciente_id,
            filial_id=ag.filial_id,
            sala_id=ag.sala_id,
            remoto=bool(ag.remoto),
        )


@dataclasses.dataclass(frozen=True)
class FaixaHorario:
    inicio: time
    fim: time
    itens: tuple[ItemCalendario, ...] = ()


@dataclasses.dataclass(frozen=True)
class DiaCalendario:
    data: date
    itens: tuple[ItemCalendario, ...] = ()
    faixas: tuple[FaixaHorario, ...] = ()
    excedentes: int = 0
    fora_do_mes: bool = False


@dataclasses.dataclass(frozen=True)
class VisaoCalendario:
    modo: ModoVisualizacao
    inicio: date
    fim: date
    itens: tuple[ItemCalendario, ...]
    dias: tuple[DiaCalendario, ...]
    fora_da_grade: tuple[ItemCalendario, ...] = ()

    @property
    def semanas(self) -> tuple[tuple[DiaCalendario, ...], ...]:
        return tuple(self.dias[i : i + 7] for i in range(0, len(self.dias), 7))


def intervalo_visualizacao(modo: ModoVisualizacao | str, ancora: date) -> tuple[date, date]:
    """Intervalo de datas (inclusivo) coberto pela visão; semanas começam na segunda."""
    modo = ModoVisualizacao(modo)
    if modo is ModoVisualizacao.DIA:
        return ancora, ancora
    if modo is ModoVisualizacao.SEMANA:
        inicio = ancora - timedelta(days=ancora.weekday())
        return inicio, inicio + timedelta(days=6)
    primeiro = ancora.replace(day=1)
    ultimo = ancora.replace(day=calendar.monthrange(ancora.year, ancora.month)[1])
    return primeiro - timedelta(days=primeiro.weekday()), ultimo + timedelta(days=6 - ultimo.weekday())


def _faixas_vazias(filtros: FiltrosCalendario) -> list[tuple[time, time]]:
    passo = filtros.granularidade_minutos
    atual = para_minutos(filtros.inicio_grade)
    limite = para_minutos(filtros.fim_grade)
    faixas = []
    while atual < limite:
        fim = min(atual + passo, limite)
        faixas.append((de_minutos(atual), de_minutos(fim)))
        atual += passo
    return faixas


def _selecionar(agendamentos: Iterable, filtros: FiltrosCalendario, inicio: date, fim: date) -> list[ItemCalendario]:
    psicologo_id = filtros.psicologo_id
    solicitante = filtros.solicitante
    if solicitante is not None and solicitante.papel == PAPEL_PSICOLOGO:
        if solicitante.psicologo_id is None:
            return []
        psicologo_id = solicitante.psicologo_id

    vistos: set[int] = set()
    itens = []
    for ag in agendamentos:
        if ag.pk in vistos:
            continue
        vistos.add(ag.pk)
        if not inicio <= ag.data <= fim:
            continue
        if psicologo_id is not None and ag.psicologo_id != psicologo_id:
            continue
        if filtros.filial_id is not None and ag.filial_id != filtros.filial_id:
            continue
        itens.append(ItemCalendario.de_agendamento(ag))
    itens.sort(key=lambda i: (i.data, i.hora_inicio, i.id))
    return itens


def _dia_com_faixas(data: date, itens: list[ItemCalendario], grade: list[tuple[time, time]]) -> DiaCalendario:
    faixas = tuple(
        FaixaHorario(ini, fim, tuple(i for i in itens if ini <= i.hora_inicio < fim)) for ini, fim in grade
    )
    return DiaCalendario(data=data, itens=tuple(itens), faixas=faixas)


def projetar(agendamentos: Iterable, filtros: FiltrosCalendario) -> VisaoCalendario:
    if filtros.granularidade_minutos <= 0:
        msg = "Granularidade deve ser maior que zero"
        raise ValueError(msg)
    if filtros.limite_por_dia < 0:
        msg = "Limite por dia não pode ser negativo"
        raise ValueError(msg)

    modo = ModoVisualizacao(filtros.modo)
    inicio, fim = intervalo_visualizacao(modo, filtros.ancora)
    itens = _selecionar(agendamentos, filtros, inicio, fim)

    por_dia: dict[date, list[ItemCalendario]] = {}
    for item in itens:
        por_dia.setdefault(item.data, []).append(item)

    datas = [inicio + timedelta(days=n) for n in range((fim - inicio).days + 1)]
    fora_da_grade: tuple[ItemCalendario, ...] = ()

    if modo is ModoVisualizacao.MES:
        limite = filtros.limite_por_dia
        dias = []
        for d in datas:
            do_dia = por_dia.get(d, [])
            dias.append(
                DiaCalendario(
                    data=d,
                    itens=tuple(do_dia[:limite]),
                    excedentes=max(len(do_dia) - limite, 0),
                    fora_do_mes=d.month != filtros.ancora.month,
                )
            )
    else:
        grade = _faixas_vazias(filtros)
        dias = [_dia_com_faixas(d, por_dia.get(d, []), grade) for d in datas]
        fora_da_grade = tuple(
            i for i in itens if not filtros.inicio_grade <= i.hora_inicio < filtros.fim_grade
        )

    return VisaoCalendario(
        modo=modo,
        inicio=inicio,
        fim=fim,
        itens=tuple(itens),
        dias=tuple(dias),
        fora_da_grade=fora_da_grade,
    )
