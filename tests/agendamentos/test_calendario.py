from datetime import date, time

import pytest

from agendamentos.calendario import (
    PAPEL_PSICOLOGO,
    FiltrosCalendario,
    ModoVisualizacao,
    Solicitante,
    intervalo_visualizacao,
    projetar,
)
from agendamentos.horarios import somar_minutos
from agendamentos.models import Agendamento, StatusAgendamento

SEGUNDA = date(2030, 1, 7)
QUARTA = date(2030, 1, 9)


def _ag(pk, data, inicio, fim=None, *, psicologo_id=1, filial_id=1, status=StatusAgendamento.AGENDADO):
    return Agendamento(
        pk=pk,
        paciente_id=1,
        psicologo_id=psicologo_id,
        filial_id=filial_id,
        data=data,
        hora_inicio=inicio,
        hora_fim=fim or somar_minutos(inicio, 30),
        status=status,
    )


def _filtros(modo, ancora, **kwargs):
    return FiltrosCalendario(modo=modo, ancora=ancora, **kwargs)


# --- intervalo ---


def test_intervalo_dia():
    assert intervalo_visualizacao(ModoVisualizacao.DIA, QUARTA) == (QUARTA, QUARTA)


def test_intervalo_semana_comeca_na_segunda():
    assert intervalo_visualizacao("semana", QUARTA) == (SEGUNDA, date(2030, 1, 13))
    assert intervalo_visualizacao("semana", date(2030, 1, 13)) == (SEGUNDA, date(2030, 1, 13))


def test_intervalo_mes_expande_para_semanas_completas():
    # janeiro/2030 começa numa terça e termina numa quinta
    assert intervalo_visualizacao(ModoVisualizacao.MES, date(2030, 1, 15)) == (date(2029, 12, 31), date(2030, 2, 3))


def test_modo_invalido():
    with pytest.raises(ValueError):
        intervalo_visualizacao("ano", QUARTA)


# --- filtros, ordenação e deduplicação ---


def test_filtra_periodo_psicologo_e_filial():
    agendamentos = [
        _ag(1, SEGUNDA, time(9)),
        _ag(2, SEGUNDA, time(10), psicologo_id=2),
        _ag(3, SEGUNDA, time(11), filial_id=2),
        _ag(4, date(2030, 1, 14), time(9)),
    ]
    visao = projetar(agendamentos, _filtros(ModoVisualizacao.SEMANA, QUARTA, psicologo_id=1, filial_id=1))
    assert [i.id for i in visao.itens] == [1]


def test_papel_psicologo_forca_o_proprio_filtro():
    agendamentos = [_ag(1, SEGUNDA, time(9)), _ag(2, SEGUNDA, time(10), psicologo_id=2)]
    filtros = _filtros(
        ModoVisualizacao.DIA,
        SEGUNDA,
        psicologo_id=2,
        solicitante=Solicitante(PAPEL_PSICOLOGO, psicologo_id=1),
    )
    assert [i.id for i in projetar(agendamentos, filtros).itens] == [1]


def test_psicologo_sem_identificacao_nao_ve_nada():
    agendamentos = [_ag(1, SEGUNDA, time(9)), _ag(2, SEGUNDA, time(10), psicologo_id=2)]
    filtros = _filtros(ModoVisualizacao.DIA, SEGUNDA, solicitante=Solicitante(PAPEL_PSICOLOGO))
    visao = projetar(agendamentos, filtros)
    assert visao.itens == ()
    assert all(not f.itens for f in visao.dias[0].faixas)


def test_outros_papeis_respeitam_o_filtro():
    agendamentos = [_ag(1, SEGUNDA, time(9)), _ag(2, SEGUNDA, time(10), psicologo_id=2)]
    filtros = _filtros(ModoVisualizacao.DIA, SEGUNDA, psicologo_id=2, solicitante=Solicitante("secretaria"))
    assert [i.id for i in projetar(agendamentos, filtros).itens] == [2]


def test_deduplica_por_id_e_ordena():
    agendamentos = [
        _ag(3, QUARTA, time(9)),
        _ag(2, SEGUNDA, time(10)),
        _ag(1, SEGUNDA, time(10)),
        _ag(2, SEGUNDA, time(10)),
        _ag(4, SEGUNDA, time(8)),
    ]
    visao = projetar(agendamentos, _filtros(ModoVisualizacao.SEMANA, SEGUNDA))
    assert [i.id for i in visao.itens] == [4, 1, 2, 3]


def test_projecao_idempotente_e_nao_altera_entrada():
    agendamentos = [_ag(2, SEGUNDA, time(10)), _ag(1, SEGUNDA, time(9))]
    filtros = _filtros(ModoVisualizacao.SEMANA, SEGUNDA)
    primeira = projetar(agendamentos, filtros)
    segunda = projetar(agendamentos, filtros)
    assert primeira == segunda
    assert [a.pk for a in agendamentos] == [2, 1]


def test_aceita_iteravel_de_uma_passada():
    visao = projetar(iter([_ag(1, SEGUNDA, time(9))]), _filtros(ModoVisualizacao.DIA, SEGUNDA))
    assert len(visao.itens) == 1


def test_cancelados_aparecem_no_calendario():
    visao = projetar([_ag(1, SEGUNDA, time(9), status=StatusAgendamento.CANCELADO)], _filtros("dia", SEGUNDA))
    assert visao.itens[0].status == "cancelado"


# --- agrupamento ---


def test_dia_agrupado_em_faixas():
    agendamentos = [_ag(1, SEGUNDA, time(8)), _ag(2, SEGUNDA, time(8, 15)), _ag(3, SEGUNDA, time(9))]
    visao = projetar(agendamentos, _filtros(ModoVisualizacao.DIA, SEGUNDA))
    (dia,) = visao.dias
    assert len(dia.faixas) == 24  # 08:00-20:00 a cada 30 minutos
    assert dia.faixas[0].inicio == time(8) and dia.faixas[0].fim == time(8, 30)
    assert [i.id for i in dia.faixas[0].itens] == [1, 2]
    assert [i.id for i in dia.faixas[2].itens] == [3]
    assert dia.faixas[-1].fim == time(20)


def test_semana_tem_sete_dias_com_faixas():
    visao = projetar([_ag(1, QUARTA, time(14))], _filtros(ModoVisualizacao.SEMANA, QUARTA, granularidade_minutos=60))
    assert [d.data for d in visao.dias][0] == SEGUNDA
    assert len(visao.dias) == 7
    quarta = visao.dias[2]
    assert [f.inicio for f in quarta.faixas if f.itens] == [time(14)]
    assert len(visao.semanas) == 1


def test_fora_da_grade():
    agendamentos = [_ag(1, SEGUNDA, time(7)), _ag(2, SEGUNDA, time(20)), _ag(3, SEGUNDA, time(9))]
    visao = projetar(agendamentos, _filtros(ModoVisualizacao.DIA, SEGUNDA))
    assert [i.id for i in visao.fora_da_grade] == [1, 2]
    assert all(not f.itens or f.itens[0].id == 3 for f in visao.dias[0].faixas)
    assert [i.id for i in visao.itens] == [1, 3, 2]


def test_mes_limita_itens_por_dia():
    agendamentos = [_ag(n, SEGUNDA, time(8 + n)) for n in range(1, 6)]
    visao = projetar(agendamentos, _filtros(ModoVisualizacao.MES, SEGUNDA, limite_por_dia=2))
    dia = next(d for d in visao.dias if d.data == SEGUNDA)
    assert [i.id for i in dia.itens] == [1, 2]
    assert dia.excedentes == 3
    assert dia.faixas == ()
    assert len(visao.itens) == 5


def test_mes_marca_dias_de_outros_meses():
    visao = projetar([], _filtros(ModoVisualizacao.MES, SEGUNDA))
    assert len(visao.dias) == 35
    assert len(visao.semanas) == 5
    assert visao.dias[0].data == date(2029, 12, 31) and visao.dias[0].fora_do_mes
    assert not visao.dias[1].fora_do_mes
    assert visao.dias[-1].data == date(2030, 2, 3) and visao.dias[-1].fora_do_mes


def test_mes_inclui_agendamento_de_dia_adjacente():
    visao = projetar([_ag(1, date(2030, 2, 1), time(9))], _filtros(ModoVisualizacao.MES, SEGUNDA))
    dia = next(d for d in visao.dias if d.data == date(2030, 2, 1))
    assert dia.fora_do_mes
    assert [i.id for i in dia.itens] == [1]


def test_parametros_invalidos():
    with pytest.raises(ValueError, match="Granularidade"):
        projetar([], _filtros(ModoVisualizacao.DIA, SEGUNDA, granularidade_minutos=0))
    with pytest.raises(ValueError, match="Limite"):
        projetar([], _filtros(ModoVisualizacao.MES, SEGUNDA, limite_por_dia=-1))
