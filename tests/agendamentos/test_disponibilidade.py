from datetime import date, time

import pytest

from agendamentos.disponibilidade import (
    dia_semana,
    esta_dentro_disponibilidade,
    formatar_dia_semana,
    horario_clinica,
    janelas_do_dia,
    janelas_sobrepostas,
    validar_horario_clinica,
)
from agendamentos.exceptions import HorarioClinicaInvalido
from agendamentos.horarios import de_minutos, intervalos_sobrepoem, para_minutos, parse_hora, somar_minutos
from agendamentos.models import DisponibilidadePsicologo

SEGUNDA = date(2030, 1, 7)
TERCA = date(2030, 1, 8)
SABADO = date(2030, 1, 12)
DOMINGO = date(2030, 1, 13)


def _janela(pk, dia, inicio, fim, *, psicologo_id=1, remoto=False, ativo=True):
    return DisponibilidadePsicologo(
        pk=pk,
        psicologo_id=psicologo_id,
        dia_semana=dia,
        hora_inicio=inicio,
        hora_fim=fim,
        remoto=remoto,
        ativo=ativo,
    )


# --- horários ---


def test_minutos_ida_e_volta():
    assert para_minutos(time(9, 30)) == 570
    assert de_minutos(570) == time(9, 30)


def test_de_minutos_fora_do_dia():
    with pytest.raises(ValueError, match="fora do dia"):
        de_minutos(24 * 60)
    with pytest.raises(ValueError):
        de_minutos(-1)


def test_somar_minutos_nao_atravessa_meia_noite():
    assert somar_minutos(time(10, 45), 30) == time(11, 15)
    with pytest.raises(ValueError):
        somar_minutos(time(23, 45), 30)


def test_parse_hora():
    assert parse_hora("08:00") == time(8, 0)
    assert parse_hora("14:30:15") == time(14, 30, 15)
    assert parse_hora(time(7, 5)) == time(7, 5)
    with pytest.raises(ValueError, match="Horário inválido"):
        parse_hora("8h")


def test_intervalos_semiabertos():
    assert intervalos_sobrepoem(time(10, 0), time(11, 0), time(10, 30), time(11, 30))
    # encostar não é sobrepor
    assert not intervalos_sobrepoem(time(10, 0), time(11, 0), time(11, 0), time(12, 0))
    assert not intervalos_sobrepoem(time(11, 0), time(12, 0), time(10, 0), time(11, 0))


# --- janelas ---


def test_dia_semana_domingo_zero():
    assert dia_semana(DOMINGO) == 0
    assert dia_semana(SEGUNDA) == 1
    assert dia_semana(SABADO) == 6
    assert formatar_dia_semana(0) == "Domingo"
    assert formatar_dia_semana(9) == ""


def test_janelas_do_dia_filtra_e_ordena():
    janelas = [
        _janela(1, 1, time(14, 0), time(18, 0)),
        _janela(2, 1, time(8, 0), time(12, 0)),
        _janela(3, 2, time(8, 0), time(12, 0)),
        _janela(4, 1, time(19, 0), time(20, 0), ativo=False),
        _janela(5, 1, time(8, 0), time(9, 0), psicologo_id=2),
    ]
    assert [j.pk for j in janelas_do_dia(janelas, 1, SEGUNDA)] == [2, 1]
    assert [j.pk for j in janelas_do_dia(janelas, 1, TERCA)] == [3]
    assert janelas_do_dia(janelas, 1, DOMINGO) == []


def test_janelas_do_dia_remoto_exige_janela_remota():
    janelas = [
        _janela(1, 1, time(8, 0), time(12, 0)),
        _janela(2, 1, time(14, 0), time(18, 0), remoto=True),
    ]
    assert [j.pk for j in janelas_do_dia(janelas, 1, SEGUNDA, remoto=True)] == [2]


def test_esta_dentro_disponibilidade():
    janelas = [_janela(1, 1, time(9, 0), time(12, 0))]
    assert esta_dentro_disponibilidade(janelas, 1, SEGUNDA, time(9, 0), time(10, 0))
    assert esta_dentro_disponibilidade(janelas, 1, SEGUNDA, time(11, 0), time(12, 0))
    assert not esta_dentro_disponibilidade(janelas, 1, SEGUNDA, time(11, 30), time(12, 30))
    assert not esta_dentro_disponibilidade(janelas, 1, TERCA, time(9, 0), time(10, 0))
    assert not esta_dentro_disponibilidade(janelas, 2, SEGUNDA, time(9, 0), time(10, 0))


def test_intervalo_que_cruza_duas_janelas_nao_esta_dentro():
    janelas = [_janela(1, 1, time(8, 0), time(10, 0)), _janela(2, 1, time(10, 0), time(12, 0))]
    assert not esta_dentro_disponibilidade(janelas, 1, SEGUNDA, time(9, 30), time(10, 30))


def test_janelas_sobrepostas_ignora_a_propria():
    existente = _janela(1, 1, time(8, 0), time(12, 0))
    editada = _janela(1, 1, time(9, 0), time(13, 0))
    assert janelas_sobrepostas(editada, [existente]) == []
    nova = _janela(None, 1, time(11, 0), time(13, 0))
    assert janelas_sobrepostas(nova, [existente]) == [existente]
    encostada = _janela(None, 1, time(12, 0), time(13, 0))
    assert janelas_sobrepostas(encostada, [existente]) == []


# --- horário da clínica ---


def test_horario_clinica_por_dia():
    assert horario_clinica(DOMINGO) is None
    semana = horario_clinica(SEGUNDA)
    assert (semana.abertura, semana.fechamento, semana.ultimo_inicio) == (time(8), time(21), time(20, 30))
    sabado = horario_clinica(SABADO)
    assert (sabado.fechamento, sabado.ultimo_inicio) == (time(15), time(14, 30))


@pytest.mark.parametrize(
    ("data", "inicio", "fim", "mensagem"),
    [
        (DOMINGO, time(10), time(11), "domingos"),
        (SEGUNDA, time(7, 30), time(8, 30), "abertura da clínica \\(08:00\\)"),
        (SEGUNDA, time(20, 45), time(20, 55), "último horário permitido para agendamento é 20:30"),
        (SEGUNDA, time(20, 30), time(21, 30), "fechamento da clínica \\(21:00\\)"),
        (SABADO, time(14, 45), time(15, 0), "14:30"),
    ],
)
def test_validar_horario_clinica_rejeita(data, inicio, fim, mensagem):
    with pytest.raises(HorarioClinicaInvalido, match=mensagem):
        validar_horario_clinica(data, inicio, fim)


def test_validar_horario_clinica_aceita_limites():
    validar_horario_clinica(SEGUNDA, time(8, 0), time(8, 30))
    validar_horario_clinica(SEGUNDA, time(20, 30), time(21, 0))
    validar_horario_clinica(SABADO, time(14, 30), time(15, 0))
