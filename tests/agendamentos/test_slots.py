from datetime import date, time

import pytest

from agendamentos.conflitos import SemConflito, verificar_conflito
from agendamentos.models import Agendamento, BloqueioHorario, DisponibilidadePsicologo, StatusAgendamento
from agendamentos.slots import Slot, resolver_slots

TERCA = date(2024, 6, 4)


def _janela(dia, inicio, fim, *, remoto=False, ativo=True, psicologo_id=1):
    return DisponibilidadePsicologo(
        psicologo_id=psicologo_id, dia_semana=dia, hora_inicio=inicio, hora_fim=fim, remoto=remoto, ativo=ativo
    )


def _ag(pk, inicio, fim, *, status=StatusAgendamento.AGENDADO, data=TERCA):
    return Agendamento(pk=pk, psicologo_id=1, data=data, hora_inicio=inicio, hora_fim=fim, status=status)


def _horarios(slots):
    return [(s.inicio, s.fim) for s in slots]


def test_janela_de_uma_hora_gera_dois_slots():
    slots = resolver_slots(1, TERCA, 30, [], [_janela(2, time(8), time(9))], [])
    assert list(slots) == [Slot(TERCA, time(8, 0), time(8, 30)), Slot(TERCA, time(8, 30), time(9, 0))]


def test_sequencia_reiniciavel():
    slots = resolver_slots(1, TERCA, 30, [], [_janela(2, time(8), time(9))], [])
    assert list(slots) == list(slots)


def test_slot_parcial_e_descartado():
    slots = resolver_slots(1, TERCA, 30, [], [_janela(2, time(8), time(9, 20))], [])
    assert _horarios(slots) == [(time(8, 0), time(8, 30)), (time(8, 30), time(9, 0))]


def test_alinhado_ao_inicio_da_janela():
    slots = resolver_slots(1, TERCA, 45, [], [_janela(2, time(8, 10), time(10))], [])
    assert _horarios(slots) == [(time(8, 10), time(8, 55))]


def test_varias_janelas_em_ordem_de_inicio():
    janelas = [_janela(2, time(18), time(19)), _janela(2, time(8), time(9))]
    slots = resolver_slots(1, TERCA, 60, [], janelas, [])
    assert _horarios(slots) == [(time(8), time(9)), (time(18), time(19))]


def test_agendamentos_ocupam_slots():
    agendamentos = [
        _ag(1, time(8, 30), time(9, 0)),
        _ag(2, time(9, 15), time(9, 45)),
        _ag(3, time(8, 0), time(8, 30), status=StatusAgendamento.CANCELADO),
    ]
    slots = resolver_slots(1, TERCA, 30, agendamentos, [_janela(2, time(8), time(10))], [])
    assert _horarios(slots) == [(time(8, 0), time(8, 30))]


def test_bloqueio_aprovado_zera_o_dia():
    bloqueio = BloqueioHorario(
        pk=1, psicologo_id=1, data_inicio=date(2024, 7, 1), data_fim=date(2024, 7, 10), aprovado=True
    )
    janelas = [_janela(5, time(8), time(12))]
    assert list(resolver_slots(1, date(2024, 7, 5), 30, [], janelas, [bloqueio])) == []


def test_bloqueio_pendente_nao_afeta():
    bloqueio = BloqueioHorario(pk=1, psicologo_id=1, data_inicio=TERCA, data_fim=TERCA, aprovado=False)
    assert len(list(resolver_slots(1, TERCA, 30, [], [_janela(2, time(8), time(9))], [bloqueio]))) == 2


def test_janela_inativa_ou_de_outro_dia_nao_gera_slots():
    janelas = [_janela(2, time(8), time(9), ativo=False), _janela(3, time(8), time(9))]
    assert list(resolver_slots(1, TERCA, 30, [], janelas, [])) == []


def test_remoto_usa_apenas_janelas_remotas():
    janelas = [_janela(2, time(8), time(9)), _janela(2, time(14), time(15), remoto=True)]
    slots = resolver_slots(1, TERCA, 60, [], janelas, [], remoto=True)
    assert _horarios(slots) == [(time(14), time(15))]
    assert len(list(resolver_slots(1, TERCA, 60, [], janelas, []))) == 2


@pytest.mark.parametrize("granularidade", [0, -15])
def test_granularidade_invalida(granularidade):
    with pytest.raises(ValueError, match="Granularidade"):
        resolver_slots(1, TERCA, granularidade, [], [], [])


def test_slot_resolvido_passa_na_verificacao_de_conflito():
    existentes = [_ag(1, time(8, 30), time(9, 0))]
    janelas = [_janela(2, time(8), time(10))]
    for slot in resolver_slots(1, TERCA, 30, existentes, janelas, []):
        candidato = Agendamento(psicologo_id=1, data=slot.data, hora_inicio=slot.inicio, hora_fim=slot.fim)
        assert verificar_conflito(candidato, existentes, [], janelas) == SemConflito()
