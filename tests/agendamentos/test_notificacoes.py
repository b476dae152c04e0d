from datetime import date, time

import pytest
from django.core import mail
from django.test import override_settings

from agendamentos import utils
from agendamentos.models import Agendamento
from agendamentos.services import AgendamentoService
from agendamentos.signals import agendamento_criado, disparar
from agendamentos.utils import EVENTO_CANCELADO, EVENTO_CRIADO, montar_mensagem, notificar_agendamento, snapshot_agendamento

pytestmark = pytest.mark.django_db

SEGUNDA = date(2030, 1, 7)


@pytest.fixture
def criar(paciente, psicologo, filial, janelas):
    del janelas

    def _make(**kwargs):
        dados = {
            "paciente": paciente,
            "psicologo": psicologo,
            "filial": filial,
            "data": SEGUNDA,
            "hora_inicio": time(9, 0),
            "particular": True,
        }
        dados.update(kwargs)
        return AgendamentoService.criar(**dados)

    return _make


def test_snapshot_serializavel(criar, sala):
    ag = criar(sala=sala)
    dados = snapshot_agendamento(ag)
    assert dados["data"] == "2030-01-07"
    assert (dados["hora_inicio"], dados["hora_fim"]) == ("09:00", "09:30")
    assert dados["paciente_email"] == "carla@example.com"
    assert dados["psicologo_email"] == "ana@clinica.local"
    assert dados["sala"] == "Sala 1 (Centro)"


def test_mensagens():
    dados = {
        "paciente_nome": "Carla",
        "psicologo_nome": "Ana",
        "data": "2030-01-07",
        "hora_inicio": "09:00",
        "hora_fim": "09:30",
        "remoto": True,
    }
    assunto, corpo = montar_mensagem(EVENTO_CRIADO, dados)
    assert assunto == "Agendamento confirmado na clínica"
    assert "atendimento remoto" in corpo
    assunto, corpo = montar_mensagem(EVENTO_CANCELADO, dados)
    assert assunto == "Agendamento cancelado"
    assert "foi cancelado" in corpo


def test_email_enviado_apos_commit(criar, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        criar()
    assert len(callbacks) == 1
    assert len(mail.outbox) == 1
    assert sorted(mail.outbox[0].to) == ["ana@clinica.local", "carla@example.com"]
    assert "09:00 às 09:30" in mail.outbox[0].body


def test_nada_enviado_sem_commit(criar):
    criar()
    assert mail.outbox == []


def test_cancelamento_notifica(criar, django_capture_on_commit_callbacks):
    ag = criar()
    with django_capture_on_commit_callbacks(execute=True):
        AgendamentoService.cancelar(ag, motivo="paciente pediu")
    assert [m.subject for m in mail.outbox] == ["Agendamento cancelado"]


@override_settings(AGENDAMENTOS_NOTIFICACOES_ENABLED=False)
def test_notificacoes_desligadas(criar, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        criar()
    assert mail.outbox == []


@override_settings(AGENDAMENTOS_NOTIFICACAO_CANAIS=["email", "whatsapp"])
def test_falha_de_canal_nao_impede_os_demais(monkeypatch):
    def _falha(evento, dados):
        raise ConnectionError("smtp fora do ar")

    monkeypatch.setitem(utils.CANAIS, "email", _falha)
    assert notificar_agendamento(EVENTO_CRIADO, {"id": 1}) == {"email": False, "whatsapp": False}


def test_falha_no_envio_nao_desfaz_agendamento(criar, monkeypatch, django_capture_on_commit_callbacks):
    def _falha(evento, dados):
        raise ConnectionError("smtp fora do ar")

    monkeypatch.setitem(utils.CANAIS, "email", _falha)
    with django_capture_on_commit_callbacks(execute=True):
        ag = criar()
    assert Agendamento.objects.filter(pk=ag.pk).exists()


def test_receiver_com_erro_apenas_loga(criar):
    ag = criar()

    def _quebra(sender, **kwargs):
        raise RuntimeError("receiver quebrado")

    agendamento_criado.connect(_quebra, dispatch_uid="teste_quebra")
    try:
        disparar(agendamento_criado, ag, snapshot_agendamento(ag))
    finally:
        agendamento_criado.disconnect(dispatch_uid="teste_quebra")
    assert len(mail.outbox) == 1
