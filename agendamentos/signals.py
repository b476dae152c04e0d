import logging

from django.conf import settings
from django.dispatch import Signal, receiver

from agendamentos.tasks import enviar_notificacao_agendamento
from agendamentos.utils import EVENTO_CANCELADO, EVENTO_CRIADO

logger = logging.getLogger(__name__)

# Sinais de domínio, disparados após o commit da transação
agendamento_criado = Signal()  # args: agendamento, dados
agendamento_cancelado = Signal()  # args: agendamento, dados, motivo


def _enfileirar(evento, dados):
    if not getattr(settings, "AGENDAMENTOS_NOTIFICACOES_ENABLED", True):
        return
    try:
        enviar_notificacao_agendamento.delay(evento, dados)
    except Exception:
        # broker fora do ar não desfaz o agendamento
        logger.exception("Não foi possível enfileirar notificação do agendamento %s", dados.get("id"))


@receiver(agendamento_criado)
def notificar_criacao(sender, agendamento, dados, **kwargs):
    _enfileirar(EVENTO_CRIADO, dados)


@receiver(agendamento_cancelado)
def notificar_cancelamento(sender, agendamento, dados, **kwargs):
    _enfileirar(EVENTO_CANCELADO, dados)


def disparar(sinal, agendamento, dados, **kwargs):
    """Envia o sinal com send_robust; erros de receivers apenas geram log."""
    for receptor, resposta in sinal.send_robust(sender=agendamento.__class__, agendamento=agendamento, dados=dados, **kwargs):
        if isinstance(resposta, Exception):
            logger.error(
                "Receiver %s falhou para o agendamento %s: %s",
                getattr(receptor, "__name__", receptor),
                agendamento.pk,
                resposta,
            )
