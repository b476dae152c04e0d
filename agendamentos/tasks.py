import logging

from celery import shared_task

from agendamentos.utils import notificar_agendamento

logger = logging.getLogger(__name__)


@shared_task
def enviar_notificacao_agendamento(evento, dados):
    """Entrega assíncrona das notificações de um agendamento (snapshot em ``dados``)."""
    resultado = notificar_agendamento(evento, dados)
    logger.info("Notificação '%s' do agendamento %s: %s", evento, dados.get("id"), resultado)
    return resultado
