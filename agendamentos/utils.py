"""Helpers de notificação de agendamentos."""

from __future__ import annotations

import logging

from django.conf import settings
from django.core.mail import send_mail

from agendamentos.horarios import formatar_hora
from agendamentos.metrics import NOTIFICACOES_FALHAS_TOTAL

logger = logging.getLogger(__name__)

EVENTO_CRIADO = "criado"
EVENTO_CANCELADO = "cancelado"

_ASSUNTOS = {
    EVENTO_CRIADO: "Agendamento confirmado na clínica",
    EVENTO_CANCELADO: "Agendamento cancelado",
}


def snapshot_agendamento(agendamento) -> dict:
    """Dados serializáveis (JSON) para notificação fora da transação."""
    paciente = agendamento.paciente
    psicologo = agendamento.psicologo
    return {
        "id": agendamento.pk,
        "data": agendamento.data.isoformat(),
        "hora_inicio": formatar_hora(agendamento.hora_inicio),
        "hora_fim": formatar_hora(agendamento.hora_fim),
        "status": str(agendamento.status),
        "remoto": bool(agendamento.remoto),
        "paciente_nome": paciente.nome,
        "paciente_email": paciente.email or "",
        "psicologo_nome": psicologo.nome,
        "psicologo_email": getattr(psicologo.usuario, "email", "") or "",
        "sala": str(agendamento.sala) if agendamento.sala_id else None,
    }


def montar_mensagem(evento: str, dados: dict) -> tuple[str, str]:
    assunto = _ASSUNTOS.get(evento, "Atualização de agendamento")
    local = "atendimento remoto" if dados.get("remoto") else (dados.get("sala") or "local a definir")
    if evento == EVENTO_CANCELADO:
        corpo = (
            f"Olá, {dados['paciente_nome']}. Seu agendamento com {dados['psicologo_nome']} em "
            f"{dados['data']} às {dados['hora_inicio']} foi cancelado."
        )
    else:
        corpo = (
            f"Olá, {dados['paciente_nome']}. Seu agendamento com {dados['psicologo_nome']} está marcado para "
            f"{dados['data']} das {dados['hora_inicio']} às {dados['hora_fim']} ({local})."
        )
    return assunto, corpo


def _enviar_email(evento: str, dados: dict) -> int:
    destinatarios = [e for e in (dados.get("paciente_email"), dados.get("psicologo_email")) if e]
    if not destinatarios:
        return 0
    assunto, corpo = montar_mensagem(evento, dados)
    return send_mail(
        subject=assunto,
        message=corpo,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=destinatarios,
        fail_silently=False,
    )


CANAIS = {
    "email": _enviar_email,
}


def notificar_agendamento(evento: str, dados: dict) -> dict[str, bool]:
    """Entrega a notificação em cada canal configurado.

    Falha de um canal é registrada em log e não impede os demais.
    """
    resultado = {}
    for canal in settings.AGENDAMENTOS_NOTIFICACAO_CANAIS:
        enviar = CANAIS.get(canal)
        if enviar is None:
            logger.warning("Canal de notificação desconhecido: %s", canal)
            resultado[canal] = False
            continue
        try:
            enviar(evento, dados)
            resultado[canal] = True
        except Exception:
            logger.exception("Falha ao notificar agendamento %s pelo canal %s", dados.get("id"), canal)
            NOTIFICACOES_FALHAS_TOTAL.labels(canal=canal).inc()
            resultado[canal] = False
    return resultado
