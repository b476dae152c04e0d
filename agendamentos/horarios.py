"""Aritmética de horários do dia (sem fuso, granularidade de minutos)."""

from __future__ import annotations

from datetime import time

MINUTOS_NO_DIA = 24 * 60


def para_minutos(t: time) -> int:
    return t.hour * 60 + t.minute


def de_minutos(minutos: int) -> time:
    if not 0 <= minutos < MINUTOS_NO_DIA:
        msg = f"Horário fora do dia: {minutos} minutos"
        raise ValueError(msg)
    return time(minutos // 60, minutos % 60)


def somar_minutos(t: time, minutos: int) -> time:
    """Soma minutos a um horário sem atravessar a meia-noite."""
    return de_minutos(para_minutos(t) + minutos)


def parse_hora(valor: str | time) -> time:
    """Aceita 'HH:MM', 'HH:MM:SS' ou um time já convertido."""
    if isinstance(valor, time):
        return valor
    try:
        partes = [int(p) for p in str(valor).strip().split(":")]
        return time(*partes[:3])
    except (TypeError, ValueError):
        msg = f"Horário inválido: {valor!r}"
        raise ValueError(msg) from None


def formatar_hora(t: time) -> str:
    return t.strftime("%H:%M")


def intervalos_sobrepoem(a_inicio: time, a_fim: time, b_inicio: time, b_fim: time) -> bool:
    # intervalos semiabertos: encostar não conflita
    return a_inicio < b_fim and b_inicio < a_fim
