"""Métricas Prometheus da agenda (expostas em /metrics)."""

from prometheus_client import Counter, Histogram

AGENDAMENTOS_CRIADOS_TOTAL = Counter(
    "ag_agendamentos_criados_total",
    "Total de agendamentos criados",
)
AGENDAMENTOS_ATUALIZADOS_TOTAL = Counter(
    "ag_agendamentos_atualizados_total",
    "Total de agendamentos editados",
)
AGENDAMENTOS_CANCELADOS_TOTAL = Counter(
    "ag_agendamentos_cancelados_total",
    "Total de agendamentos cancelados",
)
AGENDAMENTOS_STATUS_TOTAL = Counter(
    "ag_agendamentos_status_total",
    "Transições de status aplicadas",
    ["para_status"],
)
AGENDAMENTOS_CONFLITOS_TOTAL = Counter(
    "ag_agendamentos_conflitos_total",
    "Conflitos detectados na criação/edição",
    ["tipo"],
)
AGENDAMENTOS_CRIACAO_ERROS_TOTAL = Counter(
    "ag_agendamentos_criacao_erros_total",
    "Total de erros de regra na criação de agendamentos",
)
NOTIFICACOES_FALHAS_TOTAL = Counter(
    "ag_notificacoes_falhas_total",
    "Falhas ao entregar notificações de agendamento",
    ["canal"],
)
H_CRIA = Histogram(
    "ag_agendamento_criacao_segundos",
    "Latência da criação de agendamentos",
)
