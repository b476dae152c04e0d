from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.utils.translation import gettext_lazy as _

from cadastros.models import Filial, Paciente, PlanoSaude, Psicologo, Sala
from shared.models import TimestampedModel

DIAS_SEMANA = [
    (0, "Domingo"),
    (1, "Segunda-feira"),
    (2, "Terça-feira"),
    (3, "Quarta-feira"),
    (4, "Quinta-feira"),
    (5, "Sexta-feira"),
    (6, "Sábado"),
]


class StatusAgendamento(models.TextChoices):
    AGENDADO = "agendado", _("Agendado")
    CONFIRMADO = "confirmado", _("Confirmado")
    CANCELADO = "cancelado", _("Cancelado")
    REALIZADO = "realizado", _("Realizado")


STATUS_ATIVOS = frozenset({StatusAgendamento.AGENDADO, StatusAgendamento.CONFIRMADO, StatusAgendamento.REALIZADO})
STATUS_TERMINAIS = frozenset({StatusAgendamento.CANCELADO, StatusAgendamento.REALIZADO})


class TipoAtendimento(models.TextChoices):
    PRIMEIRA_CONSULTA = "primeira_consulta", _("Primeira consulta")
    RETORNO = "retorno", _("Retorno")
    AVALIACAO = "avaliacao", _("Avaliação")
    SESSAO = "sessao", _("Sessão")


class DisponibilidadePsicologo(TimestampedModel):
    psicologo = models.ForeignKey(Psicologo, on_delete=models.CASCADE, related_name="disponibilidades")
    dia_semana = models.PositiveSmallIntegerField(choices=DIAS_SEMANA, verbose_name=_("Dia da semana"))
    hora_inicio = models.TimeField(verbose_name=_("Hora de início"))
    hora_fim = models.TimeField(verbose_name=_("Hora de fim"))
    remoto = models.BooleanField(default=False, verbose_name=_("Aceita atendimento remoto"))
    ativo = models.BooleanField(default=True, verbose_name=_("Ativo"))

    class Meta:
        verbose_name = _("Disponibilidade do psicólogo")
        verbose_name_plural = _("Disponibilidades dos psicólogos")
        ordering = ["psicologo", "dia_semana", "hora_inicio"]
        indexes = [models.Index(fields=["psicologo", "dia_semana"], name="agend_disp_psic_dia_idx")]
        constraints = [
            models.CheckConstraint(condition=Q(hora_inicio__lt=F("hora_fim")), name="disp_inicio_antes_fim"),
            models.CheckConstraint(condition=Q(dia_semana__lte=6), name="disp_dia_semana_valido"),
        ]

    def __str__(self):
        return f"{self.psicologo} - {self.get_dia_semana_display()} {self.hora_inicio:%H:%M}-{self.hora_fim:%H:%M}"


class BloqueioHorario(TimestampedModel):
    """Indisponibilidade pontual (férias, feriados, congressos) de um psicólogo.

    Só bloqueia a agenda depois de aprovado.
    """

    psicologo = models.ForeignKey(Psicologo, on_delete=models.CASCADE, related_name="bloqueios")
    data_inicio = models.DateField(verbose_name=_("Data de início"))
    data_fim = models.DateField(verbose_name=_("Data de fim"))
    motivo = models.TextField(blank=True, null=True, verbose_name=_("Motivo"))
    aprovado = models.BooleanField(default=False, verbose_name=_("Aprovado"))
    aprovado_em = models.DateTimeField(null=True, blank=True)
    aprovado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bloqueios_aprovados",
    )

    class Meta:
        verbose_name = _("Bloqueio de horário")
        verbose_name_plural = _("Bloqueios de horário")
        ordering = ["-data_inicio"]
        indexes = [models.Index(fields=["psicologo", "data_inicio", "data_fim"], name="agend_bloq_psic_periodo_idx")]
        constraints = [
            models.CheckConstraint(condition=Q(data_inicio__lte=F("data_fim")), name="bloqueio_inicio_ate_fim"),
        ]

    def __str__(self):
        return f"{self.psicologo} {self.data_inicio:%d/%m/%Y}-{self.data_fim:%d/%m/%Y}"

    def cobre(self, data) -> bool:
        return self.data_inicio <= data <= self.data_fim


class Agendamento(TimestampedModel):
    paciente = models.ForeignKey(Paciente, on_delete=models.CASCADE, related_name="agendamentos")
    psicologo = models.ForeignKey(Psicologo, on_delete=models.CASCADE, related_name="agendamentos")
    sala = models.ForeignKey(Sala, on_delete=models.SET_NULL, null=True, blank=True, related_name="agendamentos")
    filial = models.ForeignKey(Filial, on_delete=models.PROTECT, related_name="agendamentos")
    data = models.DateField(verbose_name=_("Data"))
    hora_inicio = models.TimeField(verbose_name=_("Hora de início"))
    hora_fim = models.TimeField(verbose_name=_("Hora de fim"))
    status = models.CharField(max_length=20, choices=StatusAgendamento.choices, default=StatusAgendamento.AGENDADO)
    tipo_atendimento = models.CharField(max_length=30, choices=TipoAtendimento.choices, default=TipoAtendimento.SESSAO)
    remoto = models.BooleanField(default=False)
    particular = models.BooleanField(default=False)
    sublocacao = models.BooleanField(default=False)
    plano_saude = models.ForeignKey(
        PlanoSaude,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="agendamentos",
    )
    valor_consulta = models.PositiveIntegerField(null=True, blank=True, help_text="Valor em centavos")
    observacao = models.TextField(blank=True, null=True)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        verbose_name = _("Agendamento")
        verbose_name_plural = _("Agendamentos")
        ordering = ["data", "hora_inicio", "id"]
        indexes = [
            models.Index(fields=["psicologo", "data"], name="agend_psic_data_idx"),
            models.Index(fields=["sala", "data"], name="agend_sala_data_idx"),
            models.Index(fields=["filial", "data"], name="agend_filial_data_idx"),
            models.Index(fields=["status"], name="agend_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(hora_inicio__lt=F("hora_fim")), name="agend_inicio_antes_fim"),
            models.CheckConstraint(condition=Q(remoto=False) | Q(sala__isnull=True), name="agend_remoto_sem_sala"),
            models.UniqueConstraint(
                fields=["psicologo", "data", "hora_inicio"],
                condition=~Q(status="cancelado"),
                name="uniq_agend_psic_inicio_ativo",
            ),
            models.UniqueConstraint(
                fields=["sala", "data", "hora_inicio"],
                condition=Q(sala__isnull=False) & ~Q(status="cancelado"),
                name="uniq_agend_sala_inicio_ativo",
            ),
        ]

    def __str__(self):
        return f"#{self.pk} {self.paciente} com {self.psicologo} em {self.data:%d/%m/%Y} {self.hora_inicio:%H:%M}"

    @property
    def terminal(self) -> bool:
        return self.status in STATUS_TERMINAIS

    @property
    def ativo(self) -> bool:
        return self.status in STATUS_ATIVOS

    def definir_remoto(self, remoto: bool) -> None:
        self.remoto = bool(remoto)
        if self.remoto:
            self.sala = None

    def definir_sala(self, sala: Sala | None) -> None:
        self.sala = sala
        if sala is not None:
            self.remoto = False


class Atendimento(TimestampedModel):
    """Registro da sessão efetivamente realizada."""

    agendamento = models.OneToOneField(Agendamento, on_delete=models.CASCADE, related_name="atendimento")
    data_atendimento = models.DateTimeField(null=True, blank=True)
    observacoes = models.TextField(blank=True, null=True)
    evolucao = models.TextField(blank=True, null=True)
    encaminhamento = models.TextField(blank=True, null=True)
    duracao = models.PositiveIntegerField(null=True, blank=True, help_text="Duração em minutos")

    class Meta:
        verbose_name = _("Atendimento")
        verbose_name_plural = _("Atendimentos")

    def __str__(self):
        return f"Atendimento do agendamento #{self.agendamento_id}"


class AuditoriaAgendamento(TimestampedModel):
    agendamento = models.ForeignKey(Agendamento, on_delete=models.CASCADE, related_name="auditoria")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    tipo_evento = models.CharField(max_length=30)
    de_status = models.CharField(max_length=20, blank=True, null=True)
    para_status = models.CharField(max_length=20, blank=True, null=True)
    motivo = models.TextField(blank=True, null=True)
    diff = models.JSONField(blank=True, null=True)

    class Meta:
        verbose_name = "Auditoria de Agendamento"
        verbose_name_plural = "Auditorias de Agendamento"
        ordering = ["-created_at"]
