from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from shared.models import TimestampedModel


class Filial(TimestampedModel):
    nome = models.CharField(max_length=120, verbose_name=_("Nome"))
    endereco = models.CharField(max_length=255, blank=True, verbose_name=_("Endereço"))
    ativa = models.BooleanField(default=True, verbose_name=_("Ativa"))

    class Meta:
        verbose_name = _("Filial")
        verbose_name_plural = _("Filiais")
        ordering = ["nome"]

    def __str__(self):
        return self.nome


class Sala(TimestampedModel):
    filial = models.ForeignKey(Filial, on_delete=models.CASCADE, related_name="salas")
    nome = models.CharField(max_length=80, verbose_name=_("Nome"))
    ativa = models.BooleanField(default=True, verbose_name=_("Ativa"))

    class Meta:
        verbose_name = _("Sala")
        verbose_name_plural = _("Salas")
        ordering = ["filial", "nome"]
        constraints = [models.UniqueConstraint(fields=["filial", "nome"], name="uniq_sala_filial_nome")]

    def __str__(self):
        return f"{self.nome} ({self.filial})"


class Psicologo(TimestampedModel):
    usuario = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="psicologo")
    nome = models.CharField(max_length=150, verbose_name=_("Nome"))
    crp = models.CharField(max_length=20, blank=True, verbose_name=_("CRP"))
    especialidade = models.CharField(max_length=120, blank=True, verbose_name=_("Especialidade"))
    ativo = models.BooleanField(default=True, verbose_name=_("Ativo"))

    class Meta:
        verbose_name = _("Psicólogo")
        verbose_name_plural = _("Psicólogos")
        ordering = ["nome"]

    def __str__(self):
        return self.nome


class PlanoSaude(TimestampedModel):
    nome = models.CharField(max_length=120, unique=True, verbose_name=_("Nome"))
    codigo_ans = models.CharField(max_length=20, blank=True, verbose_name=_("Registro ANS"))
    valor_consulta = models.PositiveIntegerField(null=True, blank=True, verbose_name=_("Valor da consulta (centavos)"))
    ativo = models.BooleanField(default=True, verbose_name=_("Ativo"))

    class Meta:
        verbose_name = _("Plano de saúde")
        verbose_name_plural = _("Planos de saúde")
        ordering = ["nome"]

    def __str__(self):
        return self.nome


class Paciente(TimestampedModel):
    usuario = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="paciente",
    )
    nome = models.CharField(max_length=150, verbose_name=_("Nome"))
    email = models.EmailField(blank=True, verbose_name=_("E-mail"))
    telefone = models.CharField(max_length=30, blank=True, verbose_name=_("Telefone"))
    cpf = models.CharField(max_length=14, blank=True, verbose_name=_("CPF"))
    planos = models.ManyToManyField(PlanoSaude, through="PacientePlanoSaude", related_name="pacientes", blank=True)

    class Meta:
        verbose_name = _("Paciente")
        verbose_name_plural = _("Pacientes")
        ordering = ["nome"]

    def __str__(self):
        return self.nome


class PacientePlanoSaude(TimestampedModel):
    paciente = models.ForeignKey(Paciente, on_delete=models.CASCADE, related_name="vinculos_plano")
    plano_saude = models.ForeignKey(PlanoSaude, on_delete=models.CASCADE, related_name="vinculos_paciente")
    numero_carteirinha = models.CharField(max_length=40, blank=True, verbose_name=_("Número da carteirinha"))
    data_validade = models.DateField(null=True, blank=True, verbose_name=_("Validade"))

    class Meta:
        verbose_name = _("Vínculo paciente/plano")
        verbose_name_plural = _("Vínculos paciente/plano")
        constraints = [
            models.UniqueConstraint(fields=["paciente", "plano_saude"], name="uniq_paciente_plano_saude"),
        ]

    def __str__(self):
        return f"{self.paciente} - {self.plano_saude}"

    @property
    def completo(self) -> bool:
        return bool(self.numero_carteirinha) and self.data_validade is not None
