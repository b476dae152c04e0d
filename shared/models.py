from django.db import models
from django.utils.translation import gettext_lazy as _


class TimestampedModel(models.Model):
    """Modelo abstrato base que adiciona campos de timestamp a todos os modelos."""

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("Data de criação"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("Data de atualização"))

    class Meta:
        """Opções Meta para TimestampedModel."""

        abstract = True
