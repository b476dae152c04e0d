from datetime import date

import pytest
from django.db import IntegrityError, transaction

from cadastros.models import PacientePlanoSaude, Sala

pytestmark = pytest.mark.django_db


def test_str(filial, sala, psicologo, paciente, plano):
    assert str(filial) == "Centro"
    assert str(sala) == "Sala 1 (Centro)"
    assert str(psicologo) == "Ana Souza"
    assert str(paciente) == "Carla Dias"
    assert str(plano) == "Saúde Mais"


def test_sala_unica_por_filial(filial, outra_filial, sala):
    Sala.objects.create(filial=outra_filial, nome=sala.nome)
    with pytest.raises(IntegrityError), transaction.atomic():
        Sala.objects.create(filial=filial, nome=sala.nome)


def test_vinculo_completo(paciente, plano):
    vinculo = PacientePlanoSaude.objects.get(paciente=paciente, plano_saude=plano)
    assert vinculo.completo
    vinculo.data_validade = None
    assert not vinculo.completo
    vinculo.data_validade = date(2031, 1, 1)
    vinculo.numero_carteirinha = ""
    assert not vinculo.completo
    assert list(paciente.planos.all()) == [plano]
