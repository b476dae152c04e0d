"""Configuração do pytest e fixtures compartilhadas da agenda da clínica.

Objetivos principais:
- Inicializar o Django para os testes;
- Montar o cadastro mínimo (filial, salas, psicólogos, paciente com plano);
- Oferecer clientes da API autenticados em cada papel de acesso.
"""

from __future__ import annotations

import os
from datetime import date, time

import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "clinica.settings")

SENHA_TESTE = os.environ.get("TEST_PASSWORD", "x")


def pytest_addoption(parser: pytest.Parser) -> None:
    """Adiciona flag --runslow para incluir testes marcados como @pytest.mark.slow."""
    parser.addoption(
        "--runslow",
        action="store_true",
        default=False,
        help="Executa testes marcados como slow (concorrência / banco real).",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Se --runslow não for passado e RUN_SLOW não estiver definido, marca slow como skip."""
    if config.getoption("--runslow") or os.environ.get("RUN_SLOW"):
        return
    skip_marker = pytest.mark.skip(reason="slow omitido (use --runslow ou RUN_SLOW=1)")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_marker)


# =============================================================================
# Usuários e papéis
# =============================================================================
def _criar_usuario(username: str, *, email: str = "", grupo: str | None = None):
    from django.contrib.auth import get_user_model
    from django.contrib.auth.models import Group

    user = get_user_model().objects.create_user(username=username, email=email, password=SENHA_TESTE)
    if grupo:
        g, _ = Group.objects.get_or_create(name=grupo)
        user.groups.add(g)
    return user


@pytest.fixture
def user_secretaria(db):
    from agendamentos.permissions import GRUPO_SECRETARIA

    return _criar_usuario("secretaria", email="secretaria@clinica.local", grupo=GRUPO_SECRETARIA)


@pytest.fixture
def user_visualizador(db):
    from agendamentos.permissions import GRUPO_VISUALIZAR

    return _criar_usuario("recepcao", grupo=GRUPO_VISUALIZAR)


@pytest.fixture
def user_sem_papel(db):
    return _criar_usuario("visitante")


# =============================================================================
# Cadastros
# =============================================================================
@pytest.fixture
def filial(db):
    from cadastros.models import Filial

    return Filial.objects.create(nome="Centro", endereco="Rua A, 100")


@pytest.fixture
def outra_filial(db):
    from cadastros.models import Filial

    return Filial.objects.create(nome="Zona Sul")


@pytest.fixture
def sala(filial):
    from cadastros.models import Sala

    return Sala.objects.create(filial=filial, nome="Sala 1")


@pytest.fixture
def sala2(filial):
    from cadastros.models import Sala

    return Sala.objects.create(filial=filial, nome="Sala 2")


@pytest.fixture
def psicologo(db):
    from cadastros.models import Psicologo

    user = _criar_usuario("ana", email="ana@clinica.local")
    return Psicologo.objects.create(usuario=user, nome="Ana Souza", crp="06/12345")


@pytest.fixture
def outro_psicologo(db):
    from cadastros.models import Psicologo

    user = _criar_usuario("bruno", email="bruno@clinica.local")
    return Psicologo.objects.create(usuario=user, nome="Bruno Lima", crp="06/54321")


@pytest.fixture
def plano(db):
    from cadastros.models import PlanoSaude

    return PlanoSaude.objects.create(nome="Saúde Mais", codigo_ans="123456", valor_consulta=15000)


@pytest.fixture
def paciente(plano):
    from cadastros.models import Paciente, PacientePlanoSaude

    p = Paciente.objects.create(nome="Carla Dias", email="carla@example.com", telefone="11999990000")
    PacientePlanoSaude.objects.create(
        paciente=p,
        plano_saude=plano,
        numero_carteirinha="0001-22",
        data_validade=date(2031, 12, 31),
    )
    return p


@pytest.fixture
def janelas(psicologo, outro_psicologo):
    """Segunda 08-12 (presencial) e 14-18 (remoto); sábado 08-12. Bruno: segunda 08-12."""
    from agendamentos.models import DisponibilidadePsicologo

    return [
        DisponibilidadePsicologo.objects.create(
            psicologo=psicologo, dia_semana=1, hora_inicio=time(8, 0), hora_fim=time(12, 0)
        ),
        DisponibilidadePsicologo.objects.create(
            psicologo=psicologo, dia_semana=1, hora_inicio=time(14, 0), hora_fim=time(18, 0), remoto=True
        ),
        DisponibilidadePsicologo.objects.create(
            psicologo=psicologo, dia_semana=6, hora_inicio=time(8, 0), hora_fim=time(12, 0)
        ),
        DisponibilidadePsicologo.objects.create(
            psicologo=outro_psicologo, dia_semana=1, hora_inicio=time(8, 0), hora_fim=time(12, 0)
        ),
    ]


@pytest.fixture
def criar_agendamento(paciente, filial):
    """Grava um agendamento direto no ORM (sem regras do serviço)."""
    from agendamentos.models import Agendamento, StatusAgendamento

    def _make(psicologo, data, inicio, fim, **extra):
        extra.setdefault("status", StatusAgendamento.AGENDADO)
        extra.setdefault("particular", True)
        return Agendamento.objects.create(
            paciente=paciente,
            psicologo=psicologo,
            filial=filial,
            data=data,
            hora_inicio=inicio,
            hora_fim=fim,
            **extra,
        )

    return _make


# =============================================================================
# Clientes da API
# =============================================================================
def _api_client(user):
    from rest_framework.test import APIClient

    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def api_secretaria(user_secretaria):
    return _api_client(user_secretaria)


@pytest.fixture
def api_psicologo(psicologo):
    return _api_client(psicologo.usuario)


@pytest.fixture
def api_visualizador(user_visualizador):
    return _api_client(user_visualizador)


@pytest.fixture
def api_sem_papel(user_sem_papel):
    return _api_client(user_sem_papel)
