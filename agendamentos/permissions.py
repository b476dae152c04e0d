"""Papéis de acesso à agenda.

Superusuário ou grupo ``AGENDAMENTOS_SECRETARIA``: acesso total.
Grupo ``AGENDAMENTOS_VISUALIZAR``: somente leitura.
Usuário com perfil de psicólogo: apenas a própria agenda.
"""

from django.contrib.auth.models import AbstractUser
from rest_framework import permissions
from rest_framework.request import Request
from rest_framework.views import APIView

from agendamentos.calendario import PAPEL_PSICOLOGO, Solicitante
from cadastros.models import Psicologo

GRUPO_SECRETARIA = "AGENDAMENTOS_SECRETARIA"
GRUPO_VISUALIZAR = "AGENDAMENTOS_VISUALIZAR"

PAPEL_SECRETARIA = "secretaria"
PAPEL_VISUALIZADOR = "visualizador"


def eh_secretaria(user) -> bool:
    if not isinstance(user, AbstractUser):
        return False
    return user.is_superuser or user.groups.filter(name=GRUPO_SECRETARIA).exists()


def eh_visualizador(user) -> bool:
    return isinstance(user, AbstractUser) and user.groups.filter(name=GRUPO_VISUALIZAR).exists()


def psicologo_do_usuario(user) -> Psicologo | None:
    if not isinstance(user, AbstractUser):
        return None
    return Psicologo.objects.filter(usuario=user, ativo=True).first()


def solicitante_do_usuario(user) -> Solicitante | None:
    """Papel efetivo do usuário; ``None`` quando não tem acesso à agenda."""
    if eh_secretaria(user):
        return Solicitante(PAPEL_SECRETARIA)
    if eh_visualizador(user):
        return Solicitante(PAPEL_VISUALIZADOR)
    psicologo = psicologo_do_usuario(user)
    if psicologo is not None:
        return Solicitante(PAPEL_PSICOLOGO, psicologo.pk)
    return None


class IsAgendaPsicologoOuSecretaria(permissions.BasePermission):
    """Libera secretaria, visualizadores (leitura) e psicólogos (própria agenda)."""

    def has_permission(self, request: Request, view: APIView) -> bool:
        solicitante = solicitante_do_usuario(request.user)
        if solicitante is None:
            return False
        if solicitante.papel == PAPEL_VISUALIZADOR:
            return request.method in permissions.SAFE_METHODS
        return True


class IsAgendaSecretaria(permissions.BasePermission):
    def has_permission(self, request: Request, view: APIView) -> bool:
        return eh_secretaria(request.user)
