from django.core.management.base import BaseCommand

from agendamentos.permissions import GRUPO_SECRETARIA, GRUPO_VISUALIZAR


class Command(BaseCommand):
    help = "Cria ou atualiza os grupos de acesso à agenda e suas permissões de modelo."

    def handle(self, *args, **options):
        from django.contrib.auth.models import Group, Permission

        modelos = [
            "agendamento",
            "disponibilidadepsicologo",
            "bloqueiohorario",
            "atendimento",
            "auditoriaagendamento",
        ]
        grupos = {
            # Secretaria: acesso total à agenda de todos os psicólogos
            GRUPO_SECRETARIA: ["view", "add", "change", "delete"],
            # Recepção/gestão: somente leitura
            GRUPO_VISUALIZAR: ["view"],
        }
        for group_name, actions in grupos.items():
            g, created = Group.objects.get_or_create(name=group_name)
            for model in modelos:
                for act in actions:
                    perm = Permission.objects.filter(content_type__app_label="agendamentos", codename=f"{act}_{model}").first()
                    if perm:
                        g.permissions.add(perm)
            verbo = "criado" if created else "atualizado"
            self.stdout.write(f"Grupo {group_name} {verbo}.")
        self.stdout.write(self.style.SUCCESS("Grupos de acesso à agenda configurados."))
