from datetime import date

from django.core.management.base import BaseCommand, CommandError

from agendamentos.horarios import formatar_hora
from agendamentos.services import DisponibilidadeService
from cadastros.models import Psicologo


class Command(BaseCommand):
    help = "Lista os horários livres de um psicólogo em uma data."

    def add_arguments(self, parser):
        parser.add_argument("--psicologo", type=int, required=True, help="ID do psicólogo")
        parser.add_argument("--data", required=True, help="Data no formato AAAA-MM-DD")
        parser.add_argument("--granularidade", type=int, default=None, help="Duração do slot em minutos")
        parser.add_argument("--remoto", action="store_true", help="Somente janelas que aceitam atendimento remoto")

    def handle(self, *args, **options):
        try:
            data = date.fromisoformat(options["data"])
        except ValueError as e:
            msg = f"Data inválida: {options['data']}"
            raise CommandError(msg) from e
        psicologo = Psicologo.objects.filter(pk=options["psicologo"]).first()
        if psicologo is None:
            msg = f"Psicólogo {options['psicologo']} não encontrado"
            raise CommandError(msg)
        try:
            slots = DisponibilidadeService.slots(
                psicologo.pk,
                data,
                granularidade_minutos=options["granularidade"],
                remoto=options["remoto"] or None,
            )
        except ValueError as e:
            raise CommandError(str(e)) from e

        total = 0
        for slot in slots:
            self.stdout.write(f"{slot.data:%d/%m/%Y} {formatar_hora(slot.inicio)}-{formatar_hora(slot.fim)}")
            total += 1
        if total == 0:
            self.stdout.write(self.style.WARNING(f"Nenhum horário livre para {psicologo} em {data:%d/%m/%Y}."))
        else:
            self.stdout.write(self.style.SUCCESS(f"{total} horário(s) livre(s) para {psicologo}."))
