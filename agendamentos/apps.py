from django.apps import AppConfig


class AgendamentosConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "agendamentos"
    verbose_name = "Agenda da clínica"

    def ready(self):
        """Registra os receivers dos sinais de domínio."""
        from agendamentos import signals  # noqa: F401, PLC0415
