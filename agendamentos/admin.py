from django.contrib import admin

from .models import Agendamento, Atendimento, AuditoriaAgendamento, BloqueioHorario, DisponibilidadePsicologo


@admin.register(DisponibilidadePsicologo)
class DisponibilidadePsicologoAdmin(admin.ModelAdmin):
    list_display = ("id", "psicologo", "dia_semana", "hora_inicio", "hora_fim", "remoto", "ativo")
    list_filter = ("dia_semana", "remoto", "ativo")
    search_fields = ("psicologo__nome",)


@admin.register(BloqueioHorario)
class BloqueioHorarioAdmin(admin.ModelAdmin):
    list_display = ("id", "psicologo", "data_inicio", "data_fim", "aprovado", "aprovado_em")
    list_filter = ("aprovado",)
    search_fields = ("psicologo__nome", "motivo")
    readonly_fields = ("aprovado_em", "aprovado_por")


class AuditoriaInline(admin.TabularInline):
    model = AuditoriaAgendamento
    extra = 0
    can_delete = False
    readonly_fields = ("created_at", "user", "tipo_evento", "de_status", "para_status", "motivo", "diff")


@admin.register(Agendamento)
class AgendamentoAdmin(admin.ModelAdmin):
    list_display = ("id", "data", "hora_inicio", "hora_fim", "psicologo", "paciente", "sala", "status", "remoto")
    list_filter = ("status", "remoto", "particular", "filial")
    search_fields = ("paciente__nome", "psicologo__nome")
    date_hierarchy = "data"
    # status muda apenas pelo AgendamentoService
    readonly_fields = ("status", "metadata")
    inlines = [AuditoriaInline]


@admin.register(Atendimento)
class AtendimentoAdmin(admin.ModelAdmin):
    list_display = ("id", "agendamento", "data_atendimento", "duracao")
    search_fields = ("agendamento__paciente__nome",)
