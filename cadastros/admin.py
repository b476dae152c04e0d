from django.contrib import admin

from .models import Filial, Paciente, PacientePlanoSaude, PlanoSaude, Psicologo, Sala


class SalaInline(admin.TabularInline):
    model = Sala
    extra = 0


class PacientePlanoSaudeInline(admin.TabularInline):
    model = PacientePlanoSaude
    extra = 0
    autocomplete_fields = ("plano_saude",)


@admin.register(Filial)
class FilialAdmin(admin.ModelAdmin):
    list_display = ("id", "nome", "ativa", "created_at")
    list_filter = ("ativa",)
    search_fields = ("nome",)
    inlines = [SalaInline]


@admin.register(Sala)
class SalaAdmin(admin.ModelAdmin):
    list_display = ("id", "nome", "filial", "ativa")
    list_filter = ("ativa", "filial")
    search_fields = ("nome", "filial__nome")


@admin.register(Psicologo)
class PsicologoAdmin(admin.ModelAdmin):
    list_display = ("id", "nome", "crp", "especialidade", "ativo")
    list_filter = ("ativo",)
    search_fields = ("nome", "crp", "usuario__username", "usuario__email")
    autocomplete_fields = ("usuario",)


@admin.register(PlanoSaude)
class PlanoSaudeAdmin(admin.ModelAdmin):
    list_display = ("id", "nome", "codigo_ans", "ativo")
    search_fields = ("nome", "codigo_ans")


@admin.register(Paciente)
class PacienteAdmin(admin.ModelAdmin):
    list_display = ("id", "nome", "email", "telefone")
    search_fields = ("nome", "email", "cpf")
    inlines = [PacientePlanoSaudeInline]
