import django_filters

from .models import Agendamento, StatusAgendamento


class AgendamentoFilter(django_filters.FilterSet):
    # inicio inclusivo, fim exclusivo
    data = django_filters.DateFilter(field_name="data")
    inicio = django_filters.DateFilter(field_name="data", lookup_expr="gte")
    fim = django_filters.DateFilter(field_name="data", lookup_expr="lt")
    psicologo = django_filters.NumberFilter(field_name="psicologo_id")
    filial = django_filters.NumberFilter(field_name="filial_id")
    sala = django_filters.NumberFilter(field_name="sala_id")
    paciente = django_filters.NumberFilter(field_name="paciente_id")
    status = django_filters.MultipleChoiceFilter(choices=StatusAgendamento.choices)
    remoto = django_filters.BooleanFilter()

    class Meta:
        model = Agendamento
        fields = ["data", "inicio", "fim", "psicologo", "filial", "sala", "paciente", "status", "remoto"]
