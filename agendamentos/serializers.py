from rest_framework import serializers

from .calendario import ModoVisualizacao
from .models import Agendamento, Atendimento, AuditoriaAgendamento, BloqueioHorario, DisponibilidadePsicologo


class DisponibilidadePsicologoSerializer(serializers.ModelSerializer):
    psicologo_nome = serializers.CharField(source="psicologo.nome", read_only=True)
    dia_semana_nome = serializers.CharField(source="get_dia_semana_display", read_only=True)

    class Meta:
        model = DisponibilidadePsicologo
        fields = "__all__"
        read_only_fields = ("ativo",)
        extra_kwargs = {"psicologo": {"required": False}}


class BloqueioHorarioSerializer(serializers.ModelSerializer):
    psicologo_nome = serializers.CharField(source="psicologo.nome", read_only=True)

    class Meta:
        model = BloqueioHorario
        fields = "__all__"
        read_only_fields = ("aprovado", "aprovado_em", "aprovado_por")
        extra_kwargs = {"psicologo": {"required": False}}


class AgendamentoSerializer(serializers.ModelSerializer):
    paciente_nome = serializers.CharField(source="paciente.nome", read_only=True)
    psicologo_nome = serializers.CharField(source="psicologo.nome", read_only=True)
    sala_nome = serializers.CharField(source="sala.nome", read_only=True, default=None)
    possui_atendimento = serializers.SerializerMethodField()

    class Meta:
        model = Agendamento
        fields = "__all__"
        read_only_fields = ("status", "metadata")
        extra_kwargs = {"hora_fim": {"required": False}, "psicologo": {"required": False}}
        # unicidade e conflitos são verificados pelo AgendamentoService
        validators = []

    def get_possui_atendimento(self, obj):
        return Atendimento.objects.filter(agendamento_id=obj.pk).exists()


class AtendimentoSerializer(serializers.ModelSerializer):
    class Meta:
        model = Atendimento
        fields = "__all__"
        read_only_fields = ("agendamento", "data_atendimento")


class AuditoriaAgendamentoSerializer(serializers.ModelSerializer):
    user_nome = serializers.CharField(source="user.get_full_name", read_only=True, default=None)

    class Meta:
        model = AuditoriaAgendamento
        fields = "__all__"
        read_only_fields = ("agendamento", "user")


# --- Visões calculadas (dataclasses, somente leitura) ---


class SlotSerializer(serializers.Serializer):
    data = serializers.DateField()
    inicio = serializers.TimeField(format="%H:%M")
    fim = serializers.TimeField(format="%H:%M")


class ItemCalendarioSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    data = serializers.DateField()
    hora_inicio = serializers.TimeField(format="%H:%M")
    hora_fim = serializers.TimeField(format="%H:%M")
    status = serializers.CharField()
    psicologo_id = serializers.IntegerField()
    paciente_id = serializers.IntegerField()
    filial_id = serializers.IntegerField()
    sala_id = serializers.IntegerField(allow_null=True)
    remoto = serializers.BooleanField()


class FaixaHorarioSerializer(serializers.Serializer):
    inicio = serializers.TimeField(format="%H:%M")
    fim = serializers.TimeField(format="%H:%M")
    itens = ItemCalendarioSerializer(many=True)


class DiaCalendarioSerializer(serializers.Serializer):
    data = serializers.DateField()
    itens = ItemCalendarioSerializer(many=True)
    faixas = FaixaHorarioSerializer(many=True)
    excedentes = serializers.IntegerField()
    fora_do_mes = serializers.BooleanField()


class VisaoCalendarioSerializer(serializers.Serializer):
    modo = serializers.CharField(source="modo.value")
    inicio = serializers.DateField()
    fim = serializers.DateField()
    itens = ItemCalendarioSerializer(many=True)
    dias = DiaCalendarioSerializer(many=True)
    fora_da_grade = ItemCalendarioSerializer(many=True)


# --- Parâmetros de consulta ---


class CalendarioQuerySerializer(serializers.Serializer):
    modo = serializers.ChoiceField(choices=[m.value for m in ModoVisualizacao], default=ModoVisualizacao.SEMANA.value)
    data = serializers.DateField()
    psicologo = serializers.IntegerField(required=False, min_value=1)
    filial = serializers.IntegerField(required=False, min_value=1)


class SlotsQuerySerializer(serializers.Serializer):
    # opcional para psicólogos, que sempre consultam a própria agenda
    psicologo = serializers.IntegerField(min_value=1, required=False)
    data = serializers.DateField()
    granularidade = serializers.IntegerField(required=False, min_value=1)
    remoto = serializers.BooleanField(required=False, default=False)
