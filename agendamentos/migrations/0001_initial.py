import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('cadastros', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='DisponibilidadePsicologo',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de atualização')),
                ('dia_semana', models.PositiveSmallIntegerField(choices=[(0, 'Domingo'), (1, 'Segunda-feira'), (2, 'Terça-feira'), (3, 'Quarta-feira'), (4, 'Quinta-feira'), (5, 'Sexta-feira'), (6, 'Sábado')], verbose_name='Dia da semana')),
                ('hora_inicio', models.TimeField(verbose_name='Hora de início')),
                ('hora_fim', models.TimeField(verbose_name='Hora de fim')),
                ('remoto', models.BooleanField(default=False, verbose_name='Aceita atendimento remoto')),
                ('ativo', models.BooleanField(default=True, verbose_name='Ativo')),
                ('psicologo', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='disponibilidades', to='cadastros.psicologo')),
            ],
            options={
                'verbose_name': 'Disponibilidade do psicólogo',
                'verbose_name_plural': 'Disponibilidades dos psicólogos',
                'ordering': ['psicologo', 'dia_semana', 'hora_inicio'],
                'indexes': [models.Index(fields=['psicologo', 'dia_semana'], name='agend_disp_psic_dia_idx')],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('hora_inicio__lt', models.F('hora_fim'))), name='disp_inicio_antes_fim'),
                    models.CheckConstraint(condition=models.Q(('dia_semana__lte', 6)), name='disp_dia_semana_valido'),
                ],
            },
        ),
        migrations.CreateModel(
            name='BloqueioHorario',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de atualização')),
                ('data_inicio', models.DateField(verbose_name='Data de início')),
                ('data_fim', models.DateField(verbose_name='Data de fim')),
                ('motivo', models.TextField(blank=True, null=True, verbose_name='Motivo')),
                ('aprovado', models.BooleanField(default=False, verbose_name='Aprovado')),
                ('aprovado_em', models.DateTimeField(blank=True, null=True)),
                ('aprovado_por', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='bloqueios_aprovados', to=settings.AUTH_USER_MODEL)),
                ('psicologo', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bloqueios', to='cadastros.psicologo')),
            ],
            options={
                'verbose_name': 'Bloqueio de horário',
                'verbose_name_plural': 'Bloqueios de horário',
                'ordering': ['-data_inicio'],
                'indexes': [models.Index(fields=['psicologo', 'data_inicio', 'data_fim'], name='agend_bloq_psic_periodo_idx')],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('data_inicio__lte', models.F('data_fim'))), name='bloqueio_inicio_ate_fim'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Agendamento',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de atualização')),
                ('data', models.DateField(verbose_name='Data')),
                ('hora_inicio', models.TimeField(verbose_name='Hora de início')),
                ('hora_fim', models.TimeField(verbose_name='Hora de fim')),
                ('status', models.CharField(choices=[('agendado', 'Agendado'), ('confirmado', 'Confirmado'), ('cancelado', 'Cancelado'), ('realizado', 'Realizado')], default='agendado', max_length=20)),
                ('tipo_atendimento', models.CharField(choices=[('primeira_consulta', 'Primeira consulta'), ('retorno', 'Retorno'), ('avaliacao', 'Avaliação'), ('sessao', 'Sessão')], default='sessao', max_length=30)),
                ('remoto', models.BooleanField(default=False)),
                ('particular', models.BooleanField(default=False)),
                ('sublocacao', models.BooleanField(default=False)),
                ('valor_consulta', models.PositiveIntegerField(blank=True, help_text='Valor em centavos', null=True)),
                ('observacao', models.TextField(blank=True, null=True)),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('filial', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='agendamentos', to='cadastros.filial')),
                ('paciente', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='agendamentos', to='cadastros.paciente')),
                ('plano_saude', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='agendamentos', to='cadastros.planosaude')),
                ('psicologo', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='agendamentos', to='cadastros.psicologo')),
                ('sala', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='agendamentos', to='cadastros.sala')),
            ],
            options={
                'verbose_name': 'Agendamento',
                'verbose_name_plural': 'Agendamentos',
                'ordering': ['data', 'hora_inicio', 'id'],
                'indexes': [
                    models.Index(fields=['psicologo', 'data'], name='agend_psic_data_idx'),
                    models.Index(fields=['sala', 'data'], name='agend_sala_data_idx'),
                    models.Index(fields=['filial', 'data'], name='agend_filial_data_idx'),
                    models.Index(fields=['status'], name='agend_status_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('hora_inicio__lt', models.F('hora_fim'))), name='agend_inicio_antes_fim'),
                    models.CheckConstraint(condition=models.Q(('remoto', False), ('sala__isnull', True), _connector='OR'), name='agend_remoto_sem_sala'),
                    models.UniqueConstraint(condition=models.Q(('status', 'cancelado'), _negated=True), fields=('psicologo', 'data', 'hora_inicio'), name='uniq_agend_psic_inicio_ativo'),
                    models.UniqueConstraint(condition=models.Q(('sala__isnull', False), models.Q(('status', 'cancelado'), _negated=True)), fields=('sala', 'data', 'hora_inicio'), name='uniq_agend_sala_inicio_ativo'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Atendimento',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de atualização')),
                ('data_atendimento', models.DateTimeField(blank=True, null=True)),
                ('observacoes', models.TextField(blank=True, null=True)),
                ('evolucao', models.TextField(blank=True, null=True)),
                ('encaminhamento', models.TextField(blank=True, null=True)),
                ('duracao', models.PositiveIntegerField(blank=True, help_text='Duração em minutos', null=True)),
                ('agendamento', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='atendimento', to='agendamentos.agendamento')),
            ],
            options={
                'verbose_name': 'Atendimento',
                'verbose_name_plural': 'Atendimentos',
            },
        ),
        migrations.CreateModel(
            name='AuditoriaAgendamento',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de atualização')),
                ('tipo_evento', models.CharField(max_length=30)),
                ('de_status', models.CharField(blank=True, max_length=20, null=True)),
                ('para_status', models.CharField(blank=True, max_length=20, null=True)),
                ('motivo', models.TextField(blank=True, null=True)),
                ('diff', models.JSONField(blank=True, null=True)),
                ('agendamento', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='auditoria', to='agendamentos.agendamento')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Auditoria de Agendamento',
                'verbose_name_plural': 'Auditorias de Agendamento',
                'ordering': ['-created_at'],
            },
        ),
    ]
