"""Serviços da agenda: ciclo de vida de agendamentos, disponibilidade e bloqueios.

Toda escrita de agendamento acontece dentro de ``transaction.atomic()`` com os
recursos (psicólogo e sala) travados antes da checagem de conflito, de forma
que verificar e inserir seja uma única unidade. As constraints únicas parciais
do banco continuam sendo a última barreira.
"""

from __future__ import annotations

import logging
from datetime import date, time
from time import monotonic
from typing import Any

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from agendamentos.conflitos import ForaDisponibilidade, ResultadoConflito, verificar_conflito
from agendamentos.disponibilidade import esta_dentro_disponibilidade, janelas_sobrepostas, validar_horario_clinica
from agendamentos.exceptions import (
    AgendamentoError,
    AgendamentoImutavel,
    BloqueioInvalido,
    ConclusaoPrematura,
    ConflitoAgendamento,
    DadosAgendamentoInvalidos,
    DisponibilidadeInvalida,
    TransicaoInvalida,
)
from agendamentos.horarios import somar_minutos
from agendamentos.metrics import (
    AGENDAMENTOS_ATUALIZADOS_TOTAL,
    AGENDAMENTOS_CANCELADOS_TOTAL,
    AGENDAMENTOS_CONFLITOS_TOTAL,
    AGENDAMENTOS_CRIACAO_ERROS_TOTAL,
    AGENDAMENTOS_CRIADOS_TOTAL,
    AGENDAMENTOS_STATUS_TOTAL,
    H_CRIA,
)
from agendamentos.models import (
    Agendamento,
    Atendimento,
    AuditoriaAgendamento,
    BloqueioHorario,
    DisponibilidadePsicologo,
    StatusAgendamento,
    TipoAtendimento,
)
from agendamentos.signals import agendamento_cancelado, agendamento_criado, disparar
from agendamentos.slots import SlotsDisponiveis, resolver_slots
from agendamentos.stores import (
    AgendamentoStore,
    DisponibilidadeStore,
    DjangoAgendamentoStore,
    DjangoDisponibilidadeStore,
)
from agendamentos.utils import snapshot_agendamento
from cadastros.models import PacientePlanoSaude

logger = logging.getLogger(__name__)

TRANSICOES = {
    StatusAgendamento.AGENDADO: frozenset({StatusAgendamento.CONFIRMADO, StatusAgendamento.CANCELADO}),
    StatusAgendamento.CONFIRMADO: frozenset({StatusAgendamento.REALIZADO, StatusAgendamento.CANCELADO}),
    StatusAgendamento.CANCELADO: frozenset(),
    StatusAgendamento.REALIZADO: frozenset(),
}

# campos que definem o horário/recurso; congelados em estados terminais
CAMPOS_AGENDA = ("data", "hora_inicio", "hora_fim", "sala", "psicologo", "remoto")

CAMPOS_EDITAVEIS = frozenset(
    {
        *CAMPOS_AGENDA,
        "paciente",
        "filial",
        "tipo_atendimento",
        "particular",
        "sublocacao",
        "plano_saude",
        "valor_consulta",
        "observacao",
    }
)


def pode_transicionar(de_status: str, para_status: str) -> bool:
    return para_status in TRANSICOES.get(de_status, frozenset())


def _duracao_padrao() -> int:
    return settings.AGENDAMENTOS_DURACAO_PADRAO_MINUTOS


def _hora_fim_padrao(hora_inicio: time) -> time:
    try:
        return somar_minutos(hora_inicio, _duracao_padrao())
    except ValueError:
        msg = "O horário de término não pode passar da meia-noite."
        raise DadosAgendamentoInvalidos(msg) from None


def _validar_pagamento(paciente, particular: bool, plano_saude) -> None:
    if particular:
        if plano_saude is not None:
            msg = "Atendimento particular não pode ter plano de saúde."
            raise DadosAgendamentoInvalidos(msg)
        return
    if plano_saude is None:
        msg = "Informe o plano de saúde ou marque o atendimento como particular."
        raise DadosAgendamentoInvalidos(msg)
    vinculo = PacientePlanoSaude.objects.filter(paciente=paciente, plano_saude=plano_saude).first()
    if vinculo is None or not vinculo.completo:
        msg = "O paciente não possui carteirinha e validade cadastradas para o plano selecionado."
        raise DadosAgendamentoInvalidos(msg)


def _validar_horario(agendamento: Agendamento) -> None:
    if agendamento.hora_inicio >= agendamento.hora_fim:
        msg = "O horário de término deve ser posterior ao horário de início."
        raise DadosAgendamentoInvalidos(msg)
    if agendamento.sala_id is not None and agendamento.sala.filial_id != agendamento.filial_id:
        msg = "A sala selecionada não pertence à filial do agendamento."
        raise DadosAgendamentoInvalidos(msg)
    if settings.AGENDAMENTOS_VALIDAR_HORARIO_CLINICA:
        validar_horario_clinica(agendamento.data, agendamento.hora_inicio, agendamento.hora_fim)


def _diff_agenda(agendamento: Agendamento) -> dict[str, Any]:
    return {
        "data": agendamento.data.isoformat(),
        "hora_inicio": agendamento.hora_inicio.isoformat(timespec="minutes"),
        "hora_fim": agendamento.hora_fim.isoformat(timespec="minutes"),
        "psicologo_id": agendamento.psicologo_id,
        "sala_id": agendamento.sala_id,
        "remoto": agendamento.remoto,
    }


def _para_json(valor):
    if isinstance(valor, (date, time)):
        return valor.isoformat()
    return getattr(valor, "pk", valor)


class AgendamentoService:
    """Criação, edição e transições de status de agendamentos."""

    agendamentos: AgendamentoStore = DjangoAgendamentoStore()
    disponibilidade: DisponibilidadeStore = DjangoDisponibilidadeStore()

    @staticmethod
    def verificar(agendamento: Agendamento, *, com_disponibilidade: bool = True) -> ResultadoConflito:
        """Roda o detector de conflitos contra o estado atual do store."""
        store = AgendamentoService.agendamentos
        disp = AgendamentoService.disponibilidade
        existentes = store.por_psicologo_e_periodo(agendamento.psicologo_id, agendamento.data, agendamento.data)
        if agendamento.sala_id is not None:
            existentes += store.por_sala_e_periodo(agendamento.sala_id, agendamento.data, agendamento.data)
        bloqueios = disp.bloqueios_por_psicologo_e_data(agendamento.psicologo_id, agendamento.data)
        janelas = disp.janelas_por_psicologo(agendamento.psicologo_id) if com_disponibilidade else None
        return verificar_conflito(agendamento, existentes, bloqueios, janelas)

    @staticmethod
    def _aplicar_politica(agendamento: Agendamento, resultado: ResultadoConflito, bloquear_fora: bool | None) -> None:
        if not resultado.tem_conflito:
            return
        AGENDAMENTOS_CONFLITOS_TOTAL.labels(tipo=resultado.tipo).inc()
        if bloquear_fora is None:
            bloquear_fora = settings.AGENDAMENTOS_BLOQUEAR_FORA_DISPONIBILIDADE
        if isinstance(resultado, ForaDisponibilidade) and not bloquear_fora:
            logger.warning(
                "Agendamento do psicólogo %s em %s %s fora da disponibilidade (aceito por política)",
                agendamento.psicologo_id,
                agendamento.data,
                agendamento.hora_inicio,
            )
            avisos = list((agendamento.metadata or {}).get("avisos", []))
            if resultado.tipo not in avisos:
                avisos.append(resultado.tipo)
            agendamento.metadata = {**(agendamento.metadata or {}), "avisos": avisos}
            return
        logger.info(
            "Conflito '%s' ao agendar psicólogo %s em %s %s",
            resultado.tipo,
            agendamento.psicologo_id,
            agendamento.data,
            agendamento.hora_inicio,
        )
        raise ConflitoAgendamento(resultado)

    @staticmethod
    def criar(  # noqa: PLR0913
        *,
        paciente: object,
        psicologo: object,
        filial: object,
        data: date,
        hora_inicio: time,
        hora_fim: time | None = None,
        sala: object | None = None,
        remoto: bool = False,
        tipo_atendimento: str = TipoAtendimento.SESSAO,
        particular: bool = False,
        sublocacao: bool = False,
        plano_saude: object | None = None,
        valor_consulta: int | None = None,
        observacao: str | None = None,
        metadata: dict[str, Any] | None = None,
        user: object | None = None,
        bloquear_fora_disponibilidade: bool | None = None,
    ) -> Agendamento:
        """Cria um agendamento ``agendado`` após validar horário, pagamento e conflitos.

        Raises:
            ConflitoAgendamento: psicólogo ou sala ocupados, bloqueio aprovado ou,
                conforme a política, horário fora da disponibilidade.
            DadosAgendamentoInvalidos / HorarioClinicaInvalido: dados inconsistentes.

        """
        inicio = monotonic()
        try:
            return AgendamentoService._criar_impl(
                paciente=paciente,
                psicologo=psicologo,
                filial=filial,
                data=data,
                hora_inicio=hora_inicio,
                hora_fim=hora_fim,
                sala=sala,
                remoto=remoto,
                tipo_atendimento=tipo_atendimento,
                particular=particular,
                sublocacao=sublocacao,
                plano_saude=plano_saude,
                valor_consulta=valor_consulta,
                observacao=observacao,
                metadata=metadata,
                user=user,
                bloquear_fora_disponibilidade=bloquear_fora_disponibilidade,
            )
        except AgendamentoError:
            AGENDAMENTOS_CRIACAO_ERROS_TOTAL.inc()
            raise
        finally:
            H_CRIA.observe(monotonic() - inicio)

    @staticmethod
    def _criar_impl(  # noqa: PLR0913
        *,
        paciente,
        psicologo,
        filial,
        data,
        hora_inicio,
        hora_fim,
        sala,
        remoto,
        tipo_atendimento,
        particular,
        sublocacao,
        plano_saude,
        valor_consulta,
        observacao,
        metadata,
        user,
        bloquear_fora_disponibilidade,
    ) -> Agendamento:
        if hora_fim is None:
            hora_fim = _hora_fim_padrao(hora_inicio)
        if valor_consulta is None and plano_saude is not None and not particular:
            valor_consulta = plano_saude.valor_consulta

        ag = Agendamento(
            paciente=paciente,
            psicologo=psicologo,
            filial=filial,
            data=data,
            hora_inicio=hora_inicio,
            hora_fim=hora_fim,
            status=StatusAgendamento.AGENDADO,
            tipo_atendimento=tipo_atendimento,
            particular=particular,
            sublocacao=sublocacao,
            plano_saude=plano_saude,
            valor_consulta=valor_consulta,
            observacao=observacao,
            metadata=dict(metadata or {}),
        )
        ag.definir_sala(sala)
        if remoto:
            ag.definir_remoto(True)

        _validar_horario(ag)
        _validar_pagamento(paciente, particular, plano_saude)

        store = AgendamentoService.agendamentos
        with transaction.atomic():
            store.travar_recursos(ag.psicologo_id, ag.sala_id)
            resultado = AgendamentoService.verificar(ag)
            AgendamentoService._aplicar_politica(ag, resultado, bloquear_fora_disponibilidade)
            store.inserir(ag)
            AuditoriaAgendamento.objects.create(
                agendamento=ag,
                user=user,
                tipo_evento="CRIACAO",
                para_status=ag.status,
                diff=_diff_agenda(ag),
            )
            dados = snapshot_agendamento(ag)
            transaction.on_commit(lambda: disparar(agendamento_criado, ag, dados))
        AGENDAMENTOS_CRIADOS_TOTAL.inc()
        logger.info("Agendamento %s criado para o psicólogo %s em %s %s", ag.pk, ag.psicologo_id, ag.data, ag.hora_inicio)
        return ag

    @staticmethod
    def atualizar(
        agendamento: Agendamento,
        *,
        user: object | None = None,
        bloquear_fora_disponibilidade: bool | None = None,
        **campos: Any,
    ) -> Agendamento:
        """Edita um agendamento, rechecando conflitos sem considerar ele mesmo.

        Se ``hora_inicio`` mudar sem ``hora_fim``, o término volta a ser o início
        mais a duração padrão.
        """
        desconhecidos = set(campos) - CAMPOS_EDITAVEIS
        if desconhecidos:
            msg = f"Campos não editáveis: {', '.join(sorted(desconhecidos))}"
            raise DadosAgendamentoInvalidos(msg)
        if (
            "hora_inicio" in campos
            and "hora_fim" not in campos
            and campos["hora_inicio"] != agendamento.hora_inicio
        ):
            campos["hora_fim"] = _hora_fim_padrao(campos["hora_inicio"])

        # sala e remoto mudam juntos pelos setters
        anteriores = {nome: getattr(agendamento, nome) for nome in (*campos, "sala", "remoto", "metadata")}
        alterados = {nome: valor for nome, valor in campos.items() if anteriores[nome] != valor}
        if not alterados:
            return agendamento
        mexe_agenda = any(nome in CAMPOS_AGENDA for nome in alterados)
        if mexe_agenda and agendamento.terminal:
            msg = f"Agendamento {agendamento.get_status_display().lower()} não pode ter data, horário ou local alterados."
            raise AgendamentoImutavel(msg)

        try:
            for nome, valor in alterados.items():
                if nome in ("sala", "remoto"):
                    continue
                setattr(agendamento, nome, valor)
            if "sala" in alterados:
                agendamento.definir_sala(alterados["sala"])
            if "remoto" in alterados:
                agendamento.definir_remoto(alterados["remoto"])
            auditados = [*alterados]
            auditados += [
                nome
                for nome in ("sala", "remoto")
                if nome not in alterados and getattr(agendamento, nome) != anteriores[nome]
            ]

            if mexe_agenda:
                _validar_horario(agendamento)
            _validar_pagamento(agendamento.paciente, agendamento.particular, agendamento.plano_saude)

            store = AgendamentoService.agendamentos
            with transaction.atomic():
                if mexe_agenda:
                    store.travar_recursos(agendamento.psicologo_id, agendamento.sala_id)
                    resultado = AgendamentoService.verificar(agendamento)
                    AgendamentoService._aplicar_politica(agendamento, resultado, bloquear_fora_disponibilidade)
                store.atualizar(agendamento)
                AuditoriaAgendamento.objects.create(
                    agendamento=agendamento,
                    user=user,
                    tipo_evento="ATUALIZACAO",
                    de_status=agendamento.status,
                    para_status=agendamento.status,
                    diff={
                        nome: {"de": _para_json(anteriores[nome]), "para": _para_json(getattr(agendamento, nome))}
                        for nome in auditados
                    },
                )
        except Exception:
            # a instância do chamador volta ao estado persistido
            for nome, valor in anteriores.items():
                setattr(agendamento, nome, valor)
            raise
        AGENDAMENTOS_ATUALIZADOS_TOTAL.inc()
        logger.info("Agendamento %s atualizado: %s", agendamento.pk, sorted(auditados))
        return agendamento

    @staticmethod
    def alterar_status(
        agendamento: Agendamento,
        novo_status: str,
        *,
        user: object | None = None,
        motivo: str | None = None,
    ) -> Agendamento:
        try:
            novo = StatusAgendamento(novo_status)
        except ValueError:
            msg = f"Status desconhecido: {novo_status!r}"
            raise DadosAgendamentoInvalidos(msg) from None

        with transaction.atomic():
            atual = Agendamento.objects.select_for_update().only("status").get(pk=agendamento.pk).status
            if not pode_transicionar(atual, novo):
                raise TransicaoInvalida(atual, novo)
            if novo == StatusAgendamento.REALIZADO and not Atendimento.objects.filter(agendamento_id=agendamento.pk).exists():
                raise ConclusaoPrematura(agendamento.pk)
            agendamento.status = novo
            AgendamentoService.agendamentos.atualizar(agendamento, ["status"])
            AuditoriaAgendamento.objects.create(
                agendamento=agendamento,
                user=user,
                tipo_evento="STATUS",
                de_status=atual,
                para_status=novo,
                motivo=motivo,
            )
            if novo == StatusAgendamento.CANCELADO:
                dados = snapshot_agendamento(agendamento)
                transaction.on_commit(lambda: disparar(agendamento_cancelado, agendamento, dados, motivo=motivo))

        AGENDAMENTOS_STATUS_TOTAL.labels(para_status=novo.value).inc()
        if novo == StatusAgendamento.CANCELADO:
            AGENDAMENTOS_CANCELADOS_TOTAL.inc()
        logger.info("Agendamento %s: %s -> %s", agendamento.pk, atual, novo.value)
        return agendamento

    @staticmethod
    def confirmar(agendamento: Agendamento, *, user: object | None = None) -> Agendamento:
        return AgendamentoService.alterar_status(agendamento, StatusAgendamento.CONFIRMADO, user=user)

    @staticmethod
    def cancelar(agendamento: Agendamento, *, motivo: str | None = None, user: object | None = None) -> Agendamento:
        """Cancela o agendamento; o horário volta a ficar livre para novos agendamentos."""
        return AgendamentoService.alterar_status(agendamento, StatusAgendamento.CANCELADO, user=user, motivo=motivo)

    @staticmethod
    def marcar_realizado(agendamento: Agendamento, *, user: object | None = None) -> Agendamento:
        return AgendamentoService.alterar_status(agendamento, StatusAgendamento.REALIZADO, user=user)

    @staticmethod
    def excluir(agendamento: Agendamento, *, user: object | None = None) -> None:
        """Remove o agendamento (e sua auditoria); prefira ``cancelar`` no fluxo normal."""
        pk = agendamento.pk
        with transaction.atomic():
            AgendamentoService.agendamentos.remover(pk)
        logger.info("Agendamento %s excluído por %s", pk, getattr(user, "pk", None))


class AtendimentoService:
    @staticmethod
    def registrar(
        agendamento: Agendamento,
        *,
        observacoes: str | None = None,
        evolucao: str | None = None,
        encaminhamento: str | None = None,
        duracao: int | None = None,
        user: object | None = None,
    ) -> Atendimento:
        """Registra a sessão; um agendamento confirmado passa a ``realizado``."""
        if agendamento.status == StatusAgendamento.CANCELADO:
            msg = "Não é possível registrar atendimento de um agendamento cancelado."
            raise DadosAgendamentoInvalidos(msg)
        with transaction.atomic():
            if Atendimento.objects.filter(agendamento_id=agendamento.pk).exists():
                msg = "Este agendamento já possui atendimento registrado."
                raise DadosAgendamentoInvalidos(msg)
            atendimento = Atendimento.objects.create(
                agendamento=agendamento,
                data_atendimento=timezone.now(),
                observacoes=observacoes,
                evolucao=evolucao,
                encaminhamento=encaminhamento,
                duracao=duracao,
            )
            if agendamento.status == StatusAgendamento.CONFIRMADO:
                AgendamentoService.marcar_realizado(agendamento, user=user)
        return atendimento


class DisponibilidadeService:
    """Manutenção das janelas semanais e consultas de disponibilidade."""

    disponibilidade: DisponibilidadeStore = DjangoDisponibilidadeStore()
    agendamentos: AgendamentoStore = DjangoAgendamentoStore()

    @staticmethod
    def _validar_janela(janela: DisponibilidadePsicologo) -> None:
        if not 0 <= janela.dia_semana <= 6:  # noqa: PLR2004
            msg = "Dia da semana deve estar entre 0 (domingo) e 6 (sábado)."
            raise DisponibilidadeInvalida(msg)
        if janela.hora_inicio >= janela.hora_fim:
            msg = "O horário de término deve ser posterior ao horário de início."
            raise DisponibilidadeInvalida(msg)
        if not janela.ativo:
            return
        existentes = DisponibilidadePsicologo.objects.filter(psicologo_id=janela.psicologo_id, ativo=True)
        if janelas_sobrepostas(janela, existentes):
            msg = "Já existe uma disponibilidade ativa que se sobrepõe a este horário."
            raise DisponibilidadeInvalida(msg)

    @staticmethod
    def criar_janela(
        *,
        psicologo: object,
        dia_semana: int,
        hora_inicio: time,
        hora_fim: time,
        remoto: bool = False,
    ) -> DisponibilidadePsicologo:
        janela = DisponibilidadePsicologo(
            psicologo=psicologo,
            dia_semana=dia_semana,
            hora_inicio=hora_inicio,
            hora_fim=hora_fim,
            remoto=remoto,
        )
        with transaction.atomic():
            DisponibilidadeService.agendamentos.travar_recursos(janela.psicologo_id)
            DisponibilidadeService._validar_janela(janela)
            janela.save()
        return janela

    @staticmethod
    def atualizar_janela(janela: DisponibilidadePsicologo, **campos: Any) -> DisponibilidadePsicologo:
        permitidos = {"dia_semana", "hora_inicio", "hora_fim", "remoto"}
        desconhecidos = set(campos) - permitidos
        if desconhecidos:
            msg = f"Campos não editáveis: {', '.join(sorted(desconhecidos))}"
            raise DisponibilidadeInvalida(msg)
        for nome, valor in campos.items():
            setattr(janela, nome, valor)
        with transaction.atomic():
            DisponibilidadeService.agendamentos.travar_recursos(janela.psicologo_id)
            DisponibilidadeService._validar_janela(janela)
            janela.save()
        return janela

    @staticmethod
    def _garantir_outra_ativa(janela: DisponibilidadePsicologo) -> None:
        outras = (
            DisponibilidadePsicologo.objects.filter(psicologo_id=janela.psicologo_id, ativo=True)
            .exclude(pk=janela.pk)
            .exists()
        )
        if janela.ativo and not outras:
            msg = "O psicólogo precisa manter ao menos uma disponibilidade ativa."
            raise DisponibilidadeInvalida(msg)

    @staticmethod
    def desativar_janela(janela: DisponibilidadePsicologo) -> DisponibilidadePsicologo:
        with transaction.atomic():
            DisponibilidadeService.agendamentos.travar_recursos(janela.psicologo_id)
            DisponibilidadeService._garantir_outra_ativa(janela)
            janela.ativo = False
            janela.save(update_fields=["ativo", "updated_at"])
        return janela

    @staticmethod
    def remover_janela(janela: DisponibilidadePsicologo) -> None:
        with transaction.atomic():
            DisponibilidadeService.agendamentos.travar_recursos(janela.psicologo_id)
            DisponibilidadeService._garantir_outra_ativa(janela)
            janela.delete()

    @staticmethod
    def esta_dentro(psicologo_id: int, data: date, hora_inicio: time, hora_fim: time, *, remoto: bool = False) -> bool:
        janelas = DisponibilidadeService.disponibilidade.janelas_por_psicologo(psicologo_id)
        return esta_dentro_disponibilidade(janelas, psicologo_id, data, hora_inicio, hora_fim, remoto=remoto)

    @staticmethod
    def slots(
        psicologo_id: int,
        data: date,
        *,
        granularidade_minutos: int | None = None,
        remoto: bool | None = None,
    ) -> SlotsDisponiveis:
        if granularidade_minutos is None:
            granularidade_minutos = settings.AGENDAMENTOS_GRANULARIDADE_MINUTOS
        disp = DisponibilidadeService.disponibilidade
        return resolver_slots(
            psicologo_id,
            data,
            granularidade_minutos,
            DisponibilidadeService.agendamentos.por_psicologo_e_periodo(psicologo_id, data, data),
            disp.janelas_por_psicologo(psicologo_id),
            disp.bloqueios_por_psicologo_e_data(psicologo_id, data),
            remoto=remoto,
        )


class BloqueioService:
    @staticmethod
    def solicitar(*, psicologo: object, data_inicio: date, data_fim: date, motivo: str | None = None) -> BloqueioHorario:
        if data_inicio > data_fim:
            msg = "A data de início do bloqueio deve ser anterior ou igual à data de fim."
            raise BloqueioInvalido(msg)
        bloqueio = BloqueioHorario.objects.create(
            psicologo=psicologo,
            data_inicio=data_inicio,
            data_fim=data_fim,
            motivo=motivo,
        )
        logger.info("Bloqueio %s solicitado para o psicólogo %s", bloqueio.pk, bloqueio.psicologo_id)
        return bloqueio

    @staticmethod
    def aprovar(bloqueio: BloqueioHorario, *, user: object | None = None) -> BloqueioHorario:
        """Aprova o bloqueio; agendamentos já existentes no período não são alterados."""
        if bloqueio.aprovado:
            return bloqueio
        with transaction.atomic():
            bloqueio.aprovado = True
            bloqueio.aprovado_em = timezone.now()
            bloqueio.aprovado_por = user if getattr(user, "pk", None) else None
            bloqueio.save(update_fields=["aprovado", "aprovado_em", "aprovado_por", "updated_at"])
        afetados = Agendamento.objects.filter(
            psicologo_id=bloqueio.psicologo_id,
            data__gte=bloqueio.data_inicio,
            data__lte=bloqueio.data_fim,
            status__in=[StatusAgendamento.AGENDADO, StatusAgendamento.CONFIRMADO],
        ).count()
        if afetados:
            logger.warning(
                "Bloqueio %s aprovado com %s agendamento(s) ativo(s) no período", bloqueio.pk, afetados
            )
        return bloqueio

