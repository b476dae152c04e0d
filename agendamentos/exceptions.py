from shared.exceptions import NegocioError


class AgendamentoError(NegocioError):
    """Base dos erros de regra da agenda."""

    pass


class ConflitoAgendamento(AgendamentoError):
    def __init__(self, resultado):
        self.resultado = resultado
        super().__init__(resultado.mensagem)


class TransicaoInvalida(AgendamentoError):
    def __init__(self, de_status, para_status):
        self.de_status = de_status
        self.para_status = para_status
        super().__init__(f"Não é possível alterar o status de '{de_status}' para '{para_status}'")


class ConclusaoPrematura(AgendamentoError):
    def __init__(self, agendamento_id=None):
        self.agendamento_id = agendamento_id
        super().__init__("O atendimento precisa ser registrado antes de concluir o agendamento")


class AgendamentoImutavel(AgendamentoError):
    pass


class DadosAgendamentoInvalidos(AgendamentoError):
    pass


class HorarioClinicaInvalido(AgendamentoError):
    pass


class DisponibilidadeInvalida(AgendamentoError):
    pass


class BloqueioInvalido(AgendamentoError):
    pass
