class NegocioError(Exception):
    """Erro de regra de negócio genérico."""

    pass
