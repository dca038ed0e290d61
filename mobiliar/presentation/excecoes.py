"""
Tradução das exceções da Camada Core para respostas HTTP da API.
Configurado em REST_FRAMEWORK['EXCEPTION_HANDLER'].
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from mobiliar.core.exceptions import (
    BaseErroCore,
    DadosInvalidosError,
    ItemNaoEncontradoError,
    AutenticacaoError,
    DespachoFalhouError,
    PersistenciaError,
)

logger = logging.getLogger(__name__)

STATUS_POR_ERRO = (
    (DadosInvalidosError, status.HTTP_400_BAD_REQUEST),
    (ItemNaoEncontradoError, status.HTTP_404_NOT_FOUND),
    (AutenticacaoError, status.HTTP_401_UNAUTHORIZED),
    (DespachoFalhouError, status.HTTP_502_BAD_GATEWAY),
    (PersistenciaError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def tratar_excecao(exc, context):
    if isinstance(exc, BaseErroCore):
        codigo = next((c for tipo, c in STATUS_POR_ERRO if isinstance(exc, tipo)), status.HTTP_500_INTERNAL_SERVER_ERROR)
        if codigo >= 500:
            logger.error("Erro em %s: %s", context['view'].__class__.__name__, exc.message)
        response = Response({'message': exc.message}, status=codigo)
        if codigo == status.HTTP_401_UNAUTHORIZED:
            response['WWW-Authenticate'] = 'Session'
        return response

    return exception_handler(exc, context)
