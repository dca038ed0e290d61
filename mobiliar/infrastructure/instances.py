"""
Módulo de inicialização dos repositórios e gateways.
Deve ser importado somente depois que o Django estiver configurado.

O catálogo e o gateway de despacho são criados uma vez por processo, conforme
CATALOGO_BACKEND e DESPACHO_BACKEND. O carrinho NÃO é global: cada requisição
monta o seu GerenciadorCarrinho a partir da sessão.
"""
import logging

from django.conf import settings

from mobiliar.core.carrinho import GerenciadorCarrinho
from mobiliar.core.exceptions import DadosInvalidosError
from .carrinho_store import SessaoCarrinhoStore
from .documentos import GitHubArmazemDocumentos
from .gateways import EvolutionAPIGateway, WhatsAppLinkGateway, WhatsAppGatewayMock
from .repositories import CatalogoMemoria, CatalogoDocumentos

logger = logging.getLogger(__name__)

_catalogo = None
_despacho = None


def criar_catalogo():
    backend = settings.CATALOGO_BACKEND
    if backend == 'memoria':
        return CatalogoMemoria()
    if backend == 'documentos':
        armazem = GitHubArmazemDocumentos(
            token=settings.GITHUB_TOKEN,
            owner=settings.GITHUB_OWNER,
            repo=settings.GITHUB_REPO,
            branch=settings.GITHUB_BRANCH,
            caminho=settings.GITHUB_DATA_PATH,
        )
        return CatalogoDocumentos(armazem)
    raise DadosInvalidosError(f"CATALOGO_BACKEND desconhecido: {backend!r}.")


def criar_despacho():
    backend = settings.DESPACHO_BACKEND
    if backend == 'link':
        return WhatsAppLinkGateway()
    if backend == 'evolution':
        return EvolutionAPIGateway(
            base_url=settings.EVOLUTION_API_URL,
            api_key=settings.EVOLUTION_API_KEY,
            instance_name=settings.EVOLUTION_INSTANCE_NAME,
        )
    if backend == 'mock':
        return WhatsAppGatewayMock()
    raise DadosInvalidosError(f"DESPACHO_BACKEND desconhecido: {backend!r}.")


def catalogo():
    global _catalogo
    if _catalogo is None:
        _catalogo = criar_catalogo()
        logger.info("Catálogo inicializado: %s", type(_catalogo).__name__)
    return _catalogo


def despacho():
    global _despacho
    if _despacho is None:
        _despacho = criar_despacho()
        logger.info("Gateway de despacho inicializado: %s", type(_despacho).__name__)
    return _despacho


def carrinho_da_sessao(session) -> GerenciadorCarrinho:
    return GerenciadorCarrinho(SessaoCarrinhoStore(session))


def redefinir():
    """Descarta as instâncias (usado nos testes para recomeçar do zero)."""
    global _catalogo, _despacho
    _catalogo = None
    _despacho = None
