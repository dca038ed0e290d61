# mobiliar/infrastructure/carrinho_store.py
# Persistência do carrinho de compras (sessão do Django ou memória).

import logging
from typing import List, Optional

from mobiliar.core.entities import ItemCarrinho
from mobiliar.core.exceptions import DadosInvalidosError, PersistenciaError
from mobiliar.core.ports import ICarrinhoStore

logger = logging.getLogger(__name__)


class SessaoCarrinhoStore(ICarrinhoStore):
    """
    Guarda o snapshot do carrinho na sessão do Django, no formato de `ItemCarrinho.para_dict`.
    Entradas corrompidas ou de formato desconhecido são descartadas na leitura.
    """

    SESSION_KEY = 'carrinho_mobiliar'

    def __init__(self, session):
        self.session = session

    def carregar(self) -> List[ItemCarrinho]:
        try:
            bruto = self.session.get(self.SESSION_KEY)
        except Exception as e:
            raise PersistenciaError(f"Sessão indisponível: {e}")

        if not bruto:
            return []
        if not isinstance(bruto, list):
            logger.warning("Carrinho da sessão em formato inesperado (%s); descartado.", type(bruto).__name__)
            return []

        itens = []
        for indice, dados in enumerate(bruto):
            try:
                itens.append(ItemCarrinho.de_dict(dados))
            except DadosInvalidosError as e:
                logger.warning("Item %d do carrinho da sessão descartado: %s", indice, e.message)
        return itens

    def salvar(self, itens: List[ItemCarrinho]) -> None:
        try:
            self.session[self.SESSION_KEY] = [item.para_dict() for item in itens]
            self.session.modified = True
        except Exception as e:
            raise PersistenciaError(f"Falha ao gravar o carrinho na sessão: {e}")


class MemoriaCarrinhoStore(ICarrinhoStore):
    """Store em memória, útil em scripts e testes. Guarda o formato serializado."""

    def __init__(self, itens: Optional[List[ItemCarrinho]] = None):
        self._dados = [item.para_dict() for item in (itens or [])]

    def carregar(self) -> List[ItemCarrinho]:
        return [ItemCarrinho.de_dict(dados) for dados in self._dados]

    def salvar(self, itens: List[ItemCarrinho]) -> None:
        self._dados = [item.para_dict() for item in itens]
