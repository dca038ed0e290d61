"""
Agregador do carrinho de compras.

O estado autoritativo fica em memória; o ICarrinhoStore apenas espelha cada mutação.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Dict, Any

from mobiliar.core.entities import ItemCarrinho, ItemCarrinhoEntrada, SEM_COR, para_decimal, CENTAVOS
from mobiliar.core.exceptions import (
    DadosInvalidosError,
    CorObrigatoriaError,
    ItemNaoEncontradoError,
    PersistenciaError,
)
from mobiliar.core.ports import ICarrinhoStore

logger = logging.getLogger(__name__)


def formatar_moeda(valor) -> str:
    """Formata valores em Real Brasileiro: 1234.5 -> 'R$ 1.234,50'."""
    valor = para_decimal(valor)
    return f"R$ {valor:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


class GerenciadorCarrinho:
    """Itens ordenados por inserção, mesclados por (produto, cor)."""

    def __init__(self, store: ICarrinhoStore):
        self.store = store
        self.persistencia_degradada = False
        try:
            self._itens: List[ItemCarrinho] = list(store.carregar())
        except PersistenciaError as e:
            logger.warning("Carrinho não pôde ser carregado, iniciando vazio: %s", e.message)
            self.persistencia_degradada = True
            self._itens = []

    # ---------------------------------------------------------------
    # Consultas
    # ---------------------------------------------------------------

    @property
    def itens(self) -> List[ItemCarrinho]:
        return list(self._itens)

    @property
    def vazio(self) -> bool:
        return not self._itens

    def total(self) -> Decimal:
        return sum((item.preco_total for item in self._itens), Decimal('0.00'))

    def quantidade_itens(self) -> int:
        return sum(item.quantidade for item in self._itens)

    def contem(self, produto_id: int, cor_id: Optional[int] = None) -> bool:
        return any(item.chave == (produto_id, cor_id) for item in self._itens)

    def estatisticas(self) -> Dict[str, Any]:
        quantidade = self.quantidade_itens()
        total = self.total()
        media = (total / quantidade).quantize(CENTAVOS, rounding=ROUND_HALF_UP) if quantidade else Decimal('0.00')
        return {
            'quantidade_itens': quantidade,
            'valor_total': total,
            'produtos_unicos': len(self._itens),
            'preco_medio_item': media,
            'vazio': self.vazio,
        }

    def resumo(self) -> str:
        if self.vazio:
            return "Carrinho vazio"
        quantidade = self.quantidade_itens()
        rotulo = "item" if quantidade == 1 else "itens"
        return f"{quantidade} {rotulo} - {formatar_moeda(self.total())}"

    # ---------------------------------------------------------------
    # Mutações
    # ---------------------------------------------------------------

    def adicionar(self, entrada: ItemCarrinhoEntrada) -> ItemCarrinho:
        """
        Adiciona um item ou incrementa a quantidade do item de mesma (produto, cor).
        Na mesclagem o preço unitário já gravado é mantido.
        """
        if isinstance(entrada.quantidade, bool) or not isinstance(entrada.quantidade, int) or entrada.quantidade < 1:
            raise DadosInvalidosError("A quantidade deve ser um inteiro maior ou igual a 1.")
        preco_unitario = para_decimal(entrada.preco_unitario, campo='preco_unitario')
        if preco_unitario <= 0:
            raise DadosInvalidosError("O preço unitário deve ser maior que zero.")

        cor_id = entrada.cor_id
        if entrada.cores_disponiveis:
            if cor_id is None:
                raise CorObrigatoriaError()
            if cor_id not in entrada.cores_disponiveis:
                raise DadosInvalidosError(f"A cor {cor_id} não está disponível para este produto.")
        else:
            cor_id = None

        existente = next((i for i in self._itens if i.chave == (entrada.produto_id, cor_id)), None)
        if existente is not None:
            existente.quantidade += entrada.quantidade
            existente.recalcular()
            logger.debug("Item mesclado no carrinho: produto=%s cor=%s qtd=%s",
                         existente.produto_id, existente.cor_id, existente.quantidade)
            item = existente
        else:
            item = ItemCarrinho(
                produto_id=entrada.produto_id,
                produto_nome=entrada.produto_nome,
                cor_id=cor_id,
                cor_nome=(entrada.cor_nome or SEM_COR) if cor_id is not None else SEM_COR,
                quantidade=entrada.quantidade,
                preco_unitario=preco_unitario,
                imagem=entrada.imagem,
            )
            self._itens.append(item)

        self._persistir()
        return item

    def remover(self, indice: int) -> ItemCarrinho:
        self._validar_indice(indice)
        item = self._itens.pop(indice)
        self._persistir()
        return item

    def atualizar_quantidade(self, indice: int, quantidade: int) -> Optional[ItemCarrinho]:
        """Quantidade <= 0 equivale a remover o item. Retorna None nesse caso."""
        if isinstance(quantidade, bool) or not isinstance(quantidade, int):
            raise DadosInvalidosError("A quantidade deve ser um número inteiro.")
        if quantidade <= 0:
            self.remover(indice)
            return None
        self._validar_indice(indice)
        item = self._itens[indice]
        item.quantidade = quantidade
        item.recalcular()
        self._persistir()
        return item

    def limpar(self) -> None:
        self._itens = []
        self._persistir()

    # ---------------------------------------------------------------
    # Internos
    # ---------------------------------------------------------------

    def _validar_indice(self, indice: int):
        if isinstance(indice, bool) or not isinstance(indice, int) or not 0 <= indice < len(self._itens):
            raise ItemNaoEncontradoError(f"Item {indice} não encontrado no carrinho.")

    def _persistir(self):
        try:
            self.store.salvar(list(self._itens))
            self.persistencia_degradada = False
        except PersistenciaError as e:
            logger.warning("Falha ao persistir o carrinho (operação mantida em memória): %s", e.message)
            self.persistencia_degradada = True
