"""
Regras de precificação por segmento.

Funções puras: não acessam repositórios, não registram log e não dependem de estado.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from mobiliar.core.entities import TabelaPreco, Segmento, para_decimal, CENTAVOS, QUATRO_CASAS
from mobiliar.core.exceptions import (
    DadosInvalidosError,
    TabelaPrecoObrigatoriaError,
    TabelaPrecoNaoEncontradaError,
)

UMA_CASA = Decimal('0.1')
CEM = Decimal('100')


def resolver_preco(
    preco_base,
    segmento: Segmento,
    tabelas: Iterable[TabelaPreco],
    tabela_id: Optional[int] = None,
) -> Decimal:
    """
    Calcula o preço unitário efetivo de um produto para o segmento do cliente.

    - restaurante: preço base, sem tabela (qualquer tabela_id é ignorada).
    - loja: preço base x multiplicador da tabela escolhida, arredondado em 2 casas (half-up).
    - admin: não compra.
    """
    preco_base = para_decimal(preco_base, campo='preco_base')
    if preco_base < 0:
        raise DadosInvalidosError("O preço base não pode ser negativo.")

    if segmento is Segmento.RESTAURANTE:
        return preco_base

    if segmento is Segmento.LOJA:
        if tabela_id is None:
            raise TabelaPrecoObrigatoriaError()
        tabela = next((t for t in tabelas if t.id == tabela_id), None)
        if tabela is None:
            raise TabelaPrecoNaoEncontradaError(tabela_id)
        return (preco_base * tabela.multiplicador).quantize(CENTAVOS, rounding=ROUND_HALF_UP)

    if segmento is Segmento.ADMIN:
        raise DadosInvalidosError("Administradores não realizam compras.")

    raise DadosInvalidosError(f"Segmento sem regra de preço: {segmento!r}.")


def tabelas_do_segmento(tabelas: Iterable[TabelaPreco], segmento: Segmento) -> List[TabelaPreco]:
    """Tabelas ativas aplicáveis ao segmento, ordenadas pelo multiplicador."""
    return sorted(
        (t for t in tabelas if t.ativo and t.segmento is segmento),
        key=lambda t: (t.multiplicador, t.id or 0),
    )


# ====================================================================
# CONVERSÕES PARA O PAINEL ADMINISTRATIVO
# ====================================================================

def percentual_para_multiplicador(percentual) -> Decimal:
    """10 -> 1.1000; -10 -> 0.9000."""
    percentual = para_decimal(percentual, UMA_CASA, campo='percentual')
    multiplicador = ((CEM + percentual) / CEM).quantize(QUATRO_CASAS, rounding=ROUND_HALF_UP)
    if multiplicador <= 0:
        raise DadosInvalidosError("O percentual deve resultar em multiplicador maior que zero.")
    return multiplicador


def multiplicador_para_percentual(multiplicador) -> Decimal:
    multiplicador = para_decimal(multiplicador, QUATRO_CASAS, campo='multiplicador')
    return ((multiplicador - 1) * CEM).quantize(UMA_CASA, rounding=ROUND_HALF_UP)


def formatar_percentual(multiplicador) -> str:
    """Formata o multiplicador como ajuste percentual: 1.1 -> '+10.0%'."""
    percentual = multiplicador_para_percentual(multiplicador)
    sinal = '+' if percentual >= 0 else ''
    return f"{sinal}{percentual}%"
