"""
Formatação do pedido para WhatsApp e finalização da compra.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from mobiliar.core.carrinho import GerenciadorCarrinho, formatar_moeda
from mobiliar.core.entities import ItemCarrinho, Usuario
from mobiliar.core.exceptions import CarrinhoVazioError, DespachoFalhouError
from mobiliar.core.ports import IDespachoMensagem

logger = logging.getLogger(__name__)

__all__ = ['formatar_pedido', 'formatar_moeda', 'ResultadoPedido', 'FinalizarPedidoUseCase']

LINHA = '─' * 30

OBSERVACOES = (
    "Confirmar disponibilidade dos produtos",
    "Definir prazo de entrega",
    "Combinar forma de pagamento",
)


def formatar_pedido(
    itens: List[ItemCarrinho],
    usuario: Optional[Usuario] = None,
    agora: Optional[datetime] = None,
) -> str:
    """Gera o texto do pedido (markdown do WhatsApp) a partir dos itens do carrinho."""
    if not itens:
        raise CarrinhoVazioError()

    agora = agora or datetime.now()
    cliente = f"{usuario.nome} ({usuario.segmento.value})" if usuario else "Cliente"

    linhas = [
        "🛒 *NOVO PEDIDO*",
        "",
        f"👤 *Cliente:* {cliente}",
        f"📅 *Data:* {agora.strftime('%d/%m/%Y, %H:%M:%S')}",
        "",
        "📋 *ITENS DO PEDIDO:*",
        LINHA,
    ]

    total = Decimal('0.00')
    for numero, item in enumerate(itens, start=1):
        total += item.preco_total
        linhas += [
            "",
            f"*{numero}. {item.produto_nome}*",
            f"   🎨 Cor: {item.cor_nome}",
            f"   📦 Quantidade: {item.quantidade}",
            f"   💰 Preço unitário: {formatar_moeda(item.preco_unitario)}",
            f"   💵 Subtotal: {formatar_moeda(item.preco_total)}",
        ]

    linhas += [
        "",
        LINHA,
        f"💰 *TOTAL DO PEDIDO: {formatar_moeda(total)}*",
        "",
        "📝 *Observações:*",
    ]
    linhas += [f"• {obs}" for obs in OBSERVACOES]
    linhas += ["", "✅ Pedido gerado automaticamente pelo sistema"]

    return "\n".join(linhas)


@dataclass
class ResultadoPedido:
    enviado: bool
    mensagem: str
    url_whatsapp: Optional[str] = None


class FinalizarPedidoUseCase:
    """
    Formata o carrinho, entrega ao canal de despacho e só então limpa o carrinho.
    Se o despacho falhar o carrinho permanece intacto para nova tentativa.
    """
    def __init__(self, gerenciador: GerenciadorCarrinho, despacho: IDespachoMensagem, destino: str):
        self.gerenciador = gerenciador
        self.despacho = despacho
        self.destino = destino

    def executar(self, usuario: Optional[Usuario] = None, agora: Optional[datetime] = None) -> ResultadoPedido:
        itens = self.gerenciador.itens
        if not itens:
            raise CarrinhoVazioError()

        mensagem = formatar_pedido(itens, usuario, agora)
        url = self.despacho.url_para(mensagem, self.destino)

        try:
            enviado = bool(self.despacho.enviar(mensagem, self.destino))
        except DespachoFalhouError as e:
            logger.error("Falha no despacho do pedido para %s: %s", self.destino, e.message)
            enviado = False

        if enviado:
            self.gerenciador.limpar()
            logger.info("Pedido enviado para %s (%d itens).", self.destino, len(itens))
        else:
            logger.warning("Pedido não enviado; carrinho mantido com %d itens.", len(itens))

        return ResultadoPedido(enviado=enviado, mensagem=mensagem, url_whatsapp=url)
