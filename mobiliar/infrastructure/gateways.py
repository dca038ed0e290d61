import logging
import re
from typing import List, Optional, Tuple
from urllib.parse import quote

import requests

from mobiliar.core.ports import IDespachoMensagem
from mobiliar.core.exceptions import DespachoFalhouError

logger = logging.getLogger(__name__)


# ====================================================================
# UTILITÁRIOS DE WHATSAPP
# ====================================================================

def formatar_numero_whatsapp(numero: str) -> str:
    """Mantém só os dígitos; números com 11 dígitos (DDD + celular) ganham o código do Brasil."""
    limpo = re.sub(r'\D', '', numero or '')
    if len(limpo) == 11:
        return f"55{limpo}"
    return limpo


def validar_numero_whatsapp(numero: str) -> bool:
    limpo = re.sub(r'\D', '', numero or '')
    return 10 <= len(limpo) <= 15


def gerar_url_whatsapp(mensagem: str, numero: str) -> str:
    """Link wa.me com a mensagem codificada (equivalente ao encodeURIComponent)."""
    return f"https://wa.me/{formatar_numero_whatsapp(numero)}?text={quote(mensagem, safe='')}"


# ====================================================================
# GATEWAYS: Implementações concretas de IDespachoMensagem.
# ====================================================================

class WhatsAppLinkGateway(IDespachoMensagem):
    """
    Entrega o pedido ao cliente como link wa.me; o envio efetivo acontece
    no aparelho do cliente. Só recusa quando o número de destino é inválido.
    """

    def enviar(self, mensagem: str, destino: str) -> bool:
        if not validar_numero_whatsapp(destino):
            raise DespachoFalhouError(f"Número de WhatsApp inválido: {destino!r}.")
        logger.info("Link de pedido gerado para %s.", formatar_numero_whatsapp(destino))
        return True

    def url_para(self, mensagem: str, destino: str) -> Optional[str]:
        return gerar_url_whatsapp(mensagem, destino)


class EvolutionAPIGateway(IDespachoMensagem):
    """
    Gateway para envio de mensagens no WhatsApp via EvolutionAPI.
    Implementa o Protocolo IDespachoMensagem.
    """

    def __init__(self, base_url: str, api_key: str, instance_name: str, timeout: int = 5):
        self.base_url = (base_url or '').rstrip('/')
        self.api_key = api_key
        self.instance_name = instance_name
        self.timeout = timeout
        self.headers = {
            "apikey": self.api_key,
            "Content-Type": "application/json"
        }
        if not self.api_key:
            logger.warning("Chave Evolution-API não configurada.")

    def enviar(self, mensagem: str, destino: str) -> bool:
        if not self.api_key or not self.instance_name or not self.base_url:
            logger.warning("Configuração da Evolution-API incompleta. Envio de WhatsApp ignorado.")
            return False

        payload = {
            "number": formatar_numero_whatsapp(destino),
            "options": {"delay": 1200, "presence": "typing"},
            "textMessage": {"text": mensagem}
        }

        try:
            url = f"{self.base_url}/{self.instance_name}/message/sendText"
            response = requests.post(url, json=payload, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise DespachoFalhouError(f"Falha ao enviar mensagem pela EvolutionAPI: {e}")

        return response.status_code in [200, 201]


class WhatsAppGatewayMock(IDespachoMensagem):
    """
    Gateway Mock para simulação de mensagens WhatsApp.
    Registra as mensagens em `enviados` e no log.
    """

    def __init__(self, resultado: bool = True):
        self.resultado = resultado
        self.enviados: List[Tuple[str, str]] = []

    def enviar(self, mensagem: str, destino: str) -> bool:
        logger.info("[MOCK WhatsApp] Para: %s\nMensagem: %s", destino, mensagem)
        self.enviados.append((destino, mensagem))
        return self.resultado

    def url_para(self, mensagem: str, destino: str) -> Optional[str]:
        return gerar_url_whatsapp(mensagem, destino)
