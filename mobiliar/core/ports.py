# mobiliar/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (Repositórios, Stores,
Gateways) DEVE seguir para se conectar à camada Core (Casos de Uso).
"""

from typing import Protocol, List, Optional, Dict, Any
from abc import abstractmethod

from mobiliar.core.entities import (
    Produto, Categoria, Cor, TabelaPreco, Promocao, Aviso, Usuario, ItemCarrinho, Segmento
)


# ====================================================================
# 1. REPOSITÓRIO DO CATÁLOGO (Porta de Persistência)
# ====================================================================

class ICatalogoRepository(Protocol):
    """
    Protocolo do catálogo. As leituras devolvem apenas registros ativos.
    Os métodos `atualizar_*` recebem um dicionário de campos já validados e
    levantam o NotFound da entidade quando o id não existe.
    """

    # --- Produtos ---
    @abstractmethod
    def listar_produtos(self, categoria_id: Optional[int] = None) -> List[Produto]: ...

    @abstractmethod
    def buscar_produto(self, produto_id: int) -> Produto: ...

    @abstractmethod
    def criar_produto(self, produto: Produto) -> Produto: ...

    @abstractmethod
    def atualizar_produto(self, produto_id: int, campos: Dict[str, Any]) -> Produto: ...

    @abstractmethod
    def deletar_produto(self, produto_id: int) -> None:
        """Exclusão lógica (ativo=False)."""
        ...

    # --- Categorias ---
    @abstractmethod
    def listar_categorias(self) -> List[Categoria]: ...

    @abstractmethod
    def buscar_categoria(self, categoria_id: int) -> Categoria: ...

    @abstractmethod
    def criar_categoria(self, categoria: Categoria) -> Categoria: ...

    @abstractmethod
    def atualizar_categoria(self, categoria_id: int, campos: Dict[str, Any]) -> Categoria: ...

    @abstractmethod
    def deletar_categoria(self, categoria_id: int) -> None: ...

    # --- Cores ---
    @abstractmethod
    def listar_cores(self) -> List[Cor]: ...

    @abstractmethod
    def buscar_cor(self, cor_id: int) -> Cor: ...

    @abstractmethod
    def criar_cor(self, cor: Cor) -> Cor: ...

    @abstractmethod
    def atualizar_cor(self, cor_id: int, campos: Dict[str, Any]) -> Cor: ...

    @abstractmethod
    def deletar_cor(self, cor_id: int) -> None: ...

    # --- Tabelas de preço ---
    @abstractmethod
    def listar_tabelas_preco(self, segmento: Optional[Segmento] = None) -> List[TabelaPreco]: ...

    @abstractmethod
    def buscar_tabela_preco(self, tabela_id: int) -> TabelaPreco: ...

    @abstractmethod
    def criar_tabela_preco(self, tabela: TabelaPreco) -> TabelaPreco: ...

    @abstractmethod
    def atualizar_tabela_preco(self, tabela_id: int, campos: Dict[str, Any]) -> TabelaPreco: ...

    @abstractmethod
    def deletar_tabela_preco(self, tabela_id: int) -> None: ...

    # --- Promoções ---
    @abstractmethod
    def listar_promocoes(self) -> List[Promocao]: ...

    @abstractmethod
    def buscar_promocao(self, promocao_id: int) -> Promocao: ...

    @abstractmethod
    def criar_promocao(self, promocao: Promocao) -> Promocao: ...

    @abstractmethod
    def atualizar_promocao(self, promocao_id: int, campos: Dict[str, Any]) -> Promocao: ...

    @abstractmethod
    def deletar_promocao(self, promocao_id: int) -> None: ...

    # --- Avisos ---
    @abstractmethod
    def listar_avisos(self, segmento: Optional[Segmento] = None) -> List[Aviso]:
        """Sem segmento: todos os ativos. Com segmento: ativos gerais ou do segmento."""
        ...

    @abstractmethod
    def buscar_aviso(self, aviso_id: int) -> Aviso: ...

    @abstractmethod
    def criar_aviso(self, aviso: Aviso) -> Aviso: ...

    @abstractmethod
    def atualizar_aviso(self, aviso_id: int, campos: Dict[str, Any]) -> Aviso: ...

    @abstractmethod
    def deletar_aviso(self, aviso_id: int) -> None: ...

    # --- Usuários ---
    @abstractmethod
    def buscar_usuario(self, usuario_id: int) -> Optional[Usuario]: ...

    @abstractmethod
    def buscar_usuario_por_username(self, username: str) -> Optional[Usuario]: ...


# ====================================================================
# 2. STORE DO CARRINHO
# ====================================================================

class ICarrinhoStore(Protocol):
    """Espelho persistente do carrinho. Falhas devem levantar PersistenciaError."""

    @abstractmethod
    def carregar(self) -> List[ItemCarrinho]: ...

    @abstractmethod
    def salvar(self, itens: List[ItemCarrinho]) -> None: ...


# ====================================================================
# 3. GATEWAYS EXTERNOS
# ====================================================================

class IDespachoMensagem(Protocol):
    """Canal de envio do pedido formatado (WhatsApp)."""

    @abstractmethod
    def enviar(self, mensagem: str, destino: str) -> bool:
        """Retorna True quando a mensagem foi entregue ao canal."""
        ...

    def url_para(self, mensagem: str, destino: str) -> Optional[str]:
        """Link de continuação para o cliente, quando o canal tiver um."""
        return None


class IArmazemDocumentos(Protocol):
    """Armazém remoto de documentos JSON (uma coleção por documento)."""

    @abstractmethod
    def ler(self, arquivo: str) -> Optional[List[Dict[str, Any]]]:
        """Retorna None quando o documento não existe."""
        ...

    @abstractmethod
    def gravar(self, arquivo: str, registros: List[Dict[str, Any]], mensagem: str) -> None: ...
