# mobiliar/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) da aplicação.
Esta camada depende apenas das Entidades e Portas (Interfaces) do Core,
garantindo o isolamento da lógica de negócio.
"""
import logging
from typing import List, Optional, Dict, Any

from mobiliar.core.entities import (
    Produto, Categoria, Cor, TabelaPreco, Promocao, Aviso, Usuario, ItemCarrinho,
    ItemCarrinhoEntrada, Segmento
)
from mobiliar.core.exceptions import (
    DadosInvalidosError,
    AutenticacaoError,
    ProdutoNaoEncontradoError,
    CategoriaNaoEncontradaError,
    CorNaoEncontradaError,
)
from mobiliar.core.ports import ICatalogoRepository
from mobiliar.core.carrinho import GerenciadorCarrinho
from mobiliar.core.precificacao import resolver_preco, tabelas_do_segmento

logger = logging.getLogger(__name__)


# ====================================================================
# 1. CASOS DE USO DO CATÁLOGO
# ====================================================================

class ListarCatalogoUseCase:
    """Caso de Uso responsável pelas leituras do catálogo (vitrine e detalhes)."""
    def __init__(self, catalogo: ICatalogoRepository):
        self.catalogo = catalogo

    def listar_produtos(self, categoria_id: Optional[int] = None) -> List[Produto]:
        return self.catalogo.listar_produtos(categoria_id)

    def detalhar_produto(self, produto_id: int) -> Produto:
        """Busca um produto ativo pelo ID."""
        produto = self.catalogo.buscar_produto(produto_id)
        if not produto.ativo:
            raise ProdutoNaoEncontradoError(produto_id)
        return produto

    def vitrine(self, segmento: Segmento) -> Dict[str, Any]:
        """
        Monta tudo que a tela da loja precisa para o segmento:
        produtos, categorias, cores, tabelas do segmento, promoções e avisos.
        """
        return {
            'segmento': segmento,
            'produtos': self.catalogo.listar_produtos(),
            'categorias': self.catalogo.listar_categorias(),
            'cores': self.catalogo.listar_cores(),
            'tabelas_preco': tabelas_do_segmento(self.catalogo.listar_tabelas_preco(segmento), segmento),
            'promocoes': self.catalogo.listar_promocoes(),
            'avisos': self.catalogo.listar_avisos(segmento),
        }


# ====================================================================
# 2. CASOS DE USO ADMINISTRATIVOS (CRUD DO CATÁLOGO)
# ====================================================================

class GerenciarCatalogoAdminUseCase:
    """
    CRUD administrativo. Os campos chegam já validados pelo serializer;
    aqui ficam apenas as regras que dependem do próprio catálogo.
    """

    ENTIDADES = {
        'categoria': Categoria,
        'cor': Cor,
        'produto': Produto,
        'tabela_preco': TabelaPreco,
        'promocao': Promocao,
        'aviso': Aviso,
    }

    def __init__(self, catalogo: ICatalogoRepository):
        self.catalogo = catalogo

    def criar(self, tipo: str, dados: Dict[str, Any]):
        classe = self._classe(tipo)
        if tipo == 'produto':
            self._validar_referencias_produto(dados)
        try:
            entidade = classe(**dados)
        except TypeError as e:
            raise DadosInvalidosError(f"Campos inválidos para {tipo}: {e}")
        criado = getattr(self.catalogo, f"criar_{tipo}")(entidade)
        logger.info("Admin criou %s ID %s.", tipo, criado.id)
        return criado

    def atualizar(self, tipo: str, entidade_id: int, campos: Dict[str, Any]):
        self._classe(tipo)
        campos = {k: v for k, v in campos.items() if k not in ('id', 'criado_em')}
        if tipo == 'produto':
            self._validar_referencias_produto(campos)
        atualizado = getattr(self.catalogo, f"atualizar_{tipo}")(entidade_id, campos)
        logger.info("Admin atualizou %s ID %s.", tipo, entidade_id)
        return atualizado

    def deletar(self, tipo: str, entidade_id: int) -> None:
        self._classe(tipo)
        getattr(self.catalogo, f"deletar_{tipo}")(entidade_id)
        logger.info("Admin removeu %s ID %s.", tipo, entidade_id)

    def _classe(self, tipo: str):
        try:
            return self.ENTIDADES[tipo]
        except KeyError:
            raise DadosInvalidosError(f"Tipo de entidade desconhecido: {tipo}.")

    def _validar_referencias_produto(self, dados: Dict[str, Any]):
        categoria_id = dados.get('categoria_id')
        if categoria_id is not None:
            ativas = {c.id for c in self.catalogo.listar_categorias()}
            if categoria_id not in ativas:
                raise CategoriaNaoEncontradaError(categoria_id)
        cores = dados.get('cores_disponiveis')
        if cores:
            ativas = {c.id for c in self.catalogo.listar_cores()}
            for cor_id in cores:
                if cor_id not in ativas:
                    raise CorNaoEncontradaError(cor_id)


# ====================================================================
# 3. CASOS DE USO DO CARRINHO
# ====================================================================

class AdicionarAoCarrinhoUseCase:
    """
    Orquestra a adição ao carrinho: busca produto e cor, resolve o preço
    do segmento e entrega o snapshot ao GerenciadorCarrinho.
    """
    def __init__(self, catalogo: ICatalogoRepository, gerenciador: GerenciadorCarrinho):
        self.catalogo = catalogo
        self.gerenciador = gerenciador

    def executar(
        self,
        usuario: Usuario,
        produto_id: int,
        quantidade: int = 1,
        cor_id: Optional[int] = None,
        tabela_id: Optional[int] = None,
    ) -> ItemCarrinho:
        if not usuario.segmento.pode_comprar:
            raise DadosInvalidosError("Este usuário não pode realizar compras.")

        produto = self.catalogo.buscar_produto(produto_id)
        if not produto.ativo:
            raise ProdutoNaoEncontradoError(produto_id)

        cor_nome = None
        if cor_id is not None and cor_id in produto.cores_disponiveis:
            cor = self.catalogo.buscar_cor(cor_id)
            if not cor.ativo:
                raise CorNaoEncontradaError(cor_id)
            cor_nome = cor.nome

        preco = resolver_preco(
            produto.preco_base,
            usuario.segmento,
            self.catalogo.listar_tabelas_preco(usuario.segmento),
            tabela_id,
        )

        entrada = ItemCarrinhoEntrada(
            produto_id=produto.id,
            produto_nome=produto.nome,
            quantidade=quantidade,
            preco_unitario=preco,
            cor_id=cor_id,
            cor_nome=cor_nome,
            imagem=produto.imagem_principal,
            cores_disponiveis=tuple(produto.cores_disponiveis),
        )
        return self.gerenciador.adicionar(entrada)


# ====================================================================
# 4. AUTENTICAÇÃO
# ====================================================================

class AutenticarUsuarioUseCase:
    """Valida username e senha contra o catálogo de usuários."""
    def __init__(self, catalogo: ICatalogoRepository):
        self.catalogo = catalogo

    def executar(self, username: str, password: str) -> Usuario:
        usuario = self.catalogo.buscar_usuario_por_username(username)
        if usuario is None or usuario.password != password:
            logger.warning("Tentativa de login inválida para '%s'.", username)
            raise AutenticacaoError()
        if not usuario.ativo:
            raise AutenticacaoError("Usuário inativo.")
        logger.info("Usuário '%s' autenticado (%s).", username, usuario.segmento.value)
        return usuario
