"""
Camada de Infraestrutura: Implementação dos Repositórios do catálogo.

Esta camada traduz as operações abstratas definidas nas Portas da Core em
operações concretas sobre um mapa em memória ou sobre o armazém de documentos.
"""
import dataclasses
import logging
from typing import Any, Callable, Dict, List, Optional

from mobiliar.core.entities import (
    Produto, Categoria, Cor, TabelaPreco, Promocao, Aviso, Usuario, Segmento
)
from mobiliar.core.ports import ICatalogoRepository, IArmazemDocumentos
from mobiliar.core.exceptions import (
    BaseErroCore,
    DadosInvalidosError,
    PersistenciaError,
    ProdutoNaoEncontradoError,
    CategoriaNaoEncontradaError,
    CorNaoEncontradaError,
    TabelaPrecoNaoEncontradaError,
    PromocaoNaoEncontradaError,
    AvisoNaoEncontradoError,
)
from mobiliar.infrastructure import dados_iniciais
from mobiliar.infrastructure.mappers import MAPPERS

logger = logging.getLogger(__name__)

COLECOES = ('usuarios', 'categorias', 'cores', 'tabelas_preco', 'produtos', 'promocoes', 'avisos')


# ====================================================================
# 1. CATÁLOGO EM MEMÓRIA
# ====================================================================

class CatalogoMemoria(ICatalogoRepository):
    """
    Catálogo mantido em dicionários (um por coleção), semeado com os dados iniciais.
    Os IDs vêm de um único contador para todo o catálogo.
    """

    def __init__(self, dados: Optional[Dict[str, list]] = None):
        dados = dados_iniciais.carregar() if dados is None else dados
        self._dados: Dict[str, Dict[int, Any]] = {colecao: {} for colecao in COLECOES}
        for colecao, registros in dados.items():
            self._dados[colecao] = {r.id: r for r in registros}
        self._proximo_id = self._maior_id() + 1

    def _maior_id(self) -> int:
        return max((i for registros in self._dados.values() for i in registros), default=0)

    # --- Ganchos de persistência (no-op em memória) ---

    def _colecao(self, colecao: str) -> Dict[int, Any]:
        return self._dados[colecao]

    def _persistir(self, colecao: str, mensagem: str) -> None:
        pass

    def _colecao_para_escrita(self, colecao: str) -> Dict[int, Any]:
        return self._colecao(colecao)

    # --- Operações genéricas ---

    def _listar(self, colecao: str, filtro: Optional[Callable[[Any], bool]] = None) -> List[Any]:
        registros = [r for r in self._colecao(colecao).values() if r.ativo]
        if filtro:
            registros = [r for r in registros if filtro(r)]
        return sorted(registros, key=lambda r: r.id)

    def _buscar(self, colecao: str, registro_id: int, erro: Callable[[int], BaseErroCore]):
        registro = self._colecao(colecao).get(registro_id)
        if registro is None:
            raise erro(registro_id)
        return registro

    def _mutar(self, colecao: str, alteracao: Callable[[Dict[int, Any]], Any], mensagem: str):
        """Aplica a alteração e persiste; se a persistência falhar, desfaz a alteração."""
        registros = self._colecao(colecao)
        anterior = dict(registros)
        resultado = alteracao(registros)
        try:
            self._persistir(colecao, mensagem)
        except PersistenciaError:
            registros.clear()
            registros.update(anterior)
            raise
        return resultado

    def _criar(self, colecao: str, registro):
        self._colecao_para_escrita(colecao)
        novo = dataclasses.replace(registro, id=self._proximo_id)
        self._proximo_id += 1

        def alteracao(registros):
            registros[novo.id] = novo
            return novo
        return self._mutar(colecao, alteracao, f"Cria {colecao} {novo.id}")

    def _atualizar(self, colecao: str, registro_id: int, campos: Dict[str, Any], erro):
        self._colecao_para_escrita(colecao)
        atual = self._buscar(colecao, registro_id, erro)
        campos = {k: v for k, v in campos.items() if k != 'id'}
        try:
            # replace executa __post_init__ de novo, revalidando a entidade
            atualizado = dataclasses.replace(atual, **campos)
        except TypeError as e:
            raise DadosInvalidosError(f"Campos inválidos: {e}")

        def alteracao(registros):
            registros[registro_id] = atualizado
            return atualizado
        return self._mutar(colecao, alteracao, f"Atualiza {colecao} {registro_id}")

    def _deletar(self, colecao: str, registro_id: int, erro) -> None:
        self._colecao_para_escrita(colecao)
        self._buscar(colecao, registro_id, erro)

        def alteracao(registros):
            del registros[registro_id]
        self._mutar(colecao, alteracao, f"Remove {colecao} {registro_id}")

    # --- Produtos ---

    def listar_produtos(self, categoria_id: Optional[int] = None) -> List[Produto]:
        if categoria_id is None:
            return self._listar('produtos')
        return self._listar('produtos', lambda p: p.categoria_id == categoria_id)

    def buscar_produto(self, produto_id: int) -> Produto:
        return self._buscar('produtos', produto_id, ProdutoNaoEncontradoError)

    def criar_produto(self, produto: Produto) -> Produto:
        return self._criar('produtos', produto)

    def atualizar_produto(self, produto_id: int, campos: Dict[str, Any]) -> Produto:
        return self._atualizar('produtos', produto_id, campos, ProdutoNaoEncontradoError)

    def deletar_produto(self, produto_id: int) -> None:
        """Exclusão lógica: o produto continua no armazenamento com ativo=False."""
        self._atualizar('produtos', produto_id, {'ativo': False}, ProdutoNaoEncontradoError)

    # --- Categorias ---

    def listar_categorias(self) -> List[Categoria]:
        return self._listar('categorias')

    def buscar_categoria(self, categoria_id: int) -> Categoria:
        return self._buscar('categorias', categoria_id, CategoriaNaoEncontradaError)

    def criar_categoria(self, categoria: Categoria) -> Categoria:
        return self._criar('categorias', categoria)

    def atualizar_categoria(self, categoria_id: int, campos: Dict[str, Any]) -> Categoria:
        return self._atualizar('categorias', categoria_id, campos, CategoriaNaoEncontradaError)

    def deletar_categoria(self, categoria_id: int) -> None:
        self._deletar('categorias', categoria_id, CategoriaNaoEncontradaError)

    # --- Cores ---

    def listar_cores(self) -> List[Cor]:
        return self._listar('cores')

    def buscar_cor(self, cor_id: int) -> Cor:
        return self._buscar('cores', cor_id, CorNaoEncontradaError)

    def criar_cor(self, cor: Cor) -> Cor:
        return self._criar('cores', cor)

    def atualizar_cor(self, cor_id: int, campos: Dict[str, Any]) -> Cor:
        return self._atualizar('cores', cor_id, campos, CorNaoEncontradaError)

    def deletar_cor(self, cor_id: int) -> None:
        self._deletar('cores', cor_id, CorNaoEncontradaError)

    # --- Tabelas de preço ---

    def listar_tabelas_preco(self, segmento: Optional[Segmento] = None) -> List[TabelaPreco]:
        if segmento is None:
            return self._listar('tabelas_preco')
        return self._listar('tabelas_preco', lambda t: t.segmento is segmento)

    def buscar_tabela_preco(self, tabela_id: int) -> TabelaPreco:
        return self._buscar('tabelas_preco', tabela_id, TabelaPrecoNaoEncontradaError)

    def criar_tabela_preco(self, tabela: TabelaPreco) -> TabelaPreco:
        return self._criar('tabelas_preco', tabela)

    def atualizar_tabela_preco(self, tabela_id: int, campos: Dict[str, Any]) -> TabelaPreco:
        return self._atualizar('tabelas_preco', tabela_id, campos, TabelaPrecoNaoEncontradaError)

    def deletar_tabela_preco(self, tabela_id: int) -> None:
        self._deletar('tabelas_preco', tabela_id, TabelaPrecoNaoEncontradaError)

    # --- Promoções ---

    def listar_promocoes(self) -> List[Promocao]:
        return self._listar('promocoes')

    def buscar_promocao(self, promocao_id: int) -> Promocao:
        return self._buscar('promocoes', promocao_id, PromocaoNaoEncontradaError)

    def criar_promocao(self, promocao: Promocao) -> Promocao:
        return self._criar('promocoes', promocao)

    def atualizar_promocao(self, promocao_id: int, campos: Dict[str, Any]) -> Promocao:
        return self._atualizar('promocoes', promocao_id, campos, PromocaoNaoEncontradaError)

    def deletar_promocao(self, promocao_id: int) -> None:
        self._deletar('promocoes', promocao_id, PromocaoNaoEncontradaError)

    # --- Avisos ---

    def listar_avisos(self, segmento: Optional[Segmento] = None) -> List[Aviso]:
        if segmento is None:
            return self._listar('avisos')
        return self._listar('avisos', lambda a: a.visivel_para(segmento))

    def buscar_aviso(self, aviso_id: int) -> Aviso:
        return self._buscar('avisos', aviso_id, AvisoNaoEncontradoError)

    def criar_aviso(self, aviso: Aviso) -> Aviso:
        return self._criar('avisos', aviso)

    def atualizar_aviso(self, aviso_id: int, campos: Dict[str, Any]) -> Aviso:
        return self._atualizar('avisos', aviso_id, campos, AvisoNaoEncontradoError)

    def deletar_aviso(self, aviso_id: int) -> None:
        self._deletar('avisos', aviso_id, AvisoNaoEncontradoError)

    # --- Usuários ---

    def buscar_usuario(self, usuario_id: int) -> Optional[Usuario]:
        return self._colecao('usuarios').get(usuario_id)

    def buscar_usuario_por_username(self, username: str) -> Optional[Usuario]:
        return next((u for u in self._colecao('usuarios').values() if u.username == username), None)


# ====================================================================
# 2. CATÁLOGO NO ARMAZÉM DE DOCUMENTOS
# ====================================================================

class CatalogoDocumentos(CatalogoMemoria):
    """
    Catálogo persistido como um documento JSON por coleção.

    Cada coleção é carregada do armazém no primeiro acesso. Registros malformados
    são ignorados na leitura mas preservados no documento a cada gravação.
    Se o documento não puder ser lido, a coleção fica degradada: as leituras usam
    os dados iniciais e as escritas tentam carregar de novo antes de gravar,
    levantando PersistenciaError se o armazém continuar indisponível.
    Toda escrita regrava o documento inteiro e uma falha de gravação desfaz a alteração.
    Os usuários vêm sempre dos dados iniciais.
    """

    def __init__(self, armazem: IArmazemDocumentos):
        self.armazem = armazem
        self._carregadas = {'usuarios'}
        self._degradadas = set()
        self._invalidos: Dict[str, List[Any]] = {}
        super().__init__(dados={'usuarios': dados_iniciais.usuarios()})
        self._semente = dados_iniciais.carregar()

    def _colecao(self, colecao: str) -> Dict[int, Any]:
        if colecao not in self._carregadas:
            registros, invalidos = self._carregar(colecao)
            self._dados[colecao] = {r.id: r for r in registros}
            self._invalidos[colecao] = invalidos
            self._carregadas.add(colecao)
            ids_invalidos = [d['id'] for d in invalidos if isinstance(d, dict) and isinstance(d.get('id'), int)]
            self._proximo_id = max([self._proximo_id, self._maior_id() + 1] + [i + 1 for i in ids_invalidos])
        return self._dados[colecao]

    def _colecao_para_escrita(self, colecao: str) -> Dict[int, Any]:
        self._colecao(colecao)
        if colecao in self._degradadas:
            self._carregadas.discard(colecao)
            self._colecao(colecao)
            if colecao in self._degradadas:
                raise PersistenciaError(
                    f"Documento {MAPPERS[colecao].arquivo} indisponível; alteração não gravada."
                )
        return self._dados[colecao]

    def _carregar(self, colecao: str):
        """Retorna (entidades válidas, registros brutos inválidos)."""
        mapper = MAPPERS[colecao]
        self._degradadas.discard(colecao)
        try:
            registros = self.armazem.ler(mapper.arquivo)
        except PersistenciaError as e:
            logger.warning("Falha ao carregar %s (%s); usando dados iniciais.", mapper.arquivo, e.message)
            self._degradadas.add(colecao)
            return list(self._semente[colecao]), []

        if registros is None:
            logger.warning("Documento %s inexistente; usando dados iniciais.", mapper.arquivo)
            return list(self._semente[colecao]), []
        if not isinstance(registros, list):
            logger.warning("Documento %s em formato inesperado; usando dados iniciais.", mapper.arquivo)
            self._degradadas.add(colecao)
            return list(self._semente[colecao]), []

        validos, invalidos = [], []
        for dados in registros:
            try:
                validos.append(mapper.to_entity_seguro(dados))
            except DadosInvalidosError as e:
                logger.warning("Registro ignorado em %s: %s", mapper.arquivo, e.message)
                invalidos.append(dados)
        return validos, invalidos

    def _persistir(self, colecao: str, mensagem: str) -> None:
        mapper = MAPPERS[colecao]
        registros = sorted(self._dados[colecao].values(), key=lambda r: r.id)
        documento = [mapper.to_dict(r) for r in registros] + self._invalidos.get(colecao, [])
        self.armazem.gravar(mapper.arquivo, documento, mensagem)

    def recarregar(self) -> None:
        """Descarta o cache local; a próxima leitura busca o armazém de novo."""
        self._carregadas = {'usuarios'}
        self._degradadas = set()
        self._invalidos = {}

    def inicializar(self, sobrescrever: bool = False) -> List[str]:
        """
        Publica os dados iniciais nas coleções que ainda não existem no armazém
        (ou em todas, com sobrescrever=True). Retorna os arquivos gravados.
        """
        gravados = []
        for colecao, mapper in MAPPERS.items():
            if not sobrescrever and self.armazem.ler(mapper.arquivo) is not None:
                continue
            registros = sorted(self._semente[colecao], key=lambda r: r.id)
            self.armazem.gravar(mapper.arquivo, [mapper.to_dict(r) for r in registros],
                                f"Inicializa {mapper.arquivo}")
            gravados.append(mapper.arquivo)
        self.recarregar()
        return gravados
