class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    def __init__(self, message="Ocorreu um erro na camada core."):
        self.message = message
        super().__init__(self.message)

# ===============================================
# ERROS DE VALIDAÇÃO
# ===============================================

class DadosInvalidosError(BaseErroCore):
    """Erro levantado quando dados inválidos são fornecidos."""
    def __init__(self, message="Os dados fornecidos são inválidos."):
        super().__init__(message)

class CorObrigatoriaError(DadosInvalidosError):
    """Produto possui cores disponíveis e nenhuma foi selecionada."""
    def __init__(self, message="Selecione uma cor para o produto."):
        super().__init__(message)

class TabelaPrecoObrigatoriaError(DadosInvalidosError):
    """Usuário loja tentou adicionar ao carrinho sem escolher a tabela de preço."""
    def __init__(self, message="Selecione uma tabela de preço."):
        super().__init__(message)

class CorInvalidaError(DadosInvalidosError):
    """Código hexadecimal de cor malformado."""
    def __init__(self, codigo_hex=None, message=None):
        self.codigo_hex = codigo_hex
        if message is None:
            message = f"Código hexadecimal inválido: {codigo_hex!r}."
        super().__init__(message)

class CarrinhoVazioError(DadosInvalidosError):
    """Erro levantado ao tentar fazer checkout com carrinho vazio."""
    def __init__(self, message="O carrinho de compras está vazio."):
        super().__init__(message)

# ===============================================
# ERROS DE ENTIDADE NÃO ENCONTRADA
# ===============================================

class ItemNaoEncontradoError(BaseErroCore):
    """Erro levantado quando um item (genérico) não é encontrado."""
    def __init__(self, message="O item solicitado não foi encontrado."):
        super().__init__(message)

class ProdutoNaoEncontradoError(ItemNaoEncontradoError):
    def __init__(self, produto_id=None, message=None):
        self.produto_id = produto_id
        super().__init__(message or f"Produto ID {produto_id} não encontrado.")

class CorNaoEncontradaError(ItemNaoEncontradoError):
    def __init__(self, cor_id=None, message=None):
        self.cor_id = cor_id
        super().__init__(message or f"Cor ID {cor_id} não encontrada.")

class TabelaPrecoNaoEncontradaError(ItemNaoEncontradoError):
    def __init__(self, tabela_id=None, message=None):
        self.tabela_id = tabela_id
        super().__init__(message or f"Tabela de preço ID {tabela_id} não encontrada.")

class CategoriaNaoEncontradaError(ItemNaoEncontradoError):
    def __init__(self, categoria_id=None, message=None):
        self.categoria_id = categoria_id
        super().__init__(message or f"Categoria ID {categoria_id} não encontrada.")

class PromocaoNaoEncontradaError(ItemNaoEncontradoError):
    def __init__(self, promocao_id=None, message=None):
        self.promocao_id = promocao_id
        super().__init__(message or f"Promoção ID {promocao_id} não encontrada.")

class AvisoNaoEncontradoError(ItemNaoEncontradoError):
    def __init__(self, aviso_id=None, message=None):
        self.aviso_id = aviso_id
        super().__init__(message or f"Aviso ID {aviso_id} não encontrado.")

# ===============================================
# ERROS DE INFRAESTRUTURA E FLUXO DE PEDIDO
# ===============================================

class AutenticacaoError(BaseErroCore):
    """Credenciais inválidas ou usuário inativo."""
    def __init__(self, message="Usuário ou senha inválidos."):
        super().__init__(message)

class PersistenciaError(BaseErroCore):
    """Falha de leitura/escrita no armazenamento. Nunca é fatal para o carrinho."""
    def __init__(self, message="Falha ao acessar o armazenamento."):
        super().__init__(message)

class DespachoFalhouError(BaseErroCore):
    """Canal externo de mensagens (WhatsApp) indisponível."""
    def __init__(self, message="Não foi possível enviar o pedido pelo WhatsApp."):
        super().__init__(message)
