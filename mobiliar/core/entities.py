import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple, Any, Dict

from mobiliar.core.exceptions import DadosInvalidosError, CorInvalidaError

# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros.
# ====================================================================

CENTAVOS = Decimal('0.01')
QUATRO_CASAS = Decimal('0.0001')

_HEX_PATTERN = re.compile(r'^#?([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$')


def para_decimal(valor: Any, casas: Decimal = CENTAVOS, campo: str = 'valor') -> Decimal:
    """Converte int/str/Decimal para Decimal arredondado (half-up)."""
    if isinstance(valor, bool) or valor is None:
        raise DadosInvalidosError(f"O campo '{campo}' deve ser numérico.")
    try:
        # float passa por str para não herdar o ruído binário
        numero = Decimal(str(valor)) if isinstance(valor, float) else Decimal(valor)
    except (InvalidOperation, TypeError, ValueError):
        raise DadosInvalidosError(f"O campo '{campo}' deve ser numérico.")
    if not numero.is_finite():
        raise DadosInvalidosError(f"O campo '{campo}' deve ser numérico.")
    return numero.quantize(casas, rounding=ROUND_HALF_UP)


def normalizar_codigo_hex(valor: str) -> str:
    """Aceita #RGB ou #RRGGBB (com ou sem '#') e devolve '#RRGGBB' em maiúsculas."""
    if not isinstance(valor, str):
        raise CorInvalidaError(valor)
    match = _HEX_PATTERN.match(valor.strip())
    if not match:
        raise CorInvalidaError(valor)
    digitos = match.group(1).upper()
    if len(digitos) == 3:
        digitos = ''.join(d * 2 for d in digitos)
    return f"#{digitos}"


class Segmento(Enum):
    """Segmento do usuário. Concentra as regras que dependem do tipo de cliente."""
    ADMIN = 'admin'
    LOJA = 'loja'
    RESTAURANTE = 'restaurante'

    @classmethod
    def de_valor(cls, valor) -> 'Segmento':
        if isinstance(valor, cls):
            return valor
        try:
            return cls(valor)
        except ValueError:
            raise DadosInvalidosError(f"Segmento desconhecido: {valor!r}.")

    @property
    def nome_exibicao(self) -> str:
        return {
            Segmento.ADMIN: 'Administrador',
            Segmento.LOJA: 'Loja',
            Segmento.RESTAURANTE: 'Restaurante',
        }[self]

    @property
    def pode_comprar(self) -> bool:
        return self in (Segmento.LOJA, Segmento.RESTAURANTE)

    def tem_permissao(self, requerido: 'Segmento') -> bool:
        """O admin acessa as áreas de loja e restaurante; o contrário não vale."""
        return self is requerido or self is Segmento.ADMIN


@dataclass
class Usuario:
    """Entidade do Usuário. A senha é mantida em texto puro neste sistema."""
    username: str
    password: str
    segmento: Segmento
    nome: str
    ativo: bool = True
    id: Optional[int] = None

    def __post_init__(self):
        self.segmento = Segmento.de_valor(self.segmento)


@dataclass
class Categoria:
    """Entidade de Categoria de produtos."""
    nome: str
    descricao: Optional[str] = None
    ativo: bool = True
    id: Optional[int] = None


@dataclass
class Cor:
    """Cor disponível para os produtos. O código hex é sempre '#RRGGBB' maiúsculo."""
    nome: str
    codigo_hex: str
    ativo: bool = True
    id: Optional[int] = None

    def __post_init__(self):
        self.codigo_hex = normalizar_codigo_hex(self.codigo_hex)


@dataclass
class Produto:
    """Entidade do Produto vendido no catálogo."""
    nome: str
    categoria_id: Optional[int]
    preco_base: Decimal
    descricao: Optional[str] = None
    imagens: List[str] = field(default_factory=list)
    cores_disponiveis: List[int] = field(default_factory=list)
    ativo: bool = True
    id: Optional[int] = None

    def __post_init__(self):
        self.preco_base = para_decimal(self.preco_base, campo='preco_base')
        if self.preco_base < 0:
            raise DadosInvalidosError("O preço base não pode ser negativo.")
        # remove duplicatas preservando a ordem
        self.cores_disponiveis = list(dict.fromkeys(self.cores_disponiveis))

    @property
    def imagem_principal(self) -> Optional[str]:
        return self.imagens[0] if self.imagens else None


@dataclass
class TabelaPreco:
    """Tabela de preço: um multiplicador aplicado ao preço base de um segmento."""
    nome: str
    multiplicador: Decimal
    segmento: Segmento
    descricao: Optional[str] = None
    ativo: bool = True
    id: Optional[int] = None

    def __post_init__(self):
        self.multiplicador = para_decimal(self.multiplicador, QUATRO_CASAS, campo='multiplicador')
        if self.multiplicador <= 0:
            raise DadosInvalidosError("O multiplicador deve ser maior que zero.")
        self.segmento = Segmento.de_valor(self.segmento)
        if self.segmento is Segmento.ADMIN:
            raise DadosInvalidosError("Tabelas de preço valem apenas para loja ou restaurante.")


def _agora_iso() -> str:
    return datetime.now().isoformat()


@dataclass
class Promocao:
    titulo: str
    descricao: str
    ativo: bool = True
    criado_em: str = field(default_factory=_agora_iso)
    id: Optional[int] = None


@dataclass
class Aviso:
    """Aviso exibido aos clientes. segmento=None significa todos os segmentos."""
    titulo: str
    mensagem: str
    segmento: Optional[Segmento] = None
    ativo: bool = True
    criado_em: str = field(default_factory=_agora_iso)
    id: Optional[int] = None

    def __post_init__(self):
        if self.segmento is not None:
            self.segmento = Segmento.de_valor(self.segmento)

    def visivel_para(self, segmento: Optional[Segmento]) -> bool:
        return self.segmento is None or self.segmento is segmento


# ====================================================================
# CARRINHO
# ====================================================================

SEM_COR = "Sem cor"


@dataclass
class ItemCarrinhoEntrada:
    """Dados para adicionar um item ao carrinho (snapshot ainda não validado)."""
    produto_id: int
    produto_nome: str
    quantidade: int
    preco_unitario: Decimal
    cor_id: Optional[int] = None
    cor_nome: Optional[str] = None
    imagem: Optional[str] = None
    cores_disponiveis: Tuple[int, ...] = ()


@dataclass
class ItemCarrinho:
    """Snapshot de um produto/cor dentro do carrinho."""
    produto_id: int
    produto_nome: str
    cor_id: Optional[int]
    cor_nome: str
    quantidade: int
    preco_unitario: Decimal
    imagem: Optional[str] = None
    preco_total: Decimal = field(init=False)

    CAMPOS = frozenset({
        'produto_id', 'produto_nome', 'cor_id', 'cor_nome', 'quantidade',
        'preco_unitario', 'preco_total', 'imagem',
    })
    OBRIGATORIOS = frozenset({'produto_id', 'produto_nome', 'quantidade', 'preco_unitario'})

    def __post_init__(self):
        self.recalcular()

    @property
    def chave(self) -> Tuple[int, Optional[int]]:
        """Identidade para mesclagem: (produto, cor)."""
        return (self.produto_id, self.cor_id)

    def recalcular(self):
        self.preco_total = (self.preco_unitario * self.quantidade).quantize(CENTAVOS, rounding=ROUND_HALF_UP)

    def para_dict(self) -> Dict[str, Any]:
        """Formato persistido (JSON). Valores monetários viram string."""
        return {
            'produto_id': self.produto_id,
            'produto_nome': self.produto_nome,
            'cor_id': self.cor_id,
            'cor_nome': self.cor_nome,
            'quantidade': self.quantidade,
            'preco_unitario': str(self.preco_unitario),
            'preco_total': str(self.preco_total),
            'imagem': self.imagem,
        }

    @classmethod
    def de_dict(cls, dados: Any) -> 'ItemCarrinho':
        """
        Reconstrói um item a partir do formato persistido, rejeitando formatos
        desconhecidos. O preco_total gravado é ignorado e recalculado.
        """
        if not isinstance(dados, dict):
            raise DadosInvalidosError("Item do carrinho deve ser um objeto.")
        desconhecidos = set(dados) - cls.CAMPOS
        if desconhecidos:
            raise DadosInvalidosError(f"Campos desconhecidos no item: {sorted(desconhecidos)}.")
        faltando = cls.OBRIGATORIOS - set(dados)
        if faltando:
            raise DadosInvalidosError(f"Campos obrigatórios ausentes no item: {sorted(faltando)}.")

        produto_id = dados['produto_id']
        cor_id = dados.get('cor_id')
        quantidade = dados['quantidade']
        produto_nome = dados['produto_nome']

        if not _eh_inteiro(produto_id):
            raise DadosInvalidosError("produto_id deve ser inteiro.")
        if cor_id is not None and not _eh_inteiro(cor_id):
            raise DadosInvalidosError("cor_id deve ser inteiro ou nulo.")
        if not _eh_inteiro(quantidade) or quantidade < 1:
            raise DadosInvalidosError("A quantidade deve ser um inteiro maior ou igual a 1.")
        if not isinstance(produto_nome, str) or not produto_nome.strip():
            raise DadosInvalidosError("produto_nome é obrigatório.")

        preco_unitario = para_decimal(dados['preco_unitario'], campo='preco_unitario')
        if preco_unitario <= 0:
            raise DadosInvalidosError("O preço unitário deve ser maior que zero.")

        cor_nome = dados.get('cor_nome') or SEM_COR
        imagem = dados.get('imagem')
        if not isinstance(cor_nome, str) or (imagem is not None and not isinstance(imagem, str)):
            raise DadosInvalidosError("cor_nome e imagem devem ser texto.")

        return cls(
            produto_id=produto_id,
            produto_nome=produto_nome,
            cor_id=cor_id,
            cor_nome=cor_nome,
            quantidade=quantidade,
            preco_unitario=preco_unitario,
            imagem=imagem,
        )


def _eh_inteiro(valor) -> bool:
    return isinstance(valor, int) and not isinstance(valor, bool)
