"""
Dados iniciais do catálogo.

Usados para semear o CatalogoMemoria, como fallback quando o armazém de documentos
não responde e pelo comando `publicar_catalogo`. Cada chamada devolve objetos novos.
"""
from decimal import Decimal
from typing import Dict, List

from mobiliar.core.entities import (
    Usuario, Categoria, Cor, Produto, TabelaPreco, Promocao, Aviso, Segmento
)


def usuarios() -> List[Usuario]:
    return [
        Usuario(id=1, username='admin', password='admin123', segmento=Segmento.ADMIN, nome='Administrador'),
        Usuario(id=2, username='loja', password='loja123', segmento=Segmento.LOJA, nome='Usuário Loja'),
        Usuario(id=3, username='restaurante', password='restaurante123', segmento=Segmento.RESTAURANTE,
                nome='Usuário Restaurante'),
    ]


def categorias() -> List[Categoria]:
    return [
        Categoria(id=1, nome='Banquetas', descricao='Banquetas de diferentes alturas e estilos'),
        Categoria(id=2, nome='Cadeiras', descricao='Cadeiras para diferentes ambientes'),
        Categoria(id=3, nome='Mesas', descricao='Mesas de diversos tamanhos e materiais'),
    ]


def cores() -> List[Cor]:
    return [
        Cor(id=1, nome='Marrom Natural', codigo_hex='#8B4513'),
        Cor(id=2, nome='Preto', codigo_hex='#000000'),
        Cor(id=3, nome='Branco', codigo_hex='#FFFFFF'),
        Cor(id=4, nome='Cinza', codigo_hex='#808080'),
    ]


def tabelas_preco() -> List[TabelaPreco]:
    return [
        TabelaPreco(id=1, nome='À Vista', descricao='Pagamento à vista',
                    multiplicador=Decimal('1.0000'), segmento=Segmento.LOJA),
        TabelaPreco(id=2, nome='30 dias', descricao='Pagamento em 30 dias',
                    multiplicador=Decimal('1.1000'), segmento=Segmento.LOJA),
        TabelaPreco(id=3, nome='30/60', descricao='Pagamento em 2x',
                    multiplicador=Decimal('1.1500'), segmento=Segmento.LOJA),
        TabelaPreco(id=4, nome='30/60/90', descricao='Pagamento em 3x',
                    multiplicador=Decimal('1.2000'), segmento=Segmento.LOJA),
        TabelaPreco(id=5, nome='30/60/90/120', descricao='Pagamento em 4x',
                    multiplicador=Decimal('1.2500'), segmento=Segmento.LOJA),
        TabelaPreco(id=6, nome='Preço Especial', descricao='Preço especial para restaurantes',
                    multiplicador=Decimal('0.9000'), segmento=Segmento.RESTAURANTE),
    ]


def produtos() -> List[Produto]:
    return [
        Produto(
            id=1,
            nome='Banqueta 50 cm',
            descricao='Banqueta de madeira com 50cm de altura, ideal para balcões e cozinhas',
            categoria_id=1,
            preco_base=Decimal('45.00'),
            imagens=['https://via.placeholder.com/300x300/8B4513/FFFFFF?text=Banqueta+50cm'],
            cores_disponiveis=[1, 2],
        ),
        Produto(
            id=2,
            nome='Banqueta 70 cm',
            descricao='Banqueta de madeira com 70cm de altura, perfeita para bancadas altas',
            categoria_id=1,
            preco_base=Decimal('55.00'),
            imagens=['https://via.placeholder.com/300x300/000000/FFFFFF?text=Banqueta+70cm'],
            cores_disponiveis=[1, 2, 4],
        ),
    ]


def promocoes() -> List[Promocao]:
    return [
        Promocao(
            id=1,
            titulo='Promoção de Lançamento',
            descricao='Desconto especial em todas as banquetas! Aproveite nossa oferta de inauguração.',
        ),
    ]


def avisos() -> List[Aviso]:
    return [
        Aviso(
            id=1,
            titulo='Bem-vindos à nossa loja!',
            mensagem='Agradecemos pela preferência. Nossa equipe está pronta para atendê-los.',
            segmento=None,
        ),
    ]


def carregar() -> Dict[str, list]:
    """Todas as coleções, indexadas pelo nome usado nos repositórios."""
    return {
        'usuarios': usuarios(),
        'categorias': categorias(),
        'cores': cores(),
        'tabelas_preco': tabelas_preco(),
        'produtos': produtos(),
        'promocoes': promocoes(),
        'avisos': avisos(),
    }
