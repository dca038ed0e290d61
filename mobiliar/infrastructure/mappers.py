"""
Mapeadores (Mappers) para converter entre:
1. Registros JSON do armazém de documentos (formato camelCase dos arquivos em Docs/Data)
2. Entidades de Domínio (mobiliar.core.entities)
"""
from typing import Any, Dict, Optional

from mobiliar.core.entities import (
    Categoria as CategoriaEntity,
    Cor as CorEntity,
    Produto as ProdutoEntity,
    TabelaPreco as TabelaPrecoEntity,
    Promocao as PromocaoEntity,
    Aviso as AvisoEntity,
)
from mobiliar.core.exceptions import DadosInvalidosError


class BaseMapper:
    """Mapeador base. `arquivo` é o nome do documento da coleção."""

    arquivo: str = ''

    @staticmethod
    def to_entity(dados: Dict[str, Any]):
        raise NotImplementedError

    @staticmethod
    def to_dict(entity) -> Dict[str, Any]:
        raise NotImplementedError

    @classmethod
    def to_entity_seguro(cls, dados: Any):
        """Converte e traduz qualquer falha de formato em DadosInvalidosError."""
        if not isinstance(dados, dict):
            raise DadosInvalidosError(f"Registro inválido em {cls.arquivo}: {dados!r}")
        try:
            return cls.to_entity(dados)
        except (KeyError, TypeError, ValueError) as e:
            raise DadosInvalidosError(f"Registro inválido em {cls.arquivo}: {e}")


class CategoriaMapper(BaseMapper):
    arquivo = 'categories.json'

    @staticmethod
    def to_entity(dados: Dict[str, Any]) -> CategoriaEntity:
        return CategoriaEntity(
            id=dados['id'],
            nome=dados['name'],
            descricao=dados.get('description'),
            ativo=dados.get('active', True),
        )

    @staticmethod
    def to_dict(entity: CategoriaEntity) -> Dict[str, Any]:
        return {
            'id': entity.id,
            'name': entity.nome,
            'description': entity.descricao,
            'active': entity.ativo,
        }


class CorMapper(BaseMapper):
    arquivo = 'colors.json'

    @staticmethod
    def to_entity(dados: Dict[str, Any]) -> CorEntity:
        return CorEntity(
            id=dados['id'],
            nome=dados['name'],
            codigo_hex=dados['hexCode'],
            ativo=dados.get('active', True),
        )

    @staticmethod
    def to_dict(entity: CorEntity) -> Dict[str, Any]:
        return {
            'id': entity.id,
            'name': entity.nome,
            'hexCode': entity.codigo_hex,
            'active': entity.ativo,
        }


class ProdutoMapper(BaseMapper):
    arquivo = 'products.json'

    @staticmethod
    def to_entity(dados: Dict[str, Any]) -> ProdutoEntity:
        return ProdutoEntity(
            id=dados['id'],
            nome=dados['name'],
            descricao=dados.get('description'),
            categoria_id=dados.get('categoryId'),
            # preço gravado como string para não perder precisão
            preco_base=dados['basePrice'],
            imagens=list(dados.get('images') or []),
            cores_disponiveis=list(dados.get('availableColors') or []),
            ativo=dados.get('active', True),
        )

    @staticmethod
    def to_dict(entity: ProdutoEntity) -> Dict[str, Any]:
        return {
            'id': entity.id,
            'name': entity.nome,
            'description': entity.descricao,
            'categoryId': entity.categoria_id,
            'basePrice': str(entity.preco_base),
            'images': list(entity.imagens),
            'availableColors': list(entity.cores_disponiveis),
            'active': entity.ativo,
        }


class TabelaPrecoMapper(BaseMapper):
    arquivo = 'pricing.json'

    @staticmethod
    def to_entity(dados: Dict[str, Any]) -> TabelaPrecoEntity:
        return TabelaPrecoEntity(
            id=dados['id'],
            nome=dados['name'],
            descricao=dados.get('description'),
            multiplicador=dados['multiplier'],
            segmento=dados['userType'],
            ativo=dados.get('active', True),
        )

    @staticmethod
    def to_dict(entity: TabelaPrecoEntity) -> Dict[str, Any]:
        return {
            'id': entity.id,
            'name': entity.nome,
            'description': entity.descricao,
            'multiplier': str(entity.multiplicador),
            'userType': entity.segmento.value,
            'active': entity.ativo,
        }


class PromocaoMapper(BaseMapper):
    arquivo = 'promotions.json'

    @staticmethod
    def to_entity(dados: Dict[str, Any]) -> PromocaoEntity:
        return PromocaoEntity(
            id=dados['id'],
            titulo=dados['title'],
            descricao=dados['description'],
            ativo=dados.get('active', True),
            criado_em=dados.get('createdAt') or '',
        )

    @staticmethod
    def to_dict(entity: PromocaoEntity) -> Dict[str, Any]:
        return {
            'id': entity.id,
            'title': entity.titulo,
            'description': entity.descricao,
            'active': entity.ativo,
            'createdAt': entity.criado_em,
        }


class AvisoMapper(BaseMapper):
    arquivo = 'announcements.json'

    @staticmethod
    def to_entity(dados: Dict[str, Any]) -> AvisoEntity:
        return AvisoEntity(
            id=dados['id'],
            titulo=dados['title'],
            mensagem=dados['message'],
            segmento=dados.get('userType'),
            ativo=dados.get('active', True),
            criado_em=dados.get('createdAt') or '',
        )

    @staticmethod
    def to_dict(entity: AvisoEntity) -> Dict[str, Any]:
        return {
            'id': entity.id,
            'title': entity.titulo,
            'message': entity.mensagem,
            'userType': entity.segmento.value if entity.segmento else None,
            'active': entity.ativo,
            'createdAt': entity.criado_em,
        }


# Coleção do repositório -> mapeador do documento correspondente
MAPPERS: Dict[str, type] = {
    'categorias': CategoriaMapper,
    'cores': CorMapper,
    'produtos': ProdutoMapper,
    'tabelas_preco': TabelaPrecoMapper,
    'promocoes': PromocaoMapper,
    'avisos': AvisoMapper,
}


def mapper_da_colecao(colecao: str) -> Optional[type]:
    return MAPPERS.get(colecao)
