from rest_framework import serializers

from mobiliar.core.entities import Segmento, normalizar_codigo_hex
from mobiliar.core.exceptions import DadosInvalidosError
from mobiliar.core.precificacao import (
    percentual_para_multiplicador,
    formatar_percentual,
    resolver_preco,
)


class SerializerEstrito(serializers.Serializer):
    """Rejeita campos que o serializer não conhece (em vez de ignorá-los)."""

    def to_internal_value(self, data):
        if hasattr(data, 'keys'):
            gravaveis = {nome for nome, campo in self.fields.items() if not campo.read_only}
            desconhecidos = set(data.keys()) - gravaveis
            if desconhecidos:
                raise serializers.ValidationError(
                    {campo: ['Campo desconhecido.'] for campo in sorted(desconhecidos)}
                )
        return super().to_internal_value(data)


class SegmentoField(serializers.ChoiceField):
    """Recebe o valor textual do segmento e devolve o Enum ao serializar."""

    def __init__(self, segmentos=tuple(Segmento), **kwargs):
        super().__init__(choices=[(s.value, s.nome_exibicao) for s in segmentos], **kwargs)

    def to_representation(self, value):
        if isinstance(value, Segmento):
            return value.value
        return super().to_representation(value)


# ====================================================================
# SERIALIZERS DE AUTENTICAÇÃO
# ====================================================================

class LoginSerializer(SerializerEstrito):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(max_length=128, trim_whitespace=False, style={'input_type': 'password'})


class UsuarioSerializer(serializers.Serializer):
    """Saída apenas: a senha nunca é exposta."""
    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)
    nome = serializers.CharField(read_only=True)
    segmento = SegmentoField(read_only=True)
    segmento_nome = serializers.CharField(source='segmento.nome_exibicao', read_only=True)


# ====================================================================
# SERIALIZERS DO CATÁLOGO
# ====================================================================

class CategoriaSerializer(SerializerEstrito):
    id = serializers.IntegerField(read_only=True)
    nome = serializers.CharField(max_length=100)
    descricao = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    ativo = serializers.BooleanField(required=False, default=True)


class CorSerializer(SerializerEstrito):
    id = serializers.IntegerField(read_only=True)
    nome = serializers.CharField(max_length=50)
    codigo_hex = serializers.CharField(max_length=7, help_text="Formato #RRGGBB ou #RGB")
    ativo = serializers.BooleanField(required=False, default=True)

    def validate_codigo_hex(self, value):
        try:
            return normalizar_codigo_hex(value)
        except DadosInvalidosError as e:
            raise serializers.ValidationError(e.message)


class ProdutoSerializer(SerializerEstrito):
    id = serializers.IntegerField(read_only=True)
    nome = serializers.CharField(max_length=200)
    descricao = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    categoria_id = serializers.IntegerField(allow_null=True)
    preco_base = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    imagens = serializers.ListField(child=serializers.URLField(), required=False)
    cores_disponiveis = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False)
    ativo = serializers.BooleanField(required=False, default=True)

    def validate_cores_disponiveis(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError("Cores repetidas.")
        return value


class ProdutoVitrineSerializer(ProdutoSerializer):
    """
    Produto com os preços já resolvidos para o segmento do cliente.
    Espera `segmento` e `tabelas` no contexto.
    """
    precos = serializers.SerializerMethodField()

    def get_precos(self, produto):
        segmento = self.context.get('segmento')
        tabelas = self.context.get('tabelas', [])
        if segmento is Segmento.RESTAURANTE:
            preco = resolver_preco(produto.preco_base, segmento, tabelas)
            return [{'tabela_id': None, 'tabela_nome': None, 'preco': str(preco)}]
        if segmento is Segmento.LOJA:
            return [
                {
                    'tabela_id': tabela.id,
                    'tabela_nome': tabela.nome,
                    'preco': str(resolver_preco(produto.preco_base, segmento, tabelas, tabela.id)),
                }
                for tabela in tabelas
            ]
        return []


class TabelaPrecoSerializer(SerializerEstrito):
    """
    Aceita o multiplicador direto ou o ajuste em percentual (10 -> 1.1000).
    """
    id = serializers.IntegerField(read_only=True)
    nome = serializers.CharField(max_length=100)
    descricao = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    multiplicador = serializers.DecimalField(max_digits=8, decimal_places=4, required=False)
    percentual = serializers.DecimalField(max_digits=6, decimal_places=1, required=False, write_only=True)
    ajuste = serializers.SerializerMethodField()
    segmento = SegmentoField(segmentos=(Segmento.LOJA, Segmento.RESTAURANTE))
    ativo = serializers.BooleanField(required=False, default=True)

    def get_ajuste(self, tabela) -> str:
        return formatar_percentual(tabela.multiplicador)

    def validate(self, attrs):
        percentual = attrs.pop('percentual', None)
        if percentual is not None:
            if 'multiplicador' in attrs:
                raise serializers.ValidationError("Informe o multiplicador ou o percentual, não ambos.")
            try:
                attrs['multiplicador'] = percentual_para_multiplicador(percentual)
            except DadosInvalidosError as e:
                raise serializers.ValidationError({'percentual': [e.message]})

        if 'multiplicador' not in attrs:
            if not self.partial:
                raise serializers.ValidationError({'multiplicador': ["Informe o multiplicador ou o percentual."]})
        elif attrs['multiplicador'] <= 0:
            raise serializers.ValidationError({'multiplicador': ["O multiplicador deve ser maior que zero."]})
        return attrs


class PromocaoSerializer(SerializerEstrito):
    id = serializers.IntegerField(read_only=True)
    titulo = serializers.CharField(max_length=200)
    descricao = serializers.CharField()
    ativo = serializers.BooleanField(required=False, default=True)
    criado_em = serializers.CharField(read_only=True)


class AvisoSerializer(SerializerEstrito):
    id = serializers.IntegerField(read_only=True)
    titulo = serializers.CharField(max_length=200)
    mensagem = serializers.CharField()
    segmento = SegmentoField(segmentos=(Segmento.LOJA, Segmento.RESTAURANTE), required=False, allow_null=True)
    ativo = serializers.BooleanField(required=False, default=True)
    criado_em = serializers.CharField(read_only=True)


# ====================================================================
# SERIALIZERS PARA O CARRINHO
# ====================================================================

class ItemCarrinhoSerializer(serializers.Serializer):
    """Representação de um ItemCarrinho (snapshot)."""
    produto_id = serializers.IntegerField(read_only=True)
    produto_nome = serializers.CharField(read_only=True)
    cor_id = serializers.IntegerField(read_only=True, allow_null=True)
    cor_nome = serializers.CharField(read_only=True)
    quantidade = serializers.IntegerField(read_only=True)
    preco_unitario = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    preco_total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    imagem = serializers.CharField(read_only=True, allow_null=True)


class AdicionarItemSerializer(SerializerEstrito):
    produto_id = serializers.IntegerField(min_value=1)
    quantidade = serializers.IntegerField(min_value=1, default=1)
    cor_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    tabela_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class AtualizarQuantidadeSerializer(SerializerEstrito):
    quantidade = serializers.IntegerField(help_text="Zero ou negativo remove o item.")


# SERIALIZER PARA CHECKOUT
# ====================================================================
class FinalizarPedidoSerializer(SerializerEstrito):
    """O pedido é montado a partir do carrinho da sessão; nenhum campo é aceito."""


class ResultadoPedidoSerializer(serializers.Serializer):
    enviado = serializers.BooleanField(read_only=True)
    mensagem = serializers.CharField(read_only=True)
    url_whatsapp = serializers.CharField(read_only=True, allow_null=True)
