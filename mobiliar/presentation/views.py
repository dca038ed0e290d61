from django.conf import settings
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from mobiliar.core.entities import Segmento
from mobiliar.core.exceptions import DadosInvalidosError, ItemNaoEncontradoError
from mobiliar.core.pedido import FinalizarPedidoUseCase
from mobiliar.core.use_cases import (
    ListarCatalogoUseCase,
    GerenciarCatalogoAdminUseCase,
    AdicionarAoCarrinhoUseCase,
    AutenticarUsuarioUseCase,
)
from mobiliar.infrastructure import instances

from .autenticacao import iniciar_sessao, encerrar_sessao
from .permissions import LeituraAutenticadaEscritaAdmin, PodeComprar
from .serializers import (
    LoginSerializer,
    UsuarioSerializer,
    CategoriaSerializer,
    CorSerializer,
    ProdutoSerializer,
    ProdutoVitrineSerializer,
    TabelaPrecoSerializer,
    PromocaoSerializer,
    AvisoSerializer,
    ItemCarrinhoSerializer,
    AdicionarItemSerializer,
    AtualizarQuantidadeSerializer,
    FinalizarPedidoSerializer,
    ResultadoPedidoSerializer,
)


# ====================================================================
# VIEWS: Orquestram a requisição, a execução dos casos de uso e a resposta.
# ====================================================================

def _inteiro(valor, campo):
    try:
        return int(valor)
    except (TypeError, ValueError):
        raise DadosInvalidosError(f"Parâmetro '{campo}' deve ser um número inteiro.")


# ====================================================================
# VIEWS DE AUTENTICAÇÃO
# ====================================================================

class LoginAPIView(APIView):
    """Valida as credenciais e abre a sessão do usuário."""
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=LoginSerializer, responses=UsuarioSerializer)
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        usuario = AutenticarUsuarioUseCase(instances.catalogo()).executar(**serializer.validated_data)
        iniciar_sessao(request, usuario)
        return Response(UsuarioSerializer(usuario).data)


class LogoutAPIView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(request=None, responses={204: None})
    def post(self, request):
        encerrar_sessao(request)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=UsuarioSerializer)
    def get(self, request):
        return Response(UsuarioSerializer(request.user.usuario).data)


# ====================================================================
# VIEWS DO CATÁLOGO (leitura para logados, escrita apenas admin)
# ====================================================================

class ColecaoAPIView(APIView):
    """
    Listagem (GET) e criação (POST) de uma entidade do catálogo.
    Subclasses definem `tipo` (nome usado pelo repositório), `listar_metodo` e
    `serializer_class`; as que aceitam filtros sobrescrevem `listar`.
    """
    permission_classes = [LeituraAutenticadaEscritaAdmin]
    tipo = None
    listar_metodo = None
    serializer_class = None

    def listar(self, request):
        return getattr(instances.catalogo(), self.listar_metodo)()

    def get(self, request):
        registros = self.listar(request)
        return Response(self.serializer_class(registros, many=True).data)

    def post(self, request):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        criado = GerenciarCatalogoAdminUseCase(instances.catalogo()).criar(self.tipo, serializer.validated_data)
        return Response(self.serializer_class(criado).data, status=status.HTTP_201_CREATED)


class RegistroAPIView(APIView):
    """
    Detalhe (GET), alteração parcial (PUT) e exclusão (DELETE) de um registro.
    Registros inativos só são visíveis para o administrador.
    """
    permission_classes = [LeituraAutenticadaEscritaAdmin]
    tipo = None
    serializer_class = None

    def buscar(self, pk):
        registro = getattr(instances.catalogo(), f"buscar_{self.tipo}")(pk)
        if not registro.ativo and self.request.user.segmento is not Segmento.ADMIN:
            raise ItemNaoEncontradoError(f"Registro {pk} não encontrado.")
        return registro

    def get(self, request, pk):
        return Response(self.serializer_class(self.buscar(pk)).data)

    def put(self, request, pk):
        serializer = self.serializer_class(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        atualizado = GerenciarCatalogoAdminUseCase(instances.catalogo()).atualizar(
            self.tipo, pk, serializer.validated_data
        )
        return Response(self.serializer_class(atualizado).data)

    def delete(self, request, pk):
        GerenciarCatalogoAdminUseCase(instances.catalogo()).deletar(self.tipo, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CategoriaListAPIView(ColecaoAPIView):
    tipo = 'categoria'
    listar_metodo = 'listar_categorias'
    serializer_class = CategoriaSerializer


class CategoriaDetailAPIView(RegistroAPIView):
    tipo = 'categoria'
    serializer_class = CategoriaSerializer


class CorListAPIView(ColecaoAPIView):
    tipo = 'cor'
    listar_metodo = 'listar_cores'
    serializer_class = CorSerializer


class CorDetailAPIView(RegistroAPIView):
    tipo = 'cor'
    serializer_class = CorSerializer


class ProdutoListAPIView(ColecaoAPIView):
    tipo = 'produto'
    serializer_class = ProdutoSerializer

    @extend_schema(parameters=[OpenApiParameter('categoria', int, description="Filtra pela categoria.")])
    def get(self, request):
        return super().get(request)

    def listar(self, request):
        categoria = request.query_params.get('categoria')
        categoria_id = _inteiro(categoria, 'categoria') if categoria else None
        return ListarCatalogoUseCase(instances.catalogo()).listar_produtos(categoria_id)


class ProdutoDetailAPIView(RegistroAPIView):
    tipo = 'produto'
    serializer_class = ProdutoSerializer


class TabelaPrecoListAPIView(ColecaoAPIView):
    tipo = 'tabela_preco'
    serializer_class = TabelaPrecoSerializer

    @extend_schema(parameters=[OpenApiParameter('segmento', str, enum=['loja', 'restaurante'])])
    def get(self, request):
        return super().get(request)

    def listar(self, request):
        segmento = request.query_params.get('segmento')
        if segmento:
            segmento = Segmento.de_valor(segmento)
            return instances.catalogo().listar_tabelas_preco(segmento)
        return instances.catalogo().listar_tabelas_preco()


class TabelaPrecoDetailAPIView(RegistroAPIView):
    tipo = 'tabela_preco'
    serializer_class = TabelaPrecoSerializer


class PromocaoListAPIView(ColecaoAPIView):
    tipo = 'promocao'
    listar_metodo = 'listar_promocoes'
    serializer_class = PromocaoSerializer


class PromocaoDetailAPIView(RegistroAPIView):
    tipo = 'promocao'
    serializer_class = PromocaoSerializer


class AvisoListAPIView(ColecaoAPIView):
    tipo = 'aviso'
    serializer_class = AvisoSerializer

    @extend_schema(parameters=[OpenApiParameter('segmento', str, enum=['loja', 'restaurante'])])
    def get(self, request):
        return super().get(request)

    def listar(self, request):
        segmento = request.query_params.get('segmento')
        if segmento:
            return instances.catalogo().listar_avisos(Segmento.de_valor(segmento))
        return instances.catalogo().listar_avisos()


class AvisoDetailAPIView(RegistroAPIView):
    tipo = 'aviso'
    serializer_class = AvisoSerializer


class VitrineAPIView(APIView):
    """
    Tudo que a tela da loja precisa para o segmento do usuário logado,
    com os preços de cada produto já resolvidos.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        segmento = request.user.segmento
        vitrine = ListarCatalogoUseCase(instances.catalogo()).vitrine(segmento)
        tabelas = vitrine['tabelas_preco']
        contexto = {'segmento': segmento, 'tabelas': tabelas}

        return Response({
            'segmento': segmento.value,
            'produtos': ProdutoVitrineSerializer(vitrine['produtos'], many=True, context=contexto).data,
            'categorias': CategoriaSerializer(vitrine['categorias'], many=True).data,
            'cores': CorSerializer(vitrine['cores'], many=True).data,
            'tabelas_preco': TabelaPrecoSerializer(tabelas, many=True).data,
            'promocoes': PromocaoSerializer(vitrine['promocoes'], many=True).data,
            'avisos': AvisoSerializer(vitrine['avisos'], many=True).data,
        })


# ====================================================================
# VIEWS DO CARRINHO (loja e restaurante)
# ====================================================================

def _resposta_carrinho(gerenciador, status_code=status.HTTP_200_OK):
    return Response({
        'itens': ItemCarrinhoSerializer(gerenciador.itens, many=True).data,
        'total': str(gerenciador.total()),
        'quantidade_itens': gerenciador.quantidade_itens(),
        'resumo': gerenciador.resumo(),
        'persistencia_degradada': gerenciador.persistencia_degradada,
    }, status=status_code)


class CarrinhoAPIView(APIView):
    """Carrinho da sessão atual."""
    permission_classes = [PodeComprar]

    def get(self, request):
        return _resposta_carrinho(instances.carrinho_da_sessao(request.session))

    def delete(self, request):
        """Esvazia o carrinho."""
        gerenciador = instances.carrinho_da_sessao(request.session)
        gerenciador.limpar()
        return _resposta_carrinho(gerenciador)


class CarrinhoItensAPIView(APIView):
    permission_classes = [PodeComprar]

    @extend_schema(request=AdicionarItemSerializer)
    def post(self, request):
        """
        Adiciona um produto. Se a mesma combinação produto/cor já estiver no
        carrinho, apenas soma a quantidade.
        """
        serializer = AdicionarItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        gerenciador = instances.carrinho_da_sessao(request.session)
        AdicionarAoCarrinhoUseCase(instances.catalogo(), gerenciador).executar(
            request.user.usuario, **serializer.validated_data
        )
        return _resposta_carrinho(gerenciador, status.HTTP_201_CREATED)


class CarrinhoItemAPIView(APIView):
    """Operações sobre a linha `indice` (base zero, na ordem de inserção)."""
    permission_classes = [PodeComprar]

    @extend_schema(request=AtualizarQuantidadeSerializer)
    def patch(self, request, indice):
        serializer = AtualizarQuantidadeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        gerenciador = instances.carrinho_da_sessao(request.session)
        gerenciador.atualizar_quantidade(indice, serializer.validated_data['quantidade'])
        return _resposta_carrinho(gerenciador)

    def delete(self, request, indice):
        gerenciador = instances.carrinho_da_sessao(request.session)
        gerenciador.remover(indice)
        return _resposta_carrinho(gerenciador)


# ====================================================================
# VIEW PARA CHECKOUT
# ====================================================================

class FinalizarPedidoAPIView(APIView):
    """
    Formata o pedido e entrega ao canal de despacho configurado.
    O carrinho só é limpo quando o despacho confirma o envio.
    """
    permission_classes = [PodeComprar]

    @extend_schema(request=FinalizarPedidoSerializer, responses={200: ResultadoPedidoSerializer, 502: ResultadoPedidoSerializer})
    def post(self, request):
        FinalizarPedidoSerializer(data=request.data).is_valid(raise_exception=True)

        caso_de_uso = FinalizarPedidoUseCase(
            instances.carrinho_da_sessao(request.session),
            instances.despacho(),
            settings.WHATSAPP_NUMERO_PEDIDOS,
        )
        resultado = caso_de_uso.executar(request.user.usuario, agora=timezone.localtime())

        codigo = status.HTTP_200_OK if resultado.enviado else status.HTTP_502_BAD_GATEWAY
        return Response(ResultadoPedidoSerializer(resultado).data, status=codigo)
