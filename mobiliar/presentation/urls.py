"""
Rotas da API REST: autenticação, catálogo (leitura e CRUD administrativo),
vitrine do segmento, carrinho da sessão e checkout via WhatsApp.
"""
from django.urls import path
from . import views


urlpatterns = [
    # ====================================================================
    # 1. ROTAS DE AUTENTICAÇÃO
    # ====================================================================
    path('auth/login/', views.LoginAPIView.as_view(), name='api_login'),
    path('auth/logout/', views.LogoutAPIView.as_view(), name='api_logout'),
    path('auth/me/', views.MeAPIView.as_view(), name='api_me'),

    # ====================================================================
    # 2. ROTAS DE CATÁLOGO (POST/PUT/DELETE apenas admin)
    # ====================================================================
    path('categorias/', views.CategoriaListAPIView.as_view(), name='api_categorias'),
    path('categorias/<int:pk>/', views.CategoriaDetailAPIView.as_view(), name='api_categoria'),
    path('cores/', views.CorListAPIView.as_view(), name='api_cores'),
    path('cores/<int:pk>/', views.CorDetailAPIView.as_view(), name='api_cor'),
    path('produtos/', views.ProdutoListAPIView.as_view(), name='api_produtos'),
    path('produtos/<int:pk>/', views.ProdutoDetailAPIView.as_view(), name='api_produto'),
    path('tabelas-preco/', views.TabelaPrecoListAPIView.as_view(), name='api_tabelas_preco'),
    path('tabelas-preco/<int:pk>/', views.TabelaPrecoDetailAPIView.as_view(), name='api_tabela_preco'),
    path('promocoes/', views.PromocaoListAPIView.as_view(), name='api_promocoes'),
    path('promocoes/<int:pk>/', views.PromocaoDetailAPIView.as_view(), name='api_promocao'),
    path('avisos/', views.AvisoListAPIView.as_view(), name='api_avisos'),
    path('avisos/<int:pk>/', views.AvisoDetailAPIView.as_view(), name='api_aviso'),
    path('vitrine/', views.VitrineAPIView.as_view(), name='api_vitrine'),

    # ====================================================================
    # 3. ROTAS DE COMPRA (CARRINHO E CHECKOUT)
    # ====================================================================
    path('carrinho/', views.CarrinhoAPIView.as_view(), name='api_carrinho'),
    path('carrinho/itens/', views.CarrinhoItensAPIView.as_view(), name='api_carrinho_itens'),
    path('carrinho/itens/<int:indice>/', views.CarrinhoItemAPIView.as_view(), name='api_carrinho_item'),
    path('carrinho/finalizar/', views.FinalizarPedidoAPIView.as_view(), name='api_finalizar_pedido'),
]
