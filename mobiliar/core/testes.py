# mobiliar/core/testes.py

import unittest
from unittest.mock import Mock
from decimal import Decimal
from datetime import datetime

from mobiliar.core.entities import (
    Produto, Cor, Categoria, TabelaPreco, Usuario, ItemCarrinho, ItemCarrinhoEntrada, Segmento, Aviso
)
from mobiliar.core.exceptions import (
    DadosInvalidosError,
    CorObrigatoriaError,
    CorInvalidaError,
    TabelaPrecoObrigatoriaError,
    TabelaPrecoNaoEncontradaError,
    ItemNaoEncontradoError,
    CategoriaNaoEncontradaError,
    CarrinhoVazioError,
    AutenticacaoError,
    PersistenciaError,
    DespachoFalhouError,
)
from mobiliar.core.precificacao import (
    resolver_preco,
    percentual_para_multiplicador,
    multiplicador_para_percentual,
    formatar_percentual,
    tabelas_do_segmento,
)
from mobiliar.core.carrinho import GerenciadorCarrinho, formatar_moeda
from mobiliar.core.pedido import formatar_pedido, FinalizarPedidoUseCase
from mobiliar.core.use_cases import (
    AdicionarAoCarrinhoUseCase,
    AutenticarUsuarioUseCase,
    GerenciarCatalogoAdminUseCase,
    ListarCatalogoUseCase,
)


def _tabelas():
    return [
        TabelaPreco(nome='À Vista', multiplicador=Decimal('1.0000'), segmento=Segmento.LOJA, id=1),
        TabelaPreco(nome='30 dias', multiplicador=Decimal('1.1000'), segmento=Segmento.LOJA, id=2),
        TabelaPreco(nome='30/60', multiplicador=Decimal('1.1500'), segmento=Segmento.LOJA, id=3),
        TabelaPreco(nome='Preço Especial', multiplicador=Decimal('0.9000'), segmento=Segmento.RESTAURANTE, id=4),
    ]


def _entrada(produto_id=1, cor_id=2, quantidade=1, preco='10.00', cores=(1, 2), nome='Banqueta 50 cm'):
    return ItemCarrinhoEntrada(
        produto_id=produto_id,
        produto_nome=nome,
        quantidade=quantidade,
        preco_unitario=Decimal(preco),
        cor_id=cor_id,
        cor_nome='Preto' if cor_id else None,
        cores_disponiveis=cores,
    )


def _store_vazio():
    store = Mock()
    store.carregar.return_value = []
    return store


# ====================================================================
# ENTIDADES
# ====================================================================

class TestEntidades(unittest.TestCase):

    def test_cor_normaliza_codigo_hex(self):
        self.assertEqual(Cor(nome='Cinza', codigo_hex='#abc').codigo_hex, '#AABBCC')
        self.assertEqual(Cor(nome='Vermelho', codigo_hex='ff0000').codigo_hex, '#FF0000')

    def test_cor_com_codigo_invalido_falha(self):
        for codigo in ('#12345', 'azul', '#GGGGGG', ''):
            with self.assertRaises(CorInvalidaError):
                Cor(nome='X', codigo_hex=codigo)

    def test_produto_com_preco_negativo_falha(self):
        with self.assertRaises(DadosInvalidosError):
            Produto(nome='Mesa', categoria_id=1, preco_base='-1.00')

    def test_tabela_preco_nao_aceita_segmento_admin(self):
        with self.assertRaises(DadosInvalidosError):
            TabelaPreco(nome='X', multiplicador='1.0', segmento='admin')

    def test_segmento_permissoes(self):
        self.assertTrue(Segmento.ADMIN.tem_permissao(Segmento.LOJA))
        self.assertFalse(Segmento.LOJA.tem_permissao(Segmento.ADMIN))
        self.assertFalse(Segmento.ADMIN.pode_comprar)
        with self.assertRaises(DadosInvalidosError):
            Segmento.de_valor('atacado')

    def test_aviso_geral_visivel_para_todos(self):
        geral = Aviso(titulo='Oi', mensagem='Bem-vindos')
        da_loja = Aviso(titulo='Loja', mensagem='Só loja', segmento='loja')
        self.assertTrue(geral.visivel_para(Segmento.RESTAURANTE))
        self.assertTrue(da_loja.visivel_para(Segmento.LOJA))
        self.assertFalse(da_loja.visivel_para(Segmento.RESTAURANTE))

    def test_item_de_dict_recalcula_total(self):
        """
        Cenário: O total gravado é ignorado; o item é reconstruído a partir do preço unitário.
        """
        item = ItemCarrinho.de_dict({
            'produto_id': 1, 'produto_nome': 'Banqueta', 'cor_id': 2, 'cor_nome': 'Preto',
            'quantidade': 3, 'preco_unitario': '49.50', 'preco_total': '1.00',
        })
        self.assertEqual(item.preco_total, Decimal('148.50'))

    def test_item_de_dict_rejeita_formatos_desconhecidos(self):
        validos = {'produto_id': 1, 'produto_nome': 'B', 'quantidade': 1, 'preco_unitario': '10.00'}
        invalidos = [
            dict(validos, extra=True),
            {k: v for k, v in validos.items() if k != 'quantidade'},
            dict(validos, quantidade=0),
            dict(validos, quantidade='2'),
            dict(validos, preco_unitario='abc'),
            dict(validos, preco_unitario='0'),
            dict(validos, produto_id=True),
            ['nao', 'e', 'dict'],
        ]
        for dados in invalidos:
            with self.assertRaises(DadosInvalidosError):
                ItemCarrinho.de_dict(dados)

    def test_item_para_dict_e_de_dict_preservam_o_item(self):
        original = ItemCarrinho(
            produto_id=1, produto_nome='Banqueta', cor_id=None, cor_nome='Sem cor',
            quantidade=2, preco_unitario=Decimal('45.00'),
        )
        self.assertEqual(ItemCarrinho.de_dict(original.para_dict()), original)


# ====================================================================
# PRECIFICAÇÃO
# ====================================================================

class TestResolverPreco(unittest.TestCase):

    def setUp(self):
        self.tabelas = _tabelas()

    def test_loja_aplica_multiplicador(self):
        self.assertEqual(resolver_preco(Decimal('100.00'), Segmento.LOJA, self.tabelas, 2), Decimal('110.00'))

    def test_loja_arredonda_meio_para_cima(self):
        # 10.15 x 1.1 = 11.165
        self.assertEqual(resolver_preco(Decimal('10.15'), Segmento.LOJA, self.tabelas, 2), Decimal('11.17'))

    def test_restaurante_ignora_tabela(self):
        for tabela_id in (None, 2, 4, 999):
            self.assertEqual(
                resolver_preco(Decimal('100.00'), Segmento.RESTAURANTE, self.tabelas, tabela_id),
                Decimal('100.00'),
            )

    def test_loja_sem_tabela_falha(self):
        with self.assertRaises(TabelaPrecoObrigatoriaError):
            resolver_preco(Decimal('100.00'), Segmento.LOJA, self.tabelas)

    def test_loja_com_tabela_inexistente_falha(self):
        with self.assertRaises(TabelaPrecoNaoEncontradaError) as ctx:
            resolver_preco(Decimal('100.00'), Segmento.LOJA, self.tabelas, 999)
        self.assertIsInstance(ctx.exception, ItemNaoEncontradoError)

    def test_admin_nao_compra(self):
        with self.assertRaises(DadosInvalidosError):
            resolver_preco(Decimal('100.00'), Segmento.ADMIN, self.tabelas, 1)

    def test_preco_base_negativo_falha(self):
        with self.assertRaises(DadosInvalidosError):
            resolver_preco(Decimal('-5.00'), Segmento.RESTAURANTE, self.tabelas)

    def test_tabelas_do_segmento(self):
        nomes = [t.nome for t in tabelas_do_segmento(self.tabelas, Segmento.LOJA)]
        self.assertEqual(nomes, ['À Vista', '30 dias', '30/60'])


class TestConversaoPercentual(unittest.TestCase):

    def test_percentual_para_multiplicador(self):
        self.assertEqual(percentual_para_multiplicador(10), Decimal('1.1000'))
        self.assertEqual(percentual_para_multiplicador('-10'), Decimal('0.9000'))

    def test_ida_e_volta_dentro_de_uma_casa(self):
        for percentual in ('-10', '0', '12.5', '25'):
            multiplicador = percentual_para_multiplicador(percentual)
            self.assertEqual(multiplicador_para_percentual(multiplicador), Decimal(percentual).quantize(Decimal('0.1')))

    def test_percentual_que_zera_o_preco_falha(self):
        with self.assertRaises(DadosInvalidosError):
            percentual_para_multiplicador(-100)

    def test_formatar_percentual(self):
        self.assertEqual(formatar_percentual(Decimal('1.1')), '+10.0%')
        self.assertEqual(formatar_percentual(Decimal('0.9')), '-10.0%')
        self.assertEqual(formatar_percentual(Decimal('1.0')), '+0.0%')


# ====================================================================
# CARRINHO
# ====================================================================

class TestGerenciadorCarrinho(unittest.TestCase):

    def setUp(self):
        self.store = _store_vazio()
        self.carrinho = GerenciadorCarrinho(self.store)

    def test_carrinho_vazio(self):
        self.assertEqual(self.carrinho.total(), Decimal('0.00'))
        self.assertEqual(self.carrinho.quantidade_itens(), 0)
        self.assertEqual(self.carrinho.resumo(), 'Carrinho vazio')

    def test_mesclar_mesmo_produto_e_cor(self):
        """
        Cenário: Mesmo (produto, cor) adicionado duas vezes vira uma linha; o primeiro preço é mantido.
        """
        self.carrinho.adicionar(_entrada(quantidade=2, preco='10.00'))
        self.carrinho.adicionar(_entrada(quantidade=3, preco='12.00'))

        self.assertEqual(len(self.carrinho.itens), 1)
        item = self.carrinho.itens[0]
        self.assertEqual(item.quantidade, 5)
        self.assertEqual(item.preco_unitario, Decimal('10.00'))
        self.assertEqual(item.preco_total, Decimal('50.00'))
        self.assertEqual(self.store.salvar.call_count, 2)

    def test_cores_diferentes_viram_linhas_diferentes(self):
        self.carrinho.adicionar(_entrada(cor_id=1))
        self.carrinho.adicionar(_entrada(cor_id=2))
        self.assertEqual(len(self.carrinho.itens), 2)
        self.assertTrue(self.carrinho.contem(1, 2))
        self.assertFalse(self.carrinho.contem(1, 3))

    def test_produto_sem_cores_usa_sem_cor(self):
        item = self.carrinho.adicionar(_entrada(cor_id=None, cores=()))
        self.assertIsNone(item.cor_id)
        self.assertEqual(item.cor_nome, 'Sem cor')

    def test_cor_obrigatoria_quando_produto_tem_cores(self):
        with self.assertRaises(CorObrigatoriaError):
            self.carrinho.adicionar(_entrada(cor_id=None))
        self.store.salvar.assert_not_called()

    def test_cor_indisponivel_falha(self):
        with self.assertRaises(DadosInvalidosError):
            self.carrinho.adicionar(_entrada(cor_id=9))

    def test_quantidade_e_preco_invalidos_nao_alteram_o_carrinho(self):
        for entrada in (_entrada(quantidade=0), _entrada(preco='0.00'), _entrada(preco='-1')):
            with self.assertRaises(DadosInvalidosError):
                self.carrinho.adicionar(entrada)
        self.assertTrue(self.carrinho.vazio)
        self.store.salvar.assert_not_called()

    def test_atualizar_quantidade(self):
        self.carrinho.adicionar(_entrada(quantidade=1, preco='45.00'))
        item = self.carrinho.atualizar_quantidade(0, 4)
        self.assertEqual(item.preco_total, Decimal('180.00'))

    def test_atualizar_quantidade_zero_remove(self):
        self.carrinho.adicionar(_entrada(cor_id=1, quantidade=3, preco='12.50'))
        self.carrinho.adicionar(_entrada(cor_id=2))
        total_antes = self.carrinho.total()
        removido_total = self.carrinho.itens[0].preco_total

        self.assertIsNone(self.carrinho.atualizar_quantidade(0, 0))

        self.assertEqual([i.cor_id for i in self.carrinho.itens], [2])
        self.assertEqual(removido_total, Decimal('37.50'))
        self.assertEqual(total_antes - self.carrinho.total(), removido_total)

    def test_indice_fora_do_intervalo_falha(self):
        self.carrinho.adicionar(_entrada())
        for indice in (1, -1, 10):
            with self.assertRaises(ItemNaoEncontradoError):
                self.carrinho.remover(indice)
            with self.assertRaises(ItemNaoEncontradoError):
                self.carrinho.atualizar_quantidade(indice, 2)
        self.assertEqual(len(self.carrinho.itens), 1)

    def test_limpar_duas_vezes(self):
        self.carrinho.adicionar(_entrada())
        self.carrinho.limpar()
        self.carrinho.limpar()
        self.assertTrue(self.carrinho.vazio)
        self.store.salvar.assert_called_with([])

    def test_total_igual_a_soma_dos_itens(self):
        self.carrinho.adicionar(_entrada(produto_id=1, cor_id=1, quantidade=2, preco='45.00'))
        self.carrinho.adicionar(_entrada(produto_id=2, cor_id=2, quantidade=1, preco='60.50'))
        self.carrinho.adicionar(_entrada(produto_id=1, cor_id=1, quantidade=1, preco='99.00'))
        self.carrinho.atualizar_quantidade(1, 3)
        self.assertEqual(self.carrinho.total(), sum(i.preco_total for i in self.carrinho.itens))
        self.assertEqual(self.carrinho.total(), Decimal('316.50'))
        self.assertEqual(self.carrinho.quantidade_itens(), 6)
        self.assertEqual(self.carrinho.resumo(), '6 itens - R$ 316,50')

    def test_estatisticas(self):
        self.carrinho.adicionar(_entrada(quantidade=4, preco='25.00'))
        estatisticas = self.carrinho.estatisticas()
        self.assertEqual(estatisticas['produtos_unicos'], 1)
        self.assertEqual(estatisticas['preco_medio_item'], Decimal('25.00'))
        self.assertFalse(estatisticas['vazio'])

    def test_falha_de_persistencia_nao_e_fatal(self):
        """
        Cenário: O store falha ao gravar; a operação continua válida em memória.
        """
        self.store.salvar.side_effect = PersistenciaError()
        self.carrinho.adicionar(_entrada(quantidade=2))
        self.assertEqual(self.carrinho.quantidade_itens(), 2)
        self.assertTrue(self.carrinho.persistencia_degradada)

    def test_falha_ao_carregar_inicia_vazio(self):
        store = Mock()
        store.carregar.side_effect = PersistenciaError()
        carrinho = GerenciadorCarrinho(store)
        self.assertTrue(carrinho.vazio)
        self.assertTrue(carrinho.persistencia_degradada)


# ====================================================================
# PEDIDO
# ====================================================================

class TestFormatarPedido(unittest.TestCase):

    def setUp(self):
        self.itens = [
            ItemCarrinho(produto_id=1, produto_nome='Banqueta 50 cm', cor_id=2, cor_nome='Preto',
                         quantidade=2, preco_unitario=Decimal('45.00')),
            ItemCarrinho(produto_id=3, produto_nome='Mesa Bistrô', cor_id=None, cor_nome='Sem cor',
                         quantidade=1, preco_unitario=Decimal('1234.50')),
        ]
        self.agora = datetime(2024, 5, 1, 14, 30, 5)

    def test_formatar_moeda(self):
        self.assertEqual(formatar_moeda(Decimal('1234.56')), 'R$ 1.234,56')
        self.assertEqual(formatar_moeda(0), 'R$ 0,00')
        self.assertEqual(formatar_moeda(Decimal('1000000')), 'R$ 1.000.000,00')

    def test_carrinho_vazio_falha(self):
        with self.assertRaises(CarrinhoVazioError):
            formatar_pedido([])

    def test_mensagem_lista_itens_e_total(self):
        usuario = Usuario(username='loja', password='x', segmento=Segmento.LOJA, nome='Usuário Loja', id=2)
        mensagem = formatar_pedido(self.itens, usuario, self.agora)

        self.assertTrue(mensagem.startswith('🛒 *NOVO PEDIDO*\n\n👤 *Cliente:* Usuário Loja (loja)\n'))
        self.assertIn('📅 *Data:* 01/05/2024, 14:30:05', mensagem)
        self.assertIn('*1. Banqueta 50 cm*\n   🎨 Cor: Preto\n   📦 Quantidade: 2\n', mensagem)
        self.assertIn('   💰 Preço unitário: R$ 45,00\n   💵 Subtotal: R$ 90,00', mensagem)
        self.assertIn('*2. Mesa Bistrô*\n   🎨 Cor: Sem cor', mensagem)
        self.assertIn('💰 *TOTAL DO PEDIDO: R$ 1.324,50*', mensagem)
        self.assertIn('• Combinar forma de pagamento', mensagem)
        self.assertEqual(mensagem.count('─' * 30), 2)
        self.assertTrue(mensagem.endswith('✅ Pedido gerado automaticamente pelo sistema'))

    def test_cliente_anonimo(self):
        mensagem = formatar_pedido(self.itens, None, self.agora)
        self.assertIn('👤 *Cliente:* Cliente\n', mensagem)


class TestFinalizarPedido(unittest.TestCase):

    def setUp(self):
        self.store = _store_vazio()
        self.gerenciador = GerenciadorCarrinho(self.store)
        self.gerenciador.adicionar(_entrada(quantidade=2, preco='45.00'))
        self.despacho = Mock()
        self.despacho.url_para.return_value = 'https://wa.me/5511999999999?text=x'
        self.use_case = FinalizarPedidoUseCase(self.gerenciador, self.despacho, '5511999999999')

    def test_envio_confirmado_limpa_carrinho(self):
        self.despacho.enviar.return_value = True

        resultado = self.use_case.executar()

        self.assertTrue(resultado.enviado)
        self.assertIn('R$ 90,00', resultado.mensagem)
        self.assertEqual(resultado.url_whatsapp, 'https://wa.me/5511999999999?text=x')
        self.despacho.enviar.assert_called_once_with(resultado.mensagem, '5511999999999')
        self.assertTrue(self.gerenciador.vazio)

    def test_envio_recusado_mantem_carrinho(self):
        self.despacho.enviar.return_value = False
        resultado = self.use_case.executar()
        self.assertFalse(resultado.enviado)
        self.assertEqual(self.gerenciador.quantidade_itens(), 2)

    def test_erro_de_despacho_mantem_carrinho(self):
        self.despacho.enviar.side_effect = DespachoFalhouError()
        resultado = self.use_case.executar()
        self.assertFalse(resultado.enviado)
        self.assertFalse(self.gerenciador.vazio)

    def test_carrinho_vazio_nao_despacha(self):
        self.gerenciador.limpar()
        with self.assertRaises(CarrinhoVazioError):
            self.use_case.executar()
        self.despacho.enviar.assert_not_called()


# ====================================================================
# CASOS DE USO
# ====================================================================

class TestAdicionarAoCarrinho(unittest.TestCase):

    def setUp(self):
        self.catalogo = Mock()
        self.catalogo.buscar_produto.return_value = Produto(
            nome='Banqueta 50 cm', categoria_id=1, preco_base=Decimal('45.00'),
            imagens=['https://img/1.jpg'], cores_disponiveis=[1, 2], id=1,
        )
        self.catalogo.buscar_cor.return_value = Cor(nome='Preto', codigo_hex='#000000', id=2)
        self.catalogo.listar_tabelas_preco.side_effect = lambda segmento=None: [
            t for t in _tabelas() if segmento is None or t.segmento is segmento
        ]
        self.gerenciador = GerenciadorCarrinho(_store_vazio())
        self.use_case = AdicionarAoCarrinhoUseCase(self.catalogo, self.gerenciador)
        self.loja = Usuario(username='loja', password='loja123', segmento=Segmento.LOJA, nome='Usuário Loja', id=2)
        self.restaurante = Usuario(username='restaurante', password='r', segmento=Segmento.RESTAURANTE,
                                   nome='Usuário Restaurante', id=3)

    def test_loja_usa_tabela_escolhida(self):
        item = self.use_case.executar(self.loja, produto_id=1, quantidade=2, cor_id=2, tabela_id=3)
        self.assertEqual(item.preco_unitario, Decimal('51.75'))
        self.assertEqual(item.cor_nome, 'Preto')
        self.assertEqual(item.imagem, 'https://img/1.jpg')
        self.catalogo.listar_tabelas_preco.assert_called_with(Segmento.LOJA)

    def test_restaurante_usa_preco_base(self):
        item = self.use_case.executar(self.restaurante, produto_id=1, cor_id=1)
        self.assertEqual(item.preco_unitario, Decimal('45.00'))

    def test_loja_sem_tabela_falha(self):
        with self.assertRaises(TabelaPrecoObrigatoriaError):
            self.use_case.executar(self.loja, produto_id=1, cor_id=2)
        self.assertTrue(self.gerenciador.vazio)

    def test_admin_nao_compra(self):
        admin = Usuario(username='admin', password='a', segmento=Segmento.ADMIN, nome='Administrador', id=1)
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(admin, produto_id=1, cor_id=2)

    def test_cor_ausente_falha(self):
        with self.assertRaises(CorObrigatoriaError):
            self.use_case.executar(self.restaurante, produto_id=1)


class TestAutenticarUsuario(unittest.TestCase):

    def setUp(self):
        self.catalogo = Mock()
        self.use_case = AutenticarUsuarioUseCase(self.catalogo)

    def test_login_valido(self):
        usuario = Usuario(username='loja', password='loja123', segmento='loja', nome='Usuário Loja', id=2)
        self.catalogo.buscar_usuario_por_username.return_value = usuario
        self.assertIs(self.use_case.executar('loja', 'loja123'), usuario)

    def test_senha_errada_ou_usuario_inexistente(self):
        self.catalogo.buscar_usuario_por_username.return_value = Usuario(
            username='loja', password='loja123', segmento='loja', nome='Usuário Loja', id=2)
        with self.assertRaises(AutenticacaoError):
            self.use_case.executar('loja', 'errada')
        self.catalogo.buscar_usuario_por_username.return_value = None
        with self.assertRaises(AutenticacaoError):
            self.use_case.executar('ninguem', 'x')

    def test_usuario_inativo(self):
        self.catalogo.buscar_usuario_por_username.return_value = Usuario(
            username='loja', password='loja123', segmento='loja', nome='Usuário Loja', ativo=False, id=2)
        with self.assertRaises(AutenticacaoError):
            self.use_case.executar('loja', 'loja123')


class TestGerenciarCatalogoAdmin(unittest.TestCase):

    def setUp(self):
        self.catalogo = Mock()
        self.catalogo.listar_categorias.return_value = [Categoria(nome='Mesas', id=1)]
        self.catalogo.listar_cores.return_value = [Cor(nome='Preto', codigo_hex='#000', id=2)]
        self.catalogo.criar_produto.side_effect = lambda produto: produto
        self.use_case = GerenciarCatalogoAdminUseCase(self.catalogo)

    def test_criar_produto(self):
        produto = self.use_case.criar('produto', {
            'nome': 'Mesa', 'categoria_id': 1, 'preco_base': Decimal('300.00'), 'cores_disponiveis': [2],
        })
        self.assertEqual(produto.nome, 'Mesa')
        self.catalogo.criar_produto.assert_called_once()

    def test_criar_produto_com_categoria_inexistente_falha(self):
        with self.assertRaises(CategoriaNaoEncontradaError):
            self.use_case.criar('produto', {'nome': 'Mesa', 'categoria_id': 9, 'preco_base': '1.00'})
        self.catalogo.criar_produto.assert_not_called()

    def test_tipo_desconhecido_falha(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.deletar('pedido', 1)

    def test_atualizar_ignora_id_e_data(self):
        self.use_case.atualizar('promocao', 5, {'id': 99, 'titulo': 'Nova', 'criado_em': 'x'})
        self.catalogo.atualizar_promocao.assert_called_once_with(5, {'titulo': 'Nova'})


class TestListarCatalogo(unittest.TestCase):

    def test_vitrine_filtra_tabelas_e_avisos_pelo_segmento(self):
        catalogo = Mock()
        catalogo.listar_tabelas_preco.return_value = [t for t in _tabelas() if t.segmento is Segmento.RESTAURANTE]
        vitrine = ListarCatalogoUseCase(catalogo).vitrine(Segmento.RESTAURANTE)
        self.assertEqual([t.nome for t in vitrine['tabelas_preco']], ['Preço Especial'])
        catalogo.listar_avisos.assert_called_once_with(Segmento.RESTAURANTE)

    def test_produto_inativo_nao_aparece_nos_detalhes(self):
        catalogo = Mock()
        catalogo.buscar_produto.return_value = Produto(nome='X', categoria_id=1, preco_base='1', ativo=False, id=7)
        with self.assertRaises(ItemNaoEncontradoError):
            ListarCatalogoUseCase(catalogo).detalhar_produto(7)


if __name__ == '__main__':
    unittest.main()
