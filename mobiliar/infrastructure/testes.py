import base64
import json
from io import StringIO
from decimal import Decimal
from unittest.mock import Mock, patch

import requests
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, override_settings

from mobiliar.core.entities import Categoria, Cor, ItemCarrinho, Produto, Segmento
from mobiliar.core.exceptions import (
    DadosInvalidosError,
    PersistenciaError,
    DespachoFalhouError,
    ProdutoNaoEncontradoError,
    CorNaoEncontradaError,
    AvisoNaoEncontradoError,
)
from mobiliar.infrastructure import instances
from mobiliar.infrastructure.carrinho_store import SessaoCarrinhoStore, MemoriaCarrinhoStore
from mobiliar.infrastructure.documentos import GitHubArmazemDocumentos
from mobiliar.infrastructure.gateways import (
    formatar_numero_whatsapp,
    validar_numero_whatsapp,
    gerar_url_whatsapp,
    EvolutionAPIGateway,
    WhatsAppLinkGateway,
    WhatsAppGatewayMock,
)
from mobiliar.infrastructure.mappers import ProdutoMapper, TabelaPrecoMapper
from mobiliar.infrastructure.repositories import CatalogoMemoria, CatalogoDocumentos


class SessaoFake(dict):
    """Sessão mínima: um dicionário com o atributo `modified`."""
    modified = False


def _item(produto_id=1, cor_id=2, quantidade=2, preco='45.00'):
    return ItemCarrinho(
        produto_id=produto_id, produto_nome='Banqueta 50 cm', cor_id=cor_id, cor_nome='Preto',
        quantidade=quantidade, preco_unitario=Decimal(preco),
    )


# ====================================================================
# CATÁLOGO EM MEMÓRIA
# ====================================================================

class CatalogoMemoriaTestCase(SimpleTestCase):

    def setUp(self):
        self.catalogo = CatalogoMemoria()

    def test_dados_iniciais(self):
        self.assertEqual(len(self.catalogo.listar_categorias()), 3)
        self.assertEqual(len(self.catalogo.listar_cores()), 4)
        self.assertEqual(len(self.catalogo.listar_produtos()), 2)
        self.assertEqual(len(self.catalogo.listar_tabelas_preco(Segmento.LOJA)), 5)
        self.assertEqual(
            [t.nome for t in self.catalogo.listar_tabelas_preco(Segmento.RESTAURANTE)], ['Preço Especial']
        )
        self.assertEqual(self.catalogo.buscar_usuario_por_username('admin').segmento, Segmento.ADMIN)
        self.assertIsNone(self.catalogo.buscar_usuario_por_username('ninguem'))

    def test_filtrar_produtos_por_categoria(self):
        self.assertEqual(len(self.catalogo.listar_produtos(categoria_id=1)), 2)
        self.assertEqual(self.catalogo.listar_produtos(categoria_id=2), [])

    def test_ids_vem_de_um_unico_contador(self):
        categoria = self.catalogo.criar_categoria(Categoria(nome='Poltronas'))
        cor = self.catalogo.criar_cor(Cor(nome='Azul', codigo_hex='#00f'))
        self.assertEqual(categoria.id, 7)
        self.assertEqual(cor.id, 8)
        self.assertEqual(cor.codigo_hex, '#0000FF')

    def test_deletar_produto_e_exclusao_logica(self):
        """
        Cenário: O produto removido some das listagens mas continua armazenado como inativo.
        """
        self.catalogo.deletar_produto(1)

        self.assertEqual([p.id for p in self.catalogo.listar_produtos()], [2])
        self.assertFalse(self.catalogo.buscar_produto(1).ativo)

    def test_deletar_cor_remove_o_registro(self):
        self.catalogo.deletar_cor(3)
        with self.assertRaises(CorNaoEncontradaError):
            self.catalogo.buscar_cor(3)

    def test_operacoes_com_id_inexistente(self):
        with self.assertRaises(ProdutoNaoEncontradoError):
            self.catalogo.deletar_produto(999)
        with self.assertRaises(AvisoNaoEncontradoError):
            self.catalogo.atualizar_aviso(999, {'titulo': 'x'})

    def test_atualizar_revalida_a_entidade(self):
        tabela = self.catalogo.atualizar_tabela_preco(2, {'multiplicador': '1.12'})
        self.assertEqual(tabela.multiplicador, Decimal('1.1200'))
        with self.assertRaises(DadosInvalidosError):
            self.catalogo.atualizar_tabela_preco(2, {'multiplicador': '0'})
        with self.assertRaises(DadosInvalidosError):
            self.catalogo.atualizar_tabela_preco(2, {'campo_inexistente': 1})
        self.assertEqual(self.catalogo.buscar_tabela_preco(2).multiplicador, Decimal('1.1200'))

    def test_avisos_por_segmento(self):
        from mobiliar.core.entities import Aviso
        self.catalogo.criar_aviso(Aviso(titulo='Loja', mensagem='Só para loja', segmento=Segmento.LOJA))
        self.catalogo.criar_aviso(Aviso(titulo='Inativo', mensagem='x', ativo=False))

        self.assertEqual(len(self.catalogo.listar_avisos()), 2)
        self.assertEqual(len(self.catalogo.listar_avisos(Segmento.LOJA)), 2)
        self.assertEqual([a.titulo for a in self.catalogo.listar_avisos(Segmento.RESTAURANTE)],
                         ['Bem-vindos à nossa loja!'])


# ====================================================================
# CATÁLOGO NO ARMAZÉM DE DOCUMENTOS
# ====================================================================

class CatalogoDocumentosTestCase(SimpleTestCase):

    def setUp(self):
        self.armazem = Mock()
        self.documentos = {
            'products.json': [{
                'id': 10, 'name': 'Mesa Bistrô', 'description': None, 'categoryId': 3,
                'basePrice': '120.00', 'images': [], 'availableColors': [2], 'active': True,
            }],
        }
        self.armazem.ler.side_effect = lambda arquivo: self.documentos.get(arquivo)
        self.catalogo = CatalogoDocumentos(self.armazem)

    def test_carrega_colecao_do_armazem(self):
        produtos = self.catalogo.listar_produtos()
        self.assertEqual([p.nome for p in produtos], ['Mesa Bistrô'])
        self.assertEqual(produtos[0].preco_base, Decimal('120.00'))

    def test_documento_inexistente_usa_dados_iniciais(self):
        self.assertEqual(len(self.catalogo.listar_categorias()), 3)

    def test_falha_de_leitura_usa_dados_iniciais(self):
        self.armazem.ler.side_effect = PersistenciaError("GitHub fora do ar")
        self.assertEqual(len(self.catalogo.listar_produtos()), 2)

    def test_registro_malformado_e_ignorado_sem_perder_os_validos(self):
        self.documentos['products.json'].append({
            'id': 11, 'name': 'Quebrado', 'categoryId': 3, 'basePrice': '-1', 'active': True,
        })
        self.assertEqual([p.nome for p in self.catalogo.listar_produtos()], ['Mesa Bistrô'])

    def test_registro_malformado_e_preservado_na_gravacao(self):
        quebrado = {'id': 11, 'name': 'Quebrado', 'categoryId': 3, 'basePrice': '-1', 'active': True}
        self.documentos['products.json'].append(quebrado)

        novo = self.catalogo.criar_produto(Produto(nome='Novo', categoria_id=3, preco_base=Decimal('10.00')))

        self.assertEqual(novo.id, 12)
        _arquivo, registros, _mensagem = self.armazem.gravar.call_args[0]
        self.assertEqual([r['name'] for r in registros], ['Mesa Bistrô', 'Novo', 'Quebrado'])
        self.assertIn(quebrado, registros)

    def test_falha_de_leitura_recarrega_antes_de_gravar(self):
        """
        Cenário: O armazém falha na primeira leitura e volta em seguida; a escrita
        deve partir do documento real e não dos dados iniciais.
        """
        respostas = [PersistenciaError("GitHub fora do ar"), self.documentos['products.json']]

        def ler(arquivo):
            resposta = respostas.pop(0)
            if isinstance(resposta, Exception):
                raise resposta
            return resposta
        self.armazem.ler.side_effect = ler

        self.assertEqual(len(self.catalogo.listar_produtos()), 2)
        self.catalogo.criar_produto(Produto(nome='Novo', categoria_id=3, preco_base=Decimal('10.00')))

        _arquivo, registros, _mensagem = self.armazem.gravar.call_args[0]
        self.assertEqual([r['name'] for r in registros], ['Mesa Bistrô', 'Novo'])

    def test_armazem_indisponivel_bloqueia_escrita(self):
        self.armazem.ler.side_effect = PersistenciaError("GitHub fora do ar")
        self.assertEqual(len(self.catalogo.listar_produtos()), 2)

        with self.assertRaises(PersistenciaError):
            self.catalogo.criar_produto(Produto(nome='Novo', categoria_id=1, preco_base=Decimal('10.00')))
        with self.assertRaises(PersistenciaError):
            self.catalogo.deletar_produto(1)

        self.armazem.gravar.assert_not_called()
        self.assertTrue(self.catalogo.buscar_produto(1).ativo)

    def test_escrita_grava_documento_inteiro(self):
        produto = self.catalogo.atualizar_produto(10, {'preco_base': Decimal('130.00')})

        self.assertEqual(produto.preco_base, Decimal('130.00'))
        arquivo, registros, _mensagem = self.armazem.gravar.call_args[0]
        self.assertEqual(arquivo, 'products.json')
        self.assertEqual(registros[0]['basePrice'], '130.00')

    def test_falha_de_gravacao_desfaz_a_alteracao(self):
        self.armazem.gravar.side_effect = PersistenciaError()
        with self.assertRaises(PersistenciaError):
            self.catalogo.deletar_produto(10)
        self.assertTrue(self.catalogo.buscar_produto(10).ativo)

    def test_usuarios_vem_sempre_dos_dados_iniciais(self):
        self.assertEqual(self.catalogo.buscar_usuario_por_username('loja').nome, 'Usuário Loja')
        arquivos_lidos = [c[0][0] for c in self.armazem.ler.call_args_list]
        self.assertNotIn('users.json', arquivos_lidos)

    def test_inicializar_publica_apenas_colecoes_ausentes(self):
        gravados = self.catalogo.inicializar()
        self.assertNotIn('products.json', gravados)
        self.assertIn('categories.json', gravados)
        self.assertEqual(len(gravados), 5)


class MappersTestCase(SimpleTestCase):

    def test_tabela_preco_usa_formato_dos_documentos(self):
        registro = {'id': 2, 'name': '30 dias', 'description': None, 'multiplier': '1.1000',
                    'userType': 'loja', 'active': True}
        tabela = TabelaPrecoMapper.to_entity(registro)
        self.assertEqual(tabela.segmento, Segmento.LOJA)
        self.assertEqual(TabelaPrecoMapper.to_dict(tabela), registro)

    def test_registro_sem_campo_obrigatorio(self):
        with self.assertRaises(DadosInvalidosError):
            ProdutoMapper.to_entity_seguro({'id': 1, 'name': 'Sem preço'})


# ====================================================================
# CLIENTE DO GITHUB
# ====================================================================

def _resposta(status=200, corpo=None):
    resposta = Mock(status_code=status, ok=200 <= status < 300)
    resposta.json.return_value = corpo or {}
    return resposta


class GitHubArmazemDocumentosTestCase(SimpleTestCase):

    def setUp(self):
        self.session = Mock()
        self.armazem = GitHubArmazemDocumentos('token', 'dono', 'repo', session=self.session)

    def test_ler_documento(self):
        conteudo = base64.b64encode(json.dumps([{'id': 1}]).encode()).decode()
        self.session.get.return_value = _resposta(200, {'sha': 'abc', 'content': conteudo})

        self.assertEqual(self.armazem.ler('colors.json'), [{'id': 1}])
        url = self.session.get.call_args[0][0]
        self.assertEqual(url, 'https://api.github.com/repos/dono/repo/contents/Docs/Data/colors.json')

    def test_ler_documento_inexistente(self):
        self.session.get.return_value = _resposta(404)
        self.assertIsNone(self.armazem.ler('colors.json'))

    def test_erro_http_vira_persistencia_error(self):
        self.session.get.return_value = _resposta(500)
        with self.assertRaises(PersistenciaError):
            self.armazem.ler('colors.json')
        self.session.get.side_effect = requests.exceptions.ConnectionError('offline')
        with self.assertRaises(PersistenciaError):
            self.armazem.ler('colors.json')

    def test_gravar_envia_sha_atual(self):
        conteudo = base64.b64encode(b'[]').decode()
        self.session.get.return_value = _resposta(200, {'sha': 'sha-antigo', 'content': conteudo})
        self.session.put.return_value = _resposta(200, {'content': {'sha': 'sha-novo'}})

        self.armazem.gravar('colors.json', [{'id': 1, 'name': 'Preto'}], 'Update colors.json')

        payload = self.session.put.call_args[1]['json']
        self.assertEqual(payload['sha'], 'sha-antigo')
        self.assertEqual(json.loads(base64.b64decode(payload['content'])), [{'id': 1, 'name': 'Preto'}])
        self.assertEqual(self.session.put.call_args[1]['headers']['Authorization'], 'Bearer token')

    def test_gravar_com_falha(self):
        self.session.get.return_value = _resposta(404)
        self.session.put.return_value = _resposta(409)
        with self.assertRaises(PersistenciaError):
            self.armazem.gravar('colors.json', [], 'Update colors.json')


# ====================================================================
# STORES DO CARRINHO
# ====================================================================

class SessaoCarrinhoStoreTestCase(SimpleTestCase):

    def test_salvar_e_carregar(self):
        sessao = SessaoFake()
        store = SessaoCarrinhoStore(sessao)
        store.salvar([_item()])

        self.assertTrue(sessao.modified)
        self.assertEqual(store.carregar(), [_item()])

    def test_entradas_invalidas_sao_descartadas(self):
        """
        Cenário: A sessão contém lixo misturado a um item válido; só o válido sobrevive.
        """
        sessao = SessaoFake({SessaoCarrinhoStore.SESSION_KEY: [
            _item().para_dict(),
            {'produto_id': 'x'},
            dict(_item(produto_id=2).para_dict(), quantidade=-1),
            'texto',
        ]})
        itens = SessaoCarrinhoStore(sessao).carregar()
        self.assertEqual([i.produto_id for i in itens], [1])

    def test_formato_desconhecido_vira_carrinho_vazio(self):
        sessao = SessaoFake({SessaoCarrinhoStore.SESSION_KEY: {'1': 3}})
        self.assertEqual(SessaoCarrinhoStore(sessao).carregar(), [])

    def test_falha_ao_gravar(self):
        sessao = Mock()
        sessao.__setitem__ = Mock(side_effect=RuntimeError('cookie grande demais'))
        with self.assertRaises(PersistenciaError):
            SessaoCarrinhoStore(sessao).salvar([_item()])

    def test_memoria(self):
        store = MemoriaCarrinhoStore([_item()])
        store.salvar(store.carregar() + [_item(produto_id=2)])
        self.assertEqual(len(store.carregar()), 2)


# ====================================================================
# GATEWAYS DE WHATSAPP
# ====================================================================

class WhatsAppUtilsTestCase(SimpleTestCase):

    def test_formatar_numero(self):
        self.assertEqual(formatar_numero_whatsapp('(11) 99999-8888'), '5511999998888')
        self.assertEqual(formatar_numero_whatsapp('+55 11 99999-8888'), '5511999998888')
        self.assertEqual(formatar_numero_whatsapp('1133334444'), '1133334444')

    def test_validar_numero(self):
        self.assertTrue(validar_numero_whatsapp('5511999999999'))
        self.assertFalse(validar_numero_whatsapp('123'))
        self.assertFalse(validar_numero_whatsapp('1' * 16))

    def test_gerar_url(self):
        self.assertEqual(
            gerar_url_whatsapp('Olá mundo', '(11) 99999-8888'),
            'https://wa.me/5511999998888?text=Ol%C3%A1%20mundo',
        )


class GatewaysTestCase(SimpleTestCase):

    def test_link_gateway(self):
        gateway = WhatsAppLinkGateway()
        self.assertTrue(gateway.enviar('pedido', '5511999999999'))
        self.assertTrue(gateway.url_para('pedido', '5511999999999').startswith('https://wa.me/5511999999999?text='))
        with self.assertRaises(DespachoFalhouError):
            gateway.enviar('pedido', '123')

    @patch('mobiliar.infrastructure.gateways.requests.post')
    def test_evolution_envia_mensagem(self, mock_post):
        mock_post.return_value = Mock(status_code=201)
        gateway = EvolutionAPIGateway('http://evolution:8080/', 'chave', 'loja')

        self.assertTrue(gateway.enviar('pedido', '(11) 99999-8888'))

        url = mock_post.call_args[0][0]
        self.assertEqual(url, 'http://evolution:8080/loja/message/sendText')
        self.assertEqual(mock_post.call_args[1]['json']['number'], '5511999998888')
        self.assertEqual(mock_post.call_args[1]['json']['textMessage'], {'text': 'pedido'})

    @patch('mobiliar.infrastructure.gateways.requests.post')
    def test_evolution_indisponivel(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout()
        gateway = EvolutionAPIGateway('http://evolution:8080', 'chave', 'loja')
        with self.assertRaises(DespachoFalhouError):
            gateway.enviar('pedido', '5511999999999')

    @patch('mobiliar.infrastructure.gateways.requests.post')
    def test_evolution_sem_configuracao_nao_envia(self, mock_post):
        self.assertFalse(EvolutionAPIGateway('', '', '').enviar('pedido', '5511999999999'))
        mock_post.assert_not_called()

    def test_mock_registra_envios(self):
        gateway = WhatsAppGatewayMock()
        gateway.enviar('pedido', '5511999999999')
        self.assertEqual(gateway.enviados, [('5511999999999', 'pedido')])


# ====================================================================
# COMPOSIÇÃO
# ====================================================================

class InstancesTestCase(SimpleTestCase):

    def tearDown(self):
        instances.redefinir()

    @override_settings(CATALOGO_BACKEND='memoria', DESPACHO_BACKEND='mock')
    def test_instancias_sao_unicas_por_processo(self):
        instances.redefinir()
        self.assertIsInstance(instances.catalogo(), CatalogoMemoria)
        self.assertIs(instances.catalogo(), instances.catalogo())
        self.assertIsInstance(instances.despacho(), WhatsAppGatewayMock)

    @override_settings(CATALOGO_BACKEND='documentos', GITHUB_TOKEN='t', GITHUB_OWNER='o', GITHUB_REPO='r')
    def test_backend_de_documentos(self):
        self.assertIsInstance(instances.criar_catalogo(), CatalogoDocumentos)

    @override_settings(DESPACHO_BACKEND='pombo-correio')
    def test_backend_desconhecido(self):
        with self.assertRaises(DadosInvalidosError):
            instances.criar_despacho()

    def test_carrinho_da_sessao(self):
        sessao = SessaoFake()
        carrinho = instances.carrinho_da_sessao(sessao)
        self.assertTrue(carrinho.vazio)


# ====================================================================
# COMANDO publicar_catalogo
# ====================================================================

class PublicarCatalogoCommandTestCase(SimpleTestCase):
    CLASSE_ARMAZEM = 'mobiliar.infrastructure.management.commands.publicar_catalogo.GitHubArmazemDocumentos'

    def test_publica_apenas_colecoes_ausentes(self):
        armazem = Mock()
        armazem.ler.side_effect = lambda arquivo: [] if arquivo == 'colors.json' else None
        saida = StringIO()

        with patch(self.CLASSE_ARMAZEM, return_value=armazem):
            call_command('publicar_catalogo', stdout=saida)

        arquivos = [chamada.args[0] for chamada in armazem.gravar.call_args_list]
        self.assertNotIn('colors.json', arquivos)
        self.assertIn('products.json', arquivos)
        self.assertIn('Publicado "products.json"', saida.getvalue())

    def test_falha_de_persistencia_vira_command_error(self):
        armazem = Mock()
        armazem.ler.return_value = None
        armazem.gravar.side_effect = PersistenciaError("GitHub indisponível.")

        with patch(self.CLASSE_ARMAZEM, return_value=armazem):
            with self.assertRaises(CommandError):
                call_command('publicar_catalogo', '--sobrescrever', stdout=StringIO())
