# mobiliar/presentation/testes.py

from datetime import datetime, timezone as dt_timezone
from unittest.mock import patch

from django.test import SimpleTestCase, override_settings
from rest_framework.test import APIClient

from mobiliar.infrastructure import instances
from mobiliar.infrastructure.gateways import WhatsAppGatewayMock

SENHAS = {'admin': 'admin123', 'loja': 'loja123', 'restaurante': 'restaurante123'}


@override_settings(CATALOGO_BACKEND='memoria', DESPACHO_BACKEND='mock', WHATSAPP_NUMERO_PEDIDOS='11987654321')
class ApiTestCase(SimpleTestCase):
    """Base: catálogo em memória recém-semeado a cada teste e um APIClient com sessão."""
    client_class = APIClient

    def setUp(self):
        instances.redefinir()
        self.addCleanup(instances.redefinir)

    def logar(self, username):
        response = self.client.post(
            '/api/auth/login/', {'username': username, 'password': SENHAS[username]}, format='json'
        )
        self.assertEqual(response.status_code, 200, response.content)
        return response


# ====================================================================
# AUTENTICAÇÃO
# ====================================================================

class AutenticacaoApiTestCase(ApiTestCase):

    def test_login_e_me(self):
        response = self.logar('loja')
        self.assertEqual(response.data['username'], 'loja')
        self.assertEqual(response.data['segmento'], 'loja')
        self.assertNotIn('password', response.data)

        me = self.client.get('/api/auth/me/')
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.data['segmento_nome'], 'Loja')

    def test_login_com_senha_errada(self):
        response = self.client.post('/api/auth/login/', {'username': 'loja', 'password': 'x'}, format='json')
        self.assertEqual(response.status_code, 401)
        self.assertIn('message', response.data)

    def test_login_rejeita_campo_desconhecido(self):
        response = self.client.post(
            '/api/auth/login/', {'username': 'loja', 'password': 'loja123', 'lembrar': True}, format='json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn('lembrar', response.data)

    def test_me_sem_login(self):
        self.assertEqual(self.client.get('/api/auth/me/').status_code, 401)

    def test_logout_encerra_a_sessao(self):
        self.logar('restaurante')
        self.assertEqual(self.client.post('/api/auth/logout/').status_code, 204)
        self.assertEqual(self.client.get('/api/auth/me/').status_code, 401)


# ====================================================================
# CATÁLOGO
# ====================================================================

class CatalogoApiTestCase(ApiTestCase):

    def test_leitura_exige_login(self):
        self.assertEqual(self.client.get('/api/produtos/').status_code, 401)

    def test_listagens(self):
        self.logar('loja')
        self.assertEqual(len(self.client.get('/api/categorias/').data), 3)
        self.assertEqual(len(self.client.get('/api/cores/').data), 4)
        self.assertEqual([p['titulo'] for p in self.client.get('/api/promocoes/').data], ['Promoção de Lançamento'])
        self.assertEqual(len(self.client.get('/api/produtos/', {'categoria': 1}).data), 2)
        self.assertEqual(self.client.get('/api/produtos/', {'categoria': 2}).data, [])
        self.assertEqual(len(self.client.get('/api/tabelas-preco/', {'segmento': 'loja'}).data), 5)

    def test_filtros_invalidos(self):
        self.logar('loja')
        self.assertEqual(self.client.get('/api/produtos/', {'categoria': 'abc'}).status_code, 400)
        self.assertEqual(self.client.get('/api/avisos/', {'segmento': 'atacado'}).status_code, 400)

    def test_detalhe_de_produto(self):
        self.logar('loja')
        response = self.client.get('/api/produtos/1/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['preco_base'], '45.00')
        self.assertEqual(response.data['cores_disponiveis'], [1, 2])
        self.assertEqual(self.client.get('/api/produtos/99/').status_code, 404)

    def test_escrita_restrita_ao_admin(self):
        self.logar('loja')
        response = self.client.post('/api/categorias/', {'nome': 'Poltronas'}, format='json')
        self.assertEqual(response.status_code, 403)

    def test_admin_cria_categoria_e_cor(self):
        self.logar('admin')
        categoria = self.client.post('/api/categorias/', {'nome': 'Poltronas'}, format='json')
        self.assertEqual(categoria.status_code, 201)
        self.assertEqual(categoria.data['id'], 7)
        self.assertTrue(categoria.data['ativo'])

        cor = self.client.post('/api/cores/', {'nome': 'Azul', 'codigo_hex': '#00f'}, format='json')
        self.assertEqual(cor.status_code, 201)
        self.assertEqual(cor.data['codigo_hex'], '#0000FF')

        invalida = self.client.post('/api/cores/', {'nome': 'Azul', 'codigo_hex': 'azul'}, format='json')
        self.assertEqual(invalida.status_code, 400)

    def test_admin_cria_produto_com_categoria_inexistente(self):
        self.logar('admin')
        response = self.client.post(
            '/api/produtos/',
            {'nome': 'Mesa 4 lugares', 'categoria_id': 99, 'preco_base': '300.00'},
            format='json',
        )
        self.assertEqual(response.status_code, 404)

    def test_admin_cria_tabela_por_percentual(self):
        self.logar('admin')
        response = self.client.post(
            '/api/tabelas-preco/',
            {'nome': 'Cartão 3x', 'percentual': '10', 'segmento': 'loja'},
            format='json',
        )
        self.assertEqual(response.status_code, 201, response.data)
        self.assertEqual(response.data['multiplicador'], '1.1000')
        self.assertEqual(response.data['ajuste'], '+10.0%')
        self.assertNotIn('percentual', response.data)

    def test_tabela_nao_aceita_multiplicador_e_percentual(self):
        self.logar('admin')
        response = self.client.post(
            '/api/tabelas-preco/',
            {'nome': 'X', 'percentual': '10', 'multiplicador': '1.1', 'segmento': 'loja'},
            format='json',
        )
        self.assertEqual(response.status_code, 400)

    def test_tabela_nao_aceita_segmento_admin(self):
        self.logar('admin')
        response = self.client.post(
            '/api/tabelas-preco/', {'nome': 'X', 'multiplicador': '1.1', 'segmento': 'admin'}, format='json'
        )
        self.assertEqual(response.status_code, 400)

    def test_admin_atualiza_parcialmente(self):
        self.logar('admin')
        response = self.client.put('/api/produtos/1/', {'preco_base': '50.00'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['preco_base'], '50.00')
        self.assertEqual(response.data['nome'], 'Banqueta 50 cm')

    def test_produto_removido_some_para_clientes(self):
        self.logar('admin')
        self.assertEqual(self.client.delete('/api/produtos/1/').status_code, 204)
        self.assertFalse(self.client.get('/api/produtos/1/').data['ativo'])

        self.client.post('/api/auth/logout/')
        self.logar('loja')
        self.assertEqual(self.client.get('/api/produtos/1/').status_code, 404)
        self.assertEqual([p['id'] for p in self.client.get('/api/produtos/').data], [2])

    def test_remover_inexistente(self):
        self.logar('admin')
        self.assertEqual(self.client.delete('/api/avisos/99/').status_code, 404)

    def test_campos_desconhecidos_sao_rejeitados(self):
        self.logar('admin')
        response = self.client.post('/api/promocoes/', {'titulo': 'A', 'descricao': 'B', 'desconto': 5}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('desconto', response.data)

    def test_avisos_por_segmento(self):
        self.logar('admin')
        self.client.post('/api/avisos/', {'titulo': 'Frete', 'mensagem': 'Só loja', 'segmento': 'loja'}, format='json')

        loja = self.client.get('/api/avisos/', {'segmento': 'loja'}).data
        restaurante = self.client.get('/api/avisos/', {'segmento': 'restaurante'}).data
        self.assertEqual(len(loja), 2)
        self.assertEqual(len(restaurante), 1)


class VitrineApiTestCase(ApiTestCase):

    def test_vitrine_loja_resolve_preco_por_tabela(self):
        self.logar('loja')
        vitrine = self.client.get('/api/vitrine/').data

        self.assertEqual(vitrine['segmento'], 'loja')
        self.assertEqual(len(vitrine['tabelas_preco']), 5)
        precos = {p['tabela_id']: p['preco'] for p in vitrine['produtos'][0]['precos']}
        self.assertEqual(precos[1], '45.00')
        self.assertEqual(precos[2], '49.50')

    def test_vitrine_restaurante_usa_preco_base(self):
        self.logar('restaurante')
        vitrine = self.client.get('/api/vitrine/').data

        self.assertEqual([t['id'] for t in vitrine['tabelas_preco']], [6])
        self.assertEqual(vitrine['produtos'][1]['precos'], [{'tabela_id': None, 'tabela_nome': None, 'preco': '55.00'}])

    def test_vitrine_admin_sem_precos(self):
        self.logar('admin')
        vitrine = self.client.get('/api/vitrine/').data
        self.assertEqual(vitrine['tabelas_preco'], [])
        self.assertEqual(vitrine['produtos'][0]['precos'], [])


# ====================================================================
# CARRINHO E CHECKOUT
# ====================================================================

class CarrinhoApiTestCase(ApiTestCase):

    def adicionar(self, **dados):
        return self.client.post('/api/carrinho/itens/', dados, format='json')

    def test_admin_nao_usa_carrinho(self):
        self.logar('admin')
        self.assertEqual(self.client.get('/api/carrinho/').status_code, 403)

    def test_carrinho_exige_login(self):
        self.assertEqual(self.client.get('/api/carrinho/').status_code, 401)

    def test_adicionar_e_mesclar(self):
        """
        Cenário: A mesma combinação produto/cor adicionada duas vezes vira uma única linha.
        """
        self.logar('loja')
        primeira = self.adicionar(produto_id=1, cor_id=2, tabela_id=2, quantidade=2)
        self.assertEqual(primeira.status_code, 201)
        self.assertEqual(primeira.data['total'], '99.00')

        segunda = self.adicionar(produto_id=1, cor_id=2, tabela_id=2, quantidade=3)
        self.assertEqual(len(segunda.data['itens']), 1)
        self.assertEqual(segunda.data['itens'][0]['quantidade'], 5)
        self.assertEqual(segunda.data['total'], '247.50')
        self.assertEqual(segunda.data['resumo'], '5 itens - R$ 247,50')

        # o carrinho sobrevive entre requisições pela sessão
        self.assertEqual(self.client.get('/api/carrinho/').data['quantidade_itens'], 5)

    def test_loja_precisa_de_tabela(self):
        self.logar('loja')
        self.assertEqual(self.adicionar(produto_id=1, cor_id=2).status_code, 400)

    def test_restaurante_ignora_tabela_e_exige_cor(self):
        self.logar('restaurante')
        self.assertEqual(self.adicionar(produto_id=1).status_code, 400)
        self.assertEqual(self.adicionar(produto_id=1, cor_id=3).status_code, 400)

        response = self.adicionar(produto_id=1, cor_id=1, tabela_id=2)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['itens'][0]['preco_unitario'], '45.00')
        self.assertEqual(response.data['itens'][0]['cor_nome'], 'Marrom Natural')

    def test_produto_inexistente(self):
        self.logar('restaurante')
        self.assertEqual(self.adicionar(produto_id=99, cor_id=1).status_code, 404)

    def test_atualizar_e_remover_itens(self):
        self.logar('restaurante')
        self.adicionar(produto_id=1, cor_id=1)
        self.adicionar(produto_id=2, cor_id=4)

        response = self.client.patch('/api/carrinho/itens/1/', {'quantidade': 3}, format='json')
        self.assertEqual(response.data['itens'][1]['quantidade'], 3)
        self.assertEqual(response.data['total'], '210.00')

        response = self.client.patch('/api/carrinho/itens/0/', {'quantidade': 0}, format='json')
        self.assertEqual([i['produto_id'] for i in response.data['itens']], [2])

        self.assertEqual(self.client.delete('/api/carrinho/itens/5/').status_code, 404)
        response = self.client.delete('/api/carrinho/itens/0/')
        self.assertEqual(response.data['itens'], [])
        self.assertEqual(response.data['resumo'], 'Carrinho vazio')

    def test_limpar_carrinho(self):
        self.logar('restaurante')
        self.adicionar(produto_id=1, cor_id=1)
        self.assertEqual(self.client.delete('/api/carrinho/').data['total'], '0.00')
        self.assertEqual(self.client.delete('/api/carrinho/').status_code, 200)


class FinalizarPedidoApiTestCase(ApiTestCase):

    def test_carrinho_vazio(self):
        self.logar('loja')
        self.assertEqual(self.client.post('/api/carrinho/finalizar/').status_code, 400)

    def test_pedido_enviado_limpa_o_carrinho(self):
        self.logar('restaurante')
        self.client.post('/api/carrinho/itens/', {'produto_id': 2, 'cor_id': 4, 'quantidade': 2}, format='json')

        response = self.client.post('/api/carrinho/finalizar/')

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data['enviado'])
        self.assertIn('*1. Banqueta 70 cm*', response.data['mensagem'])
        self.assertIn('TOTAL DO PEDIDO: R$ 110,00', response.data['mensagem'])
        self.assertTrue(response.data['url_whatsapp'].startswith('https://wa.me/5511987654321?text='))
        self.assertEqual(self.client.get('/api/carrinho/').data['itens'], [])

        despachados = instances.despacho().enviados
        self.assertEqual(len(despachados), 1)
        self.assertEqual(despachados[0][0], '11987654321')

    @override_settings(TIME_ZONE='America/Sao_Paulo')
    def test_data_do_pedido_no_fuso_da_loja(self):
        self.logar('restaurante')
        self.client.post('/api/carrinho/itens/', {'produto_id': 1, 'cor_id': 1}, format='json')

        instante = datetime(2025, 3, 10, 15, 30, 0, tzinfo=dt_timezone.utc)
        with patch('django.utils.timezone.now', return_value=instante):
            response = self.client.post('/api/carrinho/finalizar/')

        self.assertIn('📅 *Data:* 10/03/2025, 12:30:00', response.data['mensagem'])

    def test_falha_no_despacho_mantem_o_carrinho(self):
        self.logar('loja')
        self.client.post('/api/carrinho/itens/', {'produto_id': 1, 'cor_id': 1, 'tabela_id': 1}, format='json')

        with patch.object(instances, 'despacho', return_value=WhatsAppGatewayMock(resultado=False)):
            response = self.client.post('/api/carrinho/finalizar/')

        self.assertEqual(response.status_code, 502)
        self.assertFalse(response.data['enviado'])
        self.assertEqual(len(self.client.get('/api/carrinho/').data['itens']), 1)


class DocumentacaoApiTestCase(ApiTestCase):

    def test_schema_openapi(self):
        response = self.client.get('/api/schema/')
        self.assertEqual(response.status_code, 200)
