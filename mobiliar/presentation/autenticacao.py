"""
Autenticação da API pela sessão do Django.

O login guarda apenas o ID do usuário na sessão; a cada requisição o usuário é
buscado no catálogo, de modo que um usuário desativado perde o acesso imediatamente.
"""
from django.conf import settings
from drf_spectacular.extensions import OpenApiAuthenticationExtension
from rest_framework.authentication import SessionAuthentication

from mobiliar.core.entities import Usuario
from mobiliar.infrastructure import instances

SESSION_KEY = 'usuario_id'


class UsuarioSessao:
    """Adaptador do Usuario (entidade) para o `request.user` do DRF."""
    is_authenticated = True
    is_anonymous = False

    def __init__(self, usuario: Usuario):
        self.usuario = usuario

    @property
    def segmento(self):
        return self.usuario.segmento

    def __str__(self):
        return self.usuario.username


class SessaoUsuarioAuthentication(SessionAuthentication):
    """Lê o usuário da sessão. Requisições autenticadas continuam sujeitas ao CSRF."""

    def authenticate(self, request):
        usuario_id = request._request.session.get(SESSION_KEY)
        if usuario_id is None:
            return None

        usuario = instances.catalogo().buscar_usuario(usuario_id)
        if usuario is None or not usuario.ativo:
            return None

        self.enforce_csrf(request)
        return (UsuarioSessao(usuario), None)

    def authenticate_header(self, request):
        # faz o DRF responder 401 (e não 403) quando não há login
        return 'Session'


def iniciar_sessao(request, usuario: Usuario):
    request.session.cycle_key()
    request.session[SESSION_KEY] = usuario.id


def encerrar_sessao(request):
    request.session.flush()


class SessaoUsuarioScheme(OpenApiAuthenticationExtension):
    target_class = 'mobiliar.presentation.autenticacao.SessaoUsuarioAuthentication'
    name = 'sessao'

    def get_security_definition(self, auto_schema):
        return {'type': 'apiKey', 'in': 'cookie', 'name': settings.SESSION_COOKIE_NAME}
