from rest_framework.permissions import BasePermission, SAFE_METHODS

from mobiliar.core.entities import Segmento


def _segmento(request):
    user = request.user
    if not user or not user.is_authenticated:
        return None
    return getattr(user, 'segmento', None)


class EhAdministrador(BasePermission):
    message = 'Acesso restrito ao administrador.'

    def has_permission(self, request, view):
        return _segmento(request) is Segmento.ADMIN


class PodeComprar(BasePermission):
    message = 'Apenas clientes loja ou restaurante podem usar o carrinho.'

    def has_permission(self, request, view):
        segmento = _segmento(request)
        return segmento is not None and segmento.pode_comprar


class LeituraAutenticadaEscritaAdmin(BasePermission):
    """Qualquer usuário logado lê o catálogo; só o administrador altera."""
    message = 'Acesso restrito ao administrador.'

    def has_permission(self, request, view):
        segmento = _segmento(request)
        if segmento is None:
            return False
        if request.method in SAFE_METHODS:
            return True
        return segmento is Segmento.ADMIN
