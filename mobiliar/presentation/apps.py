from django.apps import AppConfig


class PresentationConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'mobiliar.presentation'
    label = 'presentation'

    def ready(self):
        # registra a extensão de autenticação no drf-spectacular
        from . import autenticacao  # noqa: F401
