# mobiliar/core/apps.py

from django.apps import AppConfig

class CoreConfig(AppConfig):
    # O nome completo do path da aplicação
    name = 'mobiliar.core'
    # Define o label curto para referência (ex: no shell)
    label = 'core'
    verbose_name = 'Camada de Entidades e Lógica (Core)'
