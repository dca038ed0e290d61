from django.apps import AppConfig


class InfrastructureConfig(AppConfig):
    name = 'mobiliar.infrastructure'
    label = 'infrastructure' # Define um label para evitar conflitos de nomes
    verbose_name = 'Repositórios, Stores e Gateways'
