"""
Configuração do pytest: prepara o Django antes da coleta dos testes.
Os testes usam SimpleTestCase/TestCase e não acessam o banco.
"""
import os

import django
from django.test.utils import setup_test_environment

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'mobiliar.settings')
django.setup()
setup_test_environment()
