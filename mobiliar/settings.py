"""
Configurações para o projeto Mobiliar.
"""

import os
from decouple import config, Csv
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# ====================================================================
# CONFIGURAÇÕES BÁSICAS
# ====================================================================

# A SECRET_KEY deve ser lida de uma variável de ambiente por segurança.
SECRET_KEY = config('SECRET_KEY', default='django-insecure-default-key-for-development')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,testserver', cast=Csv())


# ====================================================================
# APLICAÇÕES INSTALADAS
# ====================================================================

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.staticfiles',

    # Aplicações de Terceiros
    'rest_framework',
    'drf_spectacular',

    # Nossas Aplicações
    'mobiliar.core.apps.CoreConfig',  # Entidades e Lógica Pura
    'mobiliar.infrastructure.apps.InfrastructureConfig',  # Repositórios e Gateways
    'mobiliar.presentation.apps.PresentationConfig',  # API REST
]


# ====================================================================
# MIDDLEWARE
# ====================================================================

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'mobiliar.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
            ],
        },
    },
]

WSGI_APPLICATION = 'mobiliar.wsgi.application'


# ====================================================================
# BANCO DE DADOS E SESSÃO
# ====================================================================

# Nenhum model é persistido; o Django exige apenas a configuração.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

# O carrinho e o login vivem na sessão assinada (cookie), sem banco.
SESSION_ENGINE = config('SESSION_ENGINE', default='django.contrib.sessions.backends.signed_cookies')
SESSION_COOKIE_NAME = 'mobiliar_sessao'
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_AGE = config('SESSION_COOKIE_AGE', default=60 * 60 * 24 * 7, cast=int)


# ====================================================================
# INTERNACIONALIZAÇÃO
# ====================================================================

LANGUAGE_CODE = 'pt-br'

TIME_ZONE = 'America/Sao_Paulo'

USE_I18N = True

USE_TZ = True


# ====================================================================
# ARQUIVOS ESTÁTICOS
# ====================================================================

STATIC_URL = '/static/'
STATIC_ROOT = os.path.join(BASE_DIR, 'staticfiles')

# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# ====================================================================
# CONFIGURAÇÕES DO DJANGO REST FRAMEWORK (DRF) E DOCS (SPECTACULAR)
# ====================================================================

SPECTACULAR_SETTINGS = {
    'TITLE': 'API do Mobiliar',
    'DESCRIPTION': 'Catálogo de móveis por segmento (loja e restaurante) com pedido via WhatsApp.',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}

REST_FRAMEWORK = {
    # Sessão do Django com o usuário do catálogo (não há model de usuário).
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'mobiliar.presentation.autenticacao.SessaoUsuarioAuthentication',
    ),
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.IsAuthenticated',
    ),
    'UNAUTHENTICATED_USER': None,
    'EXCEPTION_HANDLER': 'mobiliar.presentation.excecoes.tratar_excecao',
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}


# ====================================================================
# CATÁLOGO (memória ou documentos JSON no GitHub)
# ====================================================================

CATALOGO_BACKEND = config('CATALOGO_BACKEND', default='memoria')

GITHUB_TOKEN = config('GITHUB_TOKEN', default='')
GITHUB_OWNER = config('GITHUB_OWNER', default='')
GITHUB_REPO = config('GITHUB_REPO', default='')
GITHUB_BRANCH = config('GITHUB_BRANCH', default='main')
GITHUB_DATA_PATH = config('GITHUB_DATA_PATH', default='Docs/Data')


# ====================================================================
# DESPACHO DE PEDIDOS (WhatsApp)
# ====================================================================

# link: gera o wa.me para o cliente abrir; evolution: envia pela Evolution-API; mock: só registra em log
DESPACHO_BACKEND = config('DESPACHO_BACKEND', default='link')
WHATSAPP_NUMERO_PEDIDOS = config('WHATSAPP_NUMERO_PEDIDOS', default='5511999999999')

# Evolution-API (WhatsApp Gateway)
EVOLUTION_API_URL = config('EVOLUTION_API_URL', default='http://evolution_api:8080')
EVOLUTION_API_KEY = config('EVOLUTION_API_KEY', default='')
EVOLUTION_INSTANCE_NAME = config('EVOLUTION_INSTANCE_NAME', default='')


# ====================================================================
# LOGGING
# ====================================================================

LOG_LEVEL = config('LOG_LEVEL', default='INFO')
LOG_FILE = config('LOG_FILE', default=str(BASE_DIR / 'logs' / 'mobiliar.log'))
os.makedirs(os.path.dirname(LOG_FILE), exist_ok=True)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'level': LOG_LEVEL,
            'class': 'logging.StreamHandler',
            'formatter': 'simples',
        },
        'file': {
            'level': 'WARNING',
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': LOG_FILE,
            'maxBytes': 1024 * 1024 * 5,  # 5 MB
            'backupCount': 5,
            'formatter': 'verbose',
        },
    },
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simples': {
            'format': '{levelname} {name}: {message}',
            'style': '{',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['file'],
            'level': 'WARNING',
            'propagate': True,
        },
        'mobiliar': {
            'handlers': ['console', 'file'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}
