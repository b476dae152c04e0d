"""Configurações do projeto clinica.

Todas as opções sensíveis ou dependentes de ambiente vêm de variáveis de
ambiente; os padrões atendem desenvolvimento local com SQLite.
"""

import os
import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-key-for-development-only")
DEBUG = os.environ.get("DJANGO_DEBUG", "True") == "True"
# pytest é importado antes das settings; PYTEST_CURRENT_TEST só existe durante a execução
TESTING = bool(os.environ.get("PYTEST_CURRENT_TEST")) or "pytest" in sys.modules

ALLOWED_HOSTS = [h.strip() for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "rest_framework.authtoken",
    "django_filters",
    "cadastros.apps.CadastrosConfig",
    "agendamentos.apps.AgendamentosConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.locale.LocaleMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "clinica.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "clinica.wsgi.application"
ASGI_APPLICATION = "clinica.asgi.application"

REDIS_URL = os.environ.get("REDIS_URL") or os.environ.get("REDIS_HOST")
if REDIS_URL and not REDIS_URL.startswith("redis://"):
    # Permitir formatos: redis://host:port/0 ou apenas host
    REDIS_URL = f"redis://{REDIS_URL}:{os.environ.get('REDIS_PORT', '6379')}/0"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("DJANGO_DB_NAME", str(BASE_DIR / "db.sqlite3")),
        "OPTIONS": {
            "timeout": 30,
            # transações de escrita serializadas desde o BEGIN (checagem + inserção de agendamento)
            "transaction_mode": "IMMEDIATE",
        },
    },
}

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

LANGUAGE_CODE = "pt-br"
TIME_ZONE = "America/Sao_Paulo"
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

EMAIL_BACKEND = os.environ.get("EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend")
EMAIL_HOST = os.environ.get("EMAIL_HOST", "localhost")
EMAIL_PORT = int(os.environ.get("EMAIL_PORT", "587"))
EMAIL_USE_TLS = os.environ.get("EMAIL_USE_TLS", "True") == "True"
EMAIL_HOST_USER = os.environ.get("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.environ.get("EMAIL_HOST_PASSWORD", "")
DEFAULT_FROM_EMAIL = os.environ.get("DEFAULT_FROM_EMAIL", EMAIL_HOST_USER or "agenda@clinica.local")

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
        "rest_framework.authentication.TokenAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.IsAuthenticated"],
    "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
    "PAGE_SIZE": int(os.environ.get("API_PAGE_SIZE", "50")),
    "DEFAULT_FILTER_BACKENDS": ["django_filters.rest_framework.DjangoFilterBackend"],
}

# =============================
# AGENDA
# =============================
AGENDAMENTOS_DURACAO_PADRAO_MINUTOS = int(os.environ.get("AGENDAMENTOS_DURACAO_PADRAO_MINUTOS", "30"))
AGENDAMENTOS_GRANULARIDADE_MINUTOS = int(os.environ.get("AGENDAMENTOS_GRANULARIDADE_MINUTOS", "30"))
# False: horário fora da disponibilidade é aceito e registrado em metadata["avisos"]
AGENDAMENTOS_BLOQUEAR_FORA_DISPONIBILIDADE = (
    os.environ.get("AGENDAMENTOS_BLOQUEAR_FORA_DISPONIBILIDADE", "True") == "True"
)
AGENDAMENTOS_VALIDAR_HORARIO_CLINICA = os.environ.get("AGENDAMENTOS_VALIDAR_HORARIO_CLINICA", "True") == "True"
# (abertura, fechamento, último início); domingo fechado
AGENDAMENTOS_HORARIO_CLINICA = {
    "semana": ("08:00", "21:00", "20:30"),
    "sabado": ("08:00", "15:00", "14:30"),
}
AGENDAMENTOS_CALENDARIO_INICIO = os.environ.get("AGENDAMENTOS_CALENDARIO_INICIO", "08:00")
AGENDAMENTOS_CALENDARIO_FIM = os.environ.get("AGENDAMENTOS_CALENDARIO_FIM", "20:00")
AGENDAMENTOS_CALENDARIO_LIMITE_DIA = int(os.environ.get("AGENDAMENTOS_CALENDARIO_LIMITE_DIA", "3"))
AGENDAMENTOS_NOTIFICACOES_ENABLED = os.environ.get("AGENDAMENTOS_NOTIFICACOES_ENABLED", "True") == "True"
AGENDAMENTOS_NOTIFICACAO_CANAIS = [
    c.strip() for c in os.environ.get("AGENDAMENTOS_NOTIFICACAO_CANAIS", "email").split(",") if c.strip()
]

# =============================
# LOGGING
# =============================
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
AGENDAMENTOS_LOG_LEVEL = os.environ.get("AGENDAMENTOS_LOG_LEVEL", LOG_LEVEL)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
        "json": {
            "()": "django.utils.log.ServerFormatter",
            "format": '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json" if os.environ.get("STRUCTURED_LOG_JSON", "False") == "True" else "verbose",
        },
    },
    "loggers": {
        "": {"handlers": ["console"], "level": LOG_LEVEL},
        "django.request": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        "agendamentos": {"handlers": ["console"], "level": AGENDAMENTOS_LOG_LEVEL, "propagate": False},
    },
}

"""
=============================================================================
CELERY / TAREFAS ASSÍNCRONAS
=============================================================================
Usa Redis como broker/result backend quando REDIS_URL está definido. Sem
Redis cai para um broker em memória (apenas desenvolvimento).
"""

if REDIS_URL:
    CELERY_BROKER_URL = REDIS_URL
    CELERY_RESULT_BACKEND = REDIS_URL
else:
    CELERY_BROKER_URL = "memory://"
    CELERY_RESULT_BACKEND = "cache+memory://"

CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_ENABLE_UTC = True
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_TIME_LIMIT = 60 * 5  # 5 minutos hard limit
CELERY_TASK_SOFT_TIME_LIMIT = 60 * 4  # 4 minutos soft
CELERY_TASK_ACKS_LATE = True
CELERY_WORKER_PREFETCH_MULTIPLIER = 1
CELERY_TASK_DEFAULT_QUEUE = "default"
CELERY_TASK_ROUTES = {
    "agendamentos.tasks.enviar_notificacao_agendamento": {"queue": "notificacoes"},
}

# =============================
# OTIMIZAÇÕES EM AMBIENTE DE TESTE (pytest)
if TESTING:
    PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    AUTH_PASSWORD_VALIDATORS = []
    EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    CELERY_TASK_ALWAYS_EAGER = True
    CELERY_TASK_EAGER_PROPAGATES = True

SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

if not DEBUG and SECRET_KEY.startswith("django-insecure-"):
    import warnings

    warnings.warn(
        "ATENÇÃO: Usando SECRET_KEY insegura em produção! Configure a variável de ambiente DJANGO_SECRET_KEY.",
        RuntimeWarning,
        stacklevel=2,
    )
