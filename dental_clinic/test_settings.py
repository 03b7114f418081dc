"""
Settings used by the test suite: in-memory SQLite, fast hashing, quiet logs.
"""
from .settings import *  # noqa: F401,F403

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {'class': 'logging.NullHandler'},
    },
    'root': {'handlers': ['null']},
    'loggers': {
        'business': {'handlers': ['null'], 'propagate': False},
        'user_creation_logger': {'handlers': ['null'], 'propagate': False},
    },
}
