"""Settings used by the test suite."""

from .base import *  # noqa: F401,F403

DEBUG = False

# File-backed so threaded tests share one database. IMMEDIATE transactions
# serialise concurrent writers the way row locks do on PostgreSQL.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'test_yacht_club.sqlite3',
        'OPTIONS': {'transaction_mode': 'IMMEDIATE', 'timeout': 20},
        'TEST': {'NAME': BASE_DIR / 'test_yacht_club.sqlite3'},
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

STRIPE_SECRET_KEY = 'sk_test_dummy'
STRIPE_WEBHOOK_SECRET = 'whsec_test_secret'

CLUB_TIME_ZONE = 'America/New_York'
