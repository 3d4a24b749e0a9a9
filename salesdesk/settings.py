import os

from decouple import Choices, config

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
BASE_MODULE = 'salesdesk'

COMPANY_NAME = config('COMPANY_NAME', default='SalesDesk')

# API Documentation
API_TITLE = config('API_TITLE', default=f'{COMPANY_NAME} API')
API_DESCRIPTION = config('API_DESCRIPTION', default='Leaderboard and analytics for the CRM admin tool')
API_VERSION = '0.1.0'

HOST = 'http://127.0.0.1'
SECRET_KEY = config('SECRET_KEY', default='secret')
JWT_ALGORITHM = config('JWT_ALGORITHM', default='HS256')
DEBUG = config('DEBUG', default=False, cast=bool)
ENVIRONMENT = config('ENVIRONMENT', default='local', cast=Choices(['local', 'testing', 'staging', 'production']))
IS_LOCAL = ENVIRONMENT == 'local'
IS_PRODUCTION = ENVIRONMENT == 'production'
IS_STAGING = ENVIRONMENT == 'staging'
IS_DEPLOYED_ENV = IS_PRODUCTION or IS_STAGING

BACKEND_CORS_ORIGINS = config(
    'BACKEND_CORS_ORIGINS', default='http://localhost:3000', cast=lambda v: [o for o in v.split(',') if o]
)
CORS_ALLOWED_METHODS = config('CORS_ALLOWED_METHODS', default='GET,OPTIONS', cast=lambda v: list(v.split(',')))
CORS_ALLOWED_HEADERS = config(
    'CORS_ALLOWED_HEADERS',
    default='Accept,Accept-Language,Content-Type,Content-Language,Authorization,X-Requested-With,X-Request-ID',
    cast=lambda v: list(v.split(',')),
)

# Security Headers Configuration
ENABLE_SECURITY_HEADERS = config('ENABLE_SECURITY_HEADERS', default=True, cast=bool)
# Only enable HSTS in deployed environments to avoid development issues
ENABLE_HSTS = config('ENABLE_HSTS', default=IS_DEPLOYED_ENV, cast=bool)

API_PREFIX = ''

ATOMIC_REQUESTS = config('ATOMIC_REQUESTS', default=True, cast=bool)
LOG_LEVEL = config('LOG_LEVEL', 'INFO')

# Support both DATABASE_URL and individual vars (local)
DATABASE_URL = config('DATABASE_URL', default=None)
DATABASE_URL_RO = config('DATABASE_URL_RO', default=DATABASE_URL)
DB_NAME = config('DB_NAME', default='salesdesk')
DB_USER = config('DB_USER', default='salesdesk')
DB_PASSWORD = config('DB_PASSWORD', default='dev1')
DB_HOST = config('DB_HOST', default='127.0.0.1')
DB_PORT = config('DB_PORT', default=5432, cast=int)
DB_HOST_RO = config('DB_HOST_RO', default=DB_HOST)
DB_LOG_STATEMENTS = config('DB_LOG_STATEMENTS', default=False, cast=bool)
# Upper bound for any single statement, cancels runaway aggregation queries
DB_STATEMENT_TIMEOUT_MS = config('DB_STATEMENT_TIMEOUT_MS', default=30000, cast=int)

# Analytics
ANALYTICS_MAX_RANGE_DAYS = config('ANALYTICS_MAX_RANGE_DAYS', default=366, cast=int)

# Packages whose models.py defines tables
BOUNDARIES = [
    'core.user',
    'app.accounts',
    'app.demos',
]

# Sentry
SENTRY_DSN = config('SENTRY_DSN', default=None)
SENTRY_DEFAULT_SAMPLE_RATE = config('SENTRY_DEFAULT_SAMPLE_RATE', default=1.0, cast=float)

# Mocks
USE_MOCK_SENTRY_CLIENT = config('USE_MOCK_SENTRY_CLIENT', default=False, cast=bool)
