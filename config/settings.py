"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Django settings for the ERP Console project. Uses
             django-environ to load configuration from .env file.
             All business data lives in in-memory mock repositories,
             so no database is configured.
-------------------------------------------------------------------------
"""
import environ
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Initialize django-environ
env = environ.Env(
    DEBUG=(bool, False),
)

# Read .env file from config directory
environ.Env.read_env(BASE_DIR / 'config' / '.env')


# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env('SECRET_KEY', default='django-insecure-erp-console-development-key')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env('DEBUG')

ALLOWED_HOSTS = env.list('ALLOWED_HOSTS', default=['localhost', '127.0.0.1', 'testserver'])

CSRF_TRUSTED_ORIGINS = env.list('CSRF_TRUSTED_ORIGINS', default=['http://127.0.0.1', 'http://localhost'])


# Application definition

INSTALLED_APPS = [
    # Django Built-in Apps
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # ERP Console Apps
    'apps.core',
    'apps.clients',
    'apps.amcs',
    'apps.tenders',
    'apps.projects',
    'apps.tasks',
    'apps.payroll',
    'apps.payments',
    'apps.documents',
    'apps.notifications',
    'apps.administration',
    'apps.employees',
    'apps.attendance',
    'apps.reports',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.messages.context_processors.messages',
                'apps.core.context_processors.theme',
                'apps.core.context_processors.navigation',
                'apps.core.context_processors.notifications',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'


# Database
# The console runs on in-memory mock data; nothing is persisted.
DATABASES = {}

# Flash messages are stored in a signed cookie (no session backend).
MESSAGE_STORAGE = 'django.contrib.messages.storage.cookie.CookieStorage'


# Internationalization
# https://docs.djangoproject.com/en/5.0/topics/i18n/

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'Asia/Kolkata'

USE_I18N = True

USE_TZ = True


# Static files (CSS, JavaScript, Images)
STATIC_URL = env('STATIC_URL', default='static/')
STATICFILES_DIRS = [BASE_DIR / 'static']
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Console Configuration
# -------------------------------------------------------------------------
COMPANY_NAME = env('COMPANY_NAME', default='Electrocom Pvt. Ltd.')
CONSOLE_USER_NAME = env('CONSOLE_USER_NAME', default='Admin')

# Theme preference cookie (mirrors browser-local storage of the theme)
THEME_COOKIE_NAME = 'theme'
THEME_COOKIE_MAX_AGE = 365 * 24 * 60 * 60

# AMCs ending within this many days raise the expiring-soon banner
EXPIRY_WARNING_DAYS = env.int('EXPIRY_WARNING_DAYS', default=30)

# Document template uploads
DOCUMENT_MAX_UPLOAD_MB = env.int('DOCUMENT_MAX_UPLOAD_MB', default=10)
DOCUMENT_ALLOWED_EXTENSIONS = ['.pdf', '.docx']

# File Upload Limits (10MB)
FILE_UPLOAD_MAX_MEMORY_SIZE = DOCUMENT_MAX_UPLOAD_MB * 1024 * 1024


# Email Configuration
# Templates are rendered to the console unless an SMTP backend is configured
EMAIL_BACKEND = env('EMAIL_BACKEND', default='django.core.mail.backends.console.EmailBackend')
EMAIL_HOST = env('EMAIL_HOST', default='smtp.gmail.com')
EMAIL_PORT = env.int('EMAIL_PORT', default=587)
EMAIL_USE_TLS = env.bool('EMAIL_USE_TLS', default=True)
EMAIL_HOST_USER = env('EMAIL_HOST_USER', default='')
EMAIL_HOST_PASSWORD = env('EMAIL_HOST_PASSWORD', default='')
DEFAULT_FROM_EMAIL = env('DEFAULT_FROM_EMAIL', default='Electrocom <noreply@electrocom.in>')
COMPANY_EMAIL = env('COMPANY_EMAIL', default='info@electrocom.in')
COMPANY_PHONE = env('COMPANY_PHONE', default='+91 22 4000 1234')


# Security Settings
# -------------------------------------------------------------------------
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'

if not DEBUG:
    CSRF_COOKIE_SECURE = env.bool('CSRF_COOKIE_SECURE', default=False)
    SECURE_SSL_REDIRECT = env.bool('SECURE_SSL_REDIRECT', default=False)
else:
    CSRF_COOKIE_SECURE = False


# Logging Configuration
LOG_DIR = BASE_DIR / 'logs'
LOG_DIR.mkdir(exist_ok=True)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'level': 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
        'file': {
            'level': 'INFO',
            'class': 'logging.FileHandler',
            'filename': LOG_DIR / 'console.log',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'apps': {
            'handlers': ['console', 'file'],
            'level': env('LOG_LEVEL', default='INFO'),
            'propagate': True,
        },
    },
}
