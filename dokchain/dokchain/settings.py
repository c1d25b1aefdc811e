from pathlib import Path
import os


# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

from dotenv import load_dotenv
load_dotenv(BASE_DIR / '.env')

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY')
if not SECRET_KEY:
    # Only for local development. Set DJANGO_SECRET_KEY in any real deployment.
    SECRET_KEY = 'django-insecure-fallback-dev-key-!!change-me!!'

DEBUG = os.getenv('DJANGO_DEBUG', 'True').lower() in ('true', '1', 't')

ALLOWED_HOSTS = ['*']


# Application definition

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'corsheaders',
    'rest_framework',
    'recipients',
    'pinning_internals',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'dokchain.urls'

WSGI_APPLICATION = 'dokchain.wsgi.application'


# Database
# Relational storage is not used: recipients live in MongoDB (see MONGO_URI).
DATABASES = {}


# Internationalization

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True


DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# REST Framework
# No authentication model: every endpoint is public.
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    "EXCEPTION_HANDLER": "recipients.exceptions.failure_exception_handler",
}


# CORS: every origin is allowed unless CORS_ORIGIN lists the permitted ones.
CORS_ORIGIN = os.getenv('CORS_ORIGIN', '')
CORS_ALLOWED_ORIGINS = [origin.strip() for origin in CORS_ORIGIN.split(',') if origin.strip()]
CORS_ALLOW_ALL_ORIGINS = not CORS_ALLOWED_ORIGINS


# Port used by `manage.py runserver` when none is given on the command line.
PORT = int(os.getenv('PORT', 3000))

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

from dokchain.logging_config import setup_logging
setup_logging(LOG_LEVEL)


# MongoDB
MONGO_URI = os.getenv('MONGO_URI', 'mongodb://localhost:27017/dokchain')
MONGO_DB_NAME = os.getenv('MONGO_DB_NAME')  # falls back to the database named in MONGO_URI
MONGO_ENSURE_INDEXES = os.getenv('MONGO_ENSURE_INDEXES', 'True').lower() in ('true', '1', 't')
# Upper bound on waiting for an unreachable server, so startup never hangs.
MONGO_TIMEOUT_MS = int(os.getenv('MONGO_TIMEOUT_MS', 3000))


# Pinata (IPFS pinning service)
PINATA_JWT = os.getenv('PINATA_JWT', '')
GATEWAY_URL = os.getenv('GATEWAY_URL', '')
PINATA_UPLOADS_URL = os.getenv('PINATA_UPLOADS_URL', 'https://uploads.pinata.cloud/v3/files')
PINATA_TIMEOUT = float(os.getenv('PINATA_TIMEOUT', 60))


# Local upload buffer. Files are kept after pinning; nothing here deletes them.
UPLOAD_ROOT = Path(os.getenv('UPLOAD_ROOT', BASE_DIR / 'uploads'))

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "uploads": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
        "OPTIONS": {"location": UPLOAD_ROOT},
    },
}

# Keep every upload on disk instead of in memory while the request is parsed.
FILE_UPLOAD_HANDLERS = ['django.core.files.uploadhandler.TemporaryFileUploadHandler']
