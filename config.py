import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _default_db_uri() -> str:
    # PyMySQL keeps the driver pure-python on every platform
    user = os.environ.get('DB_USER', 'root')
    password = os.environ.get('DB_PASSWORD', 'root')
    host = os.environ.get('DB_HOST', '127.0.0.1')
    port = os.environ.get('DB_PORT', '3306')
    name = os.environ.get('DB_NAME', 'schoolhub')
    return f"mysql+pymysql://{user}:{password}@{host}:{port}/{name}"


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'change-me'
    # DATABASE_URL wins over the individual DB_* settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or _default_db_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': int(os.environ.get('DB_POOL_SIZE', 5)),
        'pool_recycle': int(os.environ.get('DB_POOL_RECYCLE', 280)),
        'pool_pre_ping': True,
    }

    # Uploaded school images
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(BASE_DIR, 'schoolhub', 'static', 'schoolimage')
    IMAGE_URL_PREFIX = '/schoolimage'
    MAX_IMAGE_BYTES = 5000000
    ALLOWED_IMAGE_TYPES = ('image/jpeg', 'image/png', 'image/webp')
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024

    # Listing page
    BASE_URL = os.environ.get('BASE_URL', '').rstrip('/')
    SEARCH_DEBOUNCE_MS = int(os.environ.get('SEARCH_DEBOUNCE_MS', 300))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
