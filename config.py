"""
Конфигурационные настройки приложения
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).parent

DOWNLOAD_FOLDER = Path(os.getenv('EXPORT_DOWNLOAD_DIR', BASE_DIR / 'downloads'))
LOG_FOLDER = Path(os.getenv('EXPORT_LOG_DIR', BASE_DIR / 'logs'))

# Настройки приложения
SECRET_KEY = os.getenv('SECRET_KEY', 'your-secret-key-change-in-production')
MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', 50 * 1024 * 1024))  # 50MB

# Поддерживаемые форматы снимка сцены
ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg'}

LOGGING_CONFIG = {
    'level': os.getenv('LOG_LEVEL', 'INFO'),
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'datefmt': '%Y-%m-%d %H:%M:%S'
}
