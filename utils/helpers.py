# utils/helpers.py
import os
import logging

logger = logging.getLogger(__name__)

def ensure_directory(directory):
    """Создание директории если не существует"""
    os.makedirs(directory, exist_ok=True)
    logger.debug(f"Directory ensured: {directory}")

def parse_bool(value, default: bool = False) -> bool:
    """Флаг из формы или query-строки"""
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')

def format_file_size(bytes_size: int) -> str:
    """Форматирование размера файла"""
    if bytes_size == 0:
        return '0 B'
    for unit in ['B', 'KB', 'MB', 'GB']:
        if bytes_size < 1024.0:
            return f"{bytes_size:.2f} {unit}"
        bytes_size /= 1024.0
    return f"{bytes_size:.2f} TB"
