# -*- coding: utf-8 -*-
# core/exceptions.py
class ExportEngineError(Exception):
    """Базовое исключение движка экспорта"""
    pass

class ValidationError(ExportEngineError):
    """Недопустимый параметр экспорта"""
    pass

class UnsupportedFormatError(ExportEngineError):
    """Неизвестный формат экспорта"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unsupported format: {value}")

class EmbeddingError(ExportEngineError):
    """Растр не удалось встроить в PDF"""
    pass
