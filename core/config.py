# -*- coding: utf-8 -*-
# core/config.py
import os
from dataclasses import dataclass

# Физические константы: применяются одинаково во всех преобразованиях
MM_PER_INCH = 25.4
POINTS_PER_MM = 2.834645669

# Опорное разрешение экрана, по которому размер сцены переводится в мм
REFERENCE_DPI = 96

DEFAULT_JPEG_QUALITY = 0.92
CMYK_DECODE_TIMEOUT = 5.0


def cmyk_decode_timeout() -> float:
    """Предельное время декодирования пикселей, секунды (EXPORT_CMYK_TIMEOUT)"""
    return float(os.getenv('EXPORT_CMYK_TIMEOUT', CMYK_DECODE_TIMEOUT))


@dataclass(frozen=True)
class PrintPreset:
    """Параметры печатной разметки для конкретного вида экспорта"""
    name: str
    trim_mark_size: float      # мм, резерв под метки с каждой стороны
    trim_mark_line_width: float  # pt
    trim_mark_gap: float = 1.0   # мм от линии реза до начала метки
    producer: str = "Canvas Studio"


GENERIC_PRESET = PrintPreset(
    name="generic",
    trim_mark_size=10,
    trim_mark_line_width=0.5,
)

BUSINESS_CARD_PRESET = PrintPreset(
    name="business_card",
    trim_mark_size=5,
    trim_mark_line_width=0.3,
)


@dataclass(frozen=True)
class BusinessCardSpec:
    WIDTH_MM: float = 91
    HEIGHT_MM: float = 55
    DEFAULT_BLEED_MM: float = 3
    TRIM_MARK_SIZE_MM: float = BUSINESS_CARD_PRESET.trim_mark_size
    TRIM_MARK_LINE_WIDTH: float = BUSINESS_CARD_PRESET.trim_mark_line_width
    DPI_SCREEN: int = 96
    DPI_PRINT: int = 300


BUSINESS_CARD = BusinessCardSpec()


def get_dpi_value(dpi_mode: str) -> int:
    if dpi_mode == 'print':
        return BUSINESS_CARD.DPI_PRINT
    return BUSINESS_CARD.DPI_SCREEN
