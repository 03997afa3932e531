"""
Перевод единиц: миллиметры, пиксели, пункты PDF
"""
import math

from .config import MM_PER_INCH, POINTS_PER_MM, REFERENCE_DPI


def round_half_up(value: float) -> int:
    """Округление .5 вверх (как при расчете макета в редакторе)"""
    return int(math.floor(value + 0.5))


def mm_to_pixel(mm: float, dpi: float = REFERENCE_DPI) -> int:
    return round_half_up(mm * dpi / MM_PER_INCH)


def pixel_to_mm(px: float, dpi: float = REFERENCE_DPI) -> float:
    return px * MM_PER_INCH / dpi


def mm_to_points(mm: float) -> float:
    # без округления: координаты PDF дробные
    return mm * POINTS_PER_MM


def points_to_mm(pt: float) -> float:
    return pt / POINTS_PER_MM


def pixel_to_points(px: float, dpi: float = REFERENCE_DPI) -> float:
    return mm_to_points(pixel_to_mm(px, dpi))
