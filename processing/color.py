# -*- coding: utf-8 -*-
# processing/color.py
"""
Упрощенная модель RGB <-> CMYK для предпросмотра печати.

Преобразование намеренно с потерями: субтрактивная модель имитирует
поведение растровой точки, а не является точной обратной функцией.
Чистые черный и белый проходят туда и обратно без изменений.
"""
import re
from typing import NamedTuple, Tuple

from core.units import round_half_up

HEX_PATTERN = re.compile(r'^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$', re.IGNORECASE)


class RGBColor(NamedTuple):
    r: int
    g: int
    b: int


class CMYKColor(NamedTuple):
    cyan: int
    magenta: int
    yellow: int
    key: int


BLACK = RGBColor(0, 0, 0)


def rgb_to_cmyk(rgb) -> CMYKColor:
    r, g, b = (channel / 255 for channel in rgb)

    k = 1 - max(r, g, b)
    if k == 1:
        return CMYKColor(0, 0, 0, 100)

    c = (1 - r - k) / (1 - k)
    m = (1 - g - k) / (1 - k)
    y = (1 - b - k) / (1 - k)

    return CMYKColor(
        cyan=round_half_up(c * 100),
        magenta=round_half_up(m * 100),
        yellow=round_half_up(y * 100),
        key=round_half_up(k * 100),
    )


def cmyk_to_rgb(cmyk) -> RGBColor:
    c, m, y, k = (channel / 100 for channel in cmyk)

    return RGBColor(
        r=round_half_up(255 * (1 - c) * (1 - k)),
        g=round_half_up(255 * (1 - m) * (1 - k)),
        b=round_half_up(255 * (1 - y) * (1 - k)),
    )


def hex_to_rgb(value: str) -> RGBColor:
    """Разбор #RRGGBB; некорректная строка дает черный, а не ошибку"""
    match = HEX_PATTERN.match(value or '')
    if not match:
        return BLACK
    return RGBColor(*(int(part, 16) for part in match.groups()))


def rgb_to_hex(rgb) -> str:
    return '#' + ''.join(f"{channel:02x}" for channel in rgb)


def format_cmyk(cmyk: CMYKColor) -> str:
    return f"C{cmyk.cyan} M{cmyk.magenta} Y{cmyk.yellow} K{cmyk.key}"


def simulate_hex(value: str) -> Tuple[CMYKColor, str]:
    """CMYK-значения цвета и то, как он будет выглядеть после печати"""
    cmyk = rgb_to_cmyk(hex_to_rgb(value))
    return cmyk, rgb_to_hex(cmyk_to_rgb(cmyk))
