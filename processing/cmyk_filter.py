"""
Имитация печати в CMYK для растрового снимка
"""
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from io import BytesIO
from typing import Optional

import numpy as np
from PIL import Image

from core.config import cmyk_decode_timeout
from processing.raster_source import build_data_url, has_alpha, is_data_url, parse_data_url

logger = logging.getLogger(__name__)

# asyncio.run при завершении не ждет потоки этого пула
_DECODE_POOL = ThreadPoolExecutor(max_workers=4, thread_name_prefix='cmyk-decode')


def simulate_cmyk_array(rgb: np.ndarray) -> np.ndarray:
    """RGB -> CMYK -> RGB для массива (..., 3) uint8, те же формулы что в processing.color"""
    norm = rgb.astype(np.float64) / 255

    k = 1 - norm.max(axis=-1, keepdims=True)
    denom = 1 - k
    with np.errstate(divide='ignore', invalid='ignore'):
        cmy = (1 - norm - k) / denom
    cmy = np.where(denom == 0, 0.0, cmy)

    cmy_pct = np.floor(cmy * 100 + 0.5)
    k_pct = np.floor(k * 100 + 0.5)

    out = np.floor(255 * (1 - cmy_pct / 100) * (1 - k_pct / 100) + 0.5)
    return np.clip(out, 0, 255).astype(np.uint8)


def simulate_cmyk_image(img: Image.Image) -> Image.Image:
    """Меняются только RGB-каналы, альфа копируется как есть"""
    mode = 'RGBA' if has_alpha(img) else 'RGB'
    pixels = np.array(img.convert(mode))
    pixels[..., :3] = simulate_cmyk_array(pixels[..., :3])
    return Image.fromarray(pixels)


class PixelProcessor:
    """Доступ к пикселям через Pillow"""

    def remap(self, payload: bytes) -> bytes:
        img = Image.open(BytesIO(payload))
        img.load()
        result = simulate_cmyk_image(img)

        buffer = BytesIO()
        result.save(buffer, format='PNG')
        return buffer.getvalue()


@lru_cache(maxsize=None)
def detect_pixel_processor() -> Optional[PixelProcessor]:
    Image.init()
    if 'PNG' not in Image.OPEN or 'PNG' not in Image.SAVE:
        logger.warning("Pillow собран без PNG: имитация CMYK недоступна")
        return None
    return PixelProcessor()


async def apply_cmyk_filter(data_url: str, processor: Optional[PixelProcessor],
                            timeout: Optional[float] = None) -> str:
    """
    Пропустить снимок через имитацию CMYK.

    Фильтр только деградирует: без processor, при чужом формате входа,
    ошибке декодирования или по истечении timeout возвращается исходный снимок.
    """
    if processor is None:
        logger.warning("Нет доступа к пикселям, CMYK-фильтр пропущен")
        return data_url

    if not is_data_url(data_url):
        return data_url

    if timeout is None:
        timeout = cmyk_decode_timeout()

    try:
        _, payload = parse_data_url(data_url)
        loop = asyncio.get_running_loop()
        result = await asyncio.wait_for(loop.run_in_executor(_DECODE_POOL, processor.remap, payload), timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Декодирование пикселей дольше {timeout} с, CMYK-фильтр пропущен")
        return data_url
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.warning(f"Не удалось применить CMYK-фильтр: {e}")
        return data_url

    return build_data_url('image/png', result)
