"""
Получение растрового снимка сцены и работа с data URL
"""
import base64
import binascii
import logging
from io import BytesIO
from typing import Optional, Protocol, Tuple
from urllib.parse import unquote_to_bytes

import numpy as np
from PIL import Image

from core.config import DEFAULT_JPEG_QUALITY
from core.exceptions import UnsupportedFormatError

logger = logging.getLogger(__name__)

JPEG_MAX_QUALITY = 95

MIME_TYPES = {
    'PNG': 'image/png',
    'JPEG': 'image/jpeg',
}


class RasterSnapshot(Protocol):
    """Источник снимка сцены; движок экспорта его не изменяет"""
    width: int
    height: int

    async def encode(self, format: str, quality: Optional[float] = None,
                     multiplier: float = 1) -> str:
        ...


def is_data_url(value) -> bool:
    return isinstance(value, str) and value.startswith('data:') and ',' in value


def parse_data_url(value: str) -> Tuple[str, bytes]:
    """Разобрать data:<mime>[;base64],<data> -> (mime, bytes)"""
    if not is_data_url(value):
        raise ValueError("Not a data URL")

    header, data = value.split(',', 1)
    params = header[len('data:'):].split(';')
    mime_type = params[0].strip().lower()

    if 'base64' in params[1:]:
        try:
            payload = base64.b64decode(data, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 payload: {e}") from e
    else:
        payload = unquote_to_bytes(data)

    return mime_type, payload


def build_data_url(mime_type: str, payload: bytes) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(payload).decode('ascii')}"


def decode_image(data_url: str) -> Image.Image:
    _, payload = parse_data_url(data_url)
    img = Image.open(BytesIO(payload))
    img.load()
    return img


def has_alpha(img: Image.Image) -> bool:
    return img.mode in ('RGBA', 'LA', 'PA') or 'transparency' in img.info


def image_to_data_url(img: Image.Image, format: str = 'PNG', **save_kwargs) -> str:
    buffer = BytesIO()
    img.save(buffer, format=format, **save_kwargs)
    return build_data_url(MIME_TYPES[format.upper()], buffer.getvalue())


def _jpeg_quality(quality: Optional[float]) -> int:
    if quality is None:
        quality = DEFAULT_JPEG_QUALITY
    return max(1, min(JPEG_MAX_QUALITY, int(round(quality * 100))))


def _flatten(img: Image.Image) -> Image.Image:
    """JPEG не хранит альфу: подкладываем белый фон"""
    if not has_alpha(img):
        return img.convert('RGB')
    rgba = img.convert('RGBA')
    background = Image.new('RGB', rgba.size, 'white')
    background.paste(rgba, mask=rgba.getchannel('A'))
    return background


class PillowSnapshot:
    """Снимок сцены, отрисованной редактором в изображение Pillow"""

    def __init__(self, image: Image.Image):
        self.image = image

    @classmethod
    def from_bytes(cls, data: bytes) -> 'PillowSnapshot':
        img = Image.open(BytesIO(data))
        img.load()
        return cls(img)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    async def encode(self, format: str = 'png', quality: Optional[float] = None,
                     multiplier: float = 1) -> str:
        img = self.image
        if multiplier != 1:
            size = (max(1, round(img.width * multiplier)), max(1, round(img.height * multiplier)))
            img = img.resize(size, Image.Resampling.LANCZOS)

        format = format.lower()
        if format == 'png':
            return image_to_data_url(img, 'PNG')
        if format == 'jpeg':
            return image_to_data_url(_flatten(img), 'JPEG', quality=_jpeg_quality(quality))
        raise UnsupportedFormatError(format)


async def get_snapshot(source: RasterSnapshot, format: str = 'png',
                       quality: Optional[float] = None) -> str:
    """Снимок сцены в масштабе 1"""
    data_url = await source.encode(format, quality=quality, multiplier=1)
    logger.debug(f"Снимок {source.width}x{source.height} ({format}) получен")
    return data_url


def extend_bleed(data_url: str, bleed_px: int) -> str:
    """Расширить изображение на bleed_px с каждой стороны повтором краевых пикселей"""
    if bleed_px <= 0:
        return data_url

    img = decode_image(data_url)
    mode = 'RGBA' if has_alpha(img) else 'RGB'
    pixels = np.asarray(img.convert(mode))
    padded = np.pad(pixels, ((bleed_px, bleed_px), (bleed_px, bleed_px), (0, 0)), mode='edge')

    logger.debug(f"Вылеты: {img.width}x{img.height} -> {padded.shape[1]}x{padded.shape[0]} px")
    return image_to_data_url(Image.fromarray(padded), 'PNG')
