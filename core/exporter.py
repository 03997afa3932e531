"""
Экспорт слайда в PNG / JPEG / PDF
"""
import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, Optional

from processing.cmyk_filter import PixelProcessor, apply_cmyk_filter, detect_pixel_processor
from processing.raster_source import RasterSnapshot, extend_bleed, get_snapshot, parse_data_url
from .config import GENERIC_PRESET, REFERENCE_DPI
from .exceptions import EmbeddingError
from .models import ExportFormat, ExportOptions, ExportResult
from .page_geometry import calculate_page_geometry
from .pdf_generator import PDFGenerator
from .units import mm_to_pixel, pixel_to_points

logger = logging.getLogger(__name__)

# Значение по умолчанию: определить доступ к пикселям в текущем окружении
DETECT = object()


def export_filename(export_format: ExportFormat, now: Optional[float] = None) -> str:
    millis = int((time.time() if now is None else now) * 1000)
    return f"export_{millis}.{export_format.extension}"


async def _export_png(snapshot: RasterSnapshot, options: ExportOptions, processor) -> bytes:
    _, payload = parse_data_url(await get_snapshot(snapshot, 'png'))
    return payload


async def _export_jpeg(snapshot: RasterSnapshot, options: ExportOptions, processor) -> bytes:
    _, payload = parse_data_url(await get_snapshot(snapshot, 'jpeg', quality=options.quality))
    return payload


async def _export_pdf(snapshot: RasterSnapshot, options: ExportOptions,
                      processor: Optional[PixelProcessor]) -> bytes:
    # размер сцены в пикселях переводится в пункты по опорным 96 DPI
    geometry = calculate_page_geometry(
        pixel_to_points(snapshot.width, REFERENCE_DPI),
        pixel_to_points(snapshot.height, REFERENCE_DPI),
        options.bleed,
        options.trim_marks,
        GENERIC_PRESET.trim_mark_size,
        GENERIC_PRESET.trim_mark_gap,
    )

    image = await get_snapshot(snapshot, 'png')

    try:
        image = extend_bleed(image, mm_to_pixel(options.bleed, REFERENCE_DPI))
    except (OSError, ValueError) as e:
        logger.error(f"Не удалось подготовить вылеты: {e}")
        raise EmbeddingError(f"Failed to embed image: {e}") from e

    if options.cmyk:
        image = await apply_cmyk_filter(image, processor)

    generator = PDFGenerator(GENERIC_PRESET)
    return await asyncio.to_thread(generator.build, image, geometry)


_HANDLERS: Dict[ExportFormat, Callable[..., Awaitable[bytes]]] = {
    ExportFormat.PNG: _export_png,
    ExportFormat.JPEG: _export_jpeg,
    ExportFormat.PDF: _export_pdf,
}


async def export_slide(snapshot: RasterSnapshot, options: ExportOptions,
                       processor=DETECT, now: Optional[float] = None) -> ExportResult:
    """
    Экспортировать снимок сцены в запрошенный формат.

    Параметры проверяются до начала любой работы. processor - доступ к пикселям
    для имитации CMYK (None - фильтр пропускается); по умолчанию определяется
    по окружению.
    """
    export_format = ExportFormat.parse(options.format)
    options.validate()

    if processor is DETECT:
        processor = detect_pixel_processor()

    logger.info(f"Экспорт {export_format.value}: {snapshot.width}x{snapshot.height} px, "
                f"cmyk={options.cmyk}, bleed={options.bleed}, trim_marks={options.trim_marks}")

    payload = await _HANDLERS[export_format](snapshot, options, processor)

    return ExportResult(
        payload=payload,
        filename=export_filename(export_format, now),
        mime_type=export_format.mime_type,
    )


def export_slide_sync(snapshot: RasterSnapshot, options: ExportOptions, **kwargs) -> ExportResult:
    return asyncio.run(export_slide(snapshot, options, **kwargs))
