"""
PDF визитки для печати: фиксированный формат 91×55 мм, вылеты, метки обреза
"""
import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from processing.raster_source import RasterSnapshot, get_snapshot
from .config import BUSINESS_CARD, BUSINESS_CARD_PRESET, get_dpi_value
from .models import CanvasSize, DpiMode, ExportResult, PrintSettings, validate_bleed
from .page_geometry import calculate_page_geometry
from .pdf_generator import PDFGenerator
from .units import mm_to_pixel, mm_to_points

logger = logging.getLogger(__name__)

DEFAULT_PRINT_SETTINGS = PrintSettings(
    bleed=BUSINESS_CARD.DEFAULT_BLEED_MM,
    trim_marks=True,
    registration_marks=False,
    cmyk=False,
    dpi=DpiMode.PRINT,
)

DOCUMENT_TITLE = "名刺 - Business Card"
DOCUMENT_CREATOR = "Canvas Studio Business Card Export"


def calculate_canvas_size(bleed: float, dpi='screen') -> CanvasSize:
    """Размер холста визитки с вылетами в пикселях"""
    dpi_value = get_dpi_value(DpiMode(dpi).value)
    total_width = BUSINESS_CARD.WIDTH_MM + bleed * 2
    total_height = BUSINESS_CARD.HEIGHT_MM + bleed * 2

    return CanvasSize(
        width=mm_to_pixel(total_width, dpi_value),
        height=mm_to_pixel(total_height, dpi_value),
    )


async def generate_business_card_pdf(snapshot: RasterSnapshot, settings: PrintSettings,
                                     created: Optional[datetime] = None) -> bytes:
    """
    PDF визитки для типографии.

    Снимок уже содержит вылеты (см. calculate_canvas_size) и растягивается
    на формат с вылетами. Флаг cmyk принимается, но фильтр здесь
    не применяется.
    """
    validate_bleed(settings.bleed)

    geometry = calculate_page_geometry(
        mm_to_points(BUSINESS_CARD.WIDTH_MM),
        mm_to_points(BUSINESS_CARD.HEIGHT_MM),
        settings.bleed,
        settings.trim_marks,
        BUSINESS_CARD_PRESET.trim_mark_size,
        BUSINESS_CARD_PRESET.trim_mark_gap,
    )

    if settings.cmyk:
        logger.debug("cmyk для визитки принят, изображение не фильтруется")

    image = await get_snapshot(snapshot, 'png')

    metadata = {
        'title': DOCUMENT_TITLE,
        'producer': BUSINESS_CARD_PRESET.producer,
        'creator': DOCUMENT_CREATOR,
        'creation_date': created or datetime.now(timezone.utc),
    }

    generator = PDFGenerator(BUSINESS_CARD_PRESET)
    return await asyncio.to_thread(
        generator.build, image, geometry,
        registration_marks=settings.registration_marks,
        metadata=metadata,
    )


async def export_business_card(snapshot: RasterSnapshot, settings: PrintSettings = DEFAULT_PRINT_SETTINGS,
                               now: Optional[float] = None) -> ExportResult:
    payload = await generate_business_card_pdf(snapshot, settings)
    millis = int((time.time() if now is None else now) * 1000)
    return ExportResult(
        payload=payload,
        filename=f"business_card_{millis}.pdf",
        mime_type="application/pdf",
    )


def export_business_card_sync(snapshot: RasterSnapshot, settings: PrintSettings = DEFAULT_PRINT_SETTINGS,
                              **kwargs) -> ExportResult:
    return asyncio.run(export_business_card(snapshot, settings, **kwargs))
