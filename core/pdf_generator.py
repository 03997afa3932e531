"""
Сборка одностраничного PDF: растр сцены, метки обреза, метаданные
"""
import logging
from datetime import datetime, timezone
from io import BytesIO
from typing import Optional

from PIL import Image
from PyPDF2 import PdfReader, PdfWriter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from processing.raster_source import has_alpha, parse_data_url
from .config import PrintPreset
from .exceptions import EmbeddingError
from .models import ImageBox, PageGeometry
from .page_geometry import mark_segments, registration_targets

logger = logging.getLogger(__name__)

# крест метки совмещения выходит за окружность
REGISTRATION_CROSS_RATIO = 1.5


def pdf_date(moment: datetime) -> str:
    """datetime -> строка даты PDF (D:YYYYMMDDHHmmSS+HH'mm')"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    offset = moment.utcoffset()
    minutes = int(offset.total_seconds() // 60)
    sign = '+' if minutes >= 0 else '-'
    hours, minutes = divmod(abs(minutes), 60)
    return f"D:{moment.strftime('%Y%m%d%H%M%S')}{sign}{hours:02d}'{minutes:02d}'"


class PDFGenerator:
    """Создается заново на каждый экспорт, общего состояния нет"""

    def __init__(self, preset: PrintPreset):
        self.preset = preset

    def build(self, image_data_url: str, geometry: PageGeometry,
              registration_marks: bool = False,
              metadata: Optional[dict] = None) -> bytes:
        image = self._load_image(image_data_url)

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=(geometry.page_width_pt, geometry.page_height_pt))

        self._draw_image(c, image, geometry.image_box)

        if geometry.trim_marks:
            self._draw_crop_marks(c, geometry)

        if registration_marks:
            self._draw_registration_marks(c, geometry)

        c.showPage()
        c.save()
        pdf_bytes = buffer.getvalue()

        if metadata:
            pdf_bytes = self._stamp_metadata(pdf_bytes, metadata)

        logger.info(f"PDF ({self.preset.name}) собран: {len(pdf_bytes)} байт, "
                    f"{geometry.page_width_pt:.2f}x{geometry.page_height_pt:.2f} pt")
        return pdf_bytes

    def _load_image(self, image_data_url: str) -> Image.Image:
        try:
            _, payload = parse_data_url(image_data_url)
            img = Image.open(BytesIO(payload))
            img.load()
        except (OSError, ValueError) as e:
            logger.error(f"Ошибка декодирования снимка: {e}")
            raise EmbeddingError("Failed to embed image as PNG") from e

        if img.format != 'PNG':
            raise EmbeddingError(f"Failed to embed image as PNG: got {img.format}")

        return img.convert('RGBA' if has_alpha(img) else 'RGB')

    def _draw_image(self, c: canvas.Canvas, image: Image.Image, box: ImageBox):
        try:
            c.drawImage(ImageReader(image), box.x, box.y,
                        width=box.width, height=box.height, mask='auto')
        except Exception as e:
            logger.error(f"Ошибка встраивания изображения: {e}")
            raise EmbeddingError(f"Failed to embed image: {e}") from e

    def _draw_crop_marks(self, c: canvas.Canvas, geometry: PageGeometry):
        c.setStrokeColorRGB(0, 0, 0)
        c.setLineWidth(self.preset.trim_mark_line_width)

        for start_x, start_y, end_x, end_y in mark_segments(geometry):
            c.line(start_x, start_y, end_x, end_y)

    def _draw_registration_marks(self, c: canvas.Canvas, geometry: PageGeometry):
        targets = registration_targets(geometry)
        if not targets:
            logger.debug("Нет резерва под метки совмещения, пропускаем")
            return

        c.setStrokeColorRGB(0, 0, 0)
        c.setLineWidth(self.preset.trim_mark_line_width)

        for x, y, radius in targets:
            arm = radius * REGISTRATION_CROSS_RATIO
            c.circle(x, y, radius, stroke=1, fill=0)
            c.line(x - arm, y, x + arm, y)
            c.line(x, y - arm, x, y + arm)

    def _stamp_metadata(self, pdf_bytes: bytes, metadata: dict) -> bytes:
        reader = PdfReader(BytesIO(pdf_bytes))
        writer = PdfWriter()
        for page in reader.pages:
            writer.add_page(page)

        created = metadata.get('creation_date') or datetime.now(timezone.utc)
        writer.add_metadata({
            '/Title': metadata.get('title', ''),
            '/Producer': metadata.get('producer', self.preset.producer),
            '/Creator': metadata.get('creator', self.preset.producer),
            '/CreationDate': pdf_date(created),
        })

        output = BytesIO()
        writer.write(output)
        return output.getvalue()
