"""
Вспомогательные функции для web-интерфейса
"""
import logging

from config import ALLOWED_EXTENSIONS
from core.models import ExportOptions, PrintSettings
from core.config import BUSINESS_CARD, DEFAULT_JPEG_QUALITY
from core.exceptions import ValidationError
from processing.raster_source import PillowSnapshot
from utils.helpers import parse_bool

logger = logging.getLogger(__name__)


def allowed_file(filename):
    """Проверка разрешенных расширений файлов"""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def _parse_float(form, name, default):
    value = form.get(name)
    if value is None or value == '':
        return default
    try:
        return float(value)
    except ValueError:
        raise ValidationError(f"Parameter '{name}' must be a number, got {value!r}") from None


def load_snapshot(files) -> PillowSnapshot:
    """Снимок сцены из поля формы 'snapshot'"""
    file = files.get('snapshot')
    if file is None or file.filename == '':
        raise ValidationError("Snapshot image is required")
    if not allowed_file(file.filename):
        raise ValidationError(f"Unsupported snapshot file: {file.filename}")

    data = file.read()
    if not data:
        raise ValidationError(f"Snapshot file is empty: {file.filename}")

    try:
        return PillowSnapshot.from_bytes(data)
    except OSError as e:
        raise ValidationError(f"Snapshot is not a readable image: {e}") from e


def export_options_from_form(form) -> ExportOptions:
    return ExportOptions(
        format=form.get('format', 'png'),
        quality=_parse_float(form, 'quality', DEFAULT_JPEG_QUALITY),
        cmyk=parse_bool(form.get('cmyk')),
        bleed=_parse_float(form, 'bleed', 0.0),
        trim_marks=parse_bool(form.get('trim_marks')),
    )


def print_settings_from_form(form) -> PrintSettings:
    dpi = form.get('dpi', 'print')
    if dpi not in ('screen', 'print'):
        raise ValidationError(f"Unknown dpi mode: {dpi}")

    return PrintSettings(
        bleed=_parse_float(form, 'bleed', BUSINESS_CARD.DEFAULT_BLEED_MM),
        trim_marks=parse_bool(form.get('trim_marks'), default=True),
        registration_marks=parse_bool(form.get('registration_marks')),
        cmyk=parse_bool(form.get('cmyk')),
        dpi=dpi,
    )
