# -*- coding: utf-8 -*-
# utils/delivery.py
"""
Выдача готового файла пользователю
"""
import logging
import os
import tempfile
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from flask import send_file
from werkzeug.utils import secure_filename

from core.models import ExportResult
from processing.raster_source import parse_data_url
from utils.helpers import ensure_directory

logger = logging.getLogger(__name__)


@dataclass
class Blob:
    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)


def data_url_to_blob(data_url: str) -> Blob:
    mime_type, payload = parse_data_url(data_url)
    return Blob(payload, mime_type or 'image/png')


def result_to_blob(result: ExportResult) -> Blob:
    return Blob(result.payload, result.mime_type)


def download_blob(blob: Blob, filename: str, directory=None) -> None:
    """
    Сохранить файл в папку загрузок.

    Временный файл создается рядом с целевым, переносится на место одним
    os.replace и удаляется в любом случае. Без повторов, ничего не возвращает.
    """
    if directory is None:
        from config import DOWNLOAD_FOLDER
        directory = DOWNLOAD_FOLDER
    directory = Path(directory)
    ensure_directory(directory)

    target = directory / (secure_filename(filename) or 'download')
    fd, temp_path = tempfile.mkstemp(dir=directory, prefix='.', suffix='.part')
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(blob.data)
        os.replace(temp_path, target)
    finally:
        if os.path.exists(temp_path):
            os.unlink(temp_path)

    logger.info(f"Файл сохранен: {target} ({blob.size} байт, {blob.mime_type})")


def send_download(result: ExportResult):
    """Flask-ответ с вложением"""
    return send_file(
        BytesIO(result.payload),
        mimetype=result.mime_type,
        as_attachment=True,
        download_name=result.filename,
    )
