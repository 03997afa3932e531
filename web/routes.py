"""
Flask routes для экспорта
"""
import logging

from flask import request, jsonify

from core.business_card import calculate_canvas_size, export_business_card_sync
from core.exceptions import EmbeddingError, UnsupportedFormatError, ValidationError
from core.exporter import export_slide_sync
from processing.color import format_cmyk, hex_to_rgb, rgb_to_hex, simulate_hex
from utils.delivery import send_download
from utils.helpers import format_file_size
from web.utils import export_options_from_form, load_snapshot, print_settings_from_form

logger = logging.getLogger(__name__)


def configure_routes(app):
    """Настройка маршрутов Flask"""

    @app.route('/api/export', methods=['POST'])
    def export():
        """Экспорт снимка сцены в PNG / JPEG / PDF"""
        options = export_options_from_form(request.form)
        snapshot = load_snapshot(request.files)

        result = export_slide_sync(snapshot, options)
        logger.info(f"Экспорт готов: {result.filename} ({format_file_size(result.size)})")
        return send_download(result)

    @app.route('/api/business-card', methods=['POST'])
    def business_card():
        """PDF визитки для печати"""
        settings = print_settings_from_form(request.form)
        snapshot = load_snapshot(request.files)

        result = export_business_card_sync(snapshot, settings)
        logger.info(f"Визитка готова: {result.filename} ({format_file_size(result.size)})")
        return send_download(result)

    @app.route('/api/business-card/canvas-size')
    def canvas_size():
        """Размер холста визитки с вылетами"""
        try:
            bleed = float(request.args.get('bleed', 3))
        except ValueError:
            raise ValidationError("Parameter 'bleed' must be a number") from None
        dpi = request.args.get('dpi', 'screen')
        if dpi not in ('screen', 'print'):
            raise ValidationError(f"Unknown dpi mode: {dpi}")

        size = calculate_canvas_size(bleed, dpi)
        return jsonify({'width': size.width, 'height': size.height, 'dpi': dpi}), 200

    @app.route('/api/cmyk-preview')
    def cmyk_preview():
        """Как цвет будет выглядеть после печати"""
        color = request.args.get('color', '')
        cmyk, simulated = simulate_hex(color)
        return jsonify({
            'rgb': rgb_to_hex(hex_to_rgb(color)),
            'cmyk': cmyk._asdict(),
            'formatted': format_cmyk(cmyk),
            'simulated': simulated,
        }), 200

    @app.errorhandler(ValidationError)
    @app.errorhandler(UnsupportedFormatError)
    def handle_bad_request(e):
        logger.warning(f"Некорректный запрос: {e}")
        return jsonify({'error': str(e)}), 400

    @app.errorhandler(EmbeddingError)
    def handle_embedding_error(e):
        logger.error(f"Ошибка встраивания: {e}")
        return jsonify({'error': str(e)}), 422
