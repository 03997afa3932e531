"""
Web module for the export engine
"""

from .utils import (
    allowed_file,
    load_snapshot,
    export_options_from_form,
    print_settings_from_form
)
from .routes import configure_routes

__all__ = [
    'allowed_file',
    'load_snapshot',
    'export_options_from_form',
    'print_settings_from_form',
    'configure_routes'
]
